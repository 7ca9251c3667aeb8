"""
The platform C math library, called through ctypes one value at a time.

Double-precision functions use the plain symbols (``sin``), single-precision
ones the ``f``-suffixed symbols (``sinf``). The same table drives AMD libm,
which prefixes every symbol with ``amd_``.
"""

import ctypes
import os
from typing import Dict, List, Optional

from ..adapters import Adapter, scalar
from ..backend import Backend
from ..native_loader import load_native_library, resolve_symbol

# FunctionName -> C symbol stem (one-argument functions)
UNARY_SYMBOLS = {
    'sin': 'sin',
    'cos': 'cos',
    'tan': 'tan',
    'sinh': 'sinh',
    'cosh': 'cosh',
    'tanh': 'tanh',
    'asin': 'asin',
    'acos': 'acos',
    'atan': 'atan',
    'asinh': 'asinh',
    'acosh': 'acosh',
    'atanh': 'atanh',
    'log': 'log',
    'log2': 'log2',
    'log10': 'log10',
    'exp': 'exp',
    'exp2': 'exp2',
    'sqrt': 'sqrt',
    'erf': 'erf',
    'erfc': 'erfc',
    'tgamma': 'tgamma',
    'lgamma': 'lgamma',
}

# FunctionName -> exponent passed to pow
POW_EXPONENTS = {
    'pow3.5': 3.5,
    'pow13': 13.0,
}

_CTYPES = {
    'f': ctypes.c_float,
    'd': ctypes.c_double,
}


def _pow_with(pow_fn, exponent: float):
    return lambda x: pow_fn(x, exponent)


def scalar_table(lib, dtype: str, unary: Dict[str, str], prefix: str = '',
                 pow_stem: Optional[str] = 'pow') -> Dict[str, Adapter]:
    """
    Resolve one scalar adapter per function from a loaded library.

    Args:
        lib: Loaded ctypes library
        dtype: 'f' for the float symbols, 'd' for the double ones
        unary: FunctionName -> symbol stem
        prefix: Symbol prefix (e.g. 'amd_')
        pow_stem: Stem of the two-argument power function, or None to skip
            the pow* functions

    Raises:
        NativeSymbolError: if any declared symbol is missing
    """
    ctype = _CTYPES[dtype]
    suffix = 'f' if dtype == 'f' else ''

    adapters = {}
    for name, stem in unary.items():
        fn = resolve_symbol(lib, f"{prefix}{stem}{suffix}", ctype, [ctype])
        adapters[name] = scalar(fn)

    if pow_stem is not None:
        pow_fn = resolve_symbol(lib, f"{prefix}{pow_stem}{suffix}", ctype, [ctype, ctype])
        for name, exponent in POW_EXPONENTS.items():
            adapters[name] = scalar(_pow_with(pow_fn, exponent))

    return adapters


def _load():
    # Windows has no standalone libm; everywhere else it is part of the platform
    return load_native_library('m', required=(os.name == 'posix'))


def is_available() -> bool:
    return load_native_library('m') is not None


def build_backends() -> List[Backend]:
    lib = _load()
    if lib is None:
        return []
    return [
        Backend('libm_fx1', 'f', scalar_table(lib, 'f', UNARY_SYMBOLS)),
        Backend('libm_dx1', 'd', scalar_table(lib, 'd', UNARY_SYMBOLS)),
    ]
