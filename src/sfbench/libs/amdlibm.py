"""
AMD's optimized libm (libalm), called through ctypes.

Optional: when the library is not installed the amdlibm backends are
skipped with a warning. Point SFBENCH_AMDLIBM at libalm.so to use a copy
outside the loader's search path.
"""

import warnings
from pathlib import Path
from typing import List

from ..backend import Backend
from ..native_loader import load_native_library
from .libm import scalar_table

ENV_VAR = 'SFBENCH_AMDLIBM'

# AMD libm ships no erf/gamma family
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
    'exp10': 'exp10',
    'sqrt': 'sqrt',
}


def _search_dirs() -> List[Path]:
    return [Path.cwd() / 'extern' / 'amd-libm' / 'lib']


def _load():
    return load_native_library('alm', _search_dirs(), env_var=ENV_VAR)


def is_available() -> bool:
    return _load() is not None


def build_backends() -> List[Backend]:
    lib = _load()
    if lib is None:
        warnings.warn(f"AMD libm (libalm) not found, skipping amdlibm backends. Set {ENV_VAR} to its path.")
        return []
    return [
        Backend('amdlibm_fx1', 'f', scalar_table(lib, 'f', UNARY_SYMBOLS, prefix='amd_')),
        Backend('amdlibm_dx1', 'd', scalar_table(lib, 'd', UNARY_SYMBOLS, prefix='amd_')),
    ]
