"""Python's math module, evaluated one float at a time."""

import functools
import math
from typing import Callable, List, Optional

from ..adapters import scalar
from ..backend import Backend


def _ieee(f: Callable[[float], float], pole: Optional[Callable[[float], float]] = None,
          odd: bool = False) -> Callable[[float], float]:
    """
    Return what C libm returns where math raises.

    Overflow gives +inf, or inf with the sign of x for odd functions. A
    ValueError or ZeroDivisionError is answered by ``pole(x)``, which gives
    the signed infinity at a pole and NaN elsewhere; without ``pole`` it is
    a domain error and gives NaN.
    """
    @functools.wraps(f)
    def wrapper(x):
        try:
            return f(x)
        except OverflowError:
            return math.copysign(math.inf, x) if odd else math.inf
        except (ValueError, ZeroDivisionError):
            return pole(x) if pole is not None else math.nan
    return wrapper


def _neg_inf_at_zero(x):
    return -math.inf if x == 0 else math.nan


def _signed_inf_at_zero(x):
    return math.copysign(math.inf, x) if x == 0 else math.nan


def _signed_inf_at_one(x):
    return math.copysign(math.inf, x) if abs(x) == 1 else math.nan


FUNCTIONS = {
    'sin': math.sin,
    'cos': math.cos,
    'tan': math.tan,
    'sinh': math.sinh,
    'cosh': math.cosh,
    'tanh': math.tanh,
    'asin': math.asin,
    'acos': math.acos,
    'atan': math.atan,
    'asinh': math.asinh,
    'acosh': math.acosh,
    'atanh': math.atanh,
    'sin_pi': lambda x: math.sin(math.pi * x),
    'cos_pi': lambda x: math.cos(math.pi * x),
    'erf': math.erf,
    'erfc': math.erfc,
    'tgamma': math.gamma,
    'lgamma': math.lgamma,
    'log': math.log,
    'log2': math.log2,
    'log10': math.log10,
    'exp': math.exp,
    'exp2': lambda x: math.pow(2.0, x),
    'exp10': lambda x: math.pow(10.0, x),
    'sqrt': math.sqrt,
    'rsqrt': lambda x: 1.0 / math.sqrt(x),
    'pow3.5': lambda x: math.pow(x, 3.5),
    'pow13': lambda x: math.pow(x, 13),
}


# FunctionName -> limit at its poles
POLES = {
    'log': _neg_inf_at_zero,
    'log2': _neg_inf_at_zero,
    'log10': _neg_inf_at_zero,
    'atanh': _signed_inf_at_one,
    'tgamma': _signed_inf_at_zero,
    'lgamma': lambda x: math.inf,
    'rsqrt': _signed_inf_at_zero,
}

# Functions whose overflow takes the sign of x
ODD = {'sinh', 'pow13'}


def is_available() -> bool:
    return True


def build_backends() -> List[Backend]:
    adapters = {name: scalar(_ieee(f, POLES.get(name), name in ODD)) for name, f in FUNCTIONS.items()}
    return [Backend('math_dx1', 'd', adapters)]
