"""
Adaptive Chebyshev approximants of scalar scipy.special oracles.

The approximant for a function is built over that function's benchmark
domain, once, when the adapter is prepared. Only requested functions pay
the build cost.
"""

from typing import Callable, Dict, List

from ..adapters import approximant
from ..backend import Backend
from ..domains import domain_for
from . import scipy_special


def _order_n(func, n: int) -> Callable[[float], float]:
    return lambda x: func(n, x)


def oracles() -> Dict[str, Callable[[float], float]]:
    special = scipy_special.special
    return {
        'bessel_Y0': special.y0,
        'bessel_Y1': special.y1,
        'bessel_Y2': _order_n(special.yn, 2),
        'bessel_I0': special.i0,
        'bessel_I1': special.i1,
        'bessel_I2': _order_n(special.iv, 2),
        'bessel_J0': special.j0,
        'bessel_J1': special.j1,
        'bessel_J2': _order_n(special.jv, 2),
        'hermite_0': _order_n(special.eval_hermite, 0),
        'hermite_1': _order_n(special.eval_hermite, 1),
        'hermite_2': _order_n(special.eval_hermite, 2),
        'hermite_3': _order_n(special.eval_hermite, 3),
    }


def is_available() -> bool:
    return scipy_special.is_available()


def build_backends() -> List[Backend]:
    if not is_available():
        return []
    adapters = {name: approximant(f, domain_for(name)) for name, f in oracles().items()}
    return [Backend('approx_dx1', 'd', adapters)]
