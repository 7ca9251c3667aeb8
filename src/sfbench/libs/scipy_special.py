"""
scipy.special: real ufuncs, complex functions and the Hankel pair.

Three backends come from here:
- scipy_fxx / scipy_dxx: real special functions over the whole buffer
- scipy_cdxx: complex elementary functions and log-gamma/dilogarithm
- hank10x_cdx1: z -> (H0(z), H1(z)), Hankel functions of the first kind,
  evaluated one complex value at a time (pair output)
"""

from typing import Callable, Dict, List

import numpy as np

from ..adapters import batch, pair
from ..backend import Backend

try:
    from scipy import special
    _SCIPY_AVAILABLE = True
except ImportError:
    special = None
    _SCIPY_AVAILABLE = False


def is_available() -> bool:
    return _SCIPY_AVAILABLE


def _into(ufunc, *leading) -> Callable:
    return lambda vals, out: ufunc(*leading, vals, out=out)


def _assign(func, *leading) -> Callable:
    """For scipy functions that take no ``out`` argument."""
    def apply(vals, out):
        out[:] = func(*leading, vals)
    return apply


def real_functions() -> Dict[str, Callable]:
    return {
        'erf': _into(special.erf),
        'erfc': _into(special.erfc),
        'tgamma': _into(special.gamma),
        'lgamma': _into(special.gammaln),
        'digamma': _into(special.psi),
        'ndtri': _into(special.ndtri),
        'bessel_J0': _into(special.j0),
        'bessel_J1': _into(special.j1),
        'bessel_J2': _into(special.jv, 2),
        'bessel_Y0': _into(special.y0),
        'bessel_Y1': _into(special.y1),
        'bessel_Y2': _into(special.yn, 2),
        'bessel_I0': _into(special.i0),
        'bessel_I1': _into(special.i1),
        'bessel_I2': _into(special.iv, 2),
        'bessel_K0': _into(special.k0),
        'bessel_K1': _into(special.k1),
        'bessel_K2': _into(special.kn, 2),
        'bessel_j0': _assign(special.spherical_jn, 0),
        'bessel_j1': _assign(special.spherical_jn, 1),
        'bessel_j2': _assign(special.spherical_jn, 2),
        'bessel_y0': _assign(special.spherical_yn, 0),
        'bessel_y1': _assign(special.spherical_yn, 1),
        'bessel_y2': _assign(special.spherical_yn, 2),
        'hermite_0': _into(special.eval_hermite, 0),
        'hermite_1': _into(special.eval_hermite, 1),
        'hermite_2': _into(special.eval_hermite, 2),
        'hermite_3': _into(special.eval_hermite, 3),
        # Riemann form (no q) continues analytically below the pole at 1
        'riemann_zeta': lambda vals, out: special.zeta(vals, out=out),
    }


def complex_functions() -> Dict[str, Callable]:
    return {
        'sin': lambda vals, out: np.sin(vals, out=out),
        'cos': lambda vals, out: np.cos(vals, out=out),
        'log': lambda vals, out: np.log(vals, out=out),
        'lgamma': _into(special.loggamma),
        # Li2(z) == spence(1 - z)
        'dilog': lambda vals, out: special.spence(1.0 - vals, out=out),
    }


def hankel_pair(z):
    return special.hankel1(0, z), special.hankel1(1, z)


def build_backends() -> List[Backend]:
    if not _SCIPY_AVAILABLE:
        return []

    return [
        Backend('scipy_fxx', 'f', {name: batch(f) for name, f in real_functions().items()}),
        Backend('scipy_dxx', 'd', {name: batch(f) for name, f in real_functions().items()}),
        Backend('scipy_cdxx', 'cd', {name: batch(f) for name, f in complex_functions().items()}),
        Backend('hank10x_cdx1', 'cd', {'hank103': pair(hankel_pair)}),
    ]
