"""numpy ufuncs writing straight into the benchmark's output buffer."""

from typing import Callable, List

import numpy as np

from ..adapters import batch
from ..backend import Backend


def _into(ufunc) -> Callable:
    return lambda vals, out: ufunc(vals, out=out)


def _sin_pi(vals, out):
    np.multiply(vals, np.pi, out=out)
    np.sin(out, out=out)


def _cos_pi(vals, out):
    np.multiply(vals, np.pi, out=out)
    np.cos(out, out=out)


def _rsqrt(vals, out):
    np.sqrt(vals, out=out)
    np.reciprocal(out, out=out)


def _sinc(vals, out):
    out[:] = np.sinc(vals / np.pi)


def _sinc_pi(vals, out):
    out[:] = np.sinc(vals)


FUNCTIONS = {
    'copy': lambda vals, out: np.copyto(out, vals),
    'sin': _into(np.sin),
    'cos': _into(np.cos),
    'tan': _into(np.tan),
    'sinh': _into(np.sinh),
    'cosh': _into(np.cosh),
    'tanh': _into(np.tanh),
    'asin': _into(np.arcsin),
    'acos': _into(np.arccos),
    'atan': _into(np.arctan),
    'asinh': _into(np.arcsinh),
    'acosh': _into(np.arccosh),
    'atanh': _into(np.arctanh),
    'sin_pi': _sin_pi,
    'cos_pi': _cos_pi,
    'sinc': _sinc,
    'sinc_pi': _sinc_pi,
    'exp': _into(np.exp),
    'exp2': _into(np.exp2),
    'exp10': lambda vals, out: np.power(10.0, vals, out=out),
    'log': _into(np.log),
    'log2': _into(np.log2),
    'log10': _into(np.log10),
    'sqrt': _into(np.sqrt),
    'rsqrt': _rsqrt,
    'pow3.5': lambda vals, out: np.power(vals, 3.5, out=out),
    'pow13': lambda vals, out: np.power(vals, 13, out=out),
}


def is_available() -> bool:
    return True


def build_backends() -> List[Backend]:
    return [
        Backend('numpy_fxx', 'f', {name: batch(f) for name, f in FUNCTIONS.items()}),
        Backend('numpy_dxx', 'd', {name: batch(f) for name, f in FUNCTIONS.items()}),
    ]
