"""
JIT-compiled lane kernels (numba).

Each kernel walks the buffer in fixed blocks of ``lanes`` values with an
unrolled inner loop, the shape LLVM turns into SIMD code, so these backends
stand in for the explicitly vectorized libraries. Buffers must be a multiple
of the lane width.

Kernels are compiled eagerly for an explicit signature when the adapter is
prepared, never on first call inside a timed window.
"""

import math
from typing import Callable, Dict, List

import numpy as np

from ..adapters import deferred_batch
from ..backend import Backend

try:
    from numba import njit
    _NUMBA_AVAILABLE = True
except ImportError:
    njit = None
    _NUMBA_AVAILABLE = False


# (backend name, sample dtype, numba element type, lanes)
LANE_CONFIGS = [
    ('numba_fx8', 'f', 'float32', 8),
    ('numba_fx16', 'f', 'float32', 16),
    ('numba_dx4', 'd', 'float64', 4),
    ('numba_dx8', 'd', 'float64', 8),
]

# Scalar bodies; each is jitted and called from the lane kernel
OPS: Dict[str, Callable] = {
    'copy': lambda x: x,
    'sin': lambda x: np.sin(x),
    'cos': lambda x: np.cos(x),
    'tan': lambda x: np.tan(x),
    'sinh': lambda x: np.sinh(x),
    'cosh': lambda x: np.cosh(x),
    'tanh': lambda x: np.tanh(x),
    'asin': lambda x: np.arcsin(x),
    'acos': lambda x: np.arccos(x),
    'atan': lambda x: np.arctan(x),
    'asinh': lambda x: np.arcsinh(x),
    'acosh': lambda x: np.arccosh(x),
    'atanh': lambda x: np.arctanh(x),
    'exp': lambda x: np.exp(x),
    'exp2': lambda x: np.exp2(x),
    'log': lambda x: np.log(x),
    'log2': lambda x: np.log2(x),
    'log10': lambda x: np.log10(x),
    'sqrt': lambda x: np.sqrt(x),
    'rsqrt': lambda x: 1.0 / np.sqrt(x),
    'erf': lambda x: math.erf(x),
    'erfc': lambda x: math.erfc(x),
    'pow3.5': lambda x: x ** 3.5,
    'pow13': lambda x: x ** 13,
}


def is_available() -> bool:
    return _NUMBA_AVAILABLE


def lane_kernel(op: Callable, lanes: int, numba_type: str) -> Callable:
    """
    Compile ``op`` into a kernel(vals, out) over contiguous 1-D arrays.

    Compilation happens here, for the given element type only.
    """
    scalar_op = njit(error_model='numpy')(op)

    def kernel(vals, out):
        n = vals.shape[0]
        for i in range(0, n, lanes):
            for j in range(lanes):
                out[i + j] = scalar_op(vals[i + j])

    signature = f"void({numba_type}[::1], {numba_type}[::1])"
    return njit(signature, fastmath=True, error_model='numpy', boundscheck=False)(kernel)


def _builder(op: Callable, lanes: int, numba_type: str) -> Callable[[], Callable]:
    return lambda: lane_kernel(op, lanes, numba_type)


def build_backends() -> List[Backend]:
    if not _NUMBA_AVAILABLE:
        return []

    backends = []
    for name, dtype, numba_type, lanes in LANE_CONFIGS:
        adapters = {
            fname: deferred_batch(_builder(op, lanes, numba_type), lanes=lanes)
            for fname, op in OPS.items()
        }
        backends.append(Backend(name, dtype, adapters))
    return backends
