"""
Backend registry and dispatch for sfbench.

This module centralizes all backend-related logic:
- Checking which backend families are available (scipy, numba, C libm, ...)
- Building the Backend tables (name -> Adapter) once at startup
- Computing the requested function set from the union of all backends
- Preparing (building/compiling) the requested adapters before any timing

Usage:
    from sfbench.backend import check_backends, build_backends, requested_functions

    # Check what's available
    check_backends()
    # {'math': True, 'numpy': True, 'scipy': True, 'libm': True, 'amdlibm': False, ...}

    backends = build_backends()
    names = requested_functions(backends, {'sin', 'bessel_Y0'})
    prepare_backends(backends, names)
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set

from .adapters import Adapter
from .profiling.profile import perf_marker


# Evaluation order within one function: float32, float64, then complex
DTYPE_ORDER = ('f', 'd', 'cd')


@dataclass
class Backend:
    """
    One implementation source of the compared functions.

    Attributes:
        name: Label prefix, e.g. 'numpy_dxx'. Result labels are '{name}_{function}'.
        dtype: Sample view the backend consumes: 'f' (float32), 'd' (float64)
            or 'cd' (complex128).
        adapters: FunctionName -> Adapter for every function this backend has.
    """
    name: str
    dtype: str
    adapters: Dict[str, Adapter] = field(default_factory=dict)

    def __post_init__(self):
        if self.dtype not in DTYPE_ORDER:
            raise ValueError(f"Unknown sample dtype '{self.dtype}'. Use one of {DTYPE_ORDER}.")

    def __contains__(self, name: str) -> bool:
        return name in self.adapters

    def get(self, name: str) -> Optional[Adapter]:
        return self.adapters.get(name)

    def keys(self) -> Set[str]:
        return set(self.adapters)


# =============================================================================
# Backend Availability
# =============================================================================

def check_backends() -> Dict[str, bool]:
    """Check which backend families are available on this machine.

    Returns:
        Dict with availability of each family:
        - 'math', 'numpy': Always True
        - 'scipy': True if scipy.special imports (also gates the approximants
          and the pair-output Hankel backend, which use it as their oracle)
        - 'libm': True if the C math library can be loaded
        - 'amdlibm': True if AMD libm (libalm) is found
        - 'numba': True if numba imports
    """
    from .libs import amdlibm, libm, numba_kernels, scipy_special

    return {
        'math': True,
        'numpy': True,
        'scipy': scipy_special.is_available(),
        'libm': libm.is_available(),
        'amdlibm': amdlibm.is_available(),
        'numba': numba_kernels.is_available(),
    }


# =============================================================================
# Registry
# =============================================================================

def build_backends() -> List[Backend]:
    """
    Build every available Backend, ordered float32 -> float64 -> complex.

    Families whose library is missing contribute nothing. A native library
    that loads but lacks a declared symbol raises NativeSymbolError.
    """
    from .libs import amdlibm, approximants, libm, numba_kernels, numpy_ufuncs, scipy_special, std_math

    backends: List[Backend] = []
    for family in (libm, amdlibm, numba_kernels, numpy_ufuncs, std_math, scipy_special, approximants):
        backends.extend(family.build_backends())

    backends.sort(key=lambda b: DTYPE_ORDER.index(b.dtype))
    return backends


def function_union(backends: Iterable[Backend]) -> Set[str]:
    """All function names known to at least one backend."""
    names: Set[str] = set()
    for b in backends:
        names |= b.keys()
    return names


def requested_functions(backends: Iterable[Backend], keys: Iterable[str] = ()) -> List[str]:
    """
    Functions to benchmark, sorted.

    With no ``keys`` this is the union of every backend's functions. Otherwise
    it is that union intersected with ``keys``; unknown names are dropped.
    """
    union = function_union(backends)
    keys = set(keys)
    if keys:
        union &= keys
    return sorted(union)


def prepare_backends(backends: Iterable[Backend], names: Iterable[str]) -> int:
    """
    Run the construction phase for every requested adapter.

    Approximants are built and JIT kernels compiled here, each under a
    'prepare:{label}' profiling marker, so none of that cost reaches a timed
    window.

    Returns:
        Number of adapters that needed building
    """
    names = list(names)
    built = 0
    for b in backends:
        for name in names:
            adapter = b.get(name)
            if adapter is None or adapter.ready:
                continue
            with perf_marker(f"prepare:{b.name}_{name}"):
                adapter.prepare()
            built += 1
    return built
