"""
Construction-phase timers.

The harness times evaluation only. Building approximants and compiling JIT
kernels happens before it, under named markers, so the two phases are
reported separately.

Usage:
    from sfbench.profiling import perf_marker, get_profile_results, reset_profile

    with perf_marker("prepare:approx_dx1_bessel_Y0"):
        adapter.prepare()

    get_profile_results()
    # {'prepare:approx_dx1_bessel_Y0': {'count': 1, 'total_ms': 41.7}}

Markers are compiled out (no timing, empty results) when
SFBENCH_NO_PROFILING=1 is set or Python runs with -O. Read once at import.
"""

import os
import time
from typing import Any, Dict, Optional

_PROFILING_COMPILED_OUT = (
    os.environ.get('SFBENCH_NO_PROFILING', '').lower() in ('1', 'true', 'yes')
    or not __debug__
)

# Local reference for speed
_perf = time.perf_counter

# marker name -> [count, total seconds]
_totals: Dict[str, list] = {}


class _Marker:
    __slots__ = ('name', '_start')

    def __init__(self, name: str):
        self.name = name
        self._start = 0.0

    def __enter__(self):
        self._start = _perf()
        return self

    def __exit__(self, *args):
        elapsed = _perf() - self._start
        entry = _totals.setdefault(self.name, [0, 0.0])
        entry[0] += 1
        entry[1] += elapsed
        return False


class _Disabled:
    __slots__ = ()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        return False


_DISABLED = _Disabled()


def is_profiling_enabled() -> bool:
    """True unless markers were compiled out at import time."""
    return not _PROFILING_COMPILED_OUT


def reset_profile():
    _totals.clear()


def get_profile_results() -> Dict[str, Dict[str, Any]]:
    """Marker name -> {'count': n, 'total_ms': milliseconds}."""
    return {
        name: {'count': count, 'total_ms': round(total * 1000, 3)}
        for name, (count, total) in _totals.items()
    }


def perf_marker(name: Optional[str] = None):
    """Context manager adding the block's wall time to marker ``name``."""
    if _PROFILING_COMPILED_OUT:
        return _DISABLED
    return _Marker(name or "unknown")
