"""
sfbench Profiling Package

This package provides the timing harness and construction-phase markers:

- profile: Construction-phase timers (perf_marker context manager)
- runner: Benchmark harness and reporting (run_benchmark, run_all, BenchResult)

Quick usage:
    from sfbench.profiling import perf_marker, get_profile_results

    with perf_marker("prepare:approx_dx1_bessel_Y0"):
        adapter.prepare()

    # For benchmarking:
    from sfbench.profiling import run_benchmark
    result = run_benchmark('sin', backend, canonical_sample(1024), n_repeat=100)
"""

# Re-export from profile module
from .profile import (
    is_profiling_enabled,
    reset_profile,
    get_profile_results,
    perf_marker,
    _PROFILING_COMPILED_OUT,
)

# Re-export from runner module
from .runner import (
    RUN_SETS,
    BenchResult,
    supports_color,
    time_adapter,
    run_benchmark,
    run_all,
    format_result,
    print_result,
    print_prepare_report,
)

__all__ = [
    # Profile markers
    'is_profiling_enabled',
    'reset_profile',
    'get_profile_results',
    'perf_marker',
    '_PROFILING_COMPILED_OUT',
    # Benchmark utilities
    'RUN_SETS',
    'BenchResult',
    'supports_color',
    'time_adapter',
    'run_benchmark',
    'run_all',
    'format_result',
    'print_result',
    'print_prepare_report',
]
