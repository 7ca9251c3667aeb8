"""
Timing harness and result reporting for sfbench.

One measurement = one (function, backend, run configuration) triple:
the shared sample is mapped onto the function's domain, the adapter is
evaluated ``n_repeat`` times over the whole buffer inside a single
``perf_counter`` window, and the final repeat's outputs are kept for the
sanity mean.

Usage:
    from sfbench.profiling import run_benchmark, run_all, RUN_SETS

    result = run_benchmark('sin', backend, canonical_sample(1024), n_repeat=100)
    print(f"{result.label}: {result.mevals:.1f} Mevals/s")

    # Every requested function on every backend, both run configurations
    results = run_all(backends, ['sin', 'cos'])

Measurement caveats:
    - No warm-up, trimming or outlier rejection; one window spans all repeats.
    - The output buffer is reused across repeats, so backends see different
      cache behaviour depending on buffer size and output width.
"""

import os
import sys
import time
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

from ..adapters import Adapter
from ..domains import DEFAULT_DOMAIN, Domain, canonical_sample, domain_for, transform_domain
from .profile import get_profile_results

# Local reference for speed
_perf = time.perf_counter

# (input vector length, repeats): call-overhead-dominated, then throughput-dominated
RUN_SETS: List[Tuple[int, int]] = [(1024, 10_000), (1024 * 10_000, 1)]


# =============================================================================
# Terminal Color Support
# =============================================================================

def supports_color(stream=None) -> bool:
    """Check if ``stream`` (default stderr) supports color output."""
    stream = stream if stream is not None else sys.stderr
    if os.environ.get('NO_COLOR'):
        return False
    if os.environ.get('FORCE_COLOR'):
        return True
    if not hasattr(stream, 'isatty') or not stream.isatty():
        return False
    return sys.platform != 'win32' or 'WT_SESSION' in os.environ


# ANSI color codes for progress output on stderr - set at import time
if supports_color():
    RESET = "\033[0m"
    DIM = "\033[2m"
    BOLD = "\033[1m"
    CYAN = "\033[36m"
    YELLOW = "\033[33m"
else:
    RESET = DIM = BOLD = CYAN = YELLOW = ""


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class BenchResult:
    """
    Outcome of timing one adapter.

    An empty result (size 0) means the backend has no implementation of the
    function. It is a legitimate outcome and is never printed.
    """
    label: str
    res: np.ndarray = field(default_factory=lambda: np.empty(0))
    eval_time: float = 0.0
    n_repeat: int = 0
    domain: Domain = DEFAULT_DOMAIN
    n_inputs: int = 0

    @property
    def size(self) -> int:
        return int(self.res.size)

    @property
    def n_evals(self) -> int:
        return self.n_inputs * self.n_repeat

    @property
    def mevals(self) -> float:
        """Throughput in millions of evaluations per second."""
        if self.eval_time <= 0.0:
            return 0.0
        return self.n_evals / self.eval_time / 1e6

    @property
    def mean(self):
        """Mean of the retained outputs (complex for complex backends)."""
        if not self.size:
            return float('nan')
        if np.iscomplexobj(self.res):
            return complex(np.mean(self.res, dtype=np.complex128))
        return float(np.mean(self.res, dtype=np.float64))


# =============================================================================
# Harness
# =============================================================================

def time_adapter(adapter: Adapter, vals: np.ndarray, n_repeat: int, out: np.ndarray) -> float:
    """
    Evaluate ``adapter`` over ``vals`` ``n_repeat`` times into ``out``.

    Returns:
        Elapsed wall-clock seconds for all repeats together
    """
    start = _perf()
    for _ in range(n_repeat):
        adapter.evaluate_into(vals, out)
    return _perf() - start


def run_benchmark(name: str, backend, sample: Dict[str, np.ndarray], n_repeat: int) -> BenchResult:
    """
    Time ``backend``'s implementation of ``name`` on the shared sample.

    Args:
        name: FunctionName
        backend: Backend to measure
        sample: Canonical sample views from ``canonical_sample``
        n_repeat: Full-buffer evaluations inside the timed window

    Returns:
        BenchResult labelled '{backend}_{name}'; empty if the backend lacks ``name``
    """
    label = f"{backend.name}_{name}"
    adapter = backend.get(name)
    if adapter is None:
        return BenchResult(label)
    if n_repeat < 1:
        raise ValueError(f"n_repeat must be at least 1, got {n_repeat}")

    # Construction must finish before the clock starts
    adapter.prepare()

    domain = domain_for(name)
    vals = np.ascontiguousarray(transform_domain(sample[backend.dtype], domain))
    out = np.empty(adapter.output_size(len(vals)), dtype=vals.dtype)

    # Out-of-domain results stay in the buffer as NaN/inf for inspection
    with np.errstate(all='ignore'):
        elapsed = time_adapter(adapter, vals, n_repeat, out)

    return BenchResult(label, out, elapsed, n_repeat, domain, len(vals))


def run_all(backends: Sequence, names: Iterable[str], run_sets: Sequence[Tuple[int, int]] = RUN_SETS,
            seed=0, stream=None, err_stream=None) -> List[BenchResult]:
    """
    Benchmark every (function, backend) pair for every run configuration.

    Non-empty results are printed as they complete, with a blank line after
    each function's sweep. Progress goes to ``err_stream``.

    Returns:
        All results, including empty ones
    """
    stream = stream if stream is not None else sys.stdout
    err_stream = err_stream if err_stream is not None else sys.stderr
    names = list(names)

    results: List[BenchResult] = []
    for n_eval, n_repeat in run_sets:
        print(f"{CYAN}Running benchmark with input vector of length {n_eval} and {n_repeat} repeats.{RESET}",
              file=err_stream)
        sample = canonical_sample(n_eval, seed)
        for name in names:
            for backend in backends:
                result = run_benchmark(name, backend, sample, n_repeat)
                print_result(result, stream)
                results.append(result)
            print(file=stream, flush=True)
    return results


# =============================================================================
# Reporting
# =============================================================================

def format_result(result: BenchResult) -> str:
    """One report line: label, Mevals/s, mean, domain. Empty string for empty results."""
    if not result.size:
        return ""
    label = f"{result.label}: "
    return (f"{label:<25}{result.mevals:<15.6g}{result.mean:<15.15g}{'':<5}"
            f"[{result.domain.lower:.5g}, {result.domain.upper:.5g}]")


def print_result(result: BenchResult, stream=None):
    if result.size:
        print(format_result(result), file=stream if stream is not None else sys.stdout)


def print_prepare_report(stream=None):
    """Summarize the construction phase (approximant builds, JIT compiles)."""
    stream = stream if stream is not None else sys.stderr
    markers = {name: m for name, m in get_profile_results().items() if name.startswith('prepare:')}
    if not markers:
        return

    total = sum(m['total_ms'] for m in markers.values())
    print(f"{BOLD}Prepared {len(markers)} adapter{'s' if len(markers) != 1 else ''} "
          f"in {total:.1f}ms{RESET}", file=stream)
    for name, m in sorted(markers.items(), key=lambda kv: kv[1]['total_ms'], reverse=True):
        print(f"  {DIM}{name[len('prepare:'):]:<30}{m['total_ms']:>10.2f}ms{RESET}", file=stream)
