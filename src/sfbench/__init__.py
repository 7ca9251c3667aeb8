"""sfbench - throughput benchmark for special-function implementations."""

__version__ = "0.1.0"

from .domains import Domain, DOMAINS, DEFAULT_DOMAIN, domain_for, transform_domain, canonical_sample
from .adapters import Adapter, AdapterKind
from .approximant import Approximant, build_approximant
from .backend import Backend, check_backends, build_backends, requested_functions, prepare_backends
from .native_loader import NativeSymbolError
from .profiling import BenchResult, RUN_SETS, run_benchmark, run_all


__all__ = [
    '__version__',
    # Inputs
    'Domain',
    'DOMAINS',
    'DEFAULT_DOMAIN',
    'domain_for',
    'transform_domain',
    'canonical_sample',
    # Backends
    'Adapter',
    'AdapterKind',
    'Approximant',
    'build_approximant',
    'Backend',
    'check_backends',
    'build_backends',
    'requested_functions',
    'prepare_backends',
    'NativeSymbolError',
    # Harness
    'BenchResult',
    'RUN_SETS',
    'run_benchmark',
    'run_all',
]
