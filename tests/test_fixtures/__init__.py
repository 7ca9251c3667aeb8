"""Test fixtures and utilities for sfbench testing.

Organized into logical modules:
- mocks: Hand-built backends and builders (make_backend, CountingBuilder)
- assertions: Custom assertion functions (assert_within_domain, assert_max_abs_error)
"""

from .mocks import CountingBuilder, make_backend, make_numpy_backend, sample_from
from .assertions import assert_within_domain, assert_max_abs_error

__all__ = [
    'CountingBuilder',
    'make_backend',
    'make_numpy_backend',
    'sample_from',
    'assert_within_domain',
    'assert_max_abs_error',
]
