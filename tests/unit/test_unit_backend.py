"""
Unit tests for the backend registry and dispatcher.
"""

import unittest

import numpy as np

from sfbench.adapters import deferred_batch
from sfbench.backend import (
    DTYPE_ORDER, Backend, build_backends, check_backends, function_union,
    prepare_backends, requested_functions,
)
from sfbench.profiling import get_profile_results, is_profiling_enabled, reset_profile
from test_fixtures import CountingBuilder, make_backend


class BackendTests(unittest.TestCase):
    """Tests for the Backend table"""

    def testLookup(self):
        b = make_backend(functions=('sin',))
        self.assertIn('sin', b)
        self.assertNotIn('cos', b)
        self.assertIsNotNone(b.get('sin'))
        self.assertIsNone(b.get('cos'))
        self.assertEqual(b.keys(), {'sin'})

    def testRejectsUnknownDtype(self):
        with self.assertRaises(ValueError):
            Backend('bad', 'q', {})


class DispatcherTests(unittest.TestCase):
    """Tests for requested_functions"""

    def setUp(self):
        self.backends = [
            make_backend('a_dx1', functions=('sin', 'cos')),
            make_backend('b_dx1', functions=('cos', 'sqrt')),
        ]

    def testEmptyFilterIsUnion(self):
        self.assertEqual(requested_functions(self.backends), ['cos', 'sin', 'sqrt'])
        self.assertEqual(function_union(self.backends), {'sin', 'cos', 'sqrt'})

    def testFilterIntersectsUnion(self):
        self.assertEqual(requested_functions(self.backends, ['sqrt', 'sin']), ['sin', 'sqrt'])

    def testUnknownNamesAreDropped(self):
        self.assertEqual(requested_functions(self.backends, ['sin', 'not_a_function']), ['sin'])
        self.assertEqual(requested_functions(self.backends, ['not_a_function']), [])

    def testNoBackends(self):
        self.assertEqual(requested_functions([]), [])


class PrepareBackendsTests(unittest.TestCase):
    """Tests for the construction phase"""

    def setUp(self):
        reset_profile()
        self.builder_sin = CountingBuilder(lambda vals, out: np.sin(vals, out=out))
        self.builder_cos = CountingBuilder(lambda vals, out: np.cos(vals, out=out))
        self.backend = Backend('jit_dx4', 'd', {
            'sin': deferred_batch(self.builder_sin, lanes=4),
            'cos': deferred_batch(self.builder_cos, lanes=4),
        })

    def testOnlyRequestedAdaptersAreBuilt(self):
        built = prepare_backends([self.backend, make_backend()], ['sin', 'sqrt'])
        self.assertEqual(built, 1)
        self.assertEqual(self.builder_sin.calls, 1)
        self.assertEqual(self.builder_cos.calls, 0)

    def testPreparedAdaptersAreNotRebuilt(self):
        prepare_backends([self.backend], ['sin'])
        self.assertEqual(prepare_backends([self.backend], ['sin']), 0)
        self.assertEqual(self.builder_sin.calls, 1)

    def testConstructionIsMarked(self):
        if not is_profiling_enabled():
            self.skipTest("profiling compiled out")
        prepare_backends([self.backend], ['sin', 'cos'])
        results = get_profile_results()
        self.assertIn('prepare:jit_dx4_sin', results)
        self.assertIn('prepare:jit_dx4_cos', results)
        self.assertEqual(results['prepare:jit_dx4_sin']['count'], 1)


class RegistryTests(unittest.TestCase):
    """Tests for the real backend tables available on this machine"""

    @classmethod
    def setUpClass(cls):
        cls.backends = build_backends()

    def testOrderedByDtype(self):
        ranks = [DTYPE_ORDER.index(b.dtype) for b in self.backends]
        self.assertEqual(ranks, sorted(ranks))

    def testNamesAreUnique(self):
        names = [b.name for b in self.backends]
        self.assertEqual(len(names), len(set(names)))

    def testAlwaysAvailableFamilies(self):
        names = {b.name for b in self.backends}
        self.assertTrue({'math_dx1', 'numpy_fxx', 'numpy_dxx'} <= names)
        availability = check_backends()
        self.assertTrue(availability['math'])
        self.assertTrue(availability['numpy'])

    def testAvailabilityMatchesRegistry(self):
        names = {b.name for b in self.backends}
        availability = check_backends()
        self.assertEqual(availability['scipy'], 'scipy_dxx' in names)
        self.assertEqual(availability['numba'], 'numba_dx4' in names)
        self.assertEqual(availability['amdlibm'], 'amdlibm_dx1' in names)


if __name__ == '__main__':
    unittest.main()
