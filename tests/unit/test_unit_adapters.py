"""
Unit tests for the Adapter contract.

Every adapter kind must write width * n values for n inputs, builder-backed
adapters must be prepared exactly once, and lane-width violations must be
rejected before any evaluation.
"""

import cmath
import math
import unittest

import numpy as np

from sfbench.adapters import (
    Adapter, AdapterKind, approximant, batch, deferred_batch, pair, scalar,
)
from sfbench.domains import Domain
from test_fixtures import CountingBuilder, assert_max_abs_error


def _copy(vals, out):
    np.copyto(out, vals)


class AdapterConstructionTests(unittest.TestCase):
    """Tests for adapter constructors and validation"""

    def testConstructorsSetKind(self):
        self.assertIs(scalar(math.sin).kind, AdapterKind.SCALAR)
        self.assertIs(batch(_copy).kind, AdapterKind.BATCH)
        self.assertIs(pair(lambda z: (z, z)).kind, AdapterKind.PAIR)
        self.assertIs(approximant(math.sin, Domain()).kind, AdapterKind.APPROXIMANT)

    def testRequiresCallableOrBuilder(self):
        with self.assertRaises(ValueError):
            Adapter(AdapterKind.BATCH)

    def testRejectsNonPositiveLanes(self):
        with self.assertRaises(ValueError):
            batch(_copy, lanes=0)

    def testOutputWidth(self):
        self.assertEqual(scalar(math.sin).output_size(10), 10)
        self.assertEqual(pair(lambda z: (z, z)).output_size(10), 20)


class AdapterEvaluationTests(unittest.TestCase):
    """Tests for evaluate_into across adapter kinds"""

    def setUp(self):
        self.x = np.linspace(0.0, 2 * math.pi, 16)

    def testScalarAppliesElementwise(self):
        out = scalar(math.sin).evaluate(self.x)
        assert_max_abs_error(self, out, np.sin(self.x), 1e-15)

    def testScalarKeepsFloat32Buffer(self):
        x = self.x.astype(np.float32)
        out = scalar(math.cos).evaluate(x)
        self.assertEqual(out.dtype, np.float32)
        assert_max_abs_error(self, out, np.cos(x), 1e-6)

    def testBatchWritesIntoBuffer(self):
        out = np.zeros_like(self.x)
        batch(lambda vals, o: np.sin(vals, out=o)).evaluate_into(self.x, out)
        assert_max_abs_error(self, out, np.sin(self.x), 0.0)

    def testPairInterleavesOutputs(self):
        z = np.array([1.0 + 0.5j, 2.0 - 1.0j, 0.25 + 0.0j])
        out = pair(lambda v: (cmath.exp(v), cmath.log(v))).evaluate(z)
        self.assertEqual(out.shape, (6,))
        assert_max_abs_error(self, out[0::2], np.exp(z), 1e-14)
        assert_max_abs_error(self, out[1::2], np.log(z), 1e-14)

    def testLaneWidthViolationRaises(self):
        adapter = batch(_copy, lanes=8)
        vals = np.zeros(12)
        with self.assertRaises(ValueError):
            adapter.evaluate_into(vals, np.empty(12))

    def testLaneMultipleAccepted(self):
        adapter = batch(_copy, lanes=4)
        vals = np.arange(16, dtype=np.float64)
        self.assertTrue(np.array_equal(adapter.evaluate(vals), vals))


class AdapterLifecycleTests(unittest.TestCase):
    """Tests for builder-backed adapters"""

    def testUnpreparedAdapterRefusesToEvaluate(self):
        adapter = deferred_batch(CountingBuilder(_copy))
        self.assertFalse(adapter.ready)
        with self.assertRaises(RuntimeError):
            adapter.evaluate(np.zeros(4))

    def testPrepareRunsBuilderOnce(self):
        builder = CountingBuilder(_copy)
        adapter = deferred_batch(builder, lanes=2)
        adapter.prepare()
        adapter.prepare()
        self.assertEqual(builder.calls, 1)
        self.assertTrue(adapter.ready)
        vals = np.arange(4, dtype=np.float64)
        self.assertTrue(np.array_equal(adapter.evaluate(vals), vals))

    def testApproximantBuildsOnPrepare(self):
        calls = []

        def oracle(x):
            calls.append(x)
            return math.sin(x)

        adapter = approximant(oracle, Domain(0.0, math.pi))
        self.assertEqual(calls, [])
        adapter.prepare()
        n_build_calls = len(calls)
        self.assertGreater(n_build_calls, 0)

        x = np.linspace(0.0, math.pi, 64)
        assert_max_abs_error(self, adapter.evaluate(x), np.sin(x), 1e-8)
        self.assertEqual(len(calls), n_build_calls, "Evaluation must not call the oracle")


if __name__ == '__main__':
    unittest.main()
