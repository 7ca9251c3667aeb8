"""
Adaptive piecewise-Chebyshev approximants of scalar functions.

An approximant replaces an expensive scalar oracle with a table of
fixed-order Chebyshev pieces. The domain is bisected recursively (a binary
tree) until the piece fitted on each leaf reproduces the oracle to within the
tolerance, or until the leaf reaches the minimum size allowed by
``max_depth``. Leaves that never converge are kept anyway: the result is a
best-effort approximation, not a guarantee.

Usage:
    approx = build_approximant(math.sin, Domain(0.0, 2 * math.pi))
    y = approx.evaluate(x)          # allocate
    approx(x, out)                  # write into an existing buffer

Building is the expensive part and happens once; evaluation is a
``searchsorted`` over the leaf edges followed by a vectorised Clenshaw
recurrence.
"""

from typing import Callable, List, Tuple

import numpy as np
from numpy.polynomial import chebyshev

from .domains import Domain

DEFAULT_ORDER = 8
DEFAULT_TOL = 1e-10
DEFAULT_MAX_DEPTH = 24


class Approximant:
    """Flattened leaves of an adaptive Chebyshev tree."""

    def __init__(self, edges: np.ndarray, coeffs: np.ndarray, domain: Domain,
                 tol: float, unconverged: int = 0, oracle_calls: int = 0):
        self.domain = domain
        self.tol = tol
        self.unconverged = unconverged
        self.oracle_calls = oracle_calls

        self._edges = np.ascontiguousarray(edges, dtype=np.float64)
        self._coeffs = np.ascontiguousarray(coeffs, dtype=np.float64)
        # Interior edges are the spatial index: searchsorted over them yields
        # the leaf id directly and clamps out-of-domain inputs to the end leaves.
        self._inner = self._edges[1:-1]
        self._centers = 0.5 * (self._edges[1:] + self._edges[:-1])
        self._inv_half = 2.0 / (self._edges[1:] - self._edges[:-1])

    @property
    def n_leaves(self) -> int:
        return self._coeffs.shape[0]

    @property
    def order(self) -> int:
        return self._coeffs.shape[1]

    @property
    def edges(self) -> np.ndarray:
        return self._edges

    def __call__(self, vals: np.ndarray, out: np.ndarray) -> None:
        idx = np.searchsorted(self._inner, vals, side='right')
        t = (vals - self._centers[idx]) * self._inv_half[idx]

        c = self._coeffs
        b1 = np.zeros_like(t)
        b2 = np.zeros_like(t)
        two_t = 2.0 * t
        for k in range(self.order - 1, 0, -1):
            b1, b2 = two_t * b1 - b2 + c[idx, k], b1
        out[:] = t * b1 - b2 + c[idx, 0]

    def evaluate(self, vals) -> np.ndarray:
        vals = np.asarray(vals, dtype=np.float64)
        out = np.empty_like(vals)
        self(vals, out)
        return out

    def __repr__(self):
        return (f"Approximant(domain=[{self.domain.lower}, {self.domain.upper}], "
                f"leaves={self.n_leaves}, order={self.order}, unconverged={self.unconverged})")


class _Builder:
    """Recursive bisection state for one build."""

    def __init__(self, oracle: Callable[[float], float], order: int, tol: float, max_depth: int):
        self.oracle = oracle
        self.order = order
        self.tol = tol
        self.max_depth = max_depth
        # Check points include the leaf ends and the midpoints between fit nodes
        self.nodes = np.linspace(-1.0, 1.0, 2 * order + 1)
        self.leaves: List[Tuple[float, float, np.ndarray]] = []
        self.unconverged = 0
        self.oracle_calls = 0

    def _sample(self, xs: np.ndarray) -> np.ndarray:
        self.oracle_calls += xs.size
        return np.fromiter((self.oracle(float(x)) for x in xs), dtype=np.float64, count=xs.size)

    def fit(self, lower: float, upper: float) -> Tuple[np.ndarray, bool, bool]:
        """Fit one leaf. Returns (coeffs, converged, splittable)."""
        center = 0.5 * (upper + lower)
        half = 0.5 * (upper - lower)
        coeffs = chebyshev.chebinterpolate(lambda t: self._sample(center + half * t), self.order - 1)

        exact = self._sample(center + half * self.nodes)
        finite = np.isfinite(exact)
        if not finite.any():
            # Nothing to resolve here, further splitting cannot help
            return coeffs, False, False

        err = np.max(np.abs(chebyshev.chebval(self.nodes, coeffs) - exact)) if finite.all() else np.inf
        scale = max(1.0, float(np.max(np.abs(exact[finite]))))
        return coeffs, bool(err <= self.tol * scale), True

    def subdivide(self, lower: float, upper: float, depth: int) -> None:
        coeffs, converged, splittable = self.fit(lower, upper)
        if converged or not splittable or depth >= self.max_depth:
            if not converged:
                self.unconverged += 1
            self.leaves.append((lower, upper, coeffs))
            return

        mid = 0.5 * (lower + upper)
        self.subdivide(lower, mid, depth + 1)
        self.subdivide(mid, upper, depth + 1)


def build_approximant(oracle: Callable[[float], float], domain: Domain,
                      order: int = DEFAULT_ORDER, tol: float = DEFAULT_TOL,
                      max_depth: int = DEFAULT_MAX_DEPTH) -> Approximant:
    """
    Build an adaptive piecewise-Chebyshev approximant of a scalar oracle.

    Args:
        oracle: Scalar function float -> float. Called only during the build.
        domain: Interval to cover.
        order: Number of Chebyshev coefficients per leaf.
        tol: Target error, relative to max(1, |f|) on each leaf.
        max_depth: Maximum bisection depth; the smallest leaf is
            domain.width / 2**max_depth.

    Returns:
        Approximant. Leaves that missed ``tol`` at ``max_depth`` are counted in
        ``Approximant.unconverged``.
    """
    if order < 1:
        raise ValueError(f"Approximant order must be positive, got {order}")
    if max_depth < 0:
        raise ValueError(f"max_depth must be non-negative, got {max_depth}")

    builder = _Builder(oracle, order, tol, max_depth)
    builder.subdivide(domain.lower, domain.upper, 0)

    edges = np.array([lo for lo, _, _ in builder.leaves] + [builder.leaves[-1][1]])
    coeffs = np.vstack([c for _, _, c in builder.leaves])
    return Approximant(edges, coeffs, domain, tol,
                       unconverged=builder.unconverged,
                       oracle_calls=builder.oracle_calls)
