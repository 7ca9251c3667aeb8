"""
Uniform evaluation wrappers around backend implementations.

Backends expose their functions in several native shapes. An ``Adapter``
hides the shape behind one contract so the timing harness never needs to
know which library it is driving:

- SCALAR:      f(x) -> y, applied elementwise
- BATCH:       f(vals, out) over a contiguous buffer, len(vals) % lanes == 0
- PAIR:        f(z) -> (y0, y1), two outputs per input, interleaved
- APPROXIMANT: prebuilt Approximant, evaluated like BATCH

Adapters whose callable is expensive to create (approximants, JIT kernels)
are registered with a builder instead and must be ``prepare()``d before the
first evaluation. Preparation is the construction phase; it never happens
inside a timed window.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional

import numpy as np

from .approximant import build_approximant
from .domains import Domain


class AdapterKind(Enum):
    SCALAR = auto()
    BATCH = auto()
    PAIR = auto()
    APPROXIMANT = auto()


@dataclass
class Adapter:
    """
    One backend's implementation of one function.

    Attributes:
        kind: Native call shape.
        func: The callable, or None until a builder-backed adapter is prepared.
        lanes: Native lane width for BATCH adapters. Buffers must be a multiple.
        builder: Zero-argument factory producing ``func``.
    """
    kind: AdapterKind
    func: Optional[Callable] = None
    lanes: int = 1
    builder: Optional[Callable[[], Callable]] = None

    def __post_init__(self):
        if self.func is None and self.builder is None:
            raise ValueError("Adapter needs either a callable or a builder")
        if self.lanes < 1:
            raise ValueError(f"Lane width must be positive, got {self.lanes}")

    @property
    def width(self) -> int:
        """Outputs produced per input."""
        return 2 if self.kind is AdapterKind.PAIR else 1

    @property
    def ready(self) -> bool:
        return self.func is not None

    def prepare(self) -> 'Adapter':
        """Run the builder once. Safe to call repeatedly."""
        if self.func is None:
            self.func = self.builder()
        return self

    def output_size(self, n: int) -> int:
        return self.width * n

    def evaluate_into(self, vals: np.ndarray, out: np.ndarray) -> None:
        """Evaluate every input, writing ``width * len(vals)`` values into ``out``."""
        f = self.func
        if f is None:
            raise RuntimeError(f"{self.kind.name} adapter evaluated before prepare()")

        kind = self.kind
        if kind is AdapterKind.SCALAR:
            out[:] = list(map(f, vals.tolist()))
        elif kind is AdapterKind.PAIR:
            for i, z in enumerate(vals.tolist()):
                out[2 * i], out[2 * i + 1] = f(z)
        elif kind is AdapterKind.BATCH or kind is AdapterKind.APPROXIMANT:
            if len(vals) % self.lanes:
                raise ValueError(f"Buffer of {len(vals)} values is not a multiple of lane width {self.lanes}")
            f(vals, out)
        else:
            raise ValueError(f"Unknown adapter kind: {kind}")

    def evaluate(self, vals) -> np.ndarray:
        """Evaluate into a freshly allocated buffer of the input dtype."""
        vals = np.ascontiguousarray(vals)
        out = np.empty(self.output_size(len(vals)), dtype=vals.dtype)
        self.evaluate_into(vals, out)
        return out


# =============================================================================
# Constructors
# =============================================================================

def scalar(f: Callable) -> Adapter:
    """Wrap a scalar function f(x) -> y."""
    return Adapter(AdapterKind.SCALAR, func=f)


def batch(f: Callable, lanes: int = 1) -> Adapter:
    """Wrap a buffer function f(vals, out)."""
    return Adapter(AdapterKind.BATCH, func=f, lanes=lanes)


def deferred_batch(builder: Callable[[], Callable], lanes: int = 1) -> Adapter:
    """Buffer function that is only created by ``prepare()`` (e.g. JIT-compiled)."""
    return Adapter(AdapterKind.BATCH, lanes=lanes, builder=builder)


def pair(f: Callable) -> Adapter:
    """Wrap a scalar function returning two values per input."""
    return Adapter(AdapterKind.PAIR, func=f)


def approximant(oracle: Callable[[float], float], domain: Domain, **options) -> Adapter:
    """Approximant of ``oracle`` over ``domain``, built on ``prepare()``."""
    return Adapter(AdapterKind.APPROXIMANT,
                   builder=lambda: build_approximant(oracle, domain, **options))
