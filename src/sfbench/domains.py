"""
Function domains and the affine map from the canonical sample into them.

Every run draws one canonical sample in [0, 1). Before a function is timed,
that sample is stretched onto the function's own domain so all backends
compared on one function see exactly the same inputs.
"""

import math
from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np


@dataclass(frozen=True)
class Domain:
    """Input interval for one function; lower must be strictly below upper."""
    lower: float = 0.0
    upper: float = 1.0

    def __post_init__(self):
        if not self.lower < self.upper:
            raise ValueError(f"Domain lower bound must be below upper bound, got [{self.lower}, {self.upper}]")

    @property
    def width(self) -> float:
        return self.upper - self.lower

    @property
    def center(self) -> float:
        return self.lower + 0.5 * self.width

    def as_tuple(self) -> Tuple[float, float]:
        return (self.lower, self.upper)


DEFAULT_DOMAIN = Domain(0.0, 1.0)

# Functions not listed here run on DEFAULT_DOMAIN.
DOMAINS: Dict[str, Domain] = {
    'sin_pi': Domain(0.0, 2.0),
    'cos_pi': Domain(0.0, 2.0),
    'sin': Domain(0.0, 2 * math.pi),
    'cos': Domain(0.0, 2 * math.pi),
    'tan': Domain(0.0, 2 * math.pi),
    'asin': Domain(-1.0, 1.0),
    'acos': Domain(-1.0, 1.0),
    'atan': Domain(-100.0, 100.0),
    'erf': Domain(-1.0, 1.0),
    'erfc': Domain(-1.0, 1.0),
    'exp': Domain(-10.0, 10.0),
    'log': Domain(0.0, 10.0),
    'asinh': Domain(-100.0, 100.0),
    'acosh': Domain(1.0, 1000.0),
    'atanh': Domain(-1.0, 1.0),
    'bessel_Y0': Domain(0.1, 30.0),
    'bessel_Y1': Domain(0.1, 30.0),
    'bessel_Y2': Domain(0.1, 30.0),
}


def domain_for(name: str) -> Domain:
    """Domain registered for ``name``, or the unit interval."""
    return DOMAINS.get(name, DEFAULT_DOMAIN)


def transform_domain(vals: np.ndarray, domain: Domain) -> np.ndarray:
    """
    Map a canonical sample onto ``domain``: v -> v * (upper - lower) + lower.

    Returns a new array of the same dtype; ``vals`` is never modified. For
    complex samples the real part is shifted and both parts are scaled.
    """
    vals = np.asarray(vals)
    delta = vals.dtype.type(domain.width)
    lower = vals.dtype.type(domain.lower)
    return vals * delta + lower


def canonical_sample(n_eval: int, seed=None) -> Dict[str, np.ndarray]:
    """
    Draw the shared sample for one run configuration.

    Returns:
        Dict with three views keyed by dtype tag:
        - 'f': float32 cast of the float64 sample
        - 'd': float64 sample in [0, 1)
        - 'cd': independent complex128 sample, both parts in [0, 1)
    """
    rng = np.random.default_rng(seed)
    vals = rng.random(n_eval)
    cvals = rng.random(n_eval) + 1j * rng.random(n_eval)
    return {
        'f': vals.astype(np.float32),
        'd': vals,
        'cd': cvals,
    }
