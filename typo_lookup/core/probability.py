# probability.py
# Distance -> probability conversions used to weight fuzzy matches.
# Both models return 0.0 beyond max_distance and are non-increasing in distance.

from __future__ import annotations

import math
from typing import Any, Dict


def poisson_pdf(lam: float, k: int) -> float:
    """P[K = k] for K ~ Poisson(lam), computed as lam^k/k! * e^-lam without factorial overflow."""
    if k < 0:
        return 0.0
    acc = 1.0
    for i in range(1, k + 1):
        acc *= lam / i
    return acc * math.exp(-lam)


class ExponentialTypoModel:
    """p(d) = exp(-d / expected), so one 'expected' typo costs a factor of e."""

    def probability(self, distance: float, expected: float, max_distance: float) -> float:
        if distance > max_distance:
            return 0.0
        if distance <= 0:
            return 1.0
        if expected <= 0:
            return 0.0
        return math.exp(-distance / expected)


class PoissonTailModel:
    """
    p(d) = P[K >= ceil(d)] for K ~ Poisson(expected): the chance of making at
    least as many typos as the distance implies.
    """

    def probability(self, distance: float, expected: float, max_distance: float) -> float:
        if distance > max_distance:
            return 0.0
        k = int(math.ceil(distance))
        if k <= 0:
            return 1.0
        if expected <= 0:
            return 0.0
        below = sum(poisson_pdf(expected, i) for i in range(k))
        return min(1.0, max(0.0, 1.0 - below))


def probability_model_from_config(data: Dict[str, Any]):
    kind = str(data.get("probability_model", "exponential")).lower()
    if kind == "exponential":
        return ExponentialTypoModel()
    if kind == "poisson":
        return PoissonTailModel()
    raise ValueError(f"unknown probability model: {kind!r}")
