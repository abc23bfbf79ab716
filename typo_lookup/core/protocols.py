# typo_lookup/core/protocols.py
"""
Protocol interfaces for the pluggable collaborators of the typo lookup engine.

The search core only talks to these small shapes:
 - CostModel: per-character/per-position edit costs (keyboard distance, shift errors)
 - ProbabilityModel: turns a rescored distance into a probability
 - Generator: maps a matched spelling to the caller's payload objects

Numeric tuning lives in the implementations (see cost_model.py / probability.py),
the core never assumes particular constants.
"""

from __future__ import annotations

from typing import Protocol, Sequence, TypeVar, runtime_checkable
from typing_extensions import TypedDict

V = TypeVar("V", covariant=True)


# Typed structures ------------------------------------------------------------

class SearchStats(TypedDict, total=False):
    """
    Counters optionally filled by a fuzzy search.

    Example:
      {"visited": 41, "pruned": 12, "rescored": 3, "emitted": 2}
    """
    visited: int
    pruned: int
    rescored: int
    emitted: int


# Protocols ------------------------------------------------------------------

@runtime_checkable
class CostModel(Protocol):
    """
    Edit-cost functions consumed by the DP routines.

    Pruning is only lossless if the "min" bounds never exceed a concrete cost:
      min_insert_cost() <= any insert cost
      min_swap_cost()   <= swap_cost_const() + any two replace costs
    and every cost is non-negative.
    """

    def char_distance(self, a: str, b: str) -> float:
        """Keyboard proximity cost; symmetric, zero iff a == b."""
        ...

    def delete_cost_const(self) -> float:
        ...

    def min_insert_cost(self) -> float:
        ...

    def min_swap_cost(self) -> float:
        ...

    def swap_cost_const(self) -> float:
        ...

    def double_type_cost(self, x: float) -> float:
        """Cost of an accidental extra key press, given its key distance (>= 1)."""
        ...

    def insert_shift_cost(self, prev_upper: bool, inserted_upper: bool, intended_upper: bool) -> float:
        ...

    def replace_shift_cost(self, prev_upper: bool, typed_upper: bool,
                           intended_upper: bool, next_upper: bool) -> float:
        ...


@runtime_checkable
class ProbabilityModel(Protocol):
    """Distance -> probability in [0, 1], non-increasing in distance."""

    def probability(self, distance: float, expected: float, max_distance: float) -> float:
        ...


@runtime_checkable
class Generator(Protocol[V]):
    """Resolves a matched spelling to zero or more payloads sharing that spelling."""

    def lookup(self, spelling: str) -> Sequence[V]:
        ...
