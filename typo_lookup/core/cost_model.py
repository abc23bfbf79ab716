# cost_model.py
# Concrete edit-cost models for the typo lookup engine.
# - UnitCostModel: every edit costs 1, no keyboard or shift awareness (classic Levenshtein / OSA)
# - KeyboardCostModel: QWERTY key geometry plus shift/case timing errors
# Both keep min_insert_cost, min_swap_cost and delete_cost_const at or below every
# real insert, swap and delete, which the fuzzy search relies on for pruning.

from __future__ import annotations

import math
from functools import lru_cache
from typing import Any, Dict, Optional, Tuple

# (unshifted row, shifted row, horizontal stagger) top to bottom
KEYBOARD_ROWS = (
    ("`1234567890-=", "~!@#$%^&*()_+", 0.0),
    ("qwertyuiop[]\\", "QWERTYUIOP{}|", 0.5),
    ("asdfghjkl;'", "ASDFGHJKL:\"", 0.75),
    ("zxcvbnm,./", "ZXCVBNM<>?", 1.25),
)


def _key_positions() -> Dict[str, Tuple[float, float]]:
    pos: Dict[str, Tuple[float, float]] = {}
    for y, (plain, shifted, offset) in enumerate(KEYBOARD_ROWS):
        for x, (p, s) in enumerate(zip(plain, shifted)):
            pos[p] = (x + offset, float(y))
            pos[s] = (x + offset, float(y))
    pos[" "] = (5.5, 4.0)
    return pos


KEY_POSITIONS = _key_positions()


@lru_cache(maxsize=8192)
def key_distance(a: str, b: str) -> Optional[float]:
    """Euclidean distance between the keys producing a and b, None if either is off-keyboard."""
    pa = KEY_POSITIONS.get(a)
    pb = KEY_POSITIONS.get(b)
    if pa is None or pb is None:
        return None
    return math.hypot(pa[0] - pb[0], pa[1] - pb[1])


class UnitCostModel:
    """
    Every delete/insert/replace costs 1, shift errors are free.
    With swap=False this reproduces the textbook Levenshtein distance,
    with swap=True adjacent transpositions also cost 1 (optimal string alignment).
    """

    def __init__(self, swap: bool = True) -> None:
        self._swap = 1.0 if swap else math.inf

    def char_distance(self, a: str, b: str) -> float:
        return 0.0 if a == b else 1.0

    def delete_cost_const(self) -> float:
        return 1.0

    def min_insert_cost(self) -> float:
        return 1.0

    def min_swap_cost(self) -> float:
        return self._swap

    def swap_cost_const(self) -> float:
        return self._swap

    def double_type_cost(self, x: float) -> float:
        return 1.0

    def insert_shift_cost(self, prev_upper: bool, inserted_upper: bool, intended_upper: bool) -> float:
        return 0.0

    def replace_shift_cost(self, prev_upper: bool, typed_upper: bool,
                           intended_upper: bool, next_upper: bool) -> float:
        return 0.0

    def __repr__(self) -> str:
        return f"UnitCostModel(swap={not math.isinf(self._swap)})"


class KeyboardCostModel:
    """
    Keyboard-aware cost model.

    char_distance:
      same key, different case/shift level -> case_cost
      neighbouring keys                    -> 1.0
      further apart                        -> key distance, capped at max_char_cost
      characters not on the keyboard       -> max_char_cost
    Inserting a key costs at least 1.0 (double_type_cost is never below its
    argument and callers clamp the argument to >= 1), so min_insert_cost is 1.0.
    Swaps cost swap_cost plus two non-negative replace costs, so min_swap_cost
    is swap_cost.
    """

    def __init__(self,
                 swap_cost: float = 0.5,
                 case_cost: float = 0.25,
                 shift_cost: float = 0.5,
                 delete_cost: float = 1.0,
                 max_char_cost: float = 2.0) -> None:
        if min(swap_cost, case_cost, shift_cost, delete_cost) < 0:
            raise ValueError("costs must be non-negative")
        if max_char_cost < 1.0:
            raise ValueError("max_char_cost must be >= 1.0")
        self.swap_cost = float(swap_cost)
        self.case_cost = float(case_cost)
        self.shift_cost = float(shift_cost)
        self.delete_cost = float(delete_cost)
        self.max_char_cost = float(max_char_cost)

    def char_distance(self, a: str, b: str) -> float:
        if a == b:
            return 0.0
        d = key_distance(a, b)
        if d is None:
            return self.max_char_cost
        if d == 0.0:
            # zero would break "zero iff equal"
            return self.case_cost if self.case_cost > 0 else 1e-3
        return min(self.max_char_cost, max(1.0, d))

    def delete_cost_const(self) -> float:
        return self.delete_cost

    def min_insert_cost(self) -> float:
        return 1.0

    def min_swap_cost(self) -> float:
        return self.swap_cost

    def swap_cost_const(self) -> float:
        return self.swap_cost

    def double_type_cost(self, x: float) -> float:
        return max(1.0, x)

    def insert_shift_cost(self, prev_upper: bool, inserted_upper: bool, intended_upper: bool) -> float:
        # an extra key typed with the shift state of either neighbour is unremarkable
        if inserted_upper == prev_upper or inserted_upper == intended_upper:
            return 0.0
        return self.shift_cost

    def replace_shift_cost(self, prev_upper: bool, typed_upper: bool,
                           intended_upper: bool, next_upper: bool) -> float:
        if typed_upper == intended_upper:
            return 0.0
        # shift held too long or pressed too early
        if typed_upper == prev_upper or typed_upper == next_upper:
            return self.case_cost
        return self.shift_cost

    def __repr__(self) -> str:
        return (f"KeyboardCostModel(swap_cost={self.swap_cost}, case_cost={self.case_cost}, "
                f"shift_cost={self.shift_cost}, max_char_cost={self.max_char_cost})")


def cost_model_from_config(data: Dict[str, Any]):
    """Build the cost model named by config key "cost_model" ("keyboard" or "unit")."""
    kind = str(data.get("cost_model", "keyboard")).lower()
    if kind == "unit":
        return UnitCostModel(swap=bool(data.get("allow_swap", True)))
    if kind == "keyboard":
        return KeyboardCostModel(
            swap_cost=float(data.get("swap_cost", 0.5)),
            case_cost=float(data.get("case_cost", 0.25)),
            shift_cost=float(data.get("shift_cost", 0.5)),
            max_char_cost=float(data.get("max_char_cost", 2.0)),
        )
    raise ValueError(f"unknown cost model: {kind!r}")
