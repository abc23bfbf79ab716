# tests/test_cost_model.py
import math

import pytest

from typo_lookup.core.cost_model import (
    KeyboardCostModel,
    UnitCostModel,
    cost_model_from_config,
    key_distance,
)


def test_key_distance_neighbours():
    assert key_distance("a", "s") == pytest.approx(1.0)
    assert key_distance("a", "A") == 0.0
    assert key_distance("a", "é") is None


def test_keyboard_caps_far_keys():
    kb = KeyboardCostModel(max_char_cost=2.0)
    assert kb.char_distance("q", "p") == 2.0
    assert kb.char_distance("q", "w") == 1.0
    assert kb.char_distance("x", "€") == 2.0


def test_keyboard_rejects_negative_costs():
    with pytest.raises(ValueError):
        KeyboardCostModel(swap_cost=-0.1)
    with pytest.raises(ValueError):
        KeyboardCostModel(max_char_cost=0.5)


def test_shift_costs():
    kb = KeyboardCostModel(case_cost=0.25, shift_cost=0.5)
    assert kb.replace_shift_cost(False, False, False, False) == 0.0
    assert kb.replace_shift_cost(True, True, False, False) == 0.25
    assert kb.replace_shift_cost(False, True, False, False) == 0.5
    assert kb.insert_shift_cost(False, True, True) == 0.0
    assert kb.insert_shift_cost(False, True, False) == 0.5


def test_unit_without_swap():
    u = UnitCostModel(swap=False)
    assert math.isinf(u.swap_cost_const())
    assert math.isinf(u.min_swap_cost())


def test_factory():
    assert isinstance(cost_model_from_config({}), KeyboardCostModel)
    unit = cost_model_from_config({"cost_model": "unit", "allow_swap": False})
    assert isinstance(unit, UnitCostModel)
    assert math.isinf(unit.swap_cost_const())
    with pytest.raises(ValueError):
        cost_model_from_config({"cost_model": "dvorak"})
