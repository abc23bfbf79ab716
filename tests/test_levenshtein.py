# tests/test_levenshtein.py
# exact distance routine + cost helpers

import pytest

from typo_lookup.core.cost_model import KeyboardCostModel, UnitCostModel
from typo_lookup.core.levenshtein import (
    insert_cost, levenshtein_distance, replace_cost, replace_cost_bound, swap_cost)
from typo_lookup.core.workspace import Workspace


def test_kitten_sitting_classic(classic):
    assert levenshtein_distance(classic, "kitten", "sitting") == pytest.approx(3.0)


@pytest.mark.parametrize("meant,typed,expected", [
    ("", "", 0.0),
    ("abc", "", 3.0),
    ("", "abc", 3.0),
    ("abc", "abc", 0.0),
    ("flaw", "lawn", 2.0),
    ("book", "back", 2.0),
])
def test_classic_table(classic, meant, typed, expected):
    assert levenshtein_distance(classic, meant, typed) == pytest.approx(expected)


def test_transposition_costs_one_swap(unit, classic):
    assert levenshtein_distance(unit, "ab", "ba") == pytest.approx(1.0)
    assert levenshtein_distance(classic, "ab", "ba") == pytest.approx(2.0)
    assert levenshtein_distance(unit, "apple", "aplpe") == pytest.approx(1.0)


def test_keyboard_neighbours_cheaper_than_far_keys(keyboard):
    near = levenshtein_distance(keyboard, "cat", "cst")  # a/s are neighbours
    far = levenshtein_distance(keyboard, "cat", "cpt")
    assert 0 < near < far


def test_keyboard_swap_cheaper_than_two_replaces(keyboard):
    assert levenshtein_distance(keyboard, "apple", "aplpe") == pytest.approx(0.5)


def test_keyboard_shift_slip_is_cheap(keyboard):
    # "getName" typed with the shift held a key too long
    slip = levenshtein_distance(keyboard, "getName", "getNAme")
    wrong = levenshtein_distance(keyboard, "getName", "getNbme")
    assert 0 < slip < wrong


def test_char_distance_symmetric_and_zero_iff_equal(keyboard):
    chars = "aAsq1!zM_ é"
    for a in chars:
        for b in chars:
            d = keyboard.char_distance(a, b)
            assert d == keyboard.char_distance(b, a)
            assert (d == 0) == (a == b)


def test_list_buffer_is_left_unchanged(unit):
    meant = list("recieve")
    levenshtein_distance(unit, meant, "receive")
    assert meant == list("recieve")


def test_meant_length_uses_prefix_of_buffer(unit):
    buf = list("applesauce")
    assert levenshtein_distance(unit, buf, "apple", meant_length=5) == 0.0


class _Exploding(UnitCostModel):
    def replace_shift_cost(self, prev_upper, typed_upper, intended_upper, next_upper):
        raise RuntimeError("boom")


def test_swap_cost_restores_buffer_on_error():
    meant = list("abc")
    with pytest.raises(RuntimeError):
        swap_cost(_Exploding(), meant, 0, "bac", 0)
    assert meant == list("abc")


def test_swap_cost_evaluates_against_swapped_neighbours(unit):
    meant = list("ab")
    assert swap_cost(unit, meant, 0, "ba", 0) == pytest.approx(1.0)
    assert meant == ["a", "b"]


def test_replace_cost_uses_lookahead_for_shift():
    cost = KeyboardCostModel(case_cost=0.25, shift_cost=0.5)
    # typed 'N' for intended 'n', next intended char is upper: shift pressed early
    early = replace_cost(cost, list("nA"), 0, "N", 0, True)
    # no lookahead: unexplained shift
    blind = replace_cost(cost, list("na"), 0, "N", 0, True)
    assert early < blind


def test_replace_cost_bound_never_above_either_lookahead(keyboard):
    for meant in ("nA", "na", "Na", "NA"):
        for typed in ("N", "n", "xN", "Xn"):
            j = len(typed) - 1
            bound = replace_cost_bound(keyboard, meant, 0, typed, j)
            assert bound <= replace_cost(keyboard, meant, 0, typed, j, True)
            assert bound <= replace_cost(keyboard, meant, 0, typed, j, False)


def test_insert_cost_never_below_min(keyboard, unit):
    for cost in (keyboard, unit):
        for meant in ("ab", "Zq", "x!"):
            for typed in ("ab", "QQ", "!x", "aA"):
                for j in range(len(typed)):
                    assert insert_cost(cost, meant, 0, typed, j) >= cost.min_insert_cost()


def test_swap_cost_never_below_min(keyboard):
    for meant in ("ab", "Ab", "q!"):
        for typed in ("ba", "BA", "zz"):
            assert swap_cost(keyboard, list(meant), 0, typed, 0) >= keyboard.min_swap_cost()


def test_workspace_table_grows_only(unit):
    ws = Workspace()
    levenshtein_distance(unit, "abcdef", "abcdefgh", workspace=ws)
    size = ws.table_size
    assert size >= 7 * 9
    levenshtein_distance(unit, "a", "b", workspace=ws)
    assert ws.table_size == size


def test_distance_is_repeatable_with_shared_workspace(keyboard):
    ws = Workspace()
    first = levenshtein_distance(keyboard, "hashCode", "hashCdoe", workspace=ws)
    levenshtein_distance(keyboard, "x" * 30, "y" * 25, workspace=ws)
    assert levenshtein_distance(keyboard, "hashCode", "hashCdoe", workspace=ws) == first
