# tests/test_trie_builder.py
import random

import pytest

from typo_lookup.core.exact_lookup import NOT_FOUND, contains, exact_node
from typo_lookup.core.trie_builder import (
    TrieStructure,
    common_prefix,
    count_nodes,
    make_trie_structure,
)


def expected_nodes(words):
    total = 1
    prev = ""
    for w in words:
        total += len(w) - common_prefix(prev, w)
        prev = w
    return total


def random_dictionary(rng, n=60, alphabet="abcd", max_len=6):
    return sorted({"".join(rng.choice(alphabet) for _ in range(rng.randint(1, max_len))) for _ in range(n)})


def test_common_prefix():
    assert common_prefix("", "abc") == 0
    assert common_prefix("abc", "abd") == 2
    assert common_prefix("abc", "abc") == 3
    assert common_prefix("ab", "abc") == 2


def test_small_trie_layout():
    s = make_trie_structure(["a", "ab", "ac"])
    assert s.tolist() == [0, 1, ord("a"), 4,
                          0, 2, ord("b"), 10, ord("c"), 12,
                          1, 0,
                          2, 0,
                          3]


def test_empty_dictionary_is_root_plus_sentinel():
    s = make_trie_structure([])
    assert s.tolist() == [0, 0, 0]
    assert exact_node(s, "") == 0
    assert exact_node(s, "a") == NOT_FOUND


def test_structure_is_read_only():
    s = make_trie_structure(["x"])
    with pytest.raises(ValueError):
        s[0] = 5


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_node_count_and_size_invariant(seed):
    words = random_dictionary(random.Random(seed))
    view = TrieStructure.build(words)
    assert view.node_count == expected_nodes(words)
    assert count_nodes(words)[0] == expected_nodes(words)
    assert len(view) == 4 * view.node_count - 1
    assert len(list(view.iter_nodes())) == view.node_count


@pytest.mark.parametrize("seed", [0, 5, 9])
def test_children_sorted_by_character(seed):
    view = TrieStructure.build(random_dictionary(random.Random(seed)))
    for node in view.iter_nodes():
        chars = [c for c, _ in view.children(node)]
        assert chars == sorted(chars)


@pytest.mark.parametrize("seed", [0, 7, 11])
def test_exact_lookup_round_trip(seed):
    words = random_dictionary(random.Random(seed), n=120)
    s = make_trie_structure(words)
    view = TrieStructure(s)
    for i, w in enumerate(words):
        node = exact_node(s, w)
        assert node != NOT_FOUND
        lo, hi = view.values_range(node)
        assert lo <= i < hi
        assert contains(s, w)


def test_prefix_nodes_own_no_values(identifiers):
    s = make_trie_structure(identifiers)
    view = TrieStructure(s)
    node = exact_node(s, "appl")
    assert node != NOT_FOUND
    lo, hi = view.values_range(node)
    assert lo == hi
    assert not contains(s, "appl")
    assert exact_node(s, "applz") == NOT_FOUND


def test_unicode_identifiers():
    words = sorted(["naïve", "naive", "café"])
    s = make_trie_structure(words)
    for w in words:
        assert contains(s, w)


def test_unsorted_input_still_well_formed():
    # not validated: the array is consistent but does not describe the words
    words = ["b", "a", "ab"]
    view = TrieStructure.build(words)
    assert len(view) == 4 * view.node_count - 1
    # root children come out as b, a so the binary search misses "b"
    assert not contains(view.array, "b")
