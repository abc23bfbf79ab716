# exact_lookup.py
# Exact descent through the flat trie: one binary search over the sorted
# children per query character.

from __future__ import annotations

from typing import Sequence

import numpy as np

from typo_lookup.core.trie_builder import node_values_range

NOT_FOUND = -1


def find_child(structure: np.ndarray, node: int, ch: int) -> int:
    """Offset of the child of `node` reached via char code `ch`, or NOT_FOUND."""
    lo = 0
    hi = int(structure[node + 1])
    while lo < hi:
        mid = (lo + hi) >> 1
        x = int(structure[node + 2 + 2 * mid])
        if ch == x:
            return int(structure[node + 3 + 2 * mid])
        if ch < x:
            hi = mid
        else:
            lo = mid + 1
    return NOT_FOUND


def exact_node(structure: np.ndarray, query: Sequence[str]) -> int:
    """Node spelling exactly `query`, or NOT_FOUND. The empty query is the root."""
    node = 0
    for c in query:
        node = find_child(structure, node, ord(c))
        if node == NOT_FOUND:
            return NOT_FOUND
    return node


def contains(structure: np.ndarray, query: Sequence[str]) -> bool:
    """True if `query` is itself a dictionary value."""
    node = exact_node(structure, query)
    if node == NOT_FOUND:
        return False
    lo, hi = node_values_range(structure, node)
    return lo < hi
