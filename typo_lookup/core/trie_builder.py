# trie_builder.py
# Flat prefix trie over a sorted, duplicate-free dictionary.
#
# The whole trie is a single int32 array. A node at offset n is
#   [values_start, child_count, (char_code, child_offset) * child_count]
# with children sorted by character. A sentinel holding len(values) closes the
# array, so node n owns values[structure[n] : structure[next node]] where the
# next node starts at n + 2 + 2*child_count.
#
# Trie   a -> x, ab -> y, ac -> z
# structure = [0,1,'a',4,
#              0,2,'b',10,'c',12,
#              1,0,
#              2,0,
#              3]  # sentinel
# values = [x,y,z]

from __future__ import annotations

from typing import Iterator, List, Sequence, Tuple

import numpy as np

STRUCT_DTYPE = np.int32


def common_prefix(x: str, y: str) -> int:
    """Length of the common prefix of two strings."""
    n = min(len(x), len(y))
    p = 0
    while p < n and x[p] == y[p]:
        p += 1
    return p


def count_nodes(values: Sequence[str]) -> Tuple[int, int]:
    """Return (node count without sentinel, longest value length)."""
    nodes = 1
    longest = 0
    prev = ""
    for k in values:
        longest = max(longest, len(k))
        nodes += len(k) - common_prefix(prev, k)
        prev = k
    return nodes, longest


def make_trie_structure(values: Sequence[str]) -> np.ndarray:
    """
    Build the flat trie for `values` in three linear passes.
    Values must be sorted and unique; this is not checked (an unsorted list
    still gives a well-formed array, just not one that describes `values`).
    """
    nodes, longest = count_nodes(values)
    structure_size = 4 * nodes - 1

    # per node: info[2n] = child count (later: offset), info[2n+1] = values start
    info = [0] * (2 * nodes + 1)
    stack = [0] * (longest + 1)  # stack[d] = node id of the current ancestor at depth d

    prev = ""
    n = 1
    for i, k in enumerate(values):
        c = common_prefix(prev, k)  # implicitly truncates the stack to c+1
        if c < len(k):
            info[2 * stack[c]] += 1
            for j in range(c + 1, len(k)):
                info[2 * n] += 1
                info[2 * n + 1] = i
                stack[j] = n
                n += 1
            info[2 * n + 1] = i
            stack[len(k)] = n
            n += 1
        prev = k
    assert n == nodes

    # node ids -> offsets
    total = 0
    for n in range(nodes):
        nxt = total + 2 + 2 * info[2 * n]
        info[2 * n] = total
        total = nxt
    assert total + 1 == structure_size
    info[2 * nodes] = total

    structure = np.zeros(structure_size, dtype=STRUCT_DTYPE)
    # value starts; child counts are already zero
    for n in range(nodes):
        structure[info[2 * n]] = info[2 * n + 1]
    structure[info[2 * nodes]] = len(values)

    prev = ""
    n = 1
    for k in values:
        kl = len(k)
        c = common_prefix(prev, k)
        if c < kl:
            pn = info[2 * stack[c]]
            cn = int(structure[pn + 1])
            structure[pn + 1] = cn + 1
            structure[pn + 2 + 2 * cn] = ord(k[c])
            structure[pn + 3 + 2 * cn] = info[2 * n]
            n += 1
            for j in range(c + 1, kl):
                stack[j] = n - 1
                pn = info[2 * (n - 1)]
                cn = int(structure[pn + 1])
                structure[pn + 1] = cn + 1
                structure[pn + 2 + 2 * cn] = ord(k[j])
                structure[pn + 3 + 2 * cn] = info[2 * n]
                n += 1
            stack[kl] = n - 1
        prev = k
    assert n == nodes

    structure.setflags(write=False)
    return structure


def node_values_range(structure: np.ndarray, node: int) -> Tuple[int, int]:
    """[lo, hi) slice of the dictionary spelled exactly by `node` (empty for pure prefixes)."""
    lo = int(structure[node])
    hi = int(structure[node + 2 + 2 * int(structure[node + 1])])
    return lo, hi


class TrieStructure:
    """Read-only view over a flat trie array, for inspection and tests."""

    __slots__ = ("array", "node_count")

    def __init__(self, array: np.ndarray) -> None:
        self.array = array
        self.node_count = (len(array) + 1) // 4

    @classmethod
    def build(cls, values: Sequence[str]) -> "TrieStructure":
        return cls(make_trie_structure(values))

    def values_range(self, node: int) -> Tuple[int, int]:
        return node_values_range(self.array, node)

    def children(self, node: int) -> List[Tuple[str, int]]:
        a = self.array
        count = int(a[node + 1])
        return [(chr(int(a[node + 2 + 2 * c])), int(a[node + 3 + 2 * c])) for c in range(count)]

    def iter_nodes(self) -> Iterator[int]:
        """Node offsets in array order, sentinel excluded."""
        a = self.array
        n = 0
        last = len(a) - 1
        while n < last:
            yield n
            n += 2 + 2 * int(a[n + 1])

    def __len__(self) -> int:
        return len(self.array)
