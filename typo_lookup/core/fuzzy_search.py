# fuzzy_search.py
# Bounded approximate lookup over the flat trie.
#
# Depth-first branch-and-bound with an explicit frame stack (one frame per trie
# depth, reused across queries through the thread's Workspace). Each frame
# holds the DP row of distances from its trie prefix to every prefix of the
# typed string; a child is only descended into when the lower bound on any
# completion of its prefix is within max_distance. Rows use the same four
# operations as levenshtein.py but add one trie character at a time. The
# replace term cannot see the next trie character yet, so it takes the bound
# over both shift states; every row cell is then <= the exact DP cell and the
# row only screens candidates. The exact distance decides what is kept.
#
# Exact matches are skipped: the caller already has the correct spelling.

from __future__ import annotations

import math
from typing import List, Optional, Sequence

import numpy as np

from typo_lookup.core.cost_model import KeyboardCostModel
from typo_lookup.core.exact_lookup import exact_node
from typo_lookup.core.levenshtein import (
    insert_cost, levenshtein_distance, replace_cost_bound, swap_cost)
from typo_lookup.core.probability import ExponentialTypoModel
from typo_lookup.core.protocols import CostModel, Generator, ProbabilityModel, SearchStats
from typo_lookup.core.scored import EMPTY, GeneratedMatches, WeightedMatch
from typo_lookup.core.trie_builder import node_values_range
from typo_lookup.core.workspace import DTYPE, Workspace, current_workspace

DEFAULT_COST_MODEL = KeyboardCostModel()
DEFAULT_PROBABILITY_MODEL = ExponentialTypoModel()


class SearchFrame:
    """Traversal state for one trie depth."""

    __slots__ = ("node", "n_children", "child", "d", "min_distance", "distance")

    def __init__(self, typed_length: int) -> None:
        self.node = 0           # offset of the node in the structure array
        self.n_children = 0
        self.child = -1         # cursor into the node's children
        self.d = np.zeros(typed_length + 1, dtype=DTYPE)
        self.min_distance = 0.0
        self.distance = 0.0

    def ensure(self, typed_length: int) -> None:
        if len(self.d) < typed_length + 1:
            self.d = np.zeros(typed_length + 1, dtype=DTYPE)

    def reset_root(self, structure: np.ndarray, typed_length: int, cost: CostModel) -> None:
        """Position on the root with the row for matching the empty prefix."""
        self.ensure(typed_length)
        self.node = 0
        self.n_children = int(structure[1])
        self.child = -1
        step = cost.min_insert_cost()
        d = self.d
        for i in range(typed_length + 1):
            d[i] = i * step
        self.min_distance = 0.0
        self.distance = d[typed_length]

    def next(self) -> bool:
        self.child += 1
        return self.child < self.n_children

    def current(self, structure: np.ndarray) -> str:
        return chr(int(structure[self.node + 2 + 2 * self.child]))

    def descend(self, frame: "SearchFrame", structure: np.ndarray) -> None:
        frame.node = int(structure[self.node + 3 + 2 * self.child])
        frame.n_children = int(structure[frame.node + 1])
        frame.child = -1


def levenshtein_lookup_generated(structure: np.ndarray,
                                 generator: Generator,
                                 typed: Sequence[str],
                                 max_distance: float,
                                 expected: float,
                                 min_probability: float,
                                 cost_model: Optional[CostModel] = None,
                                 probability_model: Optional[ProbabilityModel] = None,
                                 workspace: Optional[Workspace] = None,
                                 stats: Optional[SearchStats] = None):
    """
    Find dictionary spellings within max_distance of `typed`, except `typed` itself.

    Returns EMPTY or a GeneratedMatches over (probability, payload). Every kept
    node is rescored with the exact distance and kept only if that distance is
    within max_distance and its probability exceeds min_probability.
    """
    cost = cost_model if cost_model is not None else DEFAULT_COST_MODEL
    prob = probability_model if probability_model is not None else DEFAULT_PROBABILITY_MODEL
    ws = workspace if workspace is not None else current_workspace()

    n = len(typed)
    exact = exact_node(structure, typed)
    delete = cost.delete_cost_const()
    min_swap = cost.min_swap_cost()

    frames: List[SearchFrame] = ws.frames
    if not frames:
        frames.append(SearchFrame(n))
    frames[0].reset_root(structure, n, cost)
    prefix = ws.ensure_prefix(n)

    result: List[WeightedMatch] = []
    visited = pruned = rescored = 0
    level = 0

    while level >= 0:
        current = frames[level]

        if current.next():
            # two ago, for transpositions
            last = frames[level - 1] if level > 0 else None
            if level + 1 >= len(frames):
                frames.append(SearchFrame(n))
            child = frames[level + 1]
            child.ensure(n)
            if level >= len(prefix):
                prefix = ws.ensure_prefix(level + 1)

            prefix[level] = current.current(structure)
            visited += 1

            cd = child.d
            pd = current.d
            cd[0] = pd[0] + delete
            for j in range(1, n + 1):
                best = pd[j] + delete
                ins = cd[j - 1] + insert_cost(cost, prefix, level, typed, j - 1)
                if ins < best:
                    best = ins
                rep = pd[j - 1] + replace_cost_bound(cost, prefix, level, typed, j - 1)
                if rep < best:
                    best = rep
                if j > 1 and last is not None:
                    swp = last.d[j - 2] + swap_cost(cost, prefix, level - 1, typed, j - 2)
                    if swp < best:
                        best = swp
                cd[j] = best

            child.distance = cd[n]
            lower = math.inf
            for i in range(n + 1):
                if cd[i] < lower:
                    lower = cd[i]
                # a swap two characters ahead can still start from this row
                if i < n - 1 and pd[i] + min_swap < lower:
                    lower = pd[i] + min_swap
            child.min_distance = lower

            if lower <= max_distance:
                current.descend(child, structure)
                level += 1
            else:
                pruned += 1
        else:
            if current.distance <= max_distance and current.node != exact:
                lo, hi = node_values_range(structure, current.node)
                if lo < hi:
                    rescored += 1
                    d = levenshtein_distance(cost, prefix, typed, level, ws)
                    p = prob.probability(d, expected, max_distance)
                    if d <= max_distance and p > min_probability:
                        result.append(WeightedMatch(p, "".join(prefix[:level])))
            level -= 1

    if stats is not None:
        stats["visited"] = visited
        stats["pruned"] = pruned
        stats["rescored"] = rescored
        stats["emitted"] = len(result)

    return GeneratedMatches(generator, result) if result else EMPTY
