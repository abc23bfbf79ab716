# index.py
# Immutable dictionary snapshots and their atomic replacement.
#
# A TrieIndex is built once from a dictionary and never changes afterwards,
# so any number of threads may query it without locks. LiveIndex publishes a
# rebuilt snapshot with a single reference assignment: a query that already
# grabbed the old snapshot keeps using it until it finishes.

from __future__ import annotations

from typing import Any, Generic, Iterable, List, Mapping, Optional, Sequence, Tuple, TypeVar

import numpy as np

from typo_lookup.core.exact_lookup import NOT_FOUND, contains, exact_node
from typo_lookup.core.fuzzy_search import levenshtein_lookup_generated
from typo_lookup.core.protocols import CostModel, Generator, ProbabilityModel, SearchStats
from typo_lookup.core.scored import IdentityGenerator, MappingGenerator
from typo_lookup.core.trie_builder import TrieStructure, make_trie_structure
from typo_lookup.core.workspace import Workspace
from typo_lookup.utils.logger_utils import Log

V = TypeVar("V")

log = Log()


class DictionaryOrderError(ValueError):
    """Raised by opt-in validation when a dictionary is unsorted or has duplicates."""

    def __init__(self, index: int, prev: str, cur: str) -> None:
        kind = "duplicate" if prev == cur else "out of order"
        super().__init__(f"dictionary entry {index} ({cur!r}) is {kind} after {prev!r}")
        self.index = index
        self.prev = prev
        self.cur = cur


def validate_dictionary(words: Sequence[str]) -> None:
    """Raise DictionaryOrderError unless words are strictly ascending."""
    for i in range(1, len(words)):
        if not words[i - 1] < words[i]:
            raise DictionaryOrderError(i, words[i - 1], words[i])


def prepare_dictionary(words: Iterable[str]) -> List[str]:
    """Sorted, duplicate-free copy of `words`."""
    return sorted(set(words))


class TrieIndex(Generic[V]):
    """One immutable dictionary snapshot: sorted words, their flat trie, and a payload generator."""

    __slots__ = ("words", "structure", "generator")

    def __init__(self, words: Tuple[str, ...], structure: np.ndarray, generator: Generator[V]) -> None:
        self.words = words
        self.structure = structure
        self.generator = generator

    @classmethod
    def build(cls, words: Sequence[str], generator: Optional[Generator[V]] = None,
              check: bool = False) -> "TrieIndex[V]":
        """
        Build from an already sorted, duplicate-free dictionary.
        With check=True the order is validated first; otherwise a bad
        dictionary silently yields wrong lookups.
        """
        words = tuple(words)
        if check:
            validate_dictionary(words)
        with Log.time_block(f"trie build ({len(words)} words)"):
            structure = make_trie_structure(words)
        log.debug(f"[TrieIndex] built {len(words)} words -> {(len(structure) + 1) // 4} nodes")
        return cls(words, structure, generator if generator is not None else IdentityGenerator())

    @classmethod
    def from_words(cls, words: Iterable[str]) -> "TrieIndex[str]":
        """Sort and dedupe arbitrary words; each spelling is its own payload."""
        return cls.build(prepare_dictionary(words))

    @classmethod
    def from_names(cls, pairs: Iterable[Tuple[str, V]]) -> "TrieIndex[V]":
        """
        Build from (name, payload) pairs. Repeated names collapse into one
        dictionary entry whose payloads are every declaration with that name.
        """
        gen = MappingGenerator.from_pairs(pairs)
        return cls.build(gen.names(), gen)

    @classmethod
    def from_mapping(cls, table: Mapping[str, Sequence[V]]) -> "TrieIndex[V]":
        gen = MappingGenerator(table)
        return cls.build(gen.names(), gen)

    # queries --------------------------------------------------------------
    def lookup(self, typed: str, max_distance: float, expected: float, min_probability: float,
               cost_model: Optional[CostModel] = None,
               probability_model: Optional[ProbabilityModel] = None,
               workspace: Optional[Workspace] = None,
               stats: Optional[SearchStats] = None):
        return levenshtein_lookup_generated(self.structure, self.generator, typed,
                                            max_distance, expected, min_probability,
                                            cost_model=cost_model,
                                            probability_model=probability_model,
                                            workspace=workspace, stats=stats)

    def exact_node(self, typed: str) -> int:
        return exact_node(self.structure, typed)

    def __contains__(self, word: str) -> bool:
        return contains(self.structure, word)

    def __len__(self) -> int:
        return len(self.words)

    @property
    def node_count(self) -> int:
        return (len(self.structure) + 1) // 4

    def view(self) -> TrieStructure:
        return TrieStructure(self.structure)

    def values_for(self, typed: str) -> Tuple[str, ...]:
        node = exact_node(self.structure, typed)
        if node == NOT_FOUND:
            return ()
        lo, hi = self.view().values_range(node)
        return self.words[lo:hi]


class LiveIndex(Generic[V]):
    """Holder whose snapshot can be swapped out while readers are using the old one."""

    def __init__(self, initial: Optional[TrieIndex[V]] = None) -> None:
        self._snapshot: TrieIndex[Any] = initial if initial is not None else TrieIndex.build(())
        self.generation = 0

    @property
    def snapshot(self) -> TrieIndex[V]:
        return self._snapshot

    def publish(self, index: TrieIndex[V]) -> TrieIndex[V]:
        """Swap in a fully built snapshot; returns the previous one."""
        old = self._snapshot
        self._snapshot = index
        self.generation += 1
        log.info(f"[LiveIndex] generation {self.generation}: {len(index)} words")
        return old

    def rebuild(self, words: Iterable[str]) -> TrieIndex[str]:
        index = TrieIndex.from_words(words)
        self.publish(index)
        return index

    def rebuild_names(self, pairs: Iterable[Tuple[str, V]]) -> TrieIndex[V]:
        index = TrieIndex.from_names(pairs)
        self.publish(index)
        return index
