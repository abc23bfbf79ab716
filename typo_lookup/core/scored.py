# scored.py
# Result containers for fuzzy lookups.
# A search produces WeightedMatch(probability, spelling) entries; payloads are
# only resolved through the Generator when the caller actually iterates.

from __future__ import annotations

from typing import Dict, Generic, Iterable, Iterator, List, Mapping, NamedTuple, Optional, Sequence, Tuple, TypeVar

from typo_lookup.core.protocols import Generator

V = TypeVar("V")


class WeightedMatch(NamedTuple):
    probability: float
    spelling: str


class _Empty:
    """No matches. Falsy, iterates nothing, shared by every empty lookup."""

    __slots__ = ()
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __iter__(self) -> Iterator[Tuple[float, object]]:
        return iter(())

    def __len__(self) -> int:
        return 0

    def __bool__(self) -> bool:
        return False

    @property
    def matches(self) -> List[WeightedMatch]:
        return []

    def spellings(self) -> List[str]:
        return []

    def ranked(self, n: Optional[int] = None) -> List[WeightedMatch]:
        return []

    def best(self, n: int = 5) -> List[Tuple[float, object]]:
        return []

    def __repr__(self) -> str:
        return "EMPTY"


EMPTY = _Empty()


class GeneratedMatches(Generic[V]):
    """
    Lazy (probability, payload) sequence.

    Iteration walks the matches in traversal order and asks the generator for
    each spelling's payloads on the way, so a caller that stops early never
    resolves the rest. Ordering is not by probability; use best() for that.
    """

    __slots__ = ("generator", "matches")

    def __init__(self, generator: Generator[V], matches: List[WeightedMatch]) -> None:
        self.generator = generator
        self.matches = matches

    def __iter__(self) -> Iterator[Tuple[float, V]]:
        for p, spelling in self.matches:
            for payload in self.generator.lookup(spelling):
                yield p, payload

    def __len__(self) -> int:
        """Number of matched spellings (a spelling may resolve to several payloads)."""
        return len(self.matches)

    def __bool__(self) -> bool:
        return bool(self.matches)

    def spellings(self) -> List[str]:
        return [m.spelling for m in self.matches]

    def ranked(self, n: Optional[int] = None) -> List[WeightedMatch]:
        """Matched spellings by probability, ties broken by spelling; no payload lookups."""
        ranked = sorted(self.matches, key=lambda m: (-m.probability, m.spelling))
        return ranked if n is None else ranked[:n]

    def best(self, n: int = 5) -> List[Tuple[float, V]]:
        """Top n payloads by probability; ties broken by spelling."""
        out: List[Tuple[float, V]] = []
        for p, spelling in self.ranked():
            for payload in self.generator.lookup(spelling):
                out.append((p, payload))
                if len(out) >= n:
                    return out
        return out

    def __repr__(self) -> str:
        return f"GeneratedMatches({len(self.matches)} spellings)"


class MappingGenerator(Generic[V]):
    """Generator backed by a spelling -> payloads mapping (several declarations may share a name)."""

    def __init__(self, table: Mapping[str, Sequence[V]]) -> None:
        self._table: Dict[str, Tuple[V, ...]] = {k: tuple(v) for k, v in table.items()}

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, V]]) -> "MappingGenerator[V]":
        table: Dict[str, List[V]] = {}
        for name, payload in pairs:
            table.setdefault(name, []).append(payload)
        return cls(table)

    def lookup(self, spelling: str) -> Sequence[V]:
        return self._table.get(spelling, ())

    def names(self) -> List[str]:
        return sorted(self._table)


class IdentityGenerator:
    """Every spelling is its own single payload."""

    def lookup(self, spelling: str) -> Sequence[str]:
        return (spelling,)
