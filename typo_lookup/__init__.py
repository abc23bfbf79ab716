"""typo_lookup - did-you-mean suggestions for identifiers."""

from typo_lookup.core import TrieIndex, TypoCorrector, levenshtein_distance

__all__ = ["TrieIndex", "TypoCorrector", "levenshtein_distance"]

__version__ = "0.1.0"
