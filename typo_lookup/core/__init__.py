"""
typo_lookup.core

The typo-tolerant lookup engine.
Contains:
 - flat trie construction over a sorted dictionary (trie_builder)
 - exact node lookup (exact_lookup)
 - typo-weighted exact edit distance (levenshtein)
 - bounded branch-and-bound fuzzy search (fuzzy_search)
 - cost / probability models and lazy result containers
 - immutable index snapshots and the TypoCorrector facade
"""

from .cost_model import KeyboardCostModel, UnitCostModel
from .probability import ExponentialTypoModel, PoissonTailModel, poisson_pdf
from .trie_builder import TrieStructure, common_prefix, make_trie_structure
from .exact_lookup import NOT_FOUND, exact_node
from .levenshtein import levenshtein_distance
from .fuzzy_search import SearchFrame, levenshtein_lookup_generated
from .scored import EMPTY, GeneratedMatches, MappingGenerator, WeightedMatch
from .workspace import Workspace, WorkspacePool
from .index import DictionaryOrderError, LiveIndex, TrieIndex
from .corrector import TypoCorrector

__all__ = [
    "KeyboardCostModel",
    "UnitCostModel",
    "ExponentialTypoModel",
    "PoissonTailModel",
    "poisson_pdf",
    "TrieStructure",
    "common_prefix",
    "make_trie_structure",
    "NOT_FOUND",
    "exact_node",
    "levenshtein_distance",
    "SearchFrame",
    "levenshtein_lookup_generated",
    "EMPTY",
    "GeneratedMatches",
    "MappingGenerator",
    "WeightedMatch",
    "Workspace",
    "WorkspacePool",
    "DictionaryOrderError",
    "LiveIndex",
    "TrieIndex",
    "TypoCorrector",
]
