# corrector.py
"""
TypoCorrector - application facade.

Purpose:
 - Own the LiveIndex (current dictionary snapshot) plus cost/probability models
 - Simple public API for the CLI/tests:
     load(words), load_names(pairs), suggest(typed, limit), distance(a, b),
     suggest_many(queries), stats()
 - Config-driven defaults for the search budget and models
"""

from __future__ import annotations

import threading
import time
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from typo_lookup.core.cost_model import cost_model_from_config
from typo_lookup.core.index import LiveIndex, TrieIndex
from typo_lookup.core.levenshtein import distance as typo_distance
from typo_lookup.core.probability import probability_model_from_config
from typo_lookup.core.protocols import CostModel, ProbabilityModel, SearchStats
from typo_lookup.utils.config_manager import DEFAULTS, Config
from typo_lookup.utils.logger_utils import Log
from typo_lookup.utils.threaded_runner import run_parallel

log = Log()


def check_query_params(max_distance: float, min_probability: float) -> None:
    if max_distance < 0:
        raise ValueError(f"max_distance must be >= 0, got {max_distance}")
    if not 0.0 <= min_probability < 1.0:
        raise ValueError(f"min_probability must be in [0, 1), got {min_probability}")


class TypoCorrector:
    """Did-you-mean facade.
    Public API:
      - load(words) / load_names(pairs) / load_mapping(table): rebuild and swap the dictionary
      - suggest(typed, limit=None) -> List[(payload, probability)], most probable first
      - distance(meant, typed) -> float
      - suggest_many(queries) -> List[List[(payload, probability)]]
      - stats() -> Dict[str, Any]
    """

    def __init__(self,
                 config: Optional[Config] = None,
                 cost_model: Optional[CostModel] = None,
                 probability_model: Optional[ProbabilityModel] = None) -> None:
        self.settings: Dict[str, Any] = dict(config.data) if config is not None else dict(DEFAULTS)
        self.cost = cost_model if cost_model is not None else cost_model_from_config(self.settings)
        self.prob = (probability_model if probability_model is not None
                     else probability_model_from_config(self.settings))
        self.index: LiveIndex[Any] = LiveIndex()
        self._started_at = time.time()
        self._queries = 0
        self._last_stats: SearchStats = {}
        self._lock = threading.Lock()  # suggest_many updates the counters from worker threads
        log.info(f"[TypoCorrector] cost={self.cost!r} prob={type(self.prob).__name__}")

    # Dictionary ---------------------------------------------------------
    def load(self, words: Iterable[str]) -> int:
        """Replace the dictionary with `words` (sorted and deduplicated here). Returns the word count."""
        return len(self.index.rebuild(words))

    def load_names(self, pairs: Iterable[Tuple[str, Any]]) -> int:
        """Replace the dictionary with (name, payload) pairs; shared names keep every payload."""
        return len(self.index.rebuild_names(pairs))

    def load_mapping(self, table: Mapping[str, Sequence[Any]]) -> int:
        snapshot = TrieIndex.from_mapping(table)
        self.index.publish(snapshot)
        return len(snapshot)

    # Queries ---------------------------------------------------------
    def lookup(self, typed: str,
               max_distance: Optional[float] = None,
               expected: Optional[float] = None,
               min_probability: Optional[float] = None):
        """Raw result container (EMPTY or GeneratedMatches) from the current snapshot."""
        md = float(self.settings["max_distance"] if max_distance is None else max_distance)
        ex = float(self.settings["expected_distance"] if expected is None else expected)
        mp = float(self.settings["min_probability"] if min_probability is None else min_probability)
        check_query_params(md, mp)

        snapshot = self.index.snapshot  # hold one snapshot for the whole query
        stats: SearchStats = {}
        result = snapshot.lookup(typed, md, ex, mp,
                                 cost_model=self.cost, probability_model=self.prob, stats=stats)
        with self._lock:
            self._queries += 1
            self._last_stats = stats
        log.debug(f"[TypoCorrector] {typed!r}: {stats}")
        return result

    def suggest(self, typed: str, limit: Optional[int] = None, **kw) -> List[Tuple[Any, float]]:
        """Most probable alternatives for `typed`, excluding `typed` itself."""
        n = int(self.settings["max_suggestions"] if limit is None else limit)
        result = self.lookup(typed, **kw)
        return [(payload, p) for p, payload in result.best(n)]

    def suggest_many(self, queries: Iterable[str], limit: Optional[int] = None,
                     workers: Optional[int] = None) -> List[List[Tuple[Any, float]]]:
        """Run suggest() for many queries on a thread pool; each worker thread uses its own scratch buffers."""
        w = int(self.settings["workers"] if workers is None else workers)
        tasks = [lambda q=q: self.suggest(q, limit) for q in queries]
        return run_parallel(tasks, max_workers=max(1, w))

    def distance(self, meant: str, typed: str) -> float:
        return typo_distance(self.cost, meant, typed)

    def __contains__(self, word: str) -> bool:
        return word in self.index.snapshot

    def stats(self) -> Dict[str, Any]:
        snapshot = self.index.snapshot
        with self._lock:
            queries, last = self._queries, dict(self._last_stats)
        return {
            "uptime_s": round(time.time() - self._started_at, 1),
            "words": len(snapshot),
            "nodes": snapshot.node_count,
            "generation": self.index.generation,
            "queries": queries,
            "last_search": last,
        }
