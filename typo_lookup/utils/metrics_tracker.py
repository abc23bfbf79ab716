# metrics_tracker.py - running averages of timings, optionally persisted to JSON

import json, os, time
from collections import defaultdict
from functools import wraps

from typo_lookup.utils.logger_utils import Log


class Metrics:
    def __init__(self, path="metrics.json", persist=True):
        self.path = path
        self.persist = persist
        self.m = defaultdict(float)
        self.n = defaultdict(int)
        self._load()

    def _load(self):
        if self.persist and os.path.exists(self.path):
            try:
                with open(self.path, "r", encoding="utf8") as f:
                    d = json.load(f)
                for k, v in d.items():
                    self.m[k] = v["sum"]
                    self.n[k] = v["count"]
            except (OSError, ValueError, KeyError, TypeError) as e:
                Log().warning(f"[Metrics] could not load {self.path}: {e}")

    def save(self):
        if not self.persist:
            return
        d = {k: {"sum": self.m[k], "count": self.n[k]} for k in self.m}
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(d, f, indent=2)

    def record(self, key, val):
        self.m[key] += val
        self.n[key] += 1
        self.save()

    def avg(self, key):
        if self.n[key] == 0: return 0.0
        return self.m[key] / self.n[key]

    def summary(self):
        """key -> (count, average)"""
        return {k: (self.n[k], self.avg(k)) for k in self.m}

    def timed(self, key):
        """Decorator recording the wrapped call's wall time under `key`."""
        def _decor(fn):
            @wraps(fn)
            def _wrap(*a, **kw):
                t0 = time.perf_counter()
                try:
                    return fn(*a, **kw)
                finally:
                    self.record(key, time.perf_counter() - t0)
            return _wrap
        return _decor
