# workspace.py
# Per-thread scratch storage for the DP routines.
# Buffers only ever grow, so repeated queries stop allocating once the
# largest dictionary entry / query has been seen. Nothing in a Workspace
# carries meaning between calls.

from __future__ import annotations

import threading
from typing import List

import numpy as np

DTYPE = np.float32


class Workspace:
    """
    Scratch owned by exactly one thread at a time.
      table:  flat DP table for exact distances
      frames: search frame stack (one frame per trie depth)
      prefix: characters of the trie path currently being explored
    """

    __slots__ = ("_table", "frames", "prefix")

    def __init__(self) -> None:
        self._table = np.zeros(0, dtype=DTYPE)
        self.frames: List = []
        self.prefix: List[str] = []

    def table(self, size: int) -> np.ndarray:
        """Return a float32 buffer of at least `size` cells (contents unspecified)."""
        if len(self._table) < size:
            self._table = np.zeros(max(size, 2 * len(self._table)), dtype=DTYPE)
        return self._table

    def ensure_prefix(self, length: int) -> List[str]:
        if len(self.prefix) < length:
            self.prefix.extend([""] * (length - len(self.prefix)))
        return self.prefix

    @property
    def table_size(self) -> int:
        return len(self._table)


class WorkspacePool:
    """Hands every thread its own lazily created Workspace."""

    def __init__(self) -> None:
        self._local = threading.local()

    def get(self) -> Workspace:
        ws = getattr(self._local, "workspace", None)
        if ws is None:
            ws = Workspace()
            self._local.workspace = ws
        return ws


DEFAULT_POOL = WorkspacePool()


def current_workspace() -> Workspace:
    """Workspace of the calling thread from the shared default pool."""
    return DEFAULT_POOL.get()
