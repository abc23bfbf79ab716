# levenshtein.py
# Exact typo-weighted edit distance between an intended ("meant") string and
# what was actually typed. Four operations:
#   delete    - skipped a character of what we meant to type
#   insert    - pressed an extra key (neighbouring key / double press / shift slip)
#   replace   - pressed the wrong key for the intended character
#   swap      - typed two adjacent characters in the wrong order
# The cost helpers here are shared with the incremental rows of fuzzy_search.

from __future__ import annotations

from typing import MutableSequence, Optional, Sequence, Union

from typo_lookup.core.protocols import CostModel
from typo_lookup.core.workspace import Workspace, current_workspace


def replace_cost(cost: CostModel, meant: Sequence[str], i: int,
                 typed: Sequence[str], j: int, lookahead: bool) -> float:
    """Cost of typing typed[j] while meaning meant[i]."""
    cm = meant[i]
    ct = typed[j]
    cn = meant[i + 1] if lookahead and i + 1 < len(meant) else cm
    cp = typed[j - 1] if j > 0 else cn
    return (cost.replace_shift_cost(cp.isupper(), ct.isupper(), cm.isupper(), cn.isupper())
            + cost.char_distance(cm, ct))


def replace_cost_bound(cost: CostModel, meant: Sequence[str], i: int,
                       typed: Sequence[str], j: int) -> float:
    """
    Lower bound on replace_cost(..., lookahead=True) while the character after
    meant[i] is still unknown: the cheaper of both shift states for it.
    """
    cm = meant[i]
    ct = typed[j]
    shift = min(cost.replace_shift_cost(typed[j - 1].isupper() if j > 0 else nu,
                                        ct.isupper(), cm.isupper(), nu)
                for nu in (False, True))
    return shift + cost.char_distance(cm, ct)


def swap_cost(cost: CostModel, meant: MutableSequence[str], i: int,
              typed: Sequence[str], j: int) -> float:
    """
    Cost of typing meant[i], meant[i+1] as typed[j], typed[j+1] in swapped order.
    The pair is swapped in place while the replace costs are evaluated against
    their new neighbours and always swapped back before returning.
    """
    meant[i], meant[i + 1] = meant[i + 1], meant[i]
    try:
        return (cost.swap_cost_const()
                + replace_cost(cost, meant, i, typed, j, True)
                + replace_cost(cost, meant, i + 1, typed, j + 1, False))
    finally:
        meant[i], meant[i + 1] = meant[i + 1], meant[i]


def insert_cost(cost: CostModel, meant: Sequence[str], i: int,
                typed: Sequence[str], j: int) -> float:
    """Cost of accidentally typing typed[j] while about to type meant[i]."""
    ca = meant[i]  # the key we mean to press
    ci = typed[j]  # the key we pressed by accident
    if j == 0:
        return cost.double_type_cost(max(1.0, cost.char_distance(ca, ci)))
    cb = typed[j - 1]  # the key we just pressed
    return (cost.insert_shift_cost(cb.isupper(), ci.isupper(), ca.isupper())
            + cost.double_type_cost(min(max(cost.char_distance(cb, ci), 1.0),
                                        max(1.0, cost.char_distance(ca, ci)))))


def levenshtein_distance(cost: CostModel,
                         meant: Union[str, MutableSequence[str]],
                         typed: Sequence[str],
                         meant_length: Optional[int] = None,
                         workspace: Optional[Workspace] = None) -> float:
    """
    Full DP distance from `meant` (first `meant_length` chars) to `typed`.

    d(i, j) is the cost of having produced typed[:j] while meaning meant[:i].
    The table lives in the workspace's grow-only buffer; a str `meant` is
    copied into a list since swaps need a mutable buffer.
    """
    if isinstance(meant, str):
        meant = list(meant)
    m = len(meant) if meant_length is None else meant_length
    n = len(typed)
    cols = n + 1
    ws = workspace if workspace is not None else current_workspace()
    d = ws.table((m + 1) * cols)

    delete = cost.delete_cost_const()

    # first column: dropping characters of meant
    for i in range(m + 1):
        d[i * cols] = i * delete

    # first row: everything typed was inserted
    for j in range(1, n + 1):
        if m:
            d[j] = d[j - 1] + insert_cost(cost, meant, 0, typed, j - 1)
        else:
            # nothing meant: each typed key stands in for the intended one
            d[j] = d[j - 1] + insert_cost(cost, typed, j - 1, typed, j - 1)

    for i in range(1, m + 1):
        row = i * cols
        prev = row - cols
        lookahead = m > i
        for j in range(1, n + 1):
            dele = d[prev + j] + delete
            ins = d[row + j - 1] + insert_cost(cost, meant, i - 1, typed, j - 1)
            rep = d[prev + j - 1] + replace_cost(cost, meant, i - 1, typed, j - 1, lookahead)
            best = min(dele, ins, rep)
            if i > 1 and j > 1:
                swp = d[prev - cols + j - 2] + swap_cost(cost, meant, i - 2, typed, j - 2)
                if swp < best:
                    best = swp
            d[row + j] = best

    return float(d[m * cols + n])


def distance(cost: CostModel, meant: str, typed: str) -> float:
    """Convenience wrapper for standalone comparisons of two strings."""
    return levenshtein_distance(cost, meant, typed)
