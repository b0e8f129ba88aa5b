from __future__ import annotations

import re
from collections.abc import Sequence

from .numeric import NUMERIC_COLUMNS

"""Column reconciliation for over-split rows.

An unquoted number such as ``1,80,00,000`` is split by the tokenizer into
several fragments, leaving the row with more fields than the header. The
reconciler merges the surplus fragments back into the numeric columns.

The merge is greedy and position-local: the surplus is spread evenly across
the numeric columns (earlier columns receive the remainder) and each numeric
column absorbs its share of the fields that directly follow it. It does not
handle several independently misaligned columns, and an unquoted comma in a
text column is reconciled as if it came from a number (best effort only).
"""

__all__ = [
    "numeric_column_indices",
    "fragment_allotment",
    "reconcile_fields",
]

_NUMERIC_FRAGMENT_RE = re.compile(r"^[\d.]+$")


def numeric_column_indices(headers: Sequence[str]) -> list[int]:
    """Return header positions of the numeric columns, in header order."""
    return [idx for idx, name in enumerate(headers) if name in NUMERIC_COLUMNS]


def fragment_allotment(extra: int, numeric_count: int) -> list[int]:
    """Distribute ``extra`` fragments across ``numeric_count`` columns.

    >>> fragment_allotment(6, 3)
    [2, 2, 2]
    >>> fragment_allotment(4, 3)
    [2, 1, 1]
    """
    if numeric_count <= 0:
        return []
    per_column, remainder = divmod(extra, numeric_count)
    return [per_column + (1 if pos < remainder else 0) for pos in range(numeric_count)]


def _looks_numeric(fragment: str) -> bool:
    return fragment == "" or bool(_NUMERIC_FRAGMENT_RE.match(fragment))


def reconcile_fields(fields: Sequence[str], headers: Sequence[str]) -> list[str] | None:
    """Merge surplus fragments into numeric columns.

    Args:
        fields: Tokenized raw fields (longer than ``headers``)
        headers: Normalized header names

    Returns:
        A new list with exactly ``len(headers)`` entries, or None when the row
        cannot be reconciled (no numeric columns, or fragments left over after
        the walk). Callers treat None as a malformed row.
    """
    if len(fields) <= len(headers):
        return None

    numeric_idx = numeric_column_indices(headers)
    if not numeric_idx:
        return None
    allotment = dict(zip(numeric_idx, fragment_allotment(len(fields) - len(headers), len(numeric_idx))))

    rebuilt: list[str] = []
    pos = 0
    for h_idx in range(len(headers)):
        if pos >= len(fields):
            rebuilt.append("")
            continue

        if h_idx not in allotment:
            rebuilt.append(fields[pos])
            pos += 1
            continue

        merged = fields[pos]
        pos += 1
        for _ in range(allotment[h_idx]):
            if pos >= len(fields):
                break
            fragment = fields[pos]
            if not _looks_numeric(fragment):
                # 残りの割当は破棄 (他列へ再配分しない)
                break
            if "." not in fragment or "." not in merged:
                merged += fragment
            pos += 1
        rebuilt.append(merged)

    if pos != len(fields):
        # unconsumed fragments would shift text into the wrong columns
        return None
    return rebuilt
