from __future__ import annotations

import math
import re

"""Numeric field cleanup.

Grouping separators are removed indiscriminately so that both thousands
grouping ("18,000,000") and Indian lakh/crore grouping ("1,80,00,000") parse
to the same magnitude.
"""

__all__ = [
    "NUMERIC_COLUMNS",
    "clean_number",
    "parse_number",
]

# 数値列 (header order はファイル側で決まる)
NUMERIC_COLUMNS: tuple[str, ...] = ("base_price", "revenue_2022", "revenue_2023")

_STRIP_RE = re.compile(r"[,\s]")


def clean_number(value: str | None) -> str:
    """Remove every comma and whitespace character from ``value``.

    An empty string means "missing", never zero.
    """
    if not value:
        return ""
    return _STRIP_RE.sub("", value)


def parse_number(value: str | None) -> float | None:
    """Clean and parse a numeric field; None when missing or unparseable."""
    cleaned = clean_number(value)
    # float() accepts "1_000"; underscores are not digit grouping here
    if not cleaned or "_" in cleaned:
        return None
    try:
        number = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number
