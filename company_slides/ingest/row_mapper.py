from __future__ import annotations

import math
from collections.abc import Sequence

from ..links import normalize_drive_link
from ..models.company import CompanyRecord
from ..models.import_result import RowSkip
from ..models.row_data import CompanyRow
from .numeric import parse_number

"""Row validation & mapping.

Turns one reconciled row into a CompanyRecord or a RowSkip. Every rejection
is returned as a value; nothing raised here escapes to the caller.
"""

__all__ = [
    "SECTOR_SYNONYMS",
    "SKIP_FIELD_COUNT",
    "SKIP_MISSING_FIELD",
    "SKIP_INVALID_NUMBER",
    "normalize_sector",
    "round_half_up",
    "validate_row",
]

SKIP_FIELD_COUNT = "FIELD_COUNT_MISMATCH"
SKIP_MISSING_FIELD = "MISSING_REQUIRED_FIELD"
SKIP_INVALID_NUMBER = "INVALID_NUMBER"

SECTOR_SYNONYMS: dict[str, str] = {
    "defence": "defense",
    "defense": "defense",
    "tech": "tech",
    "technology": "tech",
    "health": "health",
    "healthcare": "health",
    "finance": "finance",
    "financial": "finance",
    "agriculture": "agriculture",
    "agri": "agriculture",
}


def normalize_sector(value: str) -> str:
    """Lowercase/trim and map through SECTOR_SYNONYMS (unknown -> passthrough)."""
    key = value.strip().lower()
    return SECTOR_SYNONYMS.get(key, key)


def round_half_up(value: float) -> int:
    """Round to nearest integer with .5 going up (builtin round() is banker's)."""
    return int(math.floor(value + 0.5))


def validate_row(
    fields: Sequence[str], headers: Sequence[str], line_number: int
) -> CompanyRecord | RowSkip:
    """Validate one row and map it to a CompanyRecord.

    Args:
        fields: Tokenized (and possibly reconciled) fields
        headers: Normalized header names of the file
        line_number: 1-based source line number (header = 1)

    Returns:
        CompanyRecord with ``id=None`` on success, otherwise RowSkip carrying
        ``line_number`` and the reason code.
    """
    if len(fields) != len(headers):
        return RowSkip(
            line_number,
            SKIP_FIELD_COUNT,
            f"expected {len(headers)} fields, got {len(fields)}",
        )

    row = CompanyRow.from_fields(headers, fields, line_number)

    missing = [
        name
        for name in ("company_name", "origin_country", "sector")
        if not getattr(row, name)
    ]
    if missing:
        return RowSkip(line_number, SKIP_MISSING_FIELD, f"empty: {', '.join(missing)}")

    base_price = parse_number(row.base_price)
    revenue_2022 = parse_number(row.revenue_2022)
    revenue_2023 = parse_number(row.revenue_2023)
    if base_price is None or revenue_2022 is None or revenue_2023 is None:
        return RowSkip(
            line_number,
            SKIP_INVALID_NUMBER,
            f"base_price={row.base_price!r} revenue_2022={row.revenue_2022!r} "
            f"revenue_2023={row.revenue_2023!r}",
        )

    return CompanyRecord(
        company_name=row.company_name,
        origin_country=row.origin_country,
        sector=normalize_sector(row.sector),
        base_price=round_half_up(base_price),
        revenue_2022=revenue_2022,
        revenue_2023=revenue_2023,
        logo_url=normalize_drive_link(row.logo_url) if row.logo_url else None,
    )
