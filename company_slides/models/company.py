from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from typing import Any

"""CompanyRecord domain model.

A CompanyRecord is the validated, typed entity that is persisted by the
storage layer and rendered on the slide. The importer never sets ``id``; it
is assigned by the database on insert.
"""

__all__ = [
    "CompanyRecord",
    "INSERT_COLUMNS",
]

# Insert column order (id は DB 側で採番)
INSERT_COLUMNS: tuple[str, ...] = (
    "company_name",
    "origin_country",
    "sector",
    "base_price",
    "revenue_2022",
    "revenue_2023",
    "logo_url",
)


def _coerce_number(value: Any) -> float:
    """Lenient numeric coercion for values read back from storage (bad -> 0)."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


@dataclass(frozen=True)
class CompanyRecord:
    """One company's display/search data.

    Attributes:
        company_name: Non-empty trimmed name
        origin_country: Non-empty trimmed country
        sector: Canonical lowercase sector (see ingest.row_mapper.SECTOR_SYNONYMS)
        base_price: Integer base price
        revenue_2022: Unrounded revenue for the first year
        revenue_2023: Unrounded revenue for the second year
        logo_url: Direct image URL, or None for "NO LOGO"
        id: Storage-assigned identifier (None until persisted)
    """
    company_name: str
    origin_country: str
    sector: str
    base_price: int
    revenue_2022: float
    revenue_2023: float
    logo_url: str | None = None
    id: Any = None

    def to_insert_dict(self) -> dict[str, Any]:
        """Column -> value mapping for insert, without ``id``."""
        data = asdict(self)
        data.pop("id")
        return data

    def to_insert_row(self) -> tuple[Any, ...]:
        """Values ordered as INSERT_COLUMNS."""
        data = self.to_insert_dict()
        return tuple(data[col] for col in INSERT_COLUMNS)

    @staticmethod
    def from_storage(row: Mapping[str, Any]) -> CompanyRecord:
        """Build a record from a storage row.

        Numeric columns may come back as Decimal, str or NULL depending on the
        driver; anything unparseable is shown as 0 rather than failing the view.
        """
        logo = row.get("logo_url")
        return CompanyRecord(
            company_name=str(row.get("company_name") or ""),
            origin_country=str(row.get("origin_country") or ""),
            sector=str(row.get("sector") or ""),
            base_price=int(round(_coerce_number(row.get("base_price")))),
            revenue_2022=_coerce_number(row.get("revenue_2022")),
            revenue_2023=_coerce_number(row.get("revenue_2023")),
            logo_url=str(logo) if logo else None,
            id=row.get("id"),
        )
