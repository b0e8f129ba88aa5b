from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

"""CompanyRow intermediate model for the CSV importer.

A CompanyRow is a header-indexed, fixed-arity view of one reconciled CSV row,
created before validation so that field access is by attribute instead of by
loose string keys. Values are still raw text at this stage.
"""

__all__ = [
    "REQUIRED_COLUMNS",
    "OPTIONAL_COLUMNS",
    "CompanyRow",
]

REQUIRED_COLUMNS: tuple[str, ...] = (
    "company_name",
    "origin_country",
    "sector",
    "base_price",
    "revenue_2022",
    "revenue_2023",
)
OPTIONAL_COLUMNS: tuple[str, ...] = ("logo_url",)


@dataclass(frozen=True)
class CompanyRow:
    """Raw text fields of one data row, plus its source line number.

    ``line_number`` is 1-based and counts the header as line 1, so the first
    data row is line 2.
    """
    line_number: int
    company_name: str
    origin_country: str
    sector: str
    base_price: str
    revenue_2022: str
    revenue_2023: str
    logo_url: str = ""  # ヘッダに列が無い場合は空文字で補完

    @staticmethod
    def from_fields(headers: Sequence[str], fields: Sequence[str], line_number: int) -> CompanyRow:
        """Zip ``fields`` onto ``headers``.

        Columns outside the known schema are ignored. Headers are expected to
        contain every REQUIRED_COLUMNS name (checked once per file by the reader).

        Raises:
            ValueError: If the field count differs from the header count
        """
        if len(fields) != len(headers):
            raise ValueError(
                f"line {line_number}: expected {len(headers)} fields, got {len(fields)}"
            )
        mapping = dict(zip(headers, fields))
        return CompanyRow(
            line_number=line_number,
            company_name=mapping["company_name"].strip(),
            origin_country=mapping["origin_country"].strip(),
            sector=mapping["sector"].strip(),
            base_price=mapping["base_price"],
            revenue_2022=mapping["revenue_2022"],
            revenue_2023=mapping["revenue_2023"],
            logo_url=mapping.get("logo_url", "").strip(),
        )
