from __future__ import annotations

import pytest

from company_slides.models.row_data import CompanyRow

HEADERS = ["company_name", "origin_country", "sector", "base_price", "revenue_2022", "revenue_2023"]


def test_company_row_from_fields_without_logo_column():
    """logo_url is synthesized as empty when the header lacks it."""
    row = CompanyRow.from_fields(HEADERS, ["Acme", "US", "tech", "1", "2", "3"], 2)
    assert row.line_number == 2
    assert row.company_name == "Acme"
    assert row.base_price == "1"
    assert row.logo_url == ""


def test_company_row_ignores_unknown_columns():
    headers = ["notes"] + HEADERS + ["logo_url"]
    fields = ["ignore me", "Acme", "US", "tech", "1", "2", "3", "https://example.com/a.png"]
    row = CompanyRow.from_fields(headers, fields, 4)
    assert row.company_name == "Acme"
    assert row.logo_url == "https://example.com/a.png"
    assert not hasattr(row, "notes")


def test_company_row_header_order_independent():
    headers = list(reversed(HEADERS))
    row = CompanyRow.from_fields(headers, ["3", "2", "1", "tech", "US", "Acme"], 2)
    assert row.company_name == "Acme"
    assert row.revenue_2023 == "3"


def test_company_row_rejects_wrong_arity():
    with pytest.raises(ValueError):
        CompanyRow.from_fields(HEADERS, ["Acme"], 2)


def test_company_row_immutability():
    row = CompanyRow.from_fields(HEADERS, ["Acme", "US", "tech", "1", "2", "3"], 2)
    with pytest.raises(AttributeError):
        row.company_name = "Other"
