from __future__ import annotations

import pytest

from company_slides.ingest.row_mapper import (
    SKIP_FIELD_COUNT,
    SKIP_INVALID_NUMBER,
    SKIP_MISSING_FIELD,
    normalize_sector,
    round_half_up,
    validate_row,
)
from company_slides.models.company import CompanyRecord
from company_slides.models.import_result import RowSkip

HEADERS = ["company_name", "origin_country", "sector", "base_price", "revenue_2022", "revenue_2023"]
HEADERS_WITH_LOGO = HEADERS + ["logo_url"]


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Defence", "defense"),
        ("DEFENSE", "defense"),
        ("  Healthcare ", "health"),
        ("Technology", "tech"),
        ("financial", "finance"),
        ("Agri", "agriculture"),
        ("Retail", "retail"),
    ],
)
def test_normalize_sector(raw, expected):
    assert normalize_sector(raw) == expected


@pytest.mark.parametrize("value, expected", [(2.5, 3), (2.49, 2), (-2.5, -2), (0.0, 0), (99.5, 100)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


def test_valid_row_maps_to_record():
    fields = ["Acme", "India", "Defence", "1,80,00,000", "1,43,04,572.25", "2,000.5"]
    record = validate_row(fields, HEADERS, 2)
    assert isinstance(record, CompanyRecord)
    assert record.company_name == "Acme"
    assert record.sector == "defense"
    assert record.base_price == 18000000
    assert isinstance(record.base_price, int)
    assert record.revenue_2022 == pytest.approx(14304572.25)
    assert record.revenue_2023 == pytest.approx(2000.5)
    assert record.logo_url is None
    assert record.id is None


def test_base_price_rounded_revenues_keep_decimals():
    record = validate_row(["A", "B", "tech", "10.5", "1.25", "3.75"], HEADERS, 2)
    assert isinstance(record, CompanyRecord)
    assert record.base_price == 11
    assert record.revenue_2022 == 1.25
    assert record.revenue_2023 == 3.75


def test_field_count_mismatch_skips():
    outcome = validate_row(["A", "B"], HEADERS, 5)
    assert outcome == RowSkip(5, SKIP_FIELD_COUNT, "expected 6 fields, got 2")


@pytest.mark.parametrize("blank_index", [0, 1, 2])
def test_empty_required_text_field_skips(blank_index):
    fields = ["Acme", "US", "tech", "1", "2", "3"]
    fields[blank_index] = "  "
    outcome = validate_row(fields, HEADERS, 3)
    assert isinstance(outcome, RowSkip)
    assert outcome.reason == SKIP_MISSING_FIELD
    assert outcome.line_number == 3


@pytest.mark.parametrize(
    "fields",
    [
        ["Acme", "US", "tech", "N/A", "2", "3"],
        ["Acme", "US", "tech", "1", "", "3"],
        ["Acme", "US", "tech", "1", "2", "  "],
        ["Acme", "US", "tech", "1", "2", "3x"],
    ],
)
def test_invalid_numbers_skip(fields):
    outcome = validate_row(fields, HEADERS, 9)
    assert isinstance(outcome, RowSkip)
    assert outcome.reason == SKIP_INVALID_NUMBER
    assert outcome.line_number == 9


def test_logo_url_normalized_when_present():
    fields = ["Acme", "US", "tech", "1", "2", "3", "https://drive.google.com/open?id=abc"]
    record = validate_row(fields, HEADERS_WITH_LOGO, 2)
    assert isinstance(record, CompanyRecord)
    assert record.logo_url == "https://drive.google.com/uc?export=view&id=abc"


def test_blank_logo_url_is_none():
    record = validate_row(["Acme", "US", "tech", "1", "2", "3", "  "], HEADERS_WITH_LOGO, 2)
    assert isinstance(record, CompanyRecord)
    assert record.logo_url is None


def test_text_fields_trimmed():
    record = validate_row([" Acme ", " US ", " Retail ", "1", "2", "3"], HEADERS, 2)
    assert isinstance(record, CompanyRecord)
    assert record.company_name == "Acme"
    assert record.origin_country == "US"
    assert record.sector == "retail"
