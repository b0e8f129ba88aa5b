from __future__ import annotations

from company_slides.ingest.reconcile import fragment_allotment, numeric_column_indices, reconcile_fields
from company_slides.ingest.row_mapper import validate_row
from company_slides.models.company import CompanyRecord

HEADERS = ["company_name", "origin_country", "sector", "base_price", "revenue_2022", "revenue_2023"]


def test_numeric_column_indices_in_header_order():
    headers = ["base_price", "company_name", "revenue_2023", "sector", "revenue_2022"]
    assert numeric_column_indices(headers) == [0, 2, 4]


def test_fragment_allotment_even_and_remainder():
    assert fragment_allotment(6, 3) == [2, 2, 2]
    assert fragment_allotment(7, 3) == [3, 2, 2]
    assert fragment_allotment(1, 3) == [1, 0, 0]
    assert fragment_allotment(3, 0) == []


def test_reconcile_each_number_split_into_its_share():
    fields = ["Acme", "US", "tech", "1", "80", "00", "000", "2", "50", "000", "3", "00", "000"]
    rebuilt = reconcile_fields(fields, HEADERS)
    assert rebuilt == ["Acme", "US", "tech", "18000000", "250000", "300000"]


def test_reconcile_single_oversplit_number_yields_header_length():
    # one grouped number over-split; even distribution decides where fragments go
    fields = ["Acme", "US", "tech", "1", "80", "00", "000", "5", "0", "2", "6", "0"]
    rebuilt = reconcile_fields(fields, HEADERS)
    assert rebuilt is not None
    assert len(rebuilt) == len(HEADERS)
    assert rebuilt == ["Acme", "US", "tech", "18000", "00050", "260"]


def test_reconcile_stops_merging_at_non_numeric_fragment():
    fields = ["Acme", "US", "tech", "1", "abc", "def", "5", "6"]
    assert reconcile_fields(fields, HEADERS) is None


def test_reconcile_failure_leads_to_skip():
    fields = ["Acme", "US", "tech", "1", "abc", "def", "5", "6"]
    rebuilt = reconcile_fields(fields, HEADERS)
    outcome = validate_row(rebuilt if rebuilt is not None else fields, HEADERS, 7)
    assert not isinstance(outcome, CompanyRecord)
    assert outcome.line_number == 7


def test_reconcile_second_decimal_fragment_is_dropped():
    fields = ["A", "B", "C", "1.5", ".25", "3", "4"]
    assert reconcile_fields(fields, HEADERS) == ["A", "B", "C", "1.5", "3", "4"]


def test_reconcile_merges_decimal_fragment_once():
    fields = ["A", "B", "C", "1", ".5", "3", "4"]
    assert reconcile_fields(fields, HEADERS) == ["A", "B", "C", "1.5", "3", "4"]


def test_reconcile_empty_fragment_counts_as_numeric():
    fields = ["A", "B", "C", "12", "", "3", "4"]
    assert reconcile_fields(fields, HEADERS) == ["A", "B", "C", "12", "3", "4"]


def test_reconcile_not_applied_when_not_overlong():
    assert reconcile_fields(["A", "B", "C", "1", "2", "3"], HEADERS) is None


def test_reconcile_without_numeric_columns_fails():
    assert reconcile_fields(["a", "b", "c"], ["x", "y"]) is None


def test_reconcile_with_trailing_optional_logo_column():
    headers = HEADERS + ["logo_url"]
    fields = ["Acme", "US", "tech", "1", "000", "2", "3", "https://example.com/l.png"]
    assert reconcile_fields(fields, headers) == [
        "Acme", "US", "tech", "1000", "2", "3", "https://example.com/l.png"
    ]
