from __future__ import annotations

import re

from company_slides.models.import_result import ImportResult
from company_slides.services.summary import render_summary_line

"""SUMMARY 行フォーマット契約テスト.
SUMMARY file=<name> rows=<n> inserted=<n> skipped=<n> batches=<c>/<t> elapsed_sec=<s> status=<ok|failed>
"""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+file=(\S+)\s+rows=([0-9]+)\s+inserted=([0-9]+)\s+skipped=([0-9]+)\s+"
    r"batches=([0-9]+)/([0-9]+)\s+elapsed_sec=([0-9]+\.?[0-9]*)\s+status=(ok|failed)$"
)


def test_summary_pattern_example_line():
    line = (
        "SUMMARY file=companies.csv rows=250 inserted=250 skipped=2 "
        "batches=3/3 elapsed_sec=0.84 status=ok"
    )
    m = SUMMARY_PATTERN.match(line)
    assert m, "SUMMARY line should match contract regex"


def test_rendered_line_matches_contract():
    result = ImportResult(
        file_name="companies.csv",
        accepted=3,
        inserted=0,
        skipped=[],
        total_batches=1,
        committed_batches=0,
        elapsed_seconds=0.000042,
        error="Error inserting data: boom",
    )
    line = render_summary_line(result)
    m = SUMMARY_PATTERN.match(line)
    assert m, line
    assert m.group(8) == "failed"
    # no scientific notation
    assert "e-" not in line


def test_no_extra_fields():
    result = ImportResult(file_name="a.csv", accepted=0, inserted=0, skipped=[])
    keys = [token.split("=")[0] for token in render_summary_line(result).split()[1:]]
    assert keys == ["file", "rows", "inserted", "skipped", "batches", "elapsed_sec", "status"]
