from __future__ import annotations

import logging
from pathlib import Path

from ..models.company import CompanyRecord
from ..models.import_result import ParsedCompanies, RowSkip
from ..models.row_data import REQUIRED_COLUMNS
from .reconcile import reconcile_fields
from .row_mapper import validate_row
from .tokenizer import tokenize_line

"""Whole-file CSV parsing for company imports.

Steps:
1. Split into lines, trim, drop empty lines
2. First remaining line is the header (case/quote insensitive)
3. Validate the required column subset (file-level error otherwise)
4. Tokenize -> reconcile (if over-long) -> validate every data line

Line numbers reported for skipped rows are 1-based positions among the
non-empty lines, header = 1.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "IngestError",
    "CsvFormatError",
    "MissingColumnsError",
    "parse_header",
    "split_lines",
    "is_blank_row",
    "parse_companies",
    "read_csv_text",
]


class IngestError(Exception):
    """Base class for fatal (file-level) CSV errors."""


class CsvFormatError(IngestError):
    """Raised when the file lacks a header row or any data row."""


class MissingColumnsError(IngestError):
    """Raised when required columns are missing from the header."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Missing required columns: {', '.join(missing)}")


def split_lines(text: str) -> list[str]:
    stripped = (line.strip() for line in text.split("\n"))
    return [line for line in stripped if line]


def parse_header(line: str) -> list[str]:
    """Tokenize the header line, lowercase and strip wrapping quotes."""
    return [name.lower().strip('"').strip() for name in tokenize_line(line)]


def is_blank_row(line: str) -> bool:
    """True when every comma-separated value of ``line`` is blank."""
    return all(not value.strip() for value in line.split(","))


def parse_companies(text: str) -> ParsedCompanies:
    """Parse CSV text into accepted CompanyRecords and skipped line numbers.

    Args:
        text: Entire decoded file content

    Returns:
        ParsedCompanies with accepted records (file order) and skips

    Raises:
        CsvFormatError: Fewer than 2 non-empty lines
        MissingColumnsError: Required columns absent from the header
    """
    lines = split_lines(text)
    if len(lines) < 2:
        raise CsvFormatError("CSV file must have at least a header row and one data row")

    headers = parse_header(lines[0])
    missing = [col for col in REQUIRED_COLUMNS if col not in headers]
    if missing:
        raise MissingColumnsError(missing)

    accepted: list[CompanyRecord] = []
    skips: list[RowSkip] = []
    reconciled_rows = 0

    for idx in range(1, len(lines)):
        line = lines[idx]
        if is_blank_row(line):
            continue
        line_number = idx + 1

        fields = tokenize_line(line)
        if len(fields) > len(headers):
            rebuilt = reconcile_fields(fields, headers)
            if rebuilt is not None:
                logger.debug(
                    "line=%d reconciled %d fields -> %d", line_number, len(fields), len(rebuilt)
                )
                fields = rebuilt
                reconciled_rows += 1

        outcome = validate_row(fields, headers, line_number)
        if isinstance(outcome, RowSkip):
            logger.debug("line=%d skipped reason=%s %s", line_number, outcome.reason, outcome.detail)
            skips.append(outcome)
        else:
            accepted.append(outcome)

    logger.debug(
        "parsed lines=%d accepted=%d skipped=%d reconciled=%d",
        len(lines) - 1,
        len(accepted),
        len(skips),
        reconciled_rows,
    )
    return ParsedCompanies(headers=headers, accepted=accepted, skips=skips)


def read_csv_text(path: Path) -> str:
    """Read ``path`` as UTF-8 (a leading BOM is dropped).

    Raises:
        CsvFormatError: The file is not valid UTF-8
    """
    try:
        return path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise CsvFormatError(
            f"file is not valid UTF-8: byte 0x{e.object[e.start]:02x} at position {e.start}"
        ) from e
