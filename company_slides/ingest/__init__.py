"""CSV ingestion pipeline: tokenize -> reconcile -> validate."""

from .numeric import clean_number, parse_number
from .reader import CsvFormatError, IngestError, MissingColumnsError, parse_companies
from .reconcile import reconcile_fields
from .row_mapper import normalize_sector, validate_row
from .tokenizer import tokenize_line

__all__ = [
    "CsvFormatError",
    "IngestError",
    "MissingColumnsError",
    "clean_number",
    "normalize_sector",
    "parse_companies",
    "parse_number",
    "reconcile_fields",
    "tokenize_line",
    "validate_row",
]
