"""Domain models for the company import / slide application."""

from .company import INSERT_COLUMNS, CompanyRecord
from .error_record import ErrorRecord
from .import_result import BatchStatsAccumulator, ImportResult, ParsedCompanies, RowSkip
from .row_data import OPTIONAL_COLUMNS, REQUIRED_COLUMNS, CompanyRow

__all__ = [
    # Entities
    "CompanyRecord",
    "CompanyRow",
    "INSERT_COLUMNS",
    "OPTIONAL_COLUMNS",
    "REQUIRED_COLUMNS",
    # Processing models
    "BatchStatsAccumulator",
    "ErrorRecord",
    "ImportResult",
    "ParsedCompanies",
    "RowSkip",
]
