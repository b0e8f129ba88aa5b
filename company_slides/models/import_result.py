from __future__ import annotations

import statistics
from dataclasses import dataclass, field

from .company import CompanyRecord

"""Result models for CSV parsing and import.

ParsedCompanies is the outcome of parsing one file (no storage involved).
ImportResult adds the storage side: how many records were committed, in how
many batches, and the storage error that stopped the run, if any.
"""

__all__ = [
    "RowSkip",
    "ParsedCompanies",
    "ImportResult",
    "BatchStatsAccumulator",
]


@dataclass(frozen=True)
class RowSkip:
    """A rejected data row (non-fatal)."""
    line_number: int  # 1-based, header = 1
    reason: str  # UPPER_SNAKE error type
    detail: str = ""


@dataclass(frozen=True)
class ParsedCompanies:
    """Accepted records and skipped rows of one CSV file."""
    headers: list[str]
    accepted: list[CompanyRecord]
    skips: list[RowSkip] = field(default_factory=list)

    @property
    def skipped(self) -> list[int]:
        """Skipped source line numbers, in file order."""
        return [s.line_number for s in self.skips]


@dataclass(frozen=True)
class ImportResult:
    """Outcome of importing one CSV file into storage.

    ``inserted`` is the number of records committed before the run ended; on a
    storage failure earlier batches stay committed and ``error`` holds the
    storage message.
    """
    file_name: str
    accepted: int  # 検証通過行数
    inserted: int  # コミット済み行数
    skipped: list[int]
    total_batches: int = 0
    committed_batches: int = 0
    elapsed_seconds: float = 0.0
    avg_batch_seconds: float = 0.0
    p95_batch_seconds: float = 0.0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BatchStatsAccumulator:
    """Collects per-batch insert timings and summarizes them."""

    def __init__(self) -> None:
        self.batch_times: list[float] = []

    def add_batch_time(self, elapsed_seconds: float) -> None:
        self.batch_times.append(elapsed_seconds)

    def get_stats(self) -> tuple[int, float, float]:
        """Calculate batch statistics.

        Returns:
            tuple: (total_batches, avg_batch_seconds, p95_batch_seconds)
        """
        if not self.batch_times:
            return (0, 0.0, 0.0)

        total_batches = len(self.batch_times)
        avg_batch_seconds = statistics.mean(self.batch_times)

        if total_batches == 1:
            p95_batch_seconds = self.batch_times[0]
        else:
            p95_batch_seconds = statistics.quantiles(
                self.batch_times, n=20, method='inclusive'
            )[18]  # 95th percentile (19th out of 20 quantiles, 0-indexed)

        return (total_batches, avg_batch_seconds, p95_batch_seconds)
