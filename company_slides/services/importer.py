from __future__ import annotations

import logging
import time
from collections.abc import Iterator, Sequence
from pathlib import Path

from ..config.loader import DEFAULT_BATCH_SIZE
from ..db.store import CompanyStore, StorageError, StorageNotConfiguredError
from ..ingest.reader import parse_companies, read_csv_text
from ..logging.error_log import ErrorLogBuffer
from ..models.company import CompanyRecord
from ..models.error_record import FILE_LEVEL_ROW, ErrorRecord
from ..models.import_result import BatchStatsAccumulator, ImportResult, ParsedCompanies
from .progress import ProgressTracker

"""CSV import orchestration.

Parses one CSV file and hands the accepted records to the storage
collaborator in fixed-size batches, in file order:

1. Check that storage is configured (once, before any work)
2. Parse the file (fatal file-level errors propagate to the caller)
3. Record every skipped row in the error log
4. Insert batches sequentially; after each committed batch the running
   inserted count is updated
5. On a storage failure stop, keep the committed count and report the error;
   earlier batches are NOT rolled back (no cross-batch transaction)
"""

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "iter_batches",
    "import_companies",
    "import_file",
]


def iter_batches(records: Sequence[CompanyRecord], batch_size: int) -> Iterator[Sequence[CompanyRecord]]:
    """Yield consecutive slices of at most ``batch_size`` records."""
    if batch_size <= 0:
        raise ValueError(f"batch_size must be positive: {batch_size}")
    for start in range(0, len(records), batch_size):
        yield records[start:start + batch_size]


def _log_skips(parsed: ParsedCompanies, file_name: str, error_log: ErrorLogBuffer | None) -> None:
    for skip in parsed.skips:
        logger.debug("line=%d skipped: %s %s", skip.line_number, skip.reason, skip.detail)
        if error_log is not None:
            error_log.append(ErrorRecord.create(file_name, skip.line_number, skip.reason, skip.detail))
    if parsed.skips:
        logger.warning(
            "file=%s skipped %d row(s): %s",
            file_name,
            len(parsed.skips),
            ", ".join(str(n) for n in parsed.skipped[:20]),
        )


def import_companies(
    text: str,
    store: CompanyStore | None,
    *,
    file_name: str = "<upload>",
    batch_size: int = DEFAULT_BATCH_SIZE,
    error_log: ErrorLogBuffer | None = None,
) -> ImportResult:
    """Parse CSV text and insert the accepted companies in batches.

    Args:
        text: Entire decoded CSV content
        store: Storage collaborator; None means storage is not configured
        file_name: Name used in logs and the result
        batch_size: Records per insert_many call
        error_log: Optional buffer receiving skip and storage error records

    Returns:
        ImportResult with the committed count, skipped line numbers and the
        storage error (if a batch failed)

    Raises:
        StorageNotConfiguredError: ``store`` is None
        IngestError: File-level CSV errors (too few lines, missing columns)
        ValueError: ``batch_size`` is not positive
    """
    if batch_size <= 0:
        raise ValueError(f"batch_size must be positive: {batch_size}")
    if store is None:
        raise StorageNotConfiguredError()

    start = time.perf_counter()
    parsed = parse_companies(text)
    _log_skips(parsed, file_name, error_log)

    records = parsed.accepted
    total_batches = (len(records) + batch_size - 1) // batch_size if records else 0
    stats = BatchStatsAccumulator()
    inserted = 0
    committed = 0
    error: str | None = None

    with ProgressTracker(total_batches, description=f"Importing {file_name}") as progress:
        for batch in iter_batches(records, batch_size):
            batch_start = time.perf_counter()
            try:
                count = store.insert_many(batch)
            except StorageError as e:
                error = str(e)
                logger.error(
                    "file=%s batch=%d/%d insert failed after %d committed: %s",
                    file_name,
                    committed + 1,
                    total_batches,
                    inserted,
                    error,
                )
                if error_log is not None:
                    error_log.append(
                        ErrorRecord.create(file_name, FILE_LEVEL_ROW, "DATABASE_INSERT_ERROR", error)
                    )
                break
            stats.add_batch_time(time.perf_counter() - batch_start)
            inserted += count
            committed += 1
            progress.finish_batch(count)
            logger.debug("file=%s batch=%d/%d inserted=%d", file_name, committed, total_batches, inserted)

    _, avg_batch, p95_batch = stats.get_stats()
    return ImportResult(
        file_name=file_name,
        accepted=len(records),
        inserted=inserted,
        skipped=parsed.skipped,
        total_batches=total_batches,
        committed_batches=committed,
        elapsed_seconds=time.perf_counter() - start,
        avg_batch_seconds=avg_batch,
        p95_batch_seconds=p95_batch,
        error=error,
    )


def import_file(
    path: Path,
    store: CompanyStore | None,
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
    error_log: ErrorLogBuffer | None = None,
) -> ImportResult:
    """Read ``path`` as UTF-8 (BOM tolerated) and import it.

    Raises:
        CsvFormatError: The file is not valid UTF-8
    """
    text = read_csv_text(path)
    return import_companies(
        text, store, file_name=path.name, batch_size=batch_size, error_log=error_log
    )
