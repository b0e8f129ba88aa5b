from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any, Protocol

import psycopg2
import psycopg2.extras

from ..models.company import INSERT_COLUMNS, CompanyRecord
from .batch_insert import BatchInsertError, BatchMetrics, batch_insert

"""Storage collaborator for company records.

CompanyStore is the interface the importer and the search service depend on:

- find_one(query): first record whose company_name contains ``query``
  (case-insensitive), or None
- insert_many(records): insert one batch, return the inserted count, raise
  StorageError on failure

PostgresCompanyStore commits after every successful batch, so batches that
were inserted before a failure stay committed. InMemoryCompanyStore backs
mock mode (DISABLE_DB_CONNECT=1) and the tests.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_TABLE",
    "StorageError",
    "StorageNotConfiguredError",
    "CompanyStore",
    "PostgresCompanyStore",
    "InMemoryCompanyStore",
    "escape_like",
]

DEFAULT_TABLE = "companies"


class StorageError(Exception):
    """Query or insert failure reported by the storage backend."""


class StorageNotConfiguredError(StorageError):
    """No database connection settings were provided."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message
            or "Database is not configured. Please set DATABASE_URL (or PGHOST/PGDATABASE) "
            "in your environment or .env file."
        )


class CompanyStore(Protocol):
    def find_one(self, query: str) -> CompanyRecord | None: ...

    def insert_many(self, records: Sequence[CompanyRecord]) -> int: ...


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so ``text`` matches literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class PostgresCompanyStore:
    """CompanyStore backed by a psycopg2 connection."""

    def __init__(
        self,
        conn: Any,
        table: str = DEFAULT_TABLE,
        metrics_callback: Callable[[BatchMetrics], None] | None = None,
    ) -> None:
        self.conn = conn
        self.table = table
        self.metrics_callback = metrics_callback

    def _rollback(self) -> None:
        """Roll back the open transaction; a dead connection is only logged."""
        try:
            self.conn.rollback()
        except psycopg2.Error as e:
            logger.warning("rollback failed (connection lost?): %s", str(e).strip())

    def find_one(self, query: str) -> CompanyRecord | None:
        sql = f"SELECT * FROM {self.table} WHERE company_name ILIKE %s LIMIT 1"
        pattern = f"%{escape_like(query.strip())}%"
        try:
            with self.conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
                cur.execute(sql, (pattern,))
                row = cur.fetchone()
        except psycopg2.Error as e:
            self._rollback()
            raise StorageError(str(e).strip()) from e
        if row is None:
            return None
        return CompanyRecord.from_storage(row)

    def insert_many(self, records: Sequence[CompanyRecord]) -> int:
        if not records:
            return 0
        try:
            with self.conn.cursor() as cur:
                result = batch_insert(
                    cur,
                    table=self.table,
                    columns=INSERT_COLUMNS,
                    rows=[r.to_insert_row() for r in records],
                    page_size=len(records),
                    metrics_callback=self.metrics_callback,
                )
            self.conn.commit()
        except BatchInsertError as e:
            self._rollback()
            raise StorageError(f"Error inserting data: {e}") from e
        except psycopg2.Error as e:
            # commit() failures and cursor errors on a dropped connection land here
            self._rollback()
            raise StorageError(f"Error inserting data: {str(e).strip()}") from e
        logger.debug("table=%s inserted_rows=%d", self.table, result.inserted_rows)
        return result.inserted_rows


class InMemoryCompanyStore:
    """List-backed CompanyStore (mock mode).

    ``fail_on_batch`` makes the n-th insert_many call (1-based) raise
    StorageError, which lets callers exercise partial-failure handling.
    """

    def __init__(
        self,
        records: Sequence[CompanyRecord] | None = None,
        fail_on_batch: int | None = None,
    ) -> None:
        self.records: list[CompanyRecord] = []
        self.batches: list[int] = []
        self.fail_on_batch = fail_on_batch
        self._next_id = 1
        for record in records or []:
            self._store(record)

    def _store(self, record: CompanyRecord) -> None:
        data = record.to_insert_dict()
        self.records.append(CompanyRecord(**data, id=self._next_id))
        self._next_id += 1

    def find_one(self, query: str) -> CompanyRecord | None:
        needle = query.strip().casefold()
        for record in self.records:
            if needle in record.company_name.casefold():
                return record
        return None

    def insert_many(self, records: Sequence[CompanyRecord]) -> int:
        if self.fail_on_batch is not None and len(self.batches) + 1 == self.fail_on_batch:
            raise StorageError("Error inserting data: simulated failure")
        for record in records:
            self._store(record)
        self.batches.append(len(records))
        return len(records)
