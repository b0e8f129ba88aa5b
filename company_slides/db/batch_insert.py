from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from psycopg2.extras import execute_values

"""DB batch insert.

One call inserts one batch of rows with ``psycopg2.extras.execute_values``.
Driver errors are wrapped in BatchInsertError so that the storage layer can
report the database message without depending on psycopg2 exception types.
"""

__all__ = [
    "BatchInsertError",
    "BatchMetrics",
    "InsertResult",
    "batch_insert",
]


class BatchInsertError(Exception):
    pass


@dataclass(frozen=True)
class BatchMetrics:
    """Timing of a single batch insert."""
    batch_size: int  # Number of rows in this batch
    elapsed_seconds: float  # Time spent on execute_values call
    start_time: float  # time.time()
    end_time: float  # time.time()


@dataclass(frozen=True)
class InsertResult:
    inserted_rows: int
    returned_values: list[tuple[Any, ...]] | None = None


def batch_insert(
    cursor: Any,
    table: str,
    columns: Sequence[str],
    rows: Iterable[Sequence[Any]],
    returning: bool = False,
    page_size: int = 100,
    metrics_callback: Callable[[BatchMetrics], None] | None = None,
) -> InsertResult:
    """Perform a batched INSERT using psycopg2.extras.execute_values.

    Parameters
    ----------
    cursor: psycopg2 cursor
    table: 対象テーブル名 (サニタイズ済み想定)
    columns: 挿入列 (id 除外後)
    rows: 行シーケンス
    returning: True の場合 RETURNING id を付与し採番済み id を返す
    page_size: execute_values の page_size
    metrics_callback: Optional callback receiving BatchMetrics.
        Not invoked when ``rows`` is empty (the function returns early).
    """
    rows_list = list(rows)
    if not rows_list:
        return InsertResult(inserted_rows=0, returned_values=[] if returning else None)

    cols_sql = ",".join(f'"{c}"' for c in columns)
    sql = f"INSERT INTO {table} ({cols_sql}) VALUES %s"
    if returning:
        sql += " RETURNING id"

    start_time = time.time()
    returned = None
    try:
        returned = execute_values(cursor, sql, rows_list, page_size=page_size, fetch=returning)
    except Exception as e:
        raise BatchInsertError(str(e)) from e
    finally:
        end_time = time.time()
        if metrics_callback is not None:
            metrics_callback(
                BatchMetrics(
                    batch_size=len(rows_list),
                    elapsed_seconds=end_time - start_time,
                    start_time=start_time,
                    end_time=end_time,
                )
            )

    return InsertResult(
        inserted_rows=len(rows_list),
        returned_values=list(returned) if returning and returned is not None else None,
    )
