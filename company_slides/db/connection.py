from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import psycopg2

from ..config.loader import DatabaseConfig

"""PostgreSQL connection resolution.

接続情報の解決優先順位 (.env を最優先):
    1. DATABASE_URL / PGDSN (DSN 全体をそのまま使用)
    2. 個別 PGHOST / PGPORT / PGUSER / PGPASSWORD / PGDATABASE
    3. config の database セクション (不足分のフォールバック)

When none of DSN / host / database is given anywhere, storage counts as
"not configured" and resolve_dsn returns None.
"""

__all__ = [
    "resolve_dsn",
    "db_connection",
]


def resolve_dsn(db_cfg: DatabaseConfig | None) -> str | None:
    """Build a libpq DSN from the environment and ``db_cfg``; None if unconfigured."""
    dsn = os.getenv("DATABASE_URL") or os.getenv("PGDSN") or (db_cfg.dsn if db_cfg else None)
    if dsn:
        return dsn

    cfg_host = db_cfg.host if db_cfg else None
    cfg_database = db_cfg.database if db_cfg else None
    if not (os.getenv("PGHOST") or cfg_host or os.getenv("PGDATABASE") or cfg_database):
        return None

    host = os.getenv("PGHOST", cfg_host or "localhost")
    port = os.getenv("PGPORT", str(db_cfg.port) if db_cfg and db_cfg.port else "5432")
    user = os.getenv("PGUSER", (db_cfg.user if db_cfg else None) or "postgres")
    password = os.getenv("PGPASSWORD", (db_cfg.password if db_cfg else None) or "")
    database = os.getenv("PGDATABASE", cfg_database or "postgres")
    dsn = f"host={host} port={port} user={user} dbname={database}"
    if password:
        dsn += f" password={password}"
    return dsn


@contextmanager
def db_connection(dsn: str) -> Iterator[Any]:  # pragma: no cover (thin wrapper; tested via integration)
    """Open a psycopg2 connection; commit boundaries are owned by the store."""
    conn = psycopg2.connect(dsn)
    conn.autocommit = False
    try:
        yield conn
    finally:
        conn.close()
