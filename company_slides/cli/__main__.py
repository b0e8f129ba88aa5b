from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import pandas as pd
import psycopg2
from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, AppConfig, ConfigError, default_config, load_config
from ..db.batch_insert import BatchMetrics
from ..db.connection import db_connection, resolve_dsn
from ..db.store import CompanyStore, InMemoryCompanyStore, PostgresCompanyStore, StorageNotConfiguredError
from ..ingest.reader import IngestError, parse_companies, read_csv_text
from ..logging.error_log import ErrorLogBuffer
from ..logging.init import log_summary, setup_logging
from ..services.importer import import_file
from ..services.sample_file import SAMPLE_FILE_NAME, sample_csv_response
from ..services.search import SearchStatus, search_company
from ..services.slide import SlideView
from ..services.summary import render_import_message, render_summary_line

"""CLI entrypoint.

Commands:
- import CSV_FILE   parse and insert companies in batches
- inspect CSV_FILE  parse only; print header, preview and skipped lines
- search QUERY      show the slide of the first matching company
- sample            write the bundled sample CSV template

Exit codes: 0 success, 1 fatal (config / file / storage not configured),
2 partial failure (storage error mid-import, or no valid rows), 3 search miss.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2
EXIT_NOT_FOUND = 3

PREVIEW_ROWS = 5


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv (.env の値で既存環境変数を上書き)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="company-slides", description="Company CSV importer & slide search")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--config", type=Path, default=None, help=f"Config file (default: {DEFAULT_CONFIG_PATH})")
    sub = p.add_subparsers(dest="command", required=True)

    imp = sub.add_parser("import", help="Import companies from a CSV file")
    imp.add_argument("csv_file", type=Path)
    imp.add_argument("--dry-run", action="store_true", help="Parse and validate only, insert nothing")

    insp = sub.add_parser("inspect", help="Print header, parsed preview and skipped lines")
    insp.add_argument("csv_file", type=Path)

    srch = sub.add_parser("search", help="Find a company by (partial) name")
    srch.add_argument("query")

    smp = sub.add_parser("sample", help="Write the sample CSV template")
    smp.add_argument("--output", type=Path, default=Path(SAMPLE_FILE_NAME))
    return p.parse_args(argv)


def _resolve_config(path: Path | None) -> AppConfig:
    if path is not None:
        return load_config(path)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return default_config()


def _mock_store(cfg: AppConfig) -> InMemoryCompanyStore:
    """In-memory store seeded from the sample CSV (when present)."""
    store = InMemoryCompanyStore()
    if cfg.sample_csv.exists():
        parsed = parse_companies(read_csv_text(cfg.sample_csv))
        store.insert_many(parsed.accepted)
    return store


@contextmanager
def _open_store(cfg: AppConfig, logger: logging.Logger) -> Iterator[CompanyStore | None]:
    """Yield the configured store; None when no connection settings exist.

    DB 接続制御: テスト等で完全に無効化したい場合 DISABLE_DB_CONNECT=1 (mock mode)
    """
    if os.getenv("DISABLE_DB_CONNECT") == "1":
        logger.debug("DB connect disabled via DISABLE_DB_CONNECT=1 -> mock mode")
        yield _mock_store(cfg)
        return
    dsn = resolve_dsn(cfg.database)
    if dsn is None:
        yield None
        return

    def _log_batch_metrics(metrics: BatchMetrics) -> None:
        logger.debug(f"batch_insert rows={metrics.batch_size} elapsed_sec={metrics.elapsed_seconds:.4f}")

    with db_connection(dsn) as conn:
        yield PostgresCompanyStore(conn, table=cfg.table, metrics_callback=_log_batch_metrics)


def _inspect(csv_file: Path, logger: logging.Logger) -> int:
    try:
        parsed = parse_companies(read_csv_text(csv_file))
    except IngestError as e:
        logger.error(f"csv: {e}")
        return EXIT_FATAL
    print(f"FILE: {csv_file.name}")
    print(f"  headers={parsed.headers}")
    print(f"  accepted={len(parsed.accepted)} skipped={len(parsed.skips)}")
    if parsed.accepted:
        df = pd.DataFrame([r.to_insert_dict() for r in parsed.accepted[:PREVIEW_ROWS]])
        print(df.to_string(index=False))
    for skip in parsed.skips:
        print(f"  line {skip.line_number}: {skip.reason} {skip.detail}".rstrip())
    return EXIT_SUCCESS


def _import(csv_file: Path, cfg: AppConfig, dry_run: bool, logger: logging.Logger) -> int:
    if dry_run:
        return _inspect(csv_file, logger)

    error_log = ErrorLogBuffer(cfg.error_log_dir)
    try:
        with _open_store(cfg, logger) as store:
            result = import_file(csv_file, store, batch_size=cfg.batch_size, error_log=error_log)
    except StorageNotConfiguredError as e:
        logger.error(f"storage: {e}")
        return EXIT_FATAL
    except IngestError as e:
        logger.error(f"csv: {e}")
        return EXIT_FATAL
    except psycopg2.Error as e:
        logger.error(f"database connection failed: {str(e).strip()}")
        return EXIT_FATAL
    finally:
        log_path = error_log.flush()
        if log_path is not None:
            logger.info(f"error log written: {log_path}")

    message = render_import_message(result)
    if result.error is not None or result.accepted == 0:
        logger.error(message)
    else:
        logger.info(message)
    # log_summary が "SUMMARY " を付与するため prefix を除去
    log_summary(render_summary_line(result)[len("SUMMARY "):])

    if result.error is not None or result.accepted == 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS


def _search(query: str, cfg: AppConfig, logger: logging.Logger) -> int:
    try:
        with _open_store(cfg, logger) as store:
            outcome = search_company(store, query)
    except psycopg2.Error as e:
        logger.error(f"database connection failed: {str(e).strip()}")
        return EXIT_FATAL

    if outcome.status is SearchStatus.FOUND and outcome.company is not None:
        print(SlideView.from_company(outcome.company).render_text())
        return EXIT_SUCCESS
    if outcome.status is SearchStatus.NOT_FOUND:
        logger.info(outcome.message)
        return EXIT_NOT_FOUND
    if outcome.status is SearchStatus.EMPTY_QUERY:
        logger.error("search: empty query")
        return EXIT_FATAL
    logger.error(outcome.message)
    return EXIT_FATAL


def _sample(output: Path, cfg: AppConfig, logger: logging.Logger) -> int:
    response = sample_csv_response(cfg.sample_csv)
    if not response.found:
        logger.error(f"sample: File not found ({cfg.sample_csv})")
        return EXIT_FATAL
    output.write_bytes(response.body)
    logger.info(f"sample written: {output}")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む (空リストはそのまま使用)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        for h in logger.handlers:
            h.setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
        logger.debug("debug mode enabled")

    try:
        cfg = _resolve_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.command in ("import", "inspect") and not args.csv_file.is_file():
        logger.error(f"file not found: {args.csv_file}")
        return EXIT_FATAL

    if args.command == "import":
        return _import(args.csv_file, cfg, args.dry_run, logger)
    if args.command == "inspect":
        return _inspect(args.csv_file, logger)
    if args.command == "search":
        return _search(args.query, cfg, logger)
    return _sample(args.output, cfg, logger)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
