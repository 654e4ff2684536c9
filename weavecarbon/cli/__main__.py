from __future__ import annotations

import argparse
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import psycopg2
from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..excel.template import default_template_name, write_template
from ..logging.init import enable_debug, log_summary, setup_logging
from ..models.config_models import ImportConfig
from ..services.orchestrator import ProcessingError, process_all
from ..services.summary import render_summary_line

"""Bulk import CLI.

    python -m weavecarbon.cli [--debug] [--dry-run] [--config PATH] [--template PATH]

Reads config/import.yml, imports every .xlsx/.csv file of source_directory and ends
with one SUMMARY line. Exit codes: 0 every file imported, 2 at least one file
failed, 1 fatal (bad config, missing directory).

Connection settings: .env (loaded with override) and DATABASE_URL / PGDSN / PG*
variables win over the database section of the config. DISABLE_DB_CONNECT=1 or
--dry-run runs in mock mode (nothing read from or written to the product store).
"""

__all__ = [
    "EXIT_SUCCESS_ALL",
    "EXIT_PARTIAL_FAILURE",
    "EXIT_FATAL",
    "main",
]

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1


def _build_dsn(cfg: ImportConfig) -> str:
    db_cfg = cfg.database
    dsn = os.getenv("DATABASE_URL") or os.getenv("PGDSN") or db_cfg.dsn
    if dsn:
        return dsn
    host = os.getenv("PGHOST", db_cfg.host or "localhost")
    port = os.getenv("PGPORT", str(db_cfg.port) if db_cfg.port else "5432")
    user = os.getenv("PGUSER", db_cfg.user or "postgres")
    password = os.getenv("PGPASSWORD", db_cfg.password or "")
    database = os.getenv("PGDATABASE", db_cfg.database or "postgres")
    dsn = f"host={host} port={port} user={user} dbname={database}"
    if password:
        dsn += f" password={password}"
    return dsn


@contextmanager
def _db_connection(cfg: ImportConfig) -> Iterator[Any]:  # pragma: no cover (needs a live database)
    """psycopg2 cursor; the orchestrator commits or rolls back per file."""
    conn = psycopg2.connect(_build_dsn(cfg))
    conn.autocommit = False
    try:
        with conn.cursor() as cur:
            yield cur
    finally:
        conn.close()


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env with python-dotenv; its values override the process environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="weavecarbon", description="Bulk product import with carbon calculation")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--dry-run", action="store_true", help="Validate and calculate only; do not touch the database")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to the import config (YAML)")
    p.add_argument(
        "--template", type=Path, nargs="?", const=Path("."), default=None, metavar="PATH",
        help="Write the import template (.xlsx, or .csv by suffix) and exit",
    )
    return p.parse_args(argv)


def _write_template(target: Path) -> Path:
    if target.is_dir():
        target = target / default_template_name("xlsx")
    fmt = "csv" if target.suffix.lower() == ".csv" else "xlsx"
    return write_template(target, fmt=fmt)


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # [] from tests must not fall back to sys.argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        enable_debug(logger)
        logger.debug("debug mode enabled")

    if args.template is not None:
        try:
            path = _write_template(args.template)
        except (OSError, ValueError) as e:
            logger.error(f"template: {e}")
            return EXIT_FATAL
        logger.info(f"template written to {path}")
        return EXIT_SUCCESS_ALL

    _load_env_file(Path(".env"), override=True)
    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL
    logger.info(f"Processing files from: {directory}")

    db_mode = "mock"
    try:
        if args.dry_run or os.getenv("DISABLE_DB_CONNECT") == "1":
            logger.debug("database disabled -> mock mode")
            result = process_all(cfg, cursor=None)
        else:
            try:
                with _db_connection(cfg) as cur:
                    db_mode = "live"
                    result = process_all(cfg, cursor=cur)
            except psycopg2.Error as db_e:
                if db_mode == "live":
                    raise ProcessingError(f"database error: {db_e}") from db_e
                logger.warning(f"DB connection failed -> mock mode: {db_e}")
                result = process_all(cfg, cursor=None)
    except ProcessingError as e:
        logger.error(f"processing({db_mode}): {e}")
        return EXIT_FATAL

    logger.info(f"mode={db_mode} valid_rows={result.valid_rows} total_co2e={result.total_co2}")

    total_files = result.success_files + result.failed_files
    summary_line = render_summary_line(total_files, result)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line.removeprefix("SUMMARY "))

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
