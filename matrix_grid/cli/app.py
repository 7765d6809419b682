from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from matrix_grid.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from matrix_grid.logging.error_log import ErrorLogBuffer, ErrorRecord
from matrix_grid.logging.init import enable_debug, log_summary, setup_logging
from matrix_grid.models.identity import row_identity_builder
from matrix_grid.normalize.row_normalizer import MalformedRowError, palette_resolver
from matrix_grid.reader.table_reader import TableReadError, iter_raw_rows, read_table
from matrix_grid.services.progress import track_rows
from matrix_grid.services.refresh import RefreshResult, refresh_grid
from matrix_grid.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (MATRIX_GRID_CONFIG may point at another config file)
- Load and validate the YAML config
- Read raw rows from the configured CSV / XLSX source
- Run one refresh and print the SUMMARY line (or the grid with --inspect-data)
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1

CONFIG_ENV_VAR = "MATRIX_GRID_CONFIG"


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv; failures only produce a warning."""
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=override)
    except OSError as e:  # pragma: no cover
        print(f"WARNING: failed to load .env via python-dotenv: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Project a sparse (x, y, values) table into a dense matrix grid")
    p.add_argument("--config", type=Path, default=None, help="Config file (default: config/matrix.yml)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print the projected grid then exit")
    return p.parse_args(argv)


def _resolve_config_path(arg: Path | None) -> Path:
    if arg is not None:
        return arg
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def _print_grid(result: RefreshResult) -> None:
    for row in result.projection.cells:
        print("\t".join(cell.display_text for cell in row))


def _record_failure(source: str, row: int, error_type: str, message: str) -> Path | None:
    buffer = ErrorLogBuffer()
    buffer.append(ErrorRecord.create(source=source, row=row, error_type=error_type, message=message))
    return buffer.flush()


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # [] が渡された場合に sys.argv を読まないよう None のときだけ参照する
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        enable_debug()
        logger.debug("debug mode enabled")

    config_path = _resolve_config_path(args.config)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    source = Path(cfg.source)
    logger.info(f"Reading rows from: {source}")
    try:
        df = read_table(source, cfg.sheet, cfg.na_values)
    except TableReadError as e:
        logger.error(f"source: {e}")
        _record_failure(source.name, -1, "SOURCE_READ_ERROR", str(e))
        return EXIT_FATAL

    rows = track_rows(iter_raw_rows(df), total=len(df))
    try:
        result = refresh_grid(
            rows,
            row_identity_builder(source.name),
            palette_resolver(cfg.category_colors),
            settings=cfg.table,
            lookup=cfg.lookup,
            indexed=True,
        )
    except MalformedRowError as e:
        logger.error(f"refresh: {e}")
        log_path = _record_failure(source.name, e.row_index, "MALFORMED_ROW", str(e))
        logger.info(f"error log: {log_path}")
        return EXIT_FATAL
    except Exception as e:
        # 空の x / y など行単位で特定できない失敗
        logger.error(f"refresh: {type(e).__name__}: {e}")
        log_path = _record_failure(source.name, -1, "REFRESH_ERROR", f"{type(e).__name__}: {e}")
        logger.info(f"error log: {log_path}")
        return EXIT_FATAL

    if args.inspect_data:
        _print_grid(result)

    summary_line = render_summary_line(result)
    # log_summary adds the "SUMMARY " prefix itself
    log_summary(summary_line[len("SUMMARY "):])
    return EXIT_SUCCESS

