from __future__ import annotations

import json
from pathlib import Path

from matrix_grid.cli import main as cli_main
from matrix_grid.logging.init import reset_logging

"""Exit code contract tests: 0 success, 1 fatal."""


def test_exit_code_fatal_missing_config(temp_workdir: Path, capsys):
    # config/matrix.yml 無し → exit 1
    reset_logging()

    code = cli_main([])

    assert code == 1
    assert "ERROR config:" in capsys.readouterr().out


def test_exit_code_fatal_invalid_config(write_config: Path, capsys):
    reset_logging()
    write_config.write_text("source: a.csv\nunknown: 1\n", encoding="utf-8")

    code = cli_main([])

    assert code == 1
    assert "ERROR config: config validation failed" in capsys.readouterr().out


def test_exit_code_success(write_config: Path, sample_csv: Path, capsys):
    reset_logging()

    code = cli_main([])

    assert code == 0
    assert "ERROR" not in capsys.readouterr().out


def test_exit_code_success_empty_source(write_config: Path, temp_workdir: Path, capsys):
    reset_logging()
    (temp_workdir / "data" / "matrix.csv").write_text("", encoding="utf-8")

    code = cli_main([])

    assert code == 0
    assert "SUMMARY rows=0 records=0 grid=1x1 occupied=0 shadowed=0" in capsys.readouterr().out


def test_exit_code_fatal_malformed_row(write_config: Path, temp_workdir: Path, capsys):
    reset_logging()
    (temp_workdir / "data" / "matrix.csv").write_text("1,1,a\n7\n", encoding="utf-8")

    code = cli_main([])

    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR refresh: row 1 has 1 column(s)" in out
    assert "SUMMARY" not in out
    logs = list((temp_workdir / "logs").glob("errors-*.log"))
    assert len(logs) == 1
    assert '"error_type": "MALFORMED_ROW"' in logs[0].read_text(encoding="utf-8")


def test_exit_code_fatal_malformed_row_after_blank_row(write_config: Path, temp_workdir: Path, capsys):
    reset_logging()
    (temp_workdir / "data" / "matrix.csv").write_text("1,1,a\n,,\n7\n", encoding="utf-8")

    code = cli_main([])

    assert code == 1
    assert "ERROR refresh: row 2 has 1 column(s)" in capsys.readouterr().out
    log = next((temp_workdir / "logs").glob("errors-*.log"))
    entry = json.loads(log.read_text(encoding="utf-8").splitlines()[0])
    assert entry["error_type"] == "MALFORMED_ROW"
    assert entry["row"] == 2


def test_exit_code_fatal_unexpected_refresh_error(write_config: Path, temp_workdir: Path, capsys):
    # x が空の行は比較できず TypeError になる
    reset_logging()
    (temp_workdir / "data" / "matrix.csv").write_text("1,1,5\n,3,5\n", encoding="utf-8")

    code = cli_main([])

    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR refresh: TypeError" in out
    assert "SUMMARY" not in out
    log = next((temp_workdir / "logs").glob("errors-*.log"))
    entry = json.loads(log.read_text(encoding="utf-8").splitlines()[0])
    assert entry["error_type"] == "REFRESH_ERROR"
    assert entry["row"] == -1
    assert entry["source"] == "matrix.csv"
