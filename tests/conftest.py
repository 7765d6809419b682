# Shared pytest fixtures
from __future__ import annotations
import os
import tempfile
from pathlib import Path
import pytest

from matrix_grid.models.identity import row_identity_builder


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("MATRIX_GRID_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source: ./data/matrix.csv
table:
  table_color: white
  table_thickness: 2
  cell_font_size: 18
category_colors:
  red: "#ff0000"
  green: "#00ff00"
lookup: scan
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "matrix.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sample_csv(temp_workdir: Path) -> Path:
    # 3 列行とカテゴリ付き行の混在、(1, 1) は重複
    f = temp_workdir / "data" / "matrix.csv"
    f.write_text(
        "1,1,5\n"
        "2,1,7\n"
        "2,3,red,A,B\n"
        "1,1,99\n",
        encoding="utf-8",
    )
    return f


@pytest.fixture()
def identity_builder():
    return row_identity_builder("test")


@pytest.fixture(autouse=True)
def _isolate_env():
    before = os.environ.get("MATRIX_GRID_CONFIG")
    yield
    if before is None:
        os.environ.pop("MATRIX_GRID_CONFIG", None)
    else:
        os.environ["MATRIX_GRID_CONFIG"] = before
