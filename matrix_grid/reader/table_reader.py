from __future__ import annotations

import csv
import math
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

import pandas as pd

"""Row source reader.

Reads a headerless CSV / XLSX table with pandas and yields raw rows in the
shape the row normalizer expects: [x, y, (category,) value, ...], each paired
with its 0-based position in the source.

- Only empty cells (plus the strings listed in ``na_values``) are missing
  values. pandas' default NA strings ("NA", "N/A", "null", ...) are kept as
  text.
- CSV rows keep their own delimited width: ``1,1,red,`` stays a 4-cell row.
  Only the NaN padding pandas adds to short rows is dropped. XLSX has no
  delimiters, so trailing empty cells are dropped there.
- Fully empty rows are skipped, but they still consume a source position.
- Integral float coordinates (2.0, produced by NaN padding) become int.
"""

__all__ = [
    "TableReadError",
    "read_table",
    "iter_raw_rows",
    "read_raw_rows",
]

SUPPORTED_SUFFIXES = {".csv", ".xlsx"}

# DataFrame.attrs key holding the delimited width of each CSV record
ROW_WIDTHS_ATTR = "row_widths"


class TableReadError(Exception):
    """Raised when the source table cannot be read."""


def _na_options(na_values: Iterable[str] | None) -> dict[str, Any]:
    # 空セルだけを欠損扱いにし、pandas 既定の NA 文字列は値として残す
    custom_na = {""} | set(na_values or ())
    return {"keep_default_na": False, "na_values": sorted(custom_na)}


def _csv_row_widths(path: Path) -> list[int]:
    with path.open(encoding="utf-8", newline="") as f:
        return [len(record) for record in csv.reader(f)]


def read_table(path: Path, sheet: str | None = None, na_values: Iterable[str] | None = None) -> pd.DataFrame:
    """Read a headerless table into a raw DataFrame.

    Parameters
    ----------
    path: CSV or XLSX file
    sheet: XLSX sheet name (None = first sheet; ignored for CSV)
    na_values: extra cell strings read as missing (empty cells always are)
    """
    if not path.exists():
        raise TableReadError(f"source not found: {path}")
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise TableReadError(f"unsupported source type '{suffix}' (expected one of {sorted(SUPPORTED_SUFFIXES)})")
    try:
        if suffix == ".csv":
            widths = _csv_row_widths(path)
            width = max(widths, default=0)
            if width == 0:
                return pd.DataFrame()
            # 行ごとに列数が異なるため names で最大幅を確保する
            df = pd.read_csv(
                path,
                header=None,
                names=range(width),
                skip_blank_lines=False,
                **_na_options(na_values),
            )
            df.attrs[ROW_WIDTHS_ATTR] = widths
            return df
        return pd.read_excel(
            path,
            sheet_name=sheet if sheet is not None else 0,
            header=None,
            **_na_options(na_values),
        )
    except (OSError, ValueError, csv.Error) as e:
        raise TableReadError(f"failed to read {path}: {e}") from e


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def _coerce_integral(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def iter_raw_rows(df: pd.DataFrame) -> Iterator[tuple[int, list[Any]]]:
    """Yield ``(source_index, cells)`` pairs from a headerless DataFrame.

    When the frame carries per-record widths (CSV), each row is cut back to
    its own width; otherwise trailing empty cells are dropped. Integral floats
    in float-typed columns are turned back into int, since pandas upcasts int
    columns to float as soon as one cell is NaN.
    """
    widths = df.attrs.get(ROW_WIDTHS_ATTR)
    float_columns = {i for i, dtype in enumerate(df.dtypes) if pd.api.types.is_float_dtype(dtype)}
    for position, raw in enumerate(df.itertuples(index=False, name=None)):
        cells = list(raw)
        if widths is not None:
            cells = cells[:widths[position]]
        else:
            while cells and _is_empty(cells[-1]):
                cells.pop()
        if all(_is_empty(c) for c in cells):
            continue
        cells = [None if _is_empty(c) else c for c in cells]
        for i, value in enumerate(cells):
            if i < 2 or i in float_columns:
                cells[i] = _coerce_integral(value)
        yield position, cells


def read_raw_rows(
    path: Path, sheet: str | None = None, na_values: Iterable[str] | None = None
) -> list[tuple[int, list[Any]]]:
    """read_table + iter_raw_rows."""
    return list(iter_raw_rows(read_table(path, sheet, na_values)))
