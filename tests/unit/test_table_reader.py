from __future__ import annotations
import pandas as pd
import pytest
from pathlib import Path
from matrix_grid.models.identity import row_identity_builder
from matrix_grid.models.normalized_record import RowShape
from matrix_grid.normalize.row_normalizer import normalize_indexed_rows
from matrix_grid.reader.table_reader import TableReadError, iter_raw_rows, read_raw_rows, read_table


def _make_excel(tmp_path: Path, name: str, sheets: dict[str, list[list[object]]]) -> Path:
    p = tmp_path / name
    with pd.ExcelWriter(p) as writer:
        for sheet, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return p


def test_read_csv_mixed_widths(tmp_path: Path):
    f = tmp_path / "m.csv"
    f.write_text("1,1,5\n2,3,red,A,B\n", encoding="utf-8")

    rows = read_raw_rows(f)

    assert [index for index, _ in rows] == [0, 1]
    assert rows[0][1][:2] == [1, 1]
    assert len(rows[0][1]) == 3
    assert rows[1][1] == [2, 3, "red", "A", "B"]


def test_read_csv_skips_blank_lines_keeping_positions(tmp_path: Path):
    f = tmp_path / "m.csv"
    f.write_text("1,1,a\n\n2,2,b\n", encoding="utf-8")

    rows = read_raw_rows(f)

    assert rows == [(0, [1, 1, "a"]), (2, [2, 2, "b"])]


def test_read_csv_empty_row_keeps_identity_ordinals(tmp_path: Path):
    f = tmp_path / "m.csv"
    f.write_text("1,1,5\n,,\n2,2,7\n", encoding="utf-8")

    records = normalize_indexed_rows(read_raw_rows(f), row_identity_builder("m.csv"))

    assert [r.row_index for r in records] == [0, 2]
    assert records[1].identity.row_index == 2
    assert records[1].values == (7,)


def test_read_csv_default_na_strings_are_values(tmp_path: Path):
    f = tmp_path / "m.csv"
    f.write_text("1,1,red,NA\n2,1,green,null\n3,1,blue,N/A\n", encoding="utf-8")

    rows = read_raw_rows(f)

    assert [cells for _, cells in rows] == [
        [1, 1, "red", "NA"],
        [2, 1, "green", "null"],
        [3, 1, "blue", "N/A"],
    ]
    record = normalize_indexed_rows(rows, row_identity_builder("m.csv"))[0]
    assert record.shape is RowShape.CATEGORIZED
    assert record.category == "red"
    assert record.values == ("NA",)


def test_read_csv_trailing_empty_cell_keeps_row_width(tmp_path: Path):
    f = tmp_path / "m.csv"
    f.write_text("1,1,red,\n2,2,5\n", encoding="utf-8")

    rows = read_raw_rows(f)

    assert rows[0] == (0, [1, 1, "red", None])
    assert len(rows[1][1]) == 3
    record = normalize_indexed_rows(rows, row_identity_builder("m.csv"))[0]
    assert record.category == "red"
    assert record.values == (None,)


def test_read_csv_configured_na_values(tmp_path: Path):
    f = tmp_path / "m.csv"
    f.write_text("1,1,-\n2,1,NA\n", encoding="utf-8")

    rows = read_raw_rows(f, na_values=["-"])

    assert rows == [(0, [1, 1, None]), (1, [2, 1, "NA"])]


def test_read_csv_quoted_delimiter_counts_as_one_cell(tmp_path: Path):
    f = tmp_path / "m.csv"
    f.write_text('1,1,"a,b"\n', encoding="utf-8")

    assert read_raw_rows(f) == [(0, [1, 1, "a,b"])]


def test_read_empty_csv(tmp_path: Path):
    f = tmp_path / "empty.csv"
    f.write_text("", encoding="utf-8")
    assert read_raw_rows(f) == []


def test_read_excel_first_sheet_and_named_sheet(tmp_path: Path):
    excel = _make_excel(
        tmp_path, "m.xlsx",
        {
            "First": [[1, 1, "a"], [2, 1, "b"]],
            "Second": [[3, 4, "green", "x", "y"]],
        },
    )

    assert read_raw_rows(excel) == [(0, [1, 1, "a"]), (1, [2, 1, "b"])]
    assert read_raw_rows(excel, sheet="Second") == [(0, [3, 4, "green", "x", "y"])]


def test_read_excel_na_string_is_value(tmp_path: Path):
    excel = _make_excel(tmp_path, "m.xlsx", {"First": [[1, 1, "red", "NA"]]})

    assert read_raw_rows(excel) == [(0, [1, 1, "red", "NA"])]


def test_read_excel_missing_sheet(tmp_path: Path):
    excel = _make_excel(tmp_path, "m.xlsx", {"First": [[1, 1, "a"]]})
    with pytest.raises(TableReadError):
        read_table(excel, sheet="Nope")


def test_read_table_missing_file(tmp_path: Path):
    with pytest.raises(TableReadError) as e:
        read_table(tmp_path / "missing.csv")
    assert "source not found" in str(e.value)


def test_read_table_unsupported_suffix(tmp_path: Path):
    f = tmp_path / "m.json"
    f.write_text("{}", encoding="utf-8")
    with pytest.raises(TableReadError) as e:
        read_table(f)
    assert "unsupported source type" in str(e.value)


def test_iter_raw_rows_trims_trailing_nan_and_coerces_integral_floats():
    df = pd.DataFrame([[1.0, 2.0, 5.0, None], [3.0, 1.0, 6.5, 7.0]])

    rows = list(iter_raw_rows(df))

    assert rows == [(0, [1, 2, 5]), (1, [3, 1, 6.5, 7])]
    assert isinstance(rows[0][1][0], int)


def test_iter_raw_rows_cuts_to_recorded_widths():
    df = pd.DataFrame([[1.0, 2.0, None, None], [3.0, 1.0, 6.5, None]])
    df.attrs["row_widths"] = [3, 4]

    rows = list(iter_raw_rows(df))

    assert rows == [(0, [1, 2, None]), (1, [3, 1, 6.5, None])]


def test_iter_raw_rows_inner_nan_becomes_none():
    df = pd.DataFrame([[1, 1, "red", None, "B"]])
    assert list(iter_raw_rows(df)) == [(0, [1, 1, "red", None, "B"])]


def test_iter_raw_rows_skips_fully_empty_rows():
    df = pd.DataFrame([[1, 1, "a"], [None, None, None], [2, 2, "b"]])
    rows = list(iter_raw_rows(df))
    assert [(index, cells[:2]) for index, cells in rows] == [(0, [1, 1]), (2, [2, 2])]
