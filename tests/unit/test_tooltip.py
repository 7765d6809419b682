from __future__ import annotations

from matrix_grid.models.grid_cell import CellKind, GridCell
from matrix_grid.services.tooltip import TooltipItem, TooltipLabels, tooltip_items


def test_tooltip_for_occupied_cell():
    cell = GridCell(x=2, y=3, kind=CellKind.DATA, occupied=True, values=("A", "B"), identity="id")

    items = tooltip_items(cell)

    assert items == [TooltipItem(header="Cella: 2, 3", display_name="Valore: ", value="A,B")]


def test_tooltip_custom_labels():
    cell = GridCell(x=1, y=1, kind=CellKind.DATA, occupied=True, values=(5,))
    items = tooltip_items(cell, TooltipLabels(header_prefix="Cell: ", display_name="Value: "))

    assert items[0].header == "Cell: 1, 1"
    assert items[0].display_name == "Value: "
    assert items[0].value == "5"


def test_tooltip_empty_for_empty_and_axis_cells():
    assert tooltip_items(GridCell(x=1, y=1, kind=CellKind.DATA)) == []
    assert tooltip_items(GridCell(x=0, y=0, kind=CellKind.CORNER)) == []
    assert tooltip_items(GridCell(x=1, y=0, kind=CellKind.ROW_LABEL, label=1)) == []
