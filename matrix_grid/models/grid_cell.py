from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

"""GridCell model for the dense matrix grid.

Row 0 and column 0 of every grid are axis-label tracks: (0, 0) is a blank
corner, (x, 0) carries the row label x and (0, y) the column label y. Only
cells with x > 0 and y > 0 hold data.
"""

__all__ = [
    "CellKind",
    "GridCell",
    "join_values",
]


class CellKind(Enum):
    CORNER = "corner"
    ROW_LABEL = "row_label"
    COLUMN_LABEL = "column_label"
    DATA = "data"


def join_values(values: tuple[Any, ...]) -> str:
    """Join cell values for text display (comma separated, None -> '')."""
    return ",".join("" if v is None else str(v) for v in values)


@dataclass(frozen=True)
class GridCell:
    """One position of the dense grid.

    For occupied data cells ``values``/``category``/``color``/``identity`` are
    copied from the first matching NormalizedRecord. Empty data cells and
    axis cells leave them at their defaults.
    """
    x: int
    y: int
    kind: CellKind
    occupied: bool = False
    values: tuple[Any, ...] = ()
    category: Any | None = None
    color: str | None = None
    identity: Any | None = None
    label: int | None = None  # axis cells only

    @property
    def is_data(self) -> bool:
        return self.kind is CellKind.DATA

    @property
    def display_text(self) -> str:
        if self.kind is CellKind.CORNER:
            return ""
        if self.kind is not CellKind.DATA:
            return str(self.label)
        if not self.occupied:
            return ""
        return join_values(self.values)
