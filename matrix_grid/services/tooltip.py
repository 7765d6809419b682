from __future__ import annotations

from dataclasses import dataclass

from ..models.grid_cell import GridCell, join_values

"""Tooltip data for occupied grid cells.

Produces the items the host tooltip service displays; the widget itself is
not part of this package.
"""

__all__ = [
    "TooltipItem",
    "TooltipLabels",
    "tooltip_items",
]


@dataclass(frozen=True)
class TooltipLabels:
    header_prefix: str = "Cella: "
    display_name: str = "Valore: "


@dataclass(frozen=True)
class TooltipItem:
    header: str
    display_name: str
    value: str


def tooltip_items(cell: GridCell, labels: TooltipLabels | None = None) -> list[TooltipItem]:
    """Tooltip items for a cell; empty for axis cells and empty data cells."""
    if not cell.occupied:
        return []
    labels = labels or TooltipLabels()
    return [
        TooltipItem(
            header=f"{labels.header_prefix}{cell.x}, {cell.y}",
            display_name=labels.display_name,
            value=join_values(cell.values),
        )
    ]
