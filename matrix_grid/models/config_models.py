from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the matrix grid.

These are the typed domain models produced by matrix_grid/config/loader.py. TableSettings only travels alongside the grid
for the rendering layer; projection never reads it.
"""

LOOKUP_SCAN = "scan"
LOOKUP_INDEX = "index"


@dataclass(frozen=True)
class TableSettings:
    """Rendering settings of the matrix table.

    Defaults: white background, 2px borders, 18px font.
    """
    table_color: str = "white"  # background color
    table_thickness: int = 2  # cell border (px)
    cell_font_size: int = 18  # px


@dataclass(frozen=True)
class GridConfig:
    """Root configuration object for one matrix grid refresh run."""
    source: str  # CSV / XLSX path
    sheet: str | None = None  # XLSX sheet name (None = first sheet)
    table: TableSettings = field(default_factory=TableSettings)
    category_colors: dict[str, str] = field(default_factory=dict)  # category -> color
    lookup: str = LOOKUP_SCAN  # scan | index
    na_values: list[str] = field(default_factory=list)  # cell strings read as missing besides empty cells
