from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

from ..models.grid_cell import CellKind, GridCell
from ..models.normalized_record import NormalizedRecord

"""Grid projector: NormalizedRecord collection -> dense grid.

The grid covers every integer coordinate in [0, max_x] x [0, max_y] and is
indexed as grid[x][y]. Row 0 and column 0 are axis-label tracks, so the
effective data region is [1, max_x] x [1, max_y].

Lookup policy: when several records share a coordinate the FIRST one in input
order wins and the others are shadowed. Both the linear scan (find_first) and
the prebuilt index (build_index) follow this policy.

Projection never raises for missing cells; an absent record is a normal empty
cell. The result is rebuilt from scratch on each call and never mutated.
"""

__all__ = [
    "Lookup",
    "GridProjection",
    "compute_bounds",
    "find_first",
    "build_index",
    "index_lookup",
    "scan_lookup",
    "project",
    "project_records",
]

logger = logging.getLogger(__name__)

Lookup = Callable[[int, int], NormalizedRecord | None]


def compute_bounds(records: Sequence[NormalizedRecord]) -> tuple[int, int]:
    """Return (max_x, max_y) over records, 0 for an empty collection.

    Both bounds are clamped to be at least 0.
    """
    max_x = 0
    max_y = 0
    for record in records:
        if record.x > max_x:
            max_x = record.x
        if record.y > max_y:
            max_y = record.y
    return int(max_x), int(max_y)


def find_first(records: Sequence[NormalizedRecord], x: int, y: int) -> NormalizedRecord | None:
    """Linear scan returning the first record at (x, y), or None."""
    for record in records:
        if record.x == x and record.y == y:
            return record
    return None


def build_index(records: Sequence[NormalizedRecord]) -> dict[tuple[Any, Any], NormalizedRecord]:
    """Build a (x, y) -> record mapping in one pass, first record wins."""
    index: dict[tuple[Any, Any], NormalizedRecord] = {}
    for record in records:
        # 先勝ち: 既存キーは上書きしない
        index.setdefault(record.coordinate, record)
    return index


def scan_lookup(records: Sequence[NormalizedRecord]) -> Lookup:
    def lookup(x: int, y: int) -> NormalizedRecord | None:
        return find_first(records, x, y)
    return lookup


def index_lookup(records: Sequence[NormalizedRecord]) -> Lookup:
    index = build_index(records)

    def lookup(x: int, y: int) -> NormalizedRecord | None:
        return index.get((x, y))
    return lookup


def _axis_cell(x: int, y: int) -> GridCell:
    if x == 0 and y == 0:
        return GridCell(x=0, y=0, kind=CellKind.CORNER)
    if y == 0:
        return GridCell(x=x, y=0, kind=CellKind.ROW_LABEL, label=x)
    return GridCell(x=0, y=y, kind=CellKind.COLUMN_LABEL, label=y)


def _data_cell(x: int, y: int, record: NormalizedRecord | None) -> GridCell:
    if record is None:
        return GridCell(x=x, y=y, kind=CellKind.DATA)
    return GridCell(
        x=x,
        y=y,
        kind=CellKind.DATA,
        occupied=True,
        values=record.values,
        category=record.category,
        color=record.color,
        identity=record.identity,
    )


def project(
    records: Sequence[NormalizedRecord],
    max_x: int,
    max_y: int,
    lookup: Lookup | None = None,
) -> tuple[tuple[GridCell, ...], ...]:
    """Materialize the dense grid, indexed as grid[x][y].

    Args:
        records: Normalized records in source order
        max_x: Largest row coordinate (inclusive)
        max_y: Largest column coordinate (inclusive)
        lookup: Point lookup to use; defaults to a linear scan over records

    Returns:
        (max_x + 1) rows of (max_y + 1) cells each
    """
    if lookup is None:
        lookup = scan_lookup(records)
    grid: list[tuple[GridCell, ...]] = []
    for x in range(max_x + 1):
        row: list[GridCell] = []
        for y in range(max_y + 1):
            if x == 0 or y == 0:
                row.append(_axis_cell(x, y))
            else:
                row.append(_data_cell(x, y, lookup(x, y)))
        grid.append(tuple(row))
    return tuple(grid)


@dataclass(frozen=True)
class GridProjection:
    """Result of one projection: the grid, its bounds and the point lookup.

    ``find`` is the same lookup the grid was built with, so the interaction
    layer resolves a rendered cell to exactly the record shown in it.
    """
    records: tuple[NormalizedRecord, ...]
    cells: tuple[tuple[GridCell, ...], ...]
    max_x: int
    max_y: int
    lookup: Lookup = field(compare=False, repr=False)

    def find(self, x: int, y: int) -> NormalizedRecord | None:
        return self.lookup(x, y)

    def cell(self, x: int, y: int) -> GridCell:
        """Return grid[x][y]; raises IndexError outside [0, max_x] x [0, max_y]."""
        if not (0 <= x <= self.max_x and 0 <= y <= self.max_y):
            raise IndexError(f"cell ({x}, {y}) outside grid {self.max_x + 1}x{self.max_y + 1}")
        return self.cells[x][y]

    @property
    def shape(self) -> tuple[int, int]:
        return (self.max_x + 1, self.max_y + 1)

    def data_points(self) -> list[GridCell]:
        """Occupied data cells in grid order (x, then y)."""
        return [c for row in self.cells for c in row if c.occupied]

    def iter_cells(self) -> Iterator[GridCell]:
        for row in self.cells:
            yield from row

    @property
    def shadowed_records(self) -> int:
        """Number of records hidden behind an earlier record at the same coordinate."""
        return len(self.records) - len({r.coordinate for r in self.records})


def project_records(records: Sequence[NormalizedRecord], *, use_index: bool = False) -> GridProjection:
    """compute_bounds + project in one step, returning a GridProjection."""
    frozen = tuple(records)
    max_x, max_y = compute_bounds(frozen)
    lookup = index_lookup(frozen) if use_index else scan_lookup(frozen)
    cells = project(frozen, max_x, max_y, lookup)
    logger.debug(
        "projected %d records into %dx%d grid (lookup=%s)",
        len(frozen), max_x + 1, max_y + 1, "index" if use_index else "scan",
    )
    return GridProjection(records=frozen, cells=cells, max_x=max_x, max_y=max_y, lookup=lookup)
