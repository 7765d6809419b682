from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

"""NormalizedRecord model for the sparse matrix grid.

A NormalizedRecord is the canonical per-row representation after the raw
row has been split into coordinates, values and (optionally) a category.
The row shape is resolved once at normalization time and carried as a tag,
so later stages never re-test the column count.
"""

__all__ = [
    "RowShape",
    "NormalizedRecord",
]


class RowShape(Enum):
    """Column layout of the source row.

    - COORDINATES_ONLY: [x, y] (no values)
    - THREE_COLUMN: [x, y, value]
    - CATEGORIZED: [x, y, category, value, value, ...]
    """
    COORDINATES_ONLY = "coordinates_only"
    THREE_COLUMN = "three_column"
    CATEGORIZED = "categorized"


@dataclass(frozen=True)
class NormalizedRecord:
    """One source row decoupled from its column layout.

    ``identity`` is an opaque token issued by the identity builder; it is
    passed through untouched. ``color`` is whatever the color resolver
    returned for ``category`` (None when unresolved).
    """
    x: Any  # row axis (非負整数想定、検証しない)
    y: Any  # column axis
    values: tuple[Any, ...]  # display order
    identity: Any
    shape: RowShape = RowShape.THREE_COLUMN
    category: Any | None = None
    color: str | None = None
    row_index: int = -1  # source ordinal, -1 if unknown

    @property
    def coordinate(self) -> tuple[Any, Any]:
        return (self.x, self.y)
