from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from ..models.identity import IdentityBuilder
from ..models.normalized_record import NormalizedRecord, RowShape

"""Row normalizer: raw row -> NormalizedRecord.

Column-shape policy:
- 2 columns:  [x, y]                          -> values=()
- 3 columns:  [x, y, value]                   -> values=(value,), no category
- 4+ columns: [x, y, category, v1, v2, ...]   -> category + values=(v1, v2, ...)

Rows with fewer than 2 columns violate the caller contract and raise
MalformedRowError. Normalization is pure; identities and colors come from
injected collaborators.
"""

__all__ = [
    "ColorResolver",
    "MalformedRowError",
    "normalize_row",
    "normalize_indexed_rows",
    "normalize_rows",
    "palette_resolver",
]

logger = logging.getLogger(__name__)

ColorResolver = Callable[[Any], str | None]


class MalformedRowError(ValueError):
    """Raised when a raw row has fewer than 2 columns."""

    def __init__(self, row_index: int, length: int) -> None:
        super().__init__(f"row {row_index} has {length} column(s); at least 2 (x, y) are required")
        self.row_index = row_index
        self.length = length


def palette_resolver(palette: dict[str, str]) -> ColorResolver:
    """Color resolver backed by a category -> color mapping.

    Keys are compared as strings so numeric categories read from a table
    still match YAML keys.
    """
    def resolve(category: Any) -> str | None:
        if category is None:
            return None
        return palette.get(str(category))
    return resolve


def _resolve_shape(length: int) -> RowShape:
    if length == 2:
        return RowShape.COORDINATES_ONLY
    if length == 3:
        return RowShape.THREE_COLUMN
    return RowShape.CATEGORIZED


def normalize_row(
    row: Sequence[Any],
    row_index: int,
    identity_builder: IdentityBuilder,
    color_resolver: ColorResolver | None = None,
) -> NormalizedRecord:
    """Normalize one raw row.

    Args:
        row: Ordered cells of the source row
        row_index: Ordinal position of the row in the source dataset
        identity_builder: Issues the opaque identity token for row_index
        color_resolver: Optional category -> color function

    Returns:
        NormalizedRecord for the row

    Raises:
        MalformedRowError: If the row has fewer than 2 columns
    """
    cells = list(row)
    if len(cells) < 2:
        raise MalformedRowError(row_index, len(cells))

    shape = _resolve_shape(len(cells))
    category = None
    color = None
    if shape is RowShape.CATEGORIZED:
        category = cells[2]
        values = tuple(cells[3:])
        if color_resolver is not None:
            color = color_resolver(category)
    else:
        values = tuple(cells[2:])

    return NormalizedRecord(
        x=cells[0],
        y=cells[1],
        values=values,
        identity=identity_builder(row_index),
        shape=shape,
        category=category,
        color=color or None,  # 空文字は未解決扱い
        row_index=row_index,
    )


def normalize_rows(
    rows: Iterable[Sequence[Any]],
    identity_builder: IdentityBuilder,
    color_resolver: ColorResolver | None = None,
) -> list[NormalizedRecord]:
    """Normalize a whole row collection, keeping source order."""
    return normalize_indexed_rows(enumerate(rows), identity_builder, color_resolver)


def normalize_indexed_rows(
    indexed_rows: Iterable[tuple[int, Sequence[Any]]],
    identity_builder: IdentityBuilder,
    color_resolver: ColorResolver | None = None,
) -> list[NormalizedRecord]:
    """Like normalize_rows, but each row arrives with its source position.

    Readers that skip blank rows pass the original positions here so that
    identities and error reports keep pointing at the right source row.
    """
    records = [
        normalize_row(row, index, identity_builder, color_resolver)
        for index, row in indexed_rows
    ]
    logger.debug("normalized %d rows", len(records))
    return records
