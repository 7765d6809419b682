from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from ..models.config_models import LOOKUP_INDEX, LOOKUP_SCAN, TableSettings
from ..models.identity import IdentityBuilder
from ..models.normalized_record import NormalizedRecord
from ..normalize.row_normalizer import ColorResolver, normalize_indexed_rows, normalize_rows
from ..projection.grid_projector import GridProjection, project_records

"""Refresh cycle: raw rows -> normalized records -> projected grid.

A refresh is all-or-nothing. refresh_grid() either returns a complete
RefreshResult or raises; GridSession only swaps in the new result after a
successful refresh, so a failed refresh leaves the previously rendered grid in
place. Refreshes are synchronous and never overlap.
"""

__all__ = [
    "RefreshError",
    "RefreshResult",
    "GridSession",
    "refresh_grid",
]

logger = logging.getLogger(__name__)


class RefreshError(Exception):
    """Raised when a refresh cannot complete; wraps the underlying cause."""


@dataclass(frozen=True)
class RefreshResult:
    """Output of one refresh, handed to the rendering layer by reference."""
    projection: GridProjection
    settings: TableSettings = field(default_factory=TableSettings)
    total_rows: int = 0
    elapsed_seconds: float = 0.0

    @property
    def max_x(self) -> int:
        return self.projection.max_x

    @property
    def max_y(self) -> int:
        return self.projection.max_y

    @property
    def occupied_cells(self) -> int:
        return len(self.projection.data_points())


def refresh_grid(
    rows: Iterable[Any],
    identity_builder: IdentityBuilder,
    color_resolver: ColorResolver | None = None,
    settings: TableSettings | None = None,
    lookup: str = LOOKUP_SCAN,
    *,
    indexed: bool = False,
) -> RefreshResult:
    """Run one full refresh.

    Args:
        rows: Raw rows, delivered wholesale
        identity_builder: row index -> opaque identity token
        color_resolver: category -> color (optional)
        settings: Rendering settings travelling with the grid
        lookup: "scan" (linear scan per cell) or "index" (one-pass (x, y) map)
        indexed: rows are (source_index, row) pairs, e.g. from iter_raw_rows

    Returns:
        RefreshResult with the projected grid

    Raises:
        MalformedRowError: If a row has fewer than 2 columns
    """
    started = time.perf_counter()
    row_list = list(rows)
    if indexed:
        records = normalize_indexed_rows(row_list, identity_builder, color_resolver)
    else:
        records = normalize_rows(row_list, identity_builder, color_resolver)
    projection = project_records(records, use_index=(lookup == LOOKUP_INDEX))
    elapsed = time.perf_counter() - started
    logger.debug(
        "refresh rows=%d grid=%dx%d elapsed=%.6fs",
        len(row_list), projection.max_x + 1, projection.max_y + 1, elapsed,
    )
    return RefreshResult(
        projection=projection,
        settings=settings or TableSettings(),
        total_rows=len(row_list),
        elapsed_seconds=elapsed,
    )


class GridSession:
    """Holds the grid currently handed to the rendering layer.

    update() replaces the current result only when the new refresh succeeds.
    Passing ``rows=None`` (no data available) clears the session.
    """

    def __init__(
        self,
        identity_builder: IdentityBuilder,
        color_resolver: ColorResolver | None = None,
        settings: TableSettings | None = None,
        lookup: str = LOOKUP_SCAN,
    ) -> None:
        self.identity_builder = identity_builder
        self.color_resolver = color_resolver
        self.settings = settings or TableSettings()
        self.lookup = lookup
        self._current: RefreshResult | None = None

    @property
    def current(self) -> RefreshResult | None:
        return self._current

    def update(self, rows: Iterable[Any] | None, *, indexed: bool = False) -> RefreshResult | None:
        if rows is None:
            self.clear()
            return None
        try:
            result = refresh_grid(
                rows,
                self.identity_builder,
                self.color_resolver,
                settings=self.settings,
                lookup=self.lookup,
                indexed=indexed,
            )
        except Exception as e:
            # 直前のグリッドを保持したまま呼び出し元へ
            logger.warning(f"refresh discarded, keeping previous grid: {e}")
            raise RefreshError(str(e)) from e
        self._current = result
        return result

    def clear(self) -> None:
        self._current = None

    def find(self, x: int, y: int) -> NormalizedRecord | None:
        """Resolve a rendered cell back to its record (None if empty or no grid)."""
        if self._current is None:
            return None
        return self._current.projection.find(x, y)
