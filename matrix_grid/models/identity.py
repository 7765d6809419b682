from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

"""Default identity tokens for source rows.

The grid never inspects identities; it only hands them back to the
interaction layer. Any hashable, immutable value works. RowIdentity is the
token used when the caller does not provide its own builder.
"""

__all__ = [
    "IdentityBuilder",
    "RowIdentity",
    "row_identity_builder",
]

IdentityBuilder = Callable[[int], Any]


@dataclass(frozen=True)
class RowIdentity:
    source: str  # data source name (ファイル名など)
    row_index: int  # 0-based ordinal in the source


def row_identity_builder(source: str) -> IdentityBuilder:
    """Return a builder issuing RowIdentity(source, row_index) tokens."""
    def build(row_index: int) -> RowIdentity:
        return RowIdentity(source=source, row_index=row_index)
    return build
