"""Domain models for the sparse matrix grid.

This package contains the record, cell, identity and configuration models
shared by the normalizer, the projector and the refresh services.
"""

from .config_models import GridConfig, TableSettings
from .error_record import ErrorRecord
from .grid_cell import CellKind, GridCell
from .identity import RowIdentity, row_identity_builder
from .normalized_record import NormalizedRecord, RowShape

__all__ = [
    # Configuration models
    "GridConfig",
    "TableSettings",
    # Row / grid models
    "NormalizedRecord",
    "RowShape",
    "GridCell",
    "CellKind",
    "RowIdentity",
    "row_identity_builder",
    # Logging
    "ErrorRecord",
]
