from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import LOOKUP_SCAN, GridConfig, TableSettings

"""Config loader.

Responsibilities:
- Load the YAML config (default config/matrix.yml)
- Validate it against config_schema.json (unknown keys are rejected)
- Apply defaults (table settings, lookup=scan, no extra NA strings)
"""

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/matrix.yml")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against JSON schema.

    Raises:
        ConfigError: If the schema file is missing or invalid, or the config
            data fails validation (missing keys, wrong types, extra keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> GridConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    table_raw = data.get("table") or {}
    defaults = TableSettings()
    table = TableSettings(
        table_color=table_raw.get("table_color", defaults.table_color),
        table_thickness=table_raw.get("table_thickness", defaults.table_thickness),
        cell_font_size=table_raw.get("cell_font_size", defaults.cell_font_size),
    )
    return GridConfig(
        source=data["source"],
        sheet=data.get("sheet"),
        table=table,
        category_colors={str(k): v for k, v in (data.get("category_colors") or {}).items()},
        lookup=data.get("lookup", LOOKUP_SCAN),
        na_values=list(data.get("na_values") or []),
    )
