from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.options import OutputFormat, ParseOptions

"""Batch configuration loader.

Responsibilities:
- Load the YAML config (default ``localizekit.yml``, or ``$LOCALIZEKIT_CONFIG``)
- Validate it against the bundled ``config_schema.json``
- Apply defaults (separator ".", nested, escape decoding, JSON, one file per language)
"""

__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "BatchConfig",
    "ConfigError",
    "load_config",
    "resolve_config_path",
]

CONFIG_ENV_VAR = "LOCALIZEKIT_CONFIG"
DEFAULT_CONFIG_PATH = Path("localizekit.yml")
SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_LOGS_DIR = "logs"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class BatchConfig:
    source_directory: str
    output_directory: str
    options: ParseOptions
    split_languages: bool = True
    logs_directory: str = DEFAULT_LOGS_DIR


def resolve_config_path(explicit: str | Path | None = None) -> Path:
    """Pick the config path: explicit argument, then the environment, then the default."""
    if explicit:
        return Path(explicit)
    env = os.getenv(CONFIG_ENV_VAR)
    if env:
        return Path(env)
    return DEFAULT_CONFIG_PATH


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: schema file missing or unreadable, or the data violates it
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


def load_config(path: Path) -> BatchConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    options = ParseOptions(
        separator=data.get("separator", "."),
        nested=data.get("nested", True),
        output_format=OutputFormat(data.get("output_format", OutputFormat.JSON.value)),
        process_escapes=data.get("process_escapes", True),
    )
    return BatchConfig(
        source_directory=data["source_directory"],
        output_directory=data["output_directory"],
        options=options,
        split_languages=data.get("split_languages", True),
        logs_directory=data.get("logs_directory", DEFAULT_LOGS_DIR),
    )
