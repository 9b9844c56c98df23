from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import SimilarityMetric, SimilaritySettings

"""Config loader.

Responsibilities:
- Load an optional YAML config (explicit path or TABCONSOLIDATE_CONFIG)
- Validate it against config_schema.json (unknown keys rejected)
- Apply defaults for missing keys
CLI options are merged on top of the result by the CLI, not here.
"""

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
CONFIG_ENV_VAR = "TABCONSOLIDATE_CONFIG"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ConsolidateConfig:
    delimiter: str = "\t"
    filler: str = ""
    key_columns: list[int] = field(default_factory=list)
    allow_single_column: bool = False
    allow_multi_merge: bool = False
    warn_unmatched: bool = False
    similarity: SimilaritySettings | None = None
    report_path: str | None = None
    encoding: str = "utf-8"


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the bundled JSON schema.

    Raises:
        ConfigError: schema file missing / not valid JSON, or the data
            violates the schema (unknown keys, wrong types, ...)
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


def resolve_config_path(explicit: Path | None) -> Path | None:
    """--config wins; otherwise the environment variable; otherwise no config."""
    if explicit is not None:
        return explicit
    env_value = os.getenv(CONFIG_ENV_VAR)
    return Path(env_value) if env_value else None


def load_config(path: Path | None) -> ConsolidateConfig:
    if path is None:
        return ConsolidateConfig()
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    similarity = None
    sim_raw = data.get("similarity")
    if sim_raw is not None:
        similarity = SimilaritySettings(
            threshold=float(sim_raw["threshold"]),
            metric=SimilarityMetric(sim_raw.get("metric", "lcs")),
        )
    return ConsolidateConfig(
        delimiter=data.get("delimiter", "\t"),
        filler=data.get("filler", ""),
        key_columns=list(data.get("key_columns", [])),
        allow_single_column=data.get("allow_single_column", False),
        allow_multi_merge=data.get("allow_multi_merge", False),
        warn_unmatched=data.get("warn_unmatched", False),
        similarity=similarity,
        report_path=data.get("report_path"),
        encoding=data.get("encoding", "utf-8"),
    )
