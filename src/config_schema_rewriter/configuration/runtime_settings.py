"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_DEFINITION_NAME = "Config"
DEFAULT_SCHEMA_ID = "aviutl2.config.schema.json"
DEFAULT_DEFINITION_PREFIX = "Record"


@dataclass(frozen=True)
class RewriteRules:
    """Where the rewrite promotes a definition and replaces unevaluatedProperties."""

    definition_name: str = DEFAULT_DEFINITION_NAME
    schema_id: str = DEFAULT_SCHEMA_ID
    definition_prefix: str | None = DEFAULT_DEFINITION_PREFIX
    property_paths: tuple[str, ...] = ()


@dataclass(frozen=True)
class RewriteSettings:
    """Top-level rewrite profile aggregate."""

    path: Path
    input_path: Path
    output_path: Path
    rules: RewriteRules
