"""Rewrite profile loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    DEFAULT_DEFINITION_NAME,
    DEFAULT_DEFINITION_PREFIX,
    DEFAULT_SCHEMA_ID,
    RewriteRules,
    RewriteSettings,
)


class ConfigurationError(Exception):
    """Raised when the rewrite profile is invalid."""


def load_configuration(config_path: Path | str) -> RewriteSettings:
    """Load and validate the rewrite profile.

    Relative input and output paths are resolved against the directory holding
    the profile, not the current working directory.
    """
    path = Path(config_path).resolve()
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigurationError(f"Failed to read configuration file: {exc}") from exc

    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_path = path.parent
    input_path = _resolve_path(base_path, _require_non_empty_string(parsed.get("input"), "input"))
    output_path = _resolve_path(
        base_path, _require_non_empty_string(parsed.get("output"), "output")
    )
    return RewriteSettings(
        path=path,
        input_path=input_path,
        output_path=output_path,
        rules=_parse_rules(parsed),
    )


def _parse_rules(parsed: Mapping[str, Any]) -> RewriteRules:
    definition_name = _require_non_empty_string(
        parsed.get("definition", DEFAULT_DEFINITION_NAME), "definition"
    )
    schema_id = _require_non_empty_string(parsed.get("schema_id", DEFAULT_SCHEMA_ID), "schema_id")

    section = parsed.get("rewrite")
    if section is None:
        section = {}
    if not isinstance(section, Mapping):
        raise ConfigurationError("Configuration section 'rewrite' must be a mapping.")

    if "definition_prefix" in section:
        definition_prefix = _optional_prefix(section["definition_prefix"])
    else:
        definition_prefix = DEFAULT_DEFINITION_PREFIX

    return RewriteRules(
        definition_name=definition_name,
        schema_id=schema_id,
        definition_prefix=definition_prefix,
        property_paths=_normalize_property_paths(section.get("property_paths")),
    )


def _normalize_property_paths(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        candidates: Sequence[Any] = [value]
    elif isinstance(value, Sequence):
        candidates = value
    else:
        raise ConfigurationError(
            "rewrite.property_paths must be a string or list of strings."
        )
    normalized: list[str] = []
    for item in candidates:
        raw_path = _require_non_empty_string(item, "rewrite.property_paths entry")
        segments = [segment.strip() for segment in raw_path.split(".")]
        if not all(segments):
            raise ConfigurationError(
                f"rewrite.property_paths entry '{raw_path}' contains an empty segment."
            )
        path = ".".join(segments)
        if path not in normalized:
            normalized.append(path)
    return tuple(normalized)


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_prefix(value: Any) -> str | None:
    if value is None:
        return None
    return _require_non_empty_string(value, "rewrite.definition_prefix")
