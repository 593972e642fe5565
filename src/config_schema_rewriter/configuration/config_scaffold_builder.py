"""Rewrite profile scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "schema-rewrite.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Rewrite profile for config-schema-rewriter.
# Relative paths are resolved against the directory containing this file.

# Schema emitted by the TypeSpec compilation step.
input: "temporary/aviutl2.config.schema.json"
# Destination of the rewritten schema, overwritten on every run.
output: "../src/schema.json"

# Definition under $defs promoted to the document root.
definition: "Config"
# Literal written to $id of the promoted definition.
schema_id: "aviutl2.config.schema.json"

rewrite:
  # Nested $defs entries starting with this prefix get
  # unevaluatedProperties replaced by additionalProperties.
  # Set to null to disable.
  definition_prefix: "Record"
  # Dotted paths under properties rewritten the same way.
  property_paths:
    - "build_group"
"""


def build_placeholder_configuration() -> str:
    """Build a YAML rewrite profile prefilled with the aviutl2 layout."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the rewrite profile scaffold to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Rewrite profile already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
