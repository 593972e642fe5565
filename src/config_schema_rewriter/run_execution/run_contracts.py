"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from config_schema_rewriter.configuration.runtime_settings import RewriteRules


@dataclass(frozen=True)
class RewriteRequest:
    """Input contract for executing one rewrite run."""

    input_path: Path
    output_path: Path
    rules: RewriteRules


@dataclass(frozen=True)
class RewriteOutcome:
    """Output contract for one completed rewrite run."""

    output_path: Path
    rewritten_definitions: tuple[str, ...]
    rewritten_properties: tuple[str, ...]
