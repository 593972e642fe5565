"""Rewrite run use-case service."""

from __future__ import annotations

import logging
from pathlib import Path

from config_schema_rewriter.configuration import RewriteSettings
from config_schema_rewriter.schema_management import (
    RewriteReport,
    SchemaError,
    rewrite_schema_text,
)

from .run_contracts import RewriteOutcome, RewriteRequest

logger = logging.getLogger(__name__)


class RunExecutionError(Exception):
    """Raised when a rewrite run cannot be completed."""


def build_rewrite_request(settings: RewriteSettings) -> RewriteRequest:
    """Build a run request from a loaded rewrite profile."""
    return RewriteRequest(
        input_path=settings.input_path,
        output_path=settings.output_path,
        rules=settings.rules,
    )


def execute_schema_rewrite_run(request: RewriteRequest) -> RewriteOutcome:
    """Read, rewrite and write one schema document.

    The output file is only opened once the rewritten text is complete, so a
    parse or structure failure leaves any existing output untouched.
    """
    input_path = Path(request.input_path)
    output_path = Path(request.output_path)

    logger.info("Reading schema from %s", input_path)
    try:
        text = input_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise RunExecutionError(f"Failed to read input schema {input_path}: {exc}") from exc

    report = RewriteReport()
    try:
        rewritten = rewrite_schema_text(text, request.rules, report)
    except SchemaError as exc:
        raise RunExecutionError(f"Failed to rewrite schema {input_path}: {exc}") from exc
    for location in report.skipped_locations:
        logger.info("Skipped %s: no unevaluatedProperties", location)

    logger.info("Writing schema to %s", output_path)
    try:
        output_path.write_text(rewritten, encoding="utf-8", newline="\n")
    except OSError as exc:
        raise RunExecutionError(f"Failed to write output schema {output_path}: {exc}") from exc

    logger.info(
        "Rewrote %d definitions and %d properties",
        len(report.rewritten_definitions),
        len(report.rewritten_properties),
    )
    return RewriteOutcome(
        output_path=output_path.resolve(),
        rewritten_definitions=tuple(report.rewritten_definitions),
        rewritten_properties=tuple(report.rewritten_properties),
    )
