"""Schema rewrite service.

Promotes one named definition to the document root, assigns the fixed
schema identifier and replaces ``unevaluatedProperties`` with
``additionalProperties`` at the configured locations.
"""

from __future__ import annotations

import logging

from config_schema_rewriter.configuration.runtime_settings import RewriteRules

from .schema_document import dump_schema_text, load_schema_text
from .schema_models import JsonNode, RewriteReport, SchemaStructureError, string_node

DEFS_KEY = "$defs"
ID_KEY = "$id"
PROPERTIES_KEY = "properties"
UNEVALUATED_PROPERTIES_KEY = "unevaluatedProperties"
ADDITIONAL_PROPERTIES_KEY = "additionalProperties"

logger = logging.getLogger(__name__)


def rewrite_schema(
    document: JsonNode, rules: RewriteRules, report: RewriteReport | None = None
) -> JsonNode:
    """Return the promoted and rewritten definition of a schema document.

    The returned node is the definition object taken from ``document`` and is
    mutated in place.

    Raises:
      SchemaStructureError: If the document, the definition or a rewrite target
        does not have the expected object shape.
    """
    report = report if report is not None else RewriteReport()
    if not document.is_object():
        raise SchemaStructureError(
            f"Schema document root must be an object, found {document.kind.value}."
        )
    definitions = document.get_object(DEFS_KEY)
    modified = definitions.get_object(
        rules.definition_name, location=f"{DEFS_KEY}.{rules.definition_name}"
    )
    modified.set(ID_KEY, string_node(rules.schema_id))

    if rules.definition_prefix is not None:
        _rewrite_prefixed_definitions(modified, rules.definition_prefix, report)
    for property_path in rules.property_paths:
        _rewrite_property_path(modified, property_path, report)
    return modified


def rewrite_schema_text(
    text: str, rules: RewriteRules, report: RewriteReport | None = None
) -> str:
    """Parse, rewrite and serialize schema text."""
    return dump_schema_text(rewrite_schema(load_schema_text(text), rules, report))


def _rewrite_prefixed_definitions(
    modified: JsonNode, prefix: str, report: RewriteReport
) -> None:
    nested = modified.get_object(DEFS_KEY)
    for name, definition in nested.items():
        if not name.startswith(prefix):
            continue
        location = f"{DEFS_KEY}.{name}"
        if not definition.is_object():
            raise SchemaStructureError(
                f"Expected '{location}' to be an object, found {definition.kind.value}."
            )
        if _replace_unevaluated_properties(definition):
            report.rewritten_definitions.append(name)
        else:
            logger.debug("No %s at %s", UNEVALUATED_PROPERTIES_KEY, location)
            report.skipped_locations.append(location)


def _rewrite_property_path(modified: JsonNode, property_path: str, report: RewriteReport) -> None:
    target = modified
    walked: list[str] = []
    for segment in property_path.split("."):
        walked.extend((PROPERTIES_KEY, segment))
        location = ".".join(walked)
        target = target.get_object(PROPERTIES_KEY, location=".".join(walked[:-1]))
        target = target.get_object(segment, location=location)
    if _replace_unevaluated_properties(target):
        report.rewritten_properties.append(property_path)
    else:
        logger.debug("No %s at %s", UNEVALUATED_PROPERTIES_KEY, ".".join(walked))
        report.skipped_locations.append(".".join(walked))


def _replace_unevaluated_properties(schema: JsonNode) -> bool:
    return schema.rename_key(UNEVALUATED_PROPERTIES_KEY, ADDITIONAL_PROPERTIES_KEY)
