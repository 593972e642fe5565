"""Schema text loading and serialization service."""

from __future__ import annotations

import json
from typing import NoReturn

from .schema_models import JsonNode, SchemaParseError

JSON_INDENT = 2


def load_schema_text(text: str) -> JsonNode:
    """Parse schema text into a typed JSON tree."""
    try:
        decoded = json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise SchemaParseError(f"Invalid JSON schema: {exc}") from exc
    return JsonNode.from_python(decoded)


def dump_schema_text(node: JsonNode) -> str:
    """Serialize a tree as 2-space indented JSON, keeping key order and non-ASCII text."""
    return json.dumps(node.to_python(), indent=JSON_INDENT, ensure_ascii=False)


def _reject_constant(name: str) -> NoReturn:
    raise SchemaParseError(f"Invalid JSON schema: unsupported constant {name}")
