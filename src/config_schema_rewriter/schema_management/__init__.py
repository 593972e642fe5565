"""Schema management exports."""

from .schema_document import dump_schema_text, load_schema_text
from .schema_models import (
    JsonKind,
    JsonNode,
    RewriteReport,
    SchemaError,
    SchemaParseError,
    SchemaStructureError,
)
from .schema_rewriting import rewrite_schema, rewrite_schema_text

__all__ = [
    "JsonKind",
    "JsonNode",
    "RewriteReport",
    "SchemaError",
    "SchemaParseError",
    "SchemaStructureError",
    "dump_schema_text",
    "load_schema_text",
    "rewrite_schema",
    "rewrite_schema_text",
]
