"""Schema management entities."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SchemaError(Exception):
    """Raised for schema parsing or rewriting failures."""


class SchemaParseError(SchemaError):
    """Raised when schema text is not well-formed JSON."""


class SchemaStructureError(SchemaError):
    """Raised when a schema document does not have the expected shape."""


class JsonKind(Enum):
    """Tag of a JSON tree node."""

    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    OBJECT = "object"


@dataclass
class JsonNode:
    """Tagged JSON value.

    Arrays hold a list of nodes and objects an insertion-ordered dict of nodes;
    scalars hold their plain Python value.
    """

    kind: JsonKind
    value: Any = None

    @classmethod
    def from_python(cls, value: Any) -> JsonNode:
        """Build a tree from decoded JSON values."""
        if value is None:
            return cls(JsonKind.NULL)
        if isinstance(value, bool):
            return cls(JsonKind.BOOLEAN, value)
        if isinstance(value, (int, float)):
            return cls(JsonKind.NUMBER, value)
        if isinstance(value, str):
            return cls(JsonKind.STRING, value)
        if isinstance(value, list):
            return cls(JsonKind.ARRAY, [cls.from_python(item) for item in value])
        if isinstance(value, Mapping):
            return cls(
                JsonKind.OBJECT,
                {str(key): cls.from_python(child) for key, child in value.items()},
            )
        raise SchemaStructureError(f"Unsupported JSON value type: {type(value).__name__}")

    def to_python(self) -> Any:
        """Return plain decoded JSON values for serialization."""
        if self.kind is JsonKind.ARRAY:
            return [item.to_python() for item in self.value]
        if self.kind is JsonKind.OBJECT:
            return {key: child.to_python() for key, child in self.value.items()}
        return self.value

    def is_object(self) -> bool:
        return self.kind is JsonKind.OBJECT

    def has(self, key: str) -> bool:
        return self.is_object() and key in self.value

    def get(self, key: str, *, location: str = "") -> JsonNode:
        """Return the child stored under key.

        Raises:
          SchemaStructureError: If this node is not an object or the key is missing.
        """
        label = location or key
        if not self.is_object():
            raise SchemaStructureError(
                f"Expected an object containing '{label}', found {self.kind.value}."
            )
        try:
            return self.value[key]
        except KeyError as exc:
            raise SchemaStructureError(f"Missing '{label}' in schema document.") from exc

    def get_object(self, key: str, *, location: str = "") -> JsonNode:
        """Return the child stored under key, requiring it to be an object."""
        child = self.get(key, location=location)
        if not child.is_object():
            raise SchemaStructureError(
                f"Expected '{location or key}' to be an object, found {child.kind.value}."
            )
        return child

    def set(self, key: str, child: JsonNode) -> None:
        self._require_object(key)
        self.value[key] = child

    def remove(self, key: str) -> JsonNode:
        self._require_object(key)
        try:
            return self.value.pop(key)
        except KeyError as exc:
            raise SchemaStructureError(f"Missing '{key}' in schema document.") from exc

    def items(self) -> Iterator[tuple[str, JsonNode]]:
        self._require_object()
        yield from list(self.value.items())

    def rename_key(self, old_key: str, new_key: str) -> bool:
        """Move the value stored under old_key to new_key.

        The new key keeps its position when it already exists and is appended
        otherwise. Returns False and leaves the node untouched when old_key is absent.
        """
        self._require_object(old_key)
        if old_key not in self.value:
            return False
        self.set(new_key, self.value[old_key])
        self.remove(old_key)
        return True

    def _require_object(self, key: str = "") -> None:
        if not self.is_object():
            target = f" to access '{key}'" if key else ""
            raise SchemaStructureError(f"Expected an object{target}, found {self.kind.value}.")


def string_node(value: str) -> JsonNode:
    return JsonNode(JsonKind.STRING, value)


@dataclass
class RewriteReport:
    """Locations touched by one rewrite."""

    rewritten_definitions: list[str] = field(default_factory=list)
    rewritten_properties: list[str] = field(default_factory=list)
    skipped_locations: list[str] = field(default_factory=list)
