"""Schema rewrite service tests."""

from __future__ import annotations

import json

import pytest
from config_schema_rewriter.configuration.runtime_settings import RewriteRules
from config_schema_rewriter.schema_management import (
    RewriteReport,
    SchemaParseError,
    SchemaStructureError,
    load_schema_text,
    rewrite_schema,
    rewrite_schema_text,
)


def _rewrite(document: dict, rules: RewriteRules | None = None) -> dict:
    text = rewrite_schema_text(json.dumps(document), rules or RewriteRules())
    return json.loads(text)


def _wrap(config: dict, **siblings: dict) -> dict:
    return {"$defs": {"Config": config, **siblings}}


def test_extracts_config_definition_and_discards_siblings() -> None:
    result = _rewrite(_wrap({"$defs": {}, "properties": {}}, Other={}))

    assert result == {"$defs": {}, "properties": {}, "$id": "aviutl2.config.schema.json"}


def test_overwrites_existing_id_in_place() -> None:
    text = rewrite_schema_text(
        json.dumps(_wrap({"$id": "Config.json", "$defs": {}})), RewriteRules()
    )

    assert list(json.loads(text)) == ["$id", "$defs"]
    assert json.loads(text)["$id"] == "aviutl2.config.schema.json"


def test_rewrites_record_prefixed_definitions() -> None:
    result = _rewrite(_wrap({"$defs": {"RecordFoo": {"unevaluatedProperties": False}}}))

    assert result["$defs"]["RecordFoo"] == {"additionalProperties": False}


def test_leaves_non_matching_definitions_untouched() -> None:
    widget = {"type": "object", "unevaluatedProperties": True}
    lowercase = {"unevaluatedProperties": {"type": "string"}}

    result = _rewrite(_wrap({"$defs": {"Widget": widget, "recordLower": lowercase}}))

    assert result["$defs"]["Widget"] == widget
    assert result["$defs"]["recordLower"] == lowercase


def test_skips_record_definition_without_unevaluated_properties() -> None:
    report = RewriteReport()
    text = rewrite_schema_text(
        json.dumps(_wrap({"$defs": {"RecordEmpty": {"type": "object"}}})),
        RewriteRules(),
        report,
    )

    assert json.loads(text)["$defs"]["RecordEmpty"] == {"type": "object"}
    assert report.rewritten_definitions == []
    assert report.skipped_locations == ["$defs.RecordEmpty"]


def test_rewrites_configured_property_path() -> None:
    config = {
        "$defs": {},
        "properties": {
            "build_group": {"type": "object", "unevaluatedProperties": {"type": "array"}},
            "other": {"unevaluatedProperties": False},
        },
    }

    result = _rewrite(_wrap(config), RewriteRules(property_paths=("build_group",)))

    assert result["properties"]["build_group"] == {
        "type": "object",
        "additionalProperties": {"type": "array"},
    }
    assert result["properties"]["other"] == {"unevaluatedProperties": False}


def test_property_paths_are_not_rewritten_by_default() -> None:
    config = {"$defs": {}, "properties": {"build_group": {"unevaluatedProperties": True}}}

    result = _rewrite(_wrap(config))

    assert result["properties"]["build_group"] == {"unevaluatedProperties": True}


def test_rewrites_nested_dotted_property_path() -> None:
    config = {
        "$defs": {},
        "properties": {
            "release": {
                "type": "object",
                "properties": {"targets": {"unevaluatedProperties": False}},
            }
        },
    }

    result = _rewrite(_wrap(config), RewriteRules(property_paths=("release.targets",)))

    assert result["properties"]["release"]["properties"]["targets"] == {
        "additionalProperties": False
    }


def test_disabled_prefix_skips_definition_iteration() -> None:
    config = {"properties": {}, "$defs": {"RecordFoo": {"unevaluatedProperties": False}}}

    result = _rewrite(_wrap(config), RewriteRules(definition_prefix=None))

    assert result["$defs"]["RecordFoo"] == {"unevaluatedProperties": False}


def test_custom_definition_name_and_id() -> None:
    document = {"$defs": {"Settings": {"$defs": {}}, "Config": {"$defs": {}}}}

    result = _rewrite(document, RewriteRules(definition_name="Settings", schema_id="s.json"))

    assert result == {"$defs": {}, "$id": "s.json"}


def test_rewrite_is_idempotent_on_its_own_output() -> None:
    config = {
        "$defs": {
            "RecordFoo": {"unevaluatedProperties": {"$ref": "#/$defs/Foo"}},
            "Foo": {"type": "string"},
        },
        "properties": {"build_group": {"unevaluatedProperties": False}},
    }
    rules = RewriteRules(property_paths=("build_group",))

    first = _rewrite(_wrap(config), rules)
    second = _rewrite(_wrap(first), rules)

    assert second == first


def test_preserves_untouched_substructure() -> None:
    nested = {
        "type": "object",
        "properties": {
            "values": {"type": "array", "items": [1, 2.5, None, "x", {"deep": [True, False]}]},
            "unevaluatedProperties": {"const": "not a keyword here"},
        },
        "examples": [{"a": {"b": {"c": []}}}],
    }
    config = {"$defs": {}, "properties": {"payload": nested}}

    result = _rewrite(_wrap(config))

    assert result["properties"]["payload"] == nested


def test_missing_config_definition_raises_structure_error() -> None:
    with pytest.raises(SchemaStructureError, match=r"\$defs.Config"):
        rewrite_schema(load_schema_text('{"$defs": {"Other": {}}}'), RewriteRules())


def test_missing_root_defs_raises_structure_error() -> None:
    with pytest.raises(SchemaStructureError, match=r"\$defs"):
        rewrite_schema(load_schema_text('{"type": "object"}'), RewriteRules())


def test_non_object_root_raises_structure_error() -> None:
    with pytest.raises(SchemaStructureError, match="root must be an object"):
        rewrite_schema(load_schema_text("[1, 2]"), RewriteRules())


def test_config_without_nested_defs_raises_structure_error() -> None:
    with pytest.raises(SchemaStructureError, match=r"\$defs"):
        rewrite_schema(load_schema_text('{"$defs": {"Config": {}}}'), RewriteRules())


def test_non_object_record_definition_raises_structure_error() -> None:
    text = json.dumps(_wrap({"$defs": {"RecordFoo": True}}))

    with pytest.raises(SchemaStructureError, match=r"\$defs.RecordFoo"):
        rewrite_schema_text(text, RewriteRules())


def test_missing_property_path_raises_structure_error() -> None:
    text = json.dumps(_wrap({"$defs": {}, "properties": {}}))

    with pytest.raises(SchemaStructureError, match="properties.build_group"):
        rewrite_schema_text(text, RewriteRules(property_paths=("build_group",)))


def test_invalid_schema_text_raises_parse_error() -> None:
    with pytest.raises(SchemaParseError):
        load_schema_text("{not-valid-json}")


def test_non_standard_constants_raise_parse_error() -> None:
    with pytest.raises(SchemaParseError, match="NaN"):
        load_schema_text('{"minimum": NaN}')


def test_output_uses_two_space_indent_and_keeps_non_ascii() -> None:
    config = {"$defs": {}, "description": "設定ファイル"}

    text = rewrite_schema_text(json.dumps(_wrap(config)), RewriteRules())

    assert text == (
        "{\n"
        '  "$defs": {},\n'
        '  "description": "設定ファイル",\n'
        '  "$id": "aviutl2.config.schema.json"\n'
        "}"
    )
