"""Tests for building validators from configuration."""

import logging
from datetime import datetime, timezone

import pytest

from schemaknobs import (
    ArrayValidator,
    ConfigurationError,
    ObjectValidator,
    OperationError,
    Schema,
    SchemaDefinitionError,
    StringValidator,
    schema_factory,
)

USER_YAML = """
type: object
mode: strict
required: [username]
fields:
  username:
    type: string
    min_length: 3
    max_length: 20
    pattern: "^[a-zA-Z0-9_]+$"
    transforms: [strip, lower]
  email:
    type: string
    format: email
  age:
    type: number
    integer: true
    min: 13
    optional: true
  tags:
    type: array
    items: {type: string}
    unique: true
    optional: true
  id:
    type: union
    options:
      - {type: string, min_length: 1}
      - {type: number, positive: true}
    optional: true
"""


class TestSchemaFactory:
    """Test SchemaFactory with real validators."""

    def test_from_yaml(self, factory):
        validator = factory.from_yaml(USER_YAML)
        assert isinstance(validator, ObjectValidator)
        assert list(validator.schema) == ["username", "email", "age", "tags", "id"]

        result = validator.validate({"username": "John_Doe", "email": "john@example.com", "id": 7})
        assert result.is_valid
        assert result.value == {"username": "john_doe", "email": "john@example.com", "id": 7}

    def test_from_yaml_reports_errors(self, factory):
        validator = factory.from_yaml(USER_YAML)
        result = validator.validate({"email": "nope", "tags": ["a", "a"], "age": 12.5, "x": 1})
        assert result.errors == [
            "Missing required field: username",
            "Field is required at username",
            "Must be a valid email address at email",
            "Must be at least 13 at age",
            "Must be an integer at age",
            "Duplicate items found at indices: 1 at tags",
            "Unknown field: x",
        ]

    def test_create_keyword_config(self, factory):
        validator = factory.create(type="string", enum=["a", "b"], message="Pick a or b")
        assert isinstance(validator, StringValidator)
        assert validator.validate("c").errors == ["Pick a or b"]

    def test_build_matches_fluent_schema(self, factory):
        config = {
            "type": "array",
            "items": {"type": "number", "min": 0, "max": 10},
            "min": 1,
            "max": 3,
        }
        built = factory.build(config)
        fluent = Schema.array(Schema.number().min(0).max(10)).min(1).max(3)
        for value in ([], [1, 2], [11], [1, 2, 3, 4], "x"):
            assert built.validate(value) == fluent.validate(value)

    def test_every_builtin_type(self, factory):
        assert factory.build({"type": "boolean"}).validate(True).is_valid
        assert factory.build({"type": "any"}).validate(object()).is_valid
        assert factory.build({"type": "literal", "value": "on"}).validate("off").errors == [
            'Must be exactly: "on"'
        ]
        dates = factory.build({"type": "date", "min": "2020-01-01", "max": "2030-01-01"})
        assert dates.validate("2025-05-05").value == datetime(2025, 5, 5, tzinfo=timezone.utc)
        assert not dates.validate("2031-01-01").is_valid
        assert factory.build({"type": "string", "format": "url"}).validate("ftp://x").errors == [
            "Must be a valid URL"
        ]

    def test_passthrough_mode(self, factory):
        validator = factory.build({"type": "object", "mode": "passthrough", "fields": {}})
        assert validator.validate({"free": 1}).value == {"free": 1}

    def test_literal_none_value(self, factory):
        validator = factory.build({"type": "literal", "value": None, "optional": True})
        assert validator.validate(None).is_valid

    def test_custom_type(self, factory):
        def build_slug(factory, config):
            return Schema.string().pattern(r"^[a-z0-9-]+$", "Must be a slug").max_length(
                config.get("max_length", 50)
            )

        factory.register_type("slug", build_slug)
        validator = factory.build({
            "type": "object",
            "fields": {"slug": {"type": "slug", "max_length": 5, "optional": True}},
        })
        assert validator.validate({"slug": "ok-1"}).is_valid
        assert validator.validate({"slug": "Not A Slug"}).errors == [
            "Must be at most 5 characters long at slug",
            "Must be a slug at slug",
        ]
        assert validator.validate({}).is_valid

    def test_custom_transform(self, factory):
        factory.register_transform("collapse", lambda s: " ".join(s.split()))
        validator = factory.build({"type": "string", "transforms": ["strip", "collapse", "title"]})
        assert validator.validate("  hello   big  world ").value == "Hello Big World"

    def test_registrations_are_per_factory(self, factory):
        factory.register_type("slug", lambda f, c: Schema.string())
        assert "slug" in factory.types
        assert "slug" not in schema_factory.types

    def test_duplicate_registration(self, factory):
        with pytest.raises(OperationError):
            factory.register_type("string", lambda f, c: Schema.string())
        factory.register_type("string", lambda f, c: Schema.string().min_length(1), allow_overwrite=True)
        assert not factory.build({"type": "string"}).validate("").is_valid

    def test_unknown_option_logs_warning(self, factory, caplog):
        with caplog.at_level(logging.WARNING, logger="schemaknobs.factory"):
            validator = factory.build({"type": "string", "minlength": 3})
        assert validator.validate("a").is_valid
        assert any("Ignoring unknown option 'minlength'" in r.message for r in caplog.records)

    def test_build_logs_info(self, factory, caplog):
        with caplog.at_level(logging.INFO, logger="schemaknobs.factory"):
            factory.build({"type": "number"})
        assert any("Built schema" in r.message for r in caplog.records)


class TestSchemaFactoryErrors:
    """Test configuration errors."""

    def test_unknown_type(self, factory):
        with pytest.raises(ConfigurationError) as exc_info:
            factory.build({"type": "object", "fields": {"name": {"type": "strng"}}})
        assert exc_info.value.context["where"] == "<root>.fields.name"
        assert "string" in exc_info.value.context["available"]

    def test_missing_type(self, factory):
        with pytest.raises(ConfigurationError, match="missing 'type'"):
            factory.build({"min_length": 3})

    def test_node_not_mapping(self, factory):
        with pytest.raises(ConfigurationError):
            factory.build({"type": "array", "items": "string"})

    def test_array_requires_items(self, factory):
        with pytest.raises(ConfigurationError, match="requires 'items'"):
            factory.build({"type": "array"})

    def test_union_requires_options(self, factory):
        with pytest.raises(ConfigurationError):
            factory.build({"type": "union", "options": []})

    def test_literal_requires_value(self, factory):
        with pytest.raises(ConfigurationError):
            factory.build({"type": "literal"})

    def test_unknown_format_mode_and_transform(self, factory):
        with pytest.raises(ConfigurationError):
            factory.build({"type": "string", "format": "phone"})
        with pytest.raises(ConfigurationError):
            factory.build({"type": "object", "mode": "loose"})
        with pytest.raises(ConfigurationError):
            factory.build({"type": "string", "transforms": ["reverse"]})

    def test_fields_must_be_mapping(self, factory):
        with pytest.raises(ConfigurationError):
            factory.build({"type": "object", "fields": [{"type": "string"}]})

    def test_invalid_yaml(self, factory):
        with pytest.raises(ConfigurationError, match="Invalid schema YAML"):
            factory.from_yaml("type: [unclosed")

    def test_yaml_not_mapping(self, factory):
        with pytest.raises(ConfigurationError):
            factory.from_yaml("- just\n- a list\n")
        with pytest.raises(ConfigurationError):
            factory.from_yaml("")

    def test_bad_option_values_surface_definition_errors(self, factory):
        with pytest.raises(SchemaDefinitionError):
            factory.build({"type": "string", "min_length": -2})
        with pytest.raises(SchemaDefinitionError):
            factory.build({"type": "array", "items": {"type": "any"}, "min": 3, "max": 1})


def test_default_factory_builds_arrays():
    validator = schema_factory.build({"type": "array", "items": {"type": "string"}})
    assert isinstance(validator, ArrayValidator)
    assert validator.validate(["a", 1]).errors == ["Must be a string at [1]"]
