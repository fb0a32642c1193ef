"""Tests for the exception hierarchy."""

import pytest

from schemaknobs import (
    ConfigurationError,
    NotFoundError,
    OperationError,
    Schema,
    SchemaDefinitionError,
    SchemaknobsError,
    ValueTooDeepError,
)


class TestSchemaknobsError:
    """Test the base SchemaknobsError class."""

    def test_basic_exception(self):
        error = SchemaknobsError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.context == {}
        assert error.details == {}

    def test_exception_with_context(self):
        error = SchemaknobsError("Bad bound", context={"min_length": -1})
        assert error.context == {"min_length": -1}
        assert error.details is error.context

    def test_details_takes_precedence(self):
        error = SchemaknobsError("Error", context={"key": "context"}, details={"key": "details"})
        assert error.context == {"key": "details"}

    @pytest.mark.parametrize(
        "error_class",
        [SchemaDefinitionError, ConfigurationError, NotFoundError, OperationError, ValueTooDeepError],
    )
    def test_subclasses_catchable_as_base(self, error_class):
        with pytest.raises(SchemaknobsError):
            raise error_class("boom")


class TestRaisedErrors:
    """Test that definition mistakes carry useful context."""

    def test_definition_error_context(self):
        with pytest.raises(SchemaDefinitionError) as exc_info:
            Schema.string().min_length(-1)
        assert exc_info.value.context == {"validator": "StringValidator", "min_length": -1}

    def test_validation_never_raises(self):
        validator = Schema.object({"a": Schema.array(Schema.number().transform(lambda n: 1 / n))})
        result = validator.validate({"a": [1, 0, "x"], "b": object()})
        assert not result.is_valid
        assert result.errors == [
            "Transformation failed: division by zero at a[1]",
            "Must be a valid number at a[2]",
            "Unknown field: b",
        ]
