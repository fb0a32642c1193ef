"""Schema: the entry point for building validators.

Example:
    ```python
    from schemaknobs import Schema

    user = Schema.object({
        "name": Schema.string().min_length(2),
        "email": Schema.string().email(),
        "age": Schema.number().integer().min(0).optional(),
        "tags": Schema.array(Schema.string()).unique().optional(),
    }).strict()

    result = user.validate({"name": "Ada", "email": "ada@example.com"})
    if result:
        save(result.value)
    else:
        for error in result.errors:
            print(error)
    ```
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .base import Validator
from .composites import (
    AnyValidator,
    ArrayValidator,
    LiteralValidator,
    ObjectValidator,
    UnionValidator,
)
from .primitives import BooleanValidator, DateValidator, NumberValidator, StringValidator


class Schema:
    """Namespace of validator constructors.

    Every call returns a new, independently configurable validator; no
    state is shared between the validators it creates.
    """

    @staticmethod
    def string() -> StringValidator:
        """Validator for text values."""
        return StringValidator()

    @staticmethod
    def number() -> NumberValidator:
        """Validator for finite real numbers (``bool`` excluded)."""
        return NumberValidator()

    @staticmethod
    def boolean() -> BooleanValidator:
        """Validator accepting only ``True`` or ``False``."""
        return BooleanValidator()

    @staticmethod
    def date() -> DateValidator:
        """Validator for dates, ISO strings and POSIX timestamps."""
        return DateValidator()

    @staticmethod
    def object(schema: Mapping[str, Validator] | None = None) -> ObjectValidator:
        """Validator for a mapping with the given field validators."""
        return ObjectValidator(schema)

    @staticmethod
    def array(item_validator: Validator) -> ArrayValidator:
        """Validator for a list whose items all satisfy ``item_validator``."""
        return ArrayValidator(item_validator)

    @staticmethod
    def union(*validators: Validator) -> UnionValidator:
        """Validator accepting the first of ``validators`` that matches."""
        return UnionValidator(validators)

    @staticmethod
    def literal(value: Any) -> LiteralValidator:
        """Validator accepting exactly ``value``."""
        return LiteralValidator(value)

    @staticmethod
    def any() -> AnyValidator:
        """Validator accepting any present value."""
        return AnyValidator()
