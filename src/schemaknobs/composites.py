"""Composite validators: arrays, objects, unions, literals and ``any``.

Composites never stop at the first failing child. Every item and every
field is validated so that a single call reports all problems, each one
located by its path (``tags[2]``, ``user.email``).
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any

from .base import MISSING, Validator
from .canonical import canonical_key
from .exceptions import SchemaDefinitionError, ValueTooDeepError
from .paths import join_field, join_index
from .result import ValidationContext, ValidationResult


def _require_validator(candidate: Any, role: str) -> Validator:
    if not isinstance(candidate, Validator):
        raise SchemaDefinitionError(
            f"{role} must be a Validator, got {type(candidate).__name__}",
            context={"role": role, "got": type(candidate).__name__},
        )
    return candidate


class ArrayValidator(Validator):
    """Validates a list (or tuple) whose items all match one validator.

    The validated value is always a ``list`` holding the per-item results
    (which may have been transformed by the item validator).
    """

    def __init__(self, item_validator: Validator):
        super().__init__()
        self.item_validator = _require_validator(item_validator, "Array item validator")
        self.min_items: int | None = None
        self.max_items: int | None = None
        self.unique_items = False

    def min(self, count: int) -> ArrayValidator:
        """Require at least ``count`` items."""
        self._check_count("min", count)
        if self.max_items is not None and count > self.max_items:
            raise SchemaDefinitionError(
                f"min ({count}) cannot be greater than max ({self.max_items})",
                context={"min": count, "max": self.max_items},
            )
        self.min_items = count
        return self

    def max(self, count: int) -> ArrayValidator:
        """Allow at most ``count`` items."""
        self._check_count("max", count)
        if self.min_items is not None and count < self.min_items:
            raise SchemaDefinitionError(
                f"min ({self.min_items}) cannot be greater than max ({count})",
                context={"min": self.min_items, "max": count},
            )
        self.max_items = count
        return self

    def unique(self) -> ArrayValidator:
        """Reject arrays containing structurally equal items."""
        self.unique_items = True
        return self

    @staticmethod
    def _check_count(name: str, count: Any) -> None:
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise SchemaDefinitionError(
                f"{name} item count must be a non-negative integer, got {count!r}",
                context={name: count},
            )

    def _validate(self, value: Any, path: str, context: ValidationContext) -> ValidationResult:
        if not isinstance(value, (list, tuple)):
            return ValidationResult.failure(self._format_error("Must be an array", path))

        result = ValidationResult.success(None)
        if self.min_items is not None and len(value) < self.min_items:
            result.add_error(self._format_error(f"Must have at least {self.min_items} items", path))
        if self.max_items is not None and len(value) > self.max_items:
            result.add_error(self._format_error(f"Must have at most {self.max_items} items", path))

        if self.unique_items:
            duplicates, too_deep = _duplicate_indices(value)
            for index in too_deep:
                result.add_error(self._format_error("Value too deep", join_index(path, index)))
            if duplicates:
                indices = ", ".join(str(i) for i in duplicates)
                result.add_error(self._format_error(f"Duplicate items found at indices: {indices}", path))

        items = []
        for index, item in enumerate(value):
            item_result = self.item_validator.validate(item, join_index(path, index), context)
            if item_result.is_valid:
                items.append(item_result.value)
            else:
                result.merge(item_result)

        if not result.is_valid:
            return ValidationResult.failure(result.errors)
        return ValidationResult.success(items)


def _duplicate_indices(items: Iterable[Any]) -> tuple[list[int], list[int]]:
    """Indices of items already seen earlier, and of items too deep to compare."""
    seen: set[tuple] = set()
    duplicates = []
    too_deep = []
    for index, item in enumerate(items):
        try:
            key = canonical_key(item)
        except ValueTooDeepError:
            too_deep.append(index)
            continue
        if key in seen:
            duplicates.append(index)
        else:
            seen.add(key)
    return duplicates, too_deep


class ObjectValidator(Validator):
    """Validates a mapping against a declared set of fields.

    Fields are validated in declaration order. Keys that are missing from
    the input reach the field validator as ``MISSING``, so only optional
    fields may be left out. Unknown keys are rejected in strict mode (the
    default) and copied unchanged in passthrough mode.

    ``required()`` is an independent, key-presence check: a listed key
    must appear in the input even if its field validator is optional.
    """

    def __init__(self, schema: Mapping[str, Validator] | None = None):
        super().__init__()
        self.schema: dict[str, Validator] = {}
        self.allow_unknown_keys = False
        self.required_keys: dict[str, None] = {}
        if schema:
            self.extend(schema)

    def extend(self, schema: Mapping[str, Validator]) -> ObjectValidator:
        """Add fields, replacing any existing field of the same name.

        Returns:
            Self for chaining
        """
        for name, validator in schema.items():
            self.schema[name] = _require_validator(validator, f"Field '{name}'")
        return self

    def strict(self) -> ObjectValidator:
        """Reject keys that are not declared in the schema (default)."""
        self.allow_unknown_keys = False
        return self

    def passthrough(self) -> ObjectValidator:
        """Copy undeclared keys into the output without validating them."""
        self.allow_unknown_keys = True
        return self

    def required(self, keys: str | Iterable[str]) -> ObjectValidator:
        """Require one or more keys to be present in the input.

        Args:
            keys: A single key name or an iterable of names

        Returns:
            Self for chaining
        """
        if isinstance(keys, str):
            keys = [keys]
        for key in keys:
            self.required_keys[key] = None
        return self

    def _validate(self, value: Any, path: str, context: ValidationContext) -> ValidationResult:
        if not isinstance(value, Mapping):
            return ValidationResult.failure(self._format_error("Must be an object", path))

        result = ValidationResult.success(None)
        output: dict[str, Any] = {}

        for key in self.required_keys:
            if key not in value:
                result.add_error(self._format_error(f"Missing required field: {key}", path))

        for name, validator in self.schema.items():
            field_result = validator.validate(value.get(name, MISSING), join_field(path, name), context)
            if not field_result.is_valid:
                result.merge(field_result)
            elif field_result.value is not MISSING:
                output[name] = field_result.value

        for key in value:
            if key in self.schema:
                continue
            if self.allow_unknown_keys:
                output[key] = value[key]
            else:
                result.add_error(self._format_error(f"Unknown field: {key}", path))

        if not result.is_valid:
            return ValidationResult.failure(result.errors)
        return ValidationResult.success(output)

    def __repr__(self) -> str:
        mode = "passthrough" if self.allow_unknown_keys else "strict"
        return f"ObjectValidator(fields={list(self.schema)}, mode={mode})"


class UnionValidator(Validator):
    """Accepts a value matching any one of several validators.

    Candidates are tried in order and the first successful result is
    returned as-is (including any transform that candidate applied).
    """

    def __init__(self, validators: Iterable[Validator]):
        super().__init__()
        self.validators = [
            _require_validator(v, f"Union candidate {i}") for i, v in enumerate(validators)
        ]
        if not self.validators:
            raise SchemaDefinitionError("union() requires at least one validator")

    def _validate(self, value: Any, path: str, context: ValidationContext) -> ValidationResult:
        candidate_errors = []
        for validator in self.validators:
            candidate = validator.validate(value, path, context)
            if candidate.is_valid:
                return candidate
            candidate_errors.extend(candidate.errors)

        return ValidationResult.failure(
            [self._format_error("Value does not match any of the expected types", path)]
            + candidate_errors
        )


class LiteralValidator(Validator):
    """Accepts exactly one value.

    Comparison is strict: ``True`` does not match ``1`` and ``"1"`` does
    not match ``1``. Lists and dicts compare structurally.

    The expected value is captured when the validator is built; later
    mutation of the object passed in has no effect.
    """

    def __init__(self, expected: Any):
        super().__init__()
        self.expected = expected
        try:
            self.expected_key = canonical_key(expected)
        except ValueTooDeepError as e:
            raise SchemaDefinitionError(
                "Literal value nests too many containers",
                context={"validator": type(self).__name__},
            ) from e
        self.rendered = _render(expected)

    def _validate(self, value: Any, path: str, context: ValidationContext) -> ValidationResult:
        try:
            key = canonical_key(value)
        except ValueTooDeepError:
            return ValidationResult.failure(self._format_error("Value too deep", path))
        if key != self.expected_key:
            return ValidationResult.failure(self._format_error(f"Must be exactly: {self.rendered}", path))
        return ValidationResult.success(value)

    def __repr__(self) -> str:
        return f"LiteralValidator({self.expected!r})"


def _render(value: Any) -> str:
    """JSON text of value, or its repr when it has no JSON form (e.g. tuple keys)."""
    try:
        return json.dumps(value, default=str)
    except (TypeError, ValueError):
        return repr(value)


class AnyValidator(Validator):
    """Accepts any present value unchanged."""

    def _validate(self, value: Any, path: str, context: ValidationContext) -> ValidationResult:
        return ValidationResult.success(value)
