"""Validator base class: the contract shared by every validator type.

Optionality, custom messages, refinements and transforms are handled
here and nowhere else. Concrete validators implement only ``_validate``,
which is called once a value is known to be present.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from .exceptions import SchemaDefinitionError
from .paths import with_location
from .result import ValidationContext, ValidationResult

logger = logging.getLogger(__name__)


class _Missing:
    """Marker for a key that is absent from an input mapping."""

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


def is_absent(value: Any) -> bool:
    """True for ``None`` and for the ``MISSING`` sentinel."""
    return value is None or value is MISSING


class Validator(ABC):
    """Base class for all validators.

    Validators are configuration objects. The chainable setters mutate
    the instance and return it, and ``validate()`` only reads that
    configuration, so one configured validator can check any number of
    values, from any number of threads, as long as nobody reconfigures
    it concurrently.

    Subclasses implement ``_validate(value, path, context)`` and report
    problems through ``_format_error`` so that ``with_message`` and path
    suffixes behave uniformly.
    """

    def __init__(self) -> None:
        self.is_optional_field = False
        self.custom_message: str | None = None
        self.transform_fns: list[Callable[[Any], Any]] = []
        self.refinements: list[tuple[Callable[[Any], bool], str]] = []

    def optional(self) -> Validator:
        """Accept ``None`` and absent values, passing them through as-is.

        Returns:
            Self for chaining
        """
        self.is_optional_field = True
        return self

    def with_message(self, message: str) -> Validator:
        """Replace every error message this validator produces.

        The message is used verbatim; no location suffix is appended.

        Args:
            message: Message reported for any failure of this validator

        Returns:
            Self for chaining
        """
        self.custom_message = message
        return self

    def transform(self, fn: Callable[[Any], Any]) -> Validator:
        """Register a function applied to the value after validation.

        Transforms run only when validation succeeded. Several transforms
        run in the order they were registered, each receiving the output
        of the previous one. An exception raised by a transform turns the
        result into a failure.

        Args:
            fn: Callable taking the validated value and returning a new one

        Returns:
            Self for chaining

        Raises:
            SchemaDefinitionError: If fn is not callable
        """
        if not callable(fn):
            raise SchemaDefinitionError(
                "transform() expects a callable",
                context={"validator": type(self).__name__, "got": type(fn).__name__},
            )
        self.transform_fns.append(fn)
        return self

    def refine(
        self,
        check: Callable[[Any], bool],
        message: str = "Custom validation failed",
    ) -> Validator:
        """Layer an extra check on top of this validator.

        Refinements run after the built-in checks pass and before any
        transform. All refinements run, so every failing rule is
        reported.

        Example:
            ```python
            password = (
                Schema.string()
                .min_length(8)
                .refine(lambda s: any(c.isupper() for c in s),
                        "Must contain an uppercase letter")
                .refine(lambda s: any(c.isdigit() for c in s),
                        "Must contain a number")
            )
            ```

        Args:
            check: Predicate receiving the validated value
            message: Error reported when the predicate returns a falsy value

        Returns:
            Self for chaining

        Raises:
            SchemaDefinitionError: If check is not callable
        """
        if not callable(check):
            raise SchemaDefinitionError(
                "refine() expects a callable",
                context={"validator": type(self).__name__, "got": type(check).__name__},
            )
        self.refinements.append((check, message))
        return self

    def validate(
        self,
        value: Any,
        path: str = "",
        context: ValidationContext | None = None,
    ) -> ValidationResult:
        """Validate a value against this validator.

        Args:
            value: Value to validate (``None``/``MISSING`` mean absent)
            path: Location of the value inside the root value
            context: Traversal state; created automatically at the root

        Returns:
            ValidationResult with the outcome. Never raises for invalid data.
        """
        if is_absent(value):
            if self.is_optional_field:
                return ValidationResult.success(value)
            return ValidationResult.failure(self._format_error("Field is required", path))

        if context is None:
            context = ValidationContext()
        if context.too_deep:
            return ValidationResult.failure(self._format_error("Schema too deep", path))

        with context.descend():
            result = self._validate(value, path, context)

        if result.is_valid and self.refinements:
            result = self._apply_refinements(result, path)

        if result.is_valid and self.transform_fns:
            result = self._apply_transforms(result, path)

        return result

    @abstractmethod
    def _validate(
        self, value: Any, path: str, context: ValidationContext
    ) -> ValidationResult:
        """Type-specific validation of a present (non-null) value."""

    def _format_error(self, message: str, path: str) -> str:
        """Render an error message for this validator.

        Returns the custom message when one was set with ``with_message``,
        otherwise the message followed by `` at <path>`` for nested values.
        """
        if self.custom_message is not None:
            return self.custom_message
        return with_location(message, path)

    def _apply_refinements(self, result: ValidationResult, path: str) -> ValidationResult:
        errors = []
        for check, message in self.refinements:
            try:
                passed = check(result.value)
            except Exception as e:
                logger.debug(f"Refinement raised at {path or '<root>'}", exc_info=True)
                errors.append(self._format_error(f"Custom validation error: {e!s}", path))
                continue
            if not passed:
                errors.append(self._format_error(message, path))

        if errors:
            return ValidationResult.failure(errors)
        return result

    def _apply_transforms(self, result: ValidationResult, path: str) -> ValidationResult:
        value = result.value
        for fn in self.transform_fns:
            try:
                value = fn(value)
            except Exception as e:
                logger.debug(f"Transform raised at {path or '<root>'}", exc_info=True)
                return ValidationResult.failure(
                    self._format_error(f"Transformation failed: {e!s}", path)
                )
        result.value = value
        return result

    def __repr__(self) -> str:
        flags = []
        if self.is_optional_field:
            flags.append("optional")
        if self.transform_fns:
            flags.append(f"transforms={len(self.transform_fns)}")
        return f"{type(self).__name__}({', '.join(flags)})"
