"""Validation result types with consistent, predictable behavior.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

DEFAULT_MAX_DEPTH = 200


@dataclass
class ValidationResult:
    """Outcome of running a value through a validator.

    ``is_valid`` is True exactly when ``errors`` is empty. ``value`` holds
    the validated (and possibly transformed) value on success and is
    ``None`` on failure unless the producer says otherwise.

    Results returned from ``validate()`` are not touched again by the
    library. ``add_error`` and ``merge`` are the only mutating methods;
    composite validators use them to accumulate child failures.
    """

    is_valid: bool = True
    errors: list[str] = field(default_factory=list)
    value: Any = None

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check validity."""
        return self.is_valid

    def add_error(self, error: str) -> ValidationResult:
        """Add an error and mark as invalid (fluent API).

        Args:
            error: Error message to add

        Returns:
            Self for chaining
        """
        self.errors.append(error)
        self.is_valid = False
        return self

    def merge(self, other: ValidationResult) -> ValidationResult:
        """Fold a child result into this one.

        Only failures are merged: a valid ``other`` leaves this result
        untouched. Unlike a pure combinator this mutates ``self``, so
        earlier errors are never discarded.

        Args:
            other: Another ValidationResult

        Returns:
            Self for chaining
        """
        if not other.is_valid:
            self.is_valid = False
            self.errors.extend(other.errors)
        return self

    @classmethod
    def success(cls, value: Any) -> ValidationResult:
        """Create a successful validation result.

        Args:
            value: The validated value

        Returns:
            Successful ValidationResult
        """
        return cls(is_valid=True, errors=[], value=value)

    @classmethod
    def failure(cls, errors: str | list[str], value: Any = None) -> ValidationResult:
        """Create a failed validation result.

        Args:
            errors: A single error message or a list of messages
            value: Optional value to carry on the failure (default None)

        Returns:
            Failed ValidationResult
        """
        error_list = [errors] if isinstance(errors, str) else list(errors)
        return cls(is_valid=False, errors=error_list, value=value)


@dataclass
class ValidationContext:
    """Per-call traversal state shared by a validator tree.

    A fresh context is created by the root ``validate()`` call and handed
    down to every child, so nothing is stored on the validators
    themselves. The depth counter bounds recursion for schemas that
    (accidentally) reference one of their own ancestors.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    depth: int = 0

    @property
    def too_deep(self) -> bool:
        """True once the nesting limit has been reached."""
        return self.depth >= self.max_depth

    @contextmanager
    def descend(self) -> Iterator[ValidationContext]:
        """Track one level of nesting for the duration of the block."""
        self.depth += 1
        try:
            yield self
        finally:
            self.depth -= 1
