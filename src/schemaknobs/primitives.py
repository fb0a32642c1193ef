"""Leaf validators for strings, numbers, booleans and dates.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, time, timezone
from decimal import Decimal
from numbers import Real
from re import Pattern as RegexPattern
from typing import Any

from .base import Validator
from .exceptions import SchemaDefinitionError
from .result import ValidationContext, ValidationResult

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
URL_PATTERN = re.compile(r"^https?://.+")


def _check_size(name: str, value: Any, validator: Validator) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise SchemaDefinitionError(
            f"{name} must be a non-negative integer, got {value!r}",
            context={"validator": type(validator).__name__, name: value},
        )


def _check_order(low_name: str, low: Any, high_name: str, high: Any, validator: Validator) -> None:
    if low is not None and high is not None and low > high:
        raise SchemaDefinitionError(
            f"{low_name} ({low}) cannot be greater than {high_name} ({high})",
            context={"validator": type(validator).__name__, low_name: low, high_name: high},
        )


class StringValidator(Validator):
    """Validates ``str`` values.

    All configured constraints are checked, so a value that is both too
    short and off-pattern reports both problems.
    """

    def __init__(self) -> None:
        super().__init__()
        self.min_len: int | None = None
        self.max_len: int | None = None
        self.pattern_regex: RegexPattern[str] | None = None
        self.pattern_message: str | None = None
        self.enum_values: list[str] | None = None

    def min_length(self, length: int) -> StringValidator:
        """Require at least ``length`` characters (inclusive)."""
        _check_size("min_length", length, self)
        _check_order("min_length", length, "max_length", self.max_len, self)
        self.min_len = length
        return self

    def max_length(self, length: int) -> StringValidator:
        """Allow at most ``length`` characters (inclusive)."""
        _check_size("max_length", length, self)
        _check_order("min_length", self.min_len, "max_length", length, self)
        self.max_len = length
        return self

    def pattern(self, regex: str | RegexPattern[str], message: str | None = None) -> StringValidator:
        """Require the value to contain a match for ``regex``.

        Matching uses ``re.search``; anchor the expression with ``^``/``$``
        to match the whole string.

        Args:
            regex: Pattern string or compiled pattern
            message: Message reported on mismatch instead of the default
                "Does not match required pattern". The location suffix
                is still appended.

        Returns:
            Self for chaining
        """
        if isinstance(regex, str):
            try:
                regex = re.compile(regex)
            except re.error as e:
                raise SchemaDefinitionError(
                    f"Invalid regular expression: {e}",
                    context={"pattern": regex},
                ) from e
        self.pattern_regex = regex
        self.pattern_message = message
        return self

    def enum(self, values: list[str]) -> StringValidator:
        """Restrict the value to one of ``values``."""
        if not values:
            raise SchemaDefinitionError("enum() requires at least one allowed value")
        self.enum_values = list(values)
        return self

    def email(self) -> StringValidator:
        """Require a plausible email address (``local@domain.tld``)."""
        return self.pattern(EMAIL_PATTERN, "Must be a valid email address")

    def url(self) -> StringValidator:
        """Require an http or https URL."""
        return self.pattern(URL_PATTERN, "Must be a valid URL")

    def _validate(self, value: Any, path: str, context: ValidationContext) -> ValidationResult:
        if not isinstance(value, str):
            return ValidationResult.failure(self._format_error("Must be a string", path))

        errors = []
        if self.min_len is not None and len(value) < self.min_len:
            errors.append(self._format_error(f"Must be at least {self.min_len} characters long", path))
        if self.max_len is not None and len(value) > self.max_len:
            errors.append(self._format_error(f"Must be at most {self.max_len} characters long", path))
        if self.pattern_regex is not None and not self.pattern_regex.search(value):
            message = self.pattern_message or "Does not match required pattern"
            errors.append(self._format_error(message, path))
        if self.enum_values is not None and value not in self.enum_values:
            options = ", ".join(str(v) for v in self.enum_values)
            errors.append(self._format_error(f"Must be one of: {options}", path))

        if errors:
            return ValidationResult.failure(errors)
        return ValidationResult.success(value)


class NumberValidator(Validator):
    """Validates finite real numbers.

    ``int``, ``float``, ``Decimal`` and ``Fraction`` are accepted;
    ``bool`` is not, even though it subclasses ``int``.
    """

    def __init__(self) -> None:
        super().__init__()
        self.min_val: Real | Decimal | None = None
        self.max_val: Real | Decimal | None = None
        self.is_integer_only = False
        self.is_positive_only = False

    def min(self, minimum: Real | Decimal) -> NumberValidator:
        """Require ``value >= minimum``."""
        self._check_bound("min", minimum)
        _check_order("min", minimum, "max", self.max_val, self)
        self.min_val = minimum
        return self

    def max(self, maximum: Real | Decimal) -> NumberValidator:
        """Require ``value <= maximum``."""
        self._check_bound("max", maximum)
        _check_order("min", self.min_val, "max", maximum, self)
        self.max_val = maximum
        return self

    def integer(self) -> NumberValidator:
        """Require an integral value (``3.0`` counts as integral)."""
        self.is_integer_only = True
        return self

    def positive(self) -> NumberValidator:
        """Require ``value > 0``."""
        self.is_positive_only = True
        return self

    def _check_bound(self, name: str, bound: Any) -> None:
        if not _is_finite_number(bound):
            raise SchemaDefinitionError(
                f"{name} must be a finite number, got {bound!r}",
                context={"validator": type(self).__name__, name: bound},
            )

    def _validate(self, value: Any, path: str, context: ValidationContext) -> ValidationResult:
        if not _is_finite_number(value):
            return ValidationResult.failure(self._format_error("Must be a valid number", path))

        errors = []
        if self.min_val is not None and value < self.min_val:
            errors.append(self._format_error(f"Must be at least {self.min_val}", path))
        if self.max_val is not None and value > self.max_val:
            errors.append(self._format_error(f"Must be at most {self.max_val}", path))
        if self.is_integer_only and value != int(value):
            errors.append(self._format_error("Must be an integer", path))
        if self.is_positive_only and value <= 0:
            errors.append(self._format_error("Must be positive", path))

        if errors:
            return ValidationResult.failure(errors)
        return ValidationResult.success(value)


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, Real):
        return math.isfinite(value)
    return False


class BooleanValidator(Validator):
    """Accepts only ``True`` and ``False``; truthy values are not coerced."""

    def _validate(self, value: Any, path: str, context: ValidationContext) -> ValidationResult:
        if not isinstance(value, bool):
            return ValidationResult.failure(self._format_error("Must be a boolean", path))
        return ValidationResult.success(value)


def to_datetime(value: Any) -> datetime | None:
    """Convert a supported date input to an aware UTC ``datetime``.

    Supported inputs are ``datetime`` and ``date`` objects, ISO-8601
    strings (a trailing ``Z`` is accepted) and POSIX timestamps in
    seconds. Naive values are taken to be UTC.

    Returns:
        The normalized datetime, or None when the input cannot be converted
    """
    if isinstance(value, datetime):
        converted = value
    elif isinstance(value, date):
        converted = datetime.combine(value, time())
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            converted = datetime.fromisoformat(text)
        except ValueError:
            return None
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    else:
        return None

    if converted.tzinfo is None:
        return converted.replace(tzinfo=timezone.utc)
    return converted.astimezone(timezone.utc)


class DateValidator(Validator):
    """Validates dates and normalizes them to aware UTC datetimes.

    On success ``result.value`` is the converted ``datetime``, not the
    original string or timestamp.
    """

    def __init__(self) -> None:
        super().__init__()
        self.min_date: datetime | None = None
        self.max_date: datetime | None = None

    def min(self, bound: datetime | date | str | float) -> DateValidator:
        """Reject dates earlier than ``bound`` (inclusive bound)."""
        minimum = self._bound("min", bound)
        _check_order("min", minimum, "max", self.max_date, self)
        self.min_date = minimum
        return self

    def max(self, bound: datetime | date | str | float) -> DateValidator:
        """Reject dates later than ``bound`` (inclusive bound)."""
        maximum = self._bound("max", bound)
        _check_order("min", self.min_date, "max", maximum, self)
        self.max_date = maximum
        return self

    def _bound(self, name: str, bound: Any) -> datetime:
        converted = to_datetime(bound)
        if converted is None:
            raise SchemaDefinitionError(
                f"Invalid {name} date: {bound!r}",
                context={"validator": type(self).__name__, name: bound},
            )
        return converted

    def _validate(self, value: Any, path: str, context: ValidationContext) -> ValidationResult:
        converted = to_datetime(value)
        if converted is None:
            return ValidationResult.failure(self._format_error("Must be a valid date", path))

        errors = []
        if self.min_date is not None and converted < self.min_date:
            errors.append(self._format_error(f"Date must be after {self.min_date.isoformat()}", path))
        if self.max_date is not None and converted > self.max_date:
            errors.append(self._format_error(f"Date must be before {self.max_date.isoformat()}", path))

        if errors:
            return ValidationResult.failure(errors)
        return ValidationResult.success(converted)
