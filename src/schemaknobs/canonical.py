"""Canonical keys for structural equality.

``canonical_key`` turns an arbitrary JSON-like value into a hashable,
tagged tuple such that two values get the same key exactly when they are
structurally equal. Array uniqueness and literal matching both compare
these keys.

Rules:
    - ``None``, booleans, numbers and strings are tagged by kind, so
      ``True`` and ``1`` differ while ``1`` and ``1.0`` match.
    - All NaN values share one key.
    - Mappings ignore key order; lists and tuples do not. Mapping keys
      are tagged like any other value, so ``{1: "a"}`` differs from
      ``{"1": "a"}``.
    - Sets ignore element order.
    - Dates and datetimes key on their ISO text.
    - A container that contains itself encodes the back-reference as a
      marker instead of recursing.
    - Anything else keys on its type name and ``repr``.

Containers nested deeper than ``max_depth`` raise ``ValueTooDeepError``.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from fractions import Fraction
from numbers import Real
from typing import Any

from .exceptions import ValueTooDeepError

MAX_KEY_DEPTH = 100

_CYCLE = ("cycle",)


def canonical_key(value: Any, max_depth: int = MAX_KEY_DEPTH) -> tuple:
    """Compute the structural-equality key of ``value``.

    Args:
        value: Any JSON-like value (nested dicts/lists allowed)
        max_depth: Maximum number of nested containers

    Returns:
        Hashable tuple usable in sets and dict keys

    Raises:
        ValueTooDeepError: If containers nest deeper than max_depth
    """
    return _key(value, set(), max_depth)


def strict_equals(left: Any, right: Any) -> bool:
    """True when both values are the same kind and structurally equal."""
    return canonical_key(left) == canonical_key(right)


def _key(value: Any, active: set[int], budget: int) -> tuple:
    if value is None:
        return ("null",)
    if isinstance(value, bool):
        return ("bool", value)
    if isinstance(value, (Real, Decimal)):
        return ("number", _number(value))
    if isinstance(value, str):
        return ("string", value)
    if isinstance(value, date):
        return ("date", value.isoformat())

    if isinstance(value, (Mapping, list, tuple, set, frozenset)):
        marker = id(value)
        if marker in active:
            return _CYCLE
        if budget <= 0:
            raise ValueTooDeepError(
                "Value nests too many containers",
                context={"type": type(value).__name__},
            )
        active.add(marker)
        try:
            if isinstance(value, Mapping):
                items = sorted(
                    ((_key(k, active, budget - 1), _key(v, active, budget - 1)) for k, v in value.items()),
                    key=lambda item: repr(item[0]),
                )
                return ("object", tuple(items))
            if isinstance(value, (set, frozenset)):
                members = sorted((_key(v, active, budget - 1) for v in value), key=repr)
                return ("set", tuple(members))
            return ("array", tuple(_key(v, active, budget - 1) for v in value))
        finally:
            active.discard(marker)

    return ("other", type(value).__name__, repr(value))


def _number(value: Real | Decimal) -> Any:
    """Exact, type-independent form of a number, so sorting by repr is stable."""
    if isinstance(value, Decimal):
        if value.is_nan():
            return "nan"
        if value.is_infinite():
            return "-inf" if value < 0 else "inf"
    else:
        try:
            if math.isnan(value):
                return "nan"
            if math.isinf(value):
                return "-inf" if value < 0 else "inf"
        except (TypeError, ValueError):
            return value
    try:
        return Fraction(value)
    except (TypeError, ValueError, OverflowError):
        return value
