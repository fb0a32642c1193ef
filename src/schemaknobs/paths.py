"""Error path formatting.

Paths locate a failure inside nested data: object fields are joined
with dots and array items use brackets, e.g. ``user.email`` or
``orders[2].sku``. The root value has the empty path.
"""

from __future__ import annotations


def join_field(path: str, name: str) -> str:
    """Path of the field ``name`` inside the object at ``path``."""
    return f"{path}.{name}" if path else name


def join_index(path: str, index: int) -> str:
    """Path of item ``index`` inside the array at ``path``."""
    return f"{path}[{index}]"


def with_location(message: str, path: str) -> str:
    """Append `` at <path>`` to a message when the path is non-empty.

    Example:
        >>> with_location("Must be a string", "user.name")
        'Must be a string at user.name'
        >>> with_location("Must be a string", "")
        'Must be a string'
    """
    return f"{message} at {path}" if path else message
