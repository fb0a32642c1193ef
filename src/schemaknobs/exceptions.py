"""Exception hierarchy for schemaknobs.

Validation failures are never raised: ``Validator.validate()`` always
returns a ``ValidationResult``. The exceptions here signal programming
or configuration mistakes made while *building* a schema, such as a
negative length bound, an array validator without an item validator, or
a factory configuration naming an unknown type.

Every exception can carry a context dictionary with details that help
track down the offending definition.

Example:
    ```python
    from schemaknobs.exceptions import SchemaDefinitionError, SchemaknobsError

    try:
        Schema.string().min_length(-1)
    except SchemaDefinitionError as e:
        logger.error(f"Bad schema: {e}")
        if e.context:
            logger.error(f"Context: {e.context}")
    ```
"""

from typing import Any, Dict


class SchemaknobsError(Exception):
    """Base exception for all schemaknobs errors.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context
        details: Alternative to context (takes precedence when both are given)

    Example:
        ```python
        error = SchemaknobsError(
            "Bad bound",
            context={"validator": "StringValidator", "min_length": -1}
        )
        str(error)
        # 'Bad bound'
        error.context
        # {'validator': 'StringValidator', 'min_length': -1}
        ```
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        """Initialize the exception with optional context.

        Args:
            message: Error message
            context: Optional context dictionary
            details: Optional details dictionary (replaces context)
        """
        super().__init__(message)
        self.context = details or context or {}
        self.details = self.context


class SchemaDefinitionError(SchemaknobsError):
    """Raised when a validator is configured with invalid arguments.

    Common scenarios include:
    - Negative or inverted length/size bounds
    - ``Schema.array()`` called without an item validator
    - ``Schema.union()`` called with no candidates
    - Date bounds that cannot be parsed
    - Non-callable transforms or refinements

    Example:
        ```python
        raise SchemaDefinitionError(
            "min_length cannot be negative",
            context={"min_length": -1}
        )
        ```
    """

    pass


class ConfigurationError(SchemaknobsError):
    """Raised when a factory configuration cannot be turned into a schema.

    Common scenarios include:
    - Unknown validator ``type``
    - Missing ``items`` for an array node
    - YAML text that does not parse to a mapping

    Example:
        ```python
        raise ConfigurationError(
            "Unknown validator type: 'strng'",
            context={"type": "strng", "available": ["string", "number"]}
        )
        ```
    """

    pass


class NotFoundError(SchemaknobsError):
    """Raised when a registry lookup fails."""

    pass


class OperationError(SchemaknobsError):
    """Raised when a registry operation is not allowed.

    The typical case is registering a name twice without
    ``allow_overwrite=True``.
    """

    pass


class ValueTooDeepError(SchemaknobsError):
    """Raised by ``canonical_key`` when a value nests too many containers.

    Validators catch it and report "Value too deep" as a validation
    failure; it only reaches callers who use ``canonical_key`` directly.
    """

    pass


__all__ = [
    "SchemaknobsError",
    "SchemaDefinitionError",
    "ConfigurationError",
    "NotFoundError",
    "OperationError",
    "ValueTooDeepError",
]
