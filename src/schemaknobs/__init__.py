"""schemaknobs: composable, schema-driven data validation.

Build a validator tree with ``Schema``, run a value through it once, and
get back a ``ValidationResult`` listing every problem with its location:

- **Primitives**: string, number, boolean, date
- **Composites**: array, object (strict or passthrough), union, literal, any
- **Shared behavior**: ``optional()``, ``with_message()``, ``refine()``,
  ``transform()``
- **Configuration**: ``SchemaFactory`` builds the same trees from dicts/YAML

Example:
    ```python
    from schemaknobs import Schema

    validator = Schema.object({
        "user": Schema.object({"email": Schema.string().email()}),
    })
    result = validator.validate({"user": {"email": "bad"}})
    result.is_valid
    # False
    result.errors
    # ['Must be a valid email address at user.email']
    ```
"""

from schemaknobs.base import MISSING, Validator, is_absent
from schemaknobs.canonical import canonical_key, strict_equals
from schemaknobs.composites import (
    AnyValidator,
    ArrayValidator,
    LiteralValidator,
    ObjectValidator,
    UnionValidator,
)
from schemaknobs.exceptions import (
    ConfigurationError,
    NotFoundError,
    OperationError,
    SchemaDefinitionError,
    SchemaknobsError,
    ValueTooDeepError,
)
from schemaknobs.factory import SchemaFactory, schema_factory
from schemaknobs.primitives import (
    BooleanValidator,
    DateValidator,
    NumberValidator,
    StringValidator,
)
from schemaknobs.registry import Registry
from schemaknobs.result import DEFAULT_MAX_DEPTH, ValidationContext, ValidationResult
from schemaknobs.schema import Schema

__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",
    # Entry points
    "Schema",
    "SchemaFactory",
    "schema_factory",
    # Results
    "ValidationResult",
    "ValidationContext",
    "DEFAULT_MAX_DEPTH",
    # Validators
    "Validator",
    "StringValidator",
    "NumberValidator",
    "BooleanValidator",
    "DateValidator",
    "ArrayValidator",
    "ObjectValidator",
    "UnionValidator",
    "LiteralValidator",
    "AnyValidator",
    # Absence
    "MISSING",
    "is_absent",
    # Equality
    "canonical_key",
    "strict_equals",
    # Registry
    "Registry",
    # Exceptions
    "SchemaknobsError",
    "SchemaDefinitionError",
    "ConfigurationError",
    "NotFoundError",
    "OperationError",
    "ValueTooDeepError",
]
