"""Build validator trees from configuration.

Schemas can be declared as plain dictionaries (or YAML text) instead of
chained Python calls, which lets applications keep their validation
rules next to the rest of their configuration.

Example Configuration:
    ```yaml
    type: object
    mode: strict
    required: [username]
    fields:
      username:
        type: string
        min_length: 3
        max_length: 20
        pattern: "^[a-zA-Z0-9_]+$"
        transforms: [strip, lower]
      email:
        type: string
        format: email
      age:
        type: number
        integer: true
        min: 13
        optional: true
      tags:
        type: array
        items: {type: string}
        unique: true
        optional: true
      id:
        type: union
        options:
          - {type: string, min_length: 1}
          - {type: number, positive: true}
    ```

Node options shared by every type:
    type (str): Validator type (string, number, boolean, date, array,
        object, union, literal, any, or a registered custom type)
    optional (bool): Accept null/absent values (default: False)
    message (str): Custom message replacing every default message
    transforms (list[str]): Names of registered transforms, applied in order
    description (str): Free text, ignored by the factory
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

import yaml

from .base import Validator
from .exceptions import ConfigurationError, NotFoundError
from .registry import Registry
from .schema import Schema

logger = logging.getLogger(__name__)

ValidatorBuilder = Callable[["SchemaFactory", dict[str, Any]], Validator]

COMMON_OPTIONS = frozenset({"type", "optional", "message", "transforms", "description"})

TYPE_OPTIONS: dict[str, frozenset[str]] = {
    "string": frozenset({"min_length", "max_length", "pattern", "pattern_message", "enum", "format"}),
    "number": frozenset({"min", "max", "integer", "positive"}),
    "boolean": frozenset(),
    "date": frozenset({"min", "max"}),
    "array": frozenset({"items", "min", "max", "unique"}),
    "object": frozenset({"fields", "required", "mode"}),
    "union": frozenset({"options"}),
    "literal": frozenset({"value"}),
    "any": frozenset(),
}

BUILTIN_TRANSFORMS: dict[str, Callable[[Any], Any]] = {
    "strip": lambda value: value.strip(),
    "lower": lambda value: value.lower(),
    "upper": lambda value: value.upper(),
    "title": lambda value: value.title(),
}


class SchemaFactory:
    """Factory for creating validators from configuration.

    The factory owns its registries, so custom types and transforms
    registered on one factory are invisible to others. A shared default
    instance is available as ``schema_factory``.
    """

    def __init__(self) -> None:
        self.types: Registry[ValidatorBuilder] = Registry("validator_types")
        self.transforms: Registry[Callable[[Any], Any]] = Registry("transforms")

        builtin_builders: dict[str, ValidatorBuilder] = {
            "string": SchemaFactory._build_string,
            "number": SchemaFactory._build_number,
            "boolean": lambda factory, config: Schema.boolean(),
            "date": SchemaFactory._build_date,
            "array": SchemaFactory._build_array,
            "object": SchemaFactory._build_object,
            "union": SchemaFactory._build_union,
            "literal": SchemaFactory._build_literal,
            "any": lambda factory, config: Schema.any(),
        }
        for name, builder in builtin_builders.items():
            self.types.register(name, builder)
        for name, fn in BUILTIN_TRANSFORMS.items():
            self.transforms.register(name, fn)

    def register_type(self, name: str, builder: ValidatorBuilder, allow_overwrite: bool = False) -> None:
        """Register a custom validator type.

        Args:
            name: Value used in the ``type`` option
            builder: Callable ``(factory, config) -> Validator``. The common
                options (optional, message, transforms) are applied by the
                factory afterwards. The config includes a ``_where`` entry
                naming the node's location, for use in error messages.
            allow_overwrite: Whether to replace an existing type
        """
        self.types.register(name, builder, allow_overwrite=allow_overwrite)

    def register_transform(
        self, name: str, fn: Callable[[Any], Any], allow_overwrite: bool = False
    ) -> None:
        """Register a named transform usable in ``transforms`` lists."""
        self.transforms.register(name, fn, allow_overwrite=allow_overwrite)

    def create(self, **config: Any) -> Validator:
        """Create a validator from keyword configuration.

        Args:
            **config: Root node configuration

        Returns:
            Configured Validator
        """
        return self.build(config)

    def from_yaml(self, text: str) -> Validator:
        """Create a validator from a YAML document.

        Raises:
            ConfigurationError: If the text is not valid YAML or not a mapping
        """
        try:
            config = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid schema YAML: {e}") from e
        return self.build(config)

    def build(self, config: Mapping[str, Any]) -> Validator:
        """Create a validator tree from a configuration mapping.

        Raises:
            ConfigurationError: If the configuration is malformed
            SchemaDefinitionError: If an option value is rejected by the
                validator it configures (e.g. a negative ``min_length``)
        """
        validator = self._build_node(config, "<root>")
        logger.info(f"Built schema {validator!r} from configuration")
        return validator

    def _build_node(self, config: Any, where: str) -> Validator:
        if not isinstance(config, Mapping):
            raise ConfigurationError(
                f"Schema node at {where} must be a mapping, got {type(config).__name__}",
                context={"where": where},
            )
        node = dict(config)
        node["_where"] = where

        type_name = node.get("type")
        if not type_name:
            raise ConfigurationError(
                f"Schema node at {where} is missing 'type'",
                context={"where": where, "keys": sorted(config.keys())},
            )
        try:
            builder = self.types.get(type_name)
        except NotFoundError as e:
            raise ConfigurationError(
                f"Unknown validator type '{type_name}' at {where}",
                context={"where": where, "type": type_name, "available": self.types.list_keys()},
            ) from e

        if type_name in TYPE_OPTIONS:
            unknown = set(config) - COMMON_OPTIONS - TYPE_OPTIONS[type_name]
            for key in sorted(unknown):
                logger.warning(f"Ignoring unknown option '{key}' for {type_name} at {where}")

        validator = builder(self, node)
        self._apply_common(validator, node, where)
        return validator

    def _apply_common(self, validator: Validator, config: dict[str, Any], where: str) -> None:
        if config.get("optional", False):
            validator.optional()
        if config.get("message") is not None:
            validator.with_message(config["message"])
        for name in config.get("transforms") or []:
            try:
                validator.transform(self.transforms.get(name))
            except NotFoundError as e:
                raise ConfigurationError(
                    f"Unknown transform '{name}' at {where}",
                    context={"where": where, "transform": name, "available": self.transforms.list_keys()},
                ) from e

    def _build_string(self, config: dict[str, Any]) -> Validator:
        validator = Schema.string()
        if config.get("min_length") is not None:
            validator.min_length(config["min_length"])
        if config.get("max_length") is not None:
            validator.max_length(config["max_length"])
        if config.get("pattern") is not None:
            validator.pattern(config["pattern"], config.get("pattern_message"))
        if config.get("enum") is not None:
            validator.enum(config["enum"])

        string_format = config.get("format")
        if string_format == "email":
            validator.email()
        elif string_format == "url":
            validator.url()
        elif string_format is not None:
            raise ConfigurationError(
                f"Unknown string format '{string_format}' at {config['_where']}",
                context={"where": config["_where"], "format": string_format, "available": ["email", "url"]},
            )
        return validator

    def _build_number(self, config: dict[str, Any]) -> Validator:
        validator = Schema.number()
        if config.get("min") is not None:
            validator.min(config["min"])
        if config.get("max") is not None:
            validator.max(config["max"])
        if config.get("integer", False):
            validator.integer()
        if config.get("positive", False):
            validator.positive()
        return validator

    def _build_date(self, config: dict[str, Any]) -> Validator:
        validator = Schema.date()
        if config.get("min") is not None:
            validator.min(config["min"])
        if config.get("max") is not None:
            validator.max(config["max"])
        return validator

    def _build_array(self, config: dict[str, Any]) -> Validator:
        where = config["_where"]
        if "items" not in config:
            raise ConfigurationError(
                f"Array node at {where} requires 'items'",
                context={"where": where},
            )
        validator = Schema.array(self._build_node(config["items"], f"{where}.items"))
        if config.get("min") is not None:
            validator.min(config["min"])
        if config.get("max") is not None:
            validator.max(config["max"])
        if config.get("unique", False):
            validator.unique()
        return validator

    def _build_object(self, config: dict[str, Any]) -> Validator:
        where = config["_where"]
        fields = config.get("fields") or {}
        if not isinstance(fields, Mapping):
            raise ConfigurationError(
                f"'fields' at {where} must be a mapping of field name to schema",
                context={"where": where},
            )
        validator = Schema.object({
            name: self._build_node(field_config, f"{where}.fields.{name}")
            for name, field_config in fields.items()
        })

        mode = config.get("mode", "strict")
        if mode == "passthrough":
            validator.passthrough()
        elif mode == "strict":
            validator.strict()
        else:
            raise ConfigurationError(
                f"Unknown object mode '{mode}' at {where}",
                context={"where": where, "mode": mode, "available": ["strict", "passthrough"]},
            )

        if config.get("required"):
            validator.required(config["required"])
        return validator

    def _build_union(self, config: dict[str, Any]) -> Validator:
        where = config["_where"]
        options = config.get("options")
        if not options or isinstance(options, (str, Mapping)):
            raise ConfigurationError(
                f"Union node at {where} requires a non-empty 'options' list",
                context={"where": where},
            )
        return Schema.union(*[
            self._build_node(option, f"{where}.options[{i}]") for i, option in enumerate(options)
        ])

    def _build_literal(self, config: dict[str, Any]) -> Validator:
        if "value" not in config:
            raise ConfigurationError(
                f"Literal node at {config['_where']} requires 'value'",
                context={"where": config["_where"]},
            )
        return Schema.literal(config["value"])


schema_factory = SchemaFactory()
