"""Build validator trees from declarative configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Callable, Union

import yaml  # type: ignore[import-untyped]

from .base import BaseValidator, Validator
from .exceptions import SchemaConfigurationError, SchemaError
from .schema import Schema

logger = logging.getLogger(__name__)

COMMON_KEYS = {"type", "optional", "message", "description"}

# Option key -> (builder method, whether the method takes an argument)
STRING_OPTIONS: dict[str, tuple[str, bool]] = {
    "min_length": ("min_length", True),
    "max_length": ("max_length", True),
    "pattern": ("pattern", True),
    "trim": ("trim", False),
    "email": ("email", False),
    "url": ("url", False),
    "uuid": ("uuid", False),
}
NUMBER_OPTIONS: dict[str, tuple[str, bool]] = {
    "min": ("min", True),
    "max": ("max", True),
    "integer": ("integer", False),
    "positive": ("positive", False),
    "negative": ("negative", False),
    "finite": ("finite", False),
    "multiple_of": ("multiple_of", True),
}
DATE_OPTIONS: dict[str, tuple[str, bool]] = {
    "min": ("min", True),
    "max": ("max", True),
    "format": ("format", True),
    "past": ("past", False),
    "future": ("future", False),
}
ARRAY_OPTIONS: dict[str, tuple[str, bool]] = {
    "min_length": ("min_length", True),
    "max_length": ("max_length", True),
    "unique": ("unique", False),
    "no_empty": ("no_empty", False),
}
OBJECT_OPTIONS: dict[str, tuple[str, bool]] = {
    "strict": ("strict", False),
    "allow_null": ("allow_null", False),
    "partial": ("partial", False),
}


class ValidatorFactory:
    """Factory for creating validators from configuration.

    Configuration Options:
        type (str): One of string, number, boolean, date, array, object,
            any, nullable, union
        optional (bool): Accept missing and null values (default: False)
        message (str): Custom message replacing every error message
        items (dict): Item configuration (array)
        fields (dict): Field name to field configuration, in order (object)
        validator (dict): Inner configuration (nullable)
        options (list): Member configurations, tried in order (union)

    Family options use the builder method names, e.g. ``min_length``,
    ``pattern``, ``multiple_of``, ``format``, ``unique``, ``strict``. Flag
    options are applied when true. Boolean validators take ``mode``
    (``strict`` or ``truthy``).

    Example Configuration:
        type: object
        strict: true
        fields:
          username:
            type: string
            min_length: 3
            pattern: "^[a-zA-Z0-9_]+$"
          age:
            type: number
            integer: true
            min: 13
            optional: true
          tags:
            type: array
            items: {type: string}
            unique: true
    """

    def __init__(self) -> None:
        self._builders: dict[str, Callable[[Mapping[str, Any], str], Validator]] = {
            "string": self._build_string,
            "number": self._build_number,
            "boolean": self._build_boolean,
            "date": self._build_date,
            "array": self._build_array,
            "object": self._build_object,
            "any": self._build_any,
            "nullable": self._build_nullable,
            "union": self._build_union,
        }

    def create(self, **config: Any) -> Validator:
        """Create a validator from configuration.

        Args:
            **config: Validator configuration

        Returns:
            Validator instance

        Raises:
            SchemaConfigurationError: If the configuration cannot be built
        """
        return self.build(config)

    def build(self, config: Mapping[str, Any], location: str = "root") -> Validator:
        """Build one validator, recursing into child configurations.

        Args:
            config: Validator configuration mapping
            location: Position of this configuration, used in error context

        Returns:
            Validator instance
        """
        if not isinstance(config, Mapping):
            raise SchemaConfigurationError(
                f"Validator configuration at '{location}' must be a mapping, "
                f"got {type(config).__name__}",
                context={"location": location},
            )

        type_name = str(config.get("type", "")).lower()
        builder = self._builders.get(type_name)
        if builder is None:
            raise SchemaConfigurationError(
                f"Unknown validator type '{type_name}' at '{location}'",
                context={"location": location, "type": type_name, "known": sorted(self._builders)},
            )

        logger.debug(f"Building {type_name} validator at {location}")
        try:
            validator = builder(config, location)
            if config.get("message") is not None:
                validator = validator.with_message(config["message"])
            if config.get("optional"):
                validator = validator.optional()
        except SchemaConfigurationError:
            raise
        except SchemaError as e:
            raise SchemaConfigurationError(
                f"Invalid {type_name} configuration at '{location}': {e}",
                context={"location": location, **e.context},
            ) from e
        return validator

    def _apply_options(
        self,
        validator: BaseValidator,
        config: Mapping[str, Any],
        options: dict[str, tuple[str, bool]],
        location: str,
        reserved: frozenset[str] = frozenset(),
    ) -> Any:
        for key, value in config.items():
            if key in COMMON_KEYS or key in reserved:
                continue
            if key not in options:
                logger.warning(f"Unknown option '{key}' for validator at {location}, ignoring")
                continue
            method_name, takes_argument = options[key]
            method = getattr(validator, method_name)
            if takes_argument:
                validator = method(value)
            elif value:
                validator = method()
        return validator

    def _build_string(self, config: Mapping[str, Any], location: str) -> Validator:
        return self._apply_options(Schema.string(), config, STRING_OPTIONS, location)

    def _build_number(self, config: Mapping[str, Any], location: str) -> Validator:
        return self._apply_options(Schema.number(), config, NUMBER_OPTIONS, location)

    def _build_boolean(self, config: Mapping[str, Any], location: str) -> Validator:
        validator = Schema.boolean()
        mode = config.get("mode")
        if mode == "strict":
            validator = validator.strict()
        elif mode == "truthy":
            validator = validator.truthy()
        elif mode is not None:
            raise SchemaConfigurationError(
                f"Unknown boolean mode '{mode}' at '{location}'",
                context={"location": location, "mode": mode},
            )
        return self._apply_options(validator, config, {}, location, frozenset({"mode"}))

    def _build_date(self, config: Mapping[str, Any], location: str) -> Validator:
        return self._apply_options(Schema.date(), config, DATE_OPTIONS, location)

    def _build_array(self, config: Mapping[str, Any], location: str) -> Validator:
        if "items" not in config:
            raise SchemaConfigurationError(
                f"Array validator at '{location}' requires 'items'",
                context={"location": location},
            )
        item = self.build(config["items"], f"{location}[]")
        return self._apply_options(
            Schema.array(item), config, ARRAY_OPTIONS, location, frozenset({"items"})
        )

    def _build_object(self, config: Mapping[str, Any], location: str) -> Validator:
        fields_config = config.get("fields", {})
        if not isinstance(fields_config, Mapping):
            raise SchemaConfigurationError(
                f"Object 'fields' at '{location}' must be a mapping",
                context={"location": location},
            )
        fields = {
            name: self.build(field_config, name if location == "root" else f"{location}.{name}")
            for name, field_config in fields_config.items()
        }
        return self._apply_options(
            Schema.object(fields), config, OBJECT_OPTIONS, location, frozenset({"fields"})
        )

    def _build_any(self, config: Mapping[str, Any], location: str) -> Validator:
        return Schema.any()

    def _build_nullable(self, config: Mapping[str, Any], location: str) -> Validator:
        if "validator" not in config:
            raise SchemaConfigurationError(
                f"Nullable validator at '{location}' requires 'validator'",
                context={"location": location},
            )
        return Schema.nullable(self.build(config["validator"], location))

    def _build_union(self, config: Mapping[str, Any], location: str) -> Validator:
        members = config.get("options", [])
        if not isinstance(members, list):
            raise SchemaConfigurationError(
                f"Union 'options' at '{location}' must be a list",
                context={"location": location},
            )
        return Schema.union(
            [self.build(member, f"{location}|{index}") for index, member in enumerate(members)]
        )


def load_schema(source: Union[str, Path, Mapping[str, Any]]) -> Validator:
    """Load a validator from a YAML/JSON file or a configuration mapping.

    Args:
        source: Path to a ``.yaml``, ``.yml`` or ``.json`` file, or a mapping

    Returns:
        Validator instance

    Raises:
        SchemaConfigurationError: If the file cannot be read or built
    """
    if isinstance(source, Mapping):
        return validator_factory.build(source)

    path = Path(source)
    if not path.exists():
        raise SchemaConfigurationError(
            f"Schema file not found: {path}", context={"path": str(path)}
        )

    logger.info(f"Loading schema from {path}")
    suffix = path.suffix.lower()
    with open(path) as f:
        try:
            if suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise SchemaConfigurationError(
                    f"Unsupported schema file format: {suffix}",
                    context={"path": str(path)},
                )
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise SchemaConfigurationError(
                f"Cannot parse schema file {path}: {e}", context={"path": str(path)}
            ) from e

    return validator_factory.build(data or {})


# Singleton instance for shared use
validator_factory = ValidatorFactory()
