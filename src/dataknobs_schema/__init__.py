"""Composable, immutable validators with path-qualified error reports.

This package provides:
- Leaf validators for strings, numbers, booleans and dates
- Array and object validators that aggregate child errors by path
- Combinators (any, nullable, union) over the same validator capability
- Copy-on-configure builders: every builder method returns a new validator
- Declarative schemas loaded from YAML/JSON configuration
"""

from .base import BaseValidator, Validator, ValidatorOptions, kind_of
from .combinators import AnyValidator, NullableValidator, OptionalValidator, UnionValidator
from .composites import ArrayValidator, ObjectValidator, structural_key
from .dates import DateValidator
from .exceptions import (
    SchemaConfigurationError,
    SchemaDefinitionError,
    SchemaError,
    ValidationFailedError,
)
from .factory import ValidatorFactory, load_schema, validator_factory
from .result import UNSET, ValidationError, ValidationResult, is_absent
from .scalars import BooleanValidator, NumberValidator, StringValidator
from .schema import Schema

__version__ = "0.1.0"

__all__ = [
    # Result types
    "ValidationResult",
    "ValidationError",
    "UNSET",
    "is_absent",
    # Capability
    "Validator",
    "BaseValidator",
    "ValidatorOptions",
    "kind_of",
    # Validators
    "StringValidator",
    "NumberValidator",
    "BooleanValidator",
    "DateValidator",
    "ArrayValidator",
    "ObjectValidator",
    "AnyValidator",
    "NullableValidator",
    "OptionalValidator",
    "UnionValidator",
    "structural_key",
    # Entry points
    "Schema",
    "ValidatorFactory",
    "validator_factory",
    "load_schema",
    # Exceptions
    "SchemaError",
    "SchemaDefinitionError",
    "SchemaConfigurationError",
    "ValidationFailedError",
]
