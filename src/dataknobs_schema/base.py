"""The validator capability and the shared skeleton behind every validator family.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from numbers import Real
from typing import Any, Protocol, TypeVar, runtime_checkable

from .exceptions import SchemaDefinitionError
from .result import UNSET, ValidationError, ValidationResult, is_absent

V = TypeVar("V", bound="BaseValidator")


@runtime_checkable
class Validator(Protocol):
    """Capability implemented by every validator.

    A validator is an immutable value: ``optional()`` and ``with_message()``
    return new validators and never change the receiver.
    """

    def validate(self, value: Any, path: str = "root") -> ValidationResult:
        ...

    def optional(self) -> Validator:
        ...

    def with_message(self, message: str) -> Validator:
        ...


def is_number(value: Any) -> bool:
    """Check for a numeric value; ``bool`` does not count as a number."""
    return isinstance(value, (Real, Decimal)) and not isinstance(value, bool)


def kind_of(value: Any) -> str:
    """Describe the kind of a value for type-mismatch messages.

    Args:
        value: Any input value

    Returns:
        One of ``unset``, ``null``, ``boolean``, ``number``, ``string``,
        ``array``, ``object``, ``date``, or the Python type name
    """
    if value is UNSET:
        return "unset"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if is_number(value):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, date):
        return "date"
    return type(value).__name__


def ensure_validator(candidate: Any, role: str) -> Validator:
    """Reject anything that does not implement the validator capability.

    Raises:
        SchemaDefinitionError: If candidate is not a validator
    """
    if not isinstance(candidate, Validator):
        raise SchemaDefinitionError(
            f"{role} must be a validator, got {type(candidate).__name__}",
            context={"role": role, "type": type(candidate).__name__},
        )
    return candidate


def ensure_length(name: str, length: Any) -> int:
    """Check a length bound argument.

    Raises:
        SchemaDefinitionError: If length is not a non-negative integer
    """
    if isinstance(length, bool) or not isinstance(length, int):
        raise SchemaDefinitionError(
            f"{name} must be an integer, got {type(length).__name__}",
            context={"option": name, "value": length},
        )
    if length < 0:
        raise SchemaDefinitionError(
            f"{name} cannot be negative: {length}",
            context={"option": name, "value": length},
        )
    return length


def ensure_length_order(min_length: int | None, max_length: int | None) -> None:
    if min_length is not None and max_length is not None and min_length > max_length:
        raise SchemaDefinitionError(
            f"min length ({min_length}) cannot be greater than max ({max_length})",
            context={"min_length": min_length, "max_length": max_length},
        )


@dataclass(frozen=True)
class ValidatorOptions:
    """Options common to every validator family.

    Attributes:
        message: Custom message replacing every error message on failure
        is_optional: If True, absent values validate successfully with no data
    """

    message: str | None = None
    is_optional: bool = False


class BaseValidator(ABC):
    """Skeleton shared by the leaf and composite validators.

    Handles the optional short-circuit and the custom-message override around
    a family-specific ``_check``. Every configuration method goes through
    ``_configure``, which copies the frozen options with overrides into a new
    validator instance.
    """

    options_class: type[ValidatorOptions] = ValidatorOptions

    def __init__(self, options: ValidatorOptions | None = None):
        self._options = options if options is not None else self.options_class()

    @property
    def options(self) -> ValidatorOptions:
        return self._options

    @abstractmethod
    def _check(self, value: Any, path: str) -> ValidationResult:
        """Run the family-specific checks on a present value.

        Args:
            value: Value to validate
            path: Path of the value from the validation root

        Returns:
            ValidationResult with validation outcome
        """

    def validate(self, value: Any, path: str = "root") -> ValidationResult:
        """Validate a value.

        Args:
            value: Value to validate (``UNSET`` when missing)
            path: Path of the value from the validation root

        Returns:
            ValidationResult with validation outcome
        """
        if self._options.is_optional and is_absent(value):
            return ValidationResult.success()

        result = self._check(value, path)

        if not result.valid and self._options.message is not None:
            return result.with_message(self._options.message)
        return result

    def optional(self: V) -> V:
        """Return a copy that accepts ``UNSET`` and ``None`` with no data."""
        return self._configure(is_optional=True)

    def with_message(self: V, message: str) -> V:
        """Return a copy whose failures all report ``message``."""
        if not isinstance(message, str):
            raise SchemaDefinitionError(
                f"message must be a string, got {type(message).__name__}",
                context={"option": "message", "value": message},
            )
        return self._configure(message=message)

    def _configure(self: V, **changes: Any) -> V:
        return self._copy(replace(self._options, **changes))

    def _copy(self: V, options: ValidatorOptions) -> V:
        return type(self)(options)

    def _mismatch(self, path: str, expected: str, value: Any) -> ValidationResult:
        return ValidationResult.failure(
            [ValidationError(path, f"Expected {expected}, received {kind_of(value)}", value)]
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._options!r})"
