"""Validators built from other validators: any, nullable and union.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .base import Validator, ensure_validator
from .exceptions import SchemaDefinitionError
from .result import ValidationError, ValidationResult, is_absent

UNION_MISMATCH = "Value does not match any of the union types"


class OptionalValidator:
    """Accepts ``UNSET`` and ``None`` with no data, otherwise defers to the inner validator."""

    def __init__(self, inner: Validator):
        self._inner = ensure_validator(inner, "optional inner validator")

    @property
    def inner(self) -> Validator:
        return self._inner

    def validate(self, value: Any, path: str = "root") -> ValidationResult:
        if is_absent(value):
            return ValidationResult.success()
        return self._inner.validate(value, path)

    def optional(self) -> OptionalValidator:
        return self

    def with_message(self, message: str) -> OptionalValidator:
        return OptionalValidator(self._inner.with_message(message))

    def __repr__(self) -> str:
        return f"OptionalValidator({self._inner!r})"


class AnyValidator:
    """Accepts every value unchanged."""

    def validate(self, value: Any, path: str = "root") -> ValidationResult:
        return ValidationResult.success(value)

    def optional(self) -> OptionalValidator:
        return OptionalValidator(self)

    def with_message(self, message: str) -> AnyValidator:
        return self

    def __repr__(self) -> str:
        return "AnyValidator()"


class NullableValidator:
    """Accepts ``UNSET`` and ``None`` as ``None``, otherwise defers to the inner validator.

    The inner validator keeps its own optional and message configuration.
    """

    def __init__(self, inner: Validator):
        self._inner = ensure_validator(inner, "nullable inner validator")

    @property
    def inner(self) -> Validator:
        return self._inner

    def validate(self, value: Any, path: str = "root") -> ValidationResult:
        if is_absent(value):
            return ValidationResult.success(None)
        return self._inner.validate(value, path)

    def optional(self) -> OptionalValidator:
        return OptionalValidator(self)

    def with_message(self, message: str) -> NullableValidator:
        return NullableValidator(self._inner.with_message(message))

    def __repr__(self) -> str:
        return f"NullableValidator({self._inner!r})"


class UnionValidator:
    """Accepts the first member validator's success, tried in declaration order.

    When no member succeeds the result carries a single error at the call
    path, whatever the members reported.
    """

    def __init__(self, members: Iterable[Validator], message: str | None = None):
        if isinstance(members, (str, bytes)) or not isinstance(members, Iterable):
            raise SchemaDefinitionError(
                f"union members must be a list of validators, got {type(members).__name__}",
                context={"type": type(members).__name__},
            )
        self._members = tuple(
            ensure_validator(member, f"union member {index}") for index, member in enumerate(members)
        )
        self._message = message

    @property
    def members(self) -> tuple[Validator, ...]:
        return self._members

    def validate(self, value: Any, path: str = "root") -> ValidationResult:
        for member in self._members:
            result = member.validate(value, path)
            if result.valid:
                return result
        message = UNION_MISMATCH if self._message is None else self._message
        return ValidationResult.failure([ValidationError(path, message, value)])

    def optional(self) -> OptionalValidator:
        return OptionalValidator(self)

    def with_message(self, message: str) -> UnionValidator:
        return UnionValidator(self._members, message)

    def __repr__(self) -> str:
        return f"UnionValidator({list(self._members)!r})"
