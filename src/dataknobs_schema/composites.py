"""Array and object validators that delegate to child validators.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from .base import (
    BaseValidator,
    Validator,
    ValidatorOptions,
    ensure_length,
    ensure_length_order,
    ensure_validator,
)
from .exceptions import SchemaDefinitionError
from .result import UNSET, ValidationError, ValidationResult

CYCLE_MARKER = "<cycle>"


def _canonical(value: Any, active: set[int]) -> Any:
    """Build a JSON-ready form of a value with stable key ordering.

    Containers already on the current descent path are replaced with a
    marker so cyclic values terminate.
    """
    if isinstance(value, (Mapping, list, tuple)):
        marker = id(value)
        if marker in active:
            return CYCLE_MARKER
        active.add(marker)
        try:
            if isinstance(value, Mapping):
                items = sorted(
                    ((str(key), _canonical(item, active)) for key, item in value.items()),
                    key=lambda pair: pair[0],
                )
                return {"__object__": items}
            return [_canonical(item, active) for item in value]
        finally:
            active.discard(marker)
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    return repr(value)


def structural_key(value: Any) -> Any:
    """Compute the equality key used by ``ArrayValidator.unique()``.

    Primitive values compare by value (``True`` and ``1`` stay distinct);
    objects and arrays compare by a canonical serialization.

    Args:
        value: A validated array item

    Returns:
        Hashable key
    """
    if isinstance(value, (Mapping, list, tuple)):
        return ("composite", json.dumps(_canonical(value, set()), default=repr))
    try:
        hash(value)
    except TypeError:
        return ("composite", repr(value))
    return (type(value) is bool, value)


@dataclass(frozen=True)
class ArrayOptions(ValidatorOptions):
    min_length: int | None = None
    max_length: int | None = None
    unique: bool = False
    no_empty: bool = False


class ArrayValidator(BaseValidator):
    """Validator for homogeneous sequences (``list`` or ``tuple``).

    Length violations are reported at the array's own path, item violations
    at ``path[i]``. Accepted items are returned as a new list in index order.
    """

    options_class = ArrayOptions
    _options: ArrayOptions

    def __init__(self, item: Validator, options: ArrayOptions | None = None):
        super().__init__(options)
        self._item = ensure_validator(item, "array item")

    @property
    def item(self) -> Validator:
        return self._item

    def _copy(self, options: ValidatorOptions) -> ArrayValidator:
        return type(self)(self._item, options)

    def _check(self, value: Any, path: str) -> ValidationResult:
        if not isinstance(value, (list, tuple)):
            return self._mismatch(path, "array", value)

        opts = self._options
        errors = []

        if opts.min_length is not None and len(value) < opts.min_length:
            errors.append(ValidationError(
                path, f"Array must have at least {opts.min_length} items", value
            ))
        if opts.max_length is not None and len(value) > opts.max_length:
            errors.append(ValidationError(
                path, f"Array must have at most {opts.max_length} items", value
            ))
        if opts.no_empty and len(value) == 0:
            errors.append(ValidationError(path, "Array cannot be empty", value))

        accepted: list[tuple[int, Any]] = []
        for index, item in enumerate(value):
            item_result = self._item.validate(item, f"{path}[{index}]")
            if not item_result.valid:
                errors.extend(item_result.errors)
            elif item_result.data is not UNSET:
                accepted.append((index, item_result.data))

        if opts.unique:
            errors.extend(self._duplicates(accepted, path))

        if errors:
            return ValidationResult.failure(errors)
        return ValidationResult.success([data for _, data in accepted])

    @staticmethod
    def _duplicates(accepted: Iterable[tuple[int, Any]], path: str) -> list[ValidationError]:
        seen = set()
        errors = []
        for index, data in accepted:
            key = structural_key(data)
            if key in seen:
                errors.append(ValidationError(f"{path}[{index}]", "Array items must be unique", data))
            else:
                seen.add(key)
        return errors

    def min_length(self, length: int) -> ArrayValidator:
        """Require at least ``length`` items."""
        ensure_length_order(ensure_length("min_length", length), self._options.max_length)
        return self._configure(min_length=length)

    def max_length(self, length: int) -> ArrayValidator:
        """Require at most ``length`` items."""
        ensure_length_order(self._options.min_length, ensure_length("max_length", length))
        return self._configure(max_length=length)

    def length(self, min_length: int, max_length: int) -> ArrayValidator:
        """Set both length bounds (inclusive)."""
        ensure_length("min_length", min_length)
        ensure_length("max_length", max_length)
        ensure_length_order(min_length, max_length)
        return self._configure(min_length=min_length, max_length=max_length)

    def unique(self) -> ArrayValidator:
        """Flag every item that repeats an earlier item."""
        return self._configure(unique=True)

    def no_empty(self) -> ArrayValidator:
        return self._configure(no_empty=True)


def _key_set(keys: Iterable[str], operation: str) -> set[str]:
    if isinstance(keys, (str, bytes)) or not isinstance(keys, Iterable):
        raise SchemaDefinitionError(
            f"{operation} keys must be a list of field names, got {type(keys).__name__}",
            context={"operation": operation, "type": type(keys).__name__},
        )
    return set(keys)


def _field_path(path: str, key: str) -> str:
    return key if path == "root" else f"{path}.{key}"


@dataclass(frozen=True)
class ObjectOptions(ValidatorOptions):
    strict: bool = False
    allow_null: bool = False


class ObjectValidator(BaseValidator):
    """Validator for mapping values against a named-field schema.

    Fields are validated in declaration order and the output dict follows
    that order. Keys missing from the input are validated as ``UNSET``.
    In strict mode keys outside the schema are errors; otherwise they are
    copied to the output unchanged.
    """

    options_class = ObjectOptions
    _options: ObjectOptions

    def __init__(self, fields: Mapping[str, Validator], options: ObjectOptions | None = None):
        super().__init__(options)
        if not isinstance(fields, Mapping):
            raise SchemaDefinitionError(
                f"Object schema must be a mapping, got {type(fields).__name__}",
                context={"type": type(fields).__name__},
            )
        self._fields = MappingProxyType({
            key: ensure_validator(validator, f"field '{key}'") for key, validator in fields.items()
        })

    @property
    def fields(self) -> Mapping[str, Validator]:
        return self._fields

    def _copy(self, options: ValidatorOptions) -> ObjectValidator:
        return type(self)(self._fields, options)

    def _derive(self, fields: Mapping[str, Validator]) -> ObjectValidator:
        return type(self)(fields, self._options)

    def _check(self, value: Any, path: str) -> ValidationResult:
        if value is None:
            if self._options.allow_null:
                return ValidationResult.success(None)
            return ValidationResult.failure([ValidationError(path, "Object cannot be null", value)])

        if not isinstance(value, Mapping):
            return self._mismatch(path, "object", value)

        errors = []
        output: dict[Any, Any] = {}

        for key, validator in self._fields.items():
            field_result = validator.validate(value.get(key, UNSET), _field_path(path, key))
            if not field_result.valid:
                errors.extend(field_result.errors)
            elif field_result.data is not UNSET:
                output[key] = field_result.data

        for key, extra in value.items():
            if key in self._fields:
                continue
            if self._options.strict:
                errors.append(ValidationError(
                    _field_path(path, str(key)), f'Unexpected property "{key}"', extra
                ))
            else:
                output[key] = extra

        if errors:
            return ValidationResult.failure(errors)
        return ValidationResult.success(output)

    def strict(self) -> ObjectValidator:
        """Reject keys that are not declared in the schema."""
        return self._configure(strict=True)

    def allow_null(self) -> ObjectValidator:
        """Accept ``None`` as the whole object value."""
        return self._configure(allow_null=True)

    def partial(self) -> ObjectValidator:
        """Make every field optional."""
        return self._derive({key: validator.optional() for key, validator in self._fields.items()})

    def pick(self, keys: Iterable[str]) -> ObjectValidator:
        """Keep only the listed fields, in schema order."""
        wanted = _key_set(keys, "pick")
        return self._derive({key: v for key, v in self._fields.items() if key in wanted})

    def omit(self, keys: Iterable[str]) -> ObjectValidator:
        """Drop the listed fields."""
        unwanted = _key_set(keys, "omit")
        return self._derive({key: v for key, v in self._fields.items() if key not in unwanted})

    def extend(self, fields: Mapping[str, Validator]) -> ObjectValidator:
        """Add fields; a field already in the schema is replaced by the new one."""
        return self._derive({**self._fields, **fields})
