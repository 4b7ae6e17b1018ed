"""String, number and boolean validators.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from numbers import Integral
from re import Pattern as RegexPattern
from typing import Any
from urllib.parse import urlsplit

from .base import (
    BaseValidator,
    ValidatorOptions,
    ensure_length,
    ensure_length_order,
    is_number,
    kind_of,
)
from .exceptions import SchemaDefinitionError
from .result import UNSET, ValidationError, ValidationResult

EMAIL_REGEX = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
UUID_REGEX = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}",
    re.IGNORECASE,
)
URL_SCHEMES = frozenset({"http", "https"})

TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
FALSE_STRINGS = frozenset({"false", "0", "no", "off"})


def is_email(text: str) -> bool:
    """Check a local@domain address shape.

    The shape must match and the text must not contain ``..``, start or end
    with a dot, or contain a space.
    """
    return (
        EMAIL_REGEX.fullmatch(text) is not None
        and ".." not in text
        and not text.startswith(".")
        and not text.endswith(".")
        and " " not in text
    )


def is_url(text: str) -> bool:
    """Check for an absolute http(s) URL with a usable host."""
    if any(ch.isspace() for ch in text):
        return False
    try:
        parts = urlsplit(text)
        hostname = parts.hostname
        # Accessing port validates it
        parts.port  # noqa: B018
    except ValueError:
        return False
    if parts.scheme.lower() not in URL_SCHEMES or not hostname:
        return False
    return not (hostname.startswith(".") or hostname.endswith("."))


def is_uuid(text: str) -> bool:
    return UUID_REGEX.fullmatch(text) is not None


@dataclass(frozen=True)
class StringOptions(ValidatorOptions):
    min_length: int | None = None
    max_length: int | None = None
    pattern: RegexPattern[str] | None = None
    trim: bool = False
    email: bool = False
    url: bool = False
    uuid: bool = False


class StringValidator(BaseValidator):
    """Validator for ``str`` values.

    Once the type check passes, every configured rule runs and all violations
    are reported together. With ``trim()`` the rules see the trimmed text and
    the trimmed text is returned, while errors report the original input.
    """

    options_class = StringOptions
    _options: StringOptions

    def _check(self, value: Any, path: str) -> ValidationResult:
        if not isinstance(value, str):
            return self._mismatch(path, "string", value)

        opts = self._options
        text = value.strip() if opts.trim else value
        errors = []

        if opts.min_length is not None and len(text) < opts.min_length:
            errors.append(ValidationError(
                path, f"String must be at least {opts.min_length} characters long", value
            ))
        if opts.max_length is not None and len(text) > opts.max_length:
            errors.append(ValidationError(
                path, f"String must be at most {opts.max_length} characters long", value
            ))
        if opts.pattern is not None and opts.pattern.search(text) is None:
            errors.append(ValidationError(
                path, f"String does not match pattern '{opts.pattern.pattern}'", value
            ))
        if opts.email and not is_email(text):
            errors.append(ValidationError(path, "Invalid email format", value))
        if opts.url and not is_url(text):
            errors.append(ValidationError(path, "Invalid URL format", value))
        if opts.uuid and not is_uuid(text):
            errors.append(ValidationError(path, "Invalid UUID format", value))

        if errors:
            return ValidationResult.failure(errors)
        return ValidationResult.success(text)

    def min_length(self, length: int) -> StringValidator:
        """Require at least ``length`` characters."""
        ensure_length_order(ensure_length("min_length", length), self._options.max_length)
        return self._configure(min_length=length)

    def max_length(self, length: int) -> StringValidator:
        """Require at most ``length`` characters."""
        ensure_length_order(self._options.min_length, ensure_length("max_length", length))
        return self._configure(max_length=length)

    def length(self, min_length: int, max_length: int) -> StringValidator:
        """Set both length bounds (inclusive)."""
        ensure_length("min_length", min_length)
        ensure_length("max_length", max_length)
        ensure_length_order(min_length, max_length)
        return self._configure(min_length=min_length, max_length=max_length)

    def pattern(self, pattern: str | RegexPattern[str]) -> StringValidator:
        """Require a regular-expression match anywhere in the text.

        Args:
            pattern: Regex pattern (string or compiled pattern)
        """
        if isinstance(pattern, str):
            try:
                compiled = re.compile(pattern)
            except re.error as e:
                raise SchemaDefinitionError(
                    f"Invalid pattern '{pattern}': {e}",
                    context={"option": "pattern", "value": pattern},
                ) from e
        elif isinstance(pattern, RegexPattern):
            compiled = pattern
        else:
            raise SchemaDefinitionError(
                f"pattern must be a string or compiled regex, got {type(pattern).__name__}",
                context={"option": "pattern"},
            )
        return self._configure(pattern=compiled)

    def trim(self) -> StringValidator:
        return self._configure(trim=True)

    def email(self) -> StringValidator:
        return self._configure(email=True)

    def url(self) -> StringValidator:
        return self._configure(url=True)

    def uuid(self) -> StringValidator:
        return self._configure(uuid=True)


def _is_nan(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_nan()
    if isinstance(value, Integral):
        return False
    return math.isnan(value)


def _is_infinite(value: Any) -> bool:
    if isinstance(value, Decimal):
        return value.is_infinite()
    if isinstance(value, Integral):
        return False
    return math.isinf(value)


def _is_whole(value: Any) -> bool:
    if isinstance(value, Integral):
        return True
    if _is_infinite(value):
        return False
    return value == int(value)


def _is_multiple(value: Any, divisor: Any) -> bool:
    # Exact rational arithmetic so 1.5 is a multiple of 0.5 for any numeric type
    if _is_infinite(value):
        return False
    return Fraction(value) % Fraction(divisor) == 0


def _ensure_bound(name: str, bound: Any) -> Any:
    if not is_number(bound) or _is_nan(bound):
        raise SchemaDefinitionError(
            f"{name} must be a number, got {kind_of(bound)}",
            context={"option": name, "value": bound},
        )
    return bound


@dataclass(frozen=True)
class NumberOptions(ValidatorOptions):
    min: Any = None
    max: Any = None
    integer: bool = False
    positive: bool = False
    negative: bool = False
    finite: bool = False
    multiple_of: Any = None


class NumberValidator(BaseValidator):
    """Validator for numeric values (int, float, Decimal, Fraction; never bool).

    NaN is rejected outright. Past that, every configured rule runs and all
    violations are reported together.
    """

    options_class = NumberOptions
    _options: NumberOptions

    def _check(self, value: Any, path: str) -> ValidationResult:
        if not is_number(value):
            return self._mismatch(path, "number", value)

        if _is_nan(value):
            return ValidationResult.failure(
                [ValidationError(path, "Value must be a valid number (not NaN)", value)]
            )

        opts = self._options
        errors = []

        if opts.finite and _is_infinite(value):
            errors.append(ValidationError(path, "Number must be finite", value))
        if opts.min is not None and value < opts.min:
            errors.append(ValidationError(path, f"Number must be at least {opts.min}", value))
        if opts.max is not None and value > opts.max:
            errors.append(ValidationError(path, f"Number must be at most {opts.max}", value))
        if opts.integer and not _is_whole(value):
            errors.append(ValidationError(path, "Number must be an integer", value))
        if opts.positive and value <= 0:
            errors.append(ValidationError(path, "Number must be positive", value))
        if opts.negative and value >= 0:
            errors.append(ValidationError(path, "Number must be negative", value))
        if opts.multiple_of is not None and not _is_multiple(value, opts.multiple_of):
            errors.append(ValidationError(
                path, f"Number must be a multiple of {opts.multiple_of}", value
            ))

        if errors:
            return ValidationResult.failure(errors)
        return ValidationResult.success(value)

    def min(self, minimum: Any) -> NumberValidator:
        """Set the inclusive lower bound."""
        return self._configure(min=_ensure_bound("min", minimum))

    def max(self, maximum: Any) -> NumberValidator:
        """Set the inclusive upper bound."""
        return self._configure(max=_ensure_bound("max", maximum))

    def range(self, minimum: Any, maximum: Any) -> NumberValidator:
        """Set both inclusive bounds."""
        _ensure_bound("min", minimum)
        _ensure_bound("max", maximum)
        if minimum > maximum:
            raise SchemaDefinitionError(
                f"min ({minimum}) cannot be greater than max ({maximum})",
                context={"min": minimum, "max": maximum},
            )
        return self._configure(min=minimum, max=maximum)

    def integer(self) -> NumberValidator:
        return self._configure(integer=True)

    def positive(self) -> NumberValidator:
        """Require a value strictly greater than zero."""
        return self._configure(positive=True)

    def negative(self) -> NumberValidator:
        """Require a value strictly less than zero."""
        return self._configure(negative=True)

    def finite(self) -> NumberValidator:
        return self._configure(finite=True)

    def multiple_of(self, divisor: Any) -> NumberValidator:
        """Require the value to be an exact multiple of ``divisor``.

        Raises:
            SchemaDefinitionError: If divisor is zero, infinite or not a number
        """
        _ensure_bound("multiple_of", divisor)
        if divisor == 0 or _is_infinite(divisor):
            raise SchemaDefinitionError(
                f"multiple_of must be a finite non-zero number, got {divisor}",
                context={"option": "multiple_of", "value": divisor},
            )
        return self._configure(multiple_of=divisor)


def truthiness(value: Any) -> bool:
    """Coerce any value to a boolean.

    Empty strings, zero, NaN, ``None`` and ``UNSET`` are false; every other
    value, empty containers included, is true.
    """
    if value is UNSET or value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value != ""
    if is_number(value):
        return not (_is_nan(value) or value == 0)
    return True


@dataclass(frozen=True)
class BooleanOptions(ValidatorOptions):
    strict: bool = False
    truthy: bool = False


class BooleanValidator(BaseValidator):
    """Validator for boolean values with three modes.

    - default: ``bool``, the strings true/1/yes/on and false/0/no/off
      (case-insensitive, surrounding whitespace ignored), and the numbers 1 and 0
    - ``strict()``: ``bool`` only
    - ``truthy()``: anything, coerced by truthiness
    """

    options_class = BooleanOptions
    _options: BooleanOptions

    def _check(self, value: Any, path: str) -> ValidationResult:
        if self._options.strict:
            if isinstance(value, bool):
                return ValidationResult.success(value)
            return self._mismatch(path, "boolean", value)

        if self._options.truthy:
            return ValidationResult.success(truthiness(value))

        converted = self._convert(value)
        if converted is UNSET:
            return ValidationResult.failure(
                [ValidationError(path, f"Cannot convert {kind_of(value)} to boolean", value)]
            )
        return ValidationResult.success(converted)

    @staticmethod
    def _convert(value: Any) -> Any:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized in TRUE_STRINGS:
                return True
            if normalized in FALSE_STRINGS:
                return False
        elif is_number(value) and not _is_nan(value):
            # 1.0 and Decimal("1") count the same as 1
            if value == 1:
                return True
            if value == 0:
                return False
        return UNSET

    def strict(self) -> BooleanValidator:
        """Accept only ``True`` and ``False``."""
        return self._configure(strict=True, truthy=False)

    def truthy(self) -> BooleanValidator:
        """Accept any value and return its truthiness."""
        return self._configure(truthy=True, strict=False)
