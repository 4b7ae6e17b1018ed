"""Date validation with format checks and calendar plausibility.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Any

from .base import BaseValidator, ValidatorOptions, is_number, kind_of
from .exceptions import SchemaDefinitionError
from .result import ValidationError, ValidationResult

ISO_REGEX = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}(\.[0-9]{3})?Z?")
TIMESTAMP_REGEX = re.compile(r"[0-9]+")
ALPHA_ONLY_REGEX = re.compile(r"[a-zA-Z\s]+")
LEADING_INT_REGEX = re.compile(r"\s*([+-]?)0*([0-9]+)")

FORMATS = ("iso", "timestamp")
SENTINEL_WORDS = frozenset({"invalid", "invalid date", "invalid-date", "not-a-date", "not a date"})

# Tried in order after ISO parsing fails
STRING_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%d.%m.%Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)


def utcnow() -> datetime:
    """Current instant used by ``past()`` and ``future()``."""
    return datetime.now(timezone.utc)


def to_utc(moment: datetime | date) -> datetime:
    """Normalize a date or datetime to an aware UTC datetime.

    Naive datetimes are read as UTC; bare dates become midnight UTC.
    """
    if not isinstance(moment, datetime):
        moment = datetime.combine(moment, time.min)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def from_timestamp(seconds: Any) -> datetime | None:
    """Convert epoch seconds to a UTC datetime, or None when out of range."""
    try:
        return datetime.fromtimestamp(float(seconds), tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def parse_date_string(text: str) -> datetime | None:
    """Parse a date string into a UTC datetime.

    Args:
        text: Date string (ISO 8601 or one of the common layouts)

    Returns:
        Parsed datetime, or None if the text is not a date
    """
    candidate = text.strip()
    try:
        return to_utc(datetime.fromisoformat(candidate.replace("Z", "+00:00")))
    except ValueError:
        pass

    for fmt in STRING_FORMATS:
        try:
            return to_utc(datetime.strptime(candidate, fmt))
        except ValueError:
            continue
    return None


def looks_invalid(text: str) -> bool:
    """Reject strings that cannot be dates before attempting to parse them."""
    stripped = text.strip()
    return (
        stripped == ""
        or stripped.lower() in SENTINEL_WORDS
        or ALPHA_ONLY_REGEX.fullmatch(stripped) is not None
        or len(stripped) < 4
        or not any(ch.isdigit() for ch in stripped)
    )


def _leading_int(part: str) -> int | None:
    match = LEADING_INT_REGEX.match(part)
    if match is None:
        return None
    sign, digits = match.groups()
    # Anything past three significant digits is outside every month or day range
    number = int(digits) if len(digits) <= 3 else 1000
    return -number if sign == "-" else number


def is_plausible_calendar_date(text: str) -> bool:
    """Check the month and day of a ``YYYY-MM-DD``-style string.

    Rejects a month outside 1-12, a day outside 1-31, and February days
    past the 29th. Strings without at least three dash-separated parts are
    not checked.
    """
    parts = text.strip().split("-")
    if len(parts) < 3:
        return True

    month = _leading_int(parts[1])
    day = _leading_int(parts[2])
    if month is not None and not 1 <= month <= 12:
        return False
    if day is not None and not 1 <= day <= 31:
        return False
    return not (month == 2 and day is not None and day > 29)


def _ensure_moment(name: str, bound: Any) -> datetime:
    if isinstance(bound, (datetime, date)):
        return to_utc(bound)
    if isinstance(bound, str):
        parsed = parse_date_string(bound)
    elif is_number(bound):
        parsed = from_timestamp(bound)
    else:
        parsed = None
    if parsed is None:
        raise SchemaDefinitionError(
            f"{name} must be a date, datetime, date string or epoch seconds, got {kind_of(bound)}",
            context={"option": name, "value": bound},
        )
    return parsed


@dataclass(frozen=True)
class DateOptions(ValidatorOptions):
    min: datetime | None = None
    max: datetime | None = None
    format: str | None = None
    past: bool = False
    future: bool = False


class DateValidator(BaseValidator):
    """Validator for dates given as ``datetime``/``date``, epoch seconds, or strings.

    A configured ``format`` is checked first and short-circuits on failure.
    Accepted values are returned as aware UTC datetimes. ``past()`` and
    ``future()`` compare against the current instant at each ``validate`` call.
    """

    options_class = DateOptions
    _options: DateOptions

    def _check(self, value: Any, path: str) -> ValidationResult:
        opts = self._options

        if opts.format is not None:
            format_error = self._check_format(value, path)
            if format_error is not None:
                return ValidationResult.failure([format_error])

        errors = []
        if isinstance(value, (datetime, date)):
            moment = to_utc(value)
        elif is_number(value):
            moment = from_timestamp(value)
        elif isinstance(value, str):
            if opts.format is None:
                if looks_invalid(value):
                    return ValidationResult.failure([ValidationError(path, "Invalid date", value)])
                if not is_plausible_calendar_date(value):
                    errors.append(ValidationError(path, "Invalid date", value))
            if opts.format == "timestamp":
                try:
                    moment = from_timestamp(int(value))
                except ValueError:
                    moment = None
            else:
                moment = parse_date_string(value)
        else:
            return self._mismatch(path, "date, string, or number", value)

        if moment is None:
            return ValidationResult.failure(errors or [ValidationError(path, "Invalid date", value)])

        if opts.min is not None and moment < opts.min:
            errors.append(ValidationError(path, f"Date must be after {opts.min.isoformat()}", value))
        if opts.max is not None and moment > opts.max:
            errors.append(ValidationError(path, f"Date must be before {opts.max.isoformat()}", value))
        if opts.past or opts.future:
            now = utcnow()
            if opts.past and moment > now:
                errors.append(ValidationError(path, "Date must be in the past", value))
            if opts.future and moment < now:
                errors.append(ValidationError(path, "Date must be in the future", value))

        if errors:
            return ValidationResult.failure(errors)
        return ValidationResult.success(moment)

    def _check_format(self, value: Any, path: str) -> ValidationError | None:
        if self._options.format == "iso":
            if isinstance(value, str) and ISO_REGEX.fullmatch(value):
                return None
            return ValidationError(path, "Date must be in ISO format (YYYY-MM-DDTHH:mm:ss.sssZ)", value)

        if is_number(value) or (isinstance(value, str) and TIMESTAMP_REGEX.fullmatch(value)):
            return None
        return ValidationError(path, "Date must be a valid timestamp", value)

    def min(self, minimum: Any) -> DateValidator:
        """Set the inclusive lower bound."""
        return self._configure(min=_ensure_moment("min", minimum))

    def max(self, maximum: Any) -> DateValidator:
        """Set the inclusive upper bound."""
        return self._configure(max=_ensure_moment("max", maximum))

    def range(self, minimum: Any, maximum: Any) -> DateValidator:
        """Set both inclusive bounds."""
        lower = _ensure_moment("min", minimum)
        upper = _ensure_moment("max", maximum)
        if lower > upper:
            raise SchemaDefinitionError(
                f"min ({lower.isoformat()}) cannot be after max ({upper.isoformat()})",
                context={"min": lower, "max": upper},
            )
        return self._configure(min=lower, max=upper)

    def past(self) -> DateValidator:
        """Require a date no later than the moment of validation."""
        return self._configure(past=True)

    def future(self) -> DateValidator:
        """Require a date no earlier than the moment of validation."""
        return self._configure(future=True)

    def format(self, name: str) -> DateValidator:
        """Require the raw value to be in ``iso`` or ``timestamp`` format."""
        if name not in FORMATS:
            raise SchemaDefinitionError(
                f"Unknown date format '{name}', expected one of {', '.join(FORMATS)}",
                context={"option": "format", "value": name},
            )
        return self._configure(format=name)

    def iso(self) -> DateValidator:
        return self.format("iso")

    def timestamp(self) -> DateValidator:
        return self.format("timestamp")
