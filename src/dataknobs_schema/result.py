"""Validation result types shared by every validator.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from .exceptions import ValidationFailedError


class _Unset:
    """Marker for a value that was not supplied at all.

    Distinct from ``None``, which is an explicitly supplied null.
    """

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Unset:
        return self

    def __deepcopy__(self, memo: dict) -> _Unset:
        return self

    def __reduce__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


def is_absent(value: Any) -> bool:
    """Check whether a value is one of the two absence sentinels.

    Args:
        value: Value to check

    Returns:
        True if value is ``UNSET`` or ``None``
    """
    return value is UNSET or value is None


@dataclass(frozen=True)
class ValidationError:
    """A single violation found during validation.

    Attributes:
        path: Dotted/bracketed address from the validation root
            (``"root"``, ``"user.email"``, ``"tags[2]"``)
        message: Human-readable description of the violation
        value: The offending input value
    """

    path: str
    message: str
    value: Any = None

    def with_message(self, message: str) -> ValidationError:
        """Return a copy of this error with its message replaced."""
        return replace(self, message=message)


@dataclass
class ValidationResult:
    """Outcome of one ``validate`` call.

    ``valid`` is True exactly when ``errors`` is empty. On success ``data``
    holds the accepted (possibly normalized) value, or ``UNSET`` when an
    optional validator accepted an absent value. On failure ``data`` is
    always ``UNSET``.
    """

    valid: bool
    data: Any = UNSET
    errors: list[ValidationError] = field(default_factory=list)

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check validity."""
        return self.valid

    @property
    def is_valid(self) -> bool:
        return self.valid

    @property
    def has_data(self) -> bool:
        """True when the result carries an emitted value (``None`` included)."""
        return self.data is not UNSET

    @property
    def messages(self) -> list[str]:
        return [error.message for error in self.errors]

    @classmethod
    def success(cls, data: Any = UNSET) -> ValidationResult:
        """Create a successful validation result.

        Args:
            data: The accepted value, or ``UNSET`` when nothing is emitted

        Returns:
            Successful ValidationResult
        """
        return cls(valid=True, data=data, errors=[])

    @classmethod
    def failure(cls, errors: list[ValidationError]) -> ValidationResult:
        """Create a failed validation result.

        Args:
            errors: Non-empty list of violations

        Returns:
            Failed ValidationResult
        """
        return cls(valid=False, data=UNSET, errors=list(errors))

    def with_message(self, message: str) -> ValidationResult:
        """Replace every error message; successful results are returned as-is."""
        if self.valid:
            return self
        return ValidationResult.failure([error.with_message(message) for error in self.errors])

    def unwrap(self) -> Any:
        """Return the accepted data or raise on failure.

        Returns:
            ``data``, with ``UNSET`` reported as ``None``

        Raises:
            ValidationFailedError: If the result is a failure
        """
        if not self.valid:
            raise ValidationFailedError(self.errors)
        return None if self.data is UNSET else self.data

    def to_dict(self) -> dict[str, Any]:
        """Convert result to a plain dictionary representation.

        Returns:
            Dictionary with ``valid``, ``errors`` and, when present, ``data``
        """
        rendered: dict[str, Any] = {
            "valid": self.valid,
            "errors": [
                {"path": error.path, "message": error.message, "value": error.value}
                for error in self.errors
            ],
        }
        if self.has_data:
            rendered["data"] = self.data
        return rendered
