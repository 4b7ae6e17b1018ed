"""Exception hierarchy for dataknobs_schema.

Validators never raise for invalid *input data*; every data problem is
reported through a ``ValidationResult``. Exceptions are reserved for misuse of
the construction API and for callers that explicitly opt into raising with
``ValidationResult.unwrap()``.

Example:
    ```python
    from dataknobs_schema import Schema, SchemaError

    try:
        Schema.string().min_length(-1)
    except SchemaError as e:
        logger.error(f"Error: {e}")
        if e.context:
            logger.error(f"Context: {e.context}")
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict

if TYPE_CHECKING:
    from .result import ValidationError


class SchemaError(Exception):
    """Base exception for the schema package.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context (option names, values, etc.)
    """

    def __init__(self, message: str, context: Dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}
        self.details = self.context


class SchemaDefinitionError(SchemaError):
    """Raised when a builder method receives an unusable argument.

    Example:
        ```python
        raise SchemaDefinitionError(
            "min_length cannot be negative",
            context={"option": "min_length", "value": -1}
        )
        ```
    """

    pass


class SchemaConfigurationError(SchemaError):
    """Raised when a declarative schema configuration cannot be built."""

    pass


class ValidationFailedError(SchemaError):
    """Raised by ``ValidationResult.unwrap()`` on a failed result.

    Attributes:
        errors: The ``ValidationError`` records of the failed result
    """

    def __init__(self, errors: list[ValidationError]):
        self.errors = list(errors)
        summary = "; ".join(f"{e.path}: {e.message}" for e in self.errors)
        super().__init__(
            f"Validation failed with {len(self.errors)} error(s): {summary}",
            context={"errors": [{"path": e.path, "message": e.message} for e in self.errors]},
        )
