"""Entry point for building validators with a fluent API.

Example:
    ```python
    from dataknobs_schema import Schema

    user = Schema.object({
        "name": Schema.string().min_length(2).trim(),
        "email": Schema.string().email(),
        "age": Schema.number().integer().min(0).optional(),
        "tags": Schema.array(Schema.string()).unique(),
    })

    result = user.validate(payload)
    if not result:
        for error in result.errors:
            print(error.path, error.message)
    ```
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .base import Validator
from .combinators import AnyValidator, NullableValidator, UnionValidator
from .composites import ArrayValidator, ObjectValidator
from .dates import DateValidator
from .scalars import BooleanValidator, NumberValidator, StringValidator


class Schema:
    """Factory namespace for leaf, composite and combinator validators."""

    @staticmethod
    def string() -> StringValidator:
        return StringValidator()

    @staticmethod
    def number() -> NumberValidator:
        return NumberValidator()

    @staticmethod
    def boolean() -> BooleanValidator:
        return BooleanValidator()

    @staticmethod
    def date() -> DateValidator:
        return DateValidator()

    @staticmethod
    def array(item: Validator) -> ArrayValidator:
        """Create an array validator.

        Args:
            item: Validator applied to every item
        """
        return ArrayValidator(item)

    @staticmethod
    def object(fields: Mapping[str, Validator]) -> ObjectValidator:
        """Create an object validator.

        Args:
            fields: Field name to validator mapping, validated in this order
        """
        return ObjectValidator(fields)

    @staticmethod
    def any() -> AnyValidator:
        return AnyValidator()

    @staticmethod
    def nullable(validator: Validator) -> NullableValidator:
        """Accept ``UNSET``/``None`` as ``None``, otherwise defer to ``validator``."""
        return NullableValidator(validator)

    @staticmethod
    def union(validators: Iterable[Validator]) -> UnionValidator:
        """Accept the first successful result among ``validators``, tried in order."""
        return UnionValidator(validators)
