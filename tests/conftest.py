"""Pytest configuration for dataknobs_schema tests."""

import sys
from pathlib import Path

import pytest

# Add the package source to path for testing
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from dataknobs_schema import Schema  # noqa: E402


@pytest.fixture
def user_schema():
    """A nested user schema exercising every validator family."""
    return Schema.object({
        "name": Schema.string().min_length(2).trim(),
        "email": Schema.string().email(),
        "age": Schema.number().integer().min(0).optional(),
        "active": Schema.boolean(),
        "tags": Schema.array(Schema.string()).unique(),
        "address": Schema.object({
            "city": Schema.string(),
            "zip": Schema.string().pattern(r"^\d{5}$"),
        }),
    })


@pytest.fixture
def valid_user():
    """Input accepted by ``user_schema``."""
    return {
        "name": "  Ada  ",
        "email": "ada@example.com",
        "age": 36,
        "active": "yes",
        "tags": ["math", "engines"],
        "address": {"city": "London", "zip": "12345"},
    }
