"""Tests for StringValidator."""

import re

import pytest

from dataknobs_schema import UNSET, Schema, SchemaDefinitionError, StringValidator


class TestStringBasics:
    """Test type checking and the shared optional/message behavior."""

    def test_accepts_strings(self):
        """Test that plain strings pass unchanged."""
        result = Schema.string().validate("hello")
        assert result.valid
        assert result.data == "hello"
        assert result.errors == []

    @pytest.mark.parametrize(
        "value, kind",
        [(123, "number"), (True, "boolean"), (None, "null"), (UNSET, "unset"),
         ([], "array"), ({}, "object")],
    )
    def test_rejects_other_kinds(self, value, kind):
        """Wrong kinds fail with exactly one error at the call path."""
        result = Schema.string().min_length(10).email().validate(value, "root.name")
        assert not result.valid
        assert len(result.errors) == 1
        assert result.errors[0].path == "root.name"
        assert result.errors[0].message == f"Expected string, received {kind}"
        assert result.errors[0].value is value

    def test_optional(self):
        """Absent values pass with no data; present values are still checked."""
        validator = Schema.string().min_length(3).optional()

        for absent in (None, UNSET):
            result = validator.validate(absent)
            assert result.valid
            assert result.data is UNSET

        assert not validator.validate("ab").valid
        assert not validator.validate(5).valid

    def test_with_message(self):
        """Every error message is replaced on failure."""
        validator = Schema.string().min_length(10).email().with_message("Bad input")
        result = validator.validate("x y")
        assert len(result.errors) == 2
        assert all(error.message == "Bad input" for error in result.errors)
        assert validator.validate("someone@example.com").data == "someone@example.com"

    def test_builders_do_not_mutate(self):
        """Configuring returns a new validator and leaves the receiver alone."""
        v1 = Schema.string()
        v2 = v1.min_length(3)
        v3 = v2.optional().with_message("nope")

        assert v1 is not v2
        assert v1.validate("a").valid
        assert not v2.validate("a").valid
        assert v2.validate(None).errors[0].message == "Expected string, received null"
        assert v3.validate(None).valid

    def test_options_are_frozen(self):
        """Options cannot be changed in place."""
        validator = StringValidator().min_length(2)
        with pytest.raises(AttributeError):
            validator.options.min_length = 0


class TestStringLength:
    """Test length constraints."""

    def test_min_length(self):
        validator = Schema.string().min_length(3)
        assert validator.validate("abc").valid
        result = validator.validate("ab")
        assert result.errors[0].message == "String must be at least 3 characters long"

    def test_max_length(self):
        validator = Schema.string().max_length(3)
        assert validator.validate("abc").valid
        result = validator.validate("abcd")
        assert result.errors[0].message == "String must be at most 3 characters long"

    def test_length(self):
        validator = Schema.string().length(2, 4)
        assert validator.validate("abc").valid
        assert not validator.validate("a").valid
        assert not validator.validate("abcde").valid

    def test_invalid_bounds(self):
        """Misconfigured bounds raise at construction time."""
        with pytest.raises(SchemaDefinitionError):
            Schema.string().min_length(-1)
        with pytest.raises(SchemaDefinitionError):
            Schema.string().length(5, 2)
        with pytest.raises(SchemaDefinitionError):
            Schema.string().max_length(2).min_length(3)
        with pytest.raises(SchemaDefinitionError):
            Schema.string().min_length("3")


class TestStringTrim:
    """Test trimming."""

    def test_trim_returns_trimmed_value(self):
        result = Schema.string().trim().validate("  hello  ")
        assert result.valid
        assert result.data == "hello"

    def test_trim_applies_before_length(self):
        """Length is measured on the trimmed text; errors report the raw input."""
        result = Schema.string().trim().min_length(3).validate("  a  ")
        assert not result.valid
        assert result.errors[0].value == "  a  "


class TestStringFormats:
    """Test pattern, email, URL and UUID checks."""

    def test_pattern_from_string(self):
        validator = Schema.string().pattern(r"^\d{5}$")
        assert validator.validate("12345").valid
        result = validator.validate("1234a")
        assert "does not match pattern" in result.errors[0].message

    def test_pattern_matches_anywhere(self):
        """Unanchored patterns may match inside the text."""
        validator = Schema.string().pattern(re.compile(r"[0-9]+"))
        assert validator.validate("abc123def").valid
        assert not validator.validate("abcdef").valid

    def test_invalid_pattern(self):
        with pytest.raises(SchemaDefinitionError):
            Schema.string().pattern("(unclosed")

    @pytest.mark.parametrize(
        "email",
        ["user@example.com", "first.last+tag@sub.example.co.uk", "a_b%c@domain.io"],
    )
    def test_valid_emails(self, email):
        assert Schema.string().email().validate(email).valid

    @pytest.mark.parametrize(
        "email",
        ["plainaddress", "@example.com", "user@", "user@example", "user..name@example.com",
         ".user@example.com", "user@example.com.", "us er@example.com", "user@example.c"],
    )
    def test_invalid_emails(self, email):
        result = Schema.string().email().validate(email)
        assert not result.valid
        assert result.errors[0].message == "Invalid email format"

    @pytest.mark.parametrize(
        "url",
        ["http://example.com", "https://example.com/path?q=1#frag", "https://localhost:8080",
         "HTTPS://Example.com"],
    )
    def test_valid_urls(self, url):
        assert Schema.string().url().validate(url).valid

    @pytest.mark.parametrize(
        "url",
        ["example.com", "ftp://example.com", "http://", "https://.example.com",
         "https://example.com.", "http://exa mple.com", "http://example.com:99999",
         "not a url", "mailto:user@example.com"],
    )
    def test_invalid_urls(self, url):
        result = Schema.string().url().validate(url)
        assert not result.valid
        assert result.errors[0].message == "Invalid URL format"

    @pytest.mark.parametrize(
        "value",
        ["123e4567-e89b-12d3-a456-426614174000", "550E8400-E29B-41D4-A716-446655440000",
         "6ba7b810-9dad-51d1-80b4-00c04fd430c8"],
    )
    def test_valid_uuids(self, value):
        assert Schema.string().uuid().validate(value).valid

    @pytest.mark.parametrize(
        "value",
        ["123e4567-e89b-62d3-a456-426614174000",  # version 6
         "123e4567-e89b-12d3-c456-426614174000",  # variant c
         "123e4567e89b12d3a456426614174000",
         "123e4567-e89b-12d3-a456-42661417400g"],
    )
    def test_invalid_uuids(self, value):
        result = Schema.string().uuid().validate(value)
        assert not result.valid
        assert result.errors[0].message == "Invalid UUID format"

    def test_violations_accumulate_in_declared_order(self):
        """All triggered rules are reported together."""
        validator = Schema.string().min_length(30).pattern(r"^\d+$").email().url().uuid()
        result = validator.validate("bad value")
        assert result.messages == [
            "String must be at least 30 characters long",
            "String does not match pattern '^\\d+$'",
            "Invalid email format",
            "Invalid URL format",
            "Invalid UUID format",
        ]
        assert all(error.path == "root" for error in result.errors)
