"""Tests for topic id validation."""

import pytest

from pyHomie.identifier import (
    InvalidIdentifierError,
    is_valid_id,
    validate_id,
)


class TestIsValidId:

    @pytest.mark.parametrize(
        "value",
        ["valid", "valid-id", "valid123", "valid-123", "AlsoValid", "a", "7"],
    )
    def test_valid(self, value):
        assert is_valid_id(value) is True

    @pytest.mark.parametrize(
        "value",
        ["", "-invalid", "invalid-", "-", "not_valid", "also not",
         "with/slash", "dollar$", "plus+", "hash#", "ümlaut"],
    )
    def test_invalid(self, value):
        assert is_valid_id(value) is False

    def test_inner_hyphens_allowed(self):
        assert is_valid_id("a--b")

    def test_non_string_is_invalid(self):
        assert is_valid_id(None) is False
        assert is_valid_id(123) is False


class TestValidateId:

    def test_returns_valid_id(self):
        assert validate_id("node1", "node") == "node1"

    def test_raises_for_invalid_id(self):
        with pytest.raises(InvalidIdentifierError) as excinfo:
            validate_id("bad id", "property")
        assert excinfo.value.identifier == "bad id"
        assert excinfo.value.kind == "property"
        assert "invalid property ID" in str(excinfo.value)

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            validate_id("-x")
