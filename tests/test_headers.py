"""Tests for header renaming and column presence checks."""

from __future__ import annotations

import pytest

from csvshape.errors import MissingColumnError
from csvshape.mapping import check_columns, resolve_headers


class TestResolveHeaders:
    """Test header renaming."""

    def test_renames_matching_headers(self) -> None:
        """Test that headers found in the rename map are replaced."""
        result = resolve_headers(["name", "age", "email"], {"name": "full_name", "age": "years"})

        assert result == ["full_name", "years", "email"]

    def test_empty_rename_map_passes_through(self) -> None:
        """Test that headers are unchanged without overrides."""
        assert resolve_headers(["a", "b"], {}) == ["a", "b"]

    def test_input_is_not_mutated(self) -> None:
        """Test that the caller's header row is left untouched."""
        headers = ["name", "age"]
        resolve_headers(headers, {"name": "full_name"})

        assert headers == ["name", "age"]

    def test_rename_is_not_chained(self) -> None:
        """Test that an override is applied once, not followed through the map."""
        assert resolve_headers(["a"], {"a": "b", "b": "c"}) == ["b"]


class TestCheckColumns:
    """Test column presence checks."""

    def test_all_columns_present(self) -> None:
        """Test that order does not matter and extra headers are allowed."""
        check_columns(["email", "name"], ["name", "extra", "email"])

    def test_missing_column_raises(self) -> None:
        """Test that an absent column is fatal and named in the error."""
        with pytest.raises(MissingColumnError) as exc_info:
            check_columns(["name", "age"], ["name", "email"])

        assert exc_info.value.column == "age"
        assert "missing required column: age" in str(exc_info.value)

    def test_first_missing_column_reported(self) -> None:
        """Test that the first absent column in field order is reported."""
        with pytest.raises(MissingColumnError) as exc_info:
            check_columns(["name", "age", "email"], ["name"])

        assert exc_info.value.column == "age"
