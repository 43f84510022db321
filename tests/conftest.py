"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from csvshape.mapping import MappingEngine
from csvshape.shape import FieldDescriptor, PrimitiveType, RecordShape


@pytest.fixture
def mapping_engine() -> MappingEngine:
    """Provide a fresh MappingEngine instance for each test."""
    return MappingEngine()


@pytest.fixture
def person_shape() -> RecordShape:
    """Provide a name/age/email shape."""
    return RecordShape(
        fields=(
            FieldDescriptor("Name", "name", PrimitiveType.STRING),
            FieldDescriptor("Age", "age", PrimitiveType.INT),
            FieldDescriptor("Email", "email", PrimitiveType.STRING),
        )
    )


@pytest.fixture
def person_rows() -> list[list[str]]:
    """Provide a header row followed by two data rows."""
    return [
        ["name", "age", "email"],
        ["John Doe", "30", "j@x.com"],
        ["Jane", "25", "jane@x.com"],
    ]
