"""Tests for record shapes and records."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from csvshape.shape import FieldDescriptor, PrimitiveType, Record, RecordShape, csv_field


@dataclass
class Person:
    name: str = csv_field("full_name")
    age: int = 0
    score: float = 0.0


@dataclass
class Flagged:
    active: bool = False


class TestFieldDescriptor:
    """Test field descriptors."""

    def test_external_name_defaults_to_logical_name(self) -> None:
        """Test that an undeclared external name falls back to the logical name."""
        descriptor = FieldDescriptor("Name")

        assert descriptor.external_name == "Name"
        assert descriptor.primitive_type is PrimitiveType.STRING

    def test_type_name_string_normalized(self) -> None:
        """Test that supported type names become enum members."""
        assert FieldDescriptor("age", primitive_type="int").primitive_type is PrimitiveType.INT

    def test_unknown_type_name_kept(self) -> None:
        """Test that unsupported type names are kept as plain strings."""
        descriptor = FieldDescriptor("active", primitive_type="bool")

        assert descriptor.primitive_type == "bool"
        assert descriptor.type_name == "bool"


class TestRecordShape:
    """Test record shapes."""

    def test_from_dataclass(self) -> None:
        """Test that dataclass fields, csv metadata and annotations are described."""
        shape = RecordShape.from_dataclass(Person)

        assert shape.logical_names() == ["name", "age", "score"]
        assert shape.external_names() == ["full_name", "age", "score"]
        assert [f.primitive_type for f in shape] == [
            PrimitiveType.STRING,
            PrimitiveType.INT,
            PrimitiveType.FLOAT64,
        ]

    def test_from_dataclass_keeps_unsupported_type_by_name(self) -> None:
        """Test that a bool annotation is described rather than rejected."""
        shape = RecordShape.from_dataclass(Flagged)

        assert shape[0].primitive_type == "bool"

    def test_from_dataclass_rejects_plain_class(self) -> None:
        """Test that only dataclasses can be described."""
        with pytest.raises(TypeError):
            RecordShape.from_dataclass(object)

    def test_field_positions_first_declared_wins(self) -> None:
        """Test that duplicate external names resolve to the first field."""
        shape = RecordShape(fields=(FieldDescriptor("A", "col"), FieldDescriptor("B", "col")))

        assert shape.field_positions() == {"col": 0}

    def test_from_types_round_trips_to_types(self) -> None:
        """Test that a type table describes and reports the same columns."""
        types = {"name": "string", "age": "int", "score": "float64"}

        assert RecordShape.from_types(types).to_types() == types

    def test_zero_values(self) -> None:
        """Test the zero value of each type."""
        shape = RecordShape.from_types({"s": "string", "i": "int", "f": "float64", "b": "bool"})

        assert shape.zero_values() == ["", 0, 0.0, None]


class TestRecord:
    """Test record accessors."""

    def test_accessors(self) -> None:
        """Test logical and external views of a record."""
        shape = RecordShape.from_dataclass(Person)
        record = Record(shape=shape, values=("Ann", 41, 1.5))

        assert record["age"] == 41
        assert record.get("missing") is None
        assert record.as_dict() == {"name": "Ann", "age": 41, "score": 1.5}
        assert record.to_external_dict() == {"full_name": "Ann", "age": 41, "score": 1.5}

    def test_build(self) -> None:
        """Test that a record builds a concrete dataclass instance."""
        shape = RecordShape.from_dataclass(Person)
        person = Record(shape=shape, values=("Ann", 41, 1.5)).build(Person)

        assert person == Person(name="Ann", age=41, score=1.5)

    def test_missing_key_raises(self) -> None:
        """Test that unknown logical names raise KeyError."""
        record = Record(shape=RecordShape(), values=())

        with pytest.raises(KeyError):
            record["nope"]
