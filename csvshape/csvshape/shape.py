"""Record shapes: explicit descriptions of the records a CSV file is loaded into."""

from __future__ import annotations

import dataclasses
import typing
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

T = TypeVar("T")

# Dataclass field metadata key holding the external column name.
CSV_METADATA_KEY = "csv"


class PrimitiveType(str, Enum):
    STRING = "string"
    INT = "int"
    FLOAT64 = "float64"

    def zero_value(self) -> object:
        if self is PrimitiveType.INT:
            return 0
        if self is PrimitiveType.FLOAT64:
            return 0.0
        return ""


_TYPE_NAMES: dict[str, PrimitiveType] = {member.value: member for member in PrimitiveType}

_PYTHON_TYPES: dict[Any, PrimitiveType] = {
    str: PrimitiveType.STRING,
    int: PrimitiveType.INT,
    float: PrimitiveType.FLOAT64,
}


def csv_field(name: str, **kwargs: Any) -> Any:
    """Declare a dataclass field whose CSV column is *name*."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[CSV_METADATA_KEY] = name
    return field(metadata=metadata, **kwargs)


def type_name(primitive_type: PrimitiveType | str) -> str:
    if isinstance(primitive_type, PrimitiveType):
        return primitive_type.value
    return str(primitive_type)


def zero_value(primitive_type: PrimitiveType | str) -> object:
    if isinstance(primitive_type, PrimitiveType):
        return primitive_type.zero_value()
    return None


@dataclass(frozen=True)
class FieldDescriptor:
    """One field of a record shape.

    ``external_name`` is the column the field is matched against and falls back
    to ``logical_name`` when left empty. ``primitive_type`` may be a type name
    outside :class:`PrimitiveType`; loading such a field fails at coercion time.
    """

    logical_name: str
    external_name: str = ""
    primitive_type: PrimitiveType | str = PrimitiveType.STRING

    def __post_init__(self) -> None:
        if not self.external_name:
            object.__setattr__(self, "external_name", self.logical_name)
        object.__setattr__(
            self, "primitive_type", _TYPE_NAMES.get(self.primitive_type, self.primitive_type)
        )

    @property
    def type_name(self) -> str:
        return type_name(self.primitive_type)


@dataclass(frozen=True)
class RecordShape:
    """Ordered, immutable sequence of field descriptors."""

    fields: tuple[FieldDescriptor, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __getitem__(self, position: int) -> FieldDescriptor:
        return self.fields[position]

    def field_positions(self) -> dict[str, int]:
        """Map each external name to its field position; the first declared field wins."""
        positions: dict[str, int] = {}
        for position, descriptor in enumerate(self.fields):
            positions.setdefault(descriptor.external_name, position)
        return positions

    def external_names(self) -> list[str]:
        return [descriptor.external_name for descriptor in self.fields]

    def logical_names(self) -> list[str]:
        return [descriptor.logical_name for descriptor in self.fields]

    def zero_values(self) -> list[object]:
        return [zero_value(descriptor.primitive_type) for descriptor in self.fields]

    @classmethod
    def from_dataclass(cls, record_type: type) -> RecordShape:
        """Describe a dataclass once so the engine never touches the class itself.

        The external name comes from :func:`csv_field` metadata, defaulting to the
        attribute name. ``str``, ``int`` and ``float`` annotations map to the
        supported primitive types; anything else is kept by name.
        """
        if not dataclasses.is_dataclass(record_type):
            raise TypeError(f"{record_type!r} is not a dataclass")

        hints = typing.get_type_hints(record_type)
        descriptors = []
        for dc_field in dataclasses.fields(record_type):
            annotation = hints.get(dc_field.name, dc_field.type)
            if annotation in _PYTHON_TYPES:
                primitive: PrimitiveType | str = _PYTHON_TYPES[annotation]
            else:
                primitive = getattr(annotation, "__name__", str(annotation))
            descriptors.append(
                FieldDescriptor(
                    logical_name=dc_field.name,
                    external_name=dc_field.metadata.get(CSV_METADATA_KEY, ""),
                    primitive_type=primitive,
                )
            )
        return cls(fields=tuple(descriptors))

    @classmethod
    def from_types(cls, types: Mapping[str, str]) -> RecordShape:
        """Build a shape from an ordered ``{column: type name}`` table."""
        return cls(
            fields=tuple(
                FieldDescriptor(logical_name=column, primitive_type=name)
                for column, name in types.items()
            )
        )

    def to_types(self) -> dict[str, str]:
        return {descriptor.external_name: descriptor.type_name for descriptor in self.fields}


@dataclass(frozen=True)
class Record:
    """Values of one loaded row, stored by field position."""

    shape: RecordShape
    values: tuple[object, ...]

    def __getitem__(self, logical_name: str) -> object:
        for descriptor, value in zip(self.shape.fields, self.values):
            if descriptor.logical_name == logical_name:
                return value
        raise KeyError(logical_name)

    def get(self, logical_name: str, default: object = None) -> object:
        try:
            return self[logical_name]
        except KeyError:
            return default

    def as_dict(self) -> dict[str, object]:
        return {
            descriptor.logical_name: value
            for descriptor, value in zip(self.shape.fields, self.values)
        }

    def to_external_dict(self) -> dict[str, object]:
        return {
            descriptor.external_name: value
            for descriptor, value in zip(self.shape.fields, self.values)
        }

    def build(self, factory: Callable[..., T]) -> T:
        """Turn the record into a concrete object by calling *factory* with logical names."""
        return factory(**self.as_dict())
