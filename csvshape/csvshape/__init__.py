"""Load CSV rows into typed records described by explicit record shapes."""

from csvshape.errors import (
    CsvShapeError,
    EmptyDataSetError,
    EmptyInputError,
    MissingColumnError,
    TypeCoercionError,
    UnsupportedTypeError,
)
from csvshape.mapping import MappingEngine
from csvshape.shape import FieldDescriptor, PrimitiveType, Record, RecordShape, csv_field


__all__ = [
    "CsvShapeError",
    "EmptyDataSetError",
    "EmptyInputError",
    "FieldDescriptor",
    "MappingEngine",
    "MissingColumnError",
    "PrimitiveType",
    "Record",
    "RecordShape",
    "TypeCoercionError",
    "UnsupportedTypeError",
    "csv_field",
]
