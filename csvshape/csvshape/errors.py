"""Errors raised while mapping CSV rows onto record shapes."""

from __future__ import annotations


class CsvShapeError(ValueError):
    """Base class for every error the mapping engine raises."""


class EmptyDataSetError(CsvShapeError):
    def __init__(self) -> None:
        super().__init__("CSV input must have a header row and at least one data row")


class EmptyInputError(CsvShapeError):
    def __init__(self) -> None:
        super().__init__("CSV input must have at least one header row")


class MissingColumnError(CsvShapeError):
    def __init__(self, column: str) -> None:
        self.column = column
        super().__init__(f"missing required column: {column}")


class TypeCoercionError(CsvShapeError):
    def __init__(self, value: str, target_type: str) -> None:
        self.value = value
        self.target_type = target_type
        super().__init__(f"failed to convert {value!r} to {target_type}")


class UnsupportedTypeError(CsvShapeError):
    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"unsupported field type: {type_name}")
