"""Central mapping engine between CSV rows and record shapes."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TypeVar

from csvshape.errors import EmptyDataSetError, EmptyInputError
from csvshape.io import read_csv_rows
from csvshape.mapping.coercion import coerce_row
from csvshape.mapping.headers import check_columns, resolve_headers
from csvshape.shape import FieldDescriptor, PrimitiveType, Record, RecordShape

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _capitalize(header: str) -> str:
    """Upper-case the first character of *header* when it is ASCII."""
    if header[:1].isascii():
        return header[:1].upper() + header[1:]
    return header


class MappingEngine:
    """Loads string rows into records and describes shapes for one rename map.

    The rename map is the only state and affects every later call. An engine is
    not meant to be shared between threads while :meth:`set_rename_map` may run;
    callers that need that must serialize access themselves.
    """

    def __init__(self, rename_map: Mapping[str, str] | None = None) -> None:
        self._rename_map: dict[str, str] = dict(rename_map or {})

    def set_rename_map(self, rename_map: Mapping[str, str]) -> None:
        """Replace the header overrides applied before column matching."""
        self._rename_map = dict(rename_map)

    def get_rename_map(self) -> dict[str, str]:
        return dict(self._rename_map)

    def load_records(self, rows: Sequence[Sequence[str]], shape: RecordShape) -> list[Record]:
        """Convert every data row into a record; row 0 is the header row.

        Any missing column or coercion failure aborts the whole load.
        """
        if len(rows) < 2:
            raise EmptyDataSetError()

        headers = resolve_headers(rows[0], self._rename_map)
        logger.debug("Resolved headers: %s", headers)

        positions = shape.field_positions()
        check_columns(positions, headers)

        records = [coerce_row(shape, headers, row, positions) for row in rows[1:]]
        logger.debug("Loaded %d record(s) with %d field(s)", len(records), len(shape))
        return records

    def load_into(self, rows: Sequence[Sequence[str]], record_type: type[T]) -> list[T]:
        """Load rows straight into instances of the dataclass *record_type*."""
        shape = RecordShape.from_dataclass(record_type)
        return [record.build(record_type) for record in self.load_records(rows, shape)]

    def load_csv(self, path: Path, shape: RecordShape) -> list[Record]:
        return self.load_records(read_csv_rows(path), shape)

    def synthesize_shape(self, headers: Sequence[str]) -> RecordShape:
        """Derive a string-only shape from raw headers, one field per header."""
        if not headers:
            raise EmptyInputError()

        return RecordShape(
            fields=tuple(
                FieldDescriptor(
                    logical_name=_capitalize(header),
                    external_name=header,
                    primitive_type=PrimitiveType.STRING,
                )
                for header in headers
            )
        )

    def synthesize_shape_from_rows(self, rows: Sequence[Sequence[str]]) -> RecordShape:
        if not rows:
            raise EmptyInputError()
        return self.synthesize_shape(rows[0])

    def synthesize_csv(self, path: Path) -> RecordShape:
        return self.synthesize_shape_from_rows(read_csv_rows(path))

    def report_types(self, shape: RecordShape) -> dict[str, str]:
        """Return each field's type name keyed by its renamed external name.

        A later field overwrites an earlier one that renames to the same column.
        """
        types: dict[str, str] = {}
        for descriptor in shape:
            column = self._rename_map.get(descriptor.external_name, descriptor.external_name)
            types[column] = descriptor.type_name
        return types
