"""Cell coercion and row-to-record conversion."""

from __future__ import annotations

import math
import re
from collections.abc import Callable, Mapping, Sequence

from csvshape.errors import TypeCoercionError, UnsupportedTypeError
from csvshape.shape import PrimitiveType, Record, RecordShape, type_name

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_FLOAT_SPECIAL_RE = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def parse_int(value: str) -> int:
    """Parse a base-10 signed 64-bit integer, rejecting whitespace and underscores."""
    if not _INT_RE.fullmatch(value):
        raise TypeCoercionError(value, PrimitiveType.INT.value)
    parsed = int(value)
    if not _INT64_MIN <= parsed <= _INT64_MAX:
        raise TypeCoercionError(value, PrimitiveType.INT.value)
    return parsed


def parse_float64(value: str) -> float:
    """Parse a decimal float; ``inf`` and ``nan`` spellings are accepted, overflow is not."""
    if _FLOAT_SPECIAL_RE.fullmatch(value):
        return float(value)
    if not _FLOAT_RE.fullmatch(value):
        raise TypeCoercionError(value, PrimitiveType.FLOAT64.value)
    parsed = float(value)
    if math.isinf(parsed):
        raise TypeCoercionError(value, PrimitiveType.FLOAT64.value)
    return parsed


def _parse_string(value: str) -> str:
    return value


Coercer = Callable[[str], object]

COERCERS: dict[PrimitiveType, Coercer] = {
    PrimitiveType.STRING: _parse_string,
    PrimitiveType.INT: parse_int,
    PrimitiveType.FLOAT64: parse_float64,
}


def coerce_value(value: str, primitive_type: PrimitiveType | str) -> object:
    coercer = COERCERS.get(primitive_type) if isinstance(primitive_type, PrimitiveType) else None
    if coercer is None:
        raise UnsupportedTypeError(type_name(primitive_type))
    return coercer(value)


def coerce_row(
    shape: RecordShape,
    headers: Sequence[str],
    row: Sequence[str],
    positions: Mapping[str, int],
) -> Record:
    """Convert one data row into a :class:`Record`.

    Only the first ``min(len(row), len(headers))`` cells are visited. Cells under
    an unmapped header are skipped and fields with no cell keep their zero value.
    When a header repeats, the first column carrying it fills the field.
    """
    values = shape.zero_values()
    filled: set[int] = set()
    for header, cell in zip(headers, row):
        position = positions.get(header)
        if position is None or position in filled:
            continue
        values[position] = coerce_value(cell, shape[position].primitive_type)
        filled.add(position)
    return Record(shape=shape, values=tuple(values))
