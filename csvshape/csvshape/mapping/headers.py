"""Header renaming and column presence checks."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from csvshape.errors import MissingColumnError


def resolve_headers(headers: Sequence[str], rename_map: Mapping[str, str]) -> list[str]:
    """Return *headers* with every entry found in *rename_map* replaced by its override."""
    return [rename_map.get(header, header) for header in headers]


def check_columns(external_names: Iterable[str], headers: Sequence[str]) -> None:
    """Raise :class:`MissingColumnError` for the first external name absent from *headers*.

    Headers without a matching field are allowed.
    """
    present = set(headers)
    for name in external_names:
        if name not in present:
            raise MissingColumnError(name)
