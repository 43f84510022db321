"""Mapping between header-driven CSV rows and record shapes."""

from csvshape.mapping.engine import MappingEngine
from csvshape.mapping.headers import check_columns, resolve_headers


__all__ = ["MappingEngine", "check_columns", "resolve_headers"]
