"""Column metadata side table for pandas DataFrames."""

from .store import (
    MISSING,
    DEFAULT_FIELDS,
    METADATA_ATTR,
    get_metadata,
    set_metadata,
    parse_metadata,
    metadata_fields,
    is_missing,
)

__all__ = [
    "MISSING",
    "DEFAULT_FIELDS",
    "METADATA_ATTR",
    "get_metadata",
    "set_metadata",
    "parse_metadata",
    "metadata_fields",
    "is_missing",
]
