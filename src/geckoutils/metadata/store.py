"""Descriptive metadata (Description, Unit, Symbol, ...) for DataFrame columns.

Metadata lives in a single side table owned by the frame,
``df.attrs["column_metadata"]``, mapping column label to a small
``{field: value}`` dict. Unset fields read back as :data:`MISSING`.
"""
from __future__ import annotations

import logging
import warnings
from typing import Any, Dict, Hashable, Iterable, List, Mapping, Optional, Sequence, Union

import pandas as pd

from geckoutils.core.errors import UnknownColumnWarning, ValidationError

logger = logging.getLogger(__name__)

METADATA_ATTR = "column_metadata"
MISSING = pd.NA
DESCRIPTION = "Description"
DEFAULT_FIELDS = (DESCRIPTION, "Unit", "Symbol")
DEFAULT_KEY_FIELD = "Datafield"

MetadataRecords = Dict[Hashable, Dict[str, Any]]


def _require_frame(df: Any, name: str = "df") -> None:
    if not isinstance(df, pd.DataFrame):
        raise TypeError(f"{name} must be a pandas DataFrame, got {type(df).__name__}")


def _as_field_list(fields: Union[str, Iterable[str]]) -> List[str]:
    if isinstance(fields, str):
        return [fields]
    return list(dict.fromkeys(fields))


def is_missing(value: Any) -> bool:
    """True for None, NaN, NaT and ``pd.NA``; False for containers."""
    if value is None:
        return True
    if not pd.api.types.is_scalar(value):
        return False
    return bool(pd.isna(value))


def _normalise(value: Any) -> Any:
    return MISSING if is_missing(value) else value


def _registry(df: pd.DataFrame) -> Dict[Hashable, Dict[str, Any]]:
    reg = df.attrs.get(METADATA_ATTR)
    return reg if isinstance(reg, dict) else {}


def _resolve_column(df: pd.DataFrame, key: Hashable) -> Optional[Hashable]:
    """Column label for `key`, falling back to a match on the label's string form."""
    if key in df.columns:
        return key
    matches = [c for c in df.columns if str(c) == str(key)]
    return matches[0] if len(matches) == 1 else None


def get_metadata(df: pd.DataFrame, fields: Union[str, Sequence[str]] = DEFAULT_FIELDS) -> MetadataRecords:
    """Return ``{column: {field: value}}`` for every column of `df`.

    Each record holds exactly `fields`; values never set are :data:`MISSING`.
    """
    _require_frame(df)
    wanted = _as_field_list(fields)
    reg = _registry(df)
    result: MetadataRecords = {}
    for col in df.columns:
        stored = reg.get(col) or {}
        result[col] = {field: stored.get(field, MISSING) for field in wanted}
    return result


def metadata_fields(df: pd.DataFrame) -> List[str]:
    """Distinct field names attached to any column of `df`, in first-seen order."""
    _require_frame(df)
    reg = _registry(df)
    seen: Dict[str, None] = {}
    for col in df.columns:
        for field in (reg.get(col) or {}):
            seen.setdefault(field, None)
    return list(seen)


def parse_metadata(
    table: pd.DataFrame,
    key_field: str = DEFAULT_KEY_FIELD,
    description_field: str = DESCRIPTION,
    fields: Union[str, Sequence[str]] = ("Unit", "Symbol"),
) -> MetadataRecords:
    """Convert a row-oriented metadata table into ``{key: {field: value}}``.

    ``Description`` is always part of the output and is read from
    `description_field`. Empty cells become :data:`MISSING`.
    """
    _require_frame(table, "table")
    wanted = _as_field_list([DESCRIPTION] + _as_field_list(fields))
    sources = {f: (description_field if f == DESCRIPTION else f) for f in wanted}

    required = list(dict.fromkeys([key_field, description_field] + list(sources.values())))
    absent = [c for c in required if c not in table.columns]
    if absent:
        raise ValidationError(f"Metadata table is missing column(s) {absent}; available: {list(table.columns)}")

    result: MetadataRecords = {}
    for pos, row in enumerate(table.to_dict(orient="records")):
        key = row[key_field]
        if is_missing(key):
            raise ValidationError(f"Row {pos} of the metadata table has no value in '{key_field}'")
        result[key] = {f: _normalise(row[src]) for f, src in sources.items()}
    return result


def set_metadata(
    df: pd.DataFrame,
    records: Union[Mapping[Hashable, Mapping[str, Any]], pd.DataFrame],
    key_field: str = DEFAULT_KEY_FIELD,
    description_field: str = DESCRIPTION,
) -> pd.DataFrame:
    """Merge metadata records into the columns of `df` and return `df`.

    `records` maps column names to field dicts, or is a metadata table with a
    `key_field` and a `description_field` column; every other table column is
    treated as a field. Columns missing from `df` are skipped with an
    :class:`UnknownColumnWarning`. Records without a Description are not
    applied; once all other records are merged a :class:`ValidationError`
    names the rejected columns.
    """
    _require_frame(df)
    if isinstance(records, pd.DataFrame):
        for col in (key_field, description_field):
            if col not in records.columns:
                raise ValidationError(f"Metadata table requires a '{col}' column")
        extra = [c for c in records.columns if c not in (key_field, description_field)]
        records = parse_metadata(records, key_field=key_field, description_field=description_field, fields=extra)
    if not isinstance(records, Mapping):
        raise TypeError(f"records must be a mapping or a DataFrame, got {type(records).__name__}")

    # copies of a frame may share attrs with the original, so write fresh dicts
    reg = {col: dict(fields) for col, fields in _registry(df).items()}
    rejected: List[str] = []
    for key, record in records.items():
        col = _resolve_column(df, key)
        if col is None:
            warnings.warn(f"Column '{key}' not found in the data frame. Skipping.", UnknownColumnWarning, stacklevel=2)
            continue
        if not isinstance(record, Mapping) or is_missing(record.get(DESCRIPTION)):
            rejected.append(str(col))
            continue
        stored = reg.setdefault(col, {})
        for field, value in record.items():
            stored[str(field)] = _normalise(value)
        logger.debug("Metadata set for column %s: %s", col, sorted(stored))
    df.attrs = {**df.attrs, METADATA_ATTR: reg}

    if rejected:
        raise ValidationError(f"Metadata for column(s) {rejected} lacks a '{DESCRIPTION}' value; these were not applied")
    return df
