from typing import Any, Optional, Sequence
import pandas as pd

from geckoutils.metadata.store import MISSING, get_metadata, metadata_fields
from .viewer import render_interactive_view


SUMMARY_COLUMNS = ['Column', 'Class']


def column_class(series: pd.Series) -> str:
    """Readable type label for a column, e.g. 'float64', 'category', 'datetime64[ns]'."""
    return str(series.dtype)


def render_summary(df: pd.DataFrame, fields: Optional[Sequence[str]] = None) -> pd.DataFrame:
    """Summarize a DataFrame's columns with their types and metadata.

    One row per column: ``Column``, ``Class`` and one column per metadata field.
    When `fields` is None every field attached to any column is shown.
    """
    if not isinstance(df, pd.DataFrame):
        raise TypeError(f"df must be a pandas DataFrame, got {type(df).__name__}")
    if fields is None:
        fields = metadata_fields(df)
    elif isinstance(fields, str):
        fields = [fields]
    fields = list(dict.fromkeys(fields))
    metadata = get_metadata(df, fields=fields) if fields else {}
    rows = []
    for i, col in enumerate(df.columns):
        row: dict[str, Any] = {
            'Column': str(col),
            'Class': column_class(df.iloc[:, i]),
        }
        meta = metadata.get(col, {})
        for field in fields:
            row[field] = meta.get(field, MISSING)
        rows.append(row)
    summary = pd.DataFrame(rows, columns=SUMMARY_COLUMNS + fields, dtype=object)
    return summary


def show_meta_data(df: pd.DataFrame, fields: Optional[Sequence[str]] = None, show_in_viewer: bool = False, **viewer_kwargs: Any):
    """Metadata summary of `df`; with `show_in_viewer` the viewer HTML is returned instead."""
    summary = render_summary(df, fields=fields)
    if show_in_viewer:
        return render_interactive_view(summary, **viewer_kwargs)
    return summary
