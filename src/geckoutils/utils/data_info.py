"""Look up description and unit of a data field in a lab metadata workbook.

The workbook is expected to have a ``metadata`` sheet whose header row sits
below two title rows, with at least ``Datafield``, ``Description``, ``Unit`` and
``Datatype`` columns (any capitalisation or spacing).
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

import Levenshtein
import pandas as pd

from geckoutils.core.errors import FilesystemError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_WORKBOOK = Path("../03_data/labdata.xlsx")
REQUIRED_COLUMNS = ("datafield", "description", "unit")


@dataclass(frozen=True)
class DataFieldInfo:
    datafield: str
    description: Optional[str]
    unit: Optional[str]

    def __str__(self) -> str:
        return f"Description: {self.description}\nUnit: {self.unit}"


def clean_name(name: str) -> str:
    s = re.sub(r"[^0-9a-zA-Z]+", "_", str(name).strip())
    s = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s)
    return s.strip("_").lower()


def closest_fields(variable_name: str, candidates: List[str], n: int = 3) -> List[str]:
    ranked = sorted(dict.fromkeys(candidates), key=lambda c: (Levenshtein.distance(variable_name, c), c))
    return ranked[:n]


def prepare_metadata_frame(raw: pd.DataFrame) -> pd.DataFrame:
    """Clean column names, drop duplicate rows and foreign-key entries."""
    df = raw.rename(columns=clean_name).drop_duplicates()
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValidationError(f"Metadata sheet lacks required column(s): {missing}")
    datatype = next((c for c in ("datatype", "data_type") if c in df.columns), None)
    if datatype is not None:
        df = df[df[datatype].astype(str).str.upper() != "FOREIGN KEY"]
    df = df[df["datafield"].notna()].copy()
    df["datafield"] = df["datafield"].astype(str)
    return df.reset_index(drop=True)


def read_metadata_workbook(filepath: Union[str, Path] = DEFAULT_WORKBOOK, sheet: str = "metadata", skiprows: int = 2) -> pd.DataFrame:
    p = Path(filepath)
    if not p.exists():
        raise FilesystemError(f"Metadata workbook not found: {p}")
    raw = pd.read_excel(p, sheet_name=sheet, skiprows=skiprows, engine="openpyxl")
    return prepare_metadata_frame(raw)


def _optional_str(value) -> Optional[str]:
    if value is None or pd.isna(value):
        return None
    return str(value)


def find_data_field(info: pd.DataFrame, variable_name: str) -> DataFieldInfo:
    """Return the entry for `variable_name` from a prepared metadata frame.

    Raises ``KeyError`` carrying the closest field names when there is no exact match.
    """
    hits = info[info["datafield"] == variable_name]
    if hits.empty:
        suggestions = closest_fields(variable_name, info["datafield"].tolist())
        raise KeyError(f"No data field named '{variable_name}'. Did you mean one of: {suggestions}?")
    row = hits.iloc[0]
    return DataFieldInfo(
        datafield=variable_name,
        description=_optional_str(row["description"]),
        unit=_optional_str(row["unit"]),
    )


def get_data_info(variable_name: str, filepath: Union[str, Path] = DEFAULT_WORKBOOK, sheet: str = "metadata", skiprows: int = 2) -> DataFieldInfo:
    info = read_metadata_workbook(filepath, sheet=sheet, skiprows=skiprows)
    result = find_data_field(info, variable_name)
    logger.info("Data field %s: %s [%s]", result.datafield, result.description, result.unit)
    return result
