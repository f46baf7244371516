"""
Map "not recorded" placeholders (the dataset uses "?") to None.
"""

from __future__ import annotations
from typing import Any, Mapping
import numpy as np
import pandas as pd
from readmission_etl.core.config import NormalizationConfig

def is_absent(value: Any) -> bool:
    if value is None:
        return True
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False

def normalize_sentinel(raw: Any, sentinel: str | None) -> Any:
    """Return None when `raw` equals the sentinel, otherwise `raw` unchanged."""
    if sentinel is not None and isinstance(raw, str) and raw == sentinel:
        return None
    return raw

def column_value(row: Mapping, column: str, config: NormalizationConfig) -> Any:
    """
    Read a column from a raw row.

    The column's sentinel and pandas missing markers both come back as None;
    numpy scalars are unboxed so keys and counters reach the sink as plain ints.
    """
    value = normalize_sentinel(row.get(column), config.sentinel_for(column))
    if is_absent(value):
        return None
    if isinstance(value, np.generic):
        return value.item()
    return value
