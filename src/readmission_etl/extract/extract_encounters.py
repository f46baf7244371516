"""
Extract raw encounters from diabetic_data.csv:
- Reads every cell as text so tokens like "?" and "None" survive
- Renames `change` -> `change_raw` and hyphenated medication columns to underscores
- Returns a DataFrame with exactly the raw schema columns
- Numeric cells that are not whole numbers stay as text (keys become absent)
  so normalization reports them per row
"""

from __future__ import annotations
import logging
from pathlib import Path
import pandas as pd
from readmission_etl.core.config import RAW_ENCOUNTERS_FILE
from readmission_etl.transforms.schema import KEY_COLUMNS, NUMERIC_COLUMNS, RAW_COLUMNS

log = logging.getLogger(__name__)

def _rename(col: str) -> str:
    col = col.strip()
    return "change_raw" if col == "change" else col.replace("-", "_")

def _whole_numbers(raw: pd.Series, column: str, keep_invalid: bool) -> pd.Series:
    """Cast a text column to integers; cells that are not whole numbers are kept as text or dropped."""
    numeric = pd.to_numeric(raw, errors="coerce")
    whole = numeric.notna() & (numeric % 1 == 0)
    invalid = raw.notna() & ~whole
    if not invalid.any():
        return numeric.astype("Int64")

    log.warning("Column %s: %d cells are not whole numbers", column, int(invalid.sum()))
    if not keep_invalid:
        return numeric.where(whole).astype("Int64")
    values = [int(n) if ok else r for n, ok, r in zip(numeric, whole, raw)]
    return pd.Series(values, index=raw.index, dtype=object)

def read_encounters(path: str | Path = RAW_ENCOUNTERS_FILE) -> pd.DataFrame:
    path = Path(path)
    df = pd.read_csv(path, dtype=str, keep_default_na=False, na_values=[""])
    df = df.rename(columns=_rename)

    if df.empty:
        raise ValueError("No rows found in encounters source.")

    missing_keys = [c for c in KEY_COLUMNS if c not in df.columns]
    if missing_keys:
        raise ValueError(f"Encounters source is missing key columns: {missing_keys}")

    missing = [c for c in RAW_COLUMNS if c not in df.columns]
    if missing:
        log.warning("Missing expected columns (read as absent): %s", missing)
    extra = [c for c in df.columns if c not in RAW_COLUMNS]
    if extra:
        log.info("Ignoring unknown columns: %s", extra)

    df = df.reindex(columns=RAW_COLUMNS)
    for col in NUMERIC_COLUMNS:
        df[col] = _whole_numbers(df[col], col, keep_invalid=col not in KEY_COLUMNS)

    log.info("Extracted encounters: %s (%d rows)", path, len(df))
    return df
