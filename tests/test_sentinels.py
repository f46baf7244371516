"""
Tests for sentinel handling
"""
import numpy as np
import pandas as pd
import pytest
from readmission_etl.transforms.sentinels import column_value, is_absent, normalize_sentinel


def test_sentinel_maps_to_none():
    assert normalize_sentinel("?", "?") is None


@pytest.mark.parametrize("raw", ["Caucasian", "", " ?", "??", "None", 0])
def test_other_values_pass_through(raw):
    assert normalize_sentinel(raw, "?") == raw


def test_no_sentinel_configured():
    assert normalize_sentinel("?", None) == "?"


def test_pandas_missing_markers_are_absent():
    assert is_absent(None)
    assert is_absent(np.nan)
    assert is_absent(pd.NA)
    assert not is_absent("?")
    assert not is_absent(0)


def test_column_value_applies_column_sentinel(config):
    row = {"race": "?", "gender": "?", "weight": "[75-100)"}
    assert column_value(row, "race", config) is None
    # gender carries no sentinel in the dataset
    assert column_value(row, "gender", config) == "?"
    assert column_value(row, "weight", config) == "[75-100)"


def test_column_value_missing_field_and_numpy(config):
    row = {"encounter_id": np.int64(12522), "time_in_hospital": pd.NA}
    value = column_value(row, "encounter_id", config)
    assert value == 12522 and type(value) is int
    assert column_value(row, "time_in_hospital", config) is None
    assert column_value(row, "payer_code", config) is None
