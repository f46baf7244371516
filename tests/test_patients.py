"""
Tests for patient resolution
"""
import pandas as pd
import pytest
from readmission_etl.core.errors import UnresolvedReference
from readmission_etl.transforms.code_tables import CodeTableSet, build_code_table, build_code_tables
from readmission_etl.transforms.transform_patients import representative_rows, resolve_patients
from conftest import make_row


def _resolve(rows, config):
    tables = build_code_tables(pd.DataFrame(rows), config)
    return tables, resolve_patients(rows, tables, config)


def test_patient_sourced_from_lowest_encounter(rows, config):
    tables, patients = _resolve(rows, config)

    patient = patients[7]
    assert patient.patient_id == 7
    # encounter 50 is the representative row and its race is "?"
    assert patient.race_id is None
    assert patient.gender_id == tables["gender"].resolve("Female")
    assert patient.age_group_id == tables["age_group"].resolve("[70-80)")
    assert patient.weight_text is None
    assert patient.payer_code == "MC"


def test_one_patient_per_key(rows, config):
    _, patients = _resolve(rows, config)
    assert sorted(patients) == [7, 9, 11]


def test_payer_code_sentinel(rows, config):
    _, patients = _resolve(rows, config)
    assert patients[11].payer_code is None


def test_row_order_does_not_matter(config):
    rows = [
        make_row(30, 5, age="[40-50)"),
        make_row(10, 5, age="[60-70)"),
        make_row(20, 5, age="[50-60)"),
    ]
    tables, forward = _resolve(rows, config)
    backward = resolve_patients(list(reversed(rows)), tables, config)
    assert forward == backward
    assert forward[5].age_group_id == tables["age_group"].resolve("[60-70)")


def test_representative_rows():
    frame = pd.DataFrame({
        "patient_nbr": [1, 1, 2, None],
        "encounter_id": [9, 4, 6, 1],
    })
    reps = representative_rows(frame)
    assert sorted(reps["encounter_id"].tolist()) == [4, 6]


def test_rows_without_patient_key_are_skipped(config):
    rows = [make_row(1, None), make_row(2, 3)]
    _, patients = _resolve(rows, config)
    assert list(patients) == [3]


def test_value_missing_from_code_table(config):
    rows = [make_row(1, 3, race="Hispanic")]
    tables = build_code_tables(pd.DataFrame(rows), config)
    tables.tables["race"] = build_code_table("race", ["Caucasian"])
    with pytest.raises(UnresolvedReference):
        resolve_patients(rows, tables, config)
