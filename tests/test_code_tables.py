"""
Tests for code table building
"""
import pandas as pd
import pytest
from readmission_etl.core.errors import DomainInconsistency, UnresolvedReference
from readmission_etl.transforms.code_tables import (
    CodeTable,
    FixedCodeTable,
    build_code_table,
    build_code_tables,
    build_fixed_code_table,
)
from readmission_etl.transforms.schema import MEDICATION_COLUMNS


def test_ids_follow_first_seen_order():
    table = build_code_table("race", ["Caucasian", "Asian", "Caucasian", None, "Other"])
    assert table.items() == [(1, "Caucasian"), (2, "Asian"), (3, "Other")]


def test_absent_values_excluded():
    table = build_code_table("race", [None, float("nan"), pd.NA])
    assert len(table) == 0


def test_building_twice_is_stable():
    values = ["NO", ">30", "NO", "<30", ">30"]
    first = build_code_table("readmitted", values)
    second = build_code_table("readmitted", values)
    assert first.items() == second.items()


def test_bijection():
    table = build_code_table("age_group", ["[0-10)", "[10-20)", "[0-10)", "[90-100)"])
    assert len(set(table.ids())) == len(set(table.values())) == len(table)
    for surrogate_id, value in table:
        assert table.resolve(value) == surrogate_id
        assert table.value_of(surrogate_id) == value


def test_seed_keeps_ids_and_continues_numbering():
    table = build_code_table("gender", ["Male", "Female", "Unknown/Invalid"], seed=[(1, "Female"), (2, "Male")])
    assert table.items() == [(1, "Female"), (2, "Male"), (3, "Unknown/Invalid")]


def test_seed_conflict_raises():
    with pytest.raises(DomainInconsistency):
        CodeTable.from_pairs("gender", [(1, "Female"), (1, "Male")])


def test_resolve():
    table = build_code_table("a1c_result", ["None", ">7"])
    assert table.resolve(None) is None
    assert table.resolve(">7") == 2
    with pytest.raises(UnresolvedReference):
        table.resolve(">8")


def test_fixed_codes_use_template():
    table = build_fixed_code_table("admission_type", [(3, "3"), (1, "1"), (3, "3"), (None, None)],
                                   template="Type {code}")
    assert isinstance(table, FixedCodeTable)
    assert table.items() == [(3, "Type 3"), (1, "Type 1")]
    assert table.resolve(3) == 3
    assert table.resolve("1") == 1
    with pytest.raises(UnresolvedReference):
        table.resolve(2)


def test_fixed_code_must_be_non_negative():
    with pytest.raises(DomainInconsistency):
        build_fixed_code_table("admission_source", [(-1, "-1")], template="Source {code}")


def test_fixed_code_must_be_integer():
    with pytest.raises(DomainInconsistency):
        build_fixed_code_table("admission_source", [(1.5, "1.5")], template="Source {code}")


def test_conflicting_names_for_one_code():
    pairs = [(11, "Expired"), (11, "Expired at home")]
    with pytest.raises(DomainInconsistency):
        build_fixed_code_table("discharge_disposition", pairs, name_source=lambda code, raw: raw)


def test_two_codes_with_one_name():
    pairs = [(18, "NULL"), (25, "NULL")]
    with pytest.raises(DomainInconsistency):
        build_fixed_code_table("discharge_disposition", pairs, name_source=lambda code, raw: raw)


def test_fixed_table_needs_a_name_rule():
    with pytest.raises(ValueError):
        build_fixed_code_table("admission_type", [(1, "1")])


def test_build_code_tables(rows, config):
    tables = build_code_tables(pd.DataFrame(rows), config)

    assert tables["race"].values() == ["Caucasian", "AfricanAmerican"]
    assert "?" not in tables["race"]
    assert "?" not in tables["medical_specialty"]
    assert tables["gender"].values() == ["Female", "Male", "Unknown/Invalid"]
    assert tables["discharge_disposition"].items() == [(1, "Disposition 1"), (11, "Disposition 11")]
    assert tables["admission_source"].values() == ["Source 7", "Source 1"]
    assert tables["max_glu_serum"].values() == ["None", ">300"]

    assert tables["medication"].values() == [name for _, name in MEDICATION_COLUMNS]
    assert tables["medication"].resolve("glyburide-metformin") == 19
    # first row reads metformin=Steady before any "No"
    assert tables["med_status"].values() == ["Steady", "No", "Up", "Down"]


def test_build_code_tables_with_name_source(rows, config):
    names = {1: "Emergency", 3: "Elective"}
    tables = build_code_tables(
        pd.DataFrame(rows), config,
        name_sources={"admission_type": lambda code, _raw: names[code]},
    )
    assert tables["admission_type"].items() == [(1, "Emergency"), (3, "Elective")]
