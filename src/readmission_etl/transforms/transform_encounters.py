"""
Transform encounters: swap categorical text for code table ids, copy the
utilization counters and convert the change / diabetesMed flags to tri-state.
"""

from __future__ import annotations
from typing import Any, Mapping
from readmission_etl.core.config import NormalizationConfig
from readmission_etl.core.errors import InvalidRecord, OrphanEncounter
from readmission_etl.models.records import EncounterRecord, PatientRecord
from readmission_etl.transforms.code_tables import CodeTableSet
from readmission_etl.transforms.schema import COUNTER_COLUMNS, ENCOUNTER_DOMAINS
from readmission_etl.transforms.sentinels import column_value

def to_tristate(raw: Any, tokens: tuple[str, str]) -> bool | None:
    """Exact-match flag conversion; anything but the two tokens is unknown."""
    true_token, false_token = tokens
    if not isinstance(raw, str):
        return None
    if raw == true_token:
        return True
    if raw == false_token:
        return False
    return None

def _counter(row: Mapping, column: str, config: NormalizationConfig) -> int | None:
    value = column_value(row, column, config)
    if value is None:
        return None
    if isinstance(value, float) and not value.is_integer():
        raise InvalidRecord(f"{column} {value!r} is not a whole number")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidRecord(f"{column} {value!r} is not a whole number") from None

def normalize_encounter(
    row: Mapping,
    tables: CodeTableSet,
    patients: Mapping[Any, PatientRecord],
    config: NormalizationConfig,
) -> EncounterRecord:
    encounter_id = column_value(row, "encounter_id", config)
    if encounter_id is None:
        raise InvalidRecord("row has no encounter_id")

    patient_nbr = column_value(row, "patient_nbr", config)
    patient = patients.get(patient_nbr) if patient_nbr is not None else None
    if patient is None:
        raise OrphanEncounter(encounter_id, patient_nbr)

    refs = {
        field: tables[domain].resolve(column_value(row, column, config))
        for field, domain, column in ENCOUNTER_DOMAINS
    }
    counters = {col: _counter(row, col, config) for col in COUNTER_COLUMNS}

    return EncounterRecord(
        encounter_id=encounter_id,
        patient_id=patient.patient_id,
        change_flag=to_tristate(row.get("change_raw"), config.change_tokens),
        diabetes_med_flag=to_tristate(row.get("diabetesMed"), config.diabetes_med_tokens),
        **refs,
        **counters,
    )
