"""
Expand the fixed diagnosis slots and per-medication status columns of a raw
row into encounter_diagnosis / encounter_medication rows.
"""

from __future__ import annotations
from typing import Mapping, Sequence
from readmission_etl.core.config import NormalizationConfig
from readmission_etl.core.errors import DuplicateRelation
from readmission_etl.models.records import DiagnosisRecord, MedicationRecord
from readmission_etl.transforms.code_tables import CodeTable
from readmission_etl.transforms.schema import DIAGNOSIS_SLOTS, MEDICATION_COLUMNS
from readmission_etl.transforms.sentinels import column_value

def resolve_diagnoses(
    row: Mapping,
    config: NormalizationConfig,
    slots: Sequence[tuple[str, int]] = DIAGNOSIS_SLOTS,
) -> list[DiagnosisRecord]:
    """One row per recorded slot; positions are never renumbered."""
    encounter_id = column_value(row, "encounter_id", config)
    out = []
    for column, position in slots:
        code = column_value(row, column, config)
        if code is not None:
            out.append(DiagnosisRecord(encounter_id, position, str(code)))
    return out

def resolve_medications(
    row: Mapping,
    medication_table: CodeTable,
    status_table: CodeTable,
    config: NormalizationConfig,
    columns: Sequence[tuple[str, str]] = MEDICATION_COLUMNS,
) -> set[MedicationRecord]:
    encounter_id = column_value(row, "encounter_id", config)
    emitted: dict[int, MedicationRecord] = {}
    for column, name in columns:
        status = column_value(row, column, config)
        if status is None or status == config.not_prescribed_token:
            continue
        medication_id = medication_table.resolve(name)
        if medication_id in emitted:
            raise DuplicateRelation(encounter_id, "medication", name)
        emitted[medication_id] = MedicationRecord(
            encounter_id, medication_id, status_table.resolve(status)
        )
    return set(emitted.values())
