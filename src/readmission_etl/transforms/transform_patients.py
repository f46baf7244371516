"""
Transform patients: collapse every encounter row of a patient into one patient,
sourcing demographics from the patient's lowest encounter_id.
"""

from __future__ import annotations
import logging
from typing import Any, Iterable, Mapping
import pandas as pd
from readmission_etl.core.config import NormalizationConfig
from readmission_etl.models.records import PatientRecord
from readmission_etl.transforms.code_tables import CodeTableSet
from readmission_etl.transforms.schema import PATIENT_DOMAINS
from readmission_etl.transforms.sentinels import column_value

log = logging.getLogger(__name__)

def representative_rows(frame: pd.DataFrame) -> pd.DataFrame:
    """One row per patient_nbr: the row with the minimum encounter_id."""
    keyed = frame.dropna(subset=["patient_nbr"])
    return (
        keyed.sort_values(["patient_nbr", "encounter_id"], kind="stable", na_position="last")
             .drop_duplicates(subset=["patient_nbr"], keep="first")
    )

def build_patient(row: Mapping, tables: CodeTableSet, config: NormalizationConfig) -> PatientRecord:
    refs = {
        field: tables[domain].resolve(column_value(row, column, config))
        for field, domain, column in PATIENT_DOMAINS
    }
    return PatientRecord(
        patient_id=column_value(row, "patient_nbr", config),
        payer_code=column_value(row, "payer_code", config),
        weight_text=column_value(row, "weight", config),
        **refs,
    )

def resolve_patients(
    rows: pd.DataFrame | Iterable[Mapping],
    tables: CodeTableSet,
    config: NormalizationConfig,
) -> dict[Any, PatientRecord]:
    """Map each external patient key to its resolved patient.

    Raises UnresolvedReference when a demographic value is missing from its
    code table; the tables must be built from the same rows.
    """
    frame = rows if isinstance(rows, pd.DataFrame) else pd.DataFrame(list(rows), dtype=object)
    reps = representative_rows(frame)

    patients = {}
    for row in reps.to_dict("records"):
        patient = build_patient(row, tables, config)
        patients[patient.patient_id] = patient

    folded = frame["patient_nbr"].notna().sum() - len(reps)
    log.info("Resolved %d patients (%d repeat encounters folded)", len(patients), folded)
    return patients
