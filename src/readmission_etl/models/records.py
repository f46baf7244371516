"""
Normalized rows produced by the engine, before they reach a sink.
"""

from __future__ import annotations
from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class PatientRecord:
    patient_id: Any
    race_id: int | None = None
    gender_id: int | None = None
    age_group_id: int | None = None
    payer_code: str | None = None
    weight_text: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class EncounterRecord:
    encounter_id: Any
    patient_id: Any
    admission_type_id: int | None = None
    discharge_disposition_id: int | None = None
    admission_source_id: int | None = None
    time_in_hospital: int | None = None
    num_lab_procedures: int | None = None
    num_procedures: int | None = None
    num_medications: int | None = None
    number_outpatient: int | None = None
    number_emergency: int | None = None
    number_inpatient: int | None = None
    number_diagnoses: int | None = None
    medical_specialty_id: int | None = None
    readmitted_id: int | None = None
    a1c_result_id: int | None = None
    max_glu_serum_id: int | None = None
    change_flag: bool | None = None
    diabetes_med_flag: bool | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class DiagnosisRecord:
    encounter_id: Any
    position_no: int
    icd9_code: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class MedicationRecord:
    encounter_id: Any
    medication_id: int
    med_status_id: int

    def to_dict(self) -> dict:
        return asdict(self)
