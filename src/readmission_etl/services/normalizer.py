"""
Normalization engine.

Phase 1 builds every code table and resolves patients over the full input.
Phase 2 turns each raw row into an encounter plus its diagnoses and
medications. A row that fails in phase 2 is recorded as a RowError and emits
nothing; phase 1 failures abort the run.
"""

from __future__ import annotations
import logging
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Any, Iterable, Mapping
import pandas as pd
from readmission_etl.core.config import NormalizationConfig, load_normalization_config
from readmission_etl.core.errors import (
    DuplicateRelation,
    InvalidRecord,
    OrphanEncounter,
    RowError,
    UnresolvedReference,
)
from readmission_etl.models.records import (
    DiagnosisRecord,
    EncounterRecord,
    MedicationRecord,
    PatientRecord,
)
from readmission_etl.transforms.code_tables import CodeTableSet, NameSource, build_code_tables
from readmission_etl.transforms.schema import RAW_COLUMNS
from readmission_etl.transforms.transform_encounters import normalize_encounter
from readmission_etl.transforms.transform_patients import resolve_patients
from readmission_etl.transforms.transform_relations import resolve_diagnoses, resolve_medications

log = logging.getLogger(__name__)

ROW_ERRORS = (OrphanEncounter, UnresolvedReference, DuplicateRelation, InvalidRecord)


@dataclass
class NormalizedDataset:
    code_tables: CodeTableSet
    patients: dict[Any, PatientRecord]
    encounters: list[EncounterRecord] = field(default_factory=list)
    diagnoses: list[DiagnosisRecord] = field(default_factory=list)
    medications: list[MedicationRecord] = field(default_factory=list)
    errors: list[RowError] = field(default_factory=list)

    def stats(self) -> dict:
        return {
            "code_values": sum(len(t) for _, t in self.code_tables.items()),
            "patients": len(self.patients),
            "encounters": len(self.encounters),
            "diagnoses": len(self.diagnoses),
            "medications": len(self.medications),
            "row_errors": len(self.errors),
        }


def _to_frame(rows: pd.DataFrame | Iterable[Mapping]) -> pd.DataFrame:
    """Buffer the record source so it can be read twice; extra fields are dropped."""
    if not isinstance(rows, pd.DataFrame):
        rows = pd.DataFrame([dict(r) for r in rows], dtype=object)
    return rows.reindex(columns=RAW_COLUMNS)


def normalize_row(
    row: Mapping,
    tables: CodeTableSet,
    patients: Mapping[Any, PatientRecord],
    config: NormalizationConfig,
) -> tuple[EncounterRecord, list[DiagnosisRecord], set[MedicationRecord]]:
    encounter = normalize_encounter(row, tables, patients, config)
    diagnoses = resolve_diagnoses(row, config)
    medications = resolve_medications(row, tables["medication"], tables["med_status"], config)
    return encounter, diagnoses, medications


def normalize_records(
    rows: pd.DataFrame | Iterable[Mapping],
    config: NormalizationConfig | None = None,
    seed: Mapping[str, Iterable[tuple[int, Any]]] | None = None,
    name_sources: Mapping[str, NameSource] | None = None,
) -> NormalizedDataset:
    config = config or load_normalization_config()
    frame = _to_frame(rows)
    log.info("Normalizing %d raw rows", len(frame))

    tables = build_code_tables(frame, config, seed=seed, name_sources=name_sources)
    patients = resolve_patients(frame, tables, config)
    dataset = NormalizedDataset(code_tables=tables, patients=patients)

    seen: set[Any] = set()
    for row in frame.to_dict("records"):
        try:
            encounter, diagnoses, medications = normalize_row(row, tables, patients, config)
            if encounter.encounter_id in seen:
                raise InvalidRecord(f"encounter {encounter.encounter_id} appears more than once")
        except ROW_ERRORS as exc:
            dataset.errors.append(RowError.from_exception(row, exc))
            continue
        seen.add(encounter.encounter_id)
        dataset.encounters.append(encounter)
        dataset.diagnoses.extend(diagnoses)
        dataset.medications.extend(sorted(medications, key=lambda m: m.medication_id))

    if dataset.errors:
        by_kind = Counter(e.kind for e in dataset.errors)
        log.warning("%d rows failed normalization: %s", len(dataset.errors), dict(by_kind))
    else:
        log.info("All rows normalized ✓")

    log.info("Normalization complete: %s", dataset.stats())
    return dataset


def errors_frame(errors: list[RowError]) -> pd.DataFrame:
    return pd.DataFrame(
        [asdict(e) for e in errors],
        columns=["encounter_id", "patient_nbr", "kind", "message"],
    )
