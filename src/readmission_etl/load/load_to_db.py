"""
Load a normalized dataset into the database.
- Code tables and patients are insert-if-new: rows whose natural key already exists are skipped.
  A code value stored under a different id than the dataset's raises DomainInconsistency.
- Encounters, diagnoses and medications are strict inserts: a duplicate key raises.
"""

from __future__ import annotations
import logging
import re
from typing import Any, Iterable, Protocol
from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from readmission_etl.core.errors import DomainInconsistency
from readmission_etl.models import (
    CODE_TABLE_MODELS,
    CodeAgeGroup,
    DiagnosisRecord,
    Encounter,
    EncounterDiagnosis,
    EncounterMedication,
    EncounterRecord,
    MedicationRecord,
    Patient,
    PatientRecord,
)
from readmission_etl.transforms.code_tables import CodeTable

log = logging.getLogger(__name__)

AGE_BAND_RX = re.compile(r"^\[(\d+)-(\d+)\)$")

class TableSink(Protocol):
    def existing_codes(self, domain: str) -> list[tuple[int, Any]]: ...
    def add_codes(self, domain: str, table: CodeTable) -> int: ...
    def add_patients(self, patients: Iterable[PatientRecord]) -> int: ...
    def insert_encounters(self, encounters: Iterable[EncounterRecord]) -> int: ...
    def insert_diagnoses(self, diagnoses: Iterable[DiagnosisRecord]) -> int: ...
    def insert_medications(self, medications: Iterable[MedicationRecord]) -> int: ...

def age_bounds(label: str) -> tuple[int | None, int | None]:
    """'[70-80)' -> (70, 80); anything else has no bounds."""
    m = AGE_BAND_RX.match(str(label).strip())
    if not m:
        return None, None
    return int(m.group(1)), int(m.group(2))

class SqlAlchemySink:
    def __init__(self, session: Session):
        self.session = session

    def existing_codes(self, domain: str) -> list[tuple[int, Any]]:
        model = CODE_TABLE_MODELS[domain]
        rows = self.session.execute(select(model.id, model.value).order_by(model.id))
        return [(r[0], r[1]) for r in rows]

    def add_codes(self, domain: str, table: CodeTable) -> int:
        """Insert values not yet stored; stored values must keep their stored id."""
        model = CODE_TABLE_MODELS[domain]
        stored = {value: surrogate_id for surrogate_id, value in self.existing_codes(domain)}
        taken = {surrogate_id: value for value, surrogate_id in stored.items()}
        objs = []
        for surrogate_id, value in table.items():
            if value in stored:
                if stored[value] != surrogate_id:
                    raise DomainInconsistency(
                        domain, f"{value!r} has id {surrogate_id} but is stored as {stored[value]}"
                    )
                continue
            if surrogate_id in taken:
                raise DomainInconsistency(
                    domain, f"id {surrogate_id} for {value!r} is already stored for {taken[surrogate_id]!r}"
                )
            obj = model(id=surrogate_id, value=value)
            if model is CodeAgeGroup:
                obj.lower_bound, obj.upper_bound = age_bounds(value)
            objs.append(obj)
        self.session.bulk_save_objects(objs)
        log.info("Code table %s: inserted %d (skipped %d existing)", domain, len(objs), len(table) - len(objs))
        return len(objs)

    def add_patients(self, patients: Iterable[PatientRecord]) -> int:
        known = set(self.session.execute(select(Patient.patient_id)).scalars())
        objs = [Patient(**p.to_dict()) for p in patients if p.patient_id not in known]
        self.session.bulk_save_objects(objs)
        log.info("Patients: inserted %d", len(objs))
        return len(objs)

    def _insert(self, model, records: Iterable) -> int:
        objs = [model(**r.to_dict()) for r in records]
        self.session.bulk_save_objects(objs)
        log.info("%s: inserted %d", model.__tablename__, len(objs))
        return len(objs)

    def insert_encounters(self, encounters: Iterable[EncounterRecord]) -> int:
        return self._insert(Encounter, encounters)

    def insert_diagnoses(self, diagnoses: Iterable[DiagnosisRecord]) -> int:
        return self._insert(EncounterDiagnosis, diagnoses)

    def insert_medications(self, medications: Iterable[MedicationRecord]) -> int:
        return self._insert(EncounterMedication, medications)

def read_seed(sink: TableSink) -> dict[str, list[tuple[int, Any]]]:
    """Code tables already in the sink, so re-runs keep their ids."""
    return {domain: sink.existing_codes(domain) for domain in CODE_TABLE_MODELS}

def load_dataset(sink: TableSink, dataset) -> dict:
    """Write every table of a NormalizedDataset in foreign-key order."""
    codes = sum(sink.add_codes(domain, table) for domain, table in dataset.code_tables.items())
    p_count = sink.add_patients(dataset.patients.values())
    e_count = sink.insert_encounters(dataset.encounters)
    d_count = sink.insert_diagnoses(dataset.diagnoses)
    m_count = sink.insert_medications(dataset.medications)
    return {
        "codes": codes,
        "patients": p_count,
        "encounters": e_count,
        "diagnoses": d_count,
        "medications": m_count,
    }

def load_all(dataset, engine: Engine) -> dict:
    log.info("Starting DB load")

    with Session(engine) as session:
        try:
            stats = load_dataset(SqlAlchemySink(session), dataset)
            session.commit()
            log.info("Load committed successfully")
        except Exception as e:
            session.rollback()
            log.error("Load failed; rolled back: %s", e, exc_info=True)
            raise

    log.info("Load summary: %s", stats)
    return stats
