"""
Error taxonomy for the normalization engine.

Code table and patient errors abort the run. Encounter and relation errors are
row-scoped and get collected into RowError records.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any


class NormalizationError(Exception):
    """Base class; `kind` is the name reported in the error batch."""

    @property
    def kind(self) -> str:
        return type(self).__name__


class DomainInconsistency(NormalizationError):
    """A fixed-code domain saw conflicting names (or an invalid code)."""

    def __init__(self, domain: str, message: str):
        self.domain = domain
        super().__init__(f"{domain}: {message}")


class UnresolvedReference(NormalizationError):
    def __init__(self, domain: str, value: Any):
        self.domain = domain
        self.value = value
        super().__init__(f"{domain}: value {value!r} not found in code table")


class OrphanEncounter(NormalizationError):
    def __init__(self, encounter_id: Any, patient_nbr: Any):
        self.encounter_id = encounter_id
        self.patient_nbr = patient_nbr
        super().__init__(f"encounter {encounter_id}: patient {patient_nbr!r} was never resolved")


class DuplicateRelation(NormalizationError):
    def __init__(self, encounter_id: Any, relation: str, key: Any):
        self.encounter_id = encounter_id
        self.relation = relation
        self.key = key
        super().__init__(f"encounter {encounter_id}: {relation} {key!r} emitted twice")


class InvalidRecord(NormalizationError):
    """Missing or repeated encounter key, or a counter that is not a whole number."""


@dataclass(frozen=True)
class RowError:
    encounter_id: Any
    patient_nbr: Any
    kind: str
    message: str

    @classmethod
    def from_exception(cls, row, exc: NormalizationError) -> "RowError":
        return cls(
            encounter_id=row.get("encounter_id"),
            patient_nbr=row.get("patient_nbr"),
            kind=exc.kind,
            message=str(exc),
        )
