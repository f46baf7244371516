from readmission_etl.models.tables import (
    Base,
    CODE_TABLE_MODELS,
    CodeAgeGroup,
    Encounter,
    EncounterDiagnosis,
    EncounterMedication,
    Patient,
)
from readmission_etl.models.records import (
    DiagnosisRecord,
    EncounterRecord,
    MedicationRecord,
    PatientRecord,
)
