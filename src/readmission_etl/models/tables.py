"""
ORM models for the normalized readmission schema.

Code tables expose uniform `id` / `value` attributes over their own column
names so the sink can write every domain the same way.
"""

from sqlalchemy.orm import DeclarativeBase
from sqlalchemy import (
    BigInteger, Boolean, Column, ForeignKey, Integer, SmallInteger, String
)

class Base(DeclarativeBase):
    pass

# reference (code) tables
class CodeRace(Base):
    __tablename__ = "code_race"

    id    = Column("race_id", SmallInteger, primary_key=True, autoincrement=False)
    value = Column("code", String(50), nullable=False, unique=True)

class CodeGender(Base):
    __tablename__ = "code_gender"

    id    = Column("gender_id", SmallInteger, primary_key=True, autoincrement=False)
    value = Column("code", String(20), nullable=False, unique=True)

class CodeAgeGroup(Base):
    __tablename__ = "code_age_group"

    id          = Column("age_group_id", SmallInteger, primary_key=True, autoincrement=False)
    value       = Column("label", String(20), nullable=False, unique=True)
    lower_bound = Column(SmallInteger)
    upper_bound = Column(SmallInteger)

class CodeAdmissionType(Base):
    __tablename__ = "code_admission_type"

    id    = Column("admission_type_id", SmallInteger, primary_key=True, autoincrement=False)
    value = Column("name", String(100), nullable=False, unique=True)

class CodeDischargeDisposition(Base):
    __tablename__ = "code_discharge_disposition"

    id    = Column("discharge_disposition_id", SmallInteger, primary_key=True, autoincrement=False)
    value = Column("name", String(150), nullable=False, unique=True)

class CodeAdmissionSource(Base):
    __tablename__ = "code_admission_source"

    id    = Column("admission_source_id", SmallInteger, primary_key=True, autoincrement=False)
    value = Column("name", String(150), nullable=False, unique=True)

class CodeReadmitted(Base):
    __tablename__ = "code_readmitted"

    id    = Column("readmitted_id", SmallInteger, primary_key=True, autoincrement=False)
    value = Column("code", String(10), nullable=False, unique=True)

class CodeA1cResult(Base):
    __tablename__ = "code_a1c_result"

    id    = Column("a1c_result_id", SmallInteger, primary_key=True, autoincrement=False)
    value = Column("code", String(10), nullable=False, unique=True)

class CodeMaxGluSerum(Base):
    __tablename__ = "code_max_glu_serum"

    id    = Column("max_glu_serum_id", SmallInteger, primary_key=True, autoincrement=False)
    value = Column("code", String(10), nullable=False, unique=True)

class MedicalSpecialty(Base):
    __tablename__ = "medical_specialty"

    id    = Column("medical_specialty_id", SmallInteger, primary_key=True, autoincrement=False)
    value = Column("name", String(150), nullable=False, unique=True)

class Medication(Base):
    __tablename__ = "medication"

    id    = Column("medication_id", SmallInteger, primary_key=True, autoincrement=False)
    value = Column("name", String(100), nullable=False, unique=True)

class CodeMedStatus(Base):
    __tablename__ = "code_med_status"

    id    = Column("med_status_id", SmallInteger, primary_key=True, autoincrement=False)
    value = Column("code", String(10), nullable=False, unique=True)

# core entities
class Patient(Base):
    __tablename__ = "patient"

    patient_id   = Column(BigInteger, primary_key=True, autoincrement=False)
    race_id      = Column(SmallInteger, ForeignKey("code_race.race_id"))
    gender_id    = Column(SmallInteger, ForeignKey("code_gender.gender_id"))
    age_group_id = Column(SmallInteger, ForeignKey("code_age_group.age_group_id"))
    payer_code   = Column(String(20))
    weight_text  = Column(String(20))

class Encounter(Base):
    __tablename__ = "encounter"

    encounter_id             = Column(BigInteger, primary_key=True, autoincrement=False)
    patient_id               = Column(BigInteger, ForeignKey("patient.patient_id"), nullable=False)
    admission_type_id        = Column(SmallInteger, ForeignKey("code_admission_type.admission_type_id"))
    discharge_disposition_id = Column(SmallInteger, ForeignKey("code_discharge_disposition.discharge_disposition_id"))
    admission_source_id      = Column(SmallInteger, ForeignKey("code_admission_source.admission_source_id"))
    time_in_hospital         = Column(Integer)
    num_lab_procedures       = Column(Integer)
    num_procedures           = Column(Integer)
    num_medications          = Column(Integer)
    number_outpatient        = Column(Integer)
    number_emergency         = Column(Integer)
    number_inpatient         = Column(Integer)
    number_diagnoses         = Column(Integer)
    medical_specialty_id     = Column(SmallInteger, ForeignKey("medical_specialty.medical_specialty_id"))
    readmitted_id            = Column(SmallInteger, ForeignKey("code_readmitted.readmitted_id"))
    a1c_result_id            = Column(SmallInteger, ForeignKey("code_a1c_result.a1c_result_id"))
    max_glu_serum_id         = Column(SmallInteger, ForeignKey("code_max_glu_serum.max_glu_serum_id"))
    change_flag              = Column(Boolean)   # 'Ch' -> true, 'No' -> false
    diabetes_med_flag        = Column(Boolean)   # 'Yes' / 'No'

class EncounterDiagnosis(Base):
    __tablename__ = "encounter_diagnosis"

    encounter_id = Column(BigInteger, ForeignKey("encounter.encounter_id"), primary_key=True)
    position_no  = Column(SmallInteger, primary_key=True, autoincrement=False)  # 1, 2, 3
    icd9_code    = Column(String(10), nullable=False)

class EncounterMedication(Base):
    __tablename__ = "encounter_medication"

    encounter_id  = Column(BigInteger, ForeignKey("encounter.encounter_id"), primary_key=True)
    medication_id = Column(SmallInteger, ForeignKey("medication.medication_id"), primary_key=True, autoincrement=False)
    med_status_id = Column(SmallInteger, ForeignKey("code_med_status.med_status_id"), nullable=False)

# domain name -> ORM model, in load order
CODE_TABLE_MODELS = {
    "race": CodeRace,
    "gender": CodeGender,
    "age_group": CodeAgeGroup,
    "admission_type": CodeAdmissionType,
    "discharge_disposition": CodeDischargeDisposition,
    "admission_source": CodeAdmissionSource,
    "medical_specialty": MedicalSpecialty,
    "readmitted": CodeReadmitted,
    "a1c_result": CodeA1cResult,
    "max_glu_serum": CodeMaxGluSerum,
    "medication": Medication,
    "med_status": CodeMedStatus,
}
