import pytest
from readmission_etl.core.config import NormalizationConfig
from readmission_etl.core.db import create_tables, get_engine
from readmission_etl.transforms.schema import MEDICATION_COLUMNS


def make_row(encounter_id, patient_nbr, **overrides):
    """A complete raw row in the shape of diabetic_data.csv."""
    row = {
        "encounter_id": encounter_id,
        "patient_nbr": patient_nbr,
        "race": "Caucasian",
        "gender": "Female",
        "age": "[70-80)",
        "weight": "?",
        "admission_type_id": 1,
        "discharge_disposition_id": 1,
        "admission_source_id": 7,
        "time_in_hospital": 3,
        "payer_code": "MC",
        "medical_specialty": "InternalMedicine",
        "num_lab_procedures": 41,
        "num_procedures": 0,
        "num_medications": 11,
        "number_outpatient": 0,
        "number_emergency": 0,
        "number_inpatient": 1,
        "diag_1": "250.83",
        "diag_2": "401",
        "diag_3": "428",
        "number_diagnoses": 9,
        "max_glu_serum": "None",
        "A1Cresult": ">7",
        "change_raw": "No",
        "diabetesMed": "Yes",
        "readmitted": "NO",
    }
    row.update({col: "No" for col, _ in MEDICATION_COLUMNS})
    row.update(overrides)
    return row


@pytest.fixture
def config():
    return NormalizationConfig()


@pytest.fixture
def rows():
    return [
        make_row(100, 7, change_raw="Ch", diabetesMed="Yes", metformin="Steady", insulin="Up"),
        make_row(50, 7, race="?", gender="Female", insulin="Down"),
        make_row(200, 9, race="AfricanAmerican", gender="Male", age="[50-60)",
                 admission_type_id=3, discharge_disposition_id=11, admission_source_id=1,
                 diag_2="?", medical_specialty="?", readmitted="<30"),
        make_row(300, 11, race="?", gender="Unknown/Invalid", age="[80-90)",
                 payer_code="?", A1Cresult="None", max_glu_serum=">300", readmitted=">30"),
    ]


@pytest.fixture
def engine(tmp_path):
    engine = get_engine(f"sqlite:///{tmp_path / 'readmission.db'}")
    create_tables(engine)
    yield engine
    engine.dispose()
