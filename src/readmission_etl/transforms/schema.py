"""
Static layout of the raw diabetic_data.csv record and how each column maps
onto the normalized schema.
"""

KEY_COLUMNS = ["encounter_id", "patient_nbr"]

# (domain, raw column) for code tables with engine-assigned ids
CATEGORICAL_DOMAINS = [
    ("race", "race"),
    ("gender", "gender"),
    ("age_group", "age"),
    ("medical_specialty", "medical_specialty"),
    ("readmitted", "readmitted"),
    ("a1c_result", "A1Cresult"),
    ("max_glu_serum", "max_glu_serum"),
]

# (domain, raw column) for code tables keyed by the supplied numeric code
FIXED_CODE_DOMAINS = [
    ("admission_type", "admission_type_id"),
    ("discharge_disposition", "discharge_disposition_id"),
    ("admission_source", "admission_source_id"),
]

PATIENT_DOMAINS = [
    ("race_id", "race", "race"),
    ("gender_id", "gender", "gender"),
    ("age_group_id", "age_group", "age"),
]

# (encounter field, domain, raw column)
ENCOUNTER_DOMAINS = [
    ("admission_type_id", "admission_type", "admission_type_id"),
    ("discharge_disposition_id", "discharge_disposition", "discharge_disposition_id"),
    ("admission_source_id", "admission_source", "admission_source_id"),
    ("medical_specialty_id", "medical_specialty", "medical_specialty"),
    ("readmitted_id", "readmitted", "readmitted"),
    ("a1c_result_id", "a1c_result", "A1Cresult"),
    ("max_glu_serum_id", "max_glu_serum", "max_glu_serum"),
]

COUNTER_COLUMNS = [
    "time_in_hospital",
    "num_lab_procedures",
    "num_procedures",
    "num_medications",
    "number_outpatient",
    "number_emergency",
    "number_inpatient",
    "number_diagnoses",
]

DIAGNOSIS_SLOTS = [("diag_1", 1), ("diag_2", 2), ("diag_3", 3)]

# (raw column, medication name as spelled in the dataset)
MEDICATION_COLUMNS = [
    ("metformin", "metformin"),
    ("repaglinide", "repaglinide"),
    ("nateglinide", "nateglinide"),
    ("chlorpropamide", "chlorpropamide"),
    ("glimepiride", "glimepiride"),
    ("acetohexamide", "acetohexamide"),
    ("glipizide", "glipizide"),
    ("glyburide", "glyburide"),
    ("tolbutamide", "tolbutamide"),
    ("pioglitazone", "pioglitazone"),
    ("rosiglitazone", "rosiglitazone"),
    ("acarbose", "acarbose"),
    ("miglitol", "miglitol"),
    ("troglitazone", "troglitazone"),
    ("tolazamide", "tolazamide"),
    ("examide", "examide"),
    ("citoglipton", "citoglipton"),
    ("insulin", "insulin"),
    ("glyburide_metformin", "glyburide-metformin"),
    ("glipizide_metformin", "glipizide-metformin"),
    ("glimepiride_pioglitazone", "glimepiride-pioglitazone"),
    ("metformin_rosiglitazone", "metformin-rosiglitazone"),
    ("metformin_pioglitazone", "metformin-pioglitazone"),
]

NUMERIC_COLUMNS = (
    KEY_COLUMNS
    + [col for _, col in FIXED_CODE_DOMAINS]
    + COUNTER_COLUMNS
)

RAW_COLUMNS = [
    "encounter_id", "patient_nbr", "race", "gender", "age", "weight",
    "admission_type_id", "discharge_disposition_id", "admission_source_id",
    "time_in_hospital", "payer_code", "medical_specialty",
    "num_lab_procedures", "num_procedures", "num_medications",
    "number_outpatient", "number_emergency", "number_inpatient",
    "diag_1", "diag_2", "diag_3", "number_diagnoses",
    "max_glu_serum", "A1Cresult",
    *[col for col, _ in MEDICATION_COLUMNS],
    "change_raw", "diabetesMed", "readmitted",
]
