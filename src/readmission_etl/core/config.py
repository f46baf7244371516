
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
import os
from dotenv import load_dotenv

load_dotenv()

# project paths
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent
DATA_DIR   = BASE_DIR / "data"
RAW_DIR    = DATA_DIR / "raw"
LOGS_DIR   = DATA_DIR / "logs"

# input files
RAW_ENCOUNTERS_FILE = Path(os.getenv("RAW_ENCOUNTERS_FILE", RAW_DIR / "diabetic_data.csv"))

# logs
NORMALIZATION_LOGS = LOGS_DIR / "normalization_errors.csv"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", "normalize.log")

# Database
DB_USER = os.getenv("DB_USER")
DB_PASSWORD = os.getenv("DB_PASSWORD")
DB_HOST = os.getenv("DB_HOST", "localhost")
DB_PORT = os.getenv("DB_PORT", "5433")
DB_NAME = os.getenv("DB_NAME")


def get_database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    if not all([DB_USER, DB_PASSWORD, DB_NAME]):
        raise ValueError("Missing required DB environment variables")
    return f"postgresql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"


# Normalization
DEFAULT_SENTINEL = "?"
SENTINEL_COLUMNS = (
    "race", "weight", "payer_code", "medical_specialty",
    "diag_1", "diag_2", "diag_3",
)

FIXED_NAME_TEMPLATES = {
    "admission_type": "Type {code}",
    "discharge_disposition": "Disposition {code}",
    "admission_source": "Source {code}",
}


@dataclass(frozen=True)
class NormalizationConfig:
    """Tokens and templates that drive the normalization engine."""
    sentinels: dict[str, str] = field(
        default_factory=lambda: {c: DEFAULT_SENTINEL for c in SENTINEL_COLUMNS}
    )
    change_tokens: tuple[str, str] = ("Ch", "No")
    diabetes_med_tokens: tuple[str, str] = ("Yes", "No")
    not_prescribed_token: str = "No"
    name_templates: dict[str, str] = field(default_factory=lambda: dict(FIXED_NAME_TEMPLATES))

    def sentinel_for(self, column: str) -> str | None:
        return self.sentinels.get(column)


def load_normalization_config() -> NormalizationConfig:
    """Build the config from the environment, falling back to dataset defaults."""
    sentinel = os.getenv("SENTINEL_TOKEN", DEFAULT_SENTINEL)
    return NormalizationConfig(
        sentinels={c: sentinel for c in SENTINEL_COLUMNS},
        change_tokens=(
            os.getenv("CHANGE_TRUE_TOKEN", "Ch"),
            os.getenv("CHANGE_FALSE_TOKEN", "No"),
        ),
        diabetes_med_tokens=(
            os.getenv("DIABETES_MED_TRUE_TOKEN", "Yes"),
            os.getenv("DIABETES_MED_FALSE_TOKEN", "No"),
        ),
        not_prescribed_token=os.getenv("NOT_PRESCRIBED_TOKEN", "No"),
    )
