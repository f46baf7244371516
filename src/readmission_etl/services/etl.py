"""
ETL service - orchestrates extract, normalize, and load operations
"""
from __future__ import annotations
import logging
from pathlib import Path
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from readmission_etl.core.config import (
    NORMALIZATION_LOGS,
    RAW_ENCOUNTERS_FILE,
    NormalizationConfig,
)
from readmission_etl.core.db import get_engine
from readmission_etl.core.errors import RowError
from readmission_etl.extract.extract_encounters import read_encounters
from readmission_etl.load.load_to_db import SqlAlchemySink, load_all, read_seed
from readmission_etl.services.normalizer import errors_frame, normalize_records

log = logging.getLogger(__name__)

def write_error_log(errors: list[RowError], path: str | Path = NORMALIZATION_LOGS) -> None:
    path = Path(path)
    if not errors:
        log.info("No row errors to log")
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    errors_frame(errors).to_csv(path, index=False)
    log.warning("Wrote row error log: %s (%d rows)", path, len(errors))

def run_etl(
    source: str | Path = RAW_ENCOUNTERS_FILE,
    engine: Engine | None = None,
    config: NormalizationConfig | None = None,
    error_log: str | Path = NORMALIZATION_LOGS,
) -> dict:
    """Execute the complete ETL pipeline"""
    try:
        engine = engine or get_engine()

        log.info("Extracting raw encounters...")
        df = read_encounters(source)

        with Session(engine) as session:
            seed = read_seed(SqlAlchemySink(session))

        log.info("Normalizing...")
        dataset = normalize_records(df, config, seed=seed)
        write_error_log(dataset.errors, error_log)

        log.info("Loading data to database...")
        stats = load_all(dataset, engine)
        stats["row_errors"] = len(dataset.errors)

        log.info(f"Pipeline complete: {stats}")
        return stats

    except Exception as e:
        log.error(f"ETL pipeline failed: {e}", exc_info=True)
        raise
