"""
CLI wrapper for the readmission normalization pipeline.
Run with:
    python -m readmission_etl.scripts.run_etl [path/to/diabetic_data.csv]
"""
import logging
import sys
from readmission_etl.core.config import RAW_ENCOUNTERS_FILE
from readmission_etl.core.db import create_tables
from readmission_etl.core.logging_setup import setup_logging
from readmission_etl.services.etl import run_etl

if __name__ == "__main__":
    setup_logging()
    log = logging.getLogger(__name__)

    source = sys.argv[1] if len(sys.argv) > 1 else RAW_ENCOUNTERS_FILE
    log.info("Starting readmission normalization pipeline: %s", source)
    engine = create_tables()
    stats = run_etl(source, engine=engine)

    log.info(f"Pipeline complete: {stats}")
