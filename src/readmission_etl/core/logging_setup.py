import logging
import logging.handlers
from pathlib import Path
from readmission_etl.core.config import LOG_FILE, LOG_LEVEL, LOGS_DIR

DEFAULT_FMT = "%(asctime)s - %(levelname)-5s - %(name)s - %(message)s"
DATE_FMT = "%Y-%m-%d %H:%M:%S"

def setup_logging(level: str | None = None, file_name: str | None = None, logs_dir: Path | None = None) -> None:
    """Console + rotating file logging; level and file default to LOG_LEVEL / LOG_FILE."""
    if getattr(setup_logging, "_configured", False):
        return
    logs_dir = Path(logs_dir or LOGS_DIR)
    logs_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel((level or LOG_LEVEL).upper())
    formatter = logging.Formatter(DEFAULT_FMT, datefmt=DATE_FMT)

    ch = logging.StreamHandler()
    ch.setFormatter(formatter)
    root.addHandler(ch)

    fh = logging.handlers.RotatingFileHandler(
        logs_dir / (file_name or LOG_FILE), maxBytes=2_000_000, backupCount=3, encoding="utf-8"
    )
    fh.setFormatter(formatter)
    root.addHandler(fh)

    setup_logging._configured = True
