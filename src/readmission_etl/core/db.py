import logging
from sqlalchemy import create_engine, event, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from readmission_etl.core.config import get_database_url
from readmission_etl.models.tables import Base

log = logging.getLogger(__name__)

def _enable_sqlite_fks(dbapi_conn, _record):
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA foreign_keys=ON")
    cur.close()

def get_engine(url: str | None = None) -> Engine:
    url = url or get_database_url()
    try:
        engine = create_engine(url, echo=False, future=True)
    except SQLAlchemyError as e:
        log.error("Failed to create engine: %s", e)
        raise
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_fks)
    return engine

def create_tables(engine: Engine | None = None) -> Engine:
    """Create missing tables (idempotent)."""
    engine = engine or get_engine()
    insp = inspect(engine)
    existing = set(insp.get_table_names())
    expected = set(Base.metadata.tables.keys())

    if expected.issubset(existing):
        log.info("All tables exist. Skipping creation.")
        return engine

    missing = sorted(expected - existing)
    log.info("Creating tables: %s", ", ".join(missing))
    Base.metadata.create_all(engine)
    log.info("Tables created.")
    return engine
