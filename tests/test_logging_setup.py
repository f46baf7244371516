"""
Tests for logging setup driven by LOG_LEVEL / LOG_FILE
"""
import logging
import pytest
from readmission_etl.core import logging_setup
from readmission_etl.core.logging_setup import setup_logging


@pytest.fixture
def root_logger(monkeypatch):
    monkeypatch.setattr(setup_logging, "_configured", False, raising=False)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


def test_setup_logging_uses_configured_level_and_file(root_logger, tmp_path, monkeypatch):
    monkeypatch.setattr(logging_setup, "LOG_LEVEL", "warning")
    monkeypatch.setattr(logging_setup, "LOG_FILE", "etl.log")

    setup_logging(logs_dir=tmp_path)

    assert root_logger.level == logging.WARNING
    assert (tmp_path / "etl.log").exists()


def test_setup_logging_runs_once(root_logger, tmp_path):
    setup_logging(level="DEBUG", file_name="first.log", logs_dir=tmp_path)
    count = len(root_logger.handlers)
    setup_logging(level="ERROR", file_name="second.log", logs_dir=tmp_path)

    assert len(root_logger.handlers) == count
    assert root_logger.level == logging.DEBUG
    assert not (tmp_path / "second.log").exists()
