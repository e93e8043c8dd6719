"""Loguru sinks: the CORS decision file only receives CORS records."""
import pytest
from loguru import logger

from corsgate.core.logging_config import cors_logger, setup_logging


@pytest.fixture
def restore_logging():
    yield
    setup_logging("test")


def test_development_writes_cors_decisions_to_their_own_file(tmp_path, restore_logging):
    setup_logging("development", log_dir=str(tmp_path))
    cors_logger("http://localhost:3000", "origin").info("origin: http://localhost:3000")
    logger.info("unrelated startup message")
    logger.remove()

    cors_log = (tmp_path / "cors.log").read_text()
    app_log = (tmp_path / "app.log").read_text()
    assert "http://localhost:3000" in cors_log
    assert "origin" in cors_log
    assert "unrelated startup message" not in cors_log
    assert "unrelated startup message" in app_log
    assert "origin: http://localhost:3000" in app_log


def test_absent_origin_is_logged_as_dash(tmp_path, restore_logging):
    setup_logging("staging", log_dir=str(tmp_path))
    cors_logger(None, "none").info("origin: None")
    logger.remove()
    assert "| -" in (tmp_path / "cors.log").read_text()


def test_test_environment_writes_no_files(tmp_path, monkeypatch, restore_logging):
    monkeypatch.chdir(tmp_path)
    setup_logging("test")
    cors_logger("http://a.test", "denied").warning("denied")
    assert not (tmp_path / "logs").exists()
