"""Tests for logging setup and the HTTP session."""

import logging

from timeline_exhibit.config import ExhibitConfig
from timeline_exhibit.ingestion_common import build_session, configure_logging, log_info, logger


class TestConfigureLogging:
    """Handlers of the package logger."""

    def teardown_method(self):
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    def test_stream_only(self, monkeypatch):
        monkeypatch.delenv("INGEST_LOG_DIR", raising=False)
        configure_logging("WARNING")
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1

    def test_log_file(self, tmp_path):
        run_id = configure_logging("INFO", log_dir=tmp_path / "logs")
        log_info("Exhibit: 3 slides, 0 errors")
        for handler in logger.handlers:
            handler.flush()
        content = (tmp_path / "logs" / f"exhibit_{run_id}.log").read_text(encoding="utf-8")
        assert "\tINFO\tExhibit: 3 slides, 0 errors" in content

    def test_log_dir_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("INGEST_LOG_DIR", str(tmp_path))
        run_id = configure_logging()
        assert (tmp_path / f"exhibit_{run_id}.log").exists()

    def test_reconfiguring_replaces_handlers(self, monkeypatch):
        monkeypatch.delenv("INGEST_LOG_DIR", raising=False)
        configure_logging()
        configure_logging()
        assert len(logger.handlers) == 1


def test_build_session_user_agent():
    session = build_session(ExhibitConfig(user_agent="MyExhibit/2.0"))
    assert session.headers["User-Agent"] == "MyExhibit/2.0"
