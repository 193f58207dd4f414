"""Tests for logging setup and request-scoped log context."""

import logging

import structlog
from ordering.utils.logging import add_context, clear_context, configure_logging, get_log_level


class TestConfigureLogging:
    def test_rotating_files_are_created(self, tmp_path):
        try:
            configure_logging(log_dir=str(tmp_path), log_file_prefix="run")
            assert (tmp_path / "run.log").exists()
            assert (tmp_path / "run_error.log").exists()
            assert len(logging.getLogger().handlers) == 3
        finally:
            configure_logging()

    def test_noisy_libraries_are_quietened(self):
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING

    def test_level_follows_environment(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.setenv("PROTEAN_ENV", "production")
        assert get_log_level() == "INFO"

    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        assert get_log_level() == "ERROR"


class TestLogContext:
    def test_context_is_bound_and_cleared(self):
        clear_context()
        add_context(request_id="req-1", actor_id="cust-001")
        assert structlog.contextvars.get_contextvars() == {"request_id": "req-1", "actor_id": "cust-001"}

        clear_context()
        assert structlog.contextvars.get_contextvars() == {}
