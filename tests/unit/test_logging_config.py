"""Tests for logging configuration."""

import logging
import logging.handlers

import pytest

from dosekit import logging_config
from dosekit.types import LoggingSettings


@pytest.fixture(autouse=True)
def clean_package_logger():
    """Undo any handlers installed by a test."""
    yield
    logging_config.teardown_logging()


@pytest.fixture
def file_settings(tmp_path):
    return LoggingSettings(directory=tmp_path / "logs", level="info", max_size_mb=2)


class TestBuildHandlers:
    """Test handler construction from settings."""

    def test_console_level(self):
        settings = LoggingSettings(enabled=False)

        (quiet,) = logging_config.build_handlers(settings)
        (verbose,) = logging_config.build_handlers(settings, verbose=True)

        assert quiet.level == logging.INFO
        assert verbose.level == logging.DEBUG

    def test_file_handler_from_settings(self, file_settings, tmp_path):
        handlers = logging_config.build_handlers(file_settings)
        try:
            file_handler = handlers[1]

            assert isinstance(file_handler, logging.handlers.RotatingFileHandler)
            assert file_handler.level == logging.INFO
            assert file_handler.maxBytes == 2 * 1024 * 1024
            assert file_handler.backupCount == 5
            assert file_handler.baseFilename == str(tmp_path / "logs" / "dosekit.log")
        finally:
            for handler in handlers:
                handler.close()

    def test_console_format_override(self):
        (console,) = logging_config.build_handlers(
            LoggingSettings(enabled=False), console_format="%(message)s"
        )

        assert console.formatter._fmt == "%(message)s"


class TestSetupLogging:
    """Test handler installation on the package logger."""

    def test_root_logger_untouched(self, file_settings):
        root = logging.getLogger()
        root_handlers = list(root.handlers)
        root_level = root.level

        logging_config.setup_logging(settings=file_settings)

        assert root.handlers == root_handlers
        assert root.level == root_level
        assert len(logging.getLogger("dosekit").handlers) == 2

    def test_records_reach_log_file(self, file_settings, tmp_path):
        logging_config.setup_logging(settings=file_settings)

        logging.getLogger("dosekit.pipeline.orchestrator").info("prepared batch")
        for handler in logging.getLogger("dosekit").handlers:
            handler.flush()

        log_text = (tmp_path / "logs" / "dosekit.log").read_text()
        assert "prepared batch" in log_text

    def test_configures_once(self):
        settings = LoggingSettings(enabled=False)

        logging_config.setup_logging(settings=settings)
        logging_config.setup_logging(settings=settings, verbose=True)

        package_logger = logging.getLogger("dosekit")
        assert len(package_logger.handlers) == 1
        assert package_logger.handlers[0].level == logging.INFO

    def test_propagation_off_by_default(self):
        logging_config.setup_logging(settings=LoggingSettings(enabled=False))
        assert logging.getLogger("dosekit").propagate is False

        logging_config.teardown_logging()
        logging_config.setup_logging(
            settings=LoggingSettings(enabled=False), propagate=True
        )
        assert logging.getLogger("dosekit").propagate is True

    def test_unwritable_log_dir_falls_back_to_console(self, monkeypatch, capsys):
        def refuse(*args, **kwargs):
            raise PermissionError("read-only")

        monkeypatch.setattr(logging_config.os, "makedirs", refuse)

        logging_config.setup_logging(settings=LoggingSettings())

        assert len(logging.getLogger("dosekit").handlers) == 1
        assert "Failed to open dosekit log file" in capsys.readouterr().err

    def test_reads_config_file_by_default(self, monkeypatch, tmp_path):
        monkeypatch.setattr(
            "dosekit.config.load_logging_settings",
            lambda: LoggingSettings(directory=tmp_path / "cfg-logs"),
        )

        logging_config.setup_logging()

        assert (tmp_path / "cfg-logs").is_dir()


class TestTeardownLogging:
    def test_removes_handlers(self, file_settings):
        logging_config.setup_logging(settings=file_settings)

        logging_config.teardown_logging()

        package_logger = logging.getLogger("dosekit")
        assert package_logger.handlers == []
        assert package_logger.propagate is True
