"""
Tests for identspell Logging & Errors
=====================================
"""

import importlib
import json
import sys

import pytest

import identspell
import identspell.wordlist
from identspell.config import LoggingConfig, get_config, reset_config
from identspell.config_logging import (
    ConfigurationError,
    FixListFormatError,
    IdentSpellError,
    OperationCanceledError,
    StructuredLogger,
    get_logger,
    reset_loggers,
)


def last_record(capsys) -> dict:
    return json.loads(capsys.readouterr().err.strip().splitlines()[-1])


class TestStructuredLogger:
    """Tests for StructuredLogger."""

    def test_json_records(self, capsys):
        logger = StructuredLogger("identspell.tests.json", LoggingConfig(format="json"))
        StructuredLogger.set_correlation_id("abc123")

        logger.info("Loaded words", words=3)

        record = last_record(capsys)
        assert record['message'] == "Loaded words"
        assert record['level'] == "INFO"
        assert record['words'] == 3
        assert record['correlation_id'] == "abc123"

    def test_debug_below_level_is_dropped(self, capsys):
        logger = StructuredLogger("identspell.tests.level", LoggingConfig(level="WARNING"))

        logger.debug("hidden")
        logger.info("hidden too")

        assert capsys.readouterr().err == ""

    def test_log_operation_reraises(self, capsys):
        logger = StructuredLogger("identspell.tests.operation", LoggingConfig(format="json"))

        with pytest.raises(ValueError):
            with logger.log_operation("save", path="x"):
                raise ValueError("boom")

        record = last_record(capsys)
        assert record['status'] == "failed"
        assert record['path'] == "x"
        assert "boom" in record['message']

    def test_file_handler(self, tmp_path):
        config = LoggingConfig(to_console=False, to_file=True, log_dir=str(tmp_path / "logs"))
        logger = StructuredLogger("identspell.tests.file", config)

        logger.warning("written")
        for handler in logger.logger.handlers:
            handler.flush()

        assert "written" in (tmp_path / "logs" / "identspell.tests.file.log").read_text(encoding="utf-8")

    def test_get_logger_is_cached(self):
        assert get_logger("identspell.tests.cached") is get_logger("identspell.tests.cached")

    def test_own_handlers_stop_propagation(self):
        """Records are not printed again by the root logger's handlers."""
        console = StructuredLogger("identspell.tests.console", LoggingConfig())
        silent = StructuredLogger("identspell.tests.silent", LoggingConfig(to_console=False))

        assert console.logger.propagate is False
        assert silent.logger.propagate is True


class TestLoggerConfiguration:
    """Loggers read only the logging section of the configuration."""

    @pytest.fixture
    def bad_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("IDENTSPELL_CONFIG_FILE", str(tmp_path / "missing.json"))
        monkeypatch.setenv("IDENTSPELL_SPLIT_MODE", "bogus")
        reset_config()
        reset_loggers()
        yield
        reset_config()
        reset_loggers()

    def test_import_with_bad_analysis_value(self, bad_environment, monkeypatch):
        """A bad analysis setting does not prevent importing the library."""
        monkeypatch.setattr(identspell, "wordlist", identspell.wordlist)
        monkeypatch.delitem(sys.modules, "identspell.wordlist")

        module = importlib.import_module("identspell.wordlist")

        assert module.WordList(["word"]).contains("WORD")
        with pytest.raises(ConfigurationError):
            get_config()

    def test_logger_without_config(self, bad_environment):
        logger = StructuredLogger("identspell.tests.badenv")
        assert logger.config.level == "INFO"


class TestErrors:
    """Tests for the exception hierarchy."""

    def test_to_dict(self):
        error = FixListFormatError("bad line", path="a.fixlist", line_number=4)

        assert isinstance(error, IdentSpellError)
        assert error.to_dict() == {
            'success': False,
            'error': {
                'code': "FIX_LIST_FORMAT",
                'message': "bad line",
                'details': {'path': "a.fixlist", 'line_number': 4},
            },
        }

    def test_canceled_default_message(self):
        error = OperationCanceledError()
        assert str(error) == "Operation was canceled"
        assert error.code == "OPERATION_CANCELED"
