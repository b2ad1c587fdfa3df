import io
import logging

from finance_core.config import DATA_FILE_ENV, DEFAULT_DATA_FILE, Settings, get_settings
from finance_core.logging_setup import LOG_LEVEL_ENV, configure_logging, get_logger


def test_settings_defaults():
    assert get_settings({}) == Settings(data_file=DEFAULT_DATA_FILE, log_level="WARNING")
    assert DEFAULT_DATA_FILE == "data.csv"


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv(DATA_FILE_ENV, "/tmp/ledger.csv")
    monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
    assert get_settings() == Settings(data_file="/tmp/ledger.csv", log_level="DEBUG")


def test_settings_blank_values_fall_back():
    assert get_settings({DATA_FILE_ENV: "  ", LOG_LEVEL_ENV: ""}).data_file == DEFAULT_DATA_FILE


def test_configure_logging_attaches_single_handler():
    stream = io.StringIO()
    configure_logging("INFO", stream=stream)
    configure_logging("DEBUG", stream=stream)

    package_logger = logging.getLogger("finance_core")
    assert len(package_logger.handlers) == 1
    assert package_logger.level == logging.INFO

    get_logger("finance_core.storage").info("hello ledger")
    get_logger("finance_core.storage").debug("hidden")
    output = stream.getvalue()
    assert "finance_core.storage INFO hello ledger" in output
    assert "hidden" not in output


def test_configure_logging_falls_back_to_environment(monkeypatch):
    monkeypatch.setenv(LOG_LEVEL_ENV, "ERROR")
    configure_logging("not-a-level", stream=io.StringIO())
    assert logging.getLogger("finance_core").level == logging.ERROR


def test_get_logger_is_silent_before_configuration():
    get_logger("finance_core.services")
    handlers = logging.getLogger("finance_core").handlers
    assert handlers and all(isinstance(h, logging.NullHandler) for h in handlers)
