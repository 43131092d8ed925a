import logging
import logging.handlers

import pytest

from server.api import logging_config
from server.api.settings import Settings

from conftest import build_settings


def _settings(level: str = "INFO") -> Settings:
    return build_settings(log_level=level)


@pytest.fixture()
def clean_root():
    root = logging.getLogger()

    def _drop_ours() -> None:
        for handler in list(root.handlers):
            if getattr(handler, logging_config._HANDLER_TAG, None):
                root.removeHandler(handler)
                handler.close()

    _drop_ours()
    yield root
    _drop_ours()


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("movie_catalog_api", logging.INFO, __file__, 1, "request", None, None)
    for k, v in extra.items():
        setattr(record, k, v)
    return record


def test_context_formatter_appends_known_fields():
    fmt = logging_config.ContextFormatter("%(message)s")
    line = fmt.format(_record(request_id="abc", status=200, other="ignored"))

    assert line == "request | request_id=abc status=200"


def test_context_formatter_plain_when_no_context():
    fmt = logging_config.ContextFormatter("%(message)s")
    assert fmt.format(_record()) == "request"


def test_resolve_file_path_disabled(monkeypatch):
    monkeypatch.setenv("LOGGER_FILE_ENABLED", "0")
    assert logging_config._resolve_file_path() is None


def test_resolve_file_path_relative_to_server_dir(monkeypatch):
    monkeypatch.setenv("LOGGER_FILE_ENABLED", "1")
    monkeypatch.setenv("LOGGER_FILE_PATH", "logs/custom.log")

    path = logging_config._resolve_file_path()
    assert path == (logging_config.SERVER_DIR / "logs" / "custom.log").resolve()


def test_configure_logging_adds_rotating_file_handler(monkeypatch, tmp_path, clean_root):
    target = tmp_path / "logs" / "api.log"
    monkeypatch.setenv("LOGGER_FILE_ENABLED", "1")
    monkeypatch.setenv("LOGGER_FILE_PATH", str(target))
    monkeypatch.setenv("LOGGER_FILE_BACKUPS", "2")

    logger = logging_config.configure_logging(_settings(level="DEBUG"))
    assert logger.level == logging.DEBUG

    handler = logging_config._tagged(clean_root, "file")
    assert isinstance(handler, logging.handlers.RotatingFileHandler)
    assert handler.backupCount == 2
    assert target.parent.is_dir()

    # segunda llamada: no duplica handlers
    logging_config.configure_logging(_settings(level="INFO"))
    tagged = [h for h in clean_root.handlers if getattr(h, logging_config._HANDLER_TAG, None) == "file"]
    assert len(tagged) == 1
    assert tagged[0].level == logging.INFO
