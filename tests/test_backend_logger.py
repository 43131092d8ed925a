import logging

import backend.logger as logger


def test_filter_log_kwargs_accepts_supported_keys():
    err = ValueError("boom")
    out = logger._filter_log_kwargs(
        {
            "exc_info": err,
            "stack_info": True,
            "stacklevel": 2,
            "extra": {"a": 1},
            "bad": "nope",
        }
    )

    assert "exc_info" in out and out["exc_info"] is err
    assert out["stack_info"] is True
    assert out["stacklevel"] == 2
    assert out["extra"] == {"a": 1}
    assert "bad" not in out


def test_filter_log_kwargs_ignores_invalid_types():
    out = logger._filter_log_kwargs(
        {"exc_info": "no", "stack_info": "no", "stacklevel": "no", "extra": "no"}
    )
    assert out == {}


def test_resolve_level_priority(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "warning")
    monkeypatch.setenv("DEBUG_MODE", "1")
    assert logger._resolve_level() == logging.WARNING

    monkeypatch.setenv("LOG_LEVEL", "bogus")
    assert logger._resolve_level() == logging.DEBUG

    monkeypatch.delenv("LOG_LEVEL")
    monkeypatch.delenv("DEBUG_MODE")
    assert logger._resolve_level() == logging.INFO


def test_silent_mode_suppresses_unless_always(monkeypatch, caplog):
    monkeypatch.setenv("SILENT_MODE", "true")
    logger.get_logger().setLevel(logging.INFO)

    with caplog.at_level(logging.INFO, logger=logger.LOGGER_NAME):
        logger.info("hidden")
        logger.info("shown", always=True)
        logger.error("errors always pass")

    messages = [r.getMessage() for r in caplog.records]
    assert "hidden" not in messages
    assert "shown" in messages
    assert "errors always pass" in messages
