from __future__ import annotations

import logging

from localizekit.logging.init import (
    LOGGER_NAME,
    SUMMARY_LEVEL,
    LEVEL_LABELS,
    LabeledFormatter,
    get_logger,
    log_summary,
    setup_logging,
)


def test_setup_logging_creates_logger_with_labeled_formatter():
    logger = setup_logging()
    assert logger.name == LOGGER_NAME
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent():
    first = setup_logging()
    second = setup_logging()
    assert first is second
    assert len(second.handlers) == 1
    assert get_logger() is first


def test_debug_lowers_level_of_configured_logger():
    setup_logging()
    logger = setup_logging(debug=True)
    assert logger.level == logging.DEBUG


def test_labeled_prefixes(capsys):
    logger = setup_logging()
    logger.info("hello")
    logger.warning("careful")
    logger.error("broken")
    log_summary("files=0/0")
    out = capsys.readouterr().out.splitlines()
    assert out == ["INFO hello", "WARN careful", "ERROR broken", "SUMMARY files=0/0"]


def test_child_loggers_use_application_handler(capsys):
    setup_logging()
    logging.getLogger(f"{LOGGER_NAME}.services.parser").warning("from child")
    assert "WARN from child" in capsys.readouterr().out


def test_formatter_falls_back_to_level_name():
    record = logging.LogRecord("x", 15, __file__, 1, "msg", None, None)
    record.levelname = "CUSTOM"
    assert LabeledFormatter().format(record) == "CUSTOM msg"
    assert LEVEL_LABELS[SUMMARY_LEVEL] == "SUMMARY"
