from __future__ import annotations

import logging
import sys

"""Console logging for the CLI: one ``LABEL message`` line per record on stdout.

Labels: DEBUG | INFO | WARN | ERROR | FATAL | SUMMARY (custom level 25).
Library modules log through ``logging.getLogger(__name__)``; everything below the
``localizekit`` logger reaches the single console handler installed here.
"""

__all__ = [
    "LEVEL_LABELS",
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "setup_logging",
    "get_logger",
    "log_summary",
    "reset_logging",
]

LOGGER_NAME = "localizekit"
SUMMARY_LEVEL = 25  # between INFO and WARNING

LEVEL_LABELS = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "FATAL",
    SUMMARY_LEVEL: "SUMMARY",
}

_console: logging.Handler | None = None


class LabeledFormatter(logging.Formatter):
    """Render ``LABEL message``.

    With ``show_origin`` DEBUG lines of child loggers are tagged with the module
    that emitted them (``DEBUG [services.parser] ...``).
    """

    def __init__(self, show_origin: bool = False) -> None:
        super().__init__()
        self.show_origin = show_origin

    def format(self, record: logging.LogRecord) -> str:
        label = LEVEL_LABELS.get(record.levelno, record.levelname)
        text = record.getMessage()
        if self.show_origin and record.levelno == logging.DEBUG and record.name != LOGGER_NAME:
            text = f"[{record.name.removeprefix(LOGGER_NAME + '.')}] {text}"
        if record.exc_info:
            text = f"{text}\n{self.formatException(record.exc_info)}"
        return f"{label} {text}"


def setup_logging(debug: bool = False) -> logging.Logger:
    """Install the console handler once and return the application logger.

    Repeated calls reuse the handler; ``debug=True`` on a later call still
    switches the logger to DEBUG.
    """
    global _console
    logger = logging.getLogger(LOGGER_NAME)

    if _console is None:
        logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
        logger.handlers.clear()
        # the app logger owns its output; the root logger stays untouched
        logger.propagate = False
        _console = logging.StreamHandler(sys.stdout)
        logger.addHandler(_console)
        _apply_level(logger, debug)
    elif debug:
        _apply_level(logger, True)

    return logger


def _apply_level(logger: logging.Logger, debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(level)
    if _console is not None:
        _console.setLevel(level)
        _console.setFormatter(LabeledFormatter(show_origin=debug))


def get_logger() -> logging.Logger:
    return setup_logging()


def log_summary(message: str) -> None:
    """Emit ``SUMMARY message``."""
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Detach the console handler (tests re-run setup against a fresh stdout)."""
    global _console
    if _console is not None:
        logging.getLogger(LOGGER_NAME).removeHandler(_console)
        _console = None
