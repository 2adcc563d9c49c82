from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

"""Diagnostic sinks for non-fatal warnings (unknown language codes).

A sink is a one-way ``warn(message)`` channel. Whether a sink is present or not
never changes the outcome of a parse.
"""

__all__ = [
    "DiagnosticSink",
    "LoggerSink",
    "WarningBuffer",
]


@runtime_checkable
class DiagnosticSink(Protocol):
    def warn(self, message: str) -> None:
        """Emit one non-fatal diagnostic."""


class LoggerSink:
    """Forwards warnings to a logger at WARN level."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("localizekit.diagnostics")

    def warn(self, message: str) -> None:
        self.logger.warning(message)


class WarningBuffer:
    """Collects warnings in memory (used by hosts that report them later)."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def warn(self, message: str) -> None:
        self.messages.append(message)

    def __len__(self) -> int:
        return len(self.messages)
