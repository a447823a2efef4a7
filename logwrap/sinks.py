"""Console sinks: where ``LogWrap.log`` output ends up."""
from __future__ import annotations

import logging
from typing import Dict, Optional, Protocol

from rich.console import Console
from rich.markup import escape

from .levels import SeverityLevel

VERBOSE_LOGGING_LEVEL = 5
logging.addLevelName(VERBOSE_LOGGING_LEVEL, "VERBOSE")

_LOGGING_LEVELS: Dict[SeverityLevel, int] = {
    SeverityLevel.VERBOSE: VERBOSE_LOGGING_LEVEL,
    SeverityLevel.DEBUG: logging.DEBUG,
    SeverityLevel.INFO: logging.INFO,
    SeverityLevel.WARN: logging.WARNING,
    SeverityLevel.ERROR: logging.ERROR,
}

_RICH_STYLES: Dict[SeverityLevel, str] = {
    SeverityLevel.VERBOSE: "dim",
    SeverityLevel.DEBUG: "cyan",
    SeverityLevel.INFO: "green",
    SeverityLevel.WARN: "bold yellow",
    SeverityLevel.ERROR: "bold red",
}


class ConsoleSink(Protocol):
    def emit(self, level: SeverityLevel, tag: str, message: str) -> None:
        ...


class LoggingConsoleSink:
    """Forward messages to the stdlib ``logging`` logger named after the tag."""

    def emit(self, level: SeverityLevel, tag: str, message: str) -> None:
        logging.getLogger(tag).log(_LOGGING_LEVELS[level], message)


class RichConsoleSink:
    """Print ``[LEVEL] tag: message`` lines on a rich console."""

    def __init__(self, console: Optional[Console] = None) -> None:
        if console is None:
            console = Console(stderr=True, highlight=False)
        self.console = console

    def emit(self, level: SeverityLevel, tag: str, message: str) -> None:
        style = _RICH_STYLES[level]
        self.console.print(f"[{style}]\\[{level.name}][/] {escape(tag)}: {escape(message)}")


class RecordingConsoleSink:
    """Keep emitted messages in memory; handy when the caller wants to inspect output."""

    def __init__(self) -> None:
        self.messages: list[tuple[SeverityLevel, str, str]] = []

    def emit(self, level: SeverityLevel, tag: str, message: str) -> None:
        self.messages.append((level, tag, message))


def create_sink(kind: str) -> ConsoleSink:
    if kind == "rich":
        return RichConsoleSink()
    if kind == "logging":
        return LoggingConsoleSink()
    raise ValueError(f"unknown console sink: {kind!r}")


__all__ = [
    "ConsoleSink",
    "LoggingConsoleSink",
    "RecordingConsoleSink",
    "RichConsoleSink",
    "VERBOSE_LOGGING_LEVEL",
    "create_sink",
]
