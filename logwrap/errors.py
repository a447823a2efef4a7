"""Exceptions raised by logwrap."""
from __future__ import annotations


class LogWrapError(Exception):
    """Base class for logwrap errors."""


class InvalidFilenameError(LogWrapError, ValueError):
    """Raised when a log file base name cannot form a file in the log directory."""

    def __init__(self, filename: object) -> None:
        super().__init__(f"invalid log file name: {filename!r}")
        self.filename = filename


__all__ = ["InvalidFilenameError", "LogWrapError"]
