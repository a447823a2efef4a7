"""Severity levels understood by the console sinks."""
from __future__ import annotations

from enum import IntEnum
from typing import Union


class SeverityLevel(IntEnum):
    VERBOSE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4

    @classmethod
    def parse(cls, value: Union[str, int, "SeverityLevel"]) -> "SeverityLevel":
        """Accept a level, its name (any case, ``WARNING`` included) or its number."""
        if isinstance(value, cls):
            return value
        if isinstance(value, int):
            return cls(value)
        name = str(value).strip().upper()
        if name == "WARNING":
            name = "WARN"
        try:
            return cls[name]
        except KeyError:
            raise ValueError(f"unknown severity level: {value!r}") from None


__all__ = ["SeverityLevel"]
