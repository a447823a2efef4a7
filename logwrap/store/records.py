"""Text layout of the records appended to session log files."""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional

RULE = "=" * 66 + " "
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
NULL_TEXT = "null"

_HEADER_RE = re.compile(r"^(?P<header>.*) at (?P<stamp>\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2})$")


@dataclass
class LogRecord:
    header: str
    timestamp: datetime
    content: str


def to_text(value: Any) -> str:
    """Render any value as record text; ``None`` becomes ``"null"``."""
    if value is None:
        return NULL_TEXT
    return str(value)


def format_record(header: str, content: str, when: Optional[datetime] = None) -> str:
    when = when or datetime.now()
    return f"{header} at {when.strftime(TIMESTAMP_FORMAT)}\n{RULE}\n{content}\n{RULE}\n"


def parse_records(text: str) -> List[LogRecord]:
    """Split file contents back into records.

    Content is never escaped when written, so a content line that equals the
    rule ends that record early.
    """
    records: List[LogRecord] = []
    lines = text.split("\n")
    idx = 0
    while idx + 3 < len(lines):
        match = _HEADER_RE.match(lines[idx])
        if match is None or lines[idx + 1] != RULE:
            raise ValueError(f"malformed record at line {idx + 1}")
        end = idx + 2
        while end < len(lines) and lines[end] != RULE:
            end += 1
        if end >= len(lines):
            raise ValueError(f"unterminated record at line {idx + 1}")
        records.append(
            LogRecord(
                header=match.group("header"),
                timestamp=datetime.strptime(match.group("stamp"), TIMESTAMP_FORMAT),
                content="\n".join(lines[idx + 2 : end]),
            )
        )
        idx = end + 1
    if any(line for line in lines[idx:]):
        raise ValueError(f"trailing data at line {idx + 1}")
    return records


__all__ = ["LogRecord", "NULL_TEXT", "RULE", "TIMESTAMP_FORMAT", "format_record", "parse_records", "to_text"]
