"""Find the session log files already written to a directory."""
from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .records import LogRecord, parse_records
from .writer import LOG_SUFFIX, NO_SESSION

_NAME_RE = re.compile(rf"^(?P<base>.+)_(?P<session>\d+|{NO_SESSION})\{LOG_SUFFIX}$")


@dataclass
class LogFileEntry:
    base_filename: str
    session_id: Optional[int]
    path: Path

    @property
    def session_label(self) -> str:
        return NO_SESSION if self.session_id is None else str(self.session_id)


def discover_log_files(directory: Path) -> List[LogFileEntry]:
    directory = directory.expanduser()
    if not directory.is_dir():
        return []

    entries: List[LogFileEntry] = []
    for path in sorted(directory.glob(f"*{LOG_SUFFIX}")):
        match = _NAME_RE.match(path.name)
        if match is None or not path.is_file():
            continue
        session = match.group("session")
        entries.append(
            LogFileEntry(
                base_filename=match.group("base"),
                session_id=None if session == NO_SESSION else int(session),
                path=path,
            )
        )
    entries.sort(key=lambda entry: (entry.base_filename, entry.session_id is not None, entry.session_id or 0))
    return entries


def read_records(path: Path) -> List[LogRecord]:
    return parse_records(path.read_text(encoding="utf-8"))


__all__ = ["LogFileEntry", "discover_log_files", "read_records"]
