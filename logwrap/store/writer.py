"""Append records to per-session log files."""
from __future__ import annotations

import os
import threading
import weakref
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional

from ..errors import InvalidFilenameError
from ..session import SessionState
from .records import format_record, to_text

NO_SESSION = "NO_SESSION"
LOG_SUFFIX = ".log"
_FORBIDDEN_CHARS = {"/", "\\", "\x00", os.sep} | ({os.altsep} if os.altsep else set())

_MISSING: Any = object()


def default_log_directory() -> Path:
    base = os.getenv("LOGWRAP_LOG_DIR")
    if base:
        return Path(base).expanduser()
    return Path.home() / "logs"


def log_file_name(base_filename: str, session_id: Optional[int]) -> str:
    suffix = NO_SESSION if session_id is None else str(session_id)
    return f"{base_filename}_{suffix}{LOG_SUFFIX}"


def validate_base_filename(base_filename: str) -> str:
    if not isinstance(base_filename, str) or not base_filename.strip() or base_filename in (".", ".."):
        raise InvalidFilenameError(base_filename)
    if any(sep in base_filename for sep in _FORBIDDEN_CHARS):
        raise InvalidFilenameError(base_filename)
    return base_filename


@dataclass
class WriteResult:
    path: Path
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class FileLogWriter:
    """Write formatted records to ``{name}_{session}.log`` files.

    The session id and output directory are read from ``state`` on every call.
    Appends to the same physical file are serialized by a lock owned by that
    path; different files never wait on each other. A lock lives only while
    some writer holds it.
    """

    def __init__(
        self,
        state: SessionState,
        *,
        directory_resolver: Callable[[], Path] = default_log_directory,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.state = state
        self._directory_resolver = directory_resolver
        self._now = now
        self._registry_lock = threading.Lock()
        self._file_locks: "weakref.WeakValueDictionary[Path, threading.Lock]" = weakref.WeakValueDictionary()

    def resolve_path(self, base_filename: str) -> Path:
        validate_base_filename(base_filename)
        snapshot = self.state.snapshot()
        directory = snapshot.output_directory or self._directory_resolver()
        return Path(directory) / log_file_name(base_filename, snapshot.session_id)

    def append(self, base_filename: str, header: str, content: Any = _MISSING) -> WriteResult:
        """Append one record; with two arguments the base name doubles as header.

        Raises :class:`InvalidFilenameError` for unusable names. Failures while
        encoding or writing (unencodable text, invalid directory, I/O errors)
        are returned in :attr:`WriteResult.error`, never raised.
        """
        if content is _MISSING:
            header, content = base_filename, header
        path = self.resolve_path(base_filename)
        record = format_record(to_text(header), to_text(content), self._now())
        try:
            payload = record.encode("utf-8")
        except UnicodeError as exc:
            return WriteResult(path=path, error=exc)
        with self._lock_for(path):
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                with path.open("ab") as fh:
                    fh.write(payload)
                    fh.flush()
            except (OSError, ValueError) as exc:
                return WriteResult(path=path, error=exc)
        return WriteResult(path=path)

    def _lock_for(self, path: Path) -> threading.Lock:
        with self._registry_lock:
            lock = self._file_locks.get(path)
            if lock is None:
                lock = threading.Lock()
                self._file_locks[path] = lock
            return lock


__all__ = [
    "FileLogWriter",
    "LOG_SUFFIX",
    "NO_SESSION",
    "WriteResult",
    "default_log_directory",
    "log_file_name",
    "validate_base_filename",
]
