"""Session state shared by every sink of a ``LogWrap`` instance."""
from __future__ import annotations

import threading
import time
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable, Optional, Union

from .levels import SeverityLevel

PathLike = Union[str, Path]


def _wall_clock_ms() -> int:
    return time.time_ns() // 1_000_000


@dataclass(frozen=True)
class SessionSnapshot:
    enabled: bool = False
    session_id: Optional[int] = None
    output_directory: Optional[Path] = None
    default_severity: SeverityLevel = SeverityLevel.VERBOSE


class SessionState:
    """Hold the enabled flag, session id and output configuration.

    All fields live in one immutable :class:`SessionSnapshot`. Writers replace
    the snapshot under a lock; readers grab the current reference once, so the
    enabled flag and the session id are always seen together.
    """

    def __init__(self, clock: Callable[[], int] = _wall_clock_ms) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._snapshot = SessionSnapshot()
        self._last_session_id: Optional[int] = None

    def snapshot(self) -> SessionSnapshot:
        return self._snapshot

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------
    def enable(self) -> int:
        """Start a new session and return its id."""
        with self._lock:
            session_id = self._clock()
            if self._last_session_id is not None and session_id <= self._last_session_id:
                session_id = self._last_session_id + 1
            self._last_session_id = session_id
            self._snapshot = replace(self._snapshot, enabled=True, session_id=session_id)
            return session_id

    def disable(self) -> None:
        with self._lock:
            self._snapshot = replace(self._snapshot, enabled=False, session_id=None)

    def is_enabled(self) -> bool:
        return self._snapshot.enabled

    @property
    def session_id(self) -> Optional[int]:
        return self._snapshot.session_id

    # ------------------------------------------------------------------
    # configuration
    # ------------------------------------------------------------------
    def set_default_severity(self, level: SeverityLevel) -> None:
        level = SeverityLevel.parse(level)
        with self._lock:
            self._snapshot = replace(self._snapshot, default_severity=level)

    def set_output_directory(self, path: Optional[PathLike]) -> None:
        """Set the log directory; ``None`` or ``""`` falls back to the default one."""
        directory = Path(path).expanduser() if path else None
        with self._lock:
            self._snapshot = replace(self._snapshot, output_directory=directory)


__all__ = ["SessionSnapshot", "SessionState"]
