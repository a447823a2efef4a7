"""Public logging surface combining the console and file sinks."""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Optional

from .levels import SeverityLevel
from .session import PathLike, SessionState
from .sinks import ConsoleSink, LoggingConsoleSink, create_sink
from .store.records import to_text
from .store.writer import FileLogWriter, WriteResult, default_log_directory

if TYPE_CHECKING:
    from .config import LogWrapSettings

TAG = "LogWrap"

_MISSING: Any = object()


class LogWrap:
    """Logging façade that can be switched off entirely.

    While disabled every call returns immediately: nothing is printed and no
    file or directory is touched. ``enable()`` starts a new session; records
    sent to :meth:`log_to_file` during that session land in
    ``{filename}_{session_id}.log`` inside the output directory.
    """

    def __init__(
        self,
        *,
        sink: Optional[ConsoleSink] = None,
        state: Optional[SessionState] = None,
        directory_resolver: Callable[[], Path] = default_log_directory,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.state = state or SessionState()
        self.sink = sink or LoggingConsoleSink()
        self.writer = FileLogWriter(self.state, directory_resolver=directory_resolver, now=now)

    @classmethod
    def from_settings(cls, settings: "LogWrapSettings", *, sink: Optional[ConsoleSink] = None) -> "LogWrap":
        log = cls(sink=sink or create_sink(settings.console))
        log.set_default_severity(settings.default_level)
        log.set_output_directory(settings.output_directory)
        if settings.enabled:
            log.enable()
        return log

    # ------------------------------------------------------------------
    # session control
    # ------------------------------------------------------------------
    def enable(self) -> None:
        """Enable logging; must be called before anything is logged."""
        self.state.enable()

    def disable(self) -> None:
        self.state.disable()

    def is_enabled(self) -> bool:
        return self.state.is_enabled()

    is_debuggable = is_enabled

    @property
    def session_id(self) -> Optional[int]:
        return self.state.session_id

    def set_default_severity(self, level: SeverityLevel) -> None:
        self.state.set_default_severity(level)

    def set_output_directory(self, path: Optional[PathLike]) -> None:
        self.state.set_output_directory(path)

    # ------------------------------------------------------------------
    # console sink
    # ------------------------------------------------------------------
    def log(self, tag: str, message: Any, level: Optional[SeverityLevel] = None) -> None:
        snapshot = self.state.snapshot()
        if not snapshot.enabled:
            return
        if level is None:
            level = snapshot.default_severity
        self.sink.emit(SeverityLevel.parse(level), tag, to_text(message))

    def verbose(self, tag: str, message: Any) -> None:
        self.log(tag, message, SeverityLevel.VERBOSE)

    def debug(self, tag: str, message: Any) -> None:
        self.log(tag, message, SeverityLevel.DEBUG)

    def info(self, tag: str, message: Any) -> None:
        self.log(tag, message, SeverityLevel.INFO)

    def warn(self, tag: str, message: Any) -> None:
        self.log(tag, message, SeverityLevel.WARN)

    def error(self, tag: str, message: Any) -> None:
        self.log(tag, message, SeverityLevel.ERROR)

    v, d, i, w, e = verbose, debug, info, warn, error

    # ------------------------------------------------------------------
    # file sink
    # ------------------------------------------------------------------
    def log_to_file(self, filename: str, header: Any, content: Any = _MISSING) -> None:
        """Append a record to the session file for ``filename``.

        ``log_to_file(name, content)`` uses the file name as header;
        ``log_to_file(name, header, content)`` separates records by a custom
        header, e.g. to tell requests from responses. Content may be any value,
        ``None`` is written as ``null``.

        Write failures are reported on the console sink and never raised.
        """
        self.append_record(filename, header, content)

    f = log_to_file

    def append_record(self, filename: str, header: Any, content: Any = _MISSING) -> Optional[WriteResult]:
        """Same as :meth:`log_to_file` but hand back the write outcome.

        Returns ``None`` when logging is disabled.
        """
        if not self.is_enabled():
            return None
        if content is _MISSING:
            header, content = filename, header
        result = self.writer.append(filename, to_text(header), to_text(content))
        if result.ok:
            self.sink.emit(SeverityLevel.VERBOSE, TAG, f"logged file to: {result.path}")
        else:
            self.sink.emit(SeverityLevel.ERROR, TAG, f"error when writing file output: {result.error}")
        return result

    def resolve_path(self, filename: str) -> Path:
        """Return the file the next record for ``filename`` would be appended to."""
        return self.writer.resolve_path(filename)


default_log = LogWrap()

enable = default_log.enable
disable = default_log.disable
is_enabled = default_log.is_enabled
set_default_severity = default_log.set_default_severity
set_output_directory = default_log.set_output_directory
log = default_log.log
verbose = default_log.verbose
debug = default_log.debug
info = default_log.info
warn = default_log.warn
error = default_log.error
log_to_file = default_log.log_to_file


__all__ = [
    "LogWrap",
    "TAG",
    "debug",
    "default_log",
    "disable",
    "enable",
    "error",
    "info",
    "is_enabled",
    "log",
    "log_to_file",
    "set_default_severity",
    "set_output_directory",
    "verbose",
    "warn",
]
