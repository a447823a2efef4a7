"""Session-scoped file logging that can be switched off entirely."""

from importlib import metadata

from .errors import InvalidFilenameError, LogWrapError
from .facade import (
    TAG,
    LogWrap,
    debug,
    default_log,
    disable,
    enable,
    error,
    info,
    is_enabled,
    log,
    log_to_file,
    set_default_severity,
    set_output_directory,
    verbose,
    warn,
)
from .levels import SeverityLevel
from .session import SessionSnapshot, SessionState
from .sinks import ConsoleSink, LoggingConsoleSink, RecordingConsoleSink, RichConsoleSink
from .store import FileLogWriter, WriteResult

try:
    __version__ = metadata.version("logwrap")
except metadata.PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = [
    "ConsoleSink",
    "FileLogWriter",
    "InvalidFilenameError",
    "LogWrap",
    "LogWrapError",
    "LoggingConsoleSink",
    "RecordingConsoleSink",
    "RichConsoleSink",
    "SessionSnapshot",
    "SessionState",
    "SeverityLevel",
    "TAG",
    "WriteResult",
    "__version__",
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
