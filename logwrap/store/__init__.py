"""Session log file storage."""

from .discovery import LogFileEntry, discover_log_files, read_records
from .records import LogRecord, NULL_TEXT, RULE, format_record, parse_records, to_text
from .writer import FileLogWriter, WriteResult, default_log_directory, log_file_name

__all__ = [
    "FileLogWriter",
    "LogFileEntry",
    "LogRecord",
    "NULL_TEXT",
    "RULE",
    "WriteResult",
    "default_log_directory",
    "discover_log_files",
    "format_record",
    "log_file_name",
    "parse_records",
    "read_records",
    "to_text",
]
