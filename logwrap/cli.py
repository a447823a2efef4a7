"""Command line entry point for logwrap."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import LogWrapSettings, load_config
from .errors import InvalidFilenameError
from .facade import LogWrap
from .sinks import RichConsoleSink
from .store.discovery import discover_log_files, read_records
from .store.writer import default_log_directory

app = typer.Typer(add_completion=False, rich_markup_mode="rich", no_args_is_help=False)


def _create_console() -> Console:
    return Console(highlight=False)


def _serialize_settings(settings: LogWrapSettings) -> str:
    return json.dumps(settings.to_dict(), indent=2, ensure_ascii=False)


def _settings_from(ctx: typer.Context) -> LogWrapSettings:
    settings = ctx.obj
    if settings is None:
        settings = load_config().settings
    return settings


@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Settings file to use",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Print the effective settings and exit.",
    ),
) -> None:
    """Session-scoped log files from the command line."""
    result = load_config(config_path)
    ctx.obj = result.settings
    if ctx.invoked_subcommand is not None and not dry_run:
        return

    console = _create_console()
    source = str(result.source) if result.source else "defaults"
    console.print(Panel(_serialize_settings(result.settings), title="configuration", subtitle=source))
    if dry_run:
        raise typer.Exit()


@app.command("write")
def write(
    ctx: typer.Context,
    filename: str = typer.Argument(..., help="Base name of the log file"),
    content: str = typer.Argument(..., help="Record content"),
    header: Optional[str] = typer.Option(None, "--header", "-H", help="Record header (defaults to the file name)"),
    directory: Optional[Path] = typer.Option(None, "--dir", "-d", help="Log directory"),
) -> None:
    """Start a session and append one record to FILENAME."""
    settings = _settings_from(ctx)
    console = _create_console()
    log = LogWrap.from_settings(settings, sink=RichConsoleSink(Console(stderr=True)))
    if directory is not None:
        log.set_output_directory(directory)
    log.enable()

    try:
        if header is None:
            result = log.append_record(filename, content)
        else:
            result = log.append_record(filename, header, content)
    except InvalidFilenameError as exc:
        console.print(f"[bold red]{exc}[/]")
        raise typer.Exit(code=1) from exc

    if result is None or not result.ok:
        raise typer.Exit(code=1)
    console.print(str(result.path), soft_wrap=True)


@app.command("list")
def list_files(
    ctx: typer.Context,
    directory: Optional[Path] = typer.Argument(None, help="Log directory to scan"),
) -> None:
    """List the session log files of a directory."""
    settings = _settings_from(ctx)
    directory = directory or settings.output_directory or default_log_directory()
    console = _create_console()

    entries = discover_log_files(directory)
    if not entries:
        console.print(f"No log files in {directory}")
        return

    table = Table(title=str(directory))
    table.add_column("file")
    table.add_column("session")
    table.add_column("records", justify="right")
    for entry in entries:
        try:
            count = str(len(read_records(entry.path)))
        except (OSError, ValueError):
            count = "?"
        table.add_row(entry.base_filename, entry.session_label, count)
    console.print(table)


def entrypoint() -> None:
    """Typer entrypoint for `logwrap`."""
    app()


if __name__ == "__main__":  # pragma: no cover
    entrypoint()
