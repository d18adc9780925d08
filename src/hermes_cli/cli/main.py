"""CLI entry point for hermes-cli-lib.

``hermes-cli run`` executes a command the same way library callers do and
prints its merged, color-stripped output.
"""

import asyncio
import sys
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..core.config import ConfigError, ConfigManager
from ..shell import HermesCLI, ShellError, strip_ansi
from ..util.error import format_error, format_unknown_error
from ..util.log import Log, LogFormat, LogLevel

app = typer.Typer(
    name="hermes-cli",
    help="Run CLI commands and collect their output",
    no_args_is_help=True,
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"hermes-cli-lib {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    print_logs: bool = typer.Option(
        False,
        "--print-logs",
        help="Print logs to stderr",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Minimum log level: debug, info, warn, error",
    ),
    log_format: Optional[str] = typer.Option(
        None,
        "--log-format",
        help="Log line format: kv, json, pretty",
    ),
    log_file: bool = typer.Option(
        False,
        "--log-file",
        help="Also write logs to a file in the user data directory",
    ),
):
    """Run CLI commands and collect their output."""
    try:
        level = LogLevel.parse(log_level)
        fmt = LogFormat.parse(log_format)
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(2)
    if print_logs or log_file:
        Log.configure(level=level, format=fmt, console=print_logs, file=log_file)
    if log_file:
        err_console.print(f"[dim]Logging to {escape(Log.file())}[/dim]")


@app.command()
def run(
    command: List[str] = typer.Argument(
        ...,
        help="Command to run; joined with spaces and passed to the shell",
    ),
    skip_update: bool = typer.Option(
        True,
        "--skip-update/--no-skip-update",
        help="Append the update-suppression flag to the command",
    ),
    timeout: Optional[int] = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Maximum wait in ms before the command is killed",
    ),
    kill_grace: Optional[int] = typer.Option(
        None,
        "--kill-grace",
        help="Wait in ms between SIGTERM and SIGKILL when a timed out command is killed",
    ),
    trace: Optional[bool] = typer.Option(
        None,
        "--trace/--no-trace",
        help="Enable the tool's trace output",
    ),
):
    """Run a command and print its output."""
    text = " ".join(command)
    if not text.strip():
        err_console.print("[red]Error:[/red] You must provide a command")
        raise typer.Exit(1)

    try:
        config = ConfigManager.get()
        overrides = {}
        if timeout is not None:
            overrides["waiting_timeout_global"] = timeout
        if kill_grace is not None:
            overrides["waiting_timeout_action"] = kill_grace
        if overrides:
            config = config.model_validate({**config.model_dump(), **overrides})
    except (ConfigError, ValueError) as e:
        err_console.print(f"[red]Error:[/red] {escape(format_error(e) or str(e))}")
        raise typer.Exit(2)

    try:
        output = asyncio.run(HermesCLI.run_simple_command(
            text,
            skip_update=skip_update,
            trace=trace,
            config=config,
        ))
    except ShellError as e:
        err_console.print(f"[red]Error:[/red] {escape(format_error(e) or format_unknown_error(e))}")
        raise typer.Exit(1)
    finally:
        Log.close()

    sys.stdout.write(output)
    sys.stdout.flush()


@app.command()
def strip():
    """Copy stdin to stdout with ANSI sequences removed."""
    for line in sys.stdin:
        sys.stdout.write(strip_ansi(line))
    sys.stdout.flush()


if __name__ == "__main__":
    app()
