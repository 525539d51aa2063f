"""
This file is the entry point for the 'vdisk' command-line tool.
Run 'vdisk --help' in your shell to use the CLI.
"""
from pathlib import Path
from typing import Optional

import typer
from rich import print as rich_print
from rich.markup import escape
from rich.table import Table

from common.app_setup import print_and_log, print_error, setup_logging
from filestore import DeleteSummary, FileContents, FileManager, FileStorage, FolderContents, load_settings
from vdisk.script import DEMO_SCRIPT, ScriptStep, StepOutcome, load_script, run_script

app = typer.Typer(add_completion=False, help="Work with an in-memory disk: folders, files and a current directory.")


@app.callback()
def main(ctx: typer.Context,
         config: Optional[Path] = typer.Option(None, help="YAML/JSON settings file"),
         log_file: Optional[str] = typer.Option(None, help="Log file (default ~/.vdisk/log.txt)"),
         log_level: Optional[str] = typer.Option(None, help="Logging level name")):
    """Set up settings and logging for every command."""
    overrides = {key: value for key, value in (("log_file", log_file), ("log_level", log_level)) if value}
    try:
        settings = load_settings(config).merge(overrides)
    except (OSError, ValueError) as e:
        print_error(f"Failed to load settings: {e}")
        raise typer.Exit(2)
    setup_logging(app_name=settings.app_name, loglevel=settings.log_level, logfile=settings.log_file)
    ctx.obj = settings


@app.command()
def demo():
    """Run the built-in demonstration sequence on a fresh disk."""
    failures = _run_and_report(DEMO_SCRIPT)
    print_and_log(f"Demo finished with {failures} failed step(s).")


@app.command()
def run(script: Path = typer.Argument(..., help="YAML/JSON list of steps"),
        strict: bool = typer.Option(False, help="Exit with code 1 if any step fails")):
    """Run a script of operations on a fresh disk."""
    try:
        steps = load_script(script)
    except (OSError, ValueError) as e:
        print_error(f"Failed to load script {script}: {e}")
        raise typer.Exit(2)
    failures = _run_and_report(steps)
    print_and_log(f"Ran {len(steps)} step(s), {failures} failed.")
    if strict and failures:
        raise typer.Exit(1)


@app.command()
def serve(ctx: typer.Context,
          host: Optional[str] = typer.Option(None, help="Interface to listen on"),
          port: Optional[int] = typer.Option(None, help="Port to listen on (0 picks a free one)")):
    """Serve a disk over REST until interrupted."""
    from vdisk.daemon import run_server

    overrides = {key: value for key, value in (("host", host), ("port", port)) if value is not None}
    settings = ctx.obj.merge(overrides)
    run_server(host=settings.host, port=settings.port, log_level=settings.log_level)


def _run_and_report(steps: list[ScriptStep]) -> int:
    """Run ``steps`` on a new storage, print each outcome, return the failure count."""
    with FileStorage() as storage:
        outcomes = run_script(FileManager(storage), steps)
        for outcome in outcomes:
            _report(outcome)
        released = storage.close()
    rich_print(escape(f"Storage deleted ({released.folders} folders, {released.files} files released)"))
    return sum(1 for outcome in outcomes if not outcome.result.ok)


def _report(outcome: StepOutcome):
    label = outcome.step.describe()
    result = outcome.result
    if not result.ok:
        print_error(f"{label}: {result.message}")
        return
    value = result.value
    if isinstance(value, FolderContents):
        print_and_log(f"{label}: {value.path} ({value.folder_count} folders, {value.file_count} files)")
        rich_print(_folder_table(value))
    elif isinstance(value, FileContents):
        print_and_log(f"{label}: {value.path} ({value.size} bytes, extension '{value.extension}')")
        print_and_log(f"Contents: {value.content!s}")
    elif isinstance(value, DeleteSummary):
        print_and_log(f"{label}: removed {value.path} "
                      f"({value.folders_released} folders, {value.files_released} files released)")
    else:
        print_and_log(f"{label}: {value}")


def _folder_table(contents: FolderContents) -> Table:
    table = Table(title=escape(contents.path))
    table.add_column("Kind")
    table.add_column("Name")
    for name in contents.folders:
        table.add_row("folder", escape(name))
    for name in contents.files:
        table.add_row("file", escape(name))
    return table


if __name__ == "__main__":
    app()
