"""CLI for git_folder_summary."""

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from . import __version__
from .backend import DEFAULT_FETCH_TIMEOUT, GitCliBackend
from .format import REPORT_FORMATS, REPORT_FORMATS_TYPE, format_rows
from .locate import PathError
from .report import ReportStreamer

app = typer.Typer(context_settings={"help_option_names": []})


def _version_callback(value: bool) -> None:  # noqa: FBT001
    if value:
        print(f"git-folder-summary {__version__}")
        raise typer.Exit(0)


def _help_callback(ctx: typer.Context, value: bool) -> None:  # noqa: FBT001
    if value:
        typer.echo(ctx.get_help())
        raise typer.Exit(1)


@app.command()
def git_folder_summary(  # noqa: PLR0913
    directory: Annotated[Path, typer.Argument(help="directory to scan")] = Path(),
    *,
    local: Annotated[
        bool, typer.Option("-l", "--local", help="don't fetch from remotes")
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("-q", "--quiet", help="hide repos with nothing to report"),
    ] = False,
    exclude_dir: Annotated[
        list[str] | None,
        typer.Option("-d", "--exclude-dir", help="don't include these dirs"),
    ] = None,
    fmt: Annotated[
        str, typer.Option("-f", "--format", help="output format")
    ] = "table",
    fetch_timeout: Annotated[
        float,
        typer.Option(
            "-t",
            "--fetch-timeout",
            envvar="GIT_FOLDER_SUMMARY_FETCH_TIMEOUT",
            help="seconds to wait for each fetch",
        ),
    ] = DEFAULT_FETCH_TIMEOUT,
    color: Annotated[
        bool | None,
        typer.Option(
            "--color/--no-color", help="highlight repos [default: on a terminal]"
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option("-v", "--verbose", help="log git failures to stderr")
    ] = False,
    version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=_version_callback,
            is_eager=True,
            help="Print version",
        ),
    ] = None,
    show_help: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "-h",
            "--help",
            callback=_help_callback,
            is_eager=True,
            help="Show this message and exit",
        ),
    ] = None,
) -> None:
    """Show branch and sync status for every repo in a directory."""
    if fmt not in REPORT_FORMATS:
        raise typer.BadParameter(
            f"format must be one of {REPORT_FORMATS}", param_hint="'-f' / '--format'"
        )
    fmt_report: REPORT_FORMATS_TYPE = fmt  # type: ignore[assignment]
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )
    streamer = ReportStreamer(
        directory,
        skip_fetch=local,
        quiet=quiet,
        exclude_dirs=exclude_dir,
        backend=GitCliBackend(fetch_timeout=fetch_timeout),
        color=sys.stdout.isatty() if color is None else color,
    )
    try:
        if fmt_report == "table":
            for line in streamer.lines():
                print(line, flush=True)
        else:
            rows = [
                row
                for row in streamer.rows()
                if not (quiet and row.status.is_neutral)
            ]
            if rows:
                print(format_rows(rows, fmt_report))
    except PathError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
