"""CLI for markdown worklogs (TODO states, header navigation, DONE sorting).

Line numbers on the command line are 1-based, like an editor's gutter.
"""

from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from markdown_worklogs.commands import (
    change_todo,
    copy_current_codeblock,
    goto_header,
    goto_parent_header,
    goto_sibling_header,
    select_current_codeblock,
    sort_current_section,
    sort_done_to_bottom,
)
from markdown_worklogs.config import Settings, load_settings
from markdown_worklogs.core.tree.navigation import Direction
from markdown_worklogs.editor import WorklogFile
from markdown_worklogs.logging_config import configure_logging

app = typer.Typer(help="Markdown worklogs: cycle TODO states and sort DONE work to the bottom.")

WorklogPath = Annotated[Path, typer.Argument(help="Markdown worklog file", dir_okay=False)]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only log warnings and errors"),
) -> None:
    configure_logging(verbose=verbose, quiet=quiet)


def _open_worklog(path: Path, *, dry_run: bool = False) -> WorklogFile:
    """Load the worklog, exiting with an error if it doesn't exist."""
    try:
        return WorklogFile(path, dry_run=dry_run)
    except FileNotFoundError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e


@app.command()
def todo(
    path: WorklogPath,
    line: int = typer.Option(1, "--line", "-l", min=1, help="Cursor line"),
    down: bool = typer.Option(False, "--down", help="Cycle backwards (DONE -> TODO -> none)"),
    timestamp: Annotated[
        bool | None,
        typer.Option(
            "--timestamp/--no-timestamp",
            help="Write a CLOSED: annotation when a header becomes DONE",
        ),
    ] = None,
    dry_run: bool = typer.Option(False, "--dry-run", help="Do not write the file"),
) -> None:
    """Cycle the TODO state of the header governing a line."""
    settings = load_settings()
    if timestamp is not None:
        settings = Settings(insert_closed_timestamp=timestamp)

    worklog = _open_worklog(path, dry_run=dry_run)
    plan = change_todo(worklog, line - 1, delta=-1 if down else 1, settings=settings)
    if not plan:
        typer.echo(f"No header at or above line {line}.")
        return

    header_line = plan[0].range.start.line
    worklog.save()
    typer.echo(f"{header_line + 1}: {worklog.line_at(header_line)}")


@app.command()
def goto(
    path: WorklogPath,
    line: int = typer.Option(1, "--line", "-l", min=1, help="Cursor line"),
    previous: bool = typer.Option(False, "--previous", "-p", help="Search backwards"),
    level: Annotated[
        int | None,
        typer.Option("--level", min=1, help="Only headers of exactly this level"),
    ] = None,
    min_level: Annotated[
        int | None,
        typer.Option("--min-level", min=1, help="Only headers of this level or deeper"),
    ] = None,
    top_level: bool = typer.Option(False, "--top-level", help="Only level-1 headers"),
    sibling: bool = typer.Option(False, "--sibling", help="Siblings of the enclosing header"),
    parent: bool = typer.Option(False, "--parent", help="Parent of the enclosing header"),
) -> None:
    """Print the line of the next (or previous) matching header."""
    chosen = [level is not None, min_level is not None, top_level, sibling, parent]
    if sum(chosen) > 1:
        msg = "Use only one of --level, --min-level, --top-level, --sibling, --parent"
        raise typer.BadParameter(msg)

    worklog = _open_worklog(path)
    direction = Direction.BACKWARD if previous else Direction.FORWARD
    cursor = line - 1

    if parent:
        target = goto_parent_header(worklog, cursor)
    elif sibling:
        target = goto_sibling_header(worklog, cursor, direction=direction)
    else:
        target = goto_header(
            worklog,
            cursor,
            direction=direction,
            min_level=min_level,
            exact_level=1 if top_level else level,
        )

    if target is None:
        logger.debug("No matching header from line {}", line)
        raise typer.Exit(1)
    typer.echo(str(target + 1))


@app.command()
def sort(
    path: WorklogPath,
    line: Annotated[
        int | None,
        typer.Option(
            "--line",
            "-l",
            min=1,
            help="Only sort the children of the header governing this line",
        ),
    ] = None,
    dry_run: bool = typer.Option(False, "--dry-run", help="Do not write the file"),
) -> None:
    """Move DONE sections below the open ones, keeping their order."""
    worklog = _open_worklog(path, dry_run=dry_run)
    if line is None:
        moved = sort_done_to_bottom(worklog)
    else:
        moved = sort_current_section(worklog, line - 1)
    worklog.save()
    typer.echo(f"Moved {moved} section(s).")


@app.command()
def codeblock(
    path: WorklogPath,
    line: int = typer.Option(..., "--line", "-l", min=1, help="A line inside the code block"),
    show_range: bool = typer.Option(
        False, "--range", help="Print the interior line range instead of the content"
    ),
) -> None:
    """Print the fenced code block around a line."""
    worklog = _open_worklog(path)
    if show_range:
        selection = select_current_codeblock(worklog, line - 1)
        if selection is None:
            raise typer.Exit(1)
        typer.echo(f"{selection.start.line + 1}-{selection.end.line + 1}")
        return

    content = copy_current_codeblock(worklog, line - 1)
    if content is None:
        raise typer.Exit(1)
    typer.echo(content, nl=False)
