#!/usr/bin/env python3
"""Command line entry point: repackage EPUBs in table-of-contents order."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from tocpack.config import RepackOptions
from tocpack.reorder.pipeline import RepackResult, repackage_all
from tocpack.utils.logging import configure_logging, get_logger, get_progress

app = typer.Typer(add_completion=False)
logger = get_logger()


def _placement_table(result: RepackResult) -> Table:
    """Tabulate planned placements of a dry run."""
    table = Table(title=result.source.name)
    table.add_column("#", justify="right")
    table.add_column("Entry")
    table.add_column("Destination")
    for placement in result.placements:
        ordinal = "" if placement.ordinal is None else str(placement.ordinal)
        table.add_row(ordinal, placement.entry.name, placement.dest_path)
    return table


@app.command()
def pkg(
    ctx: typer.Context,
    paths: list[Path] | None = typer.Argument(
        None, help="EPUB files to repackage, processed in order."
    ),
    *,
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Show where each entry would go; write nothing."
    ),
    keep_workdir: bool = typer.Option(
        False, "--keep-workdir", help="Keep the extracted working directory."
    ),
    slugify_titles: bool = typer.Option(
        False, "--slugify-titles", help="Slugify TOC titles used in file names."
    ),
    log_file: Path | None = typer.Option(None, help="Append a trace log to this file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug messages."),
) -> None:
    """Repackage each EPUB as a .zip whose files follow the TOC reading order."""
    if not paths:
        typer.echo(ctx.get_usage(), err=True)
        typer.echo(f"Try '{ctx.command_path} --help' for help.", err=True)
        raise typer.Exit(code=2)

    options = RepackOptions(
        dry_run=dry_run,
        keep_workdir=keep_workdir,
        slugify_titles=slugify_titles,
        log_file=log_file,
        verbose=verbose,
    )
    configure_logging(log_path=options.log_file, level="DEBUG" if verbose else "INFO")

    progress = get_progress()
    with progress:
        task = progress.add_task("Repackaging...", total=len(paths))
        summary = repackage_all(
            paths,
            options,
            on_done=lambda path: progress.update(
                task, advance=1, description=f"Repackaged {Path(path).name}"
            ),
        )

    if dry_run:
        console = Console()
        for result in summary.results:
            console.print(_placement_table(result))

    if summary.failed:
        logger.warning(
            "{failed} of {total} archives failed", failed=summary.failed, total=len(paths)
        )


def main() -> None:
    app(prog_name="tocpack")


if __name__ == "__main__":
    main()
