"""Repackage one EPUB, or a batch of them, in TOC reading order."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from rich.markup import escape

from tocpack.config import EPUB_SUFFIX, OUTPUT_SUFFIX, RepackOptions
from tocpack.errors import (
    PathResolutionError,
    TocPackError,
    UnsupportedExtensionError,
    WorkingDirectoryError,
)
from tocpack.reorder.archive import read_archive
from tocpack.reorder.navigation import visit_order
from tocpack.reorder.placement import Placement, resolve_placements
from tocpack.reorder.writer import materialize, package_directory, remove_workdir
from tocpack.utils.logging import get_logger

logger = get_logger()


@dataclass
class RepackResult:
    """Outcome of one archive. `output` is `None` on a dry run."""

    source: Path
    output: Path | None
    placements: list[Placement]


@dataclass
class BatchSummary:
    """Results and failures of a batch, in argument order."""

    results: list[RepackResult] = field(default_factory=list)
    failures: list[tuple[str, TocPackError]] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.failures)


def output_paths(epub_path: Path) -> tuple[Path, Path]:
    """Return the scratch directory and output zip that sit beside `epub_path`."""
    workdir = epub_path.parent / epub_path.stem
    return workdir, workdir.with_name(workdir.name + OUTPUT_SUFFIX)


def _resolve_input(epub: str | Path) -> Path:
    try:
        epub_path = Path(epub).absolute()
    except (OSError, ValueError) as exc:
        raise PathResolutionError(f"can not resolve '{epub}', because {exc}") from exc
    if epub_path.suffix != EPUB_SUFFIX:
        raise UnsupportedExtensionError(
            f"can not support ext '{epub_path.suffix}' ({epub_path})"
        )
    return epub_path


def _make_workdir(workdir: Path) -> None:
    if workdir.exists():
        raise WorkingDirectoryError(
            f"working directory '{workdir}' already exists; remove it first"
        )
    try:
        workdir.mkdir()
    except OSError as exc:
        raise WorkingDirectoryError(
            f"can not create dir '{workdir}', because {exc}"
        ) from exc


def repackage(epub: str | Path, options: RepackOptions | None = None) -> RepackResult:
    """Rewrite `epub` as `<stem>.zip` with its files named in TOC order.

    Args:
        epub: Path of the `.epub` to repackage.
        options: Run options. Defaults to `RepackOptions()`.
    Returns:
        RepackResult: the placements and, unless dry-running, the output path.
    Raises:
        TocPackError: Any failure; nothing is retried.
    """
    options = options or RepackOptions()
    logger.trace(f"Entered repackage({epub=})")

    epub_path = _resolve_input(epub)
    book = read_archive(epub_path)
    records = visit_order(book.toc_bytes, book.toc_prefix, options.slugify_titles)
    placements = resolve_placements(book.entries.values(), records)
    logger.debug(
        "{name}: {matched} of {total} entries follow the TOC",
        name=escape(epub_path.name),
        matched=sum(not placement.is_passthrough for placement in placements),
        total=len(placements),
    )

    if options.dry_run:
        return RepackResult(source=epub_path, output=None, placements=placements)

    workdir, output = output_paths(epub_path)
    _make_workdir(workdir)
    try:
        materialize(placements, workdir)
        package_directory(workdir, output)
    finally:
        if options.keep_workdir:
            logger.trace(f"Keeping working directory {workdir}")
        else:
            remove_workdir(workdir)

    logger.info(
        "Repackaged {source} -> {output}",
        source=escape(str(epub_path)),
        output=escape(str(output)),
    )
    return RepackResult(source=epub_path, output=output, placements=placements)


def repackage_all(
    epubs: Iterable[str | Path],
    options: RepackOptions | None = None,
    on_done: Callable[[str], None] | None = None,
) -> BatchSummary:
    """Repackage each path in turn; a failure only aborts that path.

    `on_done` is called with each path after it has been handled.
    """
    summary = BatchSummary()
    for epub in epubs:
        try:
            summary.results.append(repackage(epub, options))
        except TocPackError as exc:
            logger.error(
                "{epub}: {message}",
                epub=escape(str(epub)),
                message=escape(exc.message),
            )
            summary.failures.append((str(epub), exc))
        if on_done is not None:
            on_done(str(epub))
    return summary
