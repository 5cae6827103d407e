"""Fixed naming policy and per-run options."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

TOC_FILENAME = "toc.ncx"
ORDINAL_TOKEN = "{ordinal}"
TITLE_SEPARATOR_REPLACEMENT = "|"
CONTENT_SUFFIX = ".html"
EPUB_SUFFIX = ".epub"
OUTPUT_SUFFIX = ".zip"


@dataclass(frozen=True)
class RepackOptions:
    """Options shared by every archive of one run.

    Attributes:
        dry_run: Resolve placements without writing anything.
        keep_workdir: Leave the scratch directory in place after packaging.
        slugify_titles: Slugify TOC titles instead of only replacing `/`.
        log_file: Optional trace log sink.
        verbose: Log DEBUG messages to the console.
    """

    dry_run: bool = False
    keep_workdir: bool = False
    slugify_titles: bool = False
    log_file: Path | None = None
    verbose: bool = False
