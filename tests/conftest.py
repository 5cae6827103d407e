"""Shared fixtures: EPUB archives built in-memory from NCX outlines."""

from __future__ import annotations

from pathlib import Path

import pytest

from helpers import Outline, build_epub, build_ncx, chapter


@pytest.fixture
def sample_epub(tmp_path: Path) -> Path:
    """Cover, a part with nested chapters, a duplicate reference and a stylesheet."""
    outline: Outline = [
        ("Cover", "text/cover.html", []),
        (
            "Part One",
            "text/part1.html",
            [
                ("Chapter 1", "text/ch1.html#start", []),
                ("Chapter 1, Scene 2", "text/ch1.html#scene2", []),
                ("Chapter 2", "text/ch2.html", []),
            ],
        ),
    ]
    return build_epub(
        tmp_path / "book.epub",
        {
            "OEBPS/toc.ncx": build_ncx(outline),
            "OEBPS/content.opf": b"<package/>",
            "OEBPS/text/cover.html": chapter("Cover"),
            "OEBPS/text/part1.html": chapter("Part One"),
            "OEBPS/text/ch1.html": chapter("Chapter 1"),
            "OEBPS/text/ch2.html": chapter("Chapter 2"),
            "OEBPS/styles/book.css": b"body { margin: 0; }",
        },
        directories=("OEBPS/", "OEBPS/text/"),
    )
