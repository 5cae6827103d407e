"""Read an EPUB container into content entries plus its toc.ncx."""

from __future__ import annotations

import posixpath
import zipfile
import zlib
from dataclasses import dataclass, field
from pathlib import Path

from rich.markup import escape

from tocpack.config import TOC_FILENAME
from tocpack.errors import (
    ArchiveOpenError,
    EntryReadError,
    NavigationDocumentMissingError,
)
from tocpack.utils.logging import get_logger

logger = get_logger()


@dataclass(frozen=True)
class Entry:
    """An archive member: `/`-separated name and raw bytes."""

    name: str
    content: bytes


@dataclass
class EpubArchive:
    """Content entries of one EPUB, in archive order, and its navigation document."""

    source: Path
    toc_name: str
    toc_bytes: bytes
    toc_prefix: str
    entries: dict[str, Entry] = field(default_factory=dict)


def toc_prefix_for(toc_name: str) -> str:
    """Return the directory of `toc_name` with a trailing `/`, or "" at the root."""
    prefix = posixpath.dirname(toc_name) or "."
    if prefix == ".":
        prefix = ""
    if prefix != "":
        prefix += "/"
    return prefix


def _is_directory_marker(info: zipfile.ZipInfo) -> bool:
    return info.filename.endswith("/")


def _read_member(archive: zipfile.ZipFile, info: zipfile.ZipInfo) -> bytes:
    try:
        return archive.read(info)
    except (
        OSError,
        EOFError,
        zipfile.BadZipFile,
        zlib.error,
        NotImplementedError,
        RuntimeError,
    ) as exc:
        raise EntryReadError(f"read {info.filename} error, because {exc}") from exc


def read_archive(path: str | Path) -> EpubArchive:
    """Read every non-directory member of the EPUB at `path`.

    The first member named `toc.ncx` is kept apart as the navigation document;
    any other member with that name is dropped with a warning.

    Raises:
        ArchiveOpenError: `path` is unreadable or not a zip container.
        EntryReadError: A member could not be decompressed.
        NavigationDocumentMissingError: No member is named `toc.ncx`.
    """
    epub_path = path if isinstance(path, Path) else Path(path)
    logger.trace(f"Entered read_archive({epub_path=})")

    try:
        archive = zipfile.ZipFile(epub_path, "r")
    except (OSError, zipfile.BadZipFile) as exc:
        raise ArchiveOpenError(f"can not open '{epub_path}', because {exc}") from exc

    entries: dict[str, Entry] = {}
    toc_name: str | None = None
    toc_bytes = b""
    with archive:
        for info in archive.infolist():
            if _is_directory_marker(info):
                continue
            if posixpath.basename(info.filename) == TOC_FILENAME:
                if toc_name is not None:
                    logger.warning(
                        "Ignoring additional {toc} at {name}; using {first}",
                        toc=TOC_FILENAME,
                        name=escape(info.filename),
                        first=escape(toc_name),
                    )
                    continue
                toc_name = info.filename
                toc_bytes = _read_member(archive, info)
                logger.trace(f"Found navigation document: {toc_name=}")
                continue
            entries[info.filename] = Entry(info.filename, _read_member(archive, info))

    if toc_name is None:
        raise NavigationDocumentMissingError(
            f"no {TOC_FILENAME} found in '{epub_path}'"
        )

    logger.trace(f"Read {len(entries)} entries from {epub_path}")
    return EpubArchive(
        source=epub_path,
        toc_name=toc_name,
        toc_bytes=toc_bytes,
        toc_prefix=toc_prefix_for(toc_name),
        entries=entries,
    )
