"""EPUB and toc.ncx builders shared by the tests."""

from __future__ import annotations

import struct
import zipfile
from pathlib import Path
from typing import Any

NCX_NS = "http://www.daisy.org/z3986/2005/ncx/"

# (title, src, children)
Outline = list[tuple[str, str, list[Any]]]


def _nav_points(outline: Outline, depth: int = 1) -> str:
    indent = "  " * (depth + 1)
    parts = []
    for index, (title, src, children) in enumerate(outline):
        parts.append(
            f'{indent}<navPoint id="np{depth}-{index}">\n'
            f"{indent}  <navLabel><text>{title}</text></navLabel>\n"
            f'{indent}  <content src="{src}"/>\n'
            f"{_nav_points(children, depth + 1)}"
            f"{indent}</navPoint>\n"
        )
    return "".join(parts)


def build_ncx(outline: Outline, namespaced: bool = True) -> bytes:
    """Build a toc.ncx document from a nested outline."""
    xmlns = f' xmlns="{NCX_NS}"' if namespaced else ""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<ncx{xmlns} version="2005-1">\n'
        "  <head/>\n"
        "  <docTitle><text>Test Book</text></docTitle>\n"
        "  <navMap>\n"
        f"{_nav_points(outline)}"
        "  </navMap>\n"
        "</ncx>\n"
    ).encode("utf-8")


def build_epub(
    path: Path,
    members: dict[str, bytes],
    directories: tuple[str, ...] = (),
) -> Path:
    """Write `members` (and directory markers) into a zip at `path`."""
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("mimetype", b"application/epub+zip")
        for directory in directories:
            archive.writestr(directory, b"")
        for name, content in members.items():
            archive.writestr(name, content, compress_type=zipfile.ZIP_DEFLATED)
    return path


def chapter(body: str) -> bytes:
    return f"<html><body><h1>{body}</h1></body></html>".encode("utf-8")




def corrupt_member(path: Path, name: str, count: int = 20) -> Path:
    """Flip `count` bytes in the middle of the compressed data of `name`."""
    with zipfile.ZipFile(path) as archive:
        info = archive.getinfo(name)
    with open(path, "r+b") as handle:
        handle.seek(info.header_offset)
        header = handle.read(30)
        name_length, extra_length = struct.unpack("<HH", header[26:30])
        start = info.header_offset + 30 + name_length + extra_length
        start += max(0, (info.compress_size - count) // 2)
        handle.seek(start)
        payload = bytearray(handle.read(count))
        for index in range(len(payload)):
            payload[index] ^= 0xFF
        handle.seek(start)
        handle.write(payload)
    return path


def compressible_chapter(paragraphs: int = 200) -> bytes:
    body = "".join(
        f"<p>Paragraph {index}: the quick brown fox jumps over the lazy dog.</p>"
        for index in range(paragraphs)
    )
    return f"<html><body>{body}</body></html>".encode("utf-8")
