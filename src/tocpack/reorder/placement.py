"""Decide where every archive entry lands in the repackaged archive."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from tocpack.reorder.archive import Entry
from tocpack.reorder.navigation import VisitRecord
from tocpack.utils.logging import get_logger

logger = get_logger()


@dataclass(frozen=True)
class Placement:
    """An entry, its destination path and the bytes to write there.

    `ordinal` is `None` for entries the TOC does not reference.
    """

    entry: Entry
    dest_path: str
    content: bytes
    ordinal: int | None = None

    @property
    def is_passthrough(self) -> bool:
        return self.ordinal is None


def digit_width(count: int) -> int:
    """Number of decimal digits in `count`; 0 counts as one digit."""
    width = 1
    count //= 10
    while count != 0:
        width += 1
        count //= 10
    return width


def format_ordinal(index: int, width: int) -> str:
    return f"{index:0{width}d}"


def rewrite_headings(content: bytes) -> bytes:
    """Hook for rewriting chapter headings of TOC-referenced files.

    Currently returns `content` unchanged.
    """
    return content


def resolve_placements(
    entries: Iterable[Entry],
    records: list[VisitRecord],
) -> list[Placement]:
    """Place each entry, following the order of `entries`.

    Entries referenced by a record get its template with the record's
    zero-padded index; every other entry keeps its archive name.
    """
    width = digit_width(len(records))
    index_by_src = {record.src: index for index, record in enumerate(records)}

    placements: list[Placement] = []
    for entry in entries:
        index = index_by_src.get(entry.name)
        if index is None:
            placements.append(Placement(entry, entry.name, entry.content))
            continue
        dest_path = records[index].dest_path(format_ordinal(index, width))
        logger.trace(f"Placing {entry.name} at {dest_path}")
        placements.append(
            Placement(entry, dest_path, rewrite_headings(entry.content), index)
        )
    return placements
