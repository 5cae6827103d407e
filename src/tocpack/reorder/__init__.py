"""Reorder EPUB archive entries by their table of contents."""

from tocpack.reorder.archive import Entry, EpubArchive, read_archive
from tocpack.reorder.navigation import NavNode, VisitRecord, flatten, parse_nav_tree
from tocpack.reorder.pipeline import BatchSummary, RepackResult, repackage, repackage_all
from tocpack.reorder.placement import Placement, digit_width, resolve_placements

__all__ = [
    "BatchSummary",
    "Entry",
    "EpubArchive",
    "NavNode",
    "Placement",
    "RepackResult",
    "VisitRecord",
    "digit_width",
    "flatten",
    "parse_nav_tree",
    "read_archive",
    "repackage",
    "repackage_all",
    "resolve_placements",
]
