"""Repackage EPUB archives in table-of-contents reading order."""

__version__ = "0.1.0"
