"""Errors raised while repackaging an EPUB.

Every error aborts the archive being processed; the CLI logs it and moves on
to the next path.
"""

from __future__ import annotations


class TocPackError(Exception):
    """Base exception for tocpack errors.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class PathResolutionError(TocPackError):
    """Input path could not be made absolute."""


class UnsupportedExtensionError(TocPackError):
    """Input path does not end in `.epub`."""


class ArchiveOpenError(TocPackError):
    """Input file is unreadable or not a zip container."""


class WorkingDirectoryError(TocPackError):
    """Scratch directory could not be created."""


class EntryReadError(TocPackError):
    """An archive member could not be read."""


class EntryWriteError(TocPackError):
    """A placed entry could not be written under the scratch directory."""


class NavigationDocumentError(TocPackError):
    """toc.ncx is unreadable or unparsable."""


class NavigationDocumentMissingError(NavigationDocumentError):
    """The archive has no toc.ncx."""


class PackagingError(TocPackError):
    """The output zip could not be written."""
