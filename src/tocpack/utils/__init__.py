"""Initialize tocpack.utils subpackage."""

from tocpack.utils.logging import (
    configure_logging,
    get_console,
    get_logger,
    get_progress,
)

__all__ = [
    "configure_logging",
    "get_console",
    "get_logger",
    "get_progress",
]
