"""kubedepscan observability package.

Structured logging for the scanner.
"""

from kubedepscan.observability.logging import (
    LogContext,
    add_context,
    clear_context,
    configure_logging,
    get_logger,
    install_default_logging,
)

__all__ = [
    "LogContext",
    "add_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "install_default_logging",
]
