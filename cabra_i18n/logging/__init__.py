"""Structured logging infrastructure.

Public API:
    - configure_logging(): Initialize logging
    - get_logger(): Get a logger instance with a specific name
    - get_module_logger(): Get a logger for the calling module
    - bind_change_context(): Context manager for language-change logging
    - get_change_id(): Get current change id from context
    - clear_change_context(): Clear all bound context
"""

from cabra_i18n.logging.setup import (
    configure_logging,
    get_logger,
    get_module_logger,
)
from cabra_i18n.logging.context import (
    bind_change_context,
    clear_change_context,
    get_change_id,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "get_module_logger",
    "bind_change_context",
    "get_change_id",
    "clear_change_context",
]
