"""Language-change context binding for structured logging.

Binds a correlation id (and the locales involved) to every log entry
emitted while a language change is in progress, so the steps of one change
can be followed across the font, translation and direction components.

Usage:
    from cabra_i18n.logging import bind_change_context

    with bind_change_context(from_locale="pt-BR", to_locale="ar"):
        logger.info("language_change_started")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_change_context(
    change_id: Optional[str] = None,
    from_locale: Optional[str] = None,
    to_locale: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind change-scoped context to all logs within the block.

    Args:
        change_id: Unique change identifier. Auto-generated if not provided.
        from_locale: Locale active before the change.
        to_locale: Locale requested by the change.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        The change id bound for the block.
    """
    context: dict[str, Any] = {"change_id": change_id or str(uuid.uuid4())}

    if from_locale is not None:
        context["from_locale"] = from_locale

    if to_locale is not None:
        context["to_locale"] = to_locale

    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["change_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_change_id() -> Optional[str]:
    """Get the change id bound to the current logging context, if any."""
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("change_id")


def clear_change_context() -> None:
    """Clear all bound context from the logging context."""
    structlog.contextvars.clear_contextvars()
