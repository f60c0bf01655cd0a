"""Event bus for cross-component i18n signals.

Each I18nContext owns one EventBus. Handlers are registered per event type
(or "*" for every event) and awaited in registration order when an event is
published.
"""

import inspect
from typing import Any, Callable, Dict, List, Union

from cabra_i18n.events.models import Event, EventType
from cabra_i18n.logging import get_module_logger

logger = get_module_logger()

WILDCARD = "*"

EventKey = Union[str, EventType]


def _key(event_type: EventKey) -> str:
    if isinstance(event_type, EventType):
        return event_type.value
    return event_type


class EventBus:
    """In-process publish/subscribe registry.

    Handlers may be plain functions or coroutine functions taking the Event.
    A handler that raises is logged and skipped; the remaining handlers still
    run.

    Example:
        bus = EventBus()

        @bus.subscribe(EventType.I18N_READY)
        async def on_ready(event):
            await fonts.load_fonts_for_locale(event.get("locale"))

        await bus.publish(Event(EventType.I18N_READY, metadata={"locale": "ar"}))
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[Callable]] = {}

    def subscribe(self, event_type: EventKey):
        """Decorator to register a handler for an event type.

        Args:
            event_type: The event type to handle, or "*" for all events.

        Returns:
            Decorator function that registers the handler.
        """
        key = _key(event_type)

        def decorator(handler_func: Callable) -> Callable:
            self.add_handler(key, handler_func)
            return handler_func

        return decorator

    def add_handler(self, event_type: EventKey, handler: Callable) -> None:
        """Register a handler without decorator syntax."""
        key = _key(event_type)
        self._handlers.setdefault(key, []).append(handler)
        logger.debug(
            "registered_event_handler",
            handler=getattr(handler, "__name__", "unknown"),
            event_type=key,
            total_handlers=len(self._handlers[key]),
        )

    def unsubscribe(self, event_type: EventKey, handler: Callable) -> bool:
        """Remove a previously registered handler.

        Returns:
            True if the handler was registered and has been removed.
        """
        handlers = self._handlers.get(_key(event_type), [])
        if handler in handlers:
            handlers.remove(handler)
            return True
        return False

    async def publish(self, event: Event) -> List[Any]:
        """Deliver an event to its handlers, then to wildcard handlers.

        Args:
            event: The event to publish.

        Returns:
            List of return values from the handlers that succeeded.
        """
        handlers = list(self._handlers.get(event.event_type, []))
        handlers.extend(self._handlers.get(WILDCARD, []))

        logger.debug(
            "publishing_event",
            event_type=event.event_type,
            handler_count=len(handlers),
            correlation_id=str(event.correlation_id),
        )

        results = []
        for handler in handlers:
            try:
                result = handler(event)
                if inspect.isawaitable(result):
                    result = await result
                results.append(result)
            except Exception as e:
                logger.error(
                    "event_handler_failed",
                    handler=getattr(handler, "__name__", "unknown"),
                    event_type=event.event_type,
                    error=str(e),
                    correlation_id=str(event.correlation_id),
                )

        return results

    async def emit(self, event_type: EventKey, **metadata: Any) -> List[Any]:
        """Build and publish an event in one call."""
        return await self.publish(Event(event_type=_key(event_type), metadata=metadata))

    def get_handlers(self, event_type: EventKey) -> List[Callable]:
        """Get the handlers registered for an event type."""
        return list(self._handlers.get(_key(event_type), []))

    def get_registered_events(self) -> List[str]:
        """Get list of all event types with at least one handler."""
        return [key for key, handlers in self._handlers.items() if handlers]

    def clear(self) -> None:
        """Remove every handler."""
        self._handlers.clear()
