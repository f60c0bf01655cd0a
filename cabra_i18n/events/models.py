"""Event models for the i18n signal system.

Provides the Event record exchanged between components and the set of
event types they publish.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict
from uuid import UUID, uuid4


class EventType(str, Enum):
    """Signals published while the page language is resolved or changed."""

    LOCALE_DETECTED = "locale.detected"
    I18N_READY = "i18n.ready"
    I18N_CHANGED = "i18n.changed"
    LOCALE_CHANGED = "locale.changed"
    FONTS_LOADED = "fonts.loaded"
    DIRECTION_CHANGED = "direction.changed"
    LANGUAGE_CHANGED = "language.changed"


@dataclass
class Event:
    """Record of something that happened in the i18n subsystem.

    Events carry their payload in ``metadata`` (for example ``locale`` and
    ``is_rtl`` for ``locale.detected``).
    """

    event_type: str
    """The type of event (e.g., 'i18n.ready')."""

    timestamp: datetime = field(default_factory=datetime.now)
    """When the event occurred."""

    correlation_id: UUID = field(default_factory=uuid4)
    """Unique ID to track related events across the system."""

    metadata: Dict[str, Any] = field(default_factory=dict)
    """Payload for this event type."""

    def __post_init__(self) -> None:
        if isinstance(self.event_type, EventType):
            self.event_type = self.event_type.value

    def get(self, key: str, default: Any = None) -> Any:
        """Shortcut for ``event.metadata.get(key, default)``."""
        return self.metadata.get(key, default)

    def __hash__(self) -> int:
        """Hash based on correlation_id and timestamp."""
        return hash((self.correlation_id, self.timestamp))
