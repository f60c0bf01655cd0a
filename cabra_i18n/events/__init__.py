"""Event system for i18n signals.

Public API:
    - EventBus: per-context publish/subscribe registry
    - Event: event record
    - EventType: signals published by the i18n components
"""

from cabra_i18n.events.bus import WILDCARD, EventBus
from cabra_i18n.events.models import Event, EventType

__all__ = [
    "EventBus",
    "Event",
    "EventType",
    "WILDCARD",
]
