"""Tests for cabra_i18n.events.models."""

from datetime import datetime
from uuid import UUID

import pytest

from cabra_i18n.events import Event, EventType

pytestmark = pytest.mark.unit


class TestEvent:
    """Tests for the Event record."""

    def test_event_type_enum_stored_as_value(self):
        event = Event(event_type=EventType.I18N_READY)
        assert event.event_type == "i18n.ready"

    def test_defaults(self):
        event = Event(event_type="locale.detected")
        assert isinstance(event.timestamp, datetime)
        assert isinstance(event.correlation_id, UUID)
        assert event.metadata == {}

    def test_get_reads_metadata(self):
        event = Event(EventType.LOCALE_CHANGED, metadata={"locale": "ar"})
        assert event.get("locale") == "ar"
        assert event.get("missing", "default") == "default"

    def test_events_are_hashable(self):
        event = Event(EventType.I18N_READY)
        assert event in {event}
