"""Tests for cabra_i18n.events.bus."""

import pytest

from cabra_i18n.events import WILDCARD, Event, EventBus, EventType

pytestmark = pytest.mark.unit


@pytest.fixture
def bus():
    return EventBus()


class TestSubscription:
    """Tests for registering and removing handlers."""

    def test_subscribe_decorator_registers_handler(self, bus):
        @bus.subscribe(EventType.I18N_READY)
        def on_ready(event):
            return event

        assert bus.get_handlers(EventType.I18N_READY) == [on_ready]
        assert bus.get_handlers("i18n.ready") == [on_ready]

    def test_unsubscribe(self, bus):
        def handler(event):
            return None

        bus.add_handler(EventType.LOCALE_CHANGED, handler)
        assert bus.unsubscribe(EventType.LOCALE_CHANGED, handler) is True
        assert bus.get_handlers(EventType.LOCALE_CHANGED) == []
        assert bus.unsubscribe(EventType.LOCALE_CHANGED, handler) is False

    def test_registered_events_skip_empty(self, bus):
        def handler(event):
            return None

        bus.add_handler(EventType.FONTS_LOADED, handler)
        bus.add_handler(EventType.DIRECTION_CHANGED, handler)
        bus.unsubscribe(EventType.DIRECTION_CHANGED, handler)
        assert bus.get_registered_events() == ["fonts.loaded"]

    def test_clear(self, bus):
        bus.add_handler(EventType.I18N_READY, lambda e: None)
        bus.clear()
        assert bus.get_registered_events() == []


class TestPublish:
    """Tests for event delivery."""

    @pytest.mark.asyncio
    async def test_sync_and_async_handlers_in_order(self, bus):
        calls = []

        def first(event):
            calls.append("first")
            return 1

        async def second(event):
            calls.append("second")
            return 2

        bus.add_handler(EventType.I18N_READY, first)
        bus.add_handler(EventType.I18N_READY, second)

        results = await bus.publish(Event(EventType.I18N_READY))

        assert calls == ["first", "second"]
        assert results == [1, 2]

    @pytest.mark.asyncio
    async def test_wildcard_handlers_run_after_specific(self, bus):
        calls = []
        bus.add_handler(WILDCARD, lambda e: calls.append(("any", e.event_type)))
        bus.add_handler(EventType.LOCALE_CHANGED, lambda e: calls.append(("locale", e.event_type)))

        await bus.emit(EventType.LOCALE_CHANGED, locale="en")
        await bus.emit(EventType.FONTS_LOADED, locale="en")

        assert calls == [
            ("locale", "locale.changed"),
            ("any", "locale.changed"),
            ("any", "fonts.loaded"),
        ]

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_stop_others(self, bus):
        received = []

        async def broken(event):
            raise RuntimeError("boom")

        bus.add_handler(EventType.DIRECTION_CHANGED, broken)
        bus.add_handler(EventType.DIRECTION_CHANGED, received.append)

        results = await bus.emit(EventType.DIRECTION_CHANGED, direction="rtl")

        assert len(received) == 1
        assert received[0].get("direction") == "rtl"
        assert results == [None]

    @pytest.mark.asyncio
    async def test_emit_builds_event_with_metadata(self, bus):
        received = []
        bus.add_handler(EventType.LANGUAGE_CHANGED, received.append)

        await bus.emit(EventType.LANGUAGE_CHANGED, locale="ar", old_locale="pt-BR")

        event = received[0]
        assert isinstance(event, Event)
        assert event.event_type == "language.changed"
        assert event.metadata == {"locale": "ar", "old_locale": "pt-BR"}

    @pytest.mark.asyncio
    async def test_publish_without_handlers(self, bus):
        assert await bus.publish(Event(EventType.I18N_CHANGED)) == []
