"""Tests for cabra_i18n.switcher.capabilities."""

import pytest

from cabra_i18n.direction import DirectionManager
from cabra_i18n.fonts import FontLoader
from cabra_i18n.formatting import IntlFormatter
from cabra_i18n.i18n.models import Direction
from cabra_i18n.switcher import (
    Announcer,
    DirectionCapability,
    FontCapability,
    FormatterCapability,
    LiveRegionAnnouncer,
    LocaleWidget,
    NullAnnouncer,
    NullDirectionCapability,
    NullFontCapability,
    NullFormatterCapability,
    sign_language_widget,
)

pytestmark = pytest.mark.unit


class TestProtocols:
    def test_components_satisfy_protocols(self, context, stub_fetcher, document):
        assert isinstance(FontLoader(context, fetcher=stub_fetcher), FontCapability)
        assert isinstance(DirectionManager(context), DirectionCapability)
        assert isinstance(IntlFormatter("en"), FormatterCapability)
        assert isinstance(sign_language_widget(document), LocaleWidget)
        assert isinstance(LiveRegionAnnouncer(document), Announcer)

    def test_null_objects_satisfy_protocols(self):
        assert isinstance(NullFontCapability(), FontCapability)
        assert isinstance(NullDirectionCapability(), DirectionCapability)
        assert isinstance(NullFormatterCapability(), FormatterCapability)
        assert isinstance(NullAnnouncer(), Announcer)


class TestNullObjects:
    @pytest.mark.asyncio
    async def test_null_fonts_report_success(self):
        assert await NullFontCapability().load_fonts_for_locale("ar") is True

    @pytest.mark.asyncio
    async def test_null_direction_never_changes(self):
        direction = NullDirectionCapability()
        assert direction.get_direction("ar") == Direction.LTR
        assert await direction.set_direction(Direction.RTL) is False

    def test_null_formatter_and_announcer_do_nothing(self):
        assert NullFormatterCapability().set_locale("en") is None
        assert NullAnnouncer().announce("hi", "en") is None
