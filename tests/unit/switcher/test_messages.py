"""Tests for cabra_i18n.switcher.messages."""

import pytest

from cabra_i18n.i18n import SUPPORTED_LOCALES
from cabra_i18n.switcher.messages import (
    CHANGE_ANNOUNCEMENTS,
    ERROR_ANNOUNCEMENTS,
    change_announcement,
    error_announcement,
)

pytestmark = pytest.mark.unit


class TestMessages:
    def test_every_supported_locale_has_messages(self):
        for locale in SUPPORTED_LOCALES:
            assert locale in CHANGE_ANNOUNCEMENTS
            assert locale in ERROR_ANNOUNCEMENTS

    def test_change_announcement_in_target_language(self):
        assert change_announcement("ar") == "تم تغيير اللغة إلى العربية"
        assert change_announcement("en") == "Language changed to English"

    def test_unknown_locale_uses_english(self):
        assert change_announcement("xx") == CHANGE_ANNOUNCEMENTS["en"]
        assert error_announcement("xx") == ERROR_ANNOUNCEMENTS["en"]
