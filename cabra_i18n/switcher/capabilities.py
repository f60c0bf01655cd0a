"""Collaborator interfaces of the language switcher.

The switcher holds a typed reference for each optional collaborator. When a
page does not use one (no web fonts, no formatter...), a null object with
the same interface takes its place, so the change sequence never has to
check whether a component exists.
"""

from typing import Any, Protocol, Union, runtime_checkable

from cabra_i18n.i18n.models import Direction


@runtime_checkable
class FontCapability(Protocol):
    """Loads a locale's fonts and applies its font stack."""

    async def load_fonts_for_locale(self, locale: str) -> Any:  # pragma: no cover - typing helper
        ...


@runtime_checkable
class DirectionCapability(Protocol):
    """Applies a layout direction to the page."""

    def get_direction(self, locale: str) -> Direction:  # pragma: no cover - typing helper
        ...

    async def set_direction(
        self, direction: Union[Direction, str], force: bool = False
    ) -> bool:  # pragma: no cover - typing helper
        ...


@runtime_checkable
class FormatterCapability(Protocol):
    """Anything whose output depends on the active locale."""

    def set_locale(self, locale: str) -> None:  # pragma: no cover - typing helper
        ...


@runtime_checkable
class LocaleWidget(Protocol):
    """Page widget shown or configured per locale."""

    def update(self, locale: str) -> None:  # pragma: no cover - typing helper
        ...


@runtime_checkable
class Announcer(Protocol):
    """Reads messages out to assistive technology."""

    def announce(self, message: str, locale: str) -> None:  # pragma: no cover - typing helper
        ...


class NullFontCapability:
    async def load_fonts_for_locale(self, locale: str) -> bool:
        return True


class NullDirectionCapability:
    def get_direction(self, locale: str) -> Direction:
        return Direction.LTR

    async def set_direction(self, direction: Union[Direction, str], force: bool = False) -> bool:
        return False


class NullFormatterCapability:
    def set_locale(self, locale: str) -> None:
        return None


class NullAnnouncer:
    def announce(self, message: str, locale: str) -> None:
        return None
