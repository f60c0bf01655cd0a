"""Shared fixtures for cabra-i18n tests."""

import pytest

from cabra_i18n.document import HtmlDocument
from cabra_i18n.storage import InMemoryStorage
from tests.factories.i18n import (
    PAGE_MARKUP,
    StubStylesheetFetcher,
    StubTranslationLoader,
    make_context,
    make_settings,
)


@pytest.fixture
def settings():
    """Settings with default sections and a short font timeout."""
    return make_settings()


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def context(settings, storage):
    """I18nContext over the sample page, before locale detection."""
    return make_context(settings=settings, storage=storage)


@pytest.fixture
def document(context) -> HtmlDocument:
    return context.document


@pytest.fixture
def page_markup():
    return PAGE_MARKUP


@pytest.fixture
def stub_loader():
    """Loader serving the pt-BR, en and ar sample bundles."""
    return StubTranslationLoader()


@pytest.fixture
def stub_fetcher():
    """Stylesheet fetcher answering every configured web font."""
    return StubStylesheetFetcher()


@pytest.fixture
def recorded_events(context):
    """Collect every event published on the context bus."""
    events = []
    context.bus.add_handler("*", events.append)
    return events
