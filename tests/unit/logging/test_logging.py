"""Tests for cabra_i18n.logging."""

import pytest
import structlog

from cabra_i18n.logging import (
    bind_change_context,
    clear_change_context,
    get_change_id,
    get_logger,
    get_module_logger,
)

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def clean_context():
    clear_change_context()
    yield
    clear_change_context()


class TestLoggers:
    def test_module_logger_binds_component(self):
        logger = get_module_logger()
        context = structlog.get_context(logger)
        assert context["component"] == "test_logging"
        assert context["module_path"].endswith("tests.unit.logging.test_logging")

    def test_named_logger(self):
        logger = get_logger("fonts")
        assert structlog.get_context(logger)["logger_name"] == "fonts"


class TestChangeContext:
    def test_binds_and_unbinds_change_id(self):
        with bind_change_context(from_locale="pt-BR", to_locale="ar") as change_id:
            assert get_change_id() == change_id
            bound = structlog.contextvars.get_contextvars()
            assert bound["from_locale"] == "pt-BR"
            assert bound["to_locale"] == "ar"

        assert get_change_id() is None
        assert "from_locale" not in structlog.contextvars.get_contextvars()

    def test_explicit_change_id(self):
        with bind_change_context(change_id="abc") as change_id:
            assert change_id == "abc"

    def test_unbinds_on_error(self):
        with pytest.raises(RuntimeError):
            with bind_change_context():
                raise RuntimeError("boom")
        assert get_change_id() is None
