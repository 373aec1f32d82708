"""Tests for structured logging."""
import structlog

from meshcoord.config import Settings
from meshcoord.main import create_app
from meshcoord.logging import add_module_info, service_name_adder


def test_service_name_is_stamped():
    processor = service_name_adder("edge-1")
    assert processor(None, "info", {"event": "x"}) == {"event": "x", "service": "edge-1"}


def test_module_info_points_at_the_caller():
    def caller():
        return add_module_info(None, "info", {"event": "x"})

    entry = caller()
    assert entry["module"] == __name__
    assert entry["function"] == "caller"
    assert isinstance(entry["line"], int)


def test_create_app_applies_logging_settings():
    create_app(settings=Settings(LOG_JSON=False, LOG_LEVEL="WARNING"))
    assert isinstance(structlog.get_config()["processors"][-1], structlog.dev.ConsoleRenderer)

    create_app(settings=Settings(LOG_JSON=True))
    assert isinstance(structlog.get_config()["processors"][-1], structlog.processors.JSONRenderer)
