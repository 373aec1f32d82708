"""
Structured logging configuration using structlog.

Standardized log format:
{
    "ts": "2026-10-18T04:30:00.123456Z",
    "level": "info",
    "service": "meshcoord",
    "correlation_id": "uuid-v4",
    "event": "event.logged",
    "module": "meshcoord.stores.event_log",
    "function": "add_event",
    "line": 42,
    ...additional context...
}
"""
import structlog
import logging
from typing import Any, Callable


def service_name_adder(service_name: str) -> Callable[[Any, str, dict], dict]:
    """Build a processor that stamps the service name on every entry."""

    def add_service_name(logger: Any, method_name: str, event_dict: dict) -> dict:
        event_dict["service"] = service_name
        return event_dict

    return add_service_name


def add_module_info(logger: Any, method_name: str, event_dict: dict) -> dict:
    """Add module, function, and line number to log entries."""
    frame, _ = structlog._frames._find_first_app_frame_and_name([__name__])
    if frame:
        event_dict["module"] = frame.f_globals.get("__name__", "unknown")
        event_dict["function"] = frame.f_code.co_name
        event_dict["line"] = frame.f_lineno
    return event_dict


def setup_logging(
    json_output: bool = True,
    service_name: str = "meshcoord",
    level: str = "INFO",
):
    """
    Configure structured logging with standardized fields.

    Args:
        json_output: If True, output JSON logs. If False, use console format.
        service_name: Name of the service (for multi-instance deployments).
        level: Minimum level name to emit.
    """
    log_level = logging.getLevelName(level.upper())

    shared_processors = [
        # Includes correlation_id bound by the middleware
        structlog.contextvars.merge_contextvars,
        service_name_adder(service_name),
        structlog.processors.TimeStamper(fmt="iso", key="ts"),
        structlog.processors.add_log_level,
        add_module_info,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        processors = shared_processors + [
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        # Each app reconfigures logging, so bound loggers must not be cached
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(message)s",
        level=log_level,
    )

    # Silence uvicorn's default logging to avoid duplicate logs
    logging.getLogger("uvicorn.error").handlers = []
    logging.getLogger("uvicorn.access").handlers = []


def get_logger():
    """Get a configured structlog logger."""
    return structlog.get_logger()
