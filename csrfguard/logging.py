"""
Structured logging configuration using structlog.

Standardized log format:
{
    "ts": "2026-10-19T04:30:00.123456Z",
    "level": "warning",
    "service": "csrfguard",
    "correlation_id": "uuid-v4",
    "event": "csrf.rejected",
    "module": "csrfguard.middleware.csrf",
    "function": "dispatch",
    "line": 42,
    ...additional context...
}

Token values, raw values and configured secrets are never passed to the logger.
"""
import structlog
import logging
from typing import Any

SERVICE_NAME = "csrfguard"


def add_service_name(service_name: str):
    """Build a processor that stamps the service name on every entry."""

    def processor(logger: Any, method_name: str, event_dict: dict) -> dict:
        event_dict["service"] = service_name
        return event_dict

    return processor


def add_module_info(logger: Any, method_name: str, event_dict: dict) -> dict:
    """Add module, function, and line number to log entries."""
    frame = structlog._frames._find_first_app_frame_and_name([__name__])[0]
    if frame:
        event_dict["module"] = frame.f_globals.get("__name__", "unknown")
        event_dict["function"] = frame.f_code.co_name
        event_dict["line"] = frame.f_lineno
    return event_dict


def setup_logging(json_output: bool = True, service_name: str = SERVICE_NAME):
    """
    Configure structured logging with standardized fields.

    Args:
        json_output: If True, output JSON logs. If False, use console format.
        service_name: Name of the service (for multi-service deployments).
    """
    shared_processors = [
        # Includes correlation_id bound by the correlation middleware
        structlog.contextvars.merge_contextvars,
        add_service_name(service_name),
        structlog.processors.TimeStamper(fmt="iso", key="ts"),
        structlog.processors.add_log_level,
        add_module_info,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        processors = shared_processors + [structlog.processors.JSONRenderer()]
    else:
        processors = shared_processors + [structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=logging.INFO,
    )

    # Silence uvicorn's default logging to avoid duplicate logs
    logging.getLogger("uvicorn.error").handlers = []
    logging.getLogger("uvicorn.access").handlers = []


def get_logger():
    """Get a configured structlog logger."""
    return structlog.get_logger()
