"""Structured logging configuration"""

import logging
import sys
import structlog
from pythonjsonlogger.json import JsonFormatter

from ..config import settings

SERVICE_NAME = "brewshare-backend"


def service_fields() -> dict:
    return {"service": SERVICE_NAME, "environment": settings.ENVIRONMENT}


def add_service_fields(logger, method_name: str, event_dict: dict) -> dict:
    """structlog processor stamping every event with the service identity"""
    for key, value in service_fields().items():
        event_dict.setdefault(key, value)
    return event_dict


def setup_logging(log_level: str = "INFO") -> None:
    """
    Configure structured logging with JSON output

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    level = getattr(logging, log_level.upper())

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            add_service_fields,
            structlog.processors.add_log_level,
            structlog.dev.set_exc_info,
            structlog.processors.format_exc_info,
            structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance (name is typically __name__)"""
    return structlog.get_logger(name)


def build_json_formatter() -> JsonFormatter:
    """Formatter giving stdlib records the same keys as structlog events"""
    return JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s",
        rename_fields={"asctime": "timestamp", "levelname": "level", "message": "event"},
        static_fields=service_fields(),
    )


def configure_uvicorn_logging() -> None:
    """Route uvicorn's access and error loggers through the JSON formatter"""

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(build_json_formatter())

    for name in ("uvicorn.access", "uvicorn.error"):
        logging.getLogger(name).handlers = [handler]
