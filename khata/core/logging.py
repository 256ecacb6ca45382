"""
Structured logging for the ledger API.

structlog renders both its own events and stdlib records (uvicorn, SQLAlchemy)
through one ``ProcessorFormatter``: colored console output in development,
one JSON object per line in production. Each record carries the request id
assigned by ``asgi-correlation-id`` when one is active.
"""

import logging
import sys
from typing import Any, List

import structlog
from asgi_correlation_id import correlation_id

from khata.config import get_settings

HANDLER_MARKER = "_khata_handler"


def add_correlation_id(logger, method_name, event_dict):
    request_id = correlation_id.get()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def _shared_processors() -> List[Any]:
    return [
        add_correlation_id,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(json_output: bool):
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def configure_logging() -> None:
    """Configure structlog and route the root logger through it.

    Safe to call more than once; the previously installed handler is replaced.
    """
    settings = get_settings()
    json_output = settings.ENVIRONMENT == "production"
    shared = _shared_processors()

    tail = [structlog.processors.format_exc_info] if json_output else []
    structlog.configure(
        processors=shared + tail + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(json_output),
        ],
    ))
    setattr(handler, HANDLER_MARKER, True)

    root_logger = logging.getLogger()
    root_logger.handlers = [h for h in root_logger.handlers if not getattr(h, HANDLER_MARKER, False)]
    root_logger.addHandler(handler)
    root_logger.setLevel(settings.LOG_LEVEL.upper())

    # RequestLoggingMiddleware already records every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    if not settings.DATABASE_ECHO:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
