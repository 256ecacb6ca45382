"""
HTTP middleware: request id, request/response logging and CORS.
"""

import time
from typing import Callable

import structlog
from asgi_correlation_id import CorrelationIdMiddleware
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from khata.config import get_settings

logger = structlog.get_logger(__name__)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request on the way in and its status and latency on the way out."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        started = time.perf_counter()
        route = {"method": request.method, "path": request.url.path}
        logger.info("Request started", client_ip=request.client.host if request.client else "unknown", **route)

        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Request failed", process_time_ms=_elapsed_ms(started), **route)
            raise

        log = logger.error if response.status_code >= 500 else logger.info
        log(
            "Request completed",
            status_code=response.status_code,
            process_time_ms=_elapsed_ms(started),
            **route,
        )
        return response


def setup_middleware(app: FastAPI) -> None:
    """Install middleware. Starlette runs the last one added outermost."""
    settings = get_settings()

    app.add_middleware(RequestLoggingMiddleware)
    # Wraps the request logger so the id is already set when it logs
    app.add_middleware(
        CorrelationIdMiddleware,
        header_name="X-Request-ID",
        update_request_header=True,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
    )
