"""
Request logging middleware.

One ``request_completed`` event per request with status and duration,
tagged with a short request id that is echoed back as X-Request-ID.
"""
import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .structlog_config import redact_fields

logger = structlog.get_logger("directory.api.requests")

QUIET_PATHS = frozenset({"/", "/health", "/docs", "/redoc", "/openapi.json"})


def _log_method(status: int, duration_ms: float, slow_ms: float):
    if status >= 500:
        return logger.error, "request_completed"
    if duration_ms > slow_ms:
        return logger.warning, "slow_request"
    if status >= 400:
        return logger.warning, "request_completed"
    return logger.info, "request_completed"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Bind request context for downstream loggers and log the outcome."""

    SLOW_THRESHOLD_MS = 2000

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = uuid.uuid4().hex[:8]
        started = time.perf_counter()

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client=request.client.host if request.client else None,
        )

        try:
            response = await call_next(request)
        except Exception:
            logger.error("request_failed", duration_ms=self._elapsed(started), status=500)
            raise

        response.headers["X-Request-ID"] = request_id
        duration_ms = self._elapsed(started)

        fields = {"status": response.status_code, "duration_ms": duration_ms}
        if request.url.path not in QUIET_PATHS and request.query_params:
            fields["query_params"] = redact_fields(dict(request.query_params))

        log, event = _log_method(response.status_code, duration_ms, self.SLOW_THRESHOLD_MS)
        log(event, **fields)
        return response

    @staticmethod
    def _elapsed(started: float) -> float:
        return round((time.perf_counter() - started) * 1000, 1)
