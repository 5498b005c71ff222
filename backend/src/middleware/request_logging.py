"""Request logging middleware: tags each request with an id and logs its outcome."""
import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from src.monitoring.metrics import record_request

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
REQUEST_ID_MAX_LEN = 64


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else ""


def _request_id(request: Request) -> str:
    incoming = (request.headers.get(REQUEST_ID_HEADER) or "").strip()
    if incoming and len(incoming) <= REQUEST_ID_MAX_LEN and incoming.isprintable():
        return incoming
    return uuid.uuid4().hex


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Reuse the caller's X-Request-ID (or mint one), expose it as request.state.request_id
    and echo it on the response. Errors escaping the app are counted as 5xx before re-raising.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = _request_id(request)
        request.state.request_id = request_id
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            record_request(500)
            logger.exception(
                "request_failed request_id=%s method=%s path=%s",
                request_id,
                request.method,
                request.url.path,
            )
            raise
        duration_ms = (time.perf_counter() - start) * 1000
        record_request(response.status_code)
        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "request request_id=%s %s %s -> %s in %.1fms client=%s",
            request_id,
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            _client_ip(request),
        )
        return response
