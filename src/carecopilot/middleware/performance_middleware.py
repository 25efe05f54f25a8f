"""
Request latency middleware: X-Process-Time header, access log line and HTTP metrics.
"""
import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from ..observability import record_http_request

logger = logging.getLogger(__name__)

# A full visit pipeline run is three LLM calls, so only flag requests well past that.
SLOW_REQUEST_SECONDS = 20.0

QUIET_PATH_PREFIXES = ("/health",)


class PerformanceMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        latency_ms = round(elapsed * 1000, 2)

        path = request.url.path
        response.headers["X-Process-Time"] = str(latency_ms)
        record_http_request(request.method, path, response.status_code, latency_ms)

        if path.startswith(QUIET_PATH_PREFIXES):
            return response

        request_id = getattr(request.state, "request_id", "unknown")
        if elapsed > SLOW_REQUEST_SECONDS:
            logger.warning(
                f"SLOW_REQUEST: method={request.method} path={path} "
                f"status={response.status_code} latency={latency_ms}ms request_id={request_id}"
            )
        else:
            logger.info(
                f"PERFORMANCE: method={request.method} path={path} "
                f"status={response.status_code} latency={latency_ms}ms request_id={request_id}"
            )
        return response
