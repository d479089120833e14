"""Request logging middleware.

Logs every HTTP request with method, path, status code and latency.
5xx responses are logged as warnings, everything else as info. The
response is passed through untouched; an unhandled exception is logged
as a 500 and re-raised.

Log format:
    INFO [POST] /api/users → 200 (23ms)
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("app.request")


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        try:
            response: Response = await call_next(request)
        except Exception:
            # The app's catch-all handler answers 500 outside this middleware
            self._log(request, 500, start)
            raise
        self._log(request, response.status_code, start)
        return response

    @staticmethod
    def _log(request: Request, status: int, start: float) -> None:
        elapsed_ms = (time.perf_counter() - start) * 1000
        level = logging.WARNING if status >= 500 else logging.INFO
        logger.log(
            level,
            "[%s] %s → %d (%.0fms)",
            request.method,
            request.url.path,
            status,
            elapsed_ms,
            extra={
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(elapsed_ms, 1),
            },
        )
