from __future__ import annotations

import logging
import time
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

_log = logging.getLogger("uvicorn.error")


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable):
        start = time.perf_counter()  # monotonic for durations
        response = None
        try:
            response = await call_next(request)
            return response
        finally:
            dur_ms = int((time.perf_counter() - start) * 1000)
            status = getattr(response, "status_code", 500)
            _log.info(
                "method=%s path=%s status=%s dur_ms=%s",
                request.method,
                request.url.path,
                status,
                dur_ms,
            )
