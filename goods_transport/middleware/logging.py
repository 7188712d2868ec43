import time
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from goods_transport.core.request_context import HDR_REQUEST_ID, get_request_context

logger = logging.getLogger("access")


class LoggingMiddleware(BaseHTTPMiddleware):
    """One access-log line per request, tagged with its request id"""

    async def dispatch(self, request: Request, call_next):
        ctx = get_request_context(request)
        started = time.perf_counter()

        response = await call_next(request)

        elapsed = time.perf_counter() - started
        logger.info(f"{ctx.describe()} -> {response.status_code} in {elapsed:.4f}s")

        response.headers[HDR_REQUEST_ID] = ctx.request_id
        response.headers["X-Process-Time"] = f"{elapsed:.6f}"
        return response
