"""
Access logging middleware
"""

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and elapsed time for every request and tags it with a trace id"""

    async def dispatch(self, request: Request, call_next):
        trace_id = str(uuid.uuid4())[:8]
        request.state.trace_id = trace_id

        logger.info(f"[{request.method}] - {request.url.path}")
        start_time = time.perf_counter()

        response = await call_next(request)

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.info(f"=> Response status: {response.status_code} ({elapsed_ms:.0f}ms)")

        # Add trace ID to response headers for client-side debugging
        response.headers["X-Trace-ID"] = trace_id
        return response
