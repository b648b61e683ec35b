"""
API key authentication middleware
"""

import hmac
import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-Key"


class ApiKeyMiddleware(BaseHTTPMiddleware):
    """
    Rejects requests under a protected path prefix unless the X-API-Key
    header matches the configured key.

    Rejected requests get 401 and never reach the route handler.
    """

    def __init__(self, app, api_key: str, protected_prefix: str = "/users"):
        super().__init__(app)
        self.api_key = api_key
        self.protected_prefix = protected_prefix

    def is_protected(self, path: str) -> bool:
        return path.startswith(self.protected_prefix)

    async def dispatch(self, request: Request, call_next):
        if not self.is_protected(request.url.path):
            return await call_next(request)

        provided = request.headers.get(API_KEY_HEADER)
        if not provided or not hmac.compare_digest(provided.encode(), self.api_key.encode()):
            logger.warning(f"Authentication failed: Invalid or missing API key for {request.method} {request.url.path}")
            return JSONResponse(status_code=401, content={"error": "Unauthorized"})

        logger.debug("Authentication successful")
        return await call_next(request)
