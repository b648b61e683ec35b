"""
Centralized Error Handling and Logging System
Translates intentional request errors, driver failures and unexpected
exceptions into JSON responses, logging the details server-side only.
"""

import json
import logging
import traceback
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

import asyncpg
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestError(Exception):
    """Intentional error carrying the HTTP status to respond with"""

    def __init__(self, status_code: int, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details


class ErrorHandlingConfig:
    """Centralized configuration for error handling behavior"""

    SENSITIVE_FIELD_PATTERNS = [
        'password', 'token', 'key', 'secret', 'authorization', 'cookie'
    ]

    @classmethod
    def is_sensitive_field(cls, field_name: str) -> bool:
        field_lower = field_name.lower()
        return any(pattern in field_lower for pattern in cls.SENSITIVE_FIELD_PATTERNS)

    @classmethod
    def sanitize_data(cls, data: Union[Dict, list, Any]) -> Any:
        """Recursively redact sensitive values before they reach the logs"""
        if isinstance(data, dict):
            return {
                key: "***REDACTED***" if cls.is_sensitive_field(key) else cls.sanitize_data(value)
                for key, value in data.items()
            }
        elif isinstance(data, list):
            return [cls.sanitize_data(item) for item in data]
        return data


class StructuredLogger:
    """Structured error logging with request context"""

    @staticmethod
    def log_error(
        error_type: str,
        message: str,
        request: Optional[Request] = None,
        exception: Optional[BaseException] = None,
        extra_context: Optional[Dict] = None,
        include_traceback: bool = True
    ) -> None:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "error_type": error_type,
            "message": message,
        }

        if request is not None:
            log_entry["trace_id"] = getattr(request.state, "trace_id", None)
            log_entry["request"] = {
                "method": request.method,
                "path": request.url.path,
                "query_params": dict(request.query_params),
                "headers": ErrorHandlingConfig.sanitize_data(dict(request.headers)),
                "client_ip": request.client.host if request.client else None,
            }

        if exception is not None:
            log_entry["exception"] = {
                "type": type(exception).__name__,
                "details": str(exception),
            }
            if include_traceback:
                log_entry["exception"]["traceback"] = "".join(
                    traceback.format_exception(type(exception), exception, exception.__traceback__)
                )

        if extra_context:
            log_entry["context"] = ErrorHandlingConfig.sanitize_data(extra_context)

        logger.error(json.dumps(log_entry, indent=2, default=str))


def error_tree(errors) -> Dict[str, Any]:
    """
    Nest pydantic error entries by location.

    Returns {"errors": [...], "properties": {field: {"errors": [...]}}}, with
    list positions under "items" keyed by index.
    """
    tree: Dict[str, Any] = {"errors": []}
    for error in errors:
        node = tree
        for part in error.get("loc", ()):
            if part in ("body", "query", "path"):
                continue
            branch = "items" if isinstance(part, int) else "properties"
            node = node.setdefault(branch, {}).setdefault(str(part), {"errors": []})
        node["errors"].append(error.get("msg", "Invalid value"))
    return tree


def error_response(status_code: int, message: str, details: Optional[Dict[str, Any]] = None) -> JSONResponse:
    content: Dict[str, Any] = {"error": message}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


def internal_error_response(request: Request, exc: BaseException) -> JSONResponse:
    StructuredLogger.log_error(
        "internal_server_error",
        f"Unhandled exception: {exc}",
        request=request,
        exception=exc,
    )
    return error_response(500, "Internal Server Error")


class ErrorTranslationMiddleware(BaseHTTPMiddleware):
    """Turns any exception the exception handlers did not claim into a 500 response"""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return internal_error_response(request, exc)


# Exception handlers
async def request_error_handler(request: Request, exc: RequestError) -> JSONResponse:
    """Handle intentional status-carrying errors"""
    if exc.status_code >= 500:
        StructuredLogger.log_error(f"http_{exc.status_code}", exc.message, request=request, exception=exc)
    else:
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return error_response(exc.status_code, exc.message, exc.details)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle router-level HTTP errors (404 unknown route, 405 wrong method)"""
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
    response = error_response(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle FastAPI's own request validation errors with the same field tree as validate()"""
    details = error_tree(exc.errors())
    logger.warning(f"Request validation failed for {request.method} {request.url.path}: {details}")
    return error_response(400, "Request Validation Failed", details)


async def database_exception_handler(request: Request, exc: asyncpg.PostgresError) -> JSONResponse:
    """Driver errors: log sqlstate and message, expose only a generic message"""
    StructuredLogger.log_error(
        "database_error",
        "Database operation failed",
        request=request,
        exception=exc,
        extra_context={"code": getattr(exc, "sqlstate", None), "message": str(exc)},
        include_traceback=False
    )
    return error_response(500, "Database operation failed")


def setup_error_handling(app):
    """Setup error handling for FastAPI app"""

    app.add_middleware(ErrorTranslationMiddleware)

    app.add_exception_handler(RequestError, request_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(asyncpg.PostgresError, database_exception_handler)

    logger.info("Centralized error handling initialized")
