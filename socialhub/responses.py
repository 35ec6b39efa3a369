"""
SocialHub API Response Utilities
Standardized response envelope and error handling
"""
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Any, Dict, Optional

from .logging_config import api_logger


# ============================================================
# SUCCESS RESPONSES
# ============================================================

def success(data: Any = None, message: str = None) -> Dict:
    """Create success envelope"""
    response = {"success": True}

    if data is not None:
        response["data"] = data

    if message:
        response["message"] = message

    return response


def created(data: Any, message: str = "Created successfully") -> Dict:
    return success(data, message)


def updated(data: Any = None, message: str = "Updated successfully") -> Dict:
    return success(data, message)


def deleted(message: str = "Deleted successfully") -> Dict:
    return success(message=message)


def failure(status_code: int, error: str, message: Optional[str] = None, headers: Optional[Dict] = None) -> JSONResponse:
    """Create failure envelope"""
    content = {"success": False, "error": error}
    if message:
        content["message"] = message
    return JSONResponse(status_code=status_code, content=content, headers=headers)


# ============================================================
# ERROR RESPONSES
# ============================================================

class ApiException(Exception):
    """API error carrying the status code and message for the failure envelope"""

    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: str = None,
        headers: Dict = None,
    ):
        self.status_code = status_code
        self.message = message
        self.error_code = error_code or f"ERR_{status_code}"
        self.headers = headers
        super().__init__(message)


def bad_request(message: str, code: str = "BAD_REQUEST"):
    raise ApiException(400, message, code)

def unauthenticated(message: str = "Authentication required"):
    raise ApiException(401, message, "UNAUTHENTICATED", {"WWW-Authenticate": "Bearer"})

def forbidden(message: str = "Unauthorized"):
    raise ApiException(403, message, "FORBIDDEN")

def not_found(resource: str = "Resource"):
    raise ApiException(404, f"{resource} not found", "NOT_FOUND")

def conflict(message: str = "Resource conflict"):
    raise ApiException(409, message, "CONFLICT")

def server_error(message: str = "Internal server error"):
    raise ApiException(500, message, "INTERNAL_ERROR")

def upstream_error(message: str = "Upstream service failed"):
    raise ApiException(502, message, "UPSTREAM_ERROR")


# ============================================================
# EXCEPTION HANDLERS
# ============================================================

async def api_exception_handler(request: Request, exc: ApiException) -> JSONResponse:
    log = api_logger.error if exc.status_code >= 500 else api_logger.warning
    log(
        f"API Error: {exc.message}",
        status_code=exc.status_code,
        error_code=exc.error_code,
        path=request.url.path,
    )
    return failure(exc.status_code, exc.message, headers=exc.headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    api_logger.warning(
        f"HTTP Error: {exc.detail}",
        status_code=exc.status_code,
        path=request.url.path,
    )
    return failure(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


def _validation_message(exc: RequestValidationError) -> str:
    messages = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path"))
        msg = err.get("msg", "Invalid value")
        if err.get("type") == "value_error":
            messages.append(msg.replace("Value error, ", "", 1))
        elif field:
            messages.append(f"{field}: {msg}")
        else:
            messages.append(msg)
    return "; ".join(messages) or "Invalid request"


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = _validation_message(exc)
    api_logger.warning(f"Validation Error: {message}", status_code=400, path=request.url.path)
    return failure(400, message)


async def rate_limit_exception_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    api_logger.warning("Rate limit exceeded", limit=str(exc.detail), path=request.url.path)
    return failure(429, "Too many requests", message=f"Rate limit exceeded: {exc.detail}")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    api_logger.error(
        f"Unexpected error: {exc}",
        error=exc,
        path=request.url.path,
    )
    return failure(500, "Internal server error")


def register_exception_handlers(app) -> None:
    """Route every failure through the envelope."""
    app.add_exception_handler(ApiException, api_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


# ============================================================
# VALIDATION HELPERS
# ============================================================

def require(value: Any, field_name: str):
    """Require a field to be present"""
    if value is None or (isinstance(value, str) and not value.strip()):
        bad_request(f"{field_name} is required", "VALIDATION_ERROR")
    return value
