# storefront/core/exceptions.py
"""
Custom exceptions for the application.

Services raise these; the handlers registered in main.py turn them into
the standard error envelope: {"success": false, "message": ..., "errors": [...]}.
"""
from typing import Optional, Dict, Any, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

from storefront.core.logging import log


class StoreError(Exception):
    """Base exception for all storefront errors."""
    status_code = 400

    def __init__(self, message: str, errors: Optional[List[str]] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors if errors is not None else [message]
        self.details = details or {}


class BusinessRuleError(StoreError):
    """A request that is well-formed but breaks a business rule (stock, uniqueness...)."""
    status_code = 400


class NotFoundError(StoreError):
    """Entity does not exist or is not visible to the caller."""
    status_code = 404

    def __init__(self, entity: str, message: Optional[str] = None):
        super().__init__(message or f"{entity} not found", details={"entity": entity})
        self.entity = entity


class AuthenticationError(StoreError):
    """Missing, expired or invalid credentials."""
    status_code = 401


class PermissionDeniedError(StoreError):
    """Authenticated but not allowed."""
    status_code = 403


class LLMError(StoreError):
    """LLM provider error."""
    status_code = 502

    def __init__(self, provider: str, message: str):
        super().__init__(
            f"LLM error ({provider}): {message}",
            details={"provider": provider}
        )
        self.provider = provider


class RateLimitError(LLMError):
    """Provider answered 429."""
    def __init__(self, provider: str):
        super().__init__(provider, "Rate limited (429)")


def error_body(message: str, errors: Optional[List[str]] = None) -> Dict[str, Any]:
    return {"success": False, "message": message, "data": None, "errors": errors or [message]}


async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.errors))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    messages = []
    for err in exc.errors():
        field_path = ".".join(str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path"))
        msg = err.get("msg", "Invalid value")
        # Pydantic prefixes messages raised from validators
        msg = msg.removeprefix("Value error, ")
        messages.append(f"{field_path}: {msg}" if field_path else msg)
    return JSONResponse(status_code=400, content=error_body("Validation failed", messages))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    log("ERROR", f"{request.method} {request.url.path} failed: {exc!r}")
    return JSONResponse(status_code=500, content=error_body("Internal server error"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
