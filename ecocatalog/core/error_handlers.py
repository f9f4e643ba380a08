# ecocatalog/core/error_handlers.py

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import SQLAlchemyError
import logging
import traceback
import uuid

from .exceptions import EcoCatalogError, StorageUnavailableError, ErrorCode

logger = logging.getLogger(__name__)


def setup_error_handlers(app: FastAPI):
    """Set up global error handlers for the FastAPI application."""

    @app.exception_handler(EcoCatalogError)
    async def ecocatalog_error_handler(request: Request, exc: EcoCatalogError):
        """Handle custom EcoCatalog errors."""
        extra = {
            "error_code": exc.code.value,
            "user_message": exc.user_message,
            "technical_details": exc.technical_details,
            "context": exc.context,
            "request_url": str(request.url),
            "request_method": request.method,
            "client_ip": request.client.host if request.client else None
        }

        if exc.status_code >= 500:
            logger.error(f"EcoCatalog Error: {exc.code.value} ({exc.technical_details})", extra=extra)
        else:
            logger.warning(f"EcoCatalog Error: {exc.code.value}", extra=extra)

        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_response()
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Report malformed query parameters and bodies as INVALID_ARGUMENT."""

        errors = []
        for error in exc.errors():
            field_path = " -> ".join(str(loc) for loc in error["loc"])
            errors.append({
                "field": field_path,
                "message": error["msg"],
                "type": error["type"],
                "input": error.get("input")
            })

        logger.warning(
            "Validation error",
            extra={
                "validation_errors": errors,
                "request_url": str(request.url),
                "request_method": request.method
            }
        )

        return JSONResponse(
            status_code=400,
            content=jsonable_encoder({
                "error": {
                    "code": ErrorCode.INVALID_ARGUMENT.value,
                    "message": "Request validation failed",
                    "details": errors
                }
            })
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle standard HTTP exceptions with consistent format."""

        logger.warning(
            f"HTTP Exception: {exc.status_code}",
            extra={
                "status_code": exc.status_code,
                "detail": exc.detail,
                "request_url": str(request.url),
                "request_method": request.method
            }
        )

        code = ErrorCode.UNAUTHORIZED.value if exc.status_code == 401 else f"HTTP_{exc.status_code}"
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": {
                    "code": code,
                    "message": exc.detail,
                    "status_code": exc.status_code
                }
            },
            headers=exc.headers
        )

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError):
        """Database failures that escaped the service layer."""
        wrapped = StorageUnavailableError("unhandled query", exc)
        logger.error(
            f"Storage error: {type(exc).__name__}: {str(exc)}",
            extra={
                "request_url": str(request.url),
                "request_method": request.method,
                "traceback": traceback.format_exc()
            }
        )
        return JSONResponse(
            status_code=wrapped.status_code,
            content=wrapped.to_response()
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle all other exceptions with proper logging."""

        logger.error(
            f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
            extra={
                "exception_type": type(exc).__name__,
                "exception_message": str(exc),
                "request_url": str(request.url),
                "request_method": request.method,
                "traceback": traceback.format_exc()
            }
        )

        # Don't expose internal details
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": ErrorCode.INTERNAL_SERVER_ERROR.value,
                    "message": "An internal server error occurred. Please try again later."
                }
            }
        )


# Middleware for request ID tracking
async def add_request_id_middleware(request: Request, call_next):
    """Add request ID for better error tracking."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response
