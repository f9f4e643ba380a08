# ecocatalog/core/exceptions.py

from enum import Enum
from typing import Optional, Dict, Any
import logging
from fastapi import status

logger = logging.getLogger(__name__)


class ErrorCode(Enum):
    """Standardized error codes for the application."""

    # Client errors
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"

    # System errors
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


ERROR_STATUS_CODES = {
    ErrorCode.INVALID_ARGUMENT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.STORAGE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.INTERNAL_SERVER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class EcoCatalogError(Exception):
    """Base exception for all EcoCatalog application errors."""

    def __init__(
        self,
        code: ErrorCode,
        user_message: str,
        technical_details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        self.code = code
        self.user_message = user_message
        self.technical_details = technical_details
        self.context = context or {}

        logger.debug(
            f"EcoCatalog Error: {code.value}",
            extra={
                "error_code": code.value,
                "user_message": user_message,
                "technical_details": technical_details,
                "context": self.context
            }
        )

        super().__init__(self.user_message)

    @property
    def status_code(self) -> int:
        return ERROR_STATUS_CODES.get(self.code, status.HTTP_400_BAD_REQUEST)

    def to_response(self) -> Dict[str, Any]:
        """Convert to API response format."""
        response = {
            "error": {
                "code": self.code.value,
                "message": self.user_message,
            }
        }

        if self.context:
            response["error"]["context"] = self.context

        return response


class InvalidArgumentError(EcoCatalogError):
    """A filter, query parameter or body field is missing or malformed."""

    def __init__(self, parameter_name: str, parameter_value: Any, expected_format: str):
        super().__init__(
            code=ErrorCode.INVALID_ARGUMENT,
            user_message=f"Invalid value for '{parameter_name}': {parameter_value!r}. Expected: {expected_format}",
            context={
                "parameter_name": parameter_name,
                "parameter_value": None if parameter_value is None else str(parameter_value),
                "expected_format": expected_format
            }
        )


class NotFoundError(EcoCatalogError):
    """A referenced product or user does not exist."""

    def __init__(self, resource: str, resource_id: Any = None):
        context = {"resource": resource}
        if resource_id is not None:
            context["id"] = str(resource_id)
        super().__init__(
            code=ErrorCode.NOT_FOUND,
            user_message=f"{resource} not found",
            context=context
        )


class UnauthorizedError(EcoCatalogError):
    """Identity is missing, invalid or the credentials do not match."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(code=ErrorCode.UNAUTHORIZED, user_message=message)


class ConflictError(EcoCatalogError):
    """A unique identity (e.g. an e-mail address) is already taken."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(code=ErrorCode.CONFLICT, user_message=message, context=context)


class StorageUnavailableError(EcoCatalogError):
    """The database could not be reached or the query failed.

    The driver message is kept in ``technical_details`` for the server log and
    never copied into the response body.
    """

    def __init__(self, operation: str, error: Optional[Exception] = None):
        super().__init__(
            code=ErrorCode.STORAGE_UNAVAILABLE,
            user_message="The service is temporarily unavailable. Please try again later.",
            technical_details=f"{operation}: {type(error).__name__}: {error}" if error else operation
        )


# Convenience functions for common errors
def raise_invalid_parameter(parameter_name: str, value: Any, expected_format: str):
    """Raise a parameter validation error."""
    raise InvalidArgumentError(parameter_name, value, expected_format)
