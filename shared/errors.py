"""
Shared error handling for the Casbin Redis adapter.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = {}


class AccessLayerException(Exception):
    """Base exception for adapter errors."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class ValidationError(AccessLayerException):
    """Validation-related errors."""

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("VALIDATION_ERROR", message, details)


class ExternalServiceError(AccessLayerException):
    """External service errors."""

    def __init__(self, service: str, message: str = "External service error", details: Optional[Dict[str, Any]] = None):
        super().__init__("EXTERNAL_SERVICE_ERROR", f"{service}: {message}", details)


class StoreError(ExternalServiceError):
    """A backing store command failed."""

    def __init__(self, message: str = "Store command failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("redis", message, details)
        self.code = "STORE_ERROR"


class StoreConnectionError(StoreError):
    """The backing store could not be reached or refused our credentials."""

    def __init__(self, message: str = "Store connection failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.code = "STORE_CONNECTION_ERROR"


class RecordDecodeError(AccessLayerException):
    """A stored record does not have the expected shape."""

    def __init__(self, message: str = "Malformed stored record", details: Optional[Dict[str, Any]] = None):
        super().__init__("RECORD_DECODE_ERROR", message, details)
