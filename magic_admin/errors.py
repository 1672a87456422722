"""
Error types for the Magic Admin SDK.

Every exception raised by the SDK derives from ``MagicError`` and carries a
stable ``code``, a human readable ``message`` and a ``details`` mapping.
"""

from typing import Dict, Any, Optional, Type
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Serializable view of an SDK error."""

    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class MagicError(Exception):
    """Base exception for the Magic Admin SDK."""

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


class ConfigurationError(MagicError):
    """Missing or invalid SDK configuration."""

    def __init__(self, message: str = "Invalid configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)


class DIDTokenError(MagicError):
    """Base class for DID token problems."""


class DIDTokenMalformed(DIDTokenError):
    """The DID token could not be decoded or is missing required fields."""

    def __init__(self, message: str = "DID token is malformed", details: Optional[Dict[str, Any]] = None):
        super().__init__("DID_TOKEN_MALFORMED", message, details)


class DIDTokenInvalid(DIDTokenError):
    """The DID token is well formed but failed validation."""

    def __init__(self, message: str = "DID token is invalid", details: Optional[Dict[str, Any]] = None,
                 code: str = "DID_TOKEN_INVALID"):
        super().__init__(code, message, details)


class DIDTokenExpired(DIDTokenInvalid):
    """The DID token is past its expiration time."""

    def __init__(self, message: str = "DID token has expired", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details, code="DID_TOKEN_EXPIRED")


class RequestError(MagicError):
    """Base class for errors talking to the Magic API."""

    code = "REQUEST_ERROR"

    def __init__(self,
                 message: str = "Request to Magic API failed",
                 http_status: Optional[int] = None,
                 http_code: Optional[str] = None,
                 http_message: Optional[str] = None,
                 http_request_params: Optional[Dict[str, Any]] = None,
                 http_request_data: Optional[Dict[str, Any]] = None):
        self.http_status = http_status
        self.http_code = http_code
        self.http_message = http_message
        self.http_request_params = http_request_params
        self.http_request_data = http_request_data
        details = {
            "http_status": http_status,
            "http_code": http_code,
            "http_message": http_message,
            "http_request_params": http_request_params,
            "http_request_data": http_request_data,
        }
        super().__init__(self.code, message, {k: v for k, v in details.items() if v is not None})


class RateLimitingError(RequestError):
    """HTTP 429 from the Magic API."""
    code = "RATE_LIMITING_ERROR"


class BadRequestError(RequestError):
    """HTTP 400 from the Magic API."""
    code = "BAD_REQUEST_ERROR"


class AuthenticationError(RequestError):
    """HTTP 401 from the Magic API, usually a wrong secret key."""
    code = "AUTHENTICATION_ERROR"


class ForbiddenError(RequestError):
    """HTTP 403 from the Magic API."""
    code = "FORBIDDEN_ERROR"


class APIError(RequestError):
    """Any other unexpected response from the Magic API."""
    code = "API_ERROR"


class APIConnectionError(RequestError):
    """The Magic API could not be reached after all retries."""
    code = "API_CONNECTION_ERROR"


STATUS_ERRORS = {
    400: BadRequestError,
    401: AuthenticationError,
    403: ForbiddenError,
    429: RateLimitingError,
}


def error_for_status(status_code: int) -> Type[RequestError]:
    """Return the ``RequestError`` subclass for an HTTP status code."""
    return STATUS_ERRORS.get(status_code, APIError)
