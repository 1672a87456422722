"""
Magic Admin SDK.

Server-side helpers for the Magic identity API:

- client: the ``Magic`` entry point wiring everything together
- config: settings resolved from arguments, environment and defaults
- validation: local DID token decoding and validation
- resources: Magic API resources (users)
- http: authenticated HTTP client with retries
- errors: exception taxonomy
- logging: structlog configuration
"""

from magic_admin.client import Magic
from magic_admin.config import MagicSettings, resolve_settings
from magic_admin.errors import (
    APIConnectionError,
    APIError,
    AuthenticationError,
    BadRequestError,
    ConfigurationError,
    DIDTokenError,
    DIDTokenExpired,
    DIDTokenInvalid,
    DIDTokenMalformed,
    ForbiddenError,
    MagicError,
    RateLimitingError,
    RequestError,
)
from magic_admin.http import HTTPClient, MagicResponse
from magic_admin.resources import User, UserMetadata
from magic_admin.validation import DIDClaim, TokenValidator
from magic_admin.version import VERSION

__version__ = VERSION

__all__ = [
    "Magic",
    "MagicSettings",
    "resolve_settings",
    "HTTPClient",
    "MagicResponse",
    "User",
    "UserMetadata",
    "DIDClaim",
    "TokenValidator",
    "MagicError",
    "ConfigurationError",
    "DIDTokenError",
    "DIDTokenMalformed",
    "DIDTokenInvalid",
    "DIDTokenExpired",
    "RequestError",
    "RateLimitingError",
    "BadRequestError",
    "AuthenticationError",
    "ForbiddenError",
    "APIError",
    "APIConnectionError",
    "__version__",
]
