"""
User resource for the Magic Admin API.
"""

from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict

from magic_admin.errors import APIError
from magic_admin.http.client import HTTPClient
from magic_admin.http.response import MagicResponse
from magic_admin.logging import get_logger
from magic_admin.validation.token_validator import (
    TokenValidator,
    construct_issuer_with_public_address,
)

USER_METADATA_PATH = "/v1/admin/auth/user/get"
USER_LOGOUT_PATH = "/v2/admin/auth/user/logout"


class UserMetadata(BaseModel):
    """Metadata Magic stores about a user."""
    model_config = ConfigDict(extra="allow")

    issuer: Optional[str] = None
    public_address: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    oauth_provider: Optional[str] = None
    wallets: Optional[List[Any]] = None


class User:
    """Fetch metadata for and log out Magic users."""

    def __init__(self, http_client: HTTPClient, token_validator: TokenValidator):
        self.http_client = http_client
        self.token_validator = token_validator
        self.logger = get_logger("magic_admin.user")

    def get_metadata_by_issuer(self, issuer: str) -> UserMetadata:
        """Return the metadata of the user identified by ``issuer``."""
        response = self.http_client.get(USER_METADATA_PATH, params={"issuer": issuer})

        if not isinstance(response.data, dict):
            raise APIError(
                "Magic API returned no user metadata",
                http_status=response.status_code,
                http_request_params={"issuer": issuer},
            )

        self.logger.debug("Fetched user metadata", issuer=issuer)
        return UserMetadata.model_validate(response.data)

    def get_metadata_by_public_address(self, public_address: str) -> UserMetadata:
        return self.get_metadata_by_issuer(construct_issuer_with_public_address(public_address))

    def get_metadata_by_token(self, did_token: str) -> UserMetadata:
        """Return metadata for the token's issuer. The token is not validated here."""
        return self.get_metadata_by_issuer(self.token_validator.get_issuer(did_token))

    def logout_by_issuer(self, issuer: str) -> MagicResponse:
        """Invalidate all of the user's sessions."""
        response = self.http_client.post(USER_LOGOUT_PATH, data={"issuer": issuer})
        self.logger.info("Logged out user", issuer=issuer)
        return response

    def logout_by_public_address(self, public_address: str) -> MagicResponse:
        return self.logout_by_issuer(construct_issuer_with_public_address(public_address))

    def logout_by_token(self, did_token: str) -> MagicResponse:
        return self.logout_by_issuer(self.token_validator.get_issuer(did_token))
