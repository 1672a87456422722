"""
Integration tests for the login flow: validate a DID token, then look up the user.
"""

import pytest
from unittest.mock import patch

from magic_admin import Magic
from magic_admin.errors import (
    AuthenticationError,
    DIDTokenExpired,
    DIDTokenInvalid,
)
from magic_admin.http.client import SECRET_KEY_HEADER
from magic_admin.test_helpers import RecordingTransport, json_response


class TestMagicFlow:
    """End-to-end flows through Magic with a mocked Magic API."""

    @pytest.fixture
    def metadata(self, token_factory):
        """User metadata returned by the mocked API."""
        return {
            "issuer": token_factory.issuer,
            "public_address": token_factory.public_address,
            "email": "user@magic.link",
            "phone_number": None,
            "oauth_provider": None,
            "wallets": None,
        }

    def test_login_flow(self, token_factory, metadata, clock, now):
        """Test validating a token and fetching its user."""
        transport = RecordingTransport(json_response(200, {"status": "ok", "data": metadata}))
        magic = Magic(api_secret_key="sk_live_test", transport=transport, clock=clock)
        did_token = token_factory.create_token(now, iat=now - 100, ext=now + 100, nbf=now - 50)

        magic.token().validate(did_token)
        issuer = magic.token().get_issuer(did_token)
        user_metadata = magic.user().get_metadata_by_issuer(issuer)

        assert user_metadata.email == "user@magic.link"
        assert magic.token().get_public_address(did_token) == user_metadata.public_address
        assert transport.requests[0].headers[SECRET_KEY_HEADER] == "sk_live_test"

    def test_expired_token_never_hits_api(self, token_factory, clock, now):
        """Test that an expired token is rejected locally."""
        transport = RecordingTransport(json_response(200, {"status": "ok", "data": {}}))
        magic = Magic(api_secret_key="sk_live_test", transport=transport, clock=clock)
        did_token = token_factory.create_token(now, iat=now - 100, ext=now - 1, nbf=now - 50)

        with pytest.raises(DIDTokenInvalid) as exc_info:
            magic.token().validate(did_token)

        assert isinstance(exc_info.value, DIDTokenExpired)
        assert transport.requests == []

    def test_logout_flow(self, token_factory, clock, now):
        """Test logging out the token's user."""
        transport = RecordingTransport(json_response(200, {"status": "ok", "data": {}}))
        magic = Magic(api_secret_key="sk_live_test", transport=transport, clock=clock)

        response = magic.user().logout_by_token(token_factory.create_token(now))

        assert response.status == "ok"
        assert transport.requests[0].method == "POST"
        assert transport.requests[0].url.path == "/v2/admin/auth/user/logout"

    def test_wrong_secret_key(self, token_factory):
        """Test that a rejected secret key surfaces as AuthenticationError."""
        transport = RecordingTransport(json_response(401, {
            "status": "failed",
            "error_code": "err_code_unauthorized_admin_api_secret",
            "message": "Invalid API secret key",
            "data": {},
        }))
        magic = Magic(api_secret_key="sk_live_wrong", transport=transport)

        with patch("magic_admin.retry.time.sleep"):
            with pytest.raises(AuthenticationError) as exc_info:
                magic.user().get_metadata_by_issuer(token_factory.issuer)

        assert exc_info.value.http_code == "err_code_unauthorized_admin_api_secret"
        assert len(transport.requests) == 1
