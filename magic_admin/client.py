"""
Entry point for the Magic Admin SDK.
"""

from typing import Any, Callable, Optional

import httpx

from magic_admin.config import MagicSettings, resolve_settings
from magic_admin.errors import ConfigurationError
from magic_admin.http.client import HTTPClient
from magic_admin.logging import get_logger
from magic_admin.resources.user import User
from magic_admin.validation.token_validator import TokenValidator


class Magic:
    """Access to the Magic API resources.

    Arguments left as ``None`` fall back to the ``MAGIC_API_*`` environment
    variables, then to the defaults in ``MagicSettings``. A ready ``settings``
    object replaces the environment and defaults; explicit arguments still
    override it.

    Args:
        api_secret_key: Secret key from the Magic dashboard.
        retries: Total number of retries to allow per request.
        timeout: Seconds to wait for a response on each attempt.
        backoff: Backoff factor applied between retry attempts.
        client_id: When set, DID tokens must carry it as their audience.
        settings: Pre-resolved settings.
        transport: Custom ``httpx`` transport, mostly for tests.
        clock: Time source for token validation, in seconds.
    """

    def __init__(self,
                 api_secret_key: Optional[str] = None,
                 retries: Optional[int] = None,
                 timeout: Optional[float] = None,
                 backoff: Optional[float] = None,
                 *,
                 client_id: Optional[str] = None,
                 settings: Optional[MagicSettings] = None,
                 transport: Optional[httpx.BaseTransport] = None,
                 clock: Optional[Callable[[], float]] = None):
        self.settings = resolve_settings(
            settings,
            secret_key=api_secret_key,
            retries=retries,
            timeout=timeout,
            backoff=backoff,
            client_id=client_id,
        )
        if not self.settings.secret_key:
            raise ConfigurationError(
                "Magic api secret key was not found.",
                details={"env_var": "MAGIC_API_SECRET_KEY"}
            )

        self.logger = get_logger("magic_admin.client")
        self.http_client = HTTPClient(
            self.settings.base_url,
            self.settings.secret_key,
            retries=self.settings.retries,
            timeout=self.settings.timeout,
            backoff=self.settings.backoff,
            transport=transport,
        )
        self._token = TokenValidator(clock=clock, client_id=self.settings.client_id)
        self._user = User(self.http_client, self._token)

        self.logger.debug(
            "Magic client initialized",
            base_url=self.settings.base_url,
            retries=self.settings.retries,
            timeout=self.settings.timeout,
            backoff=self.settings.backoff
        )

    @property
    def secret_key(self) -> str:
        """The resolved Magic API secret key."""
        return self.settings.secret_key

    def user(self) -> User:
        """Return the User resource."""
        return self._user

    def token(self) -> TokenValidator:
        """Return the DID token validator."""
        return self._token

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self.http_client.close()

    def __enter__(self) -> "Magic":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
