"""
Configuration management for the Magic Admin SDK.

Settings resolve in this order, first match wins:

1. explicit arguments passed to ``resolve_settings`` (or ``Magic``)
2. ``MAGIC_API_*`` environment variables (and an optional ``.env`` file)
3. the defaults declared on ``MagicSettings``
"""

from typing import Any, Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from magic_admin.errors import ConfigurationError

API_BASE_URL = "https://api.magic.link"


class MagicSettings(BaseSettings):
    """Resolved SDK settings."""

    model_config = SettingsConfigDict(
        env_prefix="MAGIC_API_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    # Credentials
    secret_key: Optional[str] = Field(default=None, repr=False)
    client_id: Optional[str] = None

    # HTTP strategy
    base_url: str = API_BASE_URL
    retries: int = Field(default=3, ge=0)
    timeout: float = Field(default=5.0, gt=0)
    backoff: float = Field(default=0.02, ge=0)


def resolve_settings(base: Optional[MagicSettings] = None, **explicit: Any) -> MagicSettings:
    """Build settings, letting non-``None`` keyword arguments override the rest.

    With ``base`` the explicit values are layered over it instead of over the
    environment, and the merged result is validated again.
    """
    overrides = {key: value for key, value in explicit.items() if value is not None}
    if base is not None:
        overrides = {**base.model_dump(), **overrides}
    try:
        return MagicSettings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(
            "Invalid Magic API configuration",
            details={"errors": [
                {"field": ".".join(str(part) for part in error["loc"]), "message": error["msg"]}
                for error in e.errors()
            ]}
        ) from e
