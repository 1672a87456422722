"""
Shared fixtures for the Magic Admin SDK tests.
"""

import pytest

from magic_admin.test_helpers import DIDTokenFactory

NOW = 1_700_000_000

MAGIC_ENV_VARS = (
    "MAGIC_API_SECRET_KEY",
    "MAGIC_API_RETRIES",
    "MAGIC_API_TIMEOUT",
    "MAGIC_API_BACKOFF",
    "MAGIC_API_BASE_URL",
    "MAGIC_API_CLIENT_ID",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Keep the host environment and any .env file out of the tests."""
    for name in MAGIC_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def now():
    """Fixed current time in seconds."""
    return NOW


@pytest.fixture
def clock(now):
    """Clock returning the fixed current time."""
    return lambda: now


@pytest.fixture
def token_factory():
    """DID token factory with a deterministic signing key."""
    return DIDTokenFactory()


@pytest.fixture
def other_token_factory():
    """DID token factory signing with a different key."""
    return DIDTokenFactory("0x" + "7d" * 32)

