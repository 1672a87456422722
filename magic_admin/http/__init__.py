"""
HTTP layer for the Magic Admin API.
"""

from magic_admin.http.client import HTTPClient
from magic_admin.http.response import MagicResponse

__all__ = ["HTTPClient", "MagicResponse"]
