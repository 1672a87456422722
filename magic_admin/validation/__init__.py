"""
DID token validation.
"""

from magic_admin.validation.token_validator import DIDClaim, TokenValidator

__all__ = ["DIDClaim", "TokenValidator"]
