"""
Magic API resources.
"""

from magic_admin.resources.user import User, UserMetadata

__all__ = ["User", "UserMetadata"]
