"""
Response model for Magic API calls.
"""

from typing import Any, Optional
from pydantic import BaseModel


class MagicResponse(BaseModel):
    """A successful response from the Magic API."""
    status_code: int
    content: str
    status: Optional[str] = None
    data: Any = None

    @classmethod
    def from_json(cls, status_code: int, content: str, body: Any) -> "MagicResponse":
        """Build a response from the decoded JSON body."""
        if isinstance(body, dict):
            return cls(status_code=status_code, content=content,
                       status=body.get("status"), data=body.get("data"))
        return cls(status_code=status_code, content=content, data=body)
