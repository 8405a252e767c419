"""
Internal data model for what comes back from the Twitter API.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class Post:
    id: str
    text: str


@dataclass(frozen=True)
class UserIdentity:
    id: str
    username: str
    display_name: str


@dataclass(frozen=True)
class AccessToken:
    access_token: str
    token_type: str = 'bearer'
    scope: Optional[str] = None
    expires_in: Optional[int] = None

    def __repr__(self):
        # Keep the credential out of logs and tracebacks
        return f"AccessToken(token_type={self.token_type!r}, scope={self.scope!r}, expires_in={self.expires_in!r})"


class HandshakeStatus(Enum):
    IDLE = 'idle'
    AWAITING_CALLBACK = 'awaiting_callback'
    AUTHORIZED = 'authorized'
    REJECTED = 'rejected'
