"""Access tokens tagged with where they came from.

This module defines small data structures to describe the bearer token used
for a playlist fetch (a logged-in user's token or an application-only
client-credentials token).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class TokenProvenance(str, Enum):
    """Origin of an access token."""

    USER = "user"
    CLIENT_CREDENTIALS = "client_credentials"


@dataclass(frozen=True)
class AccessToken:
    """Request-scoped bearer token.

    A USER token may see private playlists the user has access to; a
    CLIENT_CREDENTIALS token only sees public data.
    """

    value: str
    provenance: TokenProvenance

    @classmethod
    def user(cls, value: str) -> "AccessToken":
        return cls(value=value, provenance=TokenProvenance.USER)

    @classmethod
    def client(cls, value: str) -> "AccessToken":
        return cls(value=value, provenance=TokenProvenance.CLIENT_CREDENTIALS)

    def headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.value}"}

    def __repr__(self) -> str:
        # Keep the secret out of logs and tracebacks.
        return f"AccessToken(provenance={self.provenance.value!r})"
