import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Spotify API constants
SPOTIFY_AUTH_URL = "https://accounts.spotify.com/authorize"
SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"
SPOTIFY_API_BASE = "https://api.spotify.com/v1"

# Scopes requested by the login flow (private playlists need playlist-read-private)
SCOPES = [
    "playlist-read-private",
    "playlist-read-collaborative",
    "user-read-private",
    "user-read-email",
]


@dataclass(frozen=True)
class Settings:
    """
    Immutable runtime configuration.

    - client_id / client_secret : Spotify application credentials (may be
      missing, only the client-credentials path needs them)
    - redirect_uri              : OAuth callback; derived from the request
      host when not set
    - request_timeout           : per-call timeout for outbound requests
    """

    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    token_url: str = SPOTIFY_TOKEN_URL
    authorize_url: str = SPOTIFY_AUTH_URL
    api_base: str = SPOTIFY_API_BASE
    redirect_uri: Optional[str] = None
    request_timeout: Optional[float] = None

    @property
    def has_client_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret)


def _optional_float(value: Optional[str]) -> Optional[float]:
    if value is None or not value.strip():
        return None
    return float(value)


def load_settings() -> Settings:
    """
    Build Settings from the process environment (a .env file is honoured).
    """
    load_dotenv()

    return Settings(
        client_id=os.getenv("SPOTIFY_CLIENT_ID") or None,
        client_secret=os.getenv("SPOTIFY_CLIENT_SECRET") or None,
        redirect_uri=os.getenv("SPOTIFY_REDIRECT_URI") or None,
        request_timeout=_optional_float(os.getenv("SPOTIFY_REQUEST_TIMEOUT")),
    )
