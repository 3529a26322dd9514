"""Public façade for the app.spotify package.

This module exposes the Spotify Web API integration: token resolution,
playlist retrieval, track normalization and the error taxonomy. Callers
should import these symbols from this façade instead of the internal auth,
playlists, tracks or errors modules.
"""

from .auth import (
    build_spotify_auth_url,
    exchange_code_for_token,
    extract_bearer_token,
    request_client_token,
    resolve_token,
)
from .errors import (
    CredentialsExchangeFailed,
    InternalError,
    InvalidPlaylistUrl,
    MissingCredentials,
    MissingPlaylistUrl,
    PageFetchFailed,
    PlaylistError,
    PrivatePlaylist,
    TokenExpired,
    TokenInvalid,
    Unauthorized,
    UpstreamError,
    classify_playlist_failure,
)
from .playlists import (
    PaginationPolicy,
    extract_playlist_id,
    fetch_playlist,
    iter_track_pages,
    load_playlist_from_url,
)
from .tokens import AccessToken, TokenProvenance
from .tracks import normalize_item, normalize_items, pick_album_image

__all__ = [
    "build_spotify_auth_url",
    "exchange_code_for_token",
    "extract_bearer_token",
    "request_client_token",
    "resolve_token",
    "AccessToken",
    "TokenProvenance",
    "PlaylistError",
    "MissingPlaylistUrl",
    "InvalidPlaylistUrl",
    "MissingCredentials",
    "CredentialsExchangeFailed",
    "TokenInvalid",
    "TokenExpired",
    "PrivatePlaylist",
    "Unauthorized",
    "UpstreamError",
    "InternalError",
    "PageFetchFailed",
    "classify_playlist_failure",
    "PaginationPolicy",
    "extract_playlist_id",
    "fetch_playlist",
    "iter_track_pages",
    "load_playlist_from_url",
    "normalize_item",
    "normalize_items",
    "pick_album_image",
]
