"""Error taxonomy for playlist aggregation.

Every failure surfaced to a caller is a PlaylistError carrying an HTTP-style
status code and a short user-facing message. Upstream response bodies are
kept on the exception for logging only and never end up in `message`.
"""

from typing import Dict, Optional, Tuple, Type

from .tokens import TokenProvenance


class PlaylistError(Exception):
    status_code: int = 500
    default_message: str = "internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        upstream_status: Optional[int] = None,
        upstream_body: Optional[str] = None,
    ) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        self.upstream_status = upstream_status
        self.upstream_body = upstream_body
        super().__init__(self.message)


class MissingPlaylistUrl(PlaylistError):
    status_code = 400
    default_message = "missing playlist url"


class InvalidPlaylistUrl(PlaylistError):
    status_code = 400
    default_message = "invalid spotify playlist url"


class MissingCredentials(PlaylistError):
    status_code = 500
    default_message = "missing spotify credentials"


class CredentialsExchangeFailed(PlaylistError):
    status_code = 500
    default_message = "failed to get client credentials token"


class TokenInvalid(PlaylistError):
    status_code = 401
    default_message = "client token invalid, try again later"


class TokenExpired(PlaylistError):
    status_code = 401
    default_message = "user token invalid or expired, please login again"


class PrivatePlaylist(PlaylistError):
    status_code = 403
    default_message = "private playlist — login with Spotify to access it"


class Unauthorized(PlaylistError):
    status_code = 403
    default_message = "not authorized (missing scope or no access to playlist)"


class UpstreamError(PlaylistError):
    status_code = 502
    default_message = "failed to fetch playlist"


class InternalError(PlaylistError):
    status_code = 500
    default_message = "internal server error"


class PageFetchFailed(Exception):
    """
    A pagination page (after the first one) could not be retrieved.

    Internal to the fetcher: the pagination policy decides whether this
    truncates the playlist or becomes an UpstreamError.
    """

    def __init__(self, url: str, status_code: Optional[int] = None, reason: str = ""):
        self.url = url
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"page fetch failed ({status_code or 'network'}): {url}")


_PLAYLIST_FAILURES: Dict[Tuple[int, TokenProvenance], Type[PlaylistError]] = {
    (401, TokenProvenance.CLIENT_CREDENTIALS): TokenInvalid,
    (401, TokenProvenance.USER): TokenExpired,
    (403, TokenProvenance.CLIENT_CREDENTIALS): PrivatePlaylist,
    (403, TokenProvenance.USER): Unauthorized,
}


def classify_playlist_failure(
    status: int,
    provenance: TokenProvenance,
    body: Optional[str] = None,
) -> PlaylistError:
    """
    Map a non-2xx playlist response to the error shown to the caller.

    The same status means different things depending on who holds the token:
    a 403 on a client-credentials token is a private playlist, a 403 on a
    user token is a scope or access problem.
    """
    error_cls = _PLAYLIST_FAILURES.get((status, provenance))
    if error_cls is not None:
        return error_cls(upstream_status=status, upstream_body=body)
    return UpstreamError(status_code=status, upstream_status=status, upstream_body=body)
