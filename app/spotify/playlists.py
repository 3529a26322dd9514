"""Playlist retrieval from the Spotify Web API.

`fetch_playlist` reads the playlist object (metadata plus the first page of
items) and then follows the `next` cursors one page at a time. Only the
first request is fatal; what happens when a later page fails is decided by
the PaginationPolicy.
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

import requests

from app.config import Settings
from app.core.logging_utils import log_error, log_info, log_step, log_warning
from app.core.models import Playlist, Track

from .auth import resolve_token
from .errors import (
    InvalidPlaylistUrl,
    MissingPlaylistUrl,
    PageFetchFailed,
    UpstreamError,
    classify_playlist_failure,
)
from .tokens import AccessToken
from .tracks import normalize_items

PLAYLIST_URL_PATTERN = re.compile(r"playlist/([a-zA-Z0-9]+)(\?.*)?")


@dataclass(frozen=True)
class PaginationPolicy:
    """
    What to do when a page after the first one cannot be fetched.

    continue_on_page_failure=True keeps the tracks gathered so far and
    returns them as a (shorter) successful result.
    """

    continue_on_page_failure: bool = True


def extract_playlist_id(url: Optional[str]) -> Optional[str]:
    """
    Extract the playlist id from a playlist URL or URI path.

      https://open.spotify.com/playlist/37i9dQZF1DXcBWIGoYBM5M?si=abc
      -> 37i9dQZF1DXcBWIGoYBM5M
    """
    if not url:
        return None
    match = PLAYLIST_URL_PATTERN.search(url)
    return match.group(1) if match else None


def _get_page(
    url: str,
    token: AccessToken,
    http: Any,
    timeout: Optional[float],
) -> Dict[str, Any]:
    try:
        r = http.get(url, headers=token.headers(), timeout=timeout)
    except requests.RequestException as e:
        raise PageFetchFailed(url, reason=str(e)) from e

    if not r.ok:
        raise PageFetchFailed(url, status_code=r.status_code, reason=r.text)

    try:
        data = r.json()
    except ValueError as e:
        raise PageFetchFailed(url, status_code=r.status_code, reason="invalid json") from e

    if not isinstance(data, dict):
        raise PageFetchFailed(url, status_code=r.status_code, reason="unexpected payload")

    items = data.get("items")
    if items is not None and not isinstance(items, list):
        raise PageFetchFailed(url, status_code=r.status_code, reason="unexpected payload")
    return data


def iter_track_pages(
    first_page: Dict[str, Any],
    token: AccessToken,
    session: Optional[requests.Session] = None,
    timeout: Optional[float] = None,
) -> Iterator[List[Dict[str, Any]]]:
    """
    Yield the raw item list of every page, in pagination order.

    The first page is the one embedded in the playlist object. Each further
    page is requested only once the previous one told us its URL. Stops on
    exhaustion, or raises PageFetchFailed.
    """
    http = session or requests

    yield first_page.get("items") or []
    next_url = first_page.get("next")

    while next_url:
        page = _get_page(next_url, token, http, timeout)
        yield page.get("items") or []
        next_url = page.get("next")


def fetch_playlist(
    playlist_id: str,
    token: AccessToken,
    settings: Settings,
    session: Optional[requests.Session] = None,
    policy: PaginationPolicy = PaginationPolicy(),
) -> Playlist:
    http = session or requests
    url = f"{settings.api_base}/playlists/{playlist_id}"

    log_step(f"Fetching playlist {playlist_id}...")
    r = http.get(url, headers=token.headers(), timeout=settings.request_timeout)

    if not r.ok:
        body = r.text
        log_error(f"Spotify API error: {r.status_code} {body}")
        raise classify_playlist_failure(r.status_code, token.provenance, body)

    data = r.json()
    first_page = data.get("tracks") or {}

    tracks: List[Track] = []
    pages = 0
    complete = True

    try:
        for items in iter_track_pages(
            first_page, token, session=session, timeout=settings.request_timeout
        ):
            pages += 1
            tracks.extend(normalize_items(items))
    except PageFetchFailed as e:
        log_warning(
            f"Spotify pagination error after {pages} page(s): "
            f"{e.status_code or 'network'} {e.reason}"
        )
        if not policy.continue_on_page_failure:
            raise UpstreamError(
                status_code=e.status_code or 502,
                upstream_status=e.status_code,
                upstream_body=e.reason,
            ) from e
        complete = False

    log_info(
        f"Playlist {playlist_id}: {len(tracks)} tracks over {pages} page(s)"
        f"{'' if complete else ' (truncated)'}."
    )
    return Playlist(name=data.get("name") or "", tracks=tuple(tracks), complete=complete)


def load_playlist_from_url(
    playlist_url: Optional[str],
    supplied_bearer: Optional[str],
    settings: Settings,
    session: Optional[requests.Session] = None,
    policy: PaginationPolicy = PaginationPolicy(),
) -> Playlist:
    """
    Full aggregation for a playlist URL.

    The URL is validated before any network call; then the token is
    resolved (user bearer or client credentials) and the playlist fetched.
    """
    if not playlist_url or not playlist_url.strip():
        raise MissingPlaylistUrl()

    playlist_id = extract_playlist_id(playlist_url.strip())
    if not playlist_id:
        raise InvalidPlaylistUrl()

    token = resolve_token(supplied_bearer, settings, session=session)
    return fetch_playlist(playlist_id, token, settings, session=session, policy=policy)
