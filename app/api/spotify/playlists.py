from typing import Optional

import requests
from fastapi import APIRouter, Depends, Header, Query, Response

from app.api.dependencies import get_http_session, get_settings
from app.config import Settings
from app.core import Playlist, log_exception, log_info
from app.spotify import (
    InternalError,
    PlaylistError,
    extract_bearer_token,
    load_playlist_from_url,
)
from app.view import SortMode, ViewState, apply_view, playlist_to_csv, sanitize_filename

from .schemas import ErrorResponse, PlaylistResponse

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    401: {"model": ErrorResponse},
    403: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _aggregate(
    url: Optional[str],
    authorization: Optional[str],
    settings: Settings,
    session: requests.Session,
) -> Playlist:
    """
    Run the aggregation; anything that is not already classified becomes an
    InternalError (details stay in the server log).
    """
    try:
        return load_playlist_from_url(
            url,
            extract_bearer_token(authorization),
            settings,
            session=session,
        )
    except PlaylistError:
        raise
    except Exception as e:
        log_exception(f"Unexpected error while aggregating playlist: {e}")
        raise InternalError() from e


@router.options("/playlist", include_in_schema=False)
@router.options("/playlist/csv", include_in_schema=False)
def playlist_preflight() -> Response:
    return Response(status_code=200)


@router.get("/playlist", response_model=PlaylistResponse, responses=ERROR_RESPONSES)
def get_playlist(
    url: Optional[str] = Query(default=None),
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
    session: requests.Session = Depends(get_http_session),
) -> PlaylistResponse:
    """
    Full track list of a Spotify playlist.

    Uses the caller's bearer token when one is sent (private playlists),
    otherwise an application client-credentials token (public only).
    """
    playlist = _aggregate(url, authorization, settings, session)
    return PlaylistResponse.from_playlist(playlist)


@router.get("/playlist/csv", responses=ERROR_RESPONSES)
def get_playlist_csv(
    url: Optional[str] = Query(default=None),
    sort: SortMode = Query(default=SortMode.DEFAULT),
    q: str = Query(default=""),
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
    session: requests.Session = Depends(get_http_session),
) -> Response:
    """
    Same aggregation, exported as CSV with lyrics/YouTube search links.

    `sort` and `q` apply the same view the UI shows before export.
    """
    playlist = _aggregate(url, authorization, settings, session)
    tracks = apply_view(playlist.tracks, ViewState(sort_mode=sort, search_query=q))
    log_info(f"Exporting {len(tracks)}/{len(playlist.tracks)} tracks as CSV.")

    filename = f"{sanitize_filename(playlist.name)}.csv"
    return Response(
        content=playlist_to_csv(tracks),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
