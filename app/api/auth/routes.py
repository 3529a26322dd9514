from typing import Optional
from urllib.parse import quote, urlencode

import requests
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse

from app.api.dependencies import get_http_session, get_settings
from app.config import Settings
from app.core import log_error, log_info
from app.spotify import (
    CredentialsExchangeFailed,
    MissingCredentials,
    build_spotify_auth_url,
    exchange_code_for_token,
)

router = APIRouter()


def _redirect_uri(request: Request, settings: Settings) -> str:
    """
    Callback URL; must be byte-identical between /login and /callback.
    """
    if settings.redirect_uri:
        return settings.redirect_uri
    return f"https://{request.headers.get('host', 'localhost')}/auth/callback"


def _front_error(code: str) -> RedirectResponse:
    return RedirectResponse(url=f"/?error={quote(code, safe='')}", status_code=302)


@router.get("/login")
def login(request: Request, settings: Settings = Depends(get_settings)) -> RedirectResponse:
    """
    Send the browser to the Spotify consent page.
    """
    auth_url = build_spotify_auth_url(settings, _redirect_uri(request, settings))
    return RedirectResponse(url=auth_url, status_code=302)


@router.get("/callback")
def auth_callback(
    request: Request,
    code: Optional[str] = Query(default=None),
    error: Optional[str] = Query(default=None),
    settings: Settings = Depends(get_settings),
    session: requests.Session = Depends(get_http_session),
) -> RedirectResponse:
    """
    Spotify redirect target.

    Exchanges the code and hands the token to the front end in the URL
    fragment (never stored server side). Failures redirect to `/?error=...`.
    """
    if error:
        log_error(f"OAuth error from Spotify: {error}")
        return _front_error(error)

    if not code:
        log_error("OAuth callback without code.")
        return _front_error("no_code")

    try:
        token_info = exchange_code_for_token(
            code,
            settings,
            _redirect_uri(request, settings),
            session=session,
        )
    except MissingCredentials:
        return _front_error("missing_credentials")
    except CredentialsExchangeFailed:
        return _front_error("token_exchange_failed")

    log_info(f"Token expires in {token_info.get('expires_in')} seconds.")
    fragment = urlencode(
        {
            "access_token": token_info["access_token"],
            "refresh_token": token_info.get("refresh_token") or "",
        }
    )
    return RedirectResponse(url=f"/#{fragment}", status_code=302)
