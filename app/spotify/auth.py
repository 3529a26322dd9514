from typing import Dict, Optional
from urllib.parse import urlencode

import requests

from app.config import SCOPES, Settings
from app.core.logging_utils import log_error, log_info, log_step

from .errors import CredentialsExchangeFailed, MissingCredentials
from .tokens import AccessToken

BEARER_PREFIX = "Bearer "


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Return the token of an `Authorization: Bearer <token>` header.

    Any other scheme, an empty token or a missing header gives None.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    return authorization[len(BEARER_PREFIX):] or None


def _post_token_request(
    settings: Settings,
    data: Dict[str, str],
    session: Optional[requests.Session] = None,
) -> Dict:
    http = session or requests
    try:
        r = http.post(
            settings.token_url,
            data=data,
            auth=(settings.client_id, settings.client_secret),
            timeout=settings.request_timeout,
        )
    except requests.RequestException as e:
        log_error(f"Token request to {settings.token_url} failed: {e}")
        raise CredentialsExchangeFailed() from e

    if not r.ok:
        body = r.text
        log_error(f"Token exchange failed: {r.status_code} {body}")
        raise CredentialsExchangeFailed(upstream_status=r.status_code, upstream_body=body)

    try:
        token_info = r.json()
    except ValueError as e:
        raise CredentialsExchangeFailed(upstream_status=r.status_code) from e

    if not isinstance(token_info, dict) or not token_info.get("access_token"):
        log_error("Token endpoint answered without an access_token.")
        raise CredentialsExchangeFailed(upstream_status=r.status_code)
    return token_info


def request_client_token(
    settings: Settings,
    session: Optional[requests.Session] = None,
) -> AccessToken:
    """
    Obtain an application-only token via the client-credentials grant.

    Never cached: each call performs a fresh exchange.
    """
    if not settings.has_client_credentials:
        log_error("SPOTIFY_CLIENT_ID / SPOTIFY_CLIENT_SECRET are not configured.")
        raise MissingCredentials()

    token_info = _post_token_request(
        settings,
        {"grant_type": "client_credentials"},
        session=session,
    )
    return AccessToken.client(token_info["access_token"])


def resolve_token(
    supplied_bearer: Optional[str],
    settings: Settings,
    session: Optional[requests.Session] = None,
) -> AccessToken:
    """
    Pick the token for a playlist fetch.

    - caller supplied a bearer token → use it as a USER token (no network)
    - otherwise → fresh client-credentials token
    """
    if supplied_bearer:
        token = AccessToken.user(supplied_bearer)
    else:
        log_step("No user token supplied, requesting client-credentials token...")
        token = request_client_token(settings, session=session)

    log_info(f"Using token type: {token.provenance.value}")
    return token


def build_spotify_auth_url(settings: Settings, redirect_uri: str) -> str:
    """
    URL of the Spotify consent page for the authorization-code flow.
    """
    if not settings.client_id:
        raise MissingCredentials("missing spotify client id")

    query = urlencode(
        {
            "client_id": settings.client_id,
            "response_type": "code",
            "redirect_uri": redirect_uri,
            "scope": " ".join(SCOPES),
        }
    )
    return f"{settings.authorize_url}?{query}"


def exchange_code_for_token(
    code: str,
    settings: Settings,
    redirect_uri: str,
    session: Optional[requests.Session] = None,
) -> Dict:
    """
    Trade an authorization code for a user token.

    The redirect_uri must be exactly the one used to build the auth URL.
    Nothing is persisted: the token info is handed back to the caller.
    """
    if not settings.has_client_credentials:
        raise MissingCredentials()

    token_info = _post_token_request(
        settings,
        {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": redirect_uri,
        },
        session=session,
    )
    log_info(f"User token received, scopes granted: {token_info.get('scope', '')}")
    return token_info
