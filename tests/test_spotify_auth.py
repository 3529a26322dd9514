import pytest

from app.config import Settings
from app.spotify import (
    AccessToken,
    CredentialsExchangeFailed,
    MissingCredentials,
    TokenProvenance,
    build_spotify_auth_url,
    exchange_code_for_token,
    extract_bearer_token,
    request_client_token,
    resolve_token,
)
from conftest import TOKEN_URL, FakeResponse, FakeSession


@pytest.mark.parametrize(
    "header, expected",
    [
        ("Bearer abc123", "abc123"),
        ("Bearer ", None),
        ("Basic dXNlcjpwYXNz", None),
        ("bearer abc123", None),
        ("", None),
        (None, None),
    ],
)
def test_extract_bearer_token(header, expected) -> None:
    assert extract_bearer_token(header) == expected


def test_resolve_token_uses_supplied_bearer_without_network(settings: Settings) -> None:
    session = FakeSession()

    token = resolve_token("user-token", settings, session=session)

    assert token == AccessToken.user("user-token")
    assert token.provenance is TokenProvenance.USER
    assert session.calls == []


def test_resolve_token_falls_back_to_client_credentials(settings: Settings) -> None:
    session = FakeSession(
        {TOKEN_URL: FakeResponse(200, {"access_token": "app-token", "expires_in": 3600})}
    )

    token = resolve_token(None, settings, session=session)

    assert token.value == "app-token"
    assert token.provenance is TokenProvenance.CLIENT_CREDENTIALS

    (call,) = session.calls
    assert call["method"] == "POST"
    assert call["data"] == {"grant_type": "client_credentials"}
    assert call["auth"] == ("client-id", "client-secret")


def test_client_token_is_never_reused(settings: Settings) -> None:
    session = FakeSession({TOKEN_URL: FakeResponse(200, {"access_token": "app-token"})})

    resolve_token(None, settings, session=session)
    resolve_token(None, settings, session=session)

    assert session.urls("POST") == [TOKEN_URL, TOKEN_URL]


def test_missing_credentials_fails_before_network() -> None:
    session = FakeSession()

    with pytest.raises(MissingCredentials) as excinfo:
        request_client_token(Settings(client_id="only-id"), session=session)

    assert excinfo.value.status_code == 500
    assert session.calls == []


def test_token_exchange_failure_keeps_upstream_details(settings: Settings) -> None:
    body = {"error": "invalid_client"}
    session = FakeSession({TOKEN_URL: FakeResponse(400, body)})

    with pytest.raises(CredentialsExchangeFailed) as excinfo:
        request_client_token(settings, session=session)

    err = excinfo.value
    assert err.upstream_status == 400
    assert "invalid_client" in err.upstream_body
    # The user-facing message never contains the upstream body.
    assert "invalid_client" not in err.message


def test_token_exchange_network_error(settings: Settings, network_error) -> None:
    session = FakeSession({TOKEN_URL: network_error})

    with pytest.raises(CredentialsExchangeFailed):
        request_client_token(settings, session=session)


def test_token_exchange_without_access_token(settings: Settings) -> None:
    session = FakeSession({TOKEN_URL: FakeResponse(200, {"token_type": "Bearer"})})

    with pytest.raises(CredentialsExchangeFailed):
        request_client_token(settings, session=session)


def test_access_token_repr_hides_secret() -> None:
    assert "s3cret" not in repr(AccessToken.user("s3cret"))
    assert AccessToken.client("x").headers() == {"Authorization": "Bearer x"}


def test_build_spotify_auth_url(settings: Settings) -> None:
    url = build_spotify_auth_url(settings, "https://example.test/auth/callback")

    assert url.startswith(settings.authorize_url + "?")
    assert "client_id=client-id" in url
    assert "response_type=code" in url
    assert "playlist-read-private" in url
    assert "redirect_uri=https%3A%2F%2Fexample.test%2Fauth%2Fcallback" in url


def test_build_spotify_auth_url_requires_client_id() -> None:
    with pytest.raises(MissingCredentials):
        build_spotify_auth_url(Settings(), "https://example.test/auth/callback")


def test_exchange_code_for_token(settings: Settings) -> None:
    session = FakeSession(
        {TOKEN_URL: FakeResponse(200, {"access_token": "user-token", "refresh_token": "r"})}
    )

    token_info = exchange_code_for_token(
        "the-code", settings, "https://example.test/auth/callback", session=session
    )

    assert token_info["access_token"] == "user-token"
    (call,) = session.calls
    assert call["data"] == {
        "grant_type": "authorization_code",
        "code": "the-code",
        "redirect_uri": "https://example.test/auth/callback",
    }
