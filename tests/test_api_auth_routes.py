from urllib.parse import parse_qs, urlparse

from app.api.dependencies import get_settings
from app.config import Settings
from api_main import app
from conftest import TOKEN_URL, FakeResponse


def test_login_redirects_to_spotify(client, settings: Settings) -> None:
    response = client.get("/auth/login", follow_redirects=False)

    assert response.status_code == 302
    location = urlparse(response.headers["location"])
    query = parse_qs(location.query)
    assert response.headers["location"].startswith(settings.authorize_url)
    assert query["client_id"] == ["client-id"]
    assert query["redirect_uri"] == ["https://testserver/auth/callback"]
    assert "playlist-read-private" in query["scope"][0]


def test_login_without_client_id(client) -> None:
    app.dependency_overrides[get_settings] = lambda: Settings()

    response = client.get("/auth/login", follow_redirects=False)

    assert response.status_code == 500
    assert response.json() == {"error": "missing spotify client id"}


def test_callback_exchanges_code_and_returns_token_in_fragment(client, session) -> None:
    session.routes[TOKEN_URL] = FakeResponse(
        200, {"access_token": "user-token", "refresh_token": "refresh", "expires_in": 3600}
    )

    response = client.get("/auth/callback", params={"code": "abc"}, follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["location"] == "/#access_token=user-token&refresh_token=refresh"
    (call,) = session.calls
    assert call["data"]["code"] == "abc"
    assert call["data"]["redirect_uri"] == "https://testserver/auth/callback"


def test_callback_with_spotify_error(client, session) -> None:
    response = client.get(
        "/auth/callback", params={"error": "access_denied"}, follow_redirects=False
    )

    assert response.headers["location"] == "/?error=access_denied"
    assert session.calls == []


def test_callback_without_code(client) -> None:
    response = client.get("/auth/callback", follow_redirects=False)
    assert response.headers["location"] == "/?error=no_code"


def test_callback_exchange_failure(client, session) -> None:
    session.routes[TOKEN_URL] = FakeResponse(400, {"error": "invalid_grant"})

    response = client.get("/auth/callback", params={"code": "abc"}, follow_redirects=False)

    assert response.headers["location"] == "/?error=token_exchange_failed"


def test_callback_missing_credentials(client) -> None:
    app.dependency_overrides[get_settings] = lambda: Settings(client_id="id")

    response = client.get("/auth/callback", params={"code": "abc"}, follow_redirects=False)

    assert response.headers["location"] == "/?error=missing_credentials"
