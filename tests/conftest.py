import json
from typing import Any, Dict, List, Optional

import pytest
import requests
from fastapi.testclient import TestClient

from api_main import app
from app.api.dependencies import get_http_session, get_settings
from app.config import Settings

API_BASE = "https://api.test/v1"
TOKEN_URL = "https://accounts.test/api/token"


class FakeResponse:
    """
    Minimal stand-in for requests.Response.
    """

    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no json body")
        return self._payload


class FakeSession:
    """
    Records outbound calls and answers from a url -> response mapping.

    A response may be an exception instance, which is raised instead.
    """

    def __init__(self, routes: Optional[Dict[str, Any]] = None):
        self.routes = dict(routes or {})
        self.calls: List[Dict[str, Any]] = []

    def _answer(self, method: str, url: str, **kwargs) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        answer = self.routes.get((method, url), self.routes.get(url))
        if answer is None:
            raise AssertionError(f"unexpected {method} {url}")
        if isinstance(answer, Exception):
            raise answer
        return answer

    def get(self, url: str, **kwargs) -> FakeResponse:
        return self._answer("GET", url, **kwargs)

    def post(self, url: str, **kwargs) -> FakeResponse:
        return self._answer("POST", url, **kwargs)

    def close(self) -> None:
        pass

    def urls(self, method: str) -> List[str]:
        return [c["url"] for c in self.calls if c["method"] == method]


def raw_item(
    name: str,
    artists: Optional[List[str]] = None,
    album: str = "Album",
    release_date: Optional[str] = "2020-01-01",
    images: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """
    Helper to build a playlist item the way the Web API returns it.
    """
    return {
        "added_at": "2024-01-01T00:00:00Z",
        "track": {
            "name": name,
            "artists": [{"name": a} for a in (artists or ["Artist"])],
            "album": {
                "name": album,
                "release_date": release_date,
                "images": [{"url": u} for u in (images or [])],
            },
            "external_urls": {"spotify": f"https://open.spotify.com/track/{name}"},
        },
    }


def playlist_payload(name: str, items: List[Dict[str, Any]], next_url: Optional[str] = None) -> Dict[str, Any]:
    return {"name": name, "tracks": {"items": items, "next": next_url}}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        client_id="client-id",
        client_secret="client-secret",
        token_url=TOKEN_URL,
        api_base=API_BASE,
    )


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(settings: Settings, session: FakeSession):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_http_session] = lambda: session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def network_error() -> requests.ConnectionError:
    return requests.ConnectionError("connection reset")
