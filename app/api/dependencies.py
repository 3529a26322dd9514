from functools import lru_cache
from typing import Iterator

import requests

from app.config import Settings, load_settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


def get_http_session() -> Iterator[requests.Session]:
    """
    One outbound HTTP session per request, closed when the response is sent.
    """
    session = requests.Session()
    try:
        yield session
    finally:
        session.close()
