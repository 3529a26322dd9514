"""Sorting and searching over an aggregated track list.

Everything here is pure: the canonical tuple of tracks is never reordered,
each call returns a new derived tuple computed from (tracks, sort, query).
"""

import re
import unicodedata
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, List, Sequence, Tuple

from app.core.models import Track

# Characters removed before matching: parentheses, hyphen, en/em dashes, dot, comma
_SEARCH_STRIP = re.compile(r"[()\-–—.,]")
_WHITESPACE = re.compile(r"\s+")


class SortMode(str, Enum):
    DEFAULT = "default"
    ARTIST_ASC = "artist_asc"
    ARTIST_DESC = "artist_desc"
    TRACK_ASC = "track_asc"
    TRACK_DESC = "track_desc"


@dataclass(frozen=True)
class ViewState:
    """
    Presentation state over a fetched playlist.

    Not persisted; go back to `ViewState.reset()` whenever a new playlist is
    loaded.
    """

    sort_mode: SortMode = SortMode.DEFAULT
    search_query: str = ""

    @classmethod
    def reset(cls) -> "ViewState":
        return cls()


def collation_key(value: str) -> str:
    """
    Case- and accent-insensitive sort key ("Émile" sorts with "emile").
    """
    decomposed = unicodedata.normalize("NFKD", value or "")
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return stripped.casefold()


_SORT_FIELDS: Dict[SortMode, Tuple[Callable[[Track], str], bool]] = {
    SortMode.ARTIST_ASC: (lambda t: t.artist, False),
    SortMode.ARTIST_DESC: (lambda t: t.artist, True),
    SortMode.TRACK_ASC: (lambda t: t.title, False),
    SortMode.TRACK_DESC: (lambda t: t.title, True),
}


def sort_tracks(tracks: Sequence[Track], mode: SortMode = SortMode.DEFAULT) -> Tuple[Track, ...]:
    """
    Stable sort; ties keep their playlist order in both directions.
    """
    if mode is SortMode.DEFAULT:
        return tuple(tracks)

    field, reverse = _SORT_FIELDS[mode]
    return tuple(
        sorted(tracks, key=lambda t: collation_key(field(t) or ""), reverse=reverse)
    )


def normalize_search_text(text: str) -> str:
    lowered = (text or "").lower()
    return _WHITESPACE.sub(" ", _SEARCH_STRIP.sub("", lowered)).strip()


def search_tokens(query: str) -> List[str]:
    """
    Usable tokens of a search query. Single characters are dropped as noise.
    """
    return [tok for tok in normalize_search_text(query).split(" ") if len(tok) > 1]


def track_haystack(track: Track) -> str:
    return normalize_search_text(f"{track.title} {track.artist} {track.album}")


def matches_query(track: Track, tokens: Iterable[str]) -> bool:
    """
    True when every token is a substring of the track's title/artist/album.
    """
    haystack = track_haystack(track)
    return all(tok in haystack for tok in tokens)


def filter_tracks(tracks: Sequence[Track], query: str) -> Tuple[Track, ...]:
    tokens = search_tokens(query)
    if not tokens:
        return tuple(tracks)
    return tuple(t for t in tracks if matches_query(t, tokens))


def apply_view(tracks: Sequence[Track], state: ViewState) -> Tuple[Track, ...]:
    """
    Derived view of `tracks`: sorted first, then filtered.
    """
    return filter_tracks(sort_tracks(tracks, state.sort_mode), state.search_query)
