"""Public façade for the app.view package.

Presentation-time helpers over an aggregated playlist: sorting, searching
and CSV export. Nothing in here performs I/O against Spotify.
"""

from .engine import (
    SortMode,
    ViewState,
    apply_view,
    filter_tracks,
    matches_query,
    normalize_search_text,
    search_tokens,
    sort_tracks,
)
from .export import playlist_to_csv, sanitize_filename, search_links

__all__ = [
    "SortMode",
    "ViewState",
    "apply_view",
    "filter_tracks",
    "matches_query",
    "normalize_search_text",
    "search_tokens",
    "sort_tracks",
    "playlist_to_csv",
    "sanitize_filename",
    "search_links",
]
