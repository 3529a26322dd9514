import csv
import io
import re
from typing import Dict, Sequence
from urllib.parse import quote

from app.core.models import Track

CSV_HEADERS = [
    "Track",
    "Artist",
    "Album",
    "Year",
    "Lyrics",
    "YouTube",
    "Color Coded",
    "Fandom",
]

_FILENAME_UNSAFE = re.compile(r"[^a-z0-9]+")


def google_search_url(query: str) -> str:
    return f"https://www.google.com/search?q={quote(query, safe='')}"


def search_links(track: Track) -> Dict[str, str]:
    """
    Web search shortcuts for one track, keyed by CSV column.
    """
    base = f"{track.title} {track.artist}"
    return {
        "Lyrics": google_search_url(
            f"{base} lyrics site:genius.com OR site:azlyrics.com OR site:musixmatch.com"
        ),
        "YouTube": google_search_url(f"{base} site:youtube.com"),
        "Color Coded": google_search_url(f"{base} color coded lyrics"),
        "Fandom": google_search_url(f"{base} lyrics site:fandom.com"),
    }


def sanitize_filename(name: str) -> str:
    """
    "Today's Top Hits" -> "today-s-top-hits"
    """
    cleaned = _FILENAME_UNSAFE.sub("-", (name or "").lower()).strip("-")
    return cleaned or "playlist"


def playlist_to_csv(tracks: Sequence[Track]) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_HEADERS, lineterminator="\n")
    writer.writeheader()

    for track in tracks:
        row = {
            "Track": track.title,
            "Artist": track.artist,
            "Album": track.album,
            "Year": track.year,
        }
        row.update(search_links(track))
        writer.writerow(row)

    return buffer.getvalue()
