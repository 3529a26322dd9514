from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Track:
    """
    Normalized playlist entry.

    - artist : contributing artist names joined with ", "
    - year   : first 4 characters of the album release date, or ""
    """

    title: str
    artist: str
    album: str
    year: str
    album_image_url: Optional[str] = None
    external_url: Optional[str] = None


@dataclass(frozen=True)
class Playlist:
    """
    Aggregated playlist, tracks in upstream pagination order.

    `complete` is False when pagination stopped early on a failed page.
    """

    name: str
    tracks: Tuple[Track, ...]
    complete: bool = True
