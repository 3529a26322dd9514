from typing import Any, Dict, Iterable, List, Optional

from app.core.models import Track


def pick_album_image(images: Optional[List[Dict[str, Any]]]) -> Optional[str]:
    """
    Pick a small album cover for thumbnails.

    Spotify lists images largest first, so the third entry is usually the
    64px one. Falls back to the last entry, then the first.
    """
    if not isinstance(images, list) or not images:
        return None

    for candidate in (images[2] if len(images) > 2 else None, images[-1], images[0]):
        url = (candidate or {}).get("url")
        if url:
            return url
    return None


def normalize_item(item: Optional[Dict[str, Any]]) -> Optional[Track]:
    """
    Map one playlist item to a Track.

    Returns None when the item has no track payload (removed or local
    tracks come back that way).
    """
    t = (item or {}).get("track")
    if not t:
        return None

    album = t.get("album") or {}
    artists = t.get("artists") or []
    release_date = album.get("release_date") or ""

    return Track(
        title=t.get("name") or "",
        artist=", ".join(
            a.get("name") or "" for a in artists if isinstance(a, dict)
        ),
        album=album.get("name") or "",
        year=release_date[:4],
        album_image_url=pick_album_image(album.get("images")),
        external_url=(t.get("external_urls") or {}).get("spotify") or None,
    )


def normalize_items(items: Iterable[Optional[Dict[str, Any]]]) -> List[Track]:
    tracks: List[Track] = []
    for item in items:
        track = normalize_item(item)
        if track is not None:
            tracks.append(track)
    return tracks
