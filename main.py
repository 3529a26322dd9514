import argparse
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from app.config import load_settings
from app.core import (
    Track,
    configure_logging,
    log_error,
    log_exception,
    log_section,
    log_success,
    log_warning,
)
from app.spotify import PlaylistError, load_playlist_from_url
from app.view import SortMode, ViewState, apply_view, playlist_to_csv


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="List every track of a Spotify playlist.",
    )
    parser.add_argument("url", help="Spotify playlist URL")
    parser.add_argument(
        "--token",
        default=None,
        help="User access token (needed for private playlists).",
    )
    parser.add_argument(
        "--sort",
        choices=[m.value for m in SortMode],
        default=SortMode.DEFAULT.value,
    )
    parser.add_argument("--search", default="", help="Filter on title/artist/album.")
    parser.add_argument("--csv", type=Path, default=None, help="Write CSV here.")
    return parser


def format_rows(tracks: Sequence[Track]) -> List[str]:
    rows = []
    for i, t in enumerate(tracks, start=1):
        year = f" [{t.year}]" if t.year else ""
        rows.append(f"{i:>4}. {t.title} — {t.artist} (album: {t.album}){year}")
    return rows


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    try:
        playlist = load_playlist_from_url(args.url, args.token, load_settings())
    except PlaylistError as e:
        log_error(e.message)
        return 1
    except Exception as e:
        log_exception(f"Could not load playlist: {e}")
        return 1

    state = ViewState(sort_mode=SortMode(args.sort), search_query=args.search)
    tracks = apply_view(playlist.tracks, state)

    if not playlist.complete:
        log_warning("Some pages could not be fetched, the list is incomplete.")

    if args.csv is not None:
        args.csv.write_text(playlist_to_csv(tracks), encoding="utf-8")
        log_success(f"{len(tracks)} tracks written to {args.csv}")
        return 0

    log_section(f"{playlist.name} ({len(tracks)}/{len(playlist.tracks)} tracks)")
    for row in format_rows(tracks):
        print(row)
    return 0


if __name__ == "__main__":
    sys.exit(main())
