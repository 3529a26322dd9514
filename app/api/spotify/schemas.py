from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.core import Playlist, Track


class TrackOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    artist: str
    album: str
    year: str
    album_image_url: Optional[str] = Field(default=None, alias="albumImageUrl")
    external_url: Optional[str] = Field(default=None, alias="externalUrl")

    @classmethod
    def from_track(cls, track: Track) -> "TrackOut":
        return cls(
            title=track.title,
            artist=track.artist,
            album=track.album,
            year=track.year,
            album_image_url=track.album_image_url,
            external_url=track.external_url,
        )


class PlaylistResponse(BaseModel):
    name: str
    tracks: List[TrackOut]

    @classmethod
    def from_playlist(cls, playlist: Playlist) -> "PlaylistResponse":
        return cls(
            name=playlist.name,
            tracks=[TrackOut.from_track(t) for t in playlist.tracks],
        )


class ErrorResponse(BaseModel):
    error: str
