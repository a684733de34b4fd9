"""
Utility for presenting an artist's discography album by album.
"""

from dataclasses import dataclass, field

from jellyfin_cli.models.catalog import DiscographySong


@dataclass
class DiscographyAlbum:
    """All tracks of one album, in server order."""

    album_id: str
    album: str
    album_artist: str
    songs: list[DiscographySong] = field(default_factory=list)

    @property
    def run_time_ticks(self) -> int:
        return sum(song.run_time_ticks for song in self.songs)


def group_by_album(songs: list[DiscographySong]) -> list[DiscographyAlbum]:
    """
    Groups a flat discography by `album_id`.

    Albums appear in the order of their first track and tracks keep their
    server order inside each album. Tracks without an album id are grouped
    by album name instead.

    Args:
        songs: Tracks as returned by `get_discography`.

    Returns:
        One DiscographyAlbum per distinct album.
    """
    albums: dict[str, DiscographyAlbum] = {}
    for song in songs:
        key = song.album_id or f"name:{song.album}"
        group = albums.get(key)
        if group is None:
            group = DiscographyAlbum(
                album_id=song.album_id,
                album=song.album,
                album_artist=song.album_artist,
            )
            albums[key] = group
        group.songs.append(song)
    return list(albums.values())
