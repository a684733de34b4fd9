"""
Read-only catalog queries: artists, discographies, song inventory and the
technical metadata of a single track.

Every call is one round trip with fixed query parameters and no retry. The
listing calls degrade to an empty list when the server answers with an error
status or an unreadable body; network failures and rejected tokens always
propagate.
"""

import logging
from typing import Any

from pydantic import BaseModel, ValidationError

from jellyfin_cli.exceptions import DeserializationError, ServerError
from jellyfin_cli.models.catalog import (
    Artist,
    ArtistPage,
    Discography,
    DiscographySong,
)
from jellyfin_cli.models.song import SongDescriptor

from .headers import ARTISTS_QUERY, SONGS_QUERY, build_discography_query
from .session import Session

log = logging.getLogger(__name__)


async def _fetch_page(
    session: Session, path: str, params: dict[str, Any], model: type[BaseModel]
) -> BaseModel:
    """Fetches one page and validates it, folding schema errors into DeserializationError."""
    payload = await session.get_json(path, params)
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise DeserializationError(f"Unexpected response from {path}: {e}") from e


async def list_artists(session: Session) -> list[Artist]:
    """
    Lists the first page of artists, sorted by display name.

    Returns:
        Artists in server order, or an empty list if the server failed.
    """
    try:
        page = await _fetch_page(session, "/Artists", dict(ARTISTS_QUERY), ArtistPage)
    except (ServerError, DeserializationError) as e:
        log.warning(f"[yellow]Error getting artists: {e}[/yellow]")
        return []
    log.debug(f"Fetched {len(page.items)} of {page.total_record_count} artists.")
    return page.items


async def get_discography(session: Session, artist_id: str) -> list[DiscographySong]:
    """
    Lists every track attributed to an artist, sorted by album then track name.

    Grouping by album is left to the caller (see `utils.discography.group_by_album`).

    Args:
        session: The session to query with.
        artist_id: The artist's server id, as found on `Artist.id`.

    Returns:
        Tracks in server order, or an empty list if the server failed.
    """
    try:
        discography = await _fetch_page(
            session,
            f"/Users/{session.user_id}/Items",
            build_discography_query(artist_id),
            Discography,
        )
    except (ServerError, DeserializationError) as e:
        log.warning(f"[yellow]Error getting discography for {artist_id}: {e}[/yellow]")
        return []
    return discography.items


async def list_songs(session: Session) -> list[DiscographySong]:
    """Lists the first page of the user's audio items, sorted by album then name."""
    try:
        discography = await _fetch_page(
            session, f"/Users/{session.user_id}/Items", dict(SONGS_QUERY), Discography
        )
    except (ServerError, DeserializationError) as e:
        log.warning(f"[yellow]Error getting songs: {e}[/yellow]")
        return []
    return discography.items


async def resolve_song_metadata(session: Session, song_id: str) -> SongDescriptor:
    """
    Resolves the channel count, sample rate, duration and size of one track.

    There is no meaningful empty descriptor, so unlike the listing calls every
    failure is raised.

    Raises:
        MetadataIncompleteError: If a required numeric field is missing.
        ServerError: If the server answered with an error status.
        DeserializationError: If the body is not a JSON object.
        AuthorizationError: If the server rejected the access token.
        TransportError: On connection-level failure.
    """
    item = await session.get_json(f"/Items/{song_id}")
    if not isinstance(item, dict):
        raise DeserializationError(f"Item {song_id} is not a JSON object.")
    descriptor = SongDescriptor.from_item(item)
    log.debug(
        f"Song {song_id}: {descriptor.channels} ch, {descriptor.sample_rate} Hz, "
        f"{descriptor.file_size} bytes"
    )
    return descriptor
