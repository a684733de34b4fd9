from datetime import timedelta

import pytest

from jellyfin_cli.api import (
    get_discography,
    list_artists,
    list_songs,
    resolve_song_metadata,
)
from jellyfin_cli.exceptions import (
    AuthorizationError,
    DeserializationError,
    MetadataIncompleteError,
    ServerError,
)

from .mock_jellyfin import USER_ID, json_handler, status_handler
from .payloads import (
    ARTIST_AGAR_AGAR,
    ARTIST_FLAM,
    CARDAN,
    DISCOGRAPHY_ITEMS,
    song_item,
)

ITEMS_PATH = f"/Users/{USER_ID}/Items"
SONG_ID = "b26c12ffca74316396cb3d366a7f09f5"


# --- Artists ---


@pytest.mark.asyncio
async def test_list_artists_keeps_server_order(jellyfin, session):
    payload = {
        "Items": [ARTIST_AGAR_AGAR, ARTIST_FLAM],
        "StartIndex": 0,
        "TotalRecordCount": 2,
    }
    jellyfin.route("GET", "/Artists", json_handler(payload))

    artists = await list_artists(session)

    assert [a.name for a in artists] == ["Agar Agar", "Flam"]
    assert artists[1].id == ARTIST_FLAM["Id"]
    assert artists[1].run_time_ticks == 4505260770
    assert artists[0].user_data.is_favorite is True


@pytest.mark.asyncio
async def test_list_artists_sends_first_page_query(jellyfin, session):
    jellyfin.route("GET", "/Artists", json_handler({"Items": []}))

    await list_artists(session)

    query = jellyfin.requests_to("/Artists")[0]["query"]
    assert query["SortBy"] == "SortName"
    assert query["SortOrder"] == "Ascending"
    assert query["Recursive"] == "true"
    assert query["StartIndex"] == "0"
    assert query["Limit"] == "100"


@pytest.mark.asyncio
async def test_list_artists_server_error_returns_empty(jellyfin, session):
    jellyfin.route("GET", "/Artists", status_handler(500))

    assert await list_artists(session) == []


@pytest.mark.asyncio
async def test_list_artists_unreadable_body_returns_empty(jellyfin, session):
    jellyfin.route("GET", "/Artists", status_handler(200, "not json"))

    assert await list_artists(session) == []


@pytest.mark.asyncio
async def test_list_artists_wrong_shape_returns_empty(jellyfin, session):
    jellyfin.route("GET", "/Artists", json_handler({"Items": [{"Name": "no id"}]}))

    assert await list_artists(session) == []


@pytest.mark.asyncio
async def test_list_artists_rejected_token_raises(jellyfin, session):
    jellyfin.route("GET", "/Artists", status_handler(401))

    with pytest.raises(AuthorizationError) as exc_info:
        await list_artists(session)
    assert exc_info.value.status == 401


# --- Discography and songs ---


@pytest.mark.asyncio
async def test_get_discography_queries_artist_tracks(jellyfin, session):
    jellyfin.route("GET", ITEMS_PATH, json_handler({"Items": DISCOGRAPHY_ITEMS}))

    songs = await get_discography(session, ARTIST_AGAR_AGAR["Id"])

    assert [s.name for s in songs] == [
        "Cuidado, Peligro, Eclipse",
        "Sorry Baby",
        "Prettiest Virgin",
    ]
    assert songs[0].album_id == CARDAN
    assert songs[0].album_artists[0].name == "Agar Agar"

    query = jellyfin.requests_to(ITEMS_PATH)[0]["query"]
    assert query["ArtistIds"] == ARTIST_AGAR_AGAR["Id"]
    assert query["IncludeItemTypes"] == "Audio"
    assert query["Recursive"] == "true"
    assert query["SortBy"] == "Album,SortName"
    assert query["SortOrder"] == "Ascending"


@pytest.mark.asyncio
async def test_get_discography_server_error_returns_empty(jellyfin, session):
    jellyfin.route("GET", ITEMS_PATH, status_handler(503))

    assert await get_discography(session, ARTIST_FLAM["Id"]) == []


@pytest.mark.asyncio
async def test_list_songs_uses_user_items(jellyfin, session):
    jellyfin.route("GET", ITEMS_PATH, json_handler({"Items": DISCOGRAPHY_ITEMS[:1]}))

    songs = await list_songs(session)

    assert [s.id for s in songs] == [SONG_ID]
    query = jellyfin.requests_to(ITEMS_PATH)[0]["query"]
    assert "ArtistIds" not in query
    assert query["EnableImageTypes"] == "Primary"


# --- Song metadata ---


@pytest.mark.asyncio
async def test_resolve_song_metadata(jellyfin, session):
    jellyfin.route("GET", f"/Items/{SONG_ID}", json_handler(song_item()))

    descriptor = await resolve_song_metadata(session, SONG_ID)

    assert descriptor.channels == 2
    assert descriptor.sample_rate == 44100
    assert descriptor.file_size == 14487065
    assert descriptor.duration == timedelta(seconds=360, microseconds=97959)


@pytest.mark.asyncio
async def test_resolve_song_metadata_skips_non_audio_streams(jellyfin, session):
    item = song_item()
    item["MediaStreams"] = list(reversed(item["MediaStreams"]))
    jellyfin.route("GET", f"/Items/{SONG_ID}", json_handler(item))

    descriptor = await resolve_song_metadata(session, SONG_ID)

    assert descriptor.channels == 2


@pytest.mark.asyncio
async def test_resolve_song_metadata_missing_channels(jellyfin, session):
    item = song_item()
    del item["MediaStreams"][0]["Channels"]
    jellyfin.route("GET", f"/Items/{SONG_ID}", json_handler(item))

    with pytest.raises(MetadataIncompleteError):
        await resolve_song_metadata(session, SONG_ID)


@pytest.mark.asyncio
async def test_resolve_song_metadata_zero_channels(jellyfin, session):
    item = song_item()
    item["MediaStreams"][0]["Channels"] = 0
    jellyfin.route("GET", f"/Items/{SONG_ID}", json_handler(item))

    with pytest.raises(MetadataIncompleteError):
        await resolve_song_metadata(session, SONG_ID)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"MediaSources": []},
        {"MediaStreams": []},
        {"RunTimeTicks": None},
        {"RunTimeTicks": "3600979590"},
    ],
)
async def test_resolve_song_metadata_incomplete_item(jellyfin, session, overrides):
    jellyfin.route("GET", f"/Items/{SONG_ID}", json_handler(song_item(**overrides)))

    with pytest.raises(MetadataIncompleteError):
        await resolve_song_metadata(session, SONG_ID)


@pytest.mark.asyncio
async def test_resolve_song_metadata_server_error_raises(jellyfin, session):
    jellyfin.route("GET", f"/Items/{SONG_ID}", status_handler(404))

    with pytest.raises(ServerError) as exc_info:
        await resolve_song_metadata(session, SONG_ID)
    assert exc_info.value.status == 404


@pytest.mark.asyncio
async def test_resolve_song_metadata_non_object_body(jellyfin, session):
    jellyfin.route("GET", f"/Items/{SONG_ID}", json_handler([1, 2, 3]))

    with pytest.raises(DeserializationError):
        await resolve_song_metadata(session, SONG_ID)
