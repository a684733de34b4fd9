"""
Header and query-parameter construction shared by every Jellyfin request.
"""

from typing import Any

from jellyfin_cli.models.config import ClientIdentity

TOKEN_HEADER = "X-MediaBrowser-Token"
CLIENT_HEADER = "x-emby-authorization"

# Fixed per-operation query parameters. Only the first page is ever requested.
ARTISTS_QUERY: dict[str, str] = {
    "SortBy": "SortName",
    "SortOrder": "Ascending",
    "Recursive": "true",
    "Fields": "SortName",
    "ImageTypeLimit": "-1",
    "StartIndex": "0",
    "Limit": "100",
}

DISCOGRAPHY_QUERY: dict[str, str] = {
    "SortBy": "Album,SortName",
    "SortOrder": "Ascending",
    "Recursive": "true",
    "IncludeItemTypes": "Audio",
    "Fields": "Genres,DateCreated,MediaSources,ParentId",
    "StartIndex": "0",
    "ImageTypeLimit": "1",
    "Limit": "100",
}

SONGS_QUERY: dict[str, str] = {
    "SortBy": "Album,SortName",
    "SortOrder": "Ascending",
    "IncludeItemTypes": "Audio",
    "Recursive": "true",
    "Fields": "ParentId",
    "StartIndex": "0",
    "ImageTypeLimit": "1",
    "EnableImageTypes": "Primary",
    "Limit": "100",
}

# Containers the client can play directly, in order of preference.
DIRECT_PLAY_CONTAINERS = (
    "opus,webm|opus,mp3,aac,m4a|aac,m4b|aac,flac,webma,webm|webma,wav,ogg"
)


def build_login_headers(identity: ClientIdentity) -> dict[str, str]:
    """Headers for the unauthenticated login call. The JSON body sets Content-Type."""
    return {CLIENT_HEADER: identity.authorization_value()}


def build_auth_headers(identity: ClientIdentity, access_token: str) -> dict[str, str]:
    """Headers every authorized call must carry: the token and the client id."""
    return {
        TOKEN_HEADER: access_token,
        CLIENT_HEADER: identity.authorization_value(),
    }


def build_discography_query(artist_id: str) -> dict[str, str]:
    return {**DISCOGRAPHY_QUERY, "ArtistIds": artist_id}


def build_stream_query(
    user_id: str, access_token: str, start_time_ticks: int = 0
) -> dict[str, Any]:
    """
    Builds the transcoding negotiation for the universal audio endpoint.

    The server direct-plays any container in the preference list and otherwise
    transcodes to AAC in an MP4 container.
    """
    return {
        "UserId": user_id,
        "Container": DIRECT_PLAY_CONTAINERS,
        "TranscodingContainer": "mp4",
        "TranscodingProtocol": "hls",
        "AudioCodec": "aac",
        "api_key": access_token,
        "StartTimeTicks": str(start_time_ticks),
        "EnableRedirection": "true",
        "EnableRemoteMedia": "false",
    }
