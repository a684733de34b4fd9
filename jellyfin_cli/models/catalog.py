"""
Pydantic models for the catalog records returned by the Jellyfin API.

Field names follow Python conventions; the server's PascalCase keys are kept as
aliases so that records can be dumped back to the wire format unchanged.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class JellyfinModel(BaseModel):
    """Base model for Jellyfin responses."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class UserData(JellyfinModel):
    """Per-user playback bookkeeping. Owned by the server, read-only here."""

    playback_position_ticks: int = Field(0, alias="PlaybackPositionTicks")
    play_count: int = Field(0, alias="PlayCount")
    is_favorite: bool = Field(False, alias="IsFavorite")
    played: bool = Field(False, alias="Played")
    key: str = Field("", alias="Key")


class NameIdPair(JellyfinModel):
    id: str = Field(alias="Id")
    name: str = Field("", alias="Name")


class Artist(JellyfinModel):
    """A music artist. `id` is the key used for discography queries."""

    id: str = Field(alias="Id")
    name: str = Field(alias="Name")
    sort_name: str = Field("", alias="SortName")
    run_time_ticks: int = Field(0, alias="RunTimeTicks")
    user_data: UserData = Field(default_factory=UserData, alias="UserData")
    type: str = Field("MusicArtist", alias="Type")
    server_id: Optional[str] = Field(None, alias="ServerId")
    channel_id: Optional[str] = Field(None, alias="ChannelId")
    image_tags: dict[str, Any] = Field(default_factory=dict, alias="ImageTags")
    image_blur_hashes: dict[str, Any] = Field(
        default_factory=dict, alias="ImageBlurHashes"
    )
    location_type: str = Field("", alias="LocationType")
    media_type: str = Field("", alias="MediaType")


class ArtistPage(JellyfinModel):
    """First page of the artists listing."""

    items: list[Artist] = Field(default_factory=list, alias="Items")
    start_index: int = Field(0, alias="StartIndex")
    total_record_count: int = Field(0, alias="TotalRecordCount")


class DiscographySong(JellyfinModel):
    """A single audio track as returned by the user items endpoint."""

    id: str = Field(alias="Id")
    name: str = Field(alias="Name")
    album: str = Field("", alias="Album")
    album_id: str = Field("", alias="AlbumId")
    album_artist: str = Field("", alias="AlbumArtist")
    album_artists: list[NameIdPair] = Field(default_factory=list, alias="AlbumArtists")
    artists: list[str] = Field(default_factory=list, alias="Artists")
    album_primary_image_tag: Optional[str] = Field(None, alias="AlbumPrimaryImageTag")
    genres: list[str] = Field(default_factory=list, alias="Genres")
    run_time_ticks: int = Field(0, alias="RunTimeTicks")
    date_created: Optional[str] = Field(None, alias="DateCreated")
    premiere_date: Optional[str] = Field(None, alias="PremiereDate")
    production_year: Optional[int] = Field(None, alias="ProductionYear")
    index_number: Optional[int] = Field(None, alias="IndexNumber")
    parent_index_number: Optional[int] = Field(None, alias="ParentIndexNumber")
    user_data: UserData = Field(default_factory=UserData, alias="UserData")
    parent_id: Optional[str] = Field(None, alias="ParentId")
    parent_backdrop_item_id: Optional[str] = Field(None, alias="ParentBackdropItemId")
    parent_backdrop_image_tags: list[str] = Field(
        default_factory=list, alias="ParentBackdropImageTags"
    )
    backdrop_image_tags: list[str] = Field(
        default_factory=list, alias="BackdropImageTags"
    )
    channel_id: Optional[str] = Field(None, alias="ChannelId")
    server_id: Optional[str] = Field(None, alias="ServerId")
    has_lyrics: bool = Field(False, alias="HasLyrics")
    is_folder: bool = Field(False, alias="IsFolder")
    media_type: str = Field("Audio", alias="MediaType")
    normalization_gain: Optional[float] = Field(None, alias="NormalizationGain")


class Discography(JellyfinModel):
    """Tracks in server order: by album, then by sort name."""

    items: list[DiscographySong] = Field(default_factory=list, alias="Items")
    start_index: int = Field(0, alias="StartIndex")
    total_record_count: int = Field(0, alias="TotalRecordCount")


class AuthenticatedUser(JellyfinModel):
    id: str = Field(alias="Id")
    name: str = Field("", alias="Name")


class AuthenticationResult(JellyfinModel):
    """The parts of the login response the session relies on."""

    access_token: str = Field(alias="AccessToken")
    user: AuthenticatedUser = Field(alias="User")
    server_id: Optional[str] = Field(None, alias="ServerId")
