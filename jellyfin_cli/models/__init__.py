"""
Data Models Layer.

This package contains the Pydantic models and dataclasses that describe
configuration, credentials and the catalog records returned by the server.
"""

from .catalog import (
    Artist,
    ArtistPage,
    AuthenticationResult,
    Discography,
    DiscographySong,
    NameIdPair,
    UserData,
)
from .config import ClientIdentity, Credentials, ServerConfig
from .song import SongDescriptor

__all__ = [
    "Artist",
    "ArtistPage",
    "AuthenticationResult",
    "ClientIdentity",
    "Credentials",
    "Discography",
    "DiscographySong",
    "NameIdPair",
    "ServerConfig",
    "SongDescriptor",
    "UserData",
]
