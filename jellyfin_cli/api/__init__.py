"""
Jellyfin API Layer.

This package handles all communication with the Jellyfin server: the pooled
transport, the authenticated session, catalog queries and audio streaming.
"""

from .auth import AuthState, JellyfinAuthenticator
from .catalog import get_discography, list_artists, list_songs, resolve_song_metadata
from .session import Session
from .streaming import AudioStream, open_audio_stream
from .transport import Transport

__all__ = [
    "AudioStream",
    "AuthState",
    "JellyfinAuthenticator",
    "Session",
    "Transport",
    "get_discography",
    "list_artists",
    "list_songs",
    "open_audio_stream",
    "resolve_song_metadata",
]
