"""
Technical description of a track, as needed to size playback buffers.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from jellyfin_cli.exceptions import MetadataIncompleteError
from jellyfin_cli.utils.formatting import ticks_to_timedelta


def _first_audio_stream(streams: list[Any]) -> dict[str, Any] | None:
    """Returns the first media stream that is audio (or untyped)."""
    for stream in streams:
        if isinstance(stream, dict) and stream.get("Type", "Audio") == "Audio":
            return stream
    return None


def _require_int(container: dict[str, Any], key: str, where: str, positive: bool) -> int:
    value = container.get(key)
    # bool is an int subclass and must not pass as a count
    if not isinstance(value, int) or isinstance(value, bool):
        raise MetadataIncompleteError(f"{where}.{key} is missing or not an integer.")
    if value < 0 or (positive and value == 0):
        raise MetadataIncompleteError(f"{where}.{key} has invalid value {value}.")
    return value


@dataclass(frozen=True)
class SongDescriptor:
    """Channel layout, sample rate, duration and file size of one track."""

    channels: int
    sample_rate: int
    duration: timedelta
    file_size: int

    @classmethod
    def from_item(cls, item: dict[str, Any]) -> "SongDescriptor":
        """
        Builds a descriptor from an `/Items/{id}` payload.

        Raises:
            MetadataIncompleteError: If any required field is absent or unusable.
                Zero channels or a zero sample rate count as absent.
        """
        streams = item.get("MediaStreams")
        stream = _first_audio_stream(streams) if isinstance(streams, list) else None
        if stream is None:
            raise MetadataIncompleteError("Item has no audio media stream.")

        sources = item.get("MediaSources")
        if not isinstance(sources, list) or not sources or not isinstance(sources[0], dict):
            raise MetadataIncompleteError("Item has no media source.")

        return cls(
            channels=_require_int(stream, "Channels", "MediaStreams", positive=True),
            sample_rate=_require_int(stream, "SampleRate", "MediaStreams", positive=True),
            duration=ticks_to_timedelta(
                _require_int(item, "RunTimeTicks", "Item", positive=False)
            ),
            file_size=_require_int(sources[0], "Size", "MediaSources", positive=False),
        )
