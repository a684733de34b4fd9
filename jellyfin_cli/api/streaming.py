"""
Opens the universal audio endpoint and exposes the response body as a lazy,
cancellable sequence of byte chunks.
"""

import asyncio
import logging
from typing import Optional

import aiohttp

from jellyfin_cli.exceptions import StreamInterruptedError

from .headers import build_stream_query
from .session import Session

log = logging.getLogger(__name__)


class AudioStream:
    """
    A single-use async iterator over the chunks of one audio transfer.

    Chunks are handed out as soon as they arrive. With chunked transfer
    encoding each item is exactly one HTTP chunk, in wire order. A transfer
    that breaks off mid-way delivers what it received, then raises
    StreamInterruptedError (also kept on `error`). Closing the stream, or
    leaving its `async with` block, before the end drops the connection.
    """

    def __init__(self, response: Optional[aiohttp.ClientResponse], track_id: str):
        self.track_id = track_id
        self.error: Optional[StreamInterruptedError] = None
        self.bytes_received = 0
        self.chunks_received = 0
        self._response = response
        self._finished = response is None
        self._chunked = response is not None and (
            "chunked" in response.headers.get("Transfer-Encoding", "").lower()
        )

    @classmethod
    def empty(cls, track_id: str) -> "AudioStream":
        """A stream that is already exhausted."""
        return cls(None, track_id)

    @property
    def closed(self) -> bool:
        return self._finished

    @property
    def failed(self) -> bool:
        return self.error is not None

    def __aiter__(self) -> "AudioStream":
        return self

    async def __anext__(self) -> bytes:
        if self._finished:
            raise StopAsyncIteration

        try:
            chunk = await self._read_chunk()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self._drop_connection()
            self.error = StreamInterruptedError(
                f"Audio stream for {self.track_id} broke off after "
                f"{self.bytes_received} bytes: {e}"
            )
            log.warning(f"[yellow]{self.error}[/yellow]")
            raise self.error from e
        except asyncio.CancelledError:
            self._drop_connection()
            raise

        if not chunk:
            self._finished = True
            self._response.release()
            log.debug(
                f"Audio stream for {self.track_id} ended: {self.chunks_received} "
                f"chunks, {self.bytes_received} bytes"
            )
            raise StopAsyncIteration

        self.bytes_received += len(chunk)
        self.chunks_received += 1
        return chunk

    async def _read_chunk(self) -> bytes:
        """Reads the next chunk; returns b'' at end of body."""
        content = self._response.content
        if not self._chunked:
            data, _ = await content.readchunk()
            return data

        # Reassemble an HTTP chunk the socket delivered in pieces.
        parts = []
        while True:
            data, end_of_http_chunk = await content.readchunk()
            if data:
                parts.append(data)
            if end_of_http_chunk:
                if parts:
                    return b"".join(parts)
            elif not data:
                return b"".join(parts)

    def _drop_connection(self) -> None:
        self._finished = True
        if self._response is not None:
            self._response.close()

    async def aclose(self) -> None:
        """Stops the transfer and closes the connection. Safe to call twice."""
        if not self._finished:
            log.debug(
                f"Audio stream for {self.track_id} closed early after "
                f"{self.bytes_received} bytes"
            )
            self._drop_connection()

    async def __aenter__(self) -> "AudioStream":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    def __del__(self):
        if not getattr(self, "_finished", True) and self._response is not None:
            self._response.close()


async def open_audio_stream(
    session: Session, track_id: str, *, start_time_ticks: int = 0
) -> AudioStream:
    """
    Requests a track from the universal audio endpoint.

    Only the response headers are awaited here; the body is read as the
    returned stream is iterated. An error status yields an empty stream so
    that "nothing to play" looks the same as a track that has ended.

    Args:
        session: The session to stream with.
        track_id: The server id of the track.
        start_time_ticks: Offset into the track, in server ticks.

    Raises:
        AuthorizationError: If the server rejected the access token.
        TransportError: If the request could not be sent.
    """
    response = await session.get(
        f"/Audio/{track_id}/universal",
        build_stream_query(session.user_id, session.access_token, start_time_ticks),
    )
    if not response.ok:
        log.warning(
            f"[yellow]Error getting audio stream for {track_id}. "
            f"Status: {response.status}[/yellow]"
        )
        response.release()
        return AudioStream.empty(track_id)

    log.debug(
        f"Opened audio stream for {track_id} "
        f"({response.headers.get('Content-Type', 'unknown type')})"
    )
    return AudioStream(response, track_id)
