"""
A bounded read-ahead buffer between the network reader and the playback consumer.
"""

import asyncio
import logging
from contextlib import suppress
from typing import Optional

from jellyfin_cli.api.streaming import AudioStream

log = logging.getLogger(__name__)

_END = object()


class PrefetchBuffer:
    """
    Reads an AudioStream ahead of its consumer into a bounded queue.

    One background task is the only producer and the iterating caller is the
    only consumer. The producer suspends while the queue is full and the
    consumer while it is empty. Chunks come out in the order they were read.
    If the stream fails, the chunks read before the failure are delivered and
    the error is raised to the consumer afterwards.

    The producer runs until the stream ends or the buffer is closed. A
    consumer that stops iterating early must call `aclose()` or use
    `async with`; otherwise the producer stays suspended on the full queue
    and the connection stays open.
    """

    def __init__(self, stream: AudioStream, max_chunks: int = 32):
        """
        Args:
            stream: The stream to read ahead from. The buffer takes ownership.
            max_chunks: How many chunks may wait in the queue.
        """
        if max_chunks < 1:
            raise ValueError("max_chunks must be at least 1.")
        self.stream = stream
        self.max_chunks = max_chunks
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=max_chunks)
        self._producer: Optional[asyncio.Task] = None
        self._done = False

    @property
    def buffered(self) -> int:
        """Number of chunks currently waiting for the consumer."""
        return self._queue.qsize()

    def start(self) -> None:
        """Starts the producer task. Starting twice has no effect."""
        if self._producer is None:
            self._producer = asyncio.create_task(self._fill())
            log.debug(f"Prefetching {self.stream.track_id} ({self.max_chunks} chunks)")

    async def _fill(self) -> None:
        try:
            async for chunk in self.stream:
                await self._queue.put(chunk)
        except Exception as e:
            await self._queue.put(e)
            return
        await self._queue.put(_END)

    def __aiter__(self) -> "PrefetchBuffer":
        return self

    async def __anext__(self) -> bytes:
        if self._done:
            raise StopAsyncIteration
        self.start()
        item = await self._queue.get()
        if item is _END:
            self._done = True
            raise StopAsyncIteration
        if isinstance(item, Exception):
            self._done = True
            raise item
        return item

    async def aclose(self) -> None:
        """Stops the producer and closes the underlying stream."""
        self._done = True
        if self._producer and not self._producer.done():
            self._producer.cancel()
            with suppress(asyncio.CancelledError):
                await self._producer
        await self.stream.aclose()

    async def __aenter__(self) -> "PrefetchBuffer":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()
