"""Bounded, closeable channel between a search worker and its consumer.

One producer thread sends; one consumer iterates. ``send`` blocks while the
buffer is full, which keeps a search over a very branchy graph from piling
up matches in memory. The consumer hangs up with ``close``; any send after
that (or blocked at that moment) raises ``ChannelClosedError``, which the
worker takes as its cancellation signal.
"""

from __future__ import annotations

import threading
from collections import deque
from typing import TYPE_CHECKING, Generic, TypeVar

import structlog

from tvgraph.domain.errors import ChannelClosedError

if TYPE_CHECKING:
    from collections.abc import Iterator

log = structlog.get_logger(__name__)

T = TypeVar("T")


class PathChannel(Generic[T]):
    """Single-producer / single-consumer bounded queue with hang-up."""

    def __init__(self, capacity: int = 50) -> None:
        if capacity < 1:
            msg = f"channel capacity must be >= 1, got {capacity}"
            raise ValueError(msg)
        self._capacity = capacity
        self._buffer: deque[T] = deque()
        self._cond = threading.Condition()
        self._finished = False
        self._closed = False
        self._error: BaseException | None = None

    # -- producer side ------------------------------------------------------

    def send(self, item: T) -> None:
        """Enqueue ``item``, blocking while the buffer is full."""
        with self._cond:
            while len(self._buffer) >= self._capacity and not self._closed:
                self._cond.wait()
            if self._closed:
                raise ChannelClosedError("consumer closed the channel")
            self._buffer.append(item)
            self._cond.notify_all()

    def finish(self, error: BaseException | None = None) -> None:
        """Mark production complete, optionally carrying the producer's failure.

        The consumer still receives everything sent before this call; the
        error, if any, is raised after the last item.
        """
        with self._cond:
            self._finished = True
            self._error = error
            self._cond.notify_all()

    # -- consumer side ------------------------------------------------------

    def recv(self) -> T:
        """Dequeue the next item, blocking while the buffer is empty.

        Raises ``StopIteration`` once production is finished and drained, or
        after the consumer closed the channel. Re-raises the producer's
        failure if ``finish`` carried one.
        """
        with self._cond:
            while not self._buffer and not self._finished and not self._closed:
                self._cond.wait()
            if self._buffer and not self._closed:
                item = self._buffer.popleft()
                self._cond.notify_all()
                return item
            if self._error is not None and not self._closed:
                error, self._error = self._error, None
                raise error
            raise StopIteration

    def close(self) -> None:
        """Hang up: drop buffered items and fail any current or future send."""
        with self._cond:
            if self._closed:
                return
            self._closed = True
            dropped = len(self._buffer)
            self._buffer.clear()
            self._cond.notify_all()
        log.debug("channel_closed", dropped=dropped)

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                yield self.recv()
            except StopIteration:
                return

    # -- introspection ------------------------------------------------------

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def finished(self) -> bool:
        return self._finished

    def __len__(self) -> int:
        with self._cond:
            return len(self._buffer)
