"""Search worker: runs path exploration on a dedicated thread.

The worker owns a read-only handle to the store and streams every match
through a bounded ``PathChannel``; the caller consumes it through a
``PathStream`` on its own thread. The store must not be mutated while a
search is in flight. The store does not check this itself.
"""

from __future__ import annotations

import threading
import weakref
from typing import TYPE_CHECKING

import structlog

from tvgraph.domain.errors import ChannelClosedError
from tvgraph.domain.exploration import explore
from tvgraph.settings import SearchSettings
from tvgraph.worker.channel import PathChannel

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from types import TracebackType

    from tvgraph.domain.models import NodeId, PathMatch
    from tvgraph.ports.graph_store import GraphReader

log = structlog.get_logger(__name__)


class PathStream:
    """Consumer handle for one running search.

    Iterate it to receive ``PathMatch`` values in depth-first order. Closing
    it (explicitly or by leaving the ``with`` block) hangs up the channel so
    a worker blocked on a full buffer stops, then joins the worker thread.
    A stream dropped without being closed hangs up the channel when it is
    garbage collected, so an abandoned search does not keep its worker
    blocked.
    """

    def __init__(
        self,
        channel: PathChannel[PathMatch],
        thread: threading.Thread | None,
        join_timeout_s: float = 5.0,
    ) -> None:
        self._channel = channel
        self._thread = thread
        self._join_timeout_s = join_timeout_s
        self._hang_up = weakref.finalize(self, channel.close)

    def __iter__(self) -> Iterator[PathMatch]:
        # Generator keeps the stream alive for as long as it is being iterated
        yield from self._channel

    def close(self) -> None:
        self._hang_up()
        self.join()

    def join(self, timeout: float | None = None) -> None:
        """Wait for the worker thread to exit."""
        if self._thread is not None:
            self._thread.join(self._join_timeout_s if timeout is None else timeout)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def buffered(self) -> int:
        """Matches sent by the worker and not yet consumed."""
        return len(self._channel)

    def __enter__(self) -> PathStream:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class SearchWorker:
    """Starts depth-bounded searches over a store, one thread per search."""

    def __init__(self, graph: GraphReader, settings: SearchSettings | None = None) -> None:
        self._graph = graph
        self._settings = settings or SearchSettings()

    def start(
        self,
        start_label: str,
        stop_predicate: Callable[[str], bool],
        max_depth: int | None = None,
        bidirectional: bool | None = None,
        capacity: int | None = None,
    ) -> PathStream:
        """Launch a search from ``start_label`` and return its stream.

        An unknown start label is a lookup miss, not an error: the returned
        stream is already finished and yields nothing.
        """
        depth = self._settings.default_max_depth if max_depth is None else max_depth
        both_ways = self._settings.bidirectional if bidirectional is None else bidirectional
        channel: PathChannel[PathMatch] = PathChannel(
            self._settings.channel_capacity if capacity is None else capacity,
        )

        start = self._graph.find_node(start_label)
        if start is None:
            log.warning("search_start_not_found", start=start_label)
            channel.finish()
            return PathStream(channel, None, self._settings.join_timeout_s)

        thread = threading.Thread(
            target=self._run,
            args=(start, start_label, stop_predicate, depth, both_ways, channel),
            name=f"tvg-search-{start_label}",
            daemon=True,
        )
        thread.start()
        return PathStream(channel, thread, self._settings.join_timeout_s)

    def _run(
        self,
        start: NodeId,
        start_label: str,
        stop_predicate: Callable[[str], bool],
        max_depth: int,
        bidirectional: bool,
        channel: PathChannel[PathMatch],
    ) -> None:
        emitted = 0

        def emit(match: PathMatch) -> None:
            nonlocal emitted
            channel.send(match)
            emitted += 1

        log.info(
            "search_started",
            start=start_label,
            max_depth=max_depth,
            bidirectional=bidirectional,
            capacity=channel.capacity,
        )
        try:
            explore(
                self._graph,
                start,
                (start,),
                stop_predicate,
                emit,
                max_depth=max_depth,
                bidirectional=bidirectional,
            )
        except ChannelClosedError:
            # Consumer hung up; this search ends here, nothing else is affected
            log.info("search_cancelled", start=start_label, emitted=emitted)
            channel.finish()
            return
        except Exception as exc:
            log.exception("search_failed", start=start_label, emitted=emitted)
            channel.finish(error=exc)
            return

        log.info("search_completed", start=start_label, emitted=emitted)
        channel.finish()


def stream_paths(
    graph: GraphReader,
    start_label: str,
    stop_predicate: Callable[[str], bool],
    max_depth: int | None = None,
    bidirectional: bool | None = None,
    settings: SearchSettings | None = None,
) -> PathStream:
    """One-shot helper: start a search on ``graph`` and return its stream."""
    worker = SearchWorker(graph, settings)
    return worker.start(
        start_label,
        stop_predicate,
        max_depth=max_depth,
        bidirectional=bidirectional,
    )
