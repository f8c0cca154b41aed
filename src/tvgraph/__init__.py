"""Time-varying graph store with depth-bounded streaming path search."""

from __future__ import annotations

from tvgraph.adapters.dot.render import render_dot, write_dot
from tvgraph.adapters.json.codec import (
    ExchangeDocument,
    ExchangeEdge,
    decode_exchange,
    encode_exchange,
    export_document,
    load_exchange,
)
from tvgraph.adapters.networkx.store import TvgGraphStore
from tvgraph.domain.errors import (
    ChannelClosedError,
    MalformedExchangeDataError,
    StructuralInvariantError,
    TagMismatchError,
    TvgError,
    UnknownNodeError,
)
from tvgraph.domain.exploration import explore, materialize_path
from tvgraph.domain.models import (
    EdgeData,
    EdgeSlot,
    Interval,
    IntervalEdge,
    PathMatch,
    PlainEdge,
    TimedEdge,
    TvgPath,
    interval_edges_equal,
    plain_edge,
    timed_edge,
)
from tvgraph.settings import ExportSettings, SearchSettings, Settings
from tvgraph.worker.channel import PathChannel
from tvgraph.worker.search import PathStream, SearchWorker, stream_paths

__all__ = [
    "ChannelClosedError",
    "EdgeData",
    "EdgeSlot",
    "ExchangeDocument",
    "ExchangeEdge",
    "ExportSettings",
    "Interval",
    "IntervalEdge",
    "MalformedExchangeDataError",
    "PathChannel",
    "PathMatch",
    "PathStream",
    "PlainEdge",
    "SearchSettings",
    "SearchWorker",
    "Settings",
    "StructuralInvariantError",
    "TagMismatchError",
    "TimedEdge",
    "TvgError",
    "TvgGraphStore",
    "TvgPath",
    "UnknownNodeError",
    "decode_exchange",
    "encode_exchange",
    "explore",
    "export_document",
    "interval_edges_equal",
    "load_exchange",
    "materialize_path",
    "plain_edge",
    "render_dot",
    "stream_paths",
    "timed_edge",
    "write_dot",
]
