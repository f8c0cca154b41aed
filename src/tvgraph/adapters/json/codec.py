"""JSON exchange codec.

Converts between a ``TvgGraphStore`` and the flat node/edge exchange
document::

    {"nodes": ["Node1", "Node2"],
     "edges": [{"from": "Node1", "to": "Node2",
                "start": 0.0, "end": 1.0, "data": null}]}

``orjson`` handles bytes; Pydantic handles the shape. An edge whose ``data``
is a number becomes a ``TimedEdge``; a null or missing ``data`` becomes a
``PlainEdge``. Export is the inverse flattening: one record per stored
interval edge, so a slot holding three intervals yields three records with
the same ``from``/``to``.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

import orjson
import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from tvgraph.adapters.networkx.store import TvgGraphStore
from tvgraph.domain.errors import MalformedExchangeDataError
from tvgraph.domain.models import TimedEdge, plain_edge, timed_edge

if TYPE_CHECKING:
    from tvgraph.domain.models import IntervalEdge
    from tvgraph.ports.graph_store import GraphReader, GraphStore

log = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Wire shape
# ---------------------------------------------------------------------------


class ExchangeEdge(BaseModel):
    """One flat interval-edge record. ``from`` is aliased (Python keyword)."""

    model_config = ConfigDict(populate_by_name=True, strict=True)

    from_node: str = Field(..., alias="from")
    to_node: str = Field(..., alias="to")
    start: float
    end: float
    data: float | None = None

    def to_interval_edge(self) -> IntervalEdge:
        if self.data is None:
            return plain_edge(self.start, self.end)
        return timed_edge(self.start, self.end, self.data)

    @classmethod
    def from_interval_edge(cls, from_node: str, to_node: str, edge: IntervalEdge) -> ExchangeEdge:
        return cls(
            from_node=from_node,
            to_node=to_node,
            start=edge.interval.start,
            end=edge.interval.end,
            data=edge.data if isinstance(edge, TimedEdge) else None,
        )


class ExchangeDocument(BaseModel):
    """The whole exchange payload. Both lists are required."""

    model_config = ConfigDict(strict=True)

    nodes: list[str]
    edges: list[ExchangeEdge]


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def parse_exchange(payload: bytes | str) -> ExchangeDocument:
    """Parse and shape-check an exchange payload without touching any store."""
    try:
        raw: Any = orjson.loads(payload)
    except orjson.JSONDecodeError as exc:
        raise MalformedExchangeDataError(f"invalid JSON: {exc}") from exc

    try:
        return ExchangeDocument.model_validate(raw)
    except ValidationError as exc:
        raise MalformedExchangeDataError(
            f"payload does not match exchange shape ({exc.error_count()} errors)"
        ) from exc


def load_exchange(store: GraphStore, payload: bytes | str | ExchangeDocument) -> None:
    """Insert an exchange payload into an existing store.

    Every listed node is inserted (deduplicated). Each edge's ``from`` and
    ``to`` must name a node that is either listed in the payload or already
    in the store. All references are checked before the first insert, so a
    rejected payload leaves ``store`` untouched.
    """
    document = payload if isinstance(payload, ExchangeDocument) else parse_exchange(payload)

    declared = set(document.nodes)
    for position, record in enumerate(document.edges):
        for endpoint in (record.from_node, record.to_node):
            if endpoint not in declared and store.find_node(endpoint) is None:
                log.error(
                    "exchange_edge_undeclared_node",
                    node=endpoint,
                    edge_index=position,
                )
                raise MalformedExchangeDataError(
                    f"edge {position} references undeclared node {endpoint!r}"
                )

    for label in document.nodes:
        store.add_node(label)
    for record in document.edges:
        store.add_edge(record.from_node, record.to_node, record.to_interval_edge())

    log.debug(
        "exchange_loaded",
        nodes=len(document.nodes),
        edges=len(document.edges),
    )


def decode_exchange(payload: bytes | str) -> TvgGraphStore:
    """Build a new store from an exchange payload."""
    store = TvgGraphStore()
    load_exchange(store, payload)
    log.info(
        "exchange_decoded",
        nodes=store.node_count,
        edge_slots=store.edge_count,
    )
    return store


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def export_document(graph: GraphReader) -> ExchangeDocument:
    """Flatten a graph into an ``ExchangeDocument``.

    Nodes in insertion order; edges grouped by source node, then slot, then
    interval edge in arrival order.
    """
    labels = dict(graph.nodes())
    document = ExchangeDocument(nodes=list(labels.values()), edges=[])
    for source, target, edges in graph.edge_slots():
        for edge in edges:
            document.edges.append(
                ExchangeEdge.from_interval_edge(labels[source], labels[target], edge)
            )
    return document


def encode_exchange(graph: GraphReader) -> bytes:
    """Serialize a graph to exchange JSON bytes (``data`` is null for plain edges).

    The store accepts NaN and infinite bounds as data, but JSON has no
    representation for them; such records raise ``MalformedExchangeDataError``
    rather than being written as null.
    """
    document = export_document(graph)
    for position, record in enumerate(document.edges):
        values = (record.start, record.end, record.data)
        if any(value is not None and not math.isfinite(value) for value in values):
            log.error(
                "exchange_edge_not_finite",
                edge_index=position,
                source=record.from_node,
                target=record.to_node,
            )
            raise MalformedExchangeDataError(
                f"edge {position} ({record.from_node!r} -> {record.to_node!r}) "
                "has a non-finite value that JSON cannot represent"
            )
    return orjson.dumps(document.model_dump(mode="json", by_alias=True))
