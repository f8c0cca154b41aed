"""In-memory GraphStore adapter backed by ``networkx.DiGraph``.

Nodes are dense integer ids (0, 1, 2, ... in insertion order) carrying their
label as the ``label`` attribute; a label index keeps lookups O(1). Each
directed edge holds its edge slot, the list of interval edges in arrival
order, under the ``intervals`` attribute.

The store is append-only. Build it fully, then hand it to any number of
searches; it is not locked, so it must not be mutated while they run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import networkx as nx
import structlog

from tvgraph.domain.errors import UnknownNodeError
from tvgraph.domain.models import EdgeSlot

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from tvgraph.domain.models import EdgeData, EdgeSlotId, IntervalEdge, NodeId

log = structlog.get_logger(__name__)

_LABEL = "label"
_INTERVALS = "intervals"


class TvgGraphStore:
    """Time-varying graph store.

    Satisfies the ``tvgraph.ports.graph_store.GraphStore`` protocol.
    """

    def __init__(self) -> None:
        self._graph: nx.DiGraph = nx.DiGraph()
        self._index: dict[str, NodeId] = {}

    # -- writes -------------------------------------------------------------

    def add_node(self, label: str) -> NodeId:
        """Return the id for ``label``, creating the node on first sight."""
        existing = self._index.get(label)
        if existing is not None:
            return existing

        node_id = self._graph.number_of_nodes()
        self._graph.add_node(node_id, **{_LABEL: label})
        self._index[label] = node_id
        log.debug("node_added", label=label, node_id=node_id)
        return node_id

    def add_edge(
        self,
        source: str | NodeId,
        target: str | NodeId,
        edge: IntervalEdge,
    ) -> None:
        """Append ``edge`` to the ``source -> target`` slot.

        Labels are resolved (and created) with ``add_node`` semantics; integer
        ids must already exist. Existing entries are never overwritten.
        """
        source_id = self._resolve(source)
        target_id = self._resolve(target)

        if self._graph.has_edge(source_id, target_id):
            self._graph.edges[source_id, target_id][_INTERVALS].append(edge)
        else:
            self._graph.add_edge(source_id, target_id, **{_INTERVALS: [edge]})

    def add_edges_from_data(self, records: Iterable[EdgeData]) -> None:
        """Insert every record, creating endpoint nodes as needed."""
        count = 0
        for record in records:
            self.add_edge(record.start_node, record.end_node, record.edge)
            count += 1
        log.debug("edges_added_from_data", count=count)

    def _resolve(self, node: str | NodeId) -> NodeId:
        if isinstance(node, str):
            return self.add_node(node)
        if not self._graph.has_node(node):
            raise UnknownNodeError(node)
        return node

    # -- reads --------------------------------------------------------------

    def find_node(self, label: str) -> NodeId | None:
        return self._index.get(label)

    def find_edge(self, source_label: str, target_label: str) -> EdgeSlotId | None:
        source_id = self.find_node(source_label)
        target_id = self.find_node(target_label)
        if source_id is None or target_id is None:
            return None
        if not self._graph.has_edge(source_id, target_id):
            return None
        return (source_id, target_id)

    def node_label(self, node: NodeId) -> str:
        if not self._graph.has_node(node):
            raise UnknownNodeError(node)
        return self._graph.nodes[node][_LABEL]  # type: ignore[no-any-return]

    def neighbors_outgoing(self, node: NodeId) -> list[NodeId]:
        if not self._graph.has_node(node):
            return []
        return list(self._graph.successors(node))

    def interval_edges(self, source: NodeId, target: NodeId) -> list[IntervalEdge] | None:
        if not self._graph.has_edge(source, target):
            return None
        return list(self._graph.edges[source, target][_INTERVALS])

    def edge_slot(self, source: NodeId, target: NodeId) -> EdgeSlot | None:
        """Snapshot of one slot as an ``EdgeSlot`` model."""
        edges = self.interval_edges(source, target)
        if edges is None:
            return None
        return EdgeSlot(edges=edges)

    def nodes(self) -> Iterator[tuple[NodeId, str]]:
        for node_id, label in self._graph.nodes(data=_LABEL):
            yield node_id, label

    def edge_slots(self) -> Iterator[tuple[NodeId, NodeId, list[IntervalEdge]]]:
        for source, target, intervals in self._graph.edges(data=_INTERVALS):
            yield source, target, list(intervals)

    # -- sizes --------------------------------------------------------------

    @property
    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        """Number of edge slots (not interval edges)."""
        return self._graph.number_of_edges()

    @property
    def interval_count(self) -> int:
        """Number of interval edges across all slots."""
        return sum(len(intervals) for _, _, intervals in self._graph.edges(data=_INTERVALS))

    def __contains__(self, label: object) -> bool:
        return label in self._index

    def __len__(self) -> int:
        return self.node_count

    def __repr__(self) -> str:
        return f"TvgGraphStore(nodes={self.node_count}, edge_slots={self.edge_count})"
