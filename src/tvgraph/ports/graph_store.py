"""Graph store port interface.

Uses typing.Protocol for structural subtyping (not ABCs).
``GraphReader`` is the read-only view the path exploration engine works
against; ``TvgGraphStore`` (networkx adapter) implements both protocols.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from tvgraph.domain.models import (
        EdgeData,
        EdgeSlotId,
        IntervalEdge,
        NodeId,
    )


class GraphReader(Protocol):
    """Read-only access to a time-varying graph.

    Safe for any number of concurrent readers as long as nobody mutates
    the underlying store while they run.
    """

    def find_node(self, label: str) -> NodeId | None:
        """Exact-match label lookup. ``None`` when absent."""
        ...

    def find_edge(self, source_label: str, target_label: str) -> EdgeSlotId | None:
        """Slot lookup by endpoint labels. ``None`` when either is absent or unconnected."""
        ...

    def node_label(self, node: NodeId) -> str:
        """Return the label of a node id issued by this store."""
        ...

    def neighbors_outgoing(self, node: NodeId) -> list[NodeId]:
        """Targets of every outgoing slot, in edge insertion order."""
        ...

    def interval_edges(self, source: NodeId, target: NodeId) -> list[IntervalEdge] | None:
        """Copy of the slot contents for ``source -> target``. ``None`` when no slot exists."""
        ...

    def nodes(self) -> Iterator[tuple[NodeId, str]]:
        """All ``(id, label)`` pairs in insertion order."""
        ...

    def edge_slots(self) -> Iterator[tuple[NodeId, NodeId, list[IntervalEdge]]]:
        """All slots as ``(source, target, edges)``, grouped by source node."""
        ...


class GraphStore(GraphReader, Protocol):
    """Append-only time-varying graph store."""

    def add_node(self, label: str) -> NodeId:
        """Insert a node if absent. Idempotent; returns the node's id."""
        ...

    def add_edge(self, source: str | NodeId, target: str | NodeId, edge: IntervalEdge) -> None:
        """Append ``edge`` to the ``source -> target`` slot, creating it if needed."""
        ...

    def add_edges_from_data(self, records: Iterable[EdgeData]) -> None:
        """Insert a batch of label-addressed interval edges."""
        ...
