"""Depth-bounded path exploration over a time-varying graph.

Pure domain module. Only depends on domain models and the read-only
``GraphReader`` port. The search worker runs ``explore`` on its own thread
and passes ``PathChannel.send`` as ``emit``.

The walk is depth-first: each neighbor is expanded fully before the next one
is considered, so results arrive in branch order. Visited state is local to
the branch. A node already on the current branch is skipped, but the same
node may be reached again along a different branch.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tvgraph.domain.errors import StructuralInvariantError
from tvgraph.domain.models import EdgeSlot, PathMatch, TvgPath

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from tvgraph.domain.models import IntervalEdge, NodeId
    from tvgraph.ports.graph_store import GraphReader

DEFAULT_MAX_DEPTH = 3


def explore(
    graph: GraphReader,
    start: NodeId,
    visited: tuple[NodeId, ...],
    stop_predicate: Callable[[str], bool],
    emit: Callable[[PathMatch], None],
    max_depth: int = DEFAULT_MAX_DEPTH,
    bidirectional: bool = False,
) -> None:
    """Explore outward from ``start`` and emit every match.

    ``visited`` is the ordered branch history, conventionally ``(start,)`` on
    the first call. A branch stops once its history grows past ``max_depth``
    nodes, or when a neighbor satisfies ``stop_predicate``. In the second
    case the route to that neighbor is materialized and passed to ``emit``.
    """
    if len(visited) > max_depth:
        return

    for neighbor in graph.neighbors_outgoing(start):
        if neighbor in visited:
            continue

        branch = (*visited, neighbor)
        label = graph.node_label(neighbor)
        if stop_predicate(label):
            emit(PathMatch(node=label, path=materialize_path(graph, branch, bidirectional)))
        else:
            explore(
                graph,
                neighbor,
                branch,
                stop_predicate,
                emit,
                max_depth=max_depth,
                bidirectional=bidirectional,
            )


def materialize_path(
    graph: GraphReader,
    node_path: Sequence[NodeId],
    bidirectional: bool = False,
) -> TvgPath:
    """Snapshot the edge slots along ``node_path``, one ``EdgeSlot`` per hop.

    With ``bidirectional`` each hop also collects the reverse slot's interval
    edges, after the forward ones. A missing reverse slot contributes nothing;
    a missing forward slot raises ``StructuralInvariantError``.
    """
    hops: list[EdgeSlot] = []
    for source, target in zip(node_path, node_path[1:], strict=False):
        edges: list[IntervalEdge] = _forward_edges(graph, source, target)
        if bidirectional:
            edges.extend(graph.interval_edges(target, source) or [])
        hops.append(EdgeSlot(edges=edges))
    return TvgPath(hops=hops)


def _forward_edges(graph: GraphReader, source: NodeId, target: NodeId) -> list[IntervalEdge]:
    edges = graph.interval_edges(source, target)
    if edges is None:
        raise StructuralInvariantError(source, target)
    return edges
