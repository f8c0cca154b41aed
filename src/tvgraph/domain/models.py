"""Domain models for the time-varying graph.

An edge between two nodes is not a single weight but an *edge slot*: the
ordered list of every interval during which the connection was active. Each
interval is either plain (connectivity only) or timed (connectivity plus a
numeric payload such as volume transferred).

All models are pure Python + Pydantic v2. Zero framework imports.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

import structlog
from pydantic import BaseModel, Field

from tvgraph.domain.errors import TagMismatchError

log = structlog.get_logger(__name__)

# Dense integer id the store assigns to each node label
NodeId = int

# (source, target) pair identifying one edge slot
EdgeSlotId = tuple[NodeId, NodeId]


# ---------------------------------------------------------------------------
# Intervals
# ---------------------------------------------------------------------------


class Interval(BaseModel):
    """A time window. ``start <= end`` is not enforced."""

    model_config = {"frozen": True}

    start: float
    end: float


class _BaseIntervalEdge(BaseModel):
    """Shared equality contract for interval edges.

    Two interval edges are equal when they carry the same tag and the same
    ``start``/``end``; payloads are ignored. Comparing different tags is a
    caller error and raises ``TagMismatchError`` instead of returning False.
    """

    model_config = {"frozen": True}

    kind: str
    interval: Interval

    @property
    def start(self) -> float:
        return self.interval.start

    @property
    def end(self) -> float:
        return self.interval.end

    def equals(self, other: IntervalEdge) -> bool:
        return interval_edges_equal(self, other)  # type: ignore[arg-type]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _BaseIntervalEdge):
            return NotImplemented
        return interval_edges_equal(self, other)  # type: ignore[arg-type]

    def __hash__(self) -> int:
        return hash((self.kind, self.interval.start, self.interval.end))


class PlainEdge(_BaseIntervalEdge):
    """Interval edge without data."""

    kind: Literal["plain"] = "plain"


class TimedEdge(_BaseIntervalEdge):
    """Interval edge carrying one float payload."""

    kind: Literal["timed"] = "timed"
    data: float


IntervalEdge = Annotated[PlainEdge | TimedEdge, Field(discriminator="kind")]


def plain_edge(start: float, end: float) -> PlainEdge:
    """Build a ``PlainEdge`` from raw interval bounds."""
    return PlainEdge(interval=Interval(start=start, end=end))


def timed_edge(start: float, end: float, data: float) -> TimedEdge:
    """Build a ``TimedEdge`` from raw interval bounds and a payload."""
    return TimedEdge(interval=Interval(start=start, end=end), data=data)


def interval_edges_equal(left: IntervalEdge, right: IntervalEdge) -> bool:
    """Compare two interval edges of the same tag by ``start`` and ``end``.

    Raises ``TagMismatchError`` when the tags differ, regardless of the
    interval values.
    """
    if left.kind != right.kind:
        log.error("interval_edge_tag_mismatch", left=repr(left), right=repr(right))
        raise TagMismatchError(left, right)
    return left.interval.start == right.interval.start and left.interval.end == right.interval.end


# ---------------------------------------------------------------------------
# Slots, paths and search results
# ---------------------------------------------------------------------------


class EdgeSlot(BaseModel):
    """All interval edges for one ordered (source, target) pair, in arrival order.

    Identical intervals pushed twice are both kept.
    """

    edges: list[IntervalEdge] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.edges)


class TvgPath(BaseModel):
    """One explored route: an edge slot snapshot per hop, in order."""

    hops: list[EdgeSlot] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.hops)


class PathMatch(BaseModel):
    """A node accepted by the stop predicate and the path that reached it."""

    node: str
    path: TvgPath


class EdgeData(BaseModel):
    """Construction record for inserting one interval edge by node label."""

    start_node: str
    end_node: str
    edge: IntervalEdge

    @classmethod
    def of(
        cls,
        start_node: str,
        end_node: str,
        start: float,
        end: float,
        data: float | None = None,
    ) -> EdgeData:
        """Build a record, choosing ``TimedEdge`` when ``data`` is given."""
        edge: Any = plain_edge(start, end) if data is None else timed_edge(start, end, data)
        return cls(start_node=start_node, end_node=end_node, edge=edge)
