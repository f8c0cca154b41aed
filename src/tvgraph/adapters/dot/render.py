"""Graphviz DOT rendering for debugging.

Every node and every edge slot appears exactly once. Slots are drawn
without labels by default; with ``edge_labels`` each slot lists its
intervals (and payloads for timed edges).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from tvgraph.domain.models import TimedEdge
from tvgraph.settings import ExportSettings

if TYPE_CHECKING:
    from tvgraph.domain.models import IntervalEdge
    from tvgraph.ports.graph_store import GraphReader

log = structlog.get_logger(__name__)


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _format_interval_edge(edge: IntervalEdge) -> str:
    text = f"[{edge.interval.start:g}, {edge.interval.end:g}]"
    if isinstance(edge, TimedEdge):
        text += f" {edge.data:g}"
    return text


def render_dot(graph: GraphReader, edge_labels: bool = False) -> str:
    """Render ``graph`` as a DOT ``digraph``."""
    lines = ["digraph {"]
    for node_id, label in graph.nodes():
        lines.append(f'    {node_id} [ label = "{_escape(label)}" ]')
    for source, target, edges in graph.edge_slots():
        if edge_labels:
            # Literal \n is a line break inside a DOT label
            label = "\\n".join(_escape(_format_interval_edge(edge)) for edge in edges)
            lines.append(f'    {source} -> {target} [ label = "{label}" ]')
        else:
            lines.append(f"    {source} -> {target} [ ]")
    lines.append("}")
    return "\n".join(lines) + "\n"


def write_dot(
    graph: GraphReader,
    path: str | Path | None = None,
    settings: ExportSettings | None = None,
) -> Path:
    """Write the DOT rendering to ``path`` (default from ``ExportSettings``)."""
    settings = settings or ExportSettings()
    target = Path(path if path is not None else settings.dot_path)
    target.write_text(render_dot(graph, settings.dot_edge_labels), encoding="utf-8")
    log.info("dot_written", path=str(target))
    return target
