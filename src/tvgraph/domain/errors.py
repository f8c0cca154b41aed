"""Error taxonomy for the time-varying graph.

Lookup misses are never errors: they surface as ``None`` or empty results.
Everything here signals a broken contract (bad exchange data, caller misuse,
or a store mutated during a search).

Pure Python, zero framework imports.
"""

from __future__ import annotations

from typing import Any


class TvgError(Exception):
    """Base class for all time-varying graph errors."""


class MalformedExchangeDataError(TvgError):
    """Raised when an exchange payload cannot be decoded into a graph.

    Covers invalid JSON, payloads that do not match the exchange shape, and
    edges that reference undeclared nodes. Decoding aborts without returning
    a partial graph.
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"malformed exchange data: {reason}")


class TagMismatchError(TvgError):
    """Raised when a plain interval edge is compared against a timed one."""

    def __init__(self, left: Any, right: Any) -> None:
        self.left = left
        self.right = right
        super().__init__(f"edge types are not matching: {left!r} vs {right!r}")


class ChannelClosedError(TvgError):
    """Raised on send once the consuming side has hung up."""


class StructuralInvariantError(TvgError):
    """Raised when a path step has no backing edge slot.

    The search only ever steps along real edges, so this means the store was
    mutated while a search was in flight.
    """

    def __init__(self, source: int, target: int) -> None:
        self.source = source
        self.target = target
        super().__init__(f"no edge slot between nodes {source} and {target}")


class UnknownNodeError(TvgError):
    """Raised when a node id that the store never issued is used."""

    def __init__(self, node_id: int) -> None:
        self.node_id = node_id
        super().__init__(f"unknown node id: {node_id}")
