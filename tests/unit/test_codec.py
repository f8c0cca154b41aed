"""Unit tests for the JSON exchange codec.

Covers decoding rules (dedup, plain vs timed, undeclared nodes), the
no-partial-graph guarantee, and export flattening.
"""

from __future__ import annotations

import math
from collections import Counter

import orjson
import pytest

from tvgraph.adapters.json.codec import (
    ExchangeDocument,
    ExchangeEdge,
    decode_exchange,
    encode_exchange,
    export_document,
    load_exchange,
    parse_exchange,
)
from tvgraph.adapters.networkx.store import TvgGraphStore
from tvgraph.domain.errors import MalformedExchangeDataError
from tvgraph.domain.models import PlainEdge, TimedEdge, plain_edge, timed_edge


def _edge_records(payload: bytes) -> Counter:
    document = orjson.loads(payload)
    return Counter(
        (edge["from"], edge["to"], edge["start"], edge["end"], edge.get("data"))
        for edge in document["edges"]
    )


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


class TestDecodeExchange:
    """Tests for building a store from exchange JSON."""

    def test_minimal_payload(self) -> None:
        payload = (
            '{"nodes": ["Node1", "Node2"], "edges": '
            '[{"from": "Node1", "to": "Node2", "start": 0.0, "end": 1.0, "data": null}]}'
        )
        store = decode_exchange(payload)
        assert store.find_node("Node1") is not None
        assert store.find_edge("Node1", "Node2") is not None

    def test_scenario_payload_stacks_duplicate_edges(self, scenario_payload) -> None:
        store = decode_exchange(scenario_payload)
        assert store.node_count == 4
        assert store.edge_count == 3
        assert len(store.interval_edges(0, 1)) == 2

    def test_data_selects_timed_edge(self) -> None:
        store = decode_exchange(
            b'{"nodes": ["a", "b"], "edges": ['
            b'{"from": "a", "to": "b", "start": 0, "end": 1, "data": 2.5},'
            b'{"from": "a", "to": "b", "start": 1, "end": 2, "data": null},'
            b'{"from": "a", "to": "b", "start": 2, "end": 3}]}'
        )
        edges = store.interval_edges(0, 1)
        assert isinstance(edges[0], TimedEdge)
        assert edges[0].data == 2.5
        assert isinstance(edges[1], PlainEdge)
        assert isinstance(edges[2], PlainEdge)

    def test_duplicate_node_labels_deduplicated(self) -> None:
        store = decode_exchange(b'{"nodes": ["a", "a", "b"], "edges": []}')
        assert store.node_count == 2

    def test_integer_bounds_coerced_to_float(self) -> None:
        store = decode_exchange(
            b'{"nodes": ["a", "b"], "edges": [{"from": "a", "to": "b", "start": 1, "end": 4}]}'
        )
        assert store.interval_edges(0, 1)[0].end == 4.0

    def test_undeclared_node_is_fatal(self) -> None:
        payload = (
            b'{"nodes": ["a"], "edges": [{"from": "a", "to": "ghost", "start": 0, "end": 1}]}'
        )
        with pytest.raises(MalformedExchangeDataError, match="ghost"):
            decode_exchange(payload)

    def test_invalid_json_is_fatal(self) -> None:
        with pytest.raises(MalformedExchangeDataError, match="invalid JSON"):
            decode_exchange(b"{not json")

    @pytest.mark.parametrize(
        "payload",
        [
            b"[]",
            b'{"nodes": "Node1", "edges": []}',
            b'{"nodes": ["a"], "edges": [{"from": "a", "start": 0, "end": 1}]}',
            b'{"nodes": ["a"], "edges": [{"from": "a", "to": "a", "start": "x", "end": 1}]}',
            b'{"nodes": ["a"], "edges": [{"from": "a", "to": "a", "start": 0, "end": 1, "data": "x"}]}',
            b"{}",
            b'{"foo": 1}',
            b'{"edges": []}',
            b'{"nodes": []}',
            b'{"nodes": ["a"], "edges": [{"from": "a", "to": "a", "start": "1.5", "end": 2}]}',
            b'{"nodes": ["a"], "edges": [{"from": "a", "to": "a", "start": 0, "end": 1, "data": "3"}]}',
            b'{"nodes": ["a"], "edges": [{"from": "a", "to": "a", "start": true, "end": 1}]}',
        ],
    )
    def test_shape_errors_are_fatal(self, payload: bytes) -> None:
        with pytest.raises(MalformedExchangeDataError):
            decode_exchange(payload)


class TestLoadExchange:
    """Tests for loading into an existing store."""

    def test_edges_may_reference_previously_inserted_nodes(self) -> None:
        store = TvgGraphStore()
        store.add_node("existing")
        load_exchange(
            store,
            b'{"nodes": ["new"], "edges": [{"from": "existing", "to": "new", "start": 0, "end": 1}]}',
        )
        assert store.find_edge("existing", "new") is not None

    def test_rejected_payload_leaves_store_untouched(self) -> None:
        store = TvgGraphStore()
        store.add_edge("a", "b", plain_edge(0.0, 1.0))
        payload = (
            b'{"nodes": ["c", "d"], "edges": ['
            b'{"from": "a", "to": "c", "start": 0, "end": 1},'
            b'{"from": "c", "to": "ghost", "start": 0, "end": 1}]}'
        )
        with pytest.raises(MalformedExchangeDataError):
            load_exchange(store, payload)
        assert store.node_count == 2
        assert store.interval_count == 1
        assert store.find_node("c") is None

    def test_accepts_parsed_document(self) -> None:
        document = ExchangeDocument(
            nodes=["a", "b"],
            edges=[ExchangeEdge(from_node="a", to_node="b", start=0.0, end=1.0, data=3.0)],
        )
        store = TvgGraphStore()
        load_exchange(store, document)
        assert store.interval_edges(0, 1) == [timed_edge(0.0, 1.0, 3.0)]

    def test_parse_exchange_reads_from_alias(self) -> None:
        document = parse_exchange(
            b'{"nodes": [], "edges": [{"from": "x", "to": "y", "start": 0, "end": 1}]}'
        )
        assert document.edges[0].from_node == "x"
        assert document.edges[0].to_node == "y"
        assert document.edges[0].data is None


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


class TestEncodeExchange:
    """Tests for flattening a store back to exchange JSON."""

    def test_one_record_per_interval_edge(self) -> None:
        store = TvgGraphStore()
        for i in range(3):
            store.add_edge("a", "b", plain_edge(float(i), float(i + 1)))
        document = export_document(store)
        assert len(document.edges) == 3
        assert {(edge.from_node, edge.to_node) for edge in document.edges} == {("a", "b")}

    def test_data_only_for_timed_edges(self) -> None:
        store = TvgGraphStore()
        store.add_edge("a", "b", plain_edge(0.0, 1.0))
        store.add_edge("a", "b", timed_edge(1.0, 2.0, 8.0))
        raw = orjson.loads(encode_exchange(store))
        assert raw["edges"][0]["data"] is None
        assert raw["edges"][1]["data"] == 8.0

    def test_uses_from_and_to_keys(self) -> None:
        store = TvgGraphStore()
        store.add_edge("a", "b", plain_edge(0.0, 1.0))
        raw = orjson.loads(encode_exchange(store))
        assert set(raw["edges"][0]) == {"from", "to", "start", "end", "data"}

    def test_isolated_nodes_exported(self) -> None:
        store = TvgGraphStore()
        store.add_node("lonely")
        raw = orjson.loads(encode_exchange(store))
        assert raw == {"nodes": ["lonely"], "edges": []}

    def test_round_trip_preserves_nodes_and_edge_multiset(self, scenario_payload) -> None:
        encoded = encode_exchange(decode_exchange(scenario_payload))
        original = orjson.loads(scenario_payload)
        assert set(orjson.loads(encoded)["nodes"]) == set(original["nodes"])
        assert _edge_records(encoded) == _edge_records(scenario_payload)

    def test_round_trip_with_timed_edges(self) -> None:
        store = TvgGraphStore()
        store.add_edge("x", "y", timed_edge(0.0, 2.0, 1.5))
        store.add_edge("y", "x", plain_edge(3.0, 1.0))
        encoded = encode_exchange(store)
        assert _edge_records(encode_exchange(decode_exchange(encoded))) == _edge_records(encoded)

    @pytest.mark.parametrize(
        "edge",
        [
            plain_edge(math.nan, 1.0),
            plain_edge(0.0, math.inf),
            timed_edge(0.0, 1.0, -math.inf),
        ],
    )
    def test_non_finite_values_rejected(self, edge) -> None:
        store = TvgGraphStore()
        store.add_edge("a", "b", plain_edge(0.0, 1.0))
        store.add_edge("a", "b", edge)
        with pytest.raises(MalformedExchangeDataError, match="edge 1 .*non-finite"):
            encode_exchange(store)

    def test_non_finite_values_still_exportable_as_document(self) -> None:
        store = TvgGraphStore()
        store.add_edge("a", "b", plain_edge(math.nan, 1.0))
        document = export_document(store)
        assert math.isnan(document.edges[0].start)
