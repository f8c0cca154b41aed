"""Shared pytest fixtures for the time-varying-graph test suite.

Wraps the graph builders in ``tests.fixtures.graphs``. No external
services are involved.
"""

from __future__ import annotations

import pytest

from tests.fixtures.graphs import (
    SCENARIO_PAYLOAD,
    make_chain,
    make_diamond,
    make_fan_out,
    make_scenario_graph,
)


@pytest.fixture()
def scenario_graph():
    """Node1..Node4 graph with a double Node1->Node2 slot."""
    return make_scenario_graph()


@pytest.fixture()
def scenario_payload():
    """The scenario graph as exchange JSON bytes."""
    return SCENARIO_PAYLOAD


@pytest.fixture()
def chain_factory():
    """Return the ``make_chain`` factory callable."""
    return make_chain


@pytest.fixture()
def diamond_graph():
    """A -> {B, C} -> D -> E."""
    return make_diamond()


@pytest.fixture()
def fan_out_factory():
    """Return the ``make_fan_out`` factory callable."""
    return make_fan_out
