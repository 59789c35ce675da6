"""Tests for NetworkXGraphStore — node payloads and mark-keyed edges."""

from __future__ import annotations

import networkx as nx
import pytest

from erdomain.infrastructure.graph import Edge, GraphStore, NetworkXGraphStore


@pytest.fixture
def store() -> NetworkXGraphStore:
    return NetworkXGraphStore()


class TestNodes:
    def test_add_and_payload(self, store: NetworkXGraphStore) -> None:
        store.add_node("a", {"name": "A"})
        assert store.has_node("a")
        assert store.node_payload("a") == {"name": "A"}

    def test_add_overwrites_payload(self, store: NetworkXGraphStore) -> None:
        store.add_node("a", 1)
        store.add_node("a", 2)
        assert store.node_payload("a") == 2
        assert store.nodes() == ["a"]

    def test_missing_payload_is_none(self, store: NetworkXGraphStore) -> None:
        assert store.node_payload("ghost") is None

    def test_remove_drops_incident_edges(self, store: NetworkXGraphStore) -> None:
        store.set_edge("a", "b", None, "t")
        store.set_edge("c", "a", None, "u")
        store.set_edge("b", "c", None, "t")
        store.remove_node("a")
        assert not store.has_node("a")
        assert [(e.source, e.target) for e in store.edges()] == [("b", "c")]

    def test_remove_missing_is_noop(self, store: NetworkXGraphStore) -> None:
        store.remove_node("ghost")
        assert store.nodes() == []

    def test_non_string_ids(self, store: NetworkXGraphStore) -> None:
        store.add_node(1)
        store.add_node(("x", 2))
        store.set_edge(1, ("x", 2), "p", "t")
        assert store.has_edge(1, ("x", 2), "t")


class TestEdges:
    def test_one_edge_per_mark(self, store: NetworkXGraphStore) -> None:
        store.set_edge("a", "b", "p1", "t1")
        store.set_edge("a", "b", "p2", "t2")
        store.set_edge("a", "b", "p3", "t1")
        assert store.graph.number_of_edges("a", "b") == 2
        assert store.edge_payload("a", "b", "t1") == "p3"
        assert store.edge_payload("a", "b", "t2") == "p2"

    def test_has_edge_any_mark(self, store: NetworkXGraphStore) -> None:
        store.set_edge("a", "b", None, "t")
        assert store.has_edge("a", "b")
        assert store.has_edge("a", "b", "t")
        assert not store.has_edge("a", "b", "u")
        assert not store.has_edge("b", "a")

    def test_edge_payload_missing(self, store: NetworkXGraphStore) -> None:
        assert store.edge_payload("a", "b", "t") is None

    def test_remove_edge(self, store: NetworkXGraphStore) -> None:
        store.set_edge("a", "b", None, "t")
        store.set_edge("a", "b", None, "u")
        store.remove_edge("a", "b", "t")
        store.remove_edge("a", "b", "t")
        assert not store.has_edge("a", "b", "t")
        assert store.has_edge("a", "b", "u")
        assert store.has_node("a")

    def test_in_and_out_edges(self, store: NetworkXGraphStore) -> None:
        store.set_edge("a", "b", 1, "t")
        store.set_edge("c", "b", 2, "u")
        store.set_edge("b", "d", 3, "t")
        assert sorted((e.source, e.mark, e.payload) for e in store.in_edges("b")) == [
            ("a", "t", 1),
            ("c", "u", 2),
        ]
        assert store.out_edges("b") == [Edge("b", "d", "t", 3)]

    def test_missing_node_has_no_edges(self, store: NetworkXGraphStore) -> None:
        store.set_edge("a", "b", None, "t")
        assert store.in_edges("ab") == []
        assert store.out_edges("ab") == []

    def test_edges_filtered_by_mark(self, store: NetworkXGraphStore) -> None:
        store.set_edge("a", "b", None, "t")
        store.set_edge("b", "c", None, "u")
        assert [e.mark for e in store.edges("u")] == ["u"]
        assert len(store.edges()) == 2


class TestEdgeRecord:
    def test_payload_not_part_of_identity(self) -> None:
        assert Edge("a", "b", "t", payload=1) == Edge("a", "b", "t", payload=2)
        assert len({Edge("a", "b", "t", 1), Edge("a", "b", "t", 2)}) == 1

    def test_mark_is_part_of_identity(self) -> None:
        assert Edge("a", "b", "t") != Edge("a", "b", "u")


class TestWrappedGraph:
    def test_uses_supplied_graph(self) -> None:
        graph = nx.MultiDiGraph()
        store = NetworkXGraphStore(graph)
        store.set_edge("a", "b", None, "t")
        assert graph.has_edge("a", "b", key="t")

    def test_is_a_graph_store(self, store: NetworkXGraphStore) -> None:
        assert isinstance(store, GraphStore)
