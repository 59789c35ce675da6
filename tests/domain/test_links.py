"""Tests for TypedLinkGraph — keyed edges, filtering, bulk deletion."""

from __future__ import annotations

import pytest

from erdomain.domain.links import TypedLinkGraph
from erdomain.infrastructure.graph.store import NetworkXGraphStore


@pytest.fixture
def links() -> TypedLinkGraph:
    return TypedLinkGraph(NetworkXGraphStore())


class TestPutAndHas:
    def test_directed(self, links: TypedLinkGraph) -> None:
        links.put("a", "b", "t")
        assert links.has("a", "b", "t")
        assert not links.has("b", "a", "t")

    def test_any_mark(self, links: TypedLinkGraph) -> None:
        links.put("a", "b", "t")
        assert links.has("a", "b")
        assert not links.has("a", "b", "other")

    def test_marks_are_independent(self, links: TypedLinkGraph) -> None:
        links.put("a", "b", "t1", payload="one")
        links.put("a", "b", "t2", payload="two")
        assert links.payload("a", "b", "t1") == "one"
        assert links.payload("a", "b", "t2") == "two"
        assert len(links.edges()) == 2

    def test_relink_overwrites_payload(self, links: TypedLinkGraph) -> None:
        links.put("a", "b", "t", payload="old")
        links.put("a", "b", "t", payload="new")
        assert links.payload("a", "b", "t") == "new"
        assert len(links.edges("t")) == 1

    def test_missing_payload_is_none(self, links: TypedLinkGraph) -> None:
        assert links.payload("a", "b", "t") is None


class TestNeighbors:
    def test_filtered_by_mark_and_direction(self, links: TypedLinkGraph) -> None:
        links.put("a", "b", "t")
        links.put("c", "b", "t")
        links.put("d", "b", "other")
        links.put("b", "e", "t")
        assert sorted(links.predecessors("b", "t")) == ["a", "c"]
        assert sorted(links.predecessors("b")) == ["a", "c", "d"]
        assert links.successors("b", "t") == ["e"]
        assert links.successors("b", "other") == []

    def test_unknown_node_has_no_neighbors(self, links: TypedLinkGraph) -> None:
        links.put("a", "b", "t")
        assert links.successors("ab", "t") == []
        assert links.predecessors("ab", "t") == []


class TestDelete:
    def test_single(self, links: TypedLinkGraph) -> None:
        links.put("a", "b", "t")
        links.put("a", "b", "u")
        links.delete("a", "b", "t")
        assert not links.has("a", "b", "t")
        assert links.has("a", "b", "u")

    def test_single_missing_is_noop(self, links: TypedLinkGraph) -> None:
        links.delete("a", "b", "t")
        assert links.edges() == []

    def test_all_of_mark(self, links: TypedLinkGraph) -> None:
        links.put("a", "b", "t")
        links.put("b", "c", "t")
        links.put("a", "c", "u")
        assert links.delete_all("t") == 2
        assert [(e.source, e.target, e.mark) for e in links.edges()] == [("a", "c", "u")]

    def test_all(self, links: TypedLinkGraph) -> None:
        links.put("a", "b", "t")
        links.put("a", "c", "u")
        assert links.delete_all() == 2
        assert links.edges() == []

    def test_outgoing_from_source(self, links: TypedLinkGraph) -> None:
        links.put("a", "b", "t")
        links.put("a", "c", "t")
        links.put("a", "c", "u")
        links.put("c", "a", "t")
        assert links.delete_outgoing("a", mark="t") == 2
        assert links.has("a", "c", "u")
        assert links.has("c", "a", "t")

    def test_outgoing_pair_any_mark(self, links: TypedLinkGraph) -> None:
        links.put("a", "b", "t")
        links.put("a", "b", "u")
        links.put("a", "c", "t")
        assert links.delete_outgoing("a", "b") == 2
        assert not links.has("a", "b")
        assert links.has("a", "c", "t")
