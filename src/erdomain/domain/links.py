"""TypedLinkGraph — edge store keyed by (source, target, mark).

A thin layer over :class:`GraphStore` that adds mark filtering and
direction-aware neighbor enumeration. It never checks entity or link-type
existence; callers validate before writing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from erdomain.domain.types import EntityId, Mark
    from erdomain.infrastructure.graph.store import Edge, GraphStore


class TypedLinkGraph:
    """Directed multi-relation edge store."""

    def __init__(self, store: GraphStore) -> None:
        self._store = store

    def has(self, source: EntityId, target: EntityId, mark: Mark | None = None) -> bool:
        """Whether *source* links to *target* by *mark* (any mark if None)."""
        return self._store.has_edge(source, target, mark)

    def put(self, source: EntityId, target: EntityId, mark: Mark, payload: Any = None) -> None:
        """Insert the edge or overwrite its payload."""
        self._store.set_edge(source, target, payload, mark)

    def payload(self, source: EntityId, target: EntityId, mark: Mark) -> Any:
        return self._store.edge_payload(source, target, mark)

    def delete(self, source: EntityId, target: EntityId, mark: Mark) -> None:
        self._store.remove_edge(source, target, mark)

    def delete_all(self, mark: Mark | None = None) -> int:
        """Delete every edge of *mark* (every edge at all if None).

        Returns the number of edges removed.
        """
        doomed = self._store.edges(mark)
        for edge in doomed:
            self._store.remove_edge(edge.source, edge.target, edge.mark)
        return len(doomed)

    def delete_outgoing(
        self,
        source: EntityId,
        target: EntityId | None = None,
        mark: Mark | None = None,
    ) -> int:
        """Delete edges leaving *source*, optionally narrowed to *target*/*mark*.

        Returns the number of edges removed.
        """
        doomed = [
            e
            for e in self._store.out_edges(source)
            if (target is None or e.target == target) and (mark is None or e.mark == mark)
        ]
        for edge in doomed:
            self._store.remove_edge(edge.source, edge.target, edge.mark)
        return len(doomed)

    def predecessors(self, node: EntityId, mark: Mark | None = None) -> list[EntityId]:
        """Entities with an edge into *node*, filtered by *mark*."""
        return [e.source for e in self._store.in_edges(node) if mark is None or e.mark == mark]

    def successors(self, node: EntityId, mark: Mark | None = None) -> list[EntityId]:
        """Entities *node* has an edge to, filtered by *mark*."""
        return [e.target for e in self._store.out_edges(node) if mark is None or e.mark == mark]

    def edges(self, mark: Mark | None = None) -> list[Edge]:
        return self._store.edges(mark)
