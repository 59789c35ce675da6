"""GraphStore — low-level node/edge storage behind the domain.

The domain layer only talks to the abstract :class:`GraphStore`. The
default implementation keeps everything in a NetworkX ``MultiDiGraph``
where the link-type mark is the edge key, so one ordered pair can carry
one edge per mark.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Hashable, Iterator
from dataclasses import dataclass, field
from typing import Any

import networkx as nx

type _Graph = nx.MultiDiGraph
type EntityId = Hashable
type Mark = Hashable

# Attribute name holding the opaque payload on nodes and edges.
PAYLOAD = "payload"


@dataclass(frozen=True)
class Edge:
    """A stored link between two entities."""

    source: EntityId
    target: EntityId
    mark: Mark
    payload: Any = field(default=None, compare=False, hash=False)


class GraphStore(ABC):
    """Storage contract: nodes with payloads, keyed directed edges."""

    @abstractmethod
    def add_node(self, node: EntityId, payload: Any = None) -> None:
        """Insert *node*, or overwrite its payload if it already exists."""
        ...

    @abstractmethod
    def has_node(self, node: EntityId) -> bool: ...

    @abstractmethod
    def node_payload(self, node: EntityId) -> Any:
        """Payload of *node*; ``None`` if the node does not exist."""
        ...

    @abstractmethod
    def remove_node(self, node: EntityId) -> None:
        """Remove *node* and every incident edge. No-op if absent."""
        ...

    @abstractmethod
    def nodes(self) -> list[EntityId]: ...

    @abstractmethod
    def set_edge(self, source: EntityId, target: EntityId, payload: Any, mark: Mark) -> None:
        """Insert the (source, target, mark) edge or overwrite its payload."""
        ...

    @abstractmethod
    def has_edge(self, source: EntityId, target: EntityId, mark: Mark | None = None) -> bool:
        """Edge existence; ``mark=None`` matches an edge of any mark."""
        ...

    @abstractmethod
    def edge_payload(self, source: EntityId, target: EntityId, mark: Mark) -> Any: ...

    @abstractmethod
    def remove_edge(self, source: EntityId, target: EntityId, mark: Mark) -> None:
        """Remove one edge. No-op if absent."""
        ...

    @abstractmethod
    def in_edges(self, node: EntityId) -> list[Edge]: ...

    @abstractmethod
    def out_edges(self, node: EntityId) -> list[Edge]: ...

    @abstractmethod
    def edges(self, mark: Mark | None = None) -> list[Edge]: ...


class NetworkXGraphStore(GraphStore):
    """In-memory store backed by ``networkx.MultiDiGraph``."""

    def __init__(self, graph: _Graph | None = None) -> None:
        self._graph: _Graph = graph if graph is not None else nx.MultiDiGraph()

    @property
    def graph(self) -> _Graph:
        """The underlying NetworkX graph (for analysis, never for mutation)."""
        return self._graph

    # --- nodes ---

    def add_node(self, node: EntityId, payload: Any = None) -> None:
        self._graph.add_node(node)
        self._graph.nodes[node][PAYLOAD] = payload

    def has_node(self, node: EntityId) -> bool:
        return self._graph.has_node(node)

    def node_payload(self, node: EntityId) -> Any:
        if node not in self._graph:
            return None
        return self._graph.nodes[node].get(PAYLOAD)

    def remove_node(self, node: EntityId) -> None:
        if node in self._graph:
            self._graph.remove_node(node)

    def nodes(self) -> list[EntityId]:
        return list(self._graph.nodes)

    # --- edges ---

    def set_edge(self, source: EntityId, target: EntityId, payload: Any, mark: Mark) -> None:
        # add_edge on an existing key updates the attribute dict in place.
        self._graph.add_edge(source, target, key=mark, **{PAYLOAD: payload})

    def has_edge(self, source: EntityId, target: EntityId, mark: Mark | None = None) -> bool:
        return self._graph.has_edge(source, target, key=mark)

    def edge_payload(self, source: EntityId, target: EntityId, mark: Mark) -> Any:
        data = self._graph.get_edge_data(source, target, key=mark)
        return data.get(PAYLOAD) if data is not None else None

    def remove_edge(self, source: EntityId, target: EntityId, mark: Mark) -> None:
        if self._graph.has_edge(source, target, key=mark):
            self._graph.remove_edge(source, target, key=mark)

    def in_edges(self, node: EntityId) -> list[Edge]:
        # A missing node must not fall through to nbunch iteration: a string
        # id would otherwise be iterated character by character.
        if node not in self._graph:
            return []
        return list(self._to_edges(self._graph.in_edges(node, keys=True, data=PAYLOAD)))

    def out_edges(self, node: EntityId) -> list[Edge]:
        if node not in self._graph:
            return []
        return list(self._to_edges(self._graph.out_edges(node, keys=True, data=PAYLOAD)))

    def edges(self, mark: Mark | None = None) -> list[Edge]:
        records = self._to_edges(self._graph.edges(keys=True, data=PAYLOAD))
        if mark is None:
            return list(records)
        return [e for e in records if e.mark == mark]

    @staticmethod
    def _to_edges(rows: Any) -> Iterator[Edge]:
        for u, v, key, payload in rows:
            yield Edge(source=u, target=v, mark=key, payload=payload)
