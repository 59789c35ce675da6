"""Graph storage primitive backed by NetworkX."""

from erdomain.infrastructure.graph.store import Edge, GraphStore, NetworkXGraphStore

__all__ = ["Edge", "GraphStore", "NetworkXGraphStore"]
