"""EntityStore — entity identifiers mapped to opaque payloads."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from erdomain.domain.errors import AlreadyExistsError, NotFoundError

if TYPE_CHECKING:
    from erdomain.domain.types import EntityId
    from erdomain.infrastructure.graph.store import GraphStore


class EntityStore:
    """Entities are the nodes of the underlying graph store.

    Removing an entity removes every edge touching it, whatever the mark
    or direction, so no edge ever points at a missing entity.
    """

    def __init__(self, store: GraphStore) -> None:
        self._store = store

    def add(self, entity: EntityId, payload: Any = None) -> None:
        if self._store.has_node(entity):
            msg = f"Entity {entity!r} already exists"
            raise AlreadyExistsError(msg)
        self._store.add_node(entity, payload)

    def edit(self, entity: EntityId, payload: Any) -> None:
        self._require(entity)
        self._store.add_node(entity, payload)

    def exists(self, entity: EntityId) -> bool:
        return self._store.has_node(entity)

    def remove(self, entity: EntityId) -> None:
        self._store.remove_node(entity)

    def details(self, entity: EntityId, *, silent: bool = False) -> Any:
        """Payload of *entity*.

        Raises:
            NotFoundError: If the entity does not exist and *silent* is False.
        """
        if not silent:
            self._require(entity)
        return self._store.node_payload(entity)

    def ids(self) -> list[EntityId]:
        return self._store.nodes()

    def _require(self, entity: EntityId) -> None:
        if not self._store.has_node(entity):
            msg = f"Entity {entity!r} does not exist"
            raise NotFoundError(msg)
