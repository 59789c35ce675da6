"""ERDomain — the entity-relationship domain aggregate.

The ERDomain is the single handle callers hold. It owns the graph store,
the entity store, the link-type registry, the typed-link graph and the
closure engine, and exposes the library API on top of them.

Writes materialize the full transitive/mutual closure eagerly, so
``are_linked`` is a plain existence check. Removals (``unlink``,
``unlink_all``) are local: they delete only the named edges and never
re-derive a smaller closure.

Every mutating call holds the exclusive side of a readers/writer lock;
queries share it. Closure propagation reads and writes in several steps,
so no query may observe a half-propagated link.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from erdomain.domain.closure import ClosureEngine
from erdomain.domain.entities import EntityStore
from erdomain.domain.links import TypedLinkGraph
from erdomain.domain.registry import LinkTypeRegistry
from erdomain.infrastructure.graph.store import NetworkXGraphStore

if TYPE_CHECKING:
    from collections.abc import Iterator

    from erdomain.domain.closure import Propagation
    from erdomain.domain.types import EntityId, LinkTypeOptions, Mark, OptionsLike
    from erdomain.infrastructure.graph.store import Edge, GraphStore

logger = logging.getLogger(__name__)


class _ReadWriteLock:
    """Many concurrent readers or one writer. Writers are not reentrant."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writing = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writing:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._readers:
                self._cond.wait()
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class ERDomain:
    """Entities connected by typed, directed links with closure semantics.

    Args:
        store: Graph storage to operate on. Defaults to a fresh in-memory
            :class:`NetworkXGraphStore`.

    Usage::

        domain = ERDomain()
        domain.add_link_type("path", {"transitive": True})
        domain.link("path", ("x", "y"))
        domain.link("path", ("y", "z"))
        domain.are_linked(("x", "z"), "path")  # True
    """

    def __init__(self, store: GraphStore | None = None) -> None:
        self._store: GraphStore = store if store is not None else NetworkXGraphStore()
        self._links = TypedLinkGraph(self._store)
        self._entities = EntityStore(self._store)
        self._registry = LinkTypeRegistry(self._links)
        self._engine = ClosureEngine(self._registry, self._entities, self._links)
        self._lock = _ReadWriteLock()

    @property
    def store(self) -> GraphStore:
        return self._store

    # ------------------------------------------------------------------
    # Link types
    # ------------------------------------------------------------------

    def add_link_type(self, mark: Mark, options: OptionsLike = None) -> None:
        """Register a new link type.

        Args:
            mark: Link type name, unique within the domain.
            options: ``mutual``/``transitive`` flags; omitted flags are False
                and unknown keys are ignored.

        Raises:
            AlreadyRegisteredError: If *mark* is already registered.
        """
        with self._lock.write():
            self._registry.register(mark, options)

    def edit_link_type(self, mark: Mark, options: OptionsLike) -> None:
        """Update a registered link type.

        Supplied flags override the current ones, the others stay unchanged.
        Existing links are not re-propagated.

        Raises:
            NotRegisteredError: If *mark* is not registered.
        """
        with self._lock.write():
            self._registry.update(mark, options)

    def get_link_types(self) -> list[Mark]:
        """All registered link type marks."""
        with self._lock.read():
            return self._registry.marks()

    def get_link_type_info(self, mark: Mark, silent: bool = False) -> LinkTypeOptions | None:
        """Options of a registered link type.

        With *silent* an unknown mark yields ``None`` instead of raising
        :class:`NotRegisteredError`.
        """
        with self._lock.read():
            return self._registry.lookup(mark, silent=silent)

    def has_link_type(self, mark: Mark) -> bool:
        with self._lock.read():
            return mark in self._registry

    def remove_link_type(self, mark: Mark, consistent: bool = True) -> None:
        """Unregister a link type. No-op for unknown marks.

        Args:
            mark: Link type name.
            consistent: Also remove every link of this type. When False the
                links stay and remain queryable by their mark.
        """
        with self._lock.write():
            self._registry.remove(mark, consistent=consistent)

    # ------------------------------------------------------------------
    # Links
    # ------------------------------------------------------------------

    def link(
        self,
        mark: Mark,
        entities: tuple[EntityId, EntityId],
        payload: Any = None,
    ) -> Propagation:
        """Link ``entities[0]`` to ``entities[1]`` by *mark*.

        Unknown link types are registered with default options and unknown
        entities are created. Every link implied by the type's modifiers is
        written with the same *payload*.
        """
        source, target = entities
        with self._lock.write():
            return self._engine.link(mark, source, target, payload)

    def are_linked(self, entities: tuple[EntityId, EntityId], mark: Mark | None = None) -> bool:
        """Whether ``entities[0]`` links to ``entities[1]`` (by any mark if None)."""
        source, target = entities
        with self._lock.read():
            return self._links.has(source, target, mark)

    def get_link(self, entities: tuple[EntityId, EntityId], mark: Mark) -> Any:
        """Payload of the link, or ``None`` when there is no such link."""
        source, target = entities
        with self._lock.read():
            return self._links.payload(source, target, mark)

    def edges(self, mark: Mark | None = None) -> list[Edge]:
        """Every stored link, optionally only those of *mark*."""
        with self._lock.read():
            return self._links.edges(mark)

    def unlink(
        self,
        entities: EntityId | tuple[EntityId, EntityId] | list[EntityId],
        mark: Mark | None = None,
    ) -> int:
        """Remove links leaving an entity.

        With a ``(source, target)`` pair (tuple or list), removes the
        pair's link of *mark* (of every mark if None). With a single
        entity, removes all its outgoing links of *mark* (all of them if
        None). Implied links created alongside are kept.

        Returns the number of links removed.
        """
        if isinstance(entities, (tuple, list)):
            source, target = entities
        else:
            source, target = entities, None
        with self._lock.write():
            removed = self._links.delete_outgoing(source, target, mark)
        logger.debug("Unlinked %d edge(s) from %r", removed, source)
        return removed

    def unlink_all(self, mark: Mark | None = None) -> int:
        """Remove every link of *mark* (every link at all if None)."""
        with self._lock.write():
            return self._links.delete_all(mark)

    # ------------------------------------------------------------------
    # Entities
    # ------------------------------------------------------------------

    def add_entity(self, entity: EntityId, payload: Any = None) -> None:
        """Add an entity.

        Raises:
            AlreadyExistsError: If *entity* already exists.
        """
        with self._lock.write():
            self._entities.add(entity, payload)

    def edit_entity(self, entity: EntityId, payload: Any) -> None:
        """Replace an entity's payload.

        Raises:
            NotFoundError: If *entity* does not exist.
        """
        with self._lock.write():
            self._entities.edit(entity, payload)

    def has_entity(self, entity: EntityId) -> bool:
        with self._lock.read():
            return self._entities.exists(entity)

    def remove_entity(self, entity: EntityId) -> None:
        """Remove an entity together with every link touching it."""
        with self._lock.write():
            self._entities.remove(entity)

    def get_entity_details(self, entity: EntityId, silent: bool = False) -> Any:
        """Payload of an entity.

        With *silent* an unknown entity yields ``None`` instead of raising
        :class:`NotFoundError`.
        """
        with self._lock.read():
            return self._entities.details(entity, silent=silent)

    def get_entities(self) -> list[EntityId]:
        with self._lock.read():
            return self._entities.ids()
