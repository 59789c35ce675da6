"""Closure propagation — eager materialization of implied links.

Every ``link`` request is expanded at write time so that reads stay plain
existence checks:

- Non-transitive mark: the only pair is (source, target).
- Transitive mark: every entity that already reaches *source* (the
  predecessor closure S) is linked to every entity already reachable from
  *target* (the successor closure D). If the graph was closed before the
  insertion it is closed afterwards.
- Mutual mark: each written edge is mirrored with the same payload.
  Combined with transitivity this merges connected components into one
  fully connected clique.

Derived edges carry the payload of the triggering call. A pair whose two
ends are the same entity is only written when it is the requested pair;
derived self pairs are skipped. Removal never shrinks the closure.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from erdomain.domain.entities import EntityStore
    from erdomain.domain.links import TypedLinkGraph
    from erdomain.domain.registry import LinkTypeRegistry
    from erdomain.domain.types import EntityId, LinkTypeOptions, Mark

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Propagation:
    """Summary of one closure propagation."""

    mark: Mark
    sources: tuple[EntityId, ...]  # predecessor closure S
    targets: tuple[EntityId, ...]  # successor closure D
    written: int  # edge writes, overwrites included


def reachable(
    links: TypedLinkGraph,
    start: EntityId,
    mark: Mark,
    *,
    backward: bool = False,
) -> list[EntityId]:
    """Return *start* plus every entity connected to it along *mark* edges.

    Follows edges forward (successors) by default, or backward
    (predecessors) when *backward* is True. Iterative worklist with a
    visited set, so cycles terminate and deep chains need no recursion.
    Result order is discovery order, *start* first.
    """
    step = links.predecessors if backward else links.successors
    found: list[EntityId] = [start]
    visited: set[EntityId] = {start}
    worklist: deque[EntityId] = deque([start])
    while worklist:
        node = worklist.popleft()
        for neighbor in step(node, mark):
            if neighbor not in visited:
                visited.add(neighbor)
                found.append(neighbor)
                worklist.append(neighbor)
    return found


def find_connectors(
    links: TypedLinkGraph,
    mark: Mark,
    options: LinkTypeOptions,
    source: EntityId,
    target: EntityId,
) -> tuple[list[EntityId], list[EntityId]]:
    """Compute the (S, D) pair for linking *source* to *target* by *mark*."""
    if not options.transitive:
        return [source], [target]
    return (
        reachable(links, source, mark, backward=True),
        reachable(links, target, mark),
    )


class ClosureEngine:
    """Executes link requests against the registry, entities and links."""

    def __init__(
        self,
        registry: LinkTypeRegistry,
        entities: EntityStore,
        links: TypedLinkGraph,
    ) -> None:
        self._registry = registry
        self._entities = entities
        self._links = links

    def link(
        self,
        mark: Mark,
        source: EntityId,
        target: EntityId,
        payload: Any = None,
    ) -> Propagation:
        """Link *source* to *target* by *mark* and materialize the closure.

        Unknown marks are registered with default options and unknown
        entities are created with a ``None`` payload.

        Raises:
            TypeError: If *mark*, *source* or *target* is unhashable.
        """
        # Unhashable ids raise TypeError here, before anything is written.
        hash((mark, source, target))
        options = self._registry.lookup(mark, silent=True)
        if options is None:
            options = self._registry.register(mark)
            logger.debug("Auto-registered link type %r", mark)
        for entity in (source, target):
            if not self._entities.exists(entity):
                self._entities.add(entity)
                logger.debug("Auto-created entity %r", entity)

        sources, targets = find_connectors(self._links, mark, options, source, target)

        written = 0
        for s in sources:
            for d in targets:
                if s == d and (s, d) != (source, target):
                    continue
                self._links.put(s, d, mark, payload)
                written += 1
                if options.mutual:
                    self._links.put(d, s, mark, payload)
                    written += 1

        logger.debug(
            "Linked %r -> %r by %r: |S|=%d |D|=%d, %d edge write(s)",
            source,
            target,
            mark,
            len(sources),
            len(targets),
            written,
        )
        return Propagation(
            mark=mark,
            sources=tuple(sources),
            targets=tuple(targets),
            written=written,
        )
