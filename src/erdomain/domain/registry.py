"""LinkTypeRegistry — link-type marks and their modifiers.

Registration is explicit (``register``) or implicit through the closure
engine, which registers unknown marks with default options. Removal can
cascade to the typed-link graph (consistent) or leave edges of the
removed mark behind (inconsistent).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from erdomain.domain.errors import AlreadyRegisteredError, NotRegisteredError
from erdomain.domain.types import LinkTypeOptions

if TYPE_CHECKING:
    from erdomain.domain.links import TypedLinkGraph
    from erdomain.domain.types import Mark, OptionsLike

logger = logging.getLogger(__name__)


class LinkTypeRegistry:
    """Mapping of mark -> :class:`LinkTypeOptions`."""

    def __init__(self, links: TypedLinkGraph) -> None:
        self._links = links
        self._types: dict[Mark, LinkTypeOptions] = {}

    def __contains__(self, mark: object) -> bool:
        return mark in self._types

    def __len__(self) -> int:
        return len(self._types)

    def register(self, mark: Mark, options: OptionsLike = None) -> LinkTypeOptions:
        """Register *mark*; omitted options default to False.

        Raises:
            AlreadyRegisteredError: If *mark* is already registered.
        """
        if mark in self._types:
            msg = f"Link type {mark!r} is already registered"
            raise AlreadyRegisteredError(msg)
        resolved = LinkTypeOptions().merged(options)
        self._types[mark] = resolved
        return resolved

    def update(self, mark: Mark, options: OptionsLike) -> LinkTypeOptions:
        """Merge supplied *options* over the current ones.

        Existing edges are left as they are; new modifiers only apply to
        links created afterwards.

        Raises:
            NotRegisteredError: If *mark* is not registered.
        """
        resolved = self._require(mark).merged(options)
        self._types[mark] = resolved
        return resolved

    def lookup(self, mark: Mark, *, silent: bool = False) -> LinkTypeOptions | None:
        """Options of *mark*; ``None`` for unknown marks when *silent*.

        Raises:
            NotRegisteredError: If *mark* is not registered and not *silent*.
        """
        if silent:
            return self._types.get(mark)
        return self._require(mark)

    def marks(self) -> list[Mark]:
        return list(self._types)

    def remove(self, mark: Mark, *, consistent: bool = True) -> None:
        """Unregister *mark*. No-op if it is not registered."""
        if mark not in self._types:
            return
        if consistent:
            removed = self._links.delete_all(mark)
            logger.debug("Removed %d edge(s) of link type %r", removed, mark)
        del self._types[mark]

    def _require(self, mark: Mark) -> LinkTypeOptions:
        options = self._types.get(mark)
        if options is None:
            msg = f"Link type {mark!r} is not registered"
            raise NotRegisteredError(msg)
        return options
