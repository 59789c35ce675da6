"""Domain exceptions.

All failures are caller programming errors raised before any state is
touched. ``NotFoundError`` doubles as a :class:`LookupError` so callers
can treat missing entities and link types like missing keys.
"""

from __future__ import annotations


class ERDomainError(Exception):
    """Base class for all entity-relationship domain errors."""


class AlreadyExistsError(ERDomainError):
    """An entity with the given identifier already exists."""


class NotFoundError(ERDomainError, LookupError):
    """No entity with the given identifier exists."""


class AlreadyRegisteredError(AlreadyExistsError):
    """A link type with the given mark is already registered."""


class NotRegisteredError(NotFoundError):
    """No link type with the given mark is registered."""
