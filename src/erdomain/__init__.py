"""erdomain — entities and typed links with eager transitive/mutual closure."""

from erdomain.core import ERDomain
from erdomain.domain.errors import (
    AlreadyExistsError,
    AlreadyRegisteredError,
    ERDomainError,
    NotFoundError,
    NotRegisteredError,
)
from erdomain.domain.types import LinkTypeOptions

__version__ = "0.3.0"

__all__ = [
    "AlreadyExistsError",
    "AlreadyRegisteredError",
    "ERDomain",
    "ERDomainError",
    "LinkTypeOptions",
    "NotFoundError",
    "NotRegisteredError",
    "__version__",
]
