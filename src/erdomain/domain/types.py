"""Core value types: identifiers and link-type options.

``LinkTypeOptions`` is the configuration object attached to every
registered link type. Entity and edge payloads are opaque and never
inspected by the domain.
"""

from __future__ import annotations

from collections.abc import Hashable, Mapping
from typing import Any

from pydantic import BaseModel

# Entity identifiers and link-type marks are usually strings, but any
# hashable value the graph store accepts will do.
type EntityId = Hashable
type Mark = Hashable

# Accepted wherever link-type options are supplied.
type OptionsLike = LinkTypeOptions | Mapping[str, Any] | None


class LinkTypeOptions(BaseModel):
    """Modifiers of a link type.

    Attributes:
        mutual: A link implies its reverse link with the same payload.
        transitive: A chain of links implies a direct link between every
            pair of entities on the chain.
    """

    model_config = {"frozen": True, "extra": "ignore"}

    mutual: bool = False
    transitive: bool = False

    def merged(self, options: OptionsLike) -> LinkTypeOptions:
        """Return a copy with the explicitly supplied fields overridden.

        Fields absent from *options* keep their current value. For a
        :class:`LinkTypeOptions` argument only fields set at construction
        count as supplied.
        """
        if options is None:
            return self
        if isinstance(options, LinkTypeOptions):
            supplied = options.model_dump(exclude_unset=True)
        elif not isinstance(options, Mapping):
            # Raises ValidationError: only a mapping or a model is accepted.
            return type(self).model_validate(options)
        else:
            supplied = {k: v for k, v in options.items() if k in type(self).model_fields}
        # Validate through a fresh model so bad values fail before any mutation.
        return type(self).model_validate({**self.model_dump(), **supplied})

