"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, erdomain.toml only contains
overrides. A config file is optional; an empty domain needs nothing.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from erdomain.domain.types import LinkTypeOptions

# --- erdomain.toml sections ---


class DomainConfig(BaseModel):
    """[domain] section."""

    model_config = {"frozen": True}

    # Shown in script run summaries.
    name: str = "default"
    # Default for link-type removal requested without an explicit flag.
    consistent_removal: bool = True


class ErdConfig(BaseModel):
    """Root configuration composing all sections.

    Link types are declared as ``[link_types.<mark>]`` tables and are
    registered on every domain built from this configuration::

        [link_types.friend]
        mutual = true
        transitive = true
    """

    model_config = {"frozen": True}

    domain: DomainConfig = Field(default_factory=DomainConfig)
    link_types: dict[str, LinkTypeOptions] = Field(default_factory=dict)
