"""Domain layer — link-type registry, entities, typed links, closure.

This layer depends only on stdlib and pydantic.
It must never import from services, commands, config, or output; the
graph store is only referenced for type checking.
"""
