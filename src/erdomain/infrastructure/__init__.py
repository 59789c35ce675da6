"""Infrastructure layer — graph storage.

This layer depends on stdlib and third-party libs (NetworkX).
It must never import from domain, services, commands, or output.
"""
