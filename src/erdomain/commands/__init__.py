"""Subcommand modules for erdomain.

Imports are deferred into :func:`register_commands` so that
``erdomain --help`` does not load the domain stack.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Attach every subcommand to the root group."""
    from erdomain.commands.link_types import link_types
    from erdomain.commands.run import run

    cli.add_command(run)
    cli.add_command(link_types)
