"""Command: list the link types configured in erdomain.toml."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from erdomain.commands._base import ErdCommand

if TYPE_CHECKING:
    from erdomain.commands._context import AppContext


@click.command(
    name="types",
    cls=ErdCommand,
    examples="""\
  erdomain types
  erdomain --json types
  erdomain -c ./erdomain.toml types""",
)
@click.pass_obj
def link_types(app: AppContext) -> None:
    """Show configured link types and their modifiers."""
    app.emit(app.service.link_types())
