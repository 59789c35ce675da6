"""Command: apply an operation script to a fresh domain."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from erdomain.commands._base import ErdCommand
from erdomain.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from erdomain.commands._context import AppContext


@click.command(
    cls=ErdCommand,
    examples="""\
  erdomain run script.json
  erdomain run script.json --partial
  erdomain run script.json --edges --type friend
  erdomain --json run script.json""",
)
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option("--partial", is_flag=True, help="Keep going after a failing step.")
@click.option("--edges", "show_edges", is_flag=True, help="List the resulting links.")
@click.option("--type", "mark", default=None, help="Only list links of this type (with --edges).")
@click.pass_obj
def run(app: AppContext, file: str, partial: bool, show_edges: bool, mark: str | None) -> None:
    """Run the operations in FILE against a new domain.

    FILE must contain a JSON array of steps, each an object with an "op"
    key (link, are_linked, unlink, add_link_type, add_entity, ...) and
    that operation's arguments. Link types from erdomain.toml are
    registered before the first step.
    """
    try:
        with open(file, encoding="utf-8") as fh:
            steps = json.load(fh)
    except (json.JSONDecodeError, OSError, UnicodeDecodeError) as exc:
        app.emit(
            ServiceResult.failure(
                "run_script",
                ErrorCode.INVALID_FILE,
                f"Error reading {file}: {exc}",
            )
        )
        return

    if not isinstance(steps, list):
        app.emit(
            ServiceResult.failure(
                "run_script",
                ErrorCode.INVALID_FILE,
                "Script file must contain a top-level JSON array.",
            )
        )
        return

    svc = app.service
    result = svc.run_script(steps, partial=partial)
    if show_edges:
        result = result.model_copy(update={"data": {**result.data, "edges": svc.edges(mark).data}})
    app.emit(result)
