"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op``; unknown ops fall back to a
key-value listing of ``result.data``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.table import Table
from rich.text import Text

from erdomain.output.console import create_console, flag_style, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from erdomain.services.result import ServiceResult


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render *result* to text via Rich."""
    console = create_console()
    if result.ok:
        _OP_RENDERERS.get(result.op, _render_generic)(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: one line, or item keys only."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if result.op == "link_types":
        return "\n".join(str(item["type"]) for item in result.data.get("items", []))
    if result.op == "edges":
        return "\n".join(
            f"{e['source']} -[{e['type']}]-> {e['target']}" for e in result.data.get("items", [])
        )
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="erd.ok"), Text(f"  {result.op}", style="erd.op"))


def _field(console: Console, key: str, value: Any) -> None:
    console.print(Text(f"  {key}: ", style="erd.key"), Text(str(value)), sep="")


def _render_meta(console: Console, result: ServiceResult) -> None:
    telemetry = (result.meta or {}).get("telemetry")
    if not telemetry:
        return
    console.print()
    console.print(Text("  telemetry:", style="dim"))
    _render_span(console, telemetry, indent=4)


def _render_span(console: Console, span: dict[str, Any], indent: int) -> None:
    duration = span.get("duration_ms", 0.0)
    style = "yellow" if duration > 100 else "dim"
    name = escape(str(span.get("name", "?")))
    line = f"{' ' * indent}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    notes = span.get("annotations") or {}
    if notes:
        line += "  (" + escape(", ".join(f"{k}={v}" for k, v in notes.items())) + ")"
    console.print(line)
    for child in span.get("children", []):
        _render_span(console, child, indent + 4)


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    console.print(
        Text("ERROR", style="erd.error"),
        Text(f"  {result.op}", style="erd.op"),
        Text(" — "),
        Text(err.message if err else "Unknown error"),
        sep="",
    )
    for failure in result.data.get("errors", []):
        console.print(
            f"  [erd.error]step {failure.get('index')}[/erd.error] "
            + escape(f"{failure.get('op')}: {failure.get('error')}")
        )


def _render_link_types(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    table = Table(show_header=True, pad_edge=False)
    table.add_column("Type", style="erd.type", no_wrap=True)
    table.add_column("Mutual")
    table.add_column("Transitive")
    for item in result.data.get("items", []):
        mutual = bool(item.get("mutual"))
        transitive = bool(item.get("transitive"))
        table.add_row(
            Text(str(item.get("type"))),
            Text(str(mutual).lower(), style=flag_style(mutual)),
            Text(str(transitive).lower(), style=flag_style(transitive)),
        )
    console.print(table)
    if verbose:
        _render_meta(console, result)


def _render_edges(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    _field(console, "count", result.data.get("count", 0))
    items = result.data.get("items", [])
    if not items:
        return
    table = Table(show_header=True, pad_edge=False)
    table.add_column("Source", style="erd.entity")
    table.add_column("Type", style="erd.type")
    table.add_column("Target", style="erd.entity")
    if verbose:
        table.add_column("Payload", style="dim")
    for edge in sorted(items, key=lambda e: (str(e["type"]), str(e["source"]), str(e["target"]))):
        row = [Text(str(edge["source"])), Text(str(edge["type"])), Text(str(edge["target"]))]
        if verbose:
            row.append(Text(repr(edge.get("payload"))))
        table.add_row(*row)
    console.print(table)


def _render_script(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    if "domain" in result.data:
        _field(console, "domain", result.data["domain"])
    _field(console, "steps", result.data.get("count", 0))
    for step in result.data.get("results", []):
        summary = _STEP_SUMMARIES.get(step.get("op", ""))
        if summary is not None:
            console.print(f"  [dim]{step['index']:>3}[/dim]  {escape(summary(step))}")
        elif verbose:
            console.print(f"  [dim]{step['index']:>3}[/dim]  {escape(str(step.get('op')))}")
    if "edges" in result.data:
        console.print()
        _render_edges(
            result.model_copy(update={"op": "edges", "data": result.data["edges"]}),
            console,
            verbose=verbose,
        )
    if verbose:
        _render_meta(console, result)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# Query steps whose answer is worth showing in a script summary.
_STEP_SUMMARIES: dict[str, Any] = {
    "are_linked": lambda s: (
        f"are_linked {s['entities'][0]} -> {s['entities'][1]}"
        f"{' [' + str(s['type']) + ']' if s.get('type') is not None else ''}: {s['linked']}"
    ),
    "has_entity": lambda s: f"has_entity {s['id']}: {s['exists']}",
    "get_entity": lambda s: f"get_entity {s['id']}: {s['payload']!r}",
    "get_link_type": lambda s: f"get_link_type {s['type']}: {s['options']}",
}

_OP_RENDERERS: dict[str, Any] = {
    "link_types": _render_link_types,
    "edges": _render_edges,
    "run_script": _render_script,
}
