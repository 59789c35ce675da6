"""Rich Console factory and theme for erdomain output.

Consoles render into a StringIO buffer so renderers stay pure
``ServiceResult -> str`` functions. Outside a TTY (tests, pipes) Rich
drops color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

ERD_THEME = Theme(
    {
        "erd.ok": "bold green",
        "erd.error": "bold red",
        "erd.op": "bold cyan",
        "erd.key": "dim",
        "erd.entity": "bold blue",
        "erd.type": "magenta",
        "erd.flag.on": "green",
        "erd.flag.off": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console writing to an in-memory buffer."""
    return Console(
        file=StringIO(),
        theme=ERD_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Rendered text of a console made by :func:`create_console`."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def flag_style(value: bool) -> str:
    return "erd.flag.on" if value else "erd.flag.off"
