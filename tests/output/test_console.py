"""Tests for Rich Console factory and theme."""

from __future__ import annotations

from io import StringIO

from erdomain.output.console import ERD_THEME, create_console, flag_style, get_output


class TestCreateConsole:
    def test_returns_console_with_stringio(self) -> None:
        console = create_console()
        assert isinstance(console.file, StringIO)

    def test_no_color_disables_ansi(self) -> None:
        console = create_console(no_color=True)
        console.print("[erd.error]hello[/erd.error]")
        output = get_output(console)
        assert "\x1b" not in output
        assert "hello" in output

    def test_widths(self) -> None:
        assert create_console().width == 120
        assert create_console(width=80).width == 80


class TestTheme:
    def test_flag_styles_are_themed(self) -> None:
        assert flag_style(True) in ERD_THEME.styles
        assert flag_style(False) in ERD_THEME.styles
        assert flag_style(True) != flag_style(False)
