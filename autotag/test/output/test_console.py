"""Tests for autotag.output.console."""

from __future__ import annotations

from autotag.output.console import MockConsole, RichConsole, Style


def test_mock_console_captures_styles() -> None:
    console = MockConsole()
    console.info("run for o/r")
    console.error("boom")
    console.print("  abc123 patch fix", Style.DIM)

    assert console.messages == ["info: run for o/r", "error: boom", "  abc123 patch fix"]
    assert console.has_error()
    assert len(console.find("o/r")) == 1


def test_rich_console_does_not_interpret_brackets(capsys) -> None:
    console = RichConsole()
    console.info("commit [skip ci] tagged")
    console.print("[bold]literal[/bold]")

    out = capsys.readouterr().out
    assert "[skip ci]" in out
    assert "[bold]literal[/bold]" in out
