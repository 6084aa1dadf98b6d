"""Tests for sweep.output.console module."""

from __future__ import annotations

import pytest

from sweep.output.console import ConsoleProtocol, MockConsole, RichConsole, Style


class TestMockConsole:
    def test_captures_debug_and_info(self) -> None:
        console = MockConsole()
        console.debug("detail")
        console.info("decision")

        assert console.with_style(Style.DEBUG) == ["detail"]
        assert console.with_style(Style.INFO) == ["decision"]

    def test_prefixes(self) -> None:
        console = MockConsole()
        console.success("done")
        console.warning("careful")
        console.error("broken")

        assert console.messages == ["OK done", "warning: careful", "error: broken"]
        assert console.with_style(Style.ERROR) == ["error: broken"]

    def test_find(self) -> None:
        console = MockConsole()
        console.print("one")
        console.header("two")

        assert console.messages == ["one", "two"]
        assert len(console.find("tw")) == 1

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = MockConsole()
        console.info("x")


class TestRichConsole:
    def test_debug_hidden_unless_verbose(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().debug("hidden detail")
        RichConsole(verbose=True).debug("shown detail")

        out = capsys.readouterr().out
        assert "hidden detail" not in out
        assert "shown detail" in out

    def test_does_not_interpret_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().info("release [bold]x[/bold]")

        assert "[bold]x[/bold]" in capsys.readouterr().out
