from __future__ import annotations

import pytest

from relcut.output.console import MockConsole, RichConsole, Style


class TestMockConsole:
    def test_records_styles(self) -> None:
        console = MockConsole()
        console.info("Fetching latest data from origin...")
        console.warning("No release notes URL provided...")
        console.success("New version: v0.1")
        console.print("  git fetch origin", Style.DIM)
        console.newline()

        assert console.messages == [
            "info: Fetching latest data from origin...",
            "warning: No release notes URL provided...",
            "OK New version: v0.1",
            "  git fetch origin",
            "",
        ]
        assert console.has_warning() is True
        assert console.has_error() is False

    def test_find(self) -> None:
        console = MockConsole()
        console.error("tag already exists: v0.1")
        found = console.find("v0.1")
        assert len(found) == 1
        assert found[0].style is Style.ERROR
        assert found[0].message == "error: tag already exists: v0.1"


class TestRichConsole:
    def test_brackets_are_not_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.info("Creating new branch 'release/[rc]'")
        console.print("[bold]literal[/bold]", Style.DIM)

        out = capsys.readouterr().out
        assert "info: Creating new branch 'release/[rc]'" in out
        assert "[bold]literal[/bold]" in out

    def test_status_prefixes(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.success("New version: v0.1")
        console.error("push failed")
        console.warning("no url")

        out = capsys.readouterr().out.splitlines()
        assert out == ["OK New version: v0.1", "error: push failed", "warning: no url"]
