"""Tests for the Rich console proxy (cli/console.py).

Output is captured through ``capsys``; Rich writes to whatever
``sys.stdout`` is at print time.
"""

from __future__ import annotations

import sys

import pytest

from workspace_console.cli.console import _ConsoleProxy
from workspace_console.cli.render import to_json


class TestVerbatimOutput:
    def test_emoji_codes_are_not_rendered(self, capsys: pytest.CaptureFixture[str]) -> None:
        proxy = _ConsoleProxy()
        proxy.print("Search results:\n" + to_json({"key": "mood", "value": ":smile: [C1]"}))

        out = capsys.readouterr().out
        assert '"value": ":smile: [C1]"' in out
        assert "\U0001f604" not in out

    def test_event_line_brackets_survive(self, capsys: pytest.CaptureFixture[str]) -> None:
        _ConsoleProxy().print("Call [:thumbs_up:] id changed to [C2].")
        assert "Call [:thumbs_up:] id changed to [C2]." in capsys.readouterr().out


class TestRichAvailability:
    def test_falls_back_after_rich_disappears(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        proxy = _ConsoleProxy()
        proxy.print("first")

        monkeypatch.setitem(sys.modules, "rich", None)
        monkeypatch.setitem(sys.modules, "rich.console", None)
        proxy.print("second")

        out = capsys.readouterr().out
        assert "first" in out
        assert "second" in out
