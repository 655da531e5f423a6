"""Tests for value rendering and console fallbacks (cli/output.py, cli/console.py)."""

from __future__ import annotations

import io
import sys

import pytest

from rpcit.cli.console import console
from rpcit.cli.output import to_compact_json, write_value


class _TTYBuffer(io.StringIO):
    def isatty(self) -> bool:
        return True


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    monkeypatch.setitem(sys.modules, "rich.text", None)
    monkeypatch.setitem(sys.modules, "rich.logging", None)


class TestWriteValue:
    def test_string_verbatim(self) -> None:
        stream = io.StringIO()
        write_value(stream, 'say "hi"')
        assert stream.getvalue() == 'say "hi"\n'

    def test_non_tty_is_compact_json(self) -> None:
        stream = io.StringIO()
        write_value(stream, {"a": [1, 2], "b": None})
        assert stream.getvalue() == '{"a":[1,2],"b":null}\n'

    def test_non_ascii_kept(self) -> None:
        assert to_compact_json({"name": "ünïcode"}) == '{"name":"ünïcode"}'

    def test_tty_is_pretty(self) -> None:
        stream = _TTYBuffer()
        write_value(stream, {"a": 1})
        text = stream.getvalue()
        assert '"a"' in text
        assert text != '{"a":1}\n'

    def test_tty_without_rich_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        _hide_rich(monkeypatch)
        stream = _TTYBuffer()
        write_value(stream, [1, 2])
        assert stream.getvalue() == "[1,2]\n"


class TestConsoleFallback:
    def test_error_without_rich(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        _hide_rich(monkeypatch)
        console.error("boom", label="SigningError", hint="set vars")
        assert capsys.readouterr().err == "SigningError: boom\nHint: set vars\n"

    def test_error_with_markup_like_text_is_literal(
        self, capsys: pytest.CaptureFixture[str],
    ) -> None:
        console.error("bad [bold]value[/bold]", label="InvalidAddressError")
        assert "[bold]value[/bold]" in capsys.readouterr().err

    def test_print_without_rich(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        _hide_rich(monkeypatch)
        console.print("hello")
        assert capsys.readouterr().err == "hello\n"
