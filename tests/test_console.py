# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the console message helpers."""

from __future__ import annotations

import io
import sys

import pytest

from optgrammar import console


def test_emoji_toggle() -> None:
    assert console.emoji("✅ ", True) == "✅ "
    assert console.emoji("✅ ", False) == ""


def test_detect_tty_is_false_for_plain_streams(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "stdout", io.StringIO())
    assert console.detect_tty() is False
    assert console.detect_tty(io.StringIO()) is False


def test_messages_route_to_expected_streams(capsys: pytest.CaptureFixture[str]) -> None:
    console.ok("grammar ok", use_emoji=False, use_color=False)
    console.fail("bad option [red]", use_emoji=False, use_color=False)

    captured = capsys.readouterr()
    assert "grammar ok" in captured.out
    assert "bad option [red]" in captured.err
    assert "grammar ok" not in captured.err


def test_get_console_is_cached() -> None:
    first = console.get_console(color=False, emoji=False)
    assert console.get_console(color=False, emoji=False) is first
    assert console.get_console(color=False, emoji=False, stderr=True) is not first
