# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing console helpers with optional colour and emoji support."""

from __future__ import annotations

import sys
from functools import lru_cache
from typing import Literal, TextIO

from rich.console import Console
from rich.text import Text


def detect_tty(stream: TextIO | None = None) -> bool:
    """Return whether ``stream`` (standard output by default) is a terminal."""

    target = sys.stdout if stream is None else stream
    try:
        return target.isatty()
    except (AttributeError, ValueError):
        return False


@lru_cache(maxsize=8)
def get_console(*, color: bool, emoji: bool, stderr: bool = False) -> Console:
    """Return a Rich console configured for the presentation preferences.

    Args:
        color: ``True`` when ANSI colour output should be enabled.
        emoji: ``True`` when Rich should render emoji glyphs.
        stderr: Write to standard error instead of standard output.

    Returns:
        Console: Cached console matching the preferences.
    """

    tty = detect_tty(sys.stderr if stderr else sys.stdout)
    color_system: Literal["auto"] | None = "auto" if color and tty else None
    return Console(
        color_system=color_system,
        no_color=not (color and tty),
        emoji=emoji,
        soft_wrap=True,
        highlight=False,
        stderr=stderr,
    )


def emoji(symbol: str, enable: bool) -> str:
    """Return *symbol* when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def _print_line(msg: str, *, style: str, use_emoji: bool, use_color: bool, stderr: bool = False) -> None:
    console = get_console(color=use_color, emoji=use_emoji, stderr=stderr)
    text = Text(msg)
    if use_color:
        text.stylize(style)
    console.print(text)


def ok(msg: str, *, use_emoji: bool = True, use_color: bool = True) -> None:
    """Emit a success message."""

    _print_line(f"{emoji('✅ ', use_emoji)}{msg}", style="green", use_emoji=use_emoji, use_color=use_color)


def fail(msg: str, *, use_emoji: bool = True, use_color: bool = True) -> None:
    """Emit an error message to standard error."""

    _print_line(
        f"{emoji('❌ ', use_emoji)}{msg}",
        style="red",
        use_emoji=use_emoji,
        use_color=use_color,
        stderr=True,
    )


__all__ = ["detect_tty", "emoji", "fail", "get_console", "ok"]
