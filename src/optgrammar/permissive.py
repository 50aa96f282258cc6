# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Grammar-free argument scanning that classifies tokens by shape only.

Nothing here validates option names, enforces required options, or converts
values. Use :func:`optgrammar.parse` whenever a grammar is available.
"""

from __future__ import annotations

from collections.abc import Sequence
from types import MappingProxyType

from .errors import ParseError
from .matcher import ArgumentStream, TokenWalker, ensure_arguments, invalid_option
from .result import ParseResult
from .types import LONG_OPTION_PATTERN, SHORT_OPTION_PATTERN
from .values import Flag, OptionValue, Text


class _ShapeScanner(TokenWalker):
    def __init__(self, *, single_dash_long: bool, positionals_after_options: bool) -> None:
        super().__init__(
            single_dash_long=single_dash_long,
            positionals_after_options=positionals_after_options,
        )
        self.options: dict[str, OptionValue] = {}

    def _store(self, name: str, value: str | None) -> None:
        if name in self.options:
            raise ParseError(f"Option '{name}' can't repeat.", option=name, token=name)
        self.options[name] = Flag(True) if value is None else Text(value)

    def on_short(self, token: str, stream: ArgumentStream) -> None:
        del stream  # values are only taken from "=value"
        match = SHORT_OPTION_PATTERN.fullmatch(token)
        if match is None:
            raise invalid_option(token)
        for letter in match.group("bundle"):
            self._store(letter, None)
        self._store(match.group("last"), match.group("value"))

    def on_long(self, token: str, stream: ArgumentStream) -> None:
        del stream
        match = LONG_OPTION_PATTERN.fullmatch(token)
        if match is None:
            raise invalid_option(token)
        self._store(match.group("name"), match.group("value"))


def parse_unchecked(
    args: Sequence[str],
    *,
    single_dash_long: bool = False,
    positionals_after_options: bool = False,
) -> ParseResult:
    """Scan ``args`` without a grammar.

    Every option token becomes an entry keyed by its name: bundled short
    letters and bare long options map to ``Flag(True)``, a ``=value`` suffix
    maps to ``Text(value)``. The following token is never consumed as a value.

    Args:
        args: Raw argument vector, without the program name.
        single_dash_long: Treat every option as a long option written with a
            single dash.
        positionals_after_options: Treat every token after the first
            positional argument as positional.

    Returns:
        ParseResult: Option values and positional arguments.

    Raises:
        TypeError: If ``args`` is not a sequence of strings.
        ParseError: If a token is malformed or an option name repeats.
    """

    scanner = _ShapeScanner(
        single_dash_long=single_dash_long,
        positionals_after_options=positionals_after_options,
    )
    positionals = scanner.walk(ensure_arguments(args))
    return ParseResult(options=MappingProxyType(scanner.options), positionals=positionals)


__all__ = ["parse_unchecked"]
