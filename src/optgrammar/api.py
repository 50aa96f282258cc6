# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Validating entry points: compile a grammar and parse arguments against it."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from .converters import ConverterFunc
from .grammar import parse_grammar
from .matcher import match_arguments
from .resolver import resolve_matches
from .result import ParseResult, assemble_result
from .settings import DEFAULT_SETTINGS, ParseSettings


def parse_with_settings(args: Sequence[str], grammar: str, settings: ParseSettings = DEFAULT_SETTINGS) -> ParseResult:
    """Parse ``args`` against ``grammar`` using a prepared :class:`ParseSettings`.

    The grammar is compiled afresh on every call; nothing is cached between
    calls.

    Args:
        args: Raw argument vector, without the program name.
        grammar: Comma-separated option specs.
        settings: Parser configuration.

    Returns:
        ParseResult: Converted option values and positional arguments.

    Raises:
        TypeError: If ``args`` or ``grammar`` have the wrong type.
        DefinitionError: If ``grammar`` is malformed.
        ParseError: If ``args`` do not satisfy ``grammar``.
    """

    table = parse_grammar(
        grammar,
        single_dash_long=settings.single_dash_long,
        auto_help_version=settings.auto_help_version,
    )
    outcome = match_arguments(
        args,
        table,
        positionals_after_options=settings.positionals_after_options,
        ignore_required_on_help_version=settings.ignore_required_on_help_version,
    )
    resolved = resolve_matches(outcome.matches, settings.converters, table=table)
    return assemble_result(
        resolved,
        outcome.positionals,
        table=table,
        include_unused=settings.include_unused,
    )


def parse(
    args: Sequence[str],
    grammar: str,
    *,
    auto_help_version: bool = True,
    ignore_required_on_help_version: bool = True,
    single_dash_long: bool = False,
    positionals_after_options: bool = False,
    include_unused: bool = False,
    converters: Mapping[str, ConverterFunc] | None = None,
) -> ParseResult:
    """Parse ``args`` against the option ``grammar``.

    Args:
        args: Raw argument vector, without the program name.
        grammar: Comma-separated option specs such as ``"verbose|v+,file|f:f!"``.
        auto_help_version: Register ``--help`` and ``--version`` flags when the
            grammar does not declare them.
        ignore_required_on_help_version: Skip required-option checks when
            ``--help`` or ``--version`` was given.
        single_dash_long: Treat every option as a long option written with a
            single dash.
        positionals_after_options: Treat every token after the first
            positional argument as positional.
        include_unused: Report declared options that were not given as
            :class:`~optgrammar.values.Absent`.
        converters: ``(name, raw) -> value`` functions keyed by canonical
            option name; they take precedence over the built-in converters.

    Returns:
        ParseResult: Converted option values and positional arguments.

    Raises:
        TypeError: If ``args`` or ``grammar`` have the wrong type.
        DefinitionError: If ``grammar`` is malformed.
        ParseError: If ``args`` do not satisfy ``grammar``.

    Example:
        >>> parse(["-vv", "--verbose", "out.txt"], "verbose|v+").to_dict()
        {'verbose': 3}
    """

    settings = ParseSettings(
        auto_help_version=auto_help_version,
        ignore_required_on_help_version=ignore_required_on_help_version,
        single_dash_long=single_dash_long,
        positionals_after_options=positionals_after_options,
        include_unused=include_unused,
        converters=dict(converters or {}),
    )
    return parse_with_settings(args, grammar, settings)


__all__ = ["parse", "parse_with_settings"]
