# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typer application for inspecting grammars and parsing argument vectors."""

from __future__ import annotations

import logging
import sys

import typer

from .. import console as ui
from ..api import parse_with_settings
from ..errors import DefinitionError, OptGrammarError, ParseError
from ..grammar import parse_grammar
from ..permissive import parse_unchecked
from ..result import ParseResult
from ..settings import DEFAULT_SETTINGS
from .rendering import build_option_table, render_result, result_to_json

LOGGER = logging.getLogger("optgrammar")

EXIT_PARSE_ERROR = 1
EXIT_DEFINITION_ERROR = 2

app = typer.Typer(
    name="optgrammar",
    help="Inspect option grammars and parse argument vectors against them.",
    no_args_is_help=True,
    add_completion=False,
)

_ARGS_HELP = "Arguments to parse; place them after '--'."


def _ensure_debug_logger() -> None:
    """Stream library debug messages to stderr."""

    if getattr(LOGGER, "_optgrammar_debug_configured", False):
        return
    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter("[debug] %(name)s: %(message)s"))
    LOGGER.addHandler(handler)
    LOGGER.setLevel(logging.DEBUG)
    LOGGER.propagate = False
    setattr(LOGGER, "_optgrammar_debug_configured", True)


def _exit_code(exc: OptGrammarError) -> int:
    if isinstance(exc, DefinitionError):
        return EXIT_DEFINITION_ERROR
    return EXIT_PARSE_ERROR


def _emit(result: ParseResult, *, as_json: bool, color: bool, emoji: bool) -> None:
    if as_json:
        typer.echo(result_to_json(result))
        return
    render_result(ui.get_console(color=color, emoji=emoji), result)


@app.command("parse")
def parse_command(
    grammar: str = typer.Argument(..., help="Option grammar, e.g. 'verbose|v+,file|f:f'."),
    args: list[str] | None = typer.Argument(None, help=_ARGS_HELP),
    single_dash_long: bool = typer.Option(False, "--single-dash-long", help="Use single-dash long options."),
    positionals_after_options: bool = typer.Option(
        False,
        "--positionals-after-options",
        help="Stop option parsing at the first positional argument.",
    ),
    include_unused: bool = typer.Option(False, "--include-unused", help="Report options that were not given."),
    no_auto_help_version: bool = typer.Option(
        False,
        "--no-auto-help-version",
        help="Do not register --help and --version automatically.",
    ),
    enforce_required_on_help: bool = typer.Option(
        False,
        "--enforce-required-on-help",
        help="Check required options even when --help or --version is given.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable coloured output."),
    no_emoji: bool = typer.Option(False, "--no-emoji", help="Disable emoji output."),
    debug: bool = typer.Option(False, "--debug", help="Log parser internals to stderr."),
) -> None:
    """Parse ARGS against GRAMMAR and print the result."""

    if debug:
        _ensure_debug_logger()
    settings = DEFAULT_SETTINGS.with_overrides(
        auto_help_version=not no_auto_help_version,
        ignore_required_on_help_version=not enforce_required_on_help,
        single_dash_long=single_dash_long,
        positionals_after_options=positionals_after_options,
        include_unused=include_unused,
    )
    try:
        result = parse_with_settings(args or [], grammar, settings)
    except OptGrammarError as exc:
        ui.fail(exc.message, use_emoji=not no_emoji, use_color=not no_color)
        raise typer.Exit(code=_exit_code(exc)) from exc
    _emit(result, as_json=as_json, color=not no_color, emoji=not no_emoji)


@app.command("scan")
def scan_command(
    args: list[str] | None = typer.Argument(None, help=_ARGS_HELP),
    single_dash_long: bool = typer.Option(False, "--single-dash-long", help="Use single-dash long options."),
    positionals_after_options: bool = typer.Option(
        False,
        "--positionals-after-options",
        help="Stop option parsing at the first positional argument.",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable coloured output."),
    no_emoji: bool = typer.Option(False, "--no-emoji", help="Disable emoji output."),
) -> None:
    """Classify ARGS by shape only, without a grammar."""

    try:
        result = parse_unchecked(
            args or [],
            single_dash_long=single_dash_long,
            positionals_after_options=positionals_after_options,
        )
    except ParseError as exc:
        ui.fail(exc.message, use_emoji=not no_emoji, use_color=not no_color)
        raise typer.Exit(code=EXIT_PARSE_ERROR) from exc
    _emit(result, as_json=as_json, color=not no_color, emoji=not no_emoji)


@app.command("check")
def check_command(
    grammar: str = typer.Argument(..., help="Option grammar to validate."),
    single_dash_long: bool = typer.Option(False, "--single-dash-long", help="Use single-dash long options."),
    no_auto_help_version: bool = typer.Option(
        False,
        "--no-auto-help-version",
        help="Do not register --help and --version automatically.",
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable coloured output."),
    no_emoji: bool = typer.Option(False, "--no-emoji", help="Disable emoji output."),
) -> None:
    """Validate GRAMMAR and list the options it declares."""

    try:
        table = parse_grammar(
            grammar,
            single_dash_long=single_dash_long,
            auto_help_version=not no_auto_help_version,
        )
    except DefinitionError as exc:
        ui.fail(exc.message, use_emoji=not no_emoji, use_color=not no_color)
        raise typer.Exit(code=EXIT_DEFINITION_ERROR) from exc
    ui.get_console(color=not no_color, emoji=not no_emoji).print(build_option_table(table))
    ui.ok(f"Grammar declares {len(table)} option(s).", use_emoji=not no_emoji, use_color=not no_color)


def main() -> None:
    """Console-script entry point."""

    app()


__all__ = ["EXIT_DEFINITION_ERROR", "EXIT_PARSE_ERROR", "app", "main"]
