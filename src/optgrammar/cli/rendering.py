# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Rich and JSON renderers for parse results and option tables."""

from __future__ import annotations

import json
from datetime import date, datetime
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..grammar import OptionSpec, OptionTable
from ..result import ParseResult
from ..values import OptionValue, unwrap


def jsonable(value: object) -> object:
    """Return ``value`` converted into a JSON-serialisable structure."""

    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, list):
        return [jsonable(item) for item in value]
    return value


def result_to_json(result: ParseResult) -> str:
    """Serialise ``result`` as an indented JSON document."""

    payload = {
        "options": {name: jsonable(unwrap(value)) for name, value in result.options.items()},
        "positionals": list(result.positionals),
    }
    return json.dumps(payload, indent=2)


def _format_value(value: OptionValue) -> str:
    plain = jsonable(unwrap(value))
    if plain is None:
        return "-"
    return json.dumps(plain)


def build_result_table(result: ParseResult) -> Table:
    """Return a table listing every option in ``result``."""

    table = Table(title="Options", show_lines=False)
    table.add_column("Option", style="bold cyan")
    table.add_column("Kind", style="magenta")
    table.add_column("Value")
    for name, value in result.options.items():
        table.add_row(Text(name), type(value).__name__, Text(_format_value(value)))
    return table


def render_result(console: Console, result: ParseResult) -> None:
    """Print the options table and the positional arguments of ``result``."""

    if result.options:
        console.print(build_result_table(result))
    else:
        console.print("No options matched.")
    if result.positionals:
        console.print(Text("Positionals: " + " ".join(json.dumps(item) for item in result.positionals)))
    else:
        console.print("No positional arguments.")


def _describe(option: OptionSpec) -> str:
    if not option.has_value:
        return "count" if option.repeatable else "flag"
    kind = option.value_type.value
    return f"{kind}[]" if option.repeatable else kind


def build_option_table(options: OptionTable) -> Table:
    """Return a table describing every option declared in ``options``."""

    table = Table(title="Declared options")
    table.add_column("Name", style="bold cyan")
    table.add_column("Aliases")
    table.add_column("Value")
    table.add_column("Required", justify="center")
    for option in options:
        aliases = ", ".join(option.prefixed(alias) for alias in option.aliases)
        if option.auto:
            aliases += " (auto)"
        table.add_row(Text(option.canonical), Text(aliases), _describe(option), "yes" if option.required else "")
    return table


__all__ = ["build_option_table", "build_result_table", "jsonable", "render_result", "result_to_json"]
