# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for turning match records into tagged option values."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from optgrammar import Count, Flag, ParseError, Text, TextArray, Typed, TypedArray, parse_grammar
from optgrammar.matcher import OptionMatch, match_arguments
from optgrammar.resolver import resolve_match, resolve_matches


def _match(grammar: str, *occurrences: str) -> OptionMatch:
    table = parse_grammar(grammar, auto_help_version=False)
    record = OptionMatch(table.options[0])
    for raw in occurrences:
        record.find(table.options[0].canonical, raw if record.spec.has_value else None)
    return record


@pytest.mark.parametrize(
    ("grammar", "occurrences", "expected"),
    [
        ("a", ("",), Flag(True)),
        ("a+", ("", "", ""), Count(3)),
        ("name:", ("x",), Text("x")),
        ("name:s+", ("x", "y"), TextArray(("x", "y"))),
        ("size:i", ("12",), Typed(12)),
        ("size:i+", ("1", "2"), TypedArray((1, 2))),
        ("out:f+", ("a", "b"), TypedArray((Path("a"), Path("b")))),
    ],
)
def test_value_shapes(grammar: str, occurrences: tuple[str, ...], expected: object) -> None:
    assert resolve_match(_match(grammar, *occurrences), {}) == expected


def test_caller_converter_makes_string_options_typed() -> None:
    record = _match("name:+", "a", "b")
    resolved = resolve_match(record, {"name": lambda name, raw: raw * 2})
    assert resolved == TypedArray(("aa", "bb"))


def test_caller_converter_is_ignored_for_valueless_options() -> None:
    record = _match("verbose+", "", "")
    assert resolve_match(record, {"verbose": lambda name, raw: 99}) == Count(2)


def test_converter_failures_are_wrapped() -> None:
    def explode(name: str, raw: str) -> object:
        raise ValueError("not a colour")

    with pytest.raises(ParseError, match=r"Option 'colour' has an invalid value 'mauve': not a colour") as excinfo:
        resolve_match(_match("colour:", "mauve"), {"colour": explode})
    assert isinstance(excinfo.value.__cause__, ValueError)
    assert excinfo.value.option == "colour"
    assert excinfo.value.token == "mauve"


def test_parse_errors_from_converters_propagate_unchanged() -> None:
    sentinel = ParseError("custom failure", option="level")

    def reject(name: str, raw: str) -> object:
        raise sentinel

    with pytest.raises(ParseError) as excinfo:
        resolve_match(_match("level:i", "3"), {"level": reject})
    assert excinfo.value is sentinel


def test_builtin_conversion_errors_name_the_option() -> None:
    with pytest.raises(ParseError, match=r"Option 'size' expects an integer"):
        resolve_match(_match("size:i", "big"), {})


def test_resolve_matches_keeps_match_order(caplog: pytest.LogCaptureFixture) -> None:
    table = parse_grammar("a,b:i,c+")
    outcome = match_arguments(["-c", "-b", "4", "-a", "-c"], table)

    with caplog.at_level(logging.DEBUG, logger="optgrammar"):
        resolved = resolve_matches(outcome.matches, {"missing": str})

    assert list(resolved) == ["c", "b", "a"]
    assert resolved == {"c": Count(2), "b": Typed(4), "a": Flag(True)}
    assert any("missing" in record.getMessage() for record in caplog.records)


def test_unused_converters_name_undeclared_options(caplog: pytest.LogCaptureFixture) -> None:
    table = parse_grammar("a,b:i")
    outcome = match_arguments(["-a"], table)

    with caplog.at_level(logging.DEBUG, logger="optgrammar"):
        resolve_matches(outcome.matches, {"b": int, "ghost": str}, table=table)

    messages = [record.getMessage() for record in caplog.records]
    assert "converter for b unused; option not matched" in messages
    assert "converter for ghost unused; no such option is declared" in messages
