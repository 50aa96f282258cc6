# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for the argument tokenizer and option matcher."""

from __future__ import annotations

import pytest

from optgrammar import ParseError, parse_grammar
from optgrammar.matcher import ArgumentStream, MatchOutcome, OptionMatch, TokenKind, TokenWalker, match_arguments


def _scan(args: list[str], grammar: str, **kwargs: bool) -> MatchOutcome:
    single_dash = kwargs.pop("single_dash_long", False)
    table = parse_grammar(grammar, single_dash_long=single_dash)
    return match_arguments(args, table, **kwargs)


def _counts(outcome: MatchOutcome) -> dict[str, int]:
    return {match.spec.canonical: match.count for match in outcome.matches}


def test_bundled_short_flags_are_matched_in_order() -> None:
    outcome = _scan(["-en"], "n,e")
    assert _counts(outcome) == {"e": 1, "n": 1}
    assert outcome.positionals == ()


def test_repeating_a_plain_flag_fails() -> None:
    with pytest.raises(ParseError, match=r"Option '-n' can't repeat\.") as excinfo:
        _scan(["-nen"], "n,e")
    assert excinfo.value.option == "n"


def test_repeatable_flag_counts_every_alias() -> None:
    outcome = _scan(["-vv", "--verbose", "-v"], "verbose|v+")
    assert _counts(outcome) == {"verbose": 4}


@pytest.mark.parametrize(
    ("args", "expected"),
    [
        (["-o=1"], "1"),
        (["-o", "2"], "2"),
        (["--out=3"], "3"),
        (["--out", "4"], "4"),
        (["--out="], ""),
        (["-o="], ""),
        (["-o", "-x"], "-x"),
        (["--out", "--"], "--"),
        (["--out=a=b"], "a=b"),
    ],
)
def test_value_forms(args: list[str], expected: str) -> None:
    outcome = _scan(args, "out|o:")
    (match,) = outcome.matches
    assert match.raw_values == [expected]


def test_bundle_with_active_value_option() -> None:
    outcome = _scan(["-abf", "x.txt", "-abcf=y.txt"], "a+,b+,c,file|f:+")
    assert _counts(outcome) == {"a": 2, "b": 2, "file": 2, "c": 1}
    by_name = {match.spec.canonical: match for match in outcome.matches}
    assert by_name["file"].raw_values == ["x.txt", "y.txt"]


def test_valued_option_cannot_be_grouped_before_the_last_letter() -> None:
    with pytest.raises(ParseError, match=r"Option '-f' requires a value and can't be grouped\."):
        _scan(["-fa", "x"], "a,file|f:")


def test_missing_value_fails() -> None:
    with pytest.raises(ParseError, match=r"Option '--out' requires a value\."):
        _scan(["--out"], "out|o:")
    with pytest.raises(ParseError, match=r"Option '-o' requires a value\."):
        _scan(["-ao"], "a,out|o:")


def test_value_on_flag_fails() -> None:
    with pytest.raises(ParseError, match=r"Option '--all' can't have a value\."):
        _scan(["--all=yes"], "all|a")
    with pytest.raises(ParseError, match=r"Option '-a' can't have a value\."):
        _scan(["-a=yes"], "all|a")


@pytest.mark.parametrize(
    ("token", "message"),
    [
        ("-x", r"Unknown option '-x'\."),
        ("-ax", r"Unknown option '-x'\."),
        ("--extra", r"Unknown option '--extra'\."),
        ("--a", r"Unknown option '--a'\."),
        ("---all", r"Invalid option '---all'\."),
        ("-a-b", r"Invalid option '-a-b'\."),
        ("--all--x", r"Invalid option '--all--x'\."),
        ("-é", r"Invalid option '-é'\."),
    ],
)
def test_rejected_tokens(token: str, message: str) -> None:
    with pytest.raises(ParseError, match=message):
        _scan([token], "all|a")


def test_positionals_keep_their_order_around_options() -> None:
    outcome = _scan(["one", "-a", "-", "two", "--file", "f", "three"], "a,file:")
    assert outcome.positionals == ("one", "-", "two", "three")
    assert _counts(outcome) == {"a": 1, "file": 1}


def test_terminator_is_consumed_and_stops_option_parsing() -> None:
    outcome = _scan(["-a", "--", "-a", "--", "--file"], "a,file:")
    assert outcome.positionals == ("-a", "--", "--file")
    assert _counts(outcome) == {"a": 1}


def test_positionals_after_options_stops_at_first_positional() -> None:
    outcome = _scan(["-a", "in.txt", "-b", "--", "x"], "a,b", positionals_after_options=True)
    assert _counts(outcome) == {"a": 1}
    assert outcome.positionals == ("in.txt", "-b", "--", "x")


def test_terminator_before_any_positional_under_strict_ordering() -> None:
    outcome = _scan(["--", "-a"], "a", positionals_after_options=True)
    assert outcome.positionals == ("-a",)
    assert outcome.matches == ()


def test_single_dash_mode() -> None:
    outcome = _scan(["-verbose", "-o=x", "-name", "value", "rest"], "verbose,o:,name:", single_dash_long=True)
    by_name = {match.spec.canonical: match for match in outcome.matches}
    assert by_name["verbose"].count == 1
    assert by_name["o"].raw_values == ["x"]
    assert by_name["name"].raw_values == ["value"]
    assert outcome.positionals == ("rest",)


def test_single_dash_mode_rejects_double_dash_options() -> None:
    with pytest.raises(ParseError, match=r"Invalid option '--verbose'\."):
        _scan(["--verbose"], "verbose", single_dash_long=True)


def test_single_dash_mode_does_not_bundle() -> None:
    with pytest.raises(ParseError, match=r"Unknown option '-ab'\."):
        _scan(["-ab"], "a,b", single_dash_long=True)


def test_required_option_missing() -> None:
    with pytest.raises(ParseError, match=r"Required option \(-f\) is missing\.") as excinfo:
        _scan(["-ne"], "n,e,f!")
    assert excinfo.value.option == "f"
    with pytest.raises(ParseError, match=r"Required option \(--file\) is missing\."):
        _scan([], "file|f:!+")


@pytest.mark.parametrize("flag", ["--help", "--version", "-h"])
def test_help_and_version_skip_required_checks(flag: str) -> None:
    outcome = _scan([flag], "file:!,help|h")
    assert len(outcome.matches) == 1


def test_required_checks_can_be_enforced_on_help() -> None:
    with pytest.raises(ParseError, match="Required option"):
        _scan(["--help"], "file:!", ignore_required_on_help_version=False)


def test_match_records_follow_first_match_order() -> None:
    outcome = _scan(["-c", "-a", "-b", "-a"], "a+,b,c")
    assert [match.spec.canonical for match in outcome.matches] == ["c", "a", "b"]


def test_args_must_be_a_sequence_of_strings() -> None:
    table = parse_grammar("a")
    with pytest.raises(TypeError):
        match_arguments("-a", table)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        match_arguments(["-a", 1], table)  # type: ignore[list-item]


def test_option_match_records_values() -> None:
    table = parse_grammar("file|f:+", auto_help_version=False)
    record = OptionMatch(table.options[0])
    record.find("-f", "a")
    record.find("--file", "b")
    assert record.found
    assert record.count == 2
    assert record.raw_values == ["a", "b"]


def test_argument_stream_take_value() -> None:
    table = parse_grammar("out:", auto_help_version=False)
    stream = ArgumentStream(["--out", "x"])
    iterator = iter(stream)
    assert next(iterator) == "--out"
    assert stream.take_value(table.options[0], "--out") == "x"
    assert list(iterator) == []
    with pytest.raises(ParseError, match="requires a value"):
        stream.take_value(table.options[0], "--out")


def test_token_walker_classification() -> None:
    walker = TokenWalker(single_dash_long=False, positionals_after_options=False)
    assert walker.classify("x") is TokenKind.POSITIONAL
    assert walker.classify("-") is TokenKind.POSITIONAL
    assert walker.classify("-ab") is TokenKind.SHORT
    assert walker.classify("--all") is TokenKind.LONG
    assert walker.classify("--") is TokenKind.TERMINATOR
    assert walker.classify("-ab") is TokenKind.POSITIONAL
