# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Walk an argument vector and match its tokens against an option table."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum

from .errors import ParseError
from .grammar import OptionSpec, OptionTable
from .types import HELP_ALIAS, LONG_OPTION_PATTERN, SHORT_OPTION_PATTERN, TERMINATOR, VERSION_ALIAS

LOGGER = logging.getLogger(__name__)


class TokenKind(str, Enum):
    """Enumerate the syntactic roles an argument token can play."""

    POSITIONAL = "positional"
    TERMINATOR = "terminator"
    SHORT = "short"
    LONG = "long"


class ArgumentStream:
    """Iterate over argument tokens while allowing an option to take the next one."""

    def __init__(self, args: Sequence[str]) -> None:
        self._args = tuple(args)
        self._index = 0

    def __iter__(self) -> Iterator[str]:
        while self._index < len(self._args):
            token = self._args[self._index]
            self._index += 1
            yield token

    def take_value(self, option: OptionSpec, alias: str) -> str:
        """Consume the next token as the value of ``alias``.

        Args:
            option: Option requesting the value.
            alias: Alias as written on the command line, used in errors.

        Returns:
            str: The consumed token.

        Raises:
            ParseError: If no token remains.
        """

        if self._index >= len(self._args):
            raise ParseError(f"Option '{alias}' requires a value.", option=option.canonical, token=alias)
        token = self._args[self._index]
        self._index += 1
        return token


def ensure_arguments(args: Sequence[str]) -> Sequence[str]:
    """Return ``args`` after checking it is a sequence of strings.

    Raises:
        TypeError: If ``args`` is a bare string or contains a non-string item.
    """

    if isinstance(args, (str, bytes)) or not isinstance(args, Sequence):
        raise TypeError(f"args must be a sequence of str, not {type(args).__name__}")
    for index, token in enumerate(args):
        if not isinstance(token, str):
            raise TypeError(f"args[{index}] must be a str, not {type(token).__name__}")
    return args


def invalid_option(token: str) -> ParseError:
    """Return the error raised for a token whose dashes or characters are malformed."""

    return ParseError(f"Invalid option '{token}'.", token=token)


class TokenWalker:
    """Classify tokens by their dash prefix and dispatch option tokens.

    Subclasses implement :meth:`on_short` and :meth:`on_long`. Once a
    positional argument is seen while ``positionals_after_options`` is set, or
    once the ``--`` terminator is consumed, every later token is positional.
    """

    def __init__(self, *, single_dash_long: bool, positionals_after_options: bool) -> None:
        self.single_dash_long = single_dash_long
        self.positionals_after_options = positionals_after_options
        self._parsing_options = True

    def classify(self, token: str) -> TokenKind:
        """Return the role of ``token`` and update the walker state.

        Raises:
            ParseError: If the token carries an invalid dash prefix.
        """

        if not self._parsing_options:
            return TokenKind.POSITIONAL
        if not token.startswith("-") or token == "-":
            if self.positionals_after_options:
                self._parsing_options = False
            return TokenKind.POSITIONAL
        if token == TERMINATOR:
            self._parsing_options = False
            return TokenKind.TERMINATOR
        if self.single_dash_long:
            if token.startswith("--"):
                raise invalid_option(token)
            return TokenKind.LONG
        if token.startswith("---"):
            raise invalid_option(token)
        return TokenKind.LONG if token.startswith("--") else TokenKind.SHORT

    def walk(self, args: Sequence[str]) -> tuple[str, ...]:
        """Process ``args`` and return the positional arguments in order."""

        positionals: list[str] = []
        stream = ArgumentStream(args)
        for token in stream:
            kind = self.classify(token)
            if kind is TokenKind.POSITIONAL:
                positionals.append(token)
            elif kind is TokenKind.SHORT:
                self.on_short(token, stream)
            elif kind is TokenKind.LONG:
                self.on_long(token, stream)
        return tuple(positionals)

    def on_short(self, token: str, stream: ArgumentStream) -> None:
        raise NotImplementedError

    def on_long(self, token: str, stream: ArgumentStream) -> None:
        raise NotImplementedError


@dataclass(slots=True)
class OptionMatch:
    """Mutable match state of one option during a single parse call."""

    spec: OptionSpec
    count: int = 0
    raw_values: list[str] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.count > 0

    def find(self, alias: str, value: str | None = None) -> None:
        """Record one occurrence of the option.

        Args:
            alias: Alias as written on the command line, used in errors.
            value: Raw value captured for valued options.

        Raises:
            ParseError: If a non-repeatable option is matched twice.
        """

        if self.found and not self.spec.repeatable:
            raise ParseError(f"Option '{alias}' can't repeat.", option=self.spec.canonical, token=alias)
        if self.spec.has_value:
            if value is None:
                raise ParseError(f"Option '{alias}' requires a value.", option=self.spec.canonical, token=alias)
            self.raw_values.append(value)
        self.count += 1


@dataclass(frozen=True, slots=True)
class MatchOutcome:
    """Per-option match records and positional arguments of one scan."""

    matches: tuple[OptionMatch, ...]
    positionals: tuple[str, ...]


class ArgumentMatcher(TokenWalker):
    """Match argument tokens against the options declared in an :class:`OptionTable`."""

    def __init__(
        self,
        table: OptionTable,
        *,
        positionals_after_options: bool = False,
        ignore_required_on_help_version: bool = True,
    ) -> None:
        super().__init__(
            single_dash_long=table.single_dash,
            positionals_after_options=positionals_after_options,
        )
        self.table = table
        self.ignore_required_on_help_version = ignore_required_on_help_version
        self._matches: dict[str, OptionMatch] = {}

    def _record(self, spec: OptionSpec) -> OptionMatch:
        record = self._matches.get(spec.canonical)
        if record is None:
            record = self._matches[spec.canonical] = OptionMatch(spec)
        return record

    def _find(self, spec: OptionSpec, alias: str, value: str | None, stream: ArgumentStream) -> None:
        if spec.has_value:
            if value is None:
                value = stream.take_value(spec, alias)
            self._record(spec).find(alias, value)
        elif value is not None:
            raise ParseError(f"Option '{alias}' can't have a value.", option=spec.canonical, token=alias)
        else:
            self._record(spec).find(alias)

    def _short(self, letter: str) -> OptionSpec:
        spec = self.table.lookup_short(letter)
        if spec is None:
            raise ParseError(f"Unknown option '-{letter}'.", token=f"-{letter}")
        return spec

    def on_short(self, token: str, stream: ArgumentStream) -> None:
        match = SHORT_OPTION_PATTERN.fullmatch(token)
        if match is None:
            raise invalid_option(token)
        for letter in match.group("bundle"):
            spec = self._short(letter)
            if spec.has_value:
                raise ParseError(
                    f"Option '-{letter}' requires a value and can't be grouped.",
                    option=spec.canonical,
                    token=token,
                )
            self._record(spec).find(f"-{letter}")
        last = match.group("last")
        self._find(self._short(last), f"-{last}", match.group("value"), stream)

    def on_long(self, token: str, stream: ArgumentStream) -> None:
        match = LONG_OPTION_PATTERN.fullmatch(token)
        if match is None:
            raise invalid_option(token)
        alias = match.group("full")
        spec = self.table.lookup_long(match.group("name"))
        if spec is None:
            raise ParseError(f"Unknown option '{alias}'.", token=alias)
        self._find(spec, alias, match.group("value"), stream)

    def _escape_hatch_used(self) -> bool:
        for alias in (HELP_ALIAS, VERSION_ALIAS):
            spec = self.table.lookup_long(alias)
            if spec is not None and spec.canonical in self._matches:
                return True
        return False

    def check_required(self) -> None:
        """Raise for the first required option that was never matched.

        Raises:
            ParseError: If a required option is missing and the help/version
                escape hatch does not apply.
        """

        if self.ignore_required_on_help_version and self._escape_hatch_used():
            LOGGER.debug("help or version given; skipping required-option checks")
            return
        for spec in self.table.required:
            if spec.canonical not in self._matches:
                raise ParseError(f"Required option ({spec.display_name}) is missing.", option=spec.canonical)

    def run(self, args: Sequence[str]) -> MatchOutcome:
        """Scan ``args`` and return the match records and positional arguments."""

        positionals = self.walk(ensure_arguments(args))
        self.check_required()
        return MatchOutcome(matches=tuple(self._matches.values()), positionals=positionals)


def match_arguments(
    args: Sequence[str],
    table: OptionTable,
    *,
    positionals_after_options: bool = False,
    ignore_required_on_help_version: bool = True,
) -> MatchOutcome:
    """Match ``args`` against ``table`` using a fresh :class:`ArgumentMatcher`."""

    matcher = ArgumentMatcher(
        table,
        positionals_after_options=positionals_after_options,
        ignore_required_on_help_version=ignore_required_on_help_version,
    )
    return matcher.run(args)


__all__ = [
    "ArgumentMatcher",
    "ArgumentStream",
    "MatchOutcome",
    "OptionMatch",
    "TokenKind",
    "TokenWalker",
    "ensure_arguments",
    "invalid_option",
    "match_arguments",
]
