# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Compile option grammar strings into lookup tables.

A grammar is a comma-separated list of option specs. Each spec lists one or
more aliases separated by ``|`` followed by optional modifiers in any order:

* ``!`` marks the option as required.
* ``+`` allows the option to repeat.
* ``:`` makes the option take a value; an optional letter selects the value
  type (``s`` string, ``i`` integer, ``n`` float, ``t`` datetime, ``f`` file,
  ``d`` directory).

The first alias of a spec is its canonical name.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from .errors import DefinitionError
from .types import (
    ALIAS_SEPARATOR,
    HELP_ALIAS,
    MODIFIER_PATTERN,
    REPEATABLE_MODIFIER,
    REQUIRED_MODIFIER,
    SPEC_PATTERN,
    SPEC_SEPARATOR,
    VALUE_MODIFIER,
    VERSION_ALIAS,
    ValueType,
)

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class OptionSpec:
    """Declared option compiled from one grammar spec."""

    canonical: str
    aliases: tuple[str, ...]
    value_type: ValueType = ValueType.NONE
    repeatable: bool = False
    required: bool = False
    single_dash: bool = False
    auto: bool = False

    @property
    def has_value(self) -> bool:
        """Return ``True`` when the option consumes a value."""

        return self.value_type is not ValueType.NONE

    @property
    def display_name(self) -> str:
        """Return the canonical alias with the dash prefix used on the command line."""

        return self.prefixed(self.canonical)

    def prefixed(self, alias: str) -> str:
        """Return ``alias`` with the dash prefix it is invoked with.

        Args:
            alias: One of the option's aliases.

        Returns:
            str: ``-x`` for short aliases and single-dash mode, ``--name``
            for long aliases.
        """

        if self.single_dash or len(alias) == 1:
            return f"-{alias}"
        return f"--{alias}"


@dataclass(frozen=True, slots=True)
class OptionTable:
    """Lookup tables for every option declared by a grammar."""

    options: tuple[OptionSpec, ...]
    short: Mapping[str, OptionSpec]
    long: Mapping[str, OptionSpec]
    single_dash: bool = False

    @property
    def required(self) -> tuple[OptionSpec, ...]:
        """Return the required options in declared order."""

        return tuple(option for option in self.options if option.required)

    def lookup_short(self, alias: str) -> OptionSpec | None:
        """Return the option registered under the single-character ``alias``."""

        return self.short.get(alias)

    def lookup_long(self, alias: str) -> OptionSpec | None:
        """Return the option registered under the long ``alias``."""

        return self.long.get(alias)

    def get(self, canonical: str) -> OptionSpec | None:
        """Return the option whose canonical name is ``canonical``."""

        for option in self.options:
            if option.canonical == canonical:
                return option
        return None

    def __iter__(self) -> Iterator[OptionSpec]:
        return iter(self.options)

    def __len__(self) -> int:
        return len(self.options)


def _split_spec(raw: str) -> tuple[tuple[str, ...], str]:
    """Return the aliases and modifier string of a single grammar spec.

    Args:
        raw: One comma-separated element of the grammar.

    Returns:
        tuple[tuple[str, ...], str]: Aliases in declared order and the raw
        modifier suffix.

    Raises:
        DefinitionError: If ``raw`` does not follow the grammar or repeats a
            modifier.
    """

    match = SPEC_PATTERN.fullmatch(raw)
    if match is None:
        raise DefinitionError(f"Option definition '{raw}' is not in a valid format.", spec=raw)
    modifiers = match.group("modifiers")
    kinds = [token[0] for token in MODIFIER_PATTERN.findall(modifiers)]
    if len(kinds) != len(set(kinds)):
        raise DefinitionError(f"Option definition '{raw}' repeats a modifier.", spec=raw)
    return tuple(match.group("aliases").split(ALIAS_SEPARATOR)), modifiers


def _value_type(modifiers: str) -> ValueType:
    index = modifiers.find(VALUE_MODIFIER)
    if index < 0:
        return ValueType.NONE
    return ValueType.from_letter(modifiers[index + 1 : index + 2])


class _TableBuilder:
    """Accumulate option specs while enforcing alias uniqueness."""

    def __init__(self, *, single_dash: bool) -> None:
        self.single_dash = single_dash
        self.options: list[OptionSpec] = []
        self.short: dict[str, OptionSpec] = {}
        self.long: dict[str, OptionSpec] = {}

    def _bucket(self, alias: str) -> dict[str, OptionSpec]:
        if self.single_dash or len(alias) > 1:
            return self.long
        return self.short

    def add(self, option: OptionSpec, *, spec: str | None = None) -> None:
        for alias in option.aliases:
            bucket = self._bucket(alias)
            if alias in bucket:
                raise DefinitionError(
                    f"Duplicate option definition ({option.prefixed(alias)}).",
                    spec=spec,
                )
            bucket[alias] = option
        self.options.append(option)

    def add_auto_flag(self, alias: str) -> None:
        if alias in self.long:
            return
        self.add(OptionSpec(canonical=alias, aliases=(alias,), single_dash=self.single_dash, auto=True))

    def build(self) -> OptionTable:
        return OptionTable(
            options=tuple(self.options),
            short=MappingProxyType(dict(self.short)),
            long=MappingProxyType(dict(self.long)),
            single_dash=self.single_dash,
        )


def parse_grammar(grammar: str, *, single_dash_long: bool = False, auto_help_version: bool = True) -> OptionTable:
    """Compile ``grammar`` into an :class:`OptionTable`.

    Args:
        grammar: Comma-separated option specs.
        single_dash_long: Register every alias as a long option invoked with a
            single dash instead of splitting short and long aliases.
        auto_help_version: Register ``help`` and ``version`` flags when the
            grammar does not declare those aliases itself.

    Returns:
        OptionTable: Freshly built lookup tables.

    Raises:
        TypeError: If ``grammar`` is not a string.
        DefinitionError: If any spec is malformed or an alias is declared twice.
    """

    if not isinstance(grammar, str):
        raise TypeError(f"grammar must be a str, not {type(grammar).__name__}")
    builder = _TableBuilder(single_dash=single_dash_long)
    for raw in grammar.split(SPEC_SEPARATOR):
        aliases, modifiers = _split_spec(raw)
        option = OptionSpec(
            canonical=aliases[0],
            aliases=aliases,
            value_type=_value_type(modifiers),
            repeatable=REPEATABLE_MODIFIER in modifiers,
            required=REQUIRED_MODIFIER in modifiers,
            single_dash=single_dash_long,
        )
        builder.add(option, spec=raw)
    if auto_help_version:
        builder.add_auto_flag(HELP_ALIAS)
        builder.add_auto_flag(VERSION_ALIAS)
    table = builder.build()
    LOGGER.debug(
        "compiled %d option(s): %d short alias(es), %d long alias(es)",
        len(table),
        len(table.short),
        len(table.long),
    )
    return table


__all__ = ["OptionSpec", "OptionTable", "parse_grammar"]
