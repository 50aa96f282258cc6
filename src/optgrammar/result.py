# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Immutable parse results and the assembler that builds them."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from .grammar import OptionTable
from .values import Absent, OptionValue, unwrap


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Options and positional arguments extracted from an argument vector.

    ``options`` maps canonical option names to tagged values in the order the
    options were first matched. The result unpacks as
    ``options, positionals = result``.
    """

    options: Mapping[str, OptionValue] = field(default_factory=lambda: MappingProxyType({}))
    positionals: tuple[str, ...] = ()

    def __iter__(self) -> Iterator[object]:
        yield self.options
        yield self.positionals

    def __getitem__(self, name: str) -> OptionValue:
        return self.options[name]

    def __contains__(self, name: object) -> bool:
        return name in self.options

    def get(self, name: str, default: OptionValue | None = None) -> OptionValue | None:
        """Return the tagged value for ``name`` or ``default``."""

        return self.options.get(name, default)

    def value(self, name: str, default: object = None) -> object:
        """Return the plain Python value for ``name`` or ``default``.

        Args:
            name: Canonical option name.
            default: Value returned when the option is not in the result.

        Returns:
            object: Unwrapped value; ``None`` for options reported as absent.
        """

        if name not in self.options:
            return default
        return unwrap(self.options[name])

    def to_dict(self) -> dict[str, object]:
        """Return the options as a plain ``dict`` of unwrapped values."""

        return {name: unwrap(value) for name, value in self.options.items()}


def assemble_result(
    resolved: Mapping[str, OptionValue],
    positionals: Sequence[str],
    *,
    table: OptionTable | None = None,
    include_unused: bool = False,
) -> ParseResult:
    """Combine resolved option values and positionals into a :class:`ParseResult`.

    Args:
        resolved: Tagged values keyed by canonical name, in match order.
        positionals: Positional arguments in command-line order.
        table: Option table used to back-fill unused options.
        include_unused: Add :class:`Absent` for every declared option in
            ``table`` that is missing from ``resolved``. Auto-registered
            ``help`` and ``version`` flags are never back-filled.

    Returns:
        ParseResult: Immutable result.
    """

    options: dict[str, OptionValue] = dict(resolved)
    if include_unused and table is not None:
        for spec in table:
            if not spec.auto:
                options.setdefault(spec.canonical, Absent())
    return ParseResult(options=MappingProxyType(options), positionals=tuple(positionals))


__all__ = ["ParseResult", "assemble_result"]
