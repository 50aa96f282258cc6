# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Turn per-option match records into tagged, converted values."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from .converters import Converter, ConverterFunc, select_converter
from .errors import ParseError
from .grammar import OptionTable
from .matcher import OptionMatch
from .values import Count, Flag, OptionValue, Text, TextArray, Typed, TypedArray

LOGGER = logging.getLogger(__name__)


def _convert(converter: Converter, name: str, raw: str) -> object:
    """Apply ``converter`` and qualify any failure with the option name."""

    try:
        return converter.convert(name, raw)
    except ParseError:
        raise
    except Exception as exc:
        raise ParseError(
            f"Option '{name}' has an invalid value '{raw}': {exc}",
            option=name,
            token=raw,
        ) from exc


def resolve_match(match: OptionMatch, overrides: Mapping[str, ConverterFunc]) -> OptionValue:
    """Return the tagged value of a single matched option.

    Args:
        match: Match record captured while scanning arguments.
        overrides: Caller-supplied converters keyed by canonical name.

    Returns:
        OptionValue: ``Flag`` or ``Count`` for valueless options, otherwise the
        raw or converted value(s).

    Raises:
        ParseError: If a converter rejects a raw value.
    """

    spec = match.spec
    if not spec.has_value:
        return Count(match.count) if spec.repeatable else Flag(True)
    converter = select_converter(spec.canonical, spec.value_type, overrides)
    values = tuple(_convert(converter, spec.canonical, raw) for raw in match.raw_values)
    if spec.repeatable:
        if converter.typed:
            return TypedArray(values)
        return TextArray(tuple(str(value) for value in values))
    if converter.typed:
        return Typed(values[0])
    return Text(str(values[0]))


def resolve_matches(
    matches: Iterable[OptionMatch],
    overrides: Mapping[str, ConverterFunc] | None = None,
    *,
    table: OptionTable | None = None,
) -> dict[str, OptionValue]:
    """Resolve every match record, keyed by canonical name in match order.

    Args:
        matches: Match records in first-match order.
        overrides: Caller-supplied converters keyed by canonical name.
        table: Option table the matches came from; used to report converter
            keys that name no declared option.

    Returns:
        dict[str, OptionValue]: Tagged values keyed by canonical name.
    """

    overrides = overrides or {}
    records = tuple(matches)
    matched = {match.spec.canonical for match in records}
    for name in overrides:
        if name in matched:
            continue
        if table is not None and table.get(name) is None:
            LOGGER.debug("converter for %s unused; no such option is declared", name)
        else:
            LOGGER.debug("converter for %s unused; option not matched", name)
    return {match.spec.canonical: resolve_match(match, overrides) for match in records}


__all__ = ["resolve_match", "resolve_matches"]
