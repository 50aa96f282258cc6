# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Value converters turning raw option text into typed Python values."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Final, Protocol, TypeAlias

from .errors import ParseError
from .types import ValueType

LOGGER = logging.getLogger(__name__)

ConverterFunc: TypeAlias = Callable[[str, str], object]

_INTEGER_RE: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE: Final[re.Pattern[str]] = re.compile(
    r"[+-]?(?:[0-9][0-9,]*(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?",
)
_FLOAT_SPECIALS: Final[re.Pattern[str]] = re.compile(r"[+-]?(?:nan|inf|infinity)", re.IGNORECASE)
_DATETIME_LAYOUTS: Final[tuple[str, ...]] = (
    "%Y/%m/%d",
    "%Y/%m/%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%d %b %Y",
    "%d %B %Y",
    "%b %d %Y",
    "%B %d %Y",
    "%b %d, %Y",
    "%B %d, %Y",
)


def parse_integer(name: str, raw: str) -> int:
    """Return ``raw`` as an ``int`` or raise a :class:`ParseError`.

    Surrounding whitespace and a leading sign are accepted; digit group
    separators are not. Values are not limited to 32 bits: any decimal
    integer converts to an unbounded Python ``int``.

    Args:
        name: Canonical option name used in the error message.
        raw: Raw option value.

    Returns:
        int: Parsed integer.

    Raises:
        ParseError: If ``raw`` is not a decimal integer.
    """

    text = raw.strip()
    if not _INTEGER_RE.fullmatch(text):
        raise ParseError(f"Option '{name}' expects an integer as its value.", option=name, token=raw)
    return int(text)


def parse_float(name: str, raw: str) -> float:
    """Return ``raw`` as a ``float`` or raise a :class:`ParseError`.

    Thousands separators (``,``), exponents, ``nan`` and ``inf`` are accepted.

    Args:
        name: Canonical option name used in the error message.
        raw: Raw option value.

    Returns:
        float: Parsed floating-point number.

    Raises:
        ParseError: If ``raw`` is not a decimal number.
    """

    text = raw.strip()
    if _FLOAT_SPECIALS.fullmatch(text):
        return float(text)
    if not _FLOAT_RE.fullmatch(text):
        raise ParseError(f"Option '{name}' expects a decimal number as its value.", option=name, token=raw)
    return float(text.replace(",", ""))


def parse_datetime(name: str, raw: str) -> datetime:
    """Return ``raw`` as a :class:`~datetime.datetime` or raise a :class:`ParseError`.

    ISO 8601 input is tried first, then a short list of common layouts.

    Args:
        name: Canonical option name used in the error message.
        raw: Raw option value.

    Returns:
        datetime: Parsed timestamp.

    Raises:
        ParseError: If ``raw`` matches none of the supported layouts.
    """

    text = raw.strip()
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for layout in _DATETIME_LAYOUTS:
        try:
            return datetime.strptime(text, layout)
        except ValueError:
            continue
    raise ParseError(f"Option '{name}' expects a date as its value.", option=name, token=raw)


def _parse_path(name: str, raw: str, *, kind: str) -> Path:
    if not raw or "\x00" in raw:
        raise ParseError(f"Option '{name}' expects a {kind} path as its value.", option=name, token=raw)
    return Path(raw)


def parse_file(name: str, raw: str) -> Path:
    """Return ``raw`` as a file :class:`~pathlib.Path`; existence is not checked."""

    return _parse_path(name, raw, kind="file")


def parse_directory(name: str, raw: str) -> Path:
    """Return ``raw`` as a directory :class:`~pathlib.Path`; existence is not checked."""

    return _parse_path(name, raw, kind="directory")


BUILTIN_CONVERTERS: Final[Mapping[ValueType, ConverterFunc]] = {
    ValueType.INTEGER: parse_integer,
    ValueType.FLOAT: parse_float,
    ValueType.DATETIME: parse_datetime,
    ValueType.FILE: parse_file,
    ValueType.DIRECTORY: parse_directory,
}


class Converter(Protocol):
    """Capability converting one raw option value."""

    @property
    def typed(self) -> bool:
        """Return ``True`` when converted values are no longer raw text."""
        ...

    def convert(self, name: str, raw: str) -> object:
        """Return the converted value of ``raw`` for option ``name``."""
        ...


@dataclass(frozen=True, slots=True)
class BuiltinConverter:
    """Converter selected by the option's declared :class:`ValueType`."""

    value_type: ValueType

    @property
    def typed(self) -> bool:
        return self.value_type is not ValueType.STRING

    def convert(self, name: str, raw: str) -> object:
        func = BUILTIN_CONVERTERS.get(self.value_type)
        if func is None:
            return raw
        return func(name, raw)


@dataclass(frozen=True, slots=True)
class CallerConverter:
    """Converter wrapping a caller-supplied ``(name, raw) -> value`` function."""

    func: ConverterFunc

    @property
    def typed(self) -> bool:
        return True

    def convert(self, name: str, raw: str) -> object:
        return self.func(name, raw)


def select_converter(canonical: str, value_type: ValueType, overrides: Mapping[str, ConverterFunc]) -> Converter:
    """Return the converter used for option ``canonical``.

    Args:
        canonical: Canonical option name used as the override key.
        value_type: Declared value type of the option.
        overrides: Caller-supplied converters keyed by canonical name.

    Returns:
        Converter: Caller-supplied converter when present, otherwise the
        built-in converter for ``value_type``.
    """

    func = overrides.get(canonical)
    if func is not None:
        LOGGER.debug("using caller converter for option %s", canonical)
        return CallerConverter(func)
    return BuiltinConverter(value_type)


__all__ = [
    "BUILTIN_CONVERTERS",
    "BuiltinConverter",
    "CallerConverter",
    "Converter",
    "ConverterFunc",
    "parse_datetime",
    "parse_directory",
    "parse_file",
    "parse_float",
    "parse_integer",
    "select_converter",
]
