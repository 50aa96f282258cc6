# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared enums, constants, and compiled patterns for the option grammar."""

from __future__ import annotations

import re
from enum import Enum
from typing import Final


class ValueType(str, Enum):
    """Enumerate the value types an option may declare."""

    NONE = "none"
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    DATETIME = "datetime"
    FILE = "file"
    DIRECTORY = "directory"

    @classmethod
    def from_letter(cls, letter: str) -> ValueType:
        """Return the value type selected by a ``:<letter>`` modifier.

        Args:
            letter: Type letter following the ``:`` modifier. Matching is
                case-sensitive; an empty or upper-case letter selects the
                default string type.

        Returns:
            ValueType: Value type associated with ``letter``.
        """

        return TYPE_LETTERS.get(letter, cls.STRING)


TYPE_LETTERS: Final[dict[str, ValueType]] = {
    "s": ValueType.STRING,
    "i": ValueType.INTEGER,
    "n": ValueType.FLOAT,
    "t": ValueType.DATETIME,
    "f": ValueType.FILE,
    "d": ValueType.DIRECTORY,
}

REQUIRED_MODIFIER: Final[str] = "!"
REPEATABLE_MODIFIER: Final[str] = "+"
VALUE_MODIFIER: Final[str] = ":"

SPEC_SEPARATOR: Final[str] = ","
ALIAS_SEPARATOR: Final[str] = "|"
TERMINATOR: Final[str] = "--"
HELP_ALIAS: Final[str] = "help"
VERSION_ALIAS: Final[str] = "version"

_FLAGS: Final[int] = re.IGNORECASE | re.ASCII
_ALIAS: Final[str] = r"[a-z0-9]+(?:-[a-z0-9]+)*"
_TYPE_CLASS: Final[str] = "".join(TYPE_LETTERS)

# Compiled once at import and never mutated afterwards.
SPEC_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"(?P<aliases>{_ALIAS}(?:\|{_ALIAS})*)(?P<modifiers>(?:[!+]|:[{_TYPE_CLASS}]?)*)",
    _FLAGS,
)
MODIFIER_PATTERN: Final[re.Pattern[str]] = re.compile(rf"[!+]|:[{_TYPE_CLASS}]?", _FLAGS)
SHORT_OPTION_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"-(?P<bundle>[a-z0-9]*)(?P<last>[a-z0-9])(?:=(?P<value>.*))?",
    _FLAGS | re.DOTALL,
)
LONG_OPTION_PATTERN: Final[re.Pattern[str]] = re.compile(
    rf"(?P<full>-+(?P<name>{_ALIAS}))(?:=(?P<value>.*))?",
    _FLAGS | re.DOTALL,
)

__all__ = [
    "ALIAS_SEPARATOR",
    "HELP_ALIAS",
    "LONG_OPTION_PATTERN",
    "MODIFIER_PATTERN",
    "REPEATABLE_MODIFIER",
    "REQUIRED_MODIFIER",
    "SHORT_OPTION_PATTERN",
    "SPEC_PATTERN",
    "SPEC_SEPARATOR",
    "TERMINATOR",
    "TYPE_LETTERS",
    "VALUE_MODIFIER",
    "VERSION_ALIAS",
    "ValueType",
]
