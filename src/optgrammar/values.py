# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tagged value variants stored in a :class:`~optgrammar.result.ParseResult`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias


@dataclass(frozen=True, slots=True)
class Absent:
    """Marker for a declared option that did not appear in the arguments."""


@dataclass(frozen=True, slots=True)
class Flag:
    """Value of a non-repeatable option that takes no value."""

    value: bool = True


@dataclass(frozen=True, slots=True)
class Count:
    """Occurrence count of a repeatable option that takes no value."""

    value: int


@dataclass(frozen=True, slots=True)
class Text:
    """Raw string value of a single-valued string option."""

    value: str


@dataclass(frozen=True, slots=True)
class TextArray:
    """Raw string values of a repeatable string option, in argument order."""

    values: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Typed:
    """Converted value of a single-valued typed option."""

    value: object


@dataclass(frozen=True, slots=True)
class TypedArray:
    """Converted values of a repeatable typed option, in argument order."""

    values: tuple[object, ...]


OptionValue: TypeAlias = Absent | Flag | Count | Text | TextArray | Typed | TypedArray


def unwrap(value: OptionValue) -> object:
    """Return the plain Python value carried by ``value``.

    Args:
        value: Tagged option value.

    Returns:
        object: ``None`` for :class:`Absent`, a ``list`` for array variants,
        otherwise the scalar payload.
    """

    match value:
        case Absent():
            return None
        case Flag(value=flag):
            return flag
        case Count(value=count):
            return count
        case Text(value=text):
            return text
        case Typed(value=payload):
            return payload
        case TextArray(values=items) | TypedArray(values=items):
            return list(items)
    raise TypeError(f"unsupported option value: {value!r}")


__all__ = [
    "Absent",
    "Count",
    "Flag",
    "OptionValue",
    "Text",
    "TextArray",
    "Typed",
    "TypedArray",
    "unwrap",
]
