# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Declarative command-line option parsing driven by a compact grammar."""

from __future__ import annotations

from importlib import metadata

from .api import parse, parse_with_settings
from .converters import BuiltinConverter, CallerConverter, Converter, ConverterFunc
from .errors import DefinitionError, OptGrammarError, ParseError
from .grammar import OptionSpec, OptionTable, parse_grammar
from .permissive import parse_unchecked
from .result import ParseResult
from .settings import ParseSettings
from .types import ValueType
from .values import Absent, Count, Flag, OptionValue, Text, TextArray, Typed, TypedArray, unwrap

try:
    __version__ = metadata.version("optgrammar")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"

__all__ = [
    "Absent",
    "BuiltinConverter",
    "CallerConverter",
    "Converter",
    "ConverterFunc",
    "Count",
    "DefinitionError",
    "Flag",
    "OptGrammarError",
    "OptionSpec",
    "OptionTable",
    "OptionValue",
    "ParseError",
    "ParseResult",
    "ParseSettings",
    "Text",
    "TextArray",
    "Typed",
    "TypedArray",
    "ValueType",
    "__version__",
    "parse",
    "parse_grammar",
    "parse_unchecked",
    "parse_with_settings",
    "unwrap",
]
