# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Custom exceptions raised while compiling grammars and parsing arguments."""

from __future__ import annotations


class OptGrammarError(Exception):
    """Base class for every error raised by :mod:`optgrammar`."""

    def __init__(self, message: str) -> None:
        """Initialise the error with a human-readable ``message``.

        Args:
            message: Text describing the failure.
        """

        super().__init__(message)
        self.message = message


class DefinitionError(OptGrammarError, ValueError):
    """Raised when an option grammar string is malformed.

    The error is raised while the grammar is compiled, before any argument
    token is inspected, and is never caused by user input on the command line.
    """

    def __init__(self, message: str, *, spec: str | None = None) -> None:
        """Create the error for the offending grammar ``spec``.

        Args:
            message: Text describing the malformed definition.
            spec: Individual option spec that failed validation, when known.
        """

        super().__init__(message)
        self.spec = spec


class ParseError(OptGrammarError):
    """Raised when the argument vector does not satisfy the grammar."""

    def __init__(self, message: str, *, option: str | None = None, token: str | None = None) -> None:
        """Create the error for a rejected ``option`` or ``token``.

        Args:
            message: Text describing the invalid input.
            option: Option name the failure relates to, when known.
            token: Raw argument token that triggered the failure, when known.
        """

        super().__init__(message)
        self.option = option
        self.token = token


__all__ = ("DefinitionError", "OptGrammarError", "ParseError")
