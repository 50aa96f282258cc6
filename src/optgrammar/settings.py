# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Configuration model controlling how an argument vector is parsed."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ParseSettings(BaseModel):
    """Options accepted by the validating parser.

    Attributes:
        auto_help_version: Register ``help`` and ``version`` flags when the
            grammar does not declare them.
        ignore_required_on_help_version: Skip required-option checks when the
            ``help`` or ``version`` option was given.
        single_dash_long: Treat every option as a long option prefixed by a
            single dash; disables short-option bundling.
        positionals_after_options: Require positional arguments to follow
            every option argument.
        include_unused: Report declared options that were not given with an
            explicit absent marker.
        converters: Caller-supplied ``(name, raw) -> value`` functions keyed by
            canonical option name.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)

    auto_help_version: bool = True
    ignore_required_on_help_version: bool = True
    single_dash_long: bool = False
    positionals_after_options: bool = False
    include_unused: bool = False
    converters: dict[str, Callable[[str, str], Any]] = Field(default_factory=dict)

    def with_overrides(self, **changes: Any) -> ParseSettings:
        """Return a validated copy of the settings with ``changes`` applied."""

        current = {name: getattr(self, name) for name in type(self).model_fields}
        return ParseSettings.model_validate({**current, **changes})


DEFAULT_SETTINGS = ParseSettings()

__all__ = ["DEFAULT_SETTINGS", "ParseSettings"]
