# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import pytest

SIMPLE_GRAMMAR = "n,e,help|h,version"


@pytest.fixture
def simple_grammar() -> str:
    """Return a grammar of two flags plus explicit help and version options."""
    return SIMPLE_GRAMMAR
