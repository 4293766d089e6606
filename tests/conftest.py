"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import os

import pytest

from bulletin.reporting.window import TimeWindow
from tests.helpers.issues import REFERENCE_INSTANT


@pytest.fixture
def window() -> TimeWindow:
    """Return the UTC+9 window for 2024-07-09 00:30 local time."""
    return TimeWindow.at(REFERENCE_INSTANT, 9)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every ``BULLETIN_*`` variable from the process environment."""
    for name in list(os.environ):
        if name.startswith("BULLETIN_"):
            monkeypatch.delenv(name, raising=False)
    return monkeypatch
