"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
import sys

import pytest

# Ensure src/ is on sys.path for tests so the src layout is used during test runs
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from query_footprint.estimation import EstimationEngine  # noqa: E402


@pytest.fixture
def engine() -> EstimationEngine:
    """Engine using the built-in constants."""

    return EstimationEngine()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment variables out of configuration tests."""

    for name in (
        "QUERY_FOOTPRINT_CONFIG",
        "QUERY_FOOTPRINT_GRID_INTENSITY",
        "QUERY_FOOTPRINT_SEARCH_URL",
        "QUERY_FOOTPRINT_INPUT_ID",
        "QUERY_FOOTPRINT_LOG_LEVEL",
        "QUERY_FOOTPRINT_LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)
