"""
Shared test configuration.
It puts the repository root on `sys.path` and pins the settings environment for every test.
These tests are executed by `pytest` locally and in CI and should remain deterministic.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parent.parent
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from src.common.settings import get_settings  # noqa: E402


@pytest.fixture(autouse=True)
def base_test_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Ensure settings are read from a known environment during tests."""

    defaults = {
        "LOG_LEVEL": "DEBUG",
        "PAGINATION_PAGE_PARAM": "page",
        "PAGINATION_SIZE_PARAM": "size",
        "PAGINATION_SORT_PARAM": "sort",
    }
    for key, value in defaults.items():
        monkeypatch.setenv(key, value)

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
