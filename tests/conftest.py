"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_ENV_VARIABLES = ("SHEETPORT_URL_TEMPLATE", "SHEETPORT_FETCH_TIMEOUT", "SHEETPORT_OUTPUT_DIR")


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    src_path = Path(__file__).resolve().parent.parent / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _isolated_sheetport_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test against default runtime configuration."""
    for name in _ENV_VARIABLES:
        monkeypatch.delenv(name, raising=False)
