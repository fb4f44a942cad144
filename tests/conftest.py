"""Pytest configuration for repository test runs."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def _clear_suitebuild_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer SUITEBUILD_* settings out of test runs."""
    for name in list(os.environ):
        if name.startswith("SUITEBUILD_"):
            monkeypatch.delenv(name, raising=False)
