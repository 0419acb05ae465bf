from __future__ import annotations

from pathlib import Path

import pytest

from shareddeps.registry import StaticSharedRegistry
from shareddeps.session import AnalysisSession
from tests._fixtures.monorepo_builder import MonorepoBuilder

PREFIX = "@theia/core/shared/"
SHARED_MODULES = ["inversify", "react", "react-dom", "@lumino/widgets"]


@pytest.fixture
def monorepo(tmp_path: Path) -> MonorepoBuilder:
    """Provide a reusable monorepo builder rooted at the pytest tmp_path."""
    return MonorepoBuilder(tmp_path)


@pytest.fixture
def registry() -> StaticSharedRegistry:
    return StaticSharedRegistry(PREFIX, SHARED_MODULES)


@pytest.fixture
def session(registry: StaticSharedRegistry) -> AnalysisSession:
    """A fresh session per test so caches never leak between tests."""
    return AnalysisSession(registry, core_package="@theia/core")
