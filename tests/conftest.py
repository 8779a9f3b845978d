"""Shared pytest fixtures for repository-local test data."""

from __future__ import annotations

from pathlib import Path

import pytest

from hostsmith.builders import plan_context
from hostsmith.model import CompositionContext


@pytest.fixture(scope="session")
def fixtures_root() -> Path:
    """Return root directory for test fixtures."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def basic_repo_root(fixtures_root: Path) -> Path:
    """Return the primary fixture workspace path."""
    return (fixtures_root / "repos" / "basic").resolve()


@pytest.fixture()
def context(tmp_path: Path) -> CompositionContext:
    """Return a composition context with plan providers in every slot."""
    return plan_context(tmp_path)
