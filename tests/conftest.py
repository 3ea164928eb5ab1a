from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from sync_ghes.logging import reset_logging
from tests._fixtures.repo_builder import RepoBuilder


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable workflow checkout builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _propagating_logger() -> Iterator[None]:
    """Undo configure_logging side effects so caplog sees sync_ghes records."""
    yield
    reset_logging()
