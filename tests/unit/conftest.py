"""Shared test fixtures."""

from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

import pytest
from loguru import logger

from tests.unit.documents import FIXED_NOW, SORTABLE_DOC


@pytest.fixture(autouse=True)
def _reset_loguru() -> Iterator[None]:
    """Drop sinks added during a test (the CLI binds one to a captured stream)."""
    yield
    logger.remove()


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def worklog_path(tmp_path: Path) -> Path:
    """A worklog file on disk with the sortable document."""
    path = tmp_path / "2024-03-05.md"
    path.write_text(SORTABLE_DOC, encoding="utf-8")
    return path
