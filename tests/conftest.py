# tests/conftest.py

"""Shared pytest fixtures for all exporter tests."""

from collections.abc import Generator
from pathlib import Path
from unittest.mock import patch

import pytest

from src.config.settings import Settings


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path: Path) -> Generator[Path, None, None]:
    """Point results/ and logs/ at a per-test temp directory."""
    with patch.object(Settings, "RESULTS_DIR", tmp_path / "results"), \
            patch.object(Settings, "LOGS_DIR", tmp_path / "logs"):
        yield tmp_path
