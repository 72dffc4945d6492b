"""Pytest configuration for semitexa-view tests."""

import sys
from pathlib import Path

import pytest

# Allow running the tests from a checkout without installing the package
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from semitexa_view.paths import ProjectPaths  # noqa: E402


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's THEME / project root out of the tests."""
    monkeypatch.delenv("THEME", raising=False)
    monkeypatch.delenv("SEMITEXA_PROJECT_ROOT", raising=False)
    monkeypatch.delenv("SEMITEXA_VIEW_LOG_PATH", raising=False)


@pytest.fixture
def project(tmp_path: Path) -> ProjectPaths:
    """Empty project root (no src/modules, no src/theme)."""
    root = tmp_path / "app"
    root.mkdir()
    return ProjectPaths(root=root)


@pytest.fixture
def make_dir():
    """Create a directory (and parents) and return it."""

    def _make(path: Path) -> Path:
        path.mkdir(parents=True, exist_ok=True)
        return path

    return _make
