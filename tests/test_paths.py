"""Tests for project path policy."""

import tempfile
from pathlib import Path

from semitexa_view.paths import ProjectPaths
from semitexa_view.paths import fallback_cache_dir
from semitexa_view.paths import find_project_root


def test_layout_conventions():
    paths = ProjectPaths(root=Path("/app"))

    assert paths.modules_root == Path("/app/src/modules")
    assert paths.theme_root == Path("/app/src/theme")
    assert paths.cache_dir == Path("/app/var/cache/templates")
    assert paths.registry_file == Path("/app/.semitexa/modules.yaml")
    assert paths.env_file == Path("/app/.env")


def test_find_root_from_nested_directory(tmp_path):
    (tmp_path / "src" / "modules").mkdir(parents=True)
    nested = tmp_path / "src" / "modules" / "Shop" / "Layout"
    nested.mkdir(parents=True)

    assert find_project_root(nested) == tmp_path.absolute()


def test_find_root_by_settings_dir(tmp_path):
    (tmp_path / ".semitexa").mkdir()
    nested = tmp_path / "public"
    nested.mkdir()

    assert ProjectPaths.discover(nested).root == tmp_path.absolute()


def test_find_root_falls_back_to_start(tmp_path):
    assert find_project_root(tmp_path) == tmp_path.absolute()


def test_env_var_wins(tmp_path, monkeypatch):
    (tmp_path / "src" / "modules").mkdir(parents=True)
    monkeypatch.setenv("SEMITEXA_PROJECT_ROOT", "/srv/app")

    assert find_project_root(tmp_path) == Path("/srv/app")


def test_fallback_cache_dir_is_in_temp():
    assert fallback_cache_dir() == Path(tempfile.gettempdir()) / "semitexa-template-cache"
