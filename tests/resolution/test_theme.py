"""Tests for resolution.theme - named and legacy theme override discovery."""

from pathlib import Path

import pytest

from semitexa_view.resolution.theme import resolve_theme_overrides


@pytest.fixture
def theme_root(tmp_path: Path) -> Path:
    root = tmp_path / "src" / "theme"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def project_modules(tmp_path: Path) -> dict[str, Path]:
    """Project layout map for Blog and Shop (directories need not exist for the theme resolver)."""
    return {
        "Blog": tmp_path / "src" / "modules" / "Blog" / "Layout",
        "Shop": tmp_path / "src" / "modules" / "Shop" / "Layout",
    }


def test_missing_theme_root(tmp_path, project_modules):
    assert resolve_theme_overrides(project_modules, tmp_path / "missing", "") == {}
    assert resolve_theme_overrides(project_modules, tmp_path / "missing", "dark") == {}


class TestLegacyMode:
    def test_flat_override_for_known_module(self, theme_root, project_modules, make_dir):
        shop = make_dir(theme_root / "Shop")

        assert resolve_theme_overrides(project_modules, theme_root, "") == {"Shop": shop.resolve()}

    def test_unknown_directories_are_ignored(self, theme_root, project_modules, make_dir):
        make_dir(theme_root / "Unknown")
        make_dir(theme_root / "dark")
        blog = make_dir(theme_root / "Blog")

        assert resolve_theme_overrides(project_modules, theme_root, "") == {"Blog": blog.resolve()}

    def test_no_project_modules_means_no_overrides(self, theme_root, make_dir):
        make_dir(theme_root / "Shop")

        assert resolve_theme_overrides({}, theme_root, "") == {}

    def test_hidden_directories_are_ignored(self, theme_root, project_modules, make_dir):
        project_modules[".hidden"] = theme_root.parent / "modules" / ".hidden" / "Layout"
        make_dir(theme_root / ".hidden")
        shop = make_dir(theme_root / "Shop")

        assert resolve_theme_overrides(project_modules, theme_root, "") == {"Shop": shop.resolve()}


class TestNamedMode:
    def test_override_from_named_theme(self, theme_root, project_modules, make_dir):
        shop = make_dir(theme_root / "dark" / "Shop")

        assert resolve_theme_overrides(project_modules, theme_root, "dark") == {"Shop": shop.resolve()}

    def test_follows_project_module_order(self, theme_root, project_modules, make_dir):
        make_dir(theme_root / "dark" / "Shop")
        make_dir(theme_root / "dark" / "Blog")

        assert list(resolve_theme_overrides(project_modules, theme_root, "dark")) == ["Blog", "Shop"]

    def test_missing_named_theme_does_not_fall_back(self, theme_root, project_modules, make_dir):
        """Other themes and legacy flat overrides are never used for a missing named theme."""
        make_dir(theme_root / "light" / "Shop")
        make_dir(theme_root / "Shop")

        assert resolve_theme_overrides(project_modules, theme_root, "dark") == {}

    def test_named_mode_ignores_flat_overrides(self, theme_root, project_modules, make_dir):
        make_dir(theme_root / "dark")
        make_dir(theme_root / "Shop")

        assert resolve_theme_overrides(project_modules, theme_root, "dark") == {}

    def test_theme_named_like_module_selects_named_mode(self, theme_root, project_modules, make_dir):
        """A theme called 'Shop' looks in src/theme/Shop/<Module>, not the flat layout."""
        blog = make_dir(theme_root / "Shop" / "Blog")

        assert resolve_theme_overrides(project_modules, theme_root, "Shop") == {"Blog": blog.resolve()}

    def test_only_modules_with_project_layout(self, theme_root, project_modules, make_dir):
        make_dir(theme_root / "dark" / "Admin")

        assert resolve_theme_overrides(project_modules, theme_root, "dark") == {}

    @pytest.mark.parametrize("theme", ["..", ".", "dark/../light", "../outside"])
    def test_theme_name_must_be_a_directory_name(self, theme_root, project_modules, make_dir, theme):
        make_dir(theme_root / "Shop")
        make_dir(theme_root / "light" / "Shop")

        assert resolve_theme_overrides(project_modules, theme_root, theme) == {}
