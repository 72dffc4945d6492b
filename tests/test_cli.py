"""Tests for the semitexa-view CLI."""

from textwrap import dedent

import pytest
from click.testing import CliRunner

from semitexa_view.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def shop_project(project):
    (project.modules_root / "shop" / "Layout").mkdir(parents=True)
    (project.theme_root / "shop").mkdir(parents=True)
    return project


def test_paths_lists_bindings(runner, shop_project):
    result = runner.invoke(cli, ["paths", "--root", str(shop_project.root)])

    assert result.exit_code == 0, result.output
    assert "none (legacy flat theme layout)" in result.output
    assert result.output.count("@project-layouts-shop") == 2
    assert "theme" in result.output
    assert "project" in result.output


def test_paths_with_theme_option(runner, shop_project):
    result = runner.invoke(cli, ["paths", "--root", str(shop_project.root), "--theme", "dark"])

    assert result.exit_code == 0, result.output
    assert "Active theme: dark (option)" in result.output
    # No src/theme/dark -> only the project layout remains
    assert result.output.count("@project-layouts-shop") == 1


def test_paths_theme_from_environment(runner, shop_project, monkeypatch):
    monkeypatch.setenv("THEME", "dark")

    result = runner.invoke(cli, ["paths", "--root", str(shop_project.root)])

    assert "Active theme: dark (env)" in result.output


def test_paths_empty_project(runner, project):
    result = runner.invoke(cli, ["paths", "--root", str(project.root)])

    assert result.exit_code == 0
    assert "No template paths found" in result.output


def test_paths_reads_project_registry(runner, shop_project):
    vendor = shop_project.root / "vendor" / "blog"
    vendor.mkdir(parents=True)
    shop_project.settings_dir.mkdir()
    shop_project.registry_file.write_text(
        dedent("""
        modules:
          - name: blog
            templatePaths: [../vendor/blog]
            aliases: [blog]
        """)
    )

    result = runner.invoke(cli, ["paths", "--root", str(shop_project.root)])

    assert result.exit_code == 0, result.output
    assert "@blog" in result.output


def test_paths_invalid_registry(runner, shop_project, tmp_path):
    registry = tmp_path / "modules.yaml"
    registry.write_text("modules:\n  - aliases: [nameless]\n")

    result = runner.invoke(cli, ["paths", "--root", str(shop_project.root), "--registry", str(registry)])

    assert result.exit_code == 1
    assert "Error" in result.output


def test_layouts(runner, shop_project):
    result = runner.invoke(cli, ["layouts", "--root", str(shop_project.root)])

    assert result.exit_code == 0, result.output
    assert "shop" in result.output
    assert "Module Layouts" in result.output


class TestCacheCommands:
    def test_cache_path_not_created(self, runner, project):
        result = runner.invoke(cli, ["cache", "path", "--root", str(project.root)])

        assert result.exit_code == 0
        assert "not created yet" in result.output

    def test_cache_clear_force(self, runner, project):
        project.cache_dir.mkdir(parents=True)
        (project.cache_dir / "__jinja2_abc.cache").write_text("x")

        result = runner.invoke(cli, ["cache", "clear", "--root", str(project.root), "--force"])

        assert result.exit_code == 0, result.output
        assert "Removed 1 cache entries" in result.output
        assert list(project.cache_dir.iterdir()) == []

    def test_cache_clear_cancelled(self, runner, project):
        project.cache_dir.mkdir(parents=True)
        (project.cache_dir / "__jinja2_abc.cache").write_text("x")

        result = runner.invoke(cli, ["cache", "clear", "--root", str(project.root)], input="n\n")

        assert "Cancelled" in result.output
        assert len(list(project.cache_dir.iterdir())) == 1

    def test_cache_clear_missing_dir(self, runner, project):
        result = runner.invoke(cli, ["cache", "clear", "--root", str(project.root), "--force"])

        assert result.exit_code == 0
        assert "does not exist yet" in result.output
