"""View settings: where the active theme comes from.

Theme precedence (first non-empty wins):
1. THEME environment variable
2. THEME in the project .env file
3. view.theme in .semitexa/settings.local.yaml (gitignored, machine-specific)
4. view.theme in .semitexa/settings.yaml (committed, team-shared)

No theme anywhere means the legacy flat theme layout.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from typing import Literal

import yaml
from dotenv import dotenv_values

from .paths import ProjectPaths

logger = logging.getLogger(__name__)

THEME_ENV = "THEME"

ThemeSource = Literal["env", "dotenv", "local", "project", "none"]


@dataclass
class SettingsPaths:
    """Standard paths for settings files."""

    project_settings: Path
    local_settings: Path
    env_file: Path

    @classmethod
    def for_project(cls, project: ProjectPaths) -> SettingsPaths:
        """Create default paths for a project layout."""
        return cls(
            project_settings=project.settings_dir / "settings.yaml",
            local_settings=project.settings_dir / "settings.local.yaml",
            env_file=project.env_file,
        )


class ViewSettings:
    """Scope-aware view settings.

    Usage:
        settings = ViewSettings(SettingsPaths.for_project(ProjectPaths.discover()))
        theme = settings.get_active_theme()  # "" when unset
    """

    def __init__(self, paths: SettingsPaths) -> None:
        self.paths = paths

    def _read_yaml(self, path: Path) -> dict[str, Any]:
        if not path.exists():
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                content = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Skipping unreadable settings file {path}: {e}")
            return {}
        if not isinstance(content, dict):
            logger.warning(f"Skipping settings file {path}: top level is not a mapping")
            return {}
        return content

    def get_merged_settings(self) -> dict[str, Any]:
        """Load and merge settings from all scopes, local wins."""
        result: dict[str, Any] = {}
        for path in [self.paths.project_settings, self.paths.local_settings]:
            result = self._deep_merge(result, self._read_yaml(path))
        return result

    def get_active_theme_with_source(self) -> tuple[str, ThemeSource]:
        """Get the active theme and which layer supplied it."""
        if env_theme := os.environ.get(THEME_ENV, "").strip():
            return env_theme, "env"

        if self.paths.env_file.exists():
            dotenv_theme = (dotenv_values(self.paths.env_file).get(THEME_ENV) or "").strip()
            if dotenv_theme:
                return dotenv_theme, "dotenv"

        for source, path in (("local", self.paths.local_settings), ("project", self.paths.project_settings)):
            view = self._read_yaml(path).get("view") or {}
            theme = str(view.get("theme") or "").strip() if isinstance(view, dict) else ""
            if theme:
                return theme, source

        return "", "none"

    def get_active_theme(self) -> str:
        """Get the active theme name, empty when no theme is selected."""
        theme, _source = self.get_active_theme_with_source()
        return theme

    def get_environment_options(self) -> dict[str, bool]:
        """Template engine options from view settings.

        Defaults: auto_reload on, strict_variables off.
        """
        view = self.get_merged_settings().get("view") or {}
        if not isinstance(view, dict):
            view = {}
        return {
            "auto_reload": bool(view.get("auto_reload", True)),
            "strict_variables": bool(view.get("strict_variables", False)),
        }

    def _deep_merge(self, base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dicts, overlay wins."""
        result = base.copy()
        for key, value in overlay.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result


def get_settings(project: ProjectPaths | None = None) -> ViewSettings:
    """Get a settings instance for a project (default: discovered from cwd)."""
    return ViewSettings(SettingsPaths.for_project(project or ProjectPaths.discover()))
