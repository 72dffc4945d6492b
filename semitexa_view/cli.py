"""semitexa-view CLI - inspect template path layering and manage the template cache."""

from __future__ import annotations

from pathlib import Path

import click
from rich.markup import escape
from rich.table import Table

from .cache import clear_cache_dir
from .console import console
from .logging_setup import init_json_logging
from .models import ModuleDescriptor
from .paths import ProjectPaths
from .registry import RegistryError
from .registry import load_registry_file
from .resolution import ResolutionResult
from .resolution import resolve_template_layers
from .settings import get_settings

_LAYER_STYLES = {"declared": "cyan", "theme": "magenta", "project": "green"}


def _load_modules(project: ProjectPaths, registry: Path | None) -> list[ModuleDescriptor]:
    """Load modules from --registry, or the project manifest when present."""
    if registry is None:
        if not project.registry_file.exists():
            return []
        registry = project.registry_file
    return load_registry_file(registry)


def _resolve(root: Path | None, registry: Path | None, theme: str | None) -> tuple[ResolutionResult, str, str]:
    project = ProjectPaths(root=root.absolute()) if root else ProjectPaths.discover()
    try:
        modules = _load_modules(project, registry)
    except RegistryError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise click.exceptions.Exit(1) from e

    if theme is None:
        active_theme, source = get_settings(project).get_active_theme_with_source()
    else:
        active_theme, source = theme, "option"

    result = resolve_template_layers(modules, active_theme, project.modules_root, project.theme_root)
    return result, active_theme, source


def _print_theme(active_theme: str, source: str) -> None:
    if active_theme:
        console.print(f"[bold]Active theme:[/bold] {escape(active_theme)} [dim]({source})[/dim]")
    else:
        console.print("[bold]Active theme:[/bold] [dim]none (legacy flat theme layout)[/dim]")


_resolution_options = [
    click.option(
        "--root",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Project root (default: discovered from the current directory)",
    ),
    click.option(
        "--registry",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="Module registry manifest (default: .semitexa/modules.yaml)",
    ),
    click.option("--theme", default=None, help="Override the active theme ('' for legacy layout)"),
]


def resolution_options(func):
    for option in reversed(_resolution_options):
        func = option(func)
    return func


@click.group()
@click.version_option(package_name="semitexa-view")
@click.option("--log-file", default=None, help="Write JSONL logs to this file")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level for --log-file",
)
def cli(log_file: str | None, log_level: str | None):
    """Semitexa view - template path layering for modules and themes."""
    init_json_logging(log_file, log_level)


@cli.command(name="paths")
@resolution_options
def paths_cmd(root: Path | None, registry: Path | None, theme: str | None):
    """Show template bindings in priority order (first match wins)."""
    result, active_theme, source = _resolve(root, registry, theme)
    _print_theme(active_theme, source)

    if not result.entries:
        console.print("[dim]No template paths found.[/dim]")
        return

    table = Table(title="Template Bindings")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Alias", style="bold", no_wrap=True)
    table.add_column("Layer", no_wrap=True)
    table.add_column("Directory", overflow="fold")

    for index, (layer, binding) in enumerate(result.entries, start=1):
        style = _LAYER_STYLES.get(layer, "white")
        table.add_row(str(index), f"@{binding.alias}", f"[{style}]{layer}[/{style}]", str(binding.directory))

    console.print(table)


@cli.command(name="layouts")
@resolution_options
def layouts_cmd(root: Path | None, registry: Path | None, theme: str | None):
    """Show project module layouts and their theme overrides."""
    result, active_theme, source = _resolve(root, registry, theme)
    _print_theme(active_theme, source)

    if not result.project_layouts:
        console.print("[dim]No project module layouts found.[/dim]")
        return

    table = Table(title="Module Layouts")
    table.add_column("Module", style="cyan", no_wrap=True)
    table.add_column("Layout", overflow="fold")
    table.add_column("Theme override", overflow="fold")

    for module, layout_dir in result.project_layouts.items():
        override = result.theme_overrides.get(module)
        table.add_row(module, str(layout_dir), str(override) if override else "[dim]-[/dim]")

    console.print(table)


@cli.group(invoke_without_command=True)
@click.pass_context
def cache(ctx: click.Context):
    """Manage the compiled template cache."""
    if ctx.invoked_subcommand is None:
        click.echo("\n" + ctx.get_help())
        ctx.exit()


@cache.command(name="path")
@click.option("--root", type=click.Path(file_okay=False, path_type=Path), default=None, help="Project root")
def cache_path(root: Path | None):
    """Show the cache directory path."""
    project = ProjectPaths(root=root.absolute()) if root else ProjectPaths.discover()
    console.print(f"[cyan]{project.cache_dir}[/cyan]")

    if project.cache_dir.exists():
        console.print("[dim]Status: exists[/dim]")
    else:
        console.print("[dim]Status: not created yet[/dim]")


@cache.command(name="clear")
@click.option("--root", type=click.Path(file_okay=False, path_type=Path), default=None, help="Project root")
@click.option("--force", "-f", is_flag=True, help="Skip confirmation prompt")
def cache_clear(root: Path | None, force: bool):
    """Remove compiled templates from the cache directory."""
    project = ProjectPaths(root=root.absolute()) if root else ProjectPaths.discover()
    cache_dir = project.cache_dir

    if not cache_dir.exists():
        console.print("[dim]Cache directory does not exist yet.[/dim]")
        return

    if not force and not click.confirm(f"Clear template cache at {cache_dir}?"):
        console.print("[dim]Cancelled.[/dim]")
        return

    try:
        removed = clear_cache_dir(cache_dir)
    except OSError as e:
        console.print(f"[red]Error:[/red] Failed to clear cache: {escape(str(e))}")
        raise click.exceptions.Exit(1) from e

    console.print(f"[green]✓ Removed {removed} cache entries[/green]")


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
