from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from verman.config.project import PROJECT_CONFIG_FILENAME
from verman.release.exceptions import ConfigError
from verman.release.manager import VersionManager
from verman.sources.registry import create_version_manager

_console: Console | None = None


def get_console() -> Console:
    """Return the shared Rich console instance for CLI output."""
    global _console  # noqa: PLW0603
    if _console is None:
        _console = Console(stderr=True)
    return _console


def resolve_config_path(config: str | None) -> Path:
    """Resolve the --config option, defaulting to verman.toml in the current directory."""
    if config is None:
        return Path.cwd() / PROJECT_CONFIG_FILENAME
    return Path(config).expanduser().resolve()


def load_manager(config: str | None) -> VersionManager:
    """Build the VersionManager for the --config option.

    Raises:
        typer.Exit: If the project configuration cannot be loaded.
    """
    config_path = resolve_config_path(config)
    try:
        return create_version_manager(config_path)
    except ConfigError as exc:
        console = get_console()
        console.print(f"[red]{escape(exc.message)}[/red]")
        if not config_path.exists():
            console.print("Run [bold]verman init[/bold] to create one.")
        raise typer.Exit(code=1) from exc
