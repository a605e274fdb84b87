from pathlib import Path

import typer
from rich.markup import escape

from verman.cli._console import get_console
from verman.config.project import PROJECT_CONFIG_FILENAME, write_project_config


def do_init(repository: str, force: bool = False, directory: str | None = None) -> None:
    """Create a verman.toml skeleton for ``organization/repository``.

    Args:
        repository: Repository identity as ``organization/repository``
        force: Overwrite an existing verman.toml
        directory: Target directory (defaults to current directory)
    """
    console = get_console()
    target_dir = Path(directory).resolve() if directory else Path.cwd()
    config_path = target_dir / PROJECT_CONFIG_FILENAME

    organization, _, name = repository.partition("/")
    if not organization or not name or "/" in name:
        console.print(f"[red]Invalid repository '{escape(repository)}': expected 'organization/repository'.[/red]")
        raise typer.Exit(code=1)

    if config_path.exists() and not force:
        console.print(f"[red]{PROJECT_CONFIG_FILENAME} already exists at {escape(str(config_path))}.[/red]")
        console.print("Use [bold]--force[/bold] to overwrite.")
        raise typer.Exit(code=1)

    if not target_dir.is_dir():
        console.print(f"[red]Directory not found: {escape(str(target_dir))}[/red]")
        raise typer.Exit(code=1)

    write_project_config(config_path, organization, name)
    console.print(f"[green]Created {escape(str(config_path))}[/green]")
    console.print("Edit the [bold][release.assets][/bold] templates to match the published asset names.")
