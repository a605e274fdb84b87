from pathlib import Path

import typer
from rich import box
from rich.markup import escape
from rich.table import Table

from verman.cli._console import get_console, load_manager
from verman.release.exceptions import ListError, SemVerError


def do_installed(constraint: str = "", config: str | None = None) -> None:
    """Display the installed versions found under the releases directory.

    Args:
        constraint: Semver range expression; empty lists every installed version
        config: Path to verman.toml (defaults to the current directory)
    """
    console = get_console()
    manager = load_manager(config)

    try:
        catalog = manager.list_installed_versions(constraint)
    except (ListError, SemVerError) as exc:
        console.print(f"[red]{escape(exc.message)}[/red]")
        raise typer.Exit(code=1) from exc

    if not catalog:
        console.print(f"[yellow]No installed versions match '{escape(constraint)}' in {escape(str(manager.options.releases_path))}.[/yellow]")
        raise typer.Exit(code=1)

    ordered = manager.sort_keys(catalog, descending=True)
    unordered = sorted(set(catalog) - set(ordered))

    table = Table(title="Installed versions", box=box.ROUNDED, show_header=True)
    table.add_column("Tag", style="cyan")
    table.add_column("Executable")
    table.add_column("Present", justify="center")
    for tag in [*ordered, *unordered]:
        present = "[green]yes[/green]" if Path(catalog[tag]).is_file() else "[dim]no[/dim]"
        table.add_row(escape(tag), escape(catalog[tag]), present)
    console.print(table)
