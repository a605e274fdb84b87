import typer
from rich import box
from rich.markup import escape
from rich.table import Table

from verman.cli._console import get_console, load_manager
from verman.release.catalog import latest
from verman.release.exceptions import ListError, SemVerError


def do_releases(constraint: str = "", config: str | None = None) -> None:
    """Display the remote releases that have an asset for the target platform.

    Args:
        constraint: Semver range expression; empty lists every release
        config: Path to verman.toml (defaults to the current directory)
    """
    console = get_console()
    manager = load_manager(config)
    options = manager.options

    try:
        catalog = manager.list_releases(constraint)
    except (ListError, SemVerError) as exc:
        console.print(f"[red]{escape(exc.message)}[/red]")
        raise typer.Exit(code=1) from exc

    if not catalog:
        console.print(
            f"[yellow]No releases of {escape(options.organization)}/{escape(options.repository)} "
            f"match '{escape(constraint)}' for {escape(options.os)}/{escape(options.arch)}.[/yellow]"
        )
        raise typer.Exit(code=1)

    newest = latest(catalog)
    ordered = manager.sort_keys(catalog, descending=True)
    # Tags that are not semver are listed after the ordered ones
    unordered = sorted(set(catalog) - set(ordered))

    table = Table(
        title=f"{options.organization}/{options.repository} ({options.os}/{options.arch})",
        box=box.ROUNDED,
        show_header=True,
    )
    table.add_column("Tag", style="cyan")
    table.add_column("Asset URL")
    for tag in [*ordered, *unordered]:
        label = f"{escape(tag)} [green](latest)[/green]" if newest is not None and tag == newest[0] else escape(tag)
        table.add_row(label, escape(catalog[tag]))
    console.print(table)
