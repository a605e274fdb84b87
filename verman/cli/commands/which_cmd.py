import typer
from rich.markup import escape

from verman.cli._console import get_console, load_manager
from verman.release.exceptions import ListError, SemVerError


def do_which(constraint: str = "", config: str | None = None) -> None:
    """Print the executable path of the newest installed version matching the constraint.

    The path is computed from the naming strategy, not checked on disk.
    Exits with code 1 when no installed version matches.
    """
    console = get_console()
    manager = load_manager(config)

    try:
        selected = manager.get_installed_version(constraint)
    except (ListError, SemVerError) as exc:
        console.print(f"[red]{escape(exc.message)}[/red]")
        raise typer.Exit(code=1) from exc

    if selected is None:
        console.print(f"[yellow]No installed version matches '{escape(constraint)}'.[/yellow]")
        console.print("Run [bold]verman install[/bold] to fetch one.")
        raise typer.Exit(code=1)

    _tag, path = selected
    typer.echo(path)
