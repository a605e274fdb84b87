import typer
from rich.markup import escape

from verman.cli._console import get_console, load_manager
from verman.release.exceptions import ListError, SemVerError


def do_latest(constraint: str = "", config: str | None = None) -> None:
    """Print the tag and asset URL of the newest remote release matching the constraint.

    The tag and URL go to stdout, tab separated; exits with code 1 when nothing matches.
    """
    console = get_console()
    manager = load_manager(config)

    try:
        selected = manager.get_latest_release_url(constraint)
    except (ListError, SemVerError) as exc:
        console.print(f"[red]{escape(exc.message)}[/red]")
        raise typer.Exit(code=1) from exc

    if selected is None:
        console.print(f"[yellow]No release matches '{escape(constraint)}'.[/yellow]")
        raise typer.Exit(code=1)

    tag, url = selected
    typer.echo(f"{tag}\t{url}")
