import typer
from rich.markup import escape

from verman.cli._console import get_console, load_manager
from verman.release.exceptions import DirectoryCreateError, FetchError, ListError, SemVerError
from verman.release.fetch import get_release_dir


def do_install(constraint: str = "", force: bool = False, config: str | None = None) -> None:
    """Download the newest remote release matching the constraint.

    Skips the download when that version is already installed, unless
    ``force`` is set. Prints the expected executable path to stdout.

    Args:
        constraint: Semver range expression; empty selects the newest release
        force: Download again even if the version directory already exists
        config: Path to verman.toml (defaults to the current directory)
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
    release_dir = get_release_dir(tag, manager.options)
    if release_dir.is_dir() and any(release_dir.iterdir()) and not force:
        console.print(f"[dim]{escape(tag)} is already installed; use --force to download again.[/dim]")
        typer.echo(str(release_dir / manager.options.exe_name(tag)))
        return

    try:
        with console.status(f"Downloading {escape(tag)}..."):
            path = manager.download_release(tag, url)
    except (DirectoryCreateError, FetchError) as exc:
        console.print(f"[red]{escape(exc.message)}[/red]")
        raise typer.Exit(code=1) from exc

    console.print(f"[green]Installed {escape(tag)}.[/green]")
    if not path.exists():
        console.print(f"[yellow]Expected executable not found at {escape(str(path))}.[/yellow]")
    typer.echo(str(path))
