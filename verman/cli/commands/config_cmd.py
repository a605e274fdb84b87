"""Config commands for managing verman settings.

Provides set, get, and list operations for the settings stored
in ``~/.verman/credentials``.
"""

from rich import box
from rich.markup import escape
from rich.table import Table

from verman.cli._console import get_console
from verman.config.settings import SettingKey, SettingsStore


def _parse_key(key: str) -> SettingKey | None:
    try:
        return SettingKey(key)
    except ValueError:
        console = get_console()
        console.print(f"[red]Unknown config key: '{escape(key)}'[/red]")
        console.print(f"[dim]Valid keys: {', '.join(SettingKey)}[/dim]")
        return None


def _display_value(key: SettingKey, value: str) -> str:
    if not value:
        return "(empty)"
    if key.is_secret:
        return f"{value[:4]}…" if len(value) > 8 else "****"
    return value


def do_config_set(key: str, value: str) -> None:
    """Set a configuration value.

    Args:
        key: The setting name (e.g. "github-token", "releases-root").
        value: The value to store.
    """
    setting_key = _parse_key(key)
    if setting_key is None:
        return

    SettingsStore().set(setting_key, value)
    get_console().print(f"[green]Set '{setting_key}' = '{escape(_display_value(setting_key, value))}'[/green]")


def do_config_get(key: str) -> None:
    """Show a configuration value and where it comes from."""
    setting_key = _parse_key(key)
    if setting_key is None:
        return

    setting = SettingsStore().resolve(setting_key)
    get_console().print(
        f"[bold]{setting_key}[/bold] = {escape(_display_value(setting_key, setting.value))}  [dim](source: {setting.source})[/dim]"
    )


def do_config_list() -> None:
    table = Table(title="verman configuration", box=box.ROUNDED, show_header=True)
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_column("Source", style="dim")

    for setting in SettingsStore().resolve_all():
        table.add_row(str(setting.key), escape(_display_value(setting.key, setting.value)), str(setting.source))

    get_console().print(table)
