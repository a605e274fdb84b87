"""verman CLI.

Lists, selects and installs versioned binaries published as GitHub release
assets, and manages the user settings used to reach GitHub.
"""

from typing import Annotated

import typer

from verman._utils.log_utils import setup_logging
from verman.cli.commands.config_cmd import do_config_get, do_config_list, do_config_set
from verman.cli.commands.init_cmd import do_init
from verman.cli.commands.install_cmd import do_install
from verman.cli.commands.installed_cmd import do_installed
from verman.cli.commands.latest_cmd import do_latest
from verman.cli.commands.releases_cmd import do_releases
from verman.cli.commands.which_cmd import do_which

app = typer.Typer(
    name="verman",
    no_args_is_help=True,
    help="verman: resolve, install and locate versioned releases published on GitHub.",
)

ConstraintArg = Annotated[
    str,
    typer.Argument(help="Semantic version constraint (e.g. '~1.2.0', '^1.0.0'); empty matches all"),
]
ConfigOption = Annotated[
    str | None,
    typer.Option("--config", "-c", help="Path to verman.toml (defaults to ./verman.toml)"),
]


@app.callback()
def main(
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", "-l", help="Log level (debug, info, warning, error); defaults to $VERMAN_LOG_LEVEL or warning"),
    ] = None,
) -> None:
    """Configure logging before any command runs."""
    setup_logging(log_level)


# ── Release commands ─────────────────────────────────────────────────


@app.command("releases", help="List remote releases with an asset for the target platform")
def releases_cmd(constraint: ConstraintArg = "", config: ConfigOption = None) -> None:
    do_releases(constraint=constraint, config=config)


@app.command("latest", help="Print the newest remote release matching a constraint")
def latest_cmd(constraint: ConstraintArg = "", config: ConfigOption = None) -> None:
    do_latest(constraint=constraint, config=config)


@app.command("install", help="Download and unpack the newest remote release matching a constraint")
def install_cmd(
    constraint: ConstraintArg = "",
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Download again even if the version is already installed"),
    ] = False,
    config: ConfigOption = None,
) -> None:
    do_install(constraint=constraint, force=force, config=config)


@app.command("installed", help="List installed versions matching a constraint")
def installed_cmd(constraint: ConstraintArg = "", config: ConfigOption = None) -> None:
    do_installed(constraint=constraint, config=config)


@app.command("which", help="Print the executable path of the newest installed version matching a constraint")
def which_cmd(constraint: ConstraintArg = "", config: ConfigOption = None) -> None:
    do_which(constraint=constraint, config=config)


@app.command("init", help="Create a verman.toml for a GitHub repository")
def init_cmd(
    repository: Annotated[
        str,
        typer.Argument(help="Repository as 'organization/repository'"),
    ],
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing verman.toml"),
    ] = False,
    directory: Annotated[
        str | None,
        typer.Option("--directory", "-d", help="Target directory (defaults to current directory)"),
    ] = None,
) -> None:
    do_init(repository=repository, force=force, directory=directory)


# ── Config subcommand group ──────────────────────────────────────────
config_app = typer.Typer(
    name="config",
    no_args_is_help=True,
    help="Manage verman settings (GitHub token, API URL, releases root).",
)
app.add_typer(config_app, name="config")


@config_app.command("set", help="Set a configuration value")
def config_set_cmd(
    key: Annotated[
        str,
        typer.Argument(help="Configuration key (e.g. 'github-token', 'api-url', 'releases-root')"),
    ],
    value: Annotated[
        str,
        typer.Argument(help="Value to set"),
    ],
) -> None:
    """Set a configuration value."""
    do_config_set(key=key, value=value)


@config_app.command("get", help="Get a configuration value")
def config_get_cmd(
    key: Annotated[
        str,
        typer.Argument(help="Configuration key (e.g. 'github-token', 'api-url', 'releases-root')"),
    ],
) -> None:
    """Get a configuration value and its source."""
    do_config_get(key=key)


@config_app.command("list", help="List all configuration values")
def config_list_cmd() -> None:
    """List all configuration values with their sources."""
    do_config_list()
