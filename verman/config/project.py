"""Project configuration file (``verman.toml``).

Describes which repository to manage and how its release assets and
executables are named per platform::

    [release]
    organization = "nicholasjackson"
    repository = "fake-service"

    [release.assets]
    linux = "fake-service-linux"
    darwin = "fake-service-osx"
    "windows/amd64" = "fake-service.exe"

Templates may reference ``{version}``, ``{os}`` and ``{arch}``.
"""

from pathlib import Path

import tomlkit
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from verman._utils.toml_utils import TomlError, load_toml_from_path, save_toml_to_path
from verman.release.exceptions import ConfigError
from verman.release.options import NamingStrategy, Options, template_naming, validate_template

PROJECT_CONFIG_FILENAME = "verman.toml"


class ReleaseConfig(BaseModel):
    """The ``[release]`` table of a project configuration file."""

    model_config = ConfigDict(extra="forbid")

    organization: str
    repository: str
    os: str = ""
    arch: str = ""
    releases_path: str = ""
    assets: dict[str, str]
    executables: dict[str, str] | None = None

    @field_validator("organization", "repository")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "must not be blank"
            raise ValueError(msg)
        return value.strip()

    @field_validator("assets")
    @classmethod
    def validate_assets(cls, assets: dict[str, str]) -> dict[str, str]:
        if not assets:
            msg = "at least one asset template is required"
            raise ValueError(msg)
        for template in assets.values():
            validate_template(template)
        return assets

    @field_validator("executables")
    @classmethod
    def validate_executables(cls, executables: dict[str, str] | None) -> dict[str, str] | None:
        for template in (executables or {}).values():
            validate_template(template)
        return executables

    def to_options(self, releases_root: Path) -> Options:
        """Build frozen Options; a blank ``releases_path`` lands under ``releases_root/org/repo``."""
        if self.releases_path:
            releases_path = Path(self.releases_path).expanduser()
        else:
            releases_path = Path(releases_root) / self.organization / self.repository

        executables = self.executables if self.executables is not None else self.assets
        naming = NamingStrategy(asset_name=template_naming(self.assets), exe_name=template_naming(executables))
        return Options(
            organization=self.organization,
            repository=self.repository,
            os=self.os,
            arch=self.arch,
            naming=naming,
            releases_path=releases_path,
        )


def load_project_config(path: Path) -> ReleaseConfig:
    """Read and validate the ``[release]`` table of a project configuration file.

    Args:
        path: Path to ``verman.toml``.

    Returns:
        The validated release configuration.

    Raises:
        ConfigError: If the file is missing, is not valid TOML or fails validation.
    """
    if not path.is_file():
        msg = f"Project configuration '{path}' not found"
        raise ConfigError(msg)

    try:
        data = load_toml_from_path(path)
    except (TomlError, OSError) as exc:
        raise ConfigError(str(exc)) from exc

    release_table = data.get("release")
    if not isinstance(release_table, dict):
        msg = f"Missing [release] table in '{path}'"
        raise ConfigError(msg)

    try:
        return ReleaseConfig.model_validate(release_table)
    except ValidationError as exc:
        errors = "; ".join(f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors())
        msg = f"Invalid [release] table in '{path}': {errors}"
        raise ConfigError(msg) from exc


def build_project_config(organization: str, repository: str) -> tomlkit.TOMLDocument:
    """Build a commented ``verman.toml`` skeleton for a repository."""
    doc = tomlkit.document()
    release = tomlkit.table()
    release.add("organization", organization)
    release.add("repository", repository)
    release.add(tomlkit.comment("Blank os/arch use the running platform"))
    release.add("os", "")
    release.add("arch", "")
    release.add(tomlkit.comment("Blank releases_path uses <releases-root>/<organization>/<repository>"))
    release.add("releases_path", "")

    assets = tomlkit.table()
    assets.add(tomlkit.comment('Keys: "<os>/<arch>", "<os>" or "*"; templates may use {version}, {os}, {arch}'))
    assets.add("*", f"{repository}_{{version}}_{{os}}_{{arch}}.tar.gz")
    release.add("assets", assets)

    executables = tomlkit.table()
    executables.add("*", repository)
    executables.add("windows", f"{repository}.exe")
    release.add("executables", executables)

    doc.add("release", release)
    return doc


def write_project_config(path: Path, organization: str, repository: str) -> None:
    save_toml_to_path(build_project_config(organization, repository), path)
