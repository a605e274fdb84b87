"""User settings: GitHub access and where releases are installed.

Stored in ``~/.verman/credentials`` as ``NAME=value`` lines named after the
environment variables that override them::

    GITHUB_TOKEN=ghp_...
    VERMAN_GITHUB_API_URL=https://github.example.com/api/v3
    VERMAN_RELEASES_ROOT=~/tools/releases

An environment variable wins over the file, the file over the built-in default.
"""

import logging
import os
from enum import unique
from pathlib import Path
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from verman._compat import StrEnum
from verman.release.exceptions import ConfigError

logger = logging.getLogger(__name__)

VERMAN_HOME = Path.home() / ".verman"
SETTINGS_PATH = VERMAN_HOME / "credentials"

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_RELEASES_ROOT = "~/.verman/releases"


@unique
class SettingKey(StrEnum):
    """Setting names as typed on the command line."""

    GITHUB_TOKEN = "github-token"
    API_URL = "api-url"
    RELEASES_ROOT = "releases-root"

    @property
    def env_var(self) -> str:
        return _ENV_VARS[self]

    @property
    def default(self) -> str:
        return _DEFAULTS[self]

    @property
    def is_secret(self) -> bool:
        return self is SettingKey.GITHUB_TOKEN


_ENV_VARS: dict[SettingKey, str] = {
    SettingKey.GITHUB_TOKEN: "GITHUB_TOKEN",
    SettingKey.API_URL: "VERMAN_GITHUB_API_URL",
    SettingKey.RELEASES_ROOT: "VERMAN_RELEASES_ROOT",
}

_DEFAULTS: dict[SettingKey, str] = {
    SettingKey.GITHUB_TOKEN: "",
    SettingKey.API_URL: DEFAULT_API_URL,
    SettingKey.RELEASES_ROOT: DEFAULT_RELEASES_ROOT,
}


@unique
class SettingSource(StrEnum):
    ENV = "env"
    FILE = "file"
    DEFAULT = "default"


class ResolvedSetting(NamedTuple):
    key: SettingKey
    value: str
    source: SettingSource


class Settings(BaseModel):
    """Effective settings used to reach GitHub and place installed releases."""

    model_config = ConfigDict(frozen=True)

    github_token: str | None = None
    api_url: str = DEFAULT_API_URL
    releases_root: Path = Path(DEFAULT_RELEASES_ROOT).expanduser()

    @field_validator("github_token")
    @classmethod
    def blank_token_is_none(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, value: str) -> str:
        url = value.strip().rstrip("/")
        if not url.startswith(("http://", "https://")):
            msg = f"'{value}' is not an http(s) URL"
            raise ValueError(msg)
        return url

    @field_validator("releases_root")
    @classmethod
    def expand_releases_root(cls, value: Path) -> Path:
        return value.expanduser()


class SettingsStore:
    """Reads and writes the settings file and resolves each setting with its source."""

    def __init__(self, path: Path | None = None):
        self.path = path if path is not None else SETTINGS_PATH

    def read(self) -> dict[str, str]:
        """Return the ``NAME=value`` entries of the file; a missing or unreadable file is empty."""
        try:
            content = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            logger.warning("Ignoring unreadable settings file %s: %s", self.path, exc)
            return {}

        entries: dict[str, str] = {}
        for line in content.splitlines():
            name, sep, value = line.strip().partition("=")
            if sep and name and not name.startswith("#"):
                entries[name.strip()] = value.strip()
        return entries

    def write(self, entries: dict[str, str]) -> None:
        """Replace the file contents; it holds a token, so only the owner may read it."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("".join(f"{name}={value}\n" for name, value in entries.items()), encoding="utf-8")
        self.path.chmod(0o600)

    def resolve(self, key: SettingKey) -> ResolvedSetting:
        env_value = os.environ.get(key.env_var)
        if env_value is not None:
            return ResolvedSetting(key, env_value, SettingSource.ENV)
        file_value = self.read().get(key.env_var)
        if file_value is not None:
            return ResolvedSetting(key, file_value, SettingSource.FILE)
        return ResolvedSetting(key, key.default, SettingSource.DEFAULT)

    def resolve_all(self) -> list[ResolvedSetting]:
        return [self.resolve(key) for key in SettingKey]

    def set(self, key: SettingKey, value: str) -> None:
        entries = self.read()
        entries[key.env_var] = value
        self.write(entries)

    def load(self) -> Settings:
        """Build the effective settings.

        Raises:
            ConfigError: If a resolved value is invalid, e.g. a malformed API URL.
        """
        values = {setting.key: setting.value for setting in self.resolve_all()}
        try:
            return Settings(
                github_token=values[SettingKey.GITHUB_TOKEN],
                api_url=values[SettingKey.API_URL],
                releases_root=Path(values[SettingKey.RELEASES_ROOT]),
            )
        except ValidationError as exc:
            errors = "; ".join(f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors())
            msg = f"Invalid settings in '{self.path}' or the environment: {errors}"
            raise ConfigError(msg) from exc


def load_settings() -> Settings:
    """Effective settings from the environment and the default settings file."""
    return SettingsStore().load()
