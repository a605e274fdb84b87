"""Release options and the asset naming strategy.

``Options`` is built once and frozen: a blank OS or architecture is replaced
by the running platform's value during validation and never changes after.
"""

import platform
import sys
from collections.abc import Callable, Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

# (version, os, arch) -> filename; an empty string means "nothing for this platform".
NameFunc = Callable[[str, str, str], str]

_OS_ALIASES: dict[str, str] = {
    "win32": "windows",
    "cygwin": "windows",
    "darwin": "darwin",
}

_ARCH_ALIASES: dict[str, str] = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "386",
    "i686": "386",
    "x86": "386",
    "armv7l": "arm",
    "armv6l": "arm",
}


def current_os() -> str:
    """Return the running OS using Go-style names (linux, darwin, windows, ...)."""
    if sys.platform.startswith("linux"):
        return "linux"
    if sys.platform.startswith("freebsd"):
        return "freebsd"
    return _OS_ALIASES.get(sys.platform, sys.platform)


def current_arch() -> str:
    """Return the running architecture using Go-style names (amd64, arm64, ...)."""
    machine = platform.machine().lower()
    return _ARCH_ALIASES.get(machine, machine)


def strip_tag_prefix(tag: str) -> str:
    """Drop a leading 'v' so naming functions reason in plain numeric versions."""
    if tag[:1] in ("v", "V"):
        return tag[1:]
    return tag


class NamingStrategy(BaseModel):
    """Caller-supplied pair of functions mapping (version, os, arch) to filenames.

    ``asset_name`` gives the release asset to download, ``exe_name`` the
    executable expected once the asset is fetched and unpacked. Either may
    return ``""`` to signal that the platform has no matching file.
    """

    model_config = ConfigDict(frozen=True)

    asset_name: NameFunc
    exe_name: NameFunc

    @classmethod
    def single(cls, name_func: NameFunc) -> "NamingStrategy":
        """Use the same function for the asset and the executable."""
        return cls(asset_name=name_func, exe_name=name_func)


def validate_template(template: str) -> str:
    """Check that a filename template only uses ``{version}``, ``{os}`` and ``{arch}``.

    Raises:
        ValueError: On unknown placeholders or unbalanced braces.
    """
    try:
        template.format(version="1.0.0", os="linux", arch="amd64")
    except KeyError as exc:
        msg = f"unknown placeholder {{{exc.args[0]}}} in template '{template}'; use {{version}}, {{os}} or {{arch}}"
        raise ValueError(msg) from exc
    except (AttributeError, IndexError, ValueError) as exc:
        msg = f"malformed template '{template}': {exc}; write literal braces as '{{{{' and '}}}}'"
        raise ValueError(msg) from exc
    return template


def template_naming(templates: Mapping[str, str]) -> NameFunc:
    """Build a naming function from per-platform filename templates.

    Keys are looked up most specific first: ``"<os>/<arch>"``, ``"<os>"``, then
    ``"*"``. Templates may reference ``{version}``, ``{os}`` and ``{arch}``.

    Args:
        templates: Mapping of platform key to filename template.

    Returns:
        A naming function returning ``""`` for platforms without a template.

    Raises:
        ValueError: If a template is malformed, see :func:`validate_template`.
    """
    lookup = {key: validate_template(template) for key, template in templates.items()}

    def _name(version: str, os_name: str, arch: str) -> str:
        for key in (f"{os_name}/{arch}", os_name, "*"):
            template = lookup.get(key)
            if template is not None:
                return template.format(version=version, os=os_name, arch=arch)
        return ""

    return _name


class Options(BaseModel):
    """Immutable configuration for resolving and fetching releases."""

    model_config = ConfigDict(frozen=True)

    organization: str
    repository: str
    os: str = Field(default="", validate_default=True)
    arch: str = Field(default="", validate_default=True)
    naming: NamingStrategy
    releases_path: Path

    @field_validator("os")
    @classmethod
    def default_os(cls, value: str) -> str:
        return value or current_os()

    @field_validator("arch")
    @classmethod
    def default_arch(cls, value: str) -> str:
        return value or current_arch()

    def asset_name(self, tag: str) -> str:
        """Expected release asset filename for the given tag on the target platform."""
        return self.naming.asset_name(strip_tag_prefix(tag), self.os, self.arch)

    def exe_name(self, tag: str) -> str:
        """Expected executable filename for the given tag on the target platform."""
        return self.naming.exe_name(strip_tag_prefix(tag), self.os, self.arch)
