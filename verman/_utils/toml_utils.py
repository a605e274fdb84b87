from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import tomlkit

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[no-redef]


class TomlError(Exception):
    """A TOML file that does not parse, located by line and column."""

    def __init__(self, path: Path, reason: str, lineno: int = 0, colno: int = 0):
        self.path = path
        self.reason = reason
        self.lineno = lineno
        self.colno = colno
        location = f"{path}:{lineno}:{colno}" if lineno else str(path)
        super().__init__(f"TOML parsing error in '{location}': {reason}")


def load_toml_from_path(path: str | Path) -> dict[str, Any]:
    """Read a TOML file into plain Python data.

    Raises:
        TomlError: If the file is not valid TOML.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    with path.open("rb") as file:
        try:
            return tomllib.load(file)
        except tomllib.TOMLDecodeError as exc:
            raise TomlError(
                path=path,
                reason=str(getattr(exc, "msg", exc)),
                lineno=int(getattr(exc, "lineno", 0) or 0),
                colno=int(getattr(exc, "colno", 0) or 0),
            ) from exc


def save_toml_to_path(document: tomlkit.TOMLDocument, path: str | Path) -> None:
    """Write a tomlkit document, keeping its comments and layout."""
    Path(path).write_text(tomlkit.dumps(document), encoding="utf-8")
