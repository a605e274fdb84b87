"""Collaborator interfaces consumed by the release resolver and fetcher.

Implementations live in ``verman.sources``; tests substitute their own.
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from typing_extensions import runtime_checkable

from verman.release.models import RemoteRelease


@runtime_checkable
class ReleaseLister(Protocol):
    """Lists the releases published for a repository."""

    def list_releases(self, organization: str, repository: str) -> Sequence[RemoteRelease]:
        """Return every release of ``organization/repository``.

        Raises:
            ReleaseListError: On network failure, rate limiting or unknown repository.
        """
        ...


@runtime_checkable
class DirectoryLister(Protocol):
    """Lists the installed release directories under a root path."""

    def list_directories(self, root: Path) -> Sequence[str]:
        """Return the names of the immediate subdirectories of ``root``.

        Raises:
            DirectoryListError: If the root does not exist or cannot be read.
        """
        ...


@runtime_checkable
class Fetcher(Protocol):
    """Retrieves a URL into a directory, unpacking archives in place."""

    def fetch(self, destination: Path, url: str) -> None:
        """Download ``url`` into ``destination``.

        Raises:
            FetchError: If the transfer or the extraction fails.
        """
        ...
