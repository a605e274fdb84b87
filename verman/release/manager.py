"""Version manager: lists, selects and fetches releases of one repository.

Wires the injected collaborators (release lister, directory lister, fetcher)
to the pure resolution functions in :mod:`verman.release.catalog`.
"""

import logging
from pathlib import Path

from verman.release.catalog import latest, resolve_installed, resolve_remote
from verman.release.fetch import fetch_release
from verman.release.models import VersionCatalog
from verman.release.options import Options
from verman.release.protocols import DirectoryLister, Fetcher, ReleaseLister
from verman.release.semver import check, sort_keys

logger = logging.getLogger(__name__)


class VersionManager:
    """Resolves and installs versioned releases for the configured repository."""

    def __init__(
        self,
        options: Options,
        release_lister: ReleaseLister,
        directory_lister: DirectoryLister,
        fetcher: Fetcher,
    ):
        self.options = options
        self.release_lister = release_lister
        self.directory_lister = directory_lister
        self.fetcher = fetcher

    def list_releases(self, constraint: str = "") -> VersionCatalog:
        """List remote releases with an asset for the target platform.

        Raises:
            ReleaseListError: If the releases cannot be listed.
            InvalidConstraintError: If the constraint is malformed.
        """
        releases = self.release_lister.list_releases(self.options.organization, self.options.repository)
        logger.debug("Listed %d release(s) for %s/%s", len(releases), self.options.organization, self.options.repository)
        return resolve_remote(releases, constraint, self.options)

    def get_latest_release_url(self, constraint: str = "") -> tuple[str, str] | None:
        """Return ``(tag, url)`` of the newest remote release matching the constraint."""
        return latest(self.list_releases(constraint))

    def download_release(self, tag: str, url: str) -> Path:
        """Download and unpack a release; returns the expected executable path.

        Raises:
            DirectoryCreateError: If the release directory cannot be created.
            FetchError: If the download or extraction fails.
        """
        return fetch_release(tag, url, self.options, self.fetcher)

    def install_latest(self, constraint: str = "") -> tuple[str, Path] | None:
        """Fetch the newest remote release matching the constraint.

        Returns:
            ``(tag, executable_path)``, or None when no release matches.
        """
        selected = self.get_latest_release_url(constraint)
        if selected is None:
            return None
        tag, url = selected
        return tag, self.download_release(tag, url)

    def list_installed_versions(self, constraint: str = "") -> VersionCatalog:
        """List installed releases under the releases root.

        Raises:
            DirectoryListError: If the releases root cannot be listed.
            InvalidConstraintError: If the constraint is malformed.
        """
        entries = self.directory_lister.list_directories(Path(self.options.releases_path))
        return resolve_installed(entries, constraint, self.options)

    def get_installed_version(self, constraint: str = "") -> tuple[str, str] | None:
        """Return ``(tag, executable_path)`` of the newest installed release matching the constraint."""
        return latest(self.list_installed_versions(constraint))

    def sort_keys(self, catalog: VersionCatalog, descending: bool = False) -> list[str]:
        return sort_keys(catalog, descending=descending)

    def in_range(self, version: str, constraint: str) -> bool:
        return check(version, constraint)
