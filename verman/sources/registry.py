"""Factory wiring a VersionManager to the real collaborators."""

from pathlib import Path

from verman.config.project import load_project_config
from verman.config.settings import Settings, load_settings
from verman.release.manager import VersionManager
from verman.sources.downloader import HttpFetcher
from verman.sources.github import GitHubReleaseLister
from verman.sources.local import LocalDirectoryLister


def create_version_manager(config_path: Path, settings: Settings | None = None) -> VersionManager:
    """Create a VersionManager for the repository described by a project config file.

    Args:
        config_path: Path to ``verman.toml``.
        settings: Pre-loaded settings; if None, reads them (env > file > defaults).

    Returns:
        A manager using the GitHub API, the local releases directory and the HTTP fetcher.

    Raises:
        ConfigError: If the settings or the project configuration cannot be loaded.
    """
    if settings is None:
        settings = load_settings()

    options = load_project_config(config_path).to_options(settings.releases_root)
    return VersionManager(
        options=options,
        release_lister=GitHubReleaseLister(api_url=settings.api_url, token=settings.github_token),
        directory_lister=LocalDirectoryLister(),
        fetcher=HttpFetcher(),
    )
