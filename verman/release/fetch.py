import logging
from pathlib import Path

from verman.release.exceptions import DirectoryCreateError
from verman.release.options import Options
from verman.release.protocols import Fetcher

logger = logging.getLogger(__name__)


def get_release_dir(tag: str, options: Options) -> Path:
    """Directory holding a fetched release: ``{releases_path}/{tag}``."""
    return Path(options.releases_path) / tag


def fetch_release(tag: str, url: str, options: Options, fetcher: Fetcher) -> Path:
    """Materialize a release under the releases root.

    Creates ``{releases_path}/{tag}`` (with missing parents), hands the URL to
    the fetcher and returns where the executable is expected to be. The
    returned path is a prediction from the naming strategy; it is not checked
    against what the fetcher actually wrote. Nothing is cleaned up or retried
    when the fetcher fails.

    Args:
        tag: Release tag, used as the directory name.
        url: Asset download URL.
        options: Releases root and naming strategy.
        fetcher: Performs the transfer and any archive extraction.

    Returns:
        The expected path of the executable.

    Raises:
        DirectoryCreateError: If the release directory cannot be created.
        FetchError: If the fetcher fails.
    """
    release_dir = get_release_dir(tag, options)
    try:
        release_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        msg = f"Unable to create release directory '{release_dir}': {exc}"
        raise DirectoryCreateError(msg) from exc

    executable = release_dir / options.exe_name(tag)
    logger.debug("Fetching release '%s' from %s into %s", tag, url, release_dir)
    fetcher.fetch(release_dir, url)
    logger.info("Fetched release '%s' to %s", tag, release_dir)
    return executable
