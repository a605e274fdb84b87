from pathlib import Path

from verman.release.exceptions import DirectoryListError


class LocalDirectoryLister:
    """Lists release directories on the local filesystem."""

    def list_directories(self, root: Path) -> list[str]:
        """Return the sorted names of the immediate subdirectories of ``root``.

        Plain files at the top level are ignored.

        Raises:
            DirectoryListError: If the root does not exist, is not a directory or cannot be read.
        """
        try:
            return sorted(entry.name for entry in Path(root).iterdir() if entry.is_dir())
        except OSError as exc:
            msg = f"Unable to list releases in '{root}': {exc}"
            raise DirectoryListError(msg) from exc
