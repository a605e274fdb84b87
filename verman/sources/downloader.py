"""HTTP fetcher: downloads a release asset and unpacks it into a directory.

Archives are recognized by extension first, then by their leading bytes.
Zip and tar archives (optionally gzip/bzip2/xz compressed) are extracted in
place, a bare ``.gz`` file is decompressed, and anything else is copied as a
single executable file named after the last segment of the URL path.
"""

import gzip
import logging
import shutil
import tarfile
import tempfile
import zipfile
from pathlib import Path

import httpx

from verman._compat import StrEnum
from verman.release.exceptions import FetchError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 300.0
_CHUNK_SIZE = 64 * 1024

_TAR_SUFFIXES = (".tar", ".tar.gz", ".tgz", ".tar.bz2", ".tbz2", ".tbz", ".tar.xz", ".txz")
_ZIP_MAGIC = b"PK\x03\x04"
_GZIP_MAGIC = b"\x1f\x8b"


class ArchiveKind(StrEnum):
    ZIP = "zip"
    TAR = "tar"
    GZIP = "gzip"
    FILE = "file"


def filename_from_url(url: str) -> str:
    """Last path segment of the URL, or ``download`` when the path is empty."""
    name = httpx.URL(url).path.rstrip("/").rsplit("/", maxsplit=1)[-1]
    return name or "download"


def detect_archive(path: Path) -> ArchiveKind:
    """Classify a downloaded file by its name, falling back to its magic bytes."""
    lowered = path.name.lower()
    if lowered.endswith(".zip"):
        return ArchiveKind.ZIP
    if lowered.endswith(_TAR_SUFFIXES):
        return ArchiveKind.TAR
    if lowered.endswith(".gz"):
        return ArchiveKind.GZIP

    with open(path, "rb") as file:
        head = file.read(4)
    if head.startswith(_ZIP_MAGIC):
        return ArchiveKind.ZIP
    if tarfile.is_tarfile(path):
        return ArchiveKind.TAR
    if head.startswith(_GZIP_MAGIC):
        return ArchiveKind.GZIP
    return ArchiveKind.FILE


def _ensure_within(destination: Path, member_name: str) -> None:
    root = destination.resolve()
    target = (root / member_name).resolve()
    if not target.is_relative_to(root):
        msg = f"Archive member '{member_name}' escapes the destination directory"
        raise FetchError(msg)


def _make_executable(path: Path) -> None:
    path.chmod(path.stat().st_mode | 0o755)


def extract_zip(archive_path: Path, destination: Path) -> None:
    with zipfile.ZipFile(archive_path) as archive:
        members = archive.infolist()
        for member in members:
            _ensure_within(destination, member.filename)
        archive.extractall(destination)
        # zipfile drops unix permissions; restore them from the external attributes
        for member in members:
            mode = (member.external_attr >> 16) & 0o777
            if mode and not member.is_dir():
                (destination / member.filename).chmod(mode)


def extract_tar(archive_path: Path, destination: Path) -> None:
    with tarfile.open(archive_path, mode="r:*") as archive:
        for member in archive.getmembers():
            _ensure_within(destination, member.name)
            if member.issym() or member.islnk():
                _ensure_within(destination, str(Path(member.name).parent / member.linkname))
        if hasattr(tarfile, "data_filter"):
            archive.extractall(destination, filter="data")
        else:
            archive.extractall(destination)


def extract_gzip(archive_path: Path, destination: Path) -> Path:
    name = archive_path.name
    if name.lower().endswith(".gz"):
        name = name[: -len(".gz")]
    target = destination / name
    with gzip.open(archive_path, "rb") as source, open(target, "wb") as sink:
        shutil.copyfileobj(source, sink)
    _make_executable(target)
    return target


class HttpFetcher:
    """Fetches a URL over HTTP(S) into a destination directory."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, transport: httpx.BaseTransport | None = None):
        self.timeout = timeout
        self.transport = transport

    def _download(self, url: str, target: Path) -> None:
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport, follow_redirects=True) as client:
                with client.stream("GET", url) as response:
                    response.raise_for_status()
                    with open(target, "wb") as file:
                        for chunk in response.iter_bytes(chunk_size=_CHUNK_SIZE):
                            file.write(chunk)
        except httpx.HTTPError as exc:
            msg = f"Unable to download '{url}': {exc}"
            raise FetchError(msg) from exc
        except OSError as exc:
            msg = f"Unable to write download of '{url}' to '{target}': {exc}"
            raise FetchError(msg) from exc

    def fetch(self, destination: Path, url: str) -> None:
        """Download ``url`` and unpack it into ``destination``.

        Raises:
            FetchError: If the download, the archive detection or the extraction fails.
        """
        filename = filename_from_url(url)
        with tempfile.TemporaryDirectory(prefix="verman_dl_") as tmp_dir:
            download_path = Path(tmp_dir) / filename
            logger.debug("Downloading %s", url)
            self._download(url, download_path)

            try:
                kind = detect_archive(download_path)
                logger.debug("Unpacking %s as %s into %s", filename, kind, destination)
                match kind:
                    case ArchiveKind.ZIP:
                        extract_zip(download_path, destination)
                    case ArchiveKind.TAR:
                        extract_tar(download_path, destination)
                    case ArchiveKind.GZIP:
                        extract_gzip(download_path, destination)
                    case ArchiveKind.FILE:
                        target = destination / filename
                        shutil.copyfile(download_path, target)
                        _make_executable(target)
            except (OSError, EOFError, zipfile.BadZipFile, tarfile.TarError) as exc:
                msg = f"Unable to unpack '{filename}' into '{destination}': {exc}"
                raise FetchError(msg) from exc
