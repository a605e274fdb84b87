"""Shared fixtures: options for the fake-service repository and in-memory collaborators."""

import logging
from collections.abc import Iterator, Sequence
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from verman._utils.log_utils import LOGGER_NAME
from verman.config.settings import Settings
from verman.release.exceptions import FetchError, ReleaseListError
from verman.release.models import ReleaseAsset, RemoteRelease
from verman.release.options import NamingStrategy, Options


def fake_service_name(version: str, os_name: str, arch: str) -> str:
    match os_name:
        case "darwin":
            return "fake-service-osx"
        case "linux":
            return "fake-service-linux"
        case "windows":
            return "fake-service.exe"
    return ""


def make_release(tag: str, *asset_names: str) -> RemoteRelease:
    assets = [ReleaseAsset(name=name, url=f"https://example.com/download/{tag}/{name}") for name in asset_names]
    return RemoteRelease(tag=tag, assets=assets)


class StaticReleaseLister:
    def __init__(self, releases: Sequence[RemoteRelease] = (), error: Exception | None = None):
        self.releases = list(releases)
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def list_releases(self, organization: str, repository: str) -> list[RemoteRelease]:
        self.calls.append((organization, repository))
        if self.error is not None:
            raise self.error
        return self.releases


class RecordingFetcher:
    """Writes a file named after the last URL segment, or fails with FetchError."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: list[tuple[Path, str]] = []

    def fetch(self, destination: Path, url: str) -> None:
        self.calls.append((destination, url))
        if self.fail:
            msg = f"Unable to download '{url}'"
            raise FetchError(msg)
        (destination / url.rsplit("/", maxsplit=1)[-1]).write_bytes(b"#!/bin/sh\n")


@pytest.fixture
def releases_path(tmp_path: Path) -> Path:
    path = tmp_path / "releases"
    path.mkdir()
    return path


@pytest.fixture
def options(releases_path: Path) -> Options:
    return Options(
        organization="nicholasjackson",
        repository="fake-service",
        os="linux",
        arch="x64",
        naming=NamingStrategy.single(fake_service_name),
        releases_path=releases_path,
    )


@pytest.fixture
def fake_service_releases() -> list[RemoteRelease]:
    return [
        make_release("v0.14.1", "fake-service-linux", "fake-service-osx", "fake-service.exe"),
        make_release("v0.13.0-beta", "fake-service-linux"),
        make_release("v0.12.2", "Fake-Service-Linux", "fake-service-osx"),
        make_release("v0.12.1", "fake-service-osx"),
        make_release("nightly", "fake-service-linux"),
    ]


@pytest.fixture
def release_lister(fake_service_releases: list[RemoteRelease]) -> StaticReleaseLister:
    return StaticReleaseLister(fake_service_releases)


@pytest.fixture
def failing_release_lister() -> StaticReleaseLister:
    return StaticReleaseLister(error=ReleaseListError("Unable to list GitHub releases for 'nicholasjackson/fake-service': HTTP 500"))


@pytest.fixture
def fetcher() -> RecordingFetcher:
    return RecordingFetcher()


@pytest.fixture
def release_factory():
    """Build a RemoteRelease from a tag and asset names."""
    return make_release


@pytest.fixture
def lister_factory():
    """Build a ReleaseLister returning fixed releases or raising an error."""
    return StaticReleaseLister


@pytest.fixture
def fetcher_factory():
    return RecordingFetcher


@pytest.fixture(autouse=True)
def reset_verman_logger() -> Iterator[None]:
    """Undo CLI logging setup so caplog sees records from every test."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


PROJECT_TOML = """\
[release]
organization = "nicholasjackson"
repository = "fake-service"
os = "linux"
arch = "amd64"

[release.assets]
linux = "fake-service-linux"
darwin = "fake-service-osx"
"windows/amd64" = "fake-service.exe"
"""


@pytest.fixture
def project_config(tmp_path: Path, mocker: MockerFixture, release_lister: StaticReleaseLister, fetcher: RecordingFetcher) -> Path:
    """Write a verman.toml and wire the CLI to the in-memory lister and fetcher.

    Installed releases land under ``tmp_path/releases/nicholasjackson/fake-service``.
    """
    config_path = tmp_path / "verman.toml"
    config_path.write_text(PROJECT_TOML, encoding="utf-8")

    mocker.patch(
        "verman.sources.registry.load_settings",
        return_value=Settings(api_url="https://api.example.com", releases_root=tmp_path / "releases"),
    )
    mocker.patch("verman.sources.registry.GitHubReleaseLister", return_value=release_lister)
    mocker.patch("verman.sources.registry.HttpFetcher", return_value=fetcher)
    return config_path
