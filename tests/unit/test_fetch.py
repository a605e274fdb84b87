from pathlib import Path

import pytest

from verman.release.exceptions import DirectoryCreateError, FetchError
from verman.release.fetch import fetch_release, get_release_dir
from verman.release.options import Options


class TestFetchRelease:
    """Tests for verman.release.fetch: the fetcher is an in-memory substitute."""

    def test_creates_release_dir_and_returns_expected_path(self, options: Options, releases_path: Path, fetcher):
        url = "https://example.com/download/v0.12.2/fake-service-linux"

        path = fetch_release("v0.12.2", url, options, fetcher)

        assert path == releases_path / "v0.12.2" / "fake-service-linux"
        assert path.is_file()
        assert fetcher.calls == [(releases_path / "v0.12.2", url)]

    def test_creates_missing_parents(self, options: Options, tmp_path: Path, fetcher):
        nested = options.model_copy(update={"releases_path": tmp_path / "a" / "b" / "c"})

        fetch_release("v1.0.0", "https://example.com/x/fake-service-linux", nested, fetcher)

        assert (tmp_path / "a" / "b" / "c" / "v1.0.0").is_dir()

    def test_returned_path_is_a_prediction(self, options: Options, releases_path: Path, fetcher):
        """The fetcher may write a differently named file; the predicted path is still returned."""
        path = fetch_release("v1.0.0", "https://example.com/x/other-name.bin", options, fetcher)

        assert path == releases_path / "v1.0.0" / "fake-service-linux"
        assert not path.exists()
        assert (releases_path / "v1.0.0" / "other-name.bin").is_file()

    def test_existing_release_dir_is_reused(self, options: Options, releases_path: Path, fetcher):
        (releases_path / "v1.0.0").mkdir()
        fetch_release("v1.0.0", "https://example.com/x/fake-service-linux", options, fetcher)
        assert len(fetcher.calls) == 1

    def test_directory_collision_with_file(self, options: Options, releases_path: Path, fetcher):
        (releases_path / "v1.0.0").write_text("not a directory")

        with pytest.raises(DirectoryCreateError, match="Unable to create release directory"):
            fetch_release("v1.0.0", "https://example.com/x/fake-service-linux", options, fetcher)
        assert fetcher.calls == []

    def test_releases_root_is_a_file(self, options: Options, tmp_path: Path, fetcher):
        root_file = tmp_path / "root-file"
        root_file.write_text("")
        broken = options.model_copy(update={"releases_path": root_file})

        with pytest.raises(DirectoryCreateError):
            fetch_release("v1.0.0", "https://example.com/x/fake-service-linux", broken, fetcher)

    def test_fetch_error_propagates_and_leaves_directory(self, options: Options, releases_path: Path, fetcher_factory):
        failing = fetcher_factory(fail=True)

        with pytest.raises(FetchError):
            fetch_release("v1.0.0", "https://example.com/x/fake-service-linux", options, failing)

        assert len(failing.calls) == 1
        assert (releases_path / "v1.0.0").is_dir()

    def test_get_release_dir(self, options: Options, releases_path: Path):
        assert get_release_dir("v0.14.1", options) == releases_path / "v0.14.1"
