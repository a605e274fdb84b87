import pytest

from verman.release.exceptions import (
    ConfigError,
    DirectoryCreateError,
    DirectoryListError,
    FetchError,
    InvalidConstraintError,
    InvalidVersionError,
    ListError,
    ReleaseListError,
    SemVerError,
    VermanError,
)


class TestExceptions:
    """Tests for the verman.release.exceptions hierarchy."""

    def test_base_exception_message(self):
        exc = VermanError("something went wrong")
        assert exc.message == "something went wrong"
        assert str(exc) == "something went wrong"

    def test_base_exception_default_message(self):
        exc = VermanError()
        assert exc.message == ""

    @pytest.mark.parametrize(
        ("child_cls", "parent_cls"),
        [
            (SemVerError, VermanError),
            (InvalidVersionError, SemVerError),
            (InvalidConstraintError, SemVerError),
            (ListError, VermanError),
            (ReleaseListError, ListError),
            (DirectoryListError, ListError),
            (DirectoryCreateError, VermanError),
            (FetchError, VermanError),
            (ConfigError, VermanError),
        ],
    )
    def test_subclass_hierarchy(self, child_cls: type, parent_cls: type):
        exc = child_cls("test")
        assert isinstance(exc, parent_cls)

    def test_constraint_and_version_errors_are_distinct(self):
        assert not issubclass(InvalidConstraintError, InvalidVersionError)
        assert not issubclass(InvalidVersionError, InvalidConstraintError)

    def test_phases_are_distinguishable(self):
        """Listing, directory creation and fetching failures do not catch each other."""
        with pytest.raises(FetchError):
            try:
                raise FetchError("download failed")
            except (ListError, DirectoryCreateError):
                pytest.fail("FetchError caught as another phase")
