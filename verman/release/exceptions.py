class VermanError(Exception):
    """Base exception for all verman release management errors."""

    def __init__(self, message: str = "") -> None:
        self.message = message
        super().__init__(message)


class SemVerError(VermanError):
    """Raised for semver parse failures."""


class InvalidVersionError(SemVerError):
    """Raised when a version string is not valid semver."""


class InvalidConstraintError(SemVerError):
    """Raised when a constraint string is not a valid range expression."""


class ListError(VermanError):
    """Raised when a release or directory listing fails."""


class ReleaseListError(ListError):
    """Raised when the remote release listing fails."""


class DirectoryListError(ListError):
    """Raised when the local releases directory cannot be listed."""


class DirectoryCreateError(VermanError):
    """Raised when the destination directory for a release cannot be created."""


class FetchError(VermanError):
    """Raised when a release download or extraction fails."""


class ConfigError(VermanError):
    pass
