"""Resolution of release tags into version catalogs.

Maps remote releases (tag + assets) or installed release directories to a
``VersionCatalog`` filtered by a semver constraint and by the naming strategy
for the target platform, and selects the latest entry of a catalog.
"""

import logging
from collections.abc import Iterable
from pathlib import Path

from verman.release.models import RemoteRelease, VersionCatalog
from verman.release.options import Options
from verman.release.semver import Constraint, parse_constraint, parse_version_tag, sort_keys, version_satisfies

logger = logging.getLogger(__name__)


def _parse_optional_constraint(constraint: str) -> Constraint | None:
    if not constraint.strip():
        return None
    return parse_constraint(constraint)


def _tag_matches(tag: str, constraint: Constraint | None) -> bool:
    """Whether a tag passes the constraint; non-semver tags never pass a constraint."""
    if constraint is None:
        return True
    version = parse_version_tag(tag)
    if version is None:
        logger.debug("Skipping tag '%s': not a semantic version", tag)
        return False
    return version_satisfies(version, constraint)


def resolve_remote(
    releases: Iterable[RemoteRelease],
    constraint: str,
    options: Options,
) -> VersionCatalog:
    """Build the catalog of remote releases with an asset for the target platform.

    A release is kept when its tag satisfies the constraint (any tag when the
    constraint is empty) and one of its assets is named, case-insensitively,
    as the naming strategy expects. The first matching asset wins.

    Args:
        releases: Releases as listed by the hosting provider, in listing order.
        constraint: Semver range expression; empty means unconstrained.
        options: Target platform and naming strategy.

    Returns:
        Mapping of original tag to asset download URL.

    Raises:
        InvalidConstraintError: If the constraint is not a valid range expression.
    """
    parsed_constraint = _parse_optional_constraint(constraint)
    catalog: VersionCatalog = {}

    for release in releases:
        if not _tag_matches(release.tag, parsed_constraint):
            continue

        expected = options.asset_name(release.tag).lower()
        if not expected:
            logger.debug("No asset name for '%s' on %s/%s", release.tag, options.os, options.arch)
            continue

        for asset in release.assets:
            if asset.name.lower() == expected:
                catalog[release.tag] = asset.url
                break
        else:
            logger.debug("Release '%s' has no asset named '%s'", release.tag, expected)

    logger.debug("Resolved %d remote release(s) for constraint '%s'", len(catalog), constraint)
    return catalog


def resolve_installed(
    entries: Iterable[str],
    constraint: str,
    options: Options,
) -> VersionCatalog:
    """Build the catalog of installed releases from release directory names.

    The executable path is constructed, not checked: an entry only means a
    directory matching the constraint exists under ``options.releases_path``.

    Args:
        entries: Directory names under the releases root, each a candidate tag.
        constraint: Semver range expression; empty means unconstrained.
        options: Target platform, naming strategy and releases root.

    Returns:
        Mapping of original tag to expected executable path.

    Raises:
        InvalidConstraintError: If the constraint is not a valid range expression.
    """
    parsed_constraint = _parse_optional_constraint(constraint)
    catalog: VersionCatalog = {}

    for entry in entries:
        if not _tag_matches(entry, parsed_constraint):
            continue
        catalog[entry] = str(Path(options.releases_path) / entry / options.exe_name(entry))

    logger.debug("Resolved %d installed version(s) for constraint '%s'", len(catalog), constraint)
    return catalog


def latest(catalog: VersionCatalog) -> tuple[str, str] | None:
    """Pick the highest semantic version of a catalog.

    Args:
        catalog: A remote or installed catalog.

    Returns:
        ``(tag, location)`` for the newest version, or None when no key parses.
    """
    ordered = sort_keys(catalog)
    if not ordered:
        return None
    tag = ordered[-1]
    return tag, catalog[tag]
