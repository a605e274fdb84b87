# pyright: reportUnknownMemberType=false, reportUnknownVariableType=false, reportUnknownParameterType=false, reportUnknownArgumentType=false
"""Thin typed wrapper around semantic_version for release tag evaluation.

Provides tolerant tag parsing, constraint matching and ordering of version
catalogs keyed by their original tag text.

Note: semantic_version has no type stubs, so Pyright unknown-type checks are
disabled at file level for this wrapper module.
"""

import re
from collections.abc import Iterable, Mapping
from functools import cmp_to_key
from typing import NamedTuple

from semantic_version import SimpleSpec, Version  # type: ignore[import-untyped]

from verman.release.exceptions import InvalidConstraintError, InvalidVersionError, SemVerError

# Release tags in the wild: optional "v", MAJOR[.MINOR[.PATCH]], optional pre-release and build.
_TAG_PATTERN = re.compile(
    r"^[vV]?(?P<major>\d+)(?:\.(?P<minor>\d+))?(?:\.(?P<patch>\d+))?"
    r"(?:-(?P<prerelease>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?"
    r"(?:\+(?P<build>[0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)

_OPERATOR = r"<=|>=|==|!=|~=|<|>|=|\^|~"
_OPERATOR_SPACING = re.compile(rf"({_OPERATOR})\s+")
_V_AFTER_OPERATOR = re.compile(rf"^(?P<op>{_OPERATOR})?[vV](?=\d)")
_CLAUSE_SEPARATOR = re.compile(r"\s*,\s*|\s+")
# "A - B" (spaces required, so "1.0.0-beta" is a pre-release, not a range)
_HYPHEN_RANGE = re.compile(r"(?P<low>[^\s,|]+)\s+-\s+(?P<high>[^\s,|]+)")
_X_WILDCARD = re.compile(r"\b[xX]\b")
_VERSION_CORE = re.compile(r"^[^-+]*")


class ConstraintAlternative(NamedTuple):
    """One ``||``-separated alternative of a constraint."""

    spec: SimpleSpec
    allows_prerelease: bool


Constraint = tuple[ConstraintAlternative, ...]


def parse_version(version_str: str) -> Version:
    """Parse a version string into a semantic_version.Version.

    Accepts a leading 'v' prefix (common in release tags like v1.2.3) and
    fills in missing minor/patch components with zero, so "v1.2" parses as
    1.2.0.

    Args:
        version_str: The version string to parse (e.g. "1.2.3" or "v1.2.3").

    Returns:
        The parsed Version object.

    Raises:
        InvalidVersionError: If the version string is not valid semver.
    """
    match = _TAG_PATTERN.match(version_str.strip())
    if match is None:
        msg = f"Invalid semver version: {version_str!r}"
        raise InvalidVersionError(msg)

    normalized = f"{int(match['major'])}.{int(match['minor'] or 0)}.{int(match['patch'] or 0)}"
    if match["prerelease"]:
        normalized += f"-{match['prerelease']}"
    if match["build"]:
        normalized += f"+{match['build']}"

    try:
        return Version(normalized)
    except ValueError as exc:
        msg = f"Invalid semver version: {version_str!r}"
        raise InvalidVersionError(msg) from exc


def parse_version_tag(tag: str) -> Version | None:
    """Parse a release tag into a Version, returning None if not a valid semver tag.

    Handles tags like "v1.2.3" and "1.2.3", and gracefully ignores non-semver
    tags like "nightly" or "latest".
    """
    try:
        return parse_version(tag)
    except SemVerError:
        return None


def _expand_wildcards(clause: str) -> str:
    # Only the MAJOR.MINOR.PATCH core; an "x" inside a pre-release stays as written.
    core = _VERSION_CORE.match(clause).group()  # type: ignore[union-attr]
    return _X_WILDCARD.sub("*", core) + clause[len(core) :]


def _normalize_alternative(alternative: str) -> str:
    ranged = _HYPHEN_RANGE.sub(r">=\g<low> <=\g<high>", alternative.strip())
    collapsed = _OPERATOR_SPACING.sub(r"\1", ranged)
    clauses = [
        _expand_wildcards(_V_AFTER_OPERATOR.sub(r"\g<op>", clause))
        for clause in _CLAUSE_SEPARATOR.split(collapsed)
        if clause
    ]
    return ",".join(clauses)


def parse_constraint(constraint_str: str) -> Constraint:
    """Parse a constraint string into its semantic_version.SimpleSpec alternatives.

    Clauses follow the SimpleSpec syntax (``^1.2.3``, ``~1.2.3``, ``>=1.0.0,<2.0.0``)
    with a few tolerances found in release tooling: a ``v`` after the operator
    (``~v1.2.0``), ``x``/``X`` wildcards (``1.2.x``, ``^1.x``), hyphen ranges
    (``1.0.0 - 2.0.0`` meaning ``>=1.0.0,<=2.0.0``), whitespace between clauses
    meaning AND (``>= 1.0 < 2.0``) and ``||`` separating alternatives.

    Args:
        constraint_str: The constraint string to parse.

    Returns:
        The tuple of alternatives; a version matches if any alternative does.

    Raises:
        InvalidConstraintError: If the constraint string is not valid.
    """
    alternatives: list[ConstraintAlternative] = []
    for alternative in constraint_str.split("||"):
        normalized = _normalize_alternative(alternative)
        if not normalized:
            msg = f"Invalid semver constraint: {constraint_str!r}"
            raise InvalidConstraintError(msg)
        try:
            spec = SimpleSpec(normalized)
        except ValueError as exc:
            msg = f"Invalid semver constraint: {constraint_str!r}"
            raise InvalidConstraintError(msg) from exc
        alternatives.append(ConstraintAlternative(spec=spec, allows_prerelease="-" in normalized))
    return tuple(alternatives)


def version_satisfies(version: Version, constraint: Constraint) -> bool:
    """Check whether a version satisfies any alternative of a constraint.

    Pre-release versions only match alternatives that themselves name a
    pre-release, so ``~0.12.0`` never selects ``0.13.0-beta`` or ``0.12.5-rc.1``.
    """
    return any(
        alternative.spec.match(version) and (alternative.allows_prerelease or not version.prerelease)
        for alternative in constraint
    )


def check(version: str, constraint: str) -> bool:
    """Check a version string against a constraint string.

    The constraint is validated before the version so a caller can tell which
    side was malformed. An empty constraint matches every valid version.

    Args:
        version: The version or tag text, e.g. ``v0.12.2``.
        constraint: The range expression, e.g. ``~0.12.0``; empty means unconstrained.

    Returns:
        True if the version satisfies the constraint.

    Raises:
        InvalidConstraintError: If the constraint is not a valid range expression.
        InvalidVersionError: If the version does not parse.
    """
    parsed_constraint = parse_constraint(constraint) if constraint.strip() else None
    parsed_version = parse_version(version)
    if parsed_constraint is None:
        return True
    return version_satisfies(parsed_version, parsed_constraint)


def _compare_entries(left: tuple[Version, str], right: tuple[Version, str]) -> int:
    left_version, left_tag = left
    right_version, right_tag = right
    if left_version < right_version:
        return -1
    if left_version > right_version:
        return 1
    # Equal precedence (e.g. "v1.0.0" and "1.0.0"): fall back to the original text.
    return (left_tag > right_tag) - (left_tag < right_tag)


def sort_tags(tags: Iterable[str], descending: bool = False) -> list[str]:
    """Order tags by semver precedence, dropping tags that do not parse.

    Ties between equal-precedence versions are broken by the original tag
    text, so the order is total and the descending result is the exact
    reverse of the ascending one.

    Args:
        tags: Candidate tags in any order.
        descending: Return the newest version first.

    Returns:
        The parseable tags in their original textual form.
    """
    entries: list[tuple[Version, str]] = []
    for tag in tags:
        version = parse_version_tag(tag)
        if version is not None:
            entries.append((version, tag))

    entries.sort(key=cmp_to_key(_compare_entries))
    ordered = [tag for _version, tag in entries]
    if descending:
        ordered.reverse()
    return ordered


def sort_keys(mapping: Mapping[str, object], descending: bool = False) -> list[str]:
    """Order the keys of a version catalog by semver precedence.

    Un-parseable keys are silently dropped. See :func:`sort_tags`.
    """
    return sort_tags(mapping.keys(), descending=descending)
