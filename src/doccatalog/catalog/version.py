"""Version ordering for component versions (newest first)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cmp_to_key
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from doccatalog.catalog.types import ComponentVersion

__all__ = [
    "SemVer",
    "parse_semver",
    "compare_semver",
    "compare_versions_desc",
    "is_prerelease",
    "sort_versions",
]

_IDENT = r"(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
_SEMVER_RX = re.compile(
    r"^v?(0|[1-9]\d*)(?:\.(0|[1-9]\d*))?(?:\.(0|[1-9]\d*))?"
    rf"(?:-({_IDENT}(?:\.{_IDENT})*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)


@dataclass(frozen=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()
    build: tuple[str, ...] = ()


def parse_semver(version: str) -> SemVer | None:
    """Parse a semantic version, tolerating a leading ``v`` and a missing minor or patch.

    Returns None if the value is not a semantic version.
    """
    match = _SEMVER_RX.match(version)
    if not match:
        return None
    major, minor, patch, prerelease, build = match.groups()
    return SemVer(
        major=int(major),
        minor=int(minor or 0),
        patch=int(patch or 0),
        prerelease=tuple(prerelease.split(".")) if prerelease else (),
        build=tuple(build.split(".")) if build else (),
    )


def _compare_identifiers(a: str, b: str) -> int:
    a_numeric, b_numeric = a.isdigit(), b.isdigit()
    if a_numeric and b_numeric:
        return (int(a) > int(b)) - (int(a) < int(b))
    if a_numeric:
        return -1
    if b_numeric:
        return 1
    return (a > b) - (a < b)


def compare_semver(a: SemVer, b: SemVer) -> int:
    """Compare two versions by SemVer 2.0 precedence (ascending). Build metadata is ignored."""
    core_a = (a.major, a.minor, a.patch)
    core_b = (b.major, b.minor, b.patch)
    if core_a != core_b:
        return 1 if core_a > core_b else -1
    if not a.prerelease or not b.prerelease:
        # a version without a prerelease tag outranks one with it
        return (not a.prerelease) - (not b.prerelease)
    for ident_a, ident_b in zip(a.prerelease, b.prerelease):
        result = _compare_identifiers(ident_a, ident_b)
        if result:
            return result
    return (len(a.prerelease) > len(b.prerelease)) - (len(a.prerelease) < len(b.prerelease))


def compare_versions_desc(a: str, b: str) -> int:
    """Compare two version strings so that the more recent one sorts first.

    Semantic versions compare by precedence. A non-semantic version is
    considered more recent than a semantic one. Two non-semantic versions
    compare as raw strings in descending lexical order.
    """
    if a == b:
        return 0
    semver_a = parse_semver(a)
    semver_b = parse_semver(b)
    if semver_a is not None and semver_b is not None:
        result = compare_semver(semver_b, semver_a)
        if result:
            return result
    elif semver_a is not None:
        return 1
    elif semver_b is not None:
        return -1
    return -1 if a > b else 1


def is_prerelease(component_version: ComponentVersion) -> bool:
    """Whether a version belongs to the prerelease partition for ordering purposes."""
    if component_version.prerelease:
        return True
    version = component_version.version
    return bool(version) and parse_semver(version) is None


def sort_versions(versions: Iterable[ComponentVersion]) -> list[ComponentVersion]:
    """Order component versions newest first.

    Prereleases (flagged, or non-empty and non-semantic) come first, then
    releases, each partition ordered by :func:`compare_versions_desc`. A
    versionless entry that is not flagged as a prerelease is placed between
    the two partitions, which puts it first when there are no prereleases.
    """
    versions = list(versions)
    versionless = next((cv for cv in versions if cv.version == "" and not cv.prerelease), None)
    key = cmp_to_key(lambda x, y: compare_versions_desc(x.version, y.version))
    prereleases = sorted((cv for cv in versions if cv is not versionless and is_prerelease(cv)), key=key)
    releases = sorted((cv for cv in versions if cv is not versionless and not is_prerelease(cv)), key=key)
    if versionless is not None:
        prereleases.append(versionless)
    return prereleases + releases
