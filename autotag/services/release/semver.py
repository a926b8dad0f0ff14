"""Semantic version helpers on top of the ``semver`` distribution.

Tag names are cleaned the way release tooling usually does (configured
prefix, a leading ``v`` or ``=``) before parsing. Increments follow the
prerelease-aware rules: a prerelease whose lower components are already zero
is finalised rather than bumped again.
"""

from __future__ import annotations

import re

import semver

from autotag.services.release.model import BumpLevel

ZERO = semver.Version(0, 0, 0)

_LEADING_JUNK_RE = re.compile(r"^[=v]+")
_BRANCH_ID_INVALID_RE = re.compile(r"[^0-9A-Za-z-]")


def clean_tag_name(name: str, *, prefix: str = "") -> str:
    s = name.strip()
    if prefix and s.startswith(prefix):
        s = s[len(prefix) :]
    return _LEADING_JUNK_RE.sub("", s)


def parse_tag_version(name: str, *, prefix: str = "") -> semver.Version | None:
    cleaned = clean_tag_name(name, prefix=prefix)
    if not semver.Version.is_valid(cleaned):
        return None
    return semver.Version.parse(cleaned)


def increment(version: semver.Version, level: BumpLevel) -> semver.Version:
    """Return the next version for ``level``; always strictly greater.

    Raises:
        ValueError: For ``BumpLevel.NONE``, which has no next version.
    """
    pre = version.prerelease is not None
    match level:
        case BumpLevel.MAJOR:
            if pre and version.minor == 0 and version.patch == 0:
                return version.finalize_version()
            return version.bump_major()
        case BumpLevel.MINOR:
            if pre and version.patch == 0:
                return version.finalize_version()
            return version.bump_minor()
        case BumpLevel.PATCH:
            if pre:
                return version.finalize_version()
            return version.bump_patch()
        case _:
            raise ValueError(f"cannot increment by bump level {level}")


def branch_identifier(branch_name: str) -> str:
    """Turn a branch name into a valid prerelease identifier.

    ``feature/x`` becomes ``feature-x``. Purely numeric names lose leading
    zeros, which semver forbids in numeric identifiers.
    """
    ident = _BRANCH_ID_INVALID_RE.sub("-", branch_name.strip()) or "branch"
    if ident.isdigit():
        ident = str(int(ident))
    return ident


def branch_counter(version: semver.Version, ident: str) -> int | None:
    """Return N when ``version`` carries the ``<ident>.N`` prerelease."""
    if version.prerelease is None:
        return None
    m = re.fullmatch(rf"{re.escape(ident)}\.(0|[1-9]\d*)", version.prerelease)
    if m is None:
        return None
    return int(m.group(1))


def with_prerelease(version: semver.Version, ident: str, n: int) -> semver.Version:
    return version.replace(prerelease=f"{ident}.{n}", build=None)


def format_tag(version: semver.Version, *, prefix: str = "") -> str:
    return f"{prefix}{version}"
