from __future__ import annotations

import semver

from autotag.core.result import Err, Ok, Result
from autotag.services.release.catalog import TagCatalog
from autotag.services.release.errors import ReleaseError
from autotag.services.release.model import BumpLevel
from autotag.services.release.semver import (
    ZERO,
    branch_counter,
    branch_identifier,
    increment,
    with_prerelease,
)


def next_branch_counter(catalog: TagCatalog, version: semver.Version, ident: str) -> int:
    """One past the highest ``<ident>.N`` prerelease of ``version``, or 0."""
    counters: list[int] = []
    for vt in catalog.versions:
        v = vt.version
        if (v.major, v.minor, v.patch) != (version.major, version.minor, version.patch):
            continue
        n = branch_counter(v, ident)
        if n is not None:
            counters.append(n)
    return max(counters) + 1 if counters else 0


def _branch_prerelease(
    start: semver.Version, core: semver.Version, branch_name: str, catalog: TagCatalog
) -> semver.Version:
    ident = branch_identifier(branch_name)
    nxt = with_prerelease(core, ident, next_branch_counter(catalog, core, ident))
    # 1.1.0-rc.1 finalises to 1.1.0, and 1.1.0-feature-x.0 would sort below it.
    if nxt <= start:
        core = core.bump_patch()
        nxt = with_prerelease(core, ident, next_branch_counter(catalog, core, ident))
    return nxt


def compute_next(
    *,
    base: semver.Version | None,
    level: BumpLevel,
    branch_is_release: bool,
    branch_name: str,
    catalog: TagCatalog,
) -> Result[semver.Version, ReleaseError]:
    """Apply ``level`` to ``base`` (``None`` means 0.0.0).

    Off a release branch the result carries a ``<branch>.<n>`` prerelease, so
    branches cut from the same base never collide and re-runs on one branch
    climb the counter. When that prerelease would not sort above a prerelease
    base, the core moves on to the next patch.
    """
    if level == BumpLevel.NONE:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message="cannot compute a version for bump level none",
            )
        )

    start = base if base is not None else ZERO
    nxt = increment(start, level)

    if not branch_is_release:
        nxt = _branch_prerelease(start, nxt, branch_name, catalog)

    if nxt <= start:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"version did not advance: {start} -> {nxt}",
            )
        )
    return Ok(nxt)
