from __future__ import annotations

from collections.abc import Iterable, Sequence

from autotag.core.result import Err, Ok, Result
from autotag.output.console import ConsoleProtocol
from autotag.services.release.commits import IssueLabels
from autotag.services.release.errors import ReleaseError
from autotag.services.release.model import BumpLevel, Classification, IssueRef


def aggregate(
    classifications: Iterable[Classification],
    *,
    labels: IssueLabels,
    allowlist: Sequence[str],
    console: ConsoleProtocol,
) -> Result[BumpLevel, ReleaseError]:
    """Fold per-commit classifications into one bump level.

    A single ``NONE`` (work in progress) cancels the release. Otherwise the
    highest explicit marker wins, and issue references only matter when no
    marker raised the level above patch: the first referenced issue carrying
    an allowlisted label makes the release a minor one.
    """
    seen: list[Classification] = list(classifications)
    if not seen:
        return Ok(BumpLevel.NONE)
    if BumpLevel.NONE in seen:
        console.info("work in progress found, avoid tagging")
        return Ok(BumpLevel.NONE)
    if BumpLevel.MAJOR in seen:
        return Ok(BumpLevel.MAJOR)
    if BumpLevel.MINOR in seen:
        return Ok(BumpLevel.MINOR)

    allowed = set(allowlist)
    issues = [c for c in seen if isinstance(c, IssueRef)]
    for issue in issues:
        result = labels.labels(issue.number)
        if isinstance(result, Err):
            return result
        matched = result.value & allowed
        if matched:
            console.info(f"issue #{issue.number} is labelled {', '.join(sorted(matched))}")
            return Ok(BumpLevel.MINOR)

    return Ok(BumpLevel.PATCH)
