"""Tagging strategy selection.

``choose_tagging_style`` binds the run's parameters, client and branch into a
``TaggingHandler`` so the pipeline only passes the catalog to ``check`` and
the resulting decision to ``apply``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from autotag.core.result import Err, Ok, Result
from autotag.output.console import ConsoleProtocol, Style
from autotag.services.release.apply import apply_dry, apply_tag
from autotag.services.release.branch import is_release_branch
from autotag.services.release.bump import aggregate
from autotag.services.release.catalog import TagCatalog
from autotag.services.release.client import RepositoryClient
from autotag.services.release.commits import CommitWalk, IssueLabels, classify_commit
from autotag.services.release.errors import ReleaseError
from autotag.services.release.model import BranchRef, BumpLevel, Classification, Decision
from autotag.services.release.params import Parameters
from autotag.services.release.semver import format_tag
from autotag.services.release.version import compute_next

CheckFn = Callable[[TagCatalog], Result[Decision, ReleaseError]]
ApplyFn = Callable[[Decision], Result[None, ReleaseError]]


@dataclass(frozen=True, slots=True)
class TaggingHandler:
    strategy: str
    check: CheckFn
    apply: ApplyFn


def check_static(
    *,
    tag: str,
    force: bool,
    catalog: TagCatalog,
    console: ConsoleProtocol,
    base: str = "",
) -> Decision:
    """Validate a literal (or computed) tag against the catalog."""
    if catalog.exists(tag):
        console.info(f"tag already exists {tag}")
        if not force:
            return Decision(outcome="tag_exists", base=base)
        console.warning(f"force is set, reusing existing tag {tag}")
        return Decision(outcome="candidate", tag=tag, base=base, existing=True)

    return Decision(outcome="candidate", tag=tag, base=base)


def check_semver(
    *,
    params: Parameters,
    client: RepositoryClient,
    branch: BranchRef,
    catalog: TagCatalog,
    console: ConsoleProtocol,
) -> Result[Decision, ReleaseError]:
    console.info(f"check semver tags before ref: {branch.head_sha}")

    latest = catalog.latest_any()
    release = catalog.latest_release()
    base = release.name if release is not None else ""

    console.info(f"the previous tag of the repository: {latest.name if latest else '(none)'}")
    console.info(f"the previous release tag of the repository: {base or '(none)'}")

    if latest is not None and latest.sha == branch.head_sha:
        console.info("no new commits, avoid tagging")
        return Ok(Decision(outcome="no_change", base=base))

    # Terminate at the previous release tag, or at the root commit.
    walk = CommitWalk(client, branch.head_sha, release.sha if release is not None else None)
    classifications: list[Classification] = []
    for commit in walk:
        c = classify_commit(commit.message)
        console.print(f"  {commit.short_sha} {c} {commit.subject}", Style.DIM)
        classifications.append(c)
    if walk.error is not None:
        return Err(walk.error)

    level = aggregate(
        classifications,
        labels=IssueLabels(client),
        allowlist=params.issue_labels,
        console=console,
    )
    if isinstance(level, Err):
        return level

    if level.value == BumpLevel.NONE:
        console.info("no commit messages or work in progress found, avoid tagging")
        return Ok(Decision(outcome="no_change", base=base))

    release_branch = is_release_branch(branch.name, params.release_branches)
    if isinstance(release_branch, Err):
        return release_branch

    bump = level.value
    if release_branch.value and bump < params.bump:
        bump = params.bump
    console.info(f"commit messages force bump level to {bump}")

    if not release_branch.value:
        console.info(f"{branch.name} is not a release branch, create a prerelease tag")

    nxt = compute_next(
        base=release.version if release is not None else None,
        level=bump,
        branch_is_release=release_branch.value,
        branch_name=branch.name,
        catalog=catalog,
    )
    if isinstance(nxt, Err):
        return nxt

    tag = format_tag(nxt.value, prefix=params.prefix)
    console.info(f"bump tag to {tag}")

    # The computed tag goes through the same collision check as a literal one.
    return Ok(
        check_static(tag=tag, force=params.force, catalog=catalog, console=console, base=base)
    )


def choose_tagging_style(
    *,
    params: Parameters,
    client: RepositoryClient,
    repo: str,
    branch: BranchRef,
    console: ConsoleProtocol,
) -> TaggingHandler:
    """Pick the check and apply functions for this run.

    A literal tag, or any date style, uses the static check; otherwise the
    semver check computes the tag from history. Dry-run swaps the apply step
    for a report.
    """
    check: CheckFn
    if params.is_static:
        literal = params.tag or ""

        def check(catalog: TagCatalog) -> Result[Decision, ReleaseError]:
            latest = catalog.latest_any()
            return Ok(
                check_static(
                    tag=literal,
                    force=params.force,
                    catalog=catalog,
                    console=console,
                    base=latest.name if latest is not None else "",
                )
            )

        strategy = "static"
    else:

        def check(catalog: TagCatalog) -> Result[Decision, ReleaseError]:
            return check_semver(
                params=params, client=client, branch=branch, catalog=catalog, console=console
            )

        strategy = "semver"

    apply: ApplyFn
    if params.dry_run:

        def apply(decision: Decision) -> Result[None, ReleaseError]:
            return apply_dry(repo=repo, branch=branch, decision=decision, console=console)

    else:

        def apply(decision: Decision) -> Result[None, ReleaseError]:
            return apply_tag(
                client=client, repo=repo, branch=branch, decision=decision, console=console
            )

    return TaggingHandler(strategy=strategy, check=check, apply=apply)
