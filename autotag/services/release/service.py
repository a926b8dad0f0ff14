"""One tagging run, end to end.

Idle -> BranchResolved -> TagsCataloged -> BumpDecided -> Reported|Applied.
Only the non-dry-run path with a candidate mutates the repository.
"""

from __future__ import annotations

from dataclasses import dataclass

from autotag.core.result import Err, Ok, Result
from autotag.output.console import ConsoleProtocol
from autotag.services.release.branch import resolve_branch
from autotag.services.release.catalog import fetch_catalog
from autotag.services.release.client import RepositoryClient
from autotag.services.release.errors import ReleaseError
from autotag.services.release.model import BranchRef, Decision, RunContext
from autotag.services.release.outputs import ActionOutputs
from autotag.services.release.params import Parameters
from autotag.services.release.strategy import choose_tagging_style


@dataclass(frozen=True, slots=True)
class RunReport:
    branch: BranchRef
    strategy: str
    decision: Decision
    applied: bool


def run_release(
    *,
    params: Parameters,
    client: RepositoryClient,
    context: RunContext,
    console: ConsoleProtocol,
    outputs: ActionOutputs,
) -> Result[RunReport, ReleaseError]:
    console.info(f"run for {context.repo}")

    branch = resolve_branch(client=client, params=params, context=context, console=console)
    if isinstance(branch, Err):
        return branch
    console.info(f"branch confirmed, active branch name is {branch.value.name}")

    catalog = fetch_catalog(client, prefix=params.prefix)
    if isinstance(catalog, Err):
        return catalog

    handler = choose_tagging_style(
        params=params,
        client=client,
        repo=context.repo,
        branch=branch.value,
        console=console,
    )

    decision = handler.check(catalog.value)
    if isinstance(decision, Err):
        return decision

    for key, value in (("tag", decision.value.base), ("new-tag", decision.value.tag)):
        written = outputs.set(key, value)
        if isinstance(written, Err):
            return written

    applied = handler.apply(decision.value)
    if isinstance(applied, Err):
        return applied

    return Ok(
        RunReport(
            branch=branch.value,
            strategy=handler.strategy,
            decision=decision.value,
            applied=decision.value.has_candidate and not params.dry_run,
        )
    )
