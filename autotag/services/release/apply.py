from __future__ import annotations

from autotag.core.result import Err, Ok, Result
from autotag.output.console import ConsoleProtocol
from autotag.services.release.client import RepositoryClient
from autotag.services.release.errors import ReleaseError
from autotag.services.release.model import BranchRef, Decision


def apply_dry(
    *,
    repo: str,
    branch: BranchRef,
    decision: Decision,
    console: ConsoleProtocol,
) -> Result[None, ReleaseError]:
    if not decision.has_candidate:
        console.info("No tag to apply")
        return Ok(None)
    console.info(f"Dry run. Do not apply {decision.tag} to {repo}@{branch.head_sha[:8]}")
    return Ok(None)


def apply_tag(
    *,
    client: RepositoryClient,
    repo: str,
    branch: BranchRef,
    decision: Decision,
    console: ConsoleProtocol,
) -> Result[None, ReleaseError]:
    if not decision.has_candidate:
        console.info("No tag to apply")
        return Ok(None)

    verb = "move" if decision.existing else "apply new"
    console.info(f"{verb} tag {decision.tag} to {repo}@{branch.head_sha[:8]}")

    result = client.create_tag_ref(decision.tag, branch.head_sha, force=decision.existing)
    if isinstance(result, Err):
        return result

    console.success(f"tagged {branch.name} as {decision.tag}")
    return Ok(None)
