from __future__ import annotations

import re
from collections.abc import Sequence

from autotag.core.result import Err, Ok, Result
from autotag.output.console import ConsoleProtocol
from autotag.services.release.client import RepositoryClient
from autotag.services.release.errors import ReleaseError
from autotag.services.release.model import BranchRef, RunContext
from autotag.services.release.params import Parameters, split_list, validate_patterns

_HEADS_PREFIX = "refs/heads/"


def branch_from_ref(ref: str) -> str | None:
    """``refs/heads/release/1.2`` -> ``release/1.2``; other refs -> None."""
    if not ref.startswith(_HEADS_PREFIX):
        return None
    name = ref[len(_HEADS_PREFIX) :]
    return name or None


def is_release_branch(
    branch_name: str, patterns: str | Sequence[str]
) -> Result[bool, ReleaseError]:
    """True iff any pattern matches the branch name (patterns are OR-combined).

    A comma-separated string is split and trimmed first. A pattern that does
    not compile is an ``invalid_input`` error.
    """
    checked = validate_patterns(split_list(patterns) if isinstance(patterns, str) else patterns)
    if isinstance(checked, Err):
        return checked
    return Ok(any(re.search(p, branch_name) is not None for p in checked.value))


def resolve_branch(
    *,
    client: RepositoryClient,
    params: Parameters,
    context: RunContext,
    console: ConsoleProtocol,
) -> Result[BranchRef, ReleaseError]:
    forced = params.branch is not None
    name = params.branch if params.branch is not None else branch_from_ref(context.ref)
    if name is None:
        return Err(
            ReleaseError(
                kind="branch_not_found",
                message=f"cannot derive a branch from ref {context.ref}",
                hint="Set the branch input when running outside a branch push.",
            )
        )

    console.info(f"check {'forced ' if forced else ''}branch {name}")

    refs = client.list_matching_refs(f"heads/{name}")
    if isinstance(refs, Err):
        return refs

    # matching-refs is a prefix query: heads/feat also returns heads/feature.
    wanted = f"{_HEADS_PREFIX}{name}"
    for ref in refs.value:
        if ref.ref == wanted:
            return Ok(BranchRef(name=name, head_sha=ref.sha))

    return Err(
        ReleaseError(
            kind="branch_not_found",
            message=f"unknown {'forced ' if forced else ''}branch {name} provided",
            hint=context.repo,
        )
    )
