from __future__ import annotations

from autotag.core.result import Err, Ok
from autotag.output.console import MockConsole
from autotag.services.release.bump import aggregate
from autotag.services.release.commits import IssueLabels
from autotag.services.release.errors import ReleaseError
from autotag.services.release.memory import InMemoryRepositoryClient
from autotag.services.release.model import BumpLevel, Classification, IssueRef


def _aggregate(
    items: list[Classification],
    client: InMemoryRepositoryClient | None = None,
    allowlist: tuple[str, ...] = ("enhancement",),
):
    return aggregate(
        items,
        labels=IssueLabels(client or InMemoryRepositoryClient()),
        allowlist=allowlist,
        console=MockConsole(),
    )


def test_empty_is_none() -> None:
    assert _aggregate([]) == Ok(BumpLevel.NONE)


def test_any_wip_cancels_release() -> None:
    assert _aggregate([BumpLevel.MAJOR, BumpLevel.NONE, BumpLevel.PATCH]) == Ok(BumpLevel.NONE)


def test_major_wins_regardless_of_order() -> None:
    assert _aggregate([BumpLevel.MAJOR, BumpLevel.MINOR]) == Ok(BumpLevel.MAJOR)
    assert _aggregate([BumpLevel.MINOR, BumpLevel.MAJOR]) == Ok(BumpLevel.MAJOR)


def test_issue_without_allowlisted_label_stays_patch() -> None:
    client = InMemoryRepositoryClient.build(issue_labels={5: ["bug"]})
    assert _aggregate([BumpLevel.PATCH, IssueRef(5)], client) == Ok(BumpLevel.PATCH)


def test_issue_with_allowlisted_label_is_minor() -> None:
    client = InMemoryRepositoryClient.build(issue_labels={5: ["enhancement"]})
    assert _aggregate([BumpLevel.PATCH, IssueRef(5)], client) == Ok(BumpLevel.MINOR)


def test_custom_allowlist() -> None:
    client = InMemoryRepositoryClient.build(issue_labels={5: ["feature"]})
    assert _aggregate([IssueRef(5)], client, ("feature", "epic")) == Ok(BumpLevel.MINOR)


def test_marker_skips_issue_lookups() -> None:
    client = InMemoryRepositoryClient.build(issue_labels={5: ["enhancement"]})
    assert _aggregate([IssueRef(5), BumpLevel.MINOR], client) == Ok(BumpLevel.MINOR)
    assert "get_issue_labels" not in client.calls


def test_repeated_issue_is_looked_up_once() -> None:
    client = InMemoryRepositoryClient.build(issue_labels={5: ["bug"]})
    assert _aggregate([IssueRef(5), IssueRef(5), IssueRef(5)], client) == Ok(BumpLevel.PATCH)
    assert client.calls.count("get_issue_labels") == 1


def test_label_lookup_failure_is_fatal() -> None:
    client = InMemoryRepositoryClient()
    client.failures["get_issue_labels"] = ReleaseError(kind="gh_auth_required", message="401")
    result = _aggregate([IssueRef(9)], client)
    assert isinstance(result, Err)
    assert result.error.kind == "gh_auth_required"


def test_bump_levels_are_ordered_and_print_by_name() -> None:
    assert BumpLevel.NONE < BumpLevel.PATCH < BumpLevel.MINOR < BumpLevel.MAJOR
    assert max(BumpLevel.PATCH, BumpLevel.MAJOR, BumpLevel.MINOR) is BumpLevel.MAJOR
    assert f"{BumpLevel.MINOR}" == "minor"
    assert str(IssueRef(3)) == "issue #3"
