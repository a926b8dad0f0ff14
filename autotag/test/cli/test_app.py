from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from autotag.cli import app as app_mod
from autotag.cli.context import read_action_inputs
from autotag.core.errors import ErrorCode
from autotag.core.result import Err, Ok
from autotag.services.release.errors import ReleaseError
from autotag.services.release.memory import InMemoryRepositoryClient

runner = CliRunner()


def _install_client(
    monkeypatch: pytest.MonkeyPatch, client: InMemoryRepositoryClient
) -> dict[str, object]:
    seen: dict[str, object] = {}

    def fake_client(*, repo: str, workspace_root: Path, token: str | None = None):
        seen["repo"] = repo
        seen["token"] = token
        return client

    monkeypatch.setattr(app_mod, "GhRepositoryClient", fake_client)
    monkeypatch.setattr(app_mod, "ensure_gh_available", lambda: Ok(None))
    return seen


def test_read_action_inputs_accepts_runner_spelling() -> None:
    env = {
        "INPUT_DRY-RUN": "false",
        "INPUT_RELEASE_BRANCH": "^trunk$",
        "INPUT_GITHUB-TOKEN": "t",
        "UNRELATED": "x",
    }
    assert read_action_inputs(env) == {
        "dry-run": "false",
        "release-branch": "^trunk$",
        "github-token": "t",
    }


def test_run_applies_tag_and_writes_outputs(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    client = InMemoryRepositoryClient.build(
        tags=[("v1.0.0", "t1")],
        branches={"main": "h2"},
        history=[("h2", "new flag #minor"), ("t1", "release")],
    )
    seen = _install_client(monkeypatch, client)
    out = tmp_path / "out"

    result = runner.invoke(
        app_mod.app,
        ["run"],
        env={
            "GITHUB_REPOSITORY": "o/r",
            "GITHUB_REF": "refs/heads/main",
            "GITHUB_OUTPUT": str(out),
            "INPUT_DRY-RUN": "false",
            "INPUT_GITHUB-TOKEN": "tok",
            "INPUT_VERSION-PREFIX": "v",
        },
    )

    assert result.exit_code == 0, result.output
    assert seen == {"repo": "o/r", "token": "tok"}
    assert client.created == [("v1.1.0", "h2", False)]
    assert out.read_text(encoding="utf-8") == "tag=v1.0.0\nnew-tag=v1.1.0\n"


def test_run_input_override(monkeypatch: pytest.MonkeyPatch) -> None:
    client = InMemoryRepositoryClient.build(tags=[("v2.0.0", "x")], branches={"main": "h1"})
    _install_client(monkeypatch, client)

    result = runner.invoke(
        app_mod.app,
        ["run", "--repo", "o/r", "--ref", "refs/heads/main", "-i", "tag=v2.0.0"],
    )
    assert result.exit_code == 0, result.output
    assert "already exists" in result.output
    assert client.created == []


def test_run_unknown_branch_exits_user_error(monkeypatch: pytest.MonkeyPatch) -> None:
    _install_client(monkeypatch, InMemoryRepositoryClient())
    result = runner.invoke(app_mod.app, ["run", "--repo", "o/r", "--ref", "refs/heads/gone"])
    assert result.exit_code == int(ErrorCode.USER_ERROR)
    assert "unknown branch gone" in result.output


def test_run_upstream_failure_exits_network_error(monkeypatch: pytest.MonkeyPatch) -> None:
    client = InMemoryRepositoryClient.build(branches={"main": "h1"})
    client.failures["list_tags"] = ReleaseError(kind="gh_failed", message="gh api failed")
    _install_client(monkeypatch, client)

    result = runner.invoke(app_mod.app, ["run", "--repo", "o/r", "--ref", "refs/heads/main"])
    assert result.exit_code == int(ErrorCode.NETWORK_ERROR)
    assert "gh api failed" in result.output


def test_run_missing_gh_exits_env_error(monkeypatch: pytest.MonkeyPatch) -> None:
    missing = Err(ReleaseError(kind="gh_missing", message="gh: missing"))
    monkeypatch.setattr(app_mod, "ensure_gh_available", lambda: missing)
    result = runner.invoke(app_mod.app, ["run", "--repo", "o/r", "--ref", "refs/heads/main"])
    assert result.exit_code == int(ErrorCode.ENV_ERROR)


def test_run_rejects_unknown_input_override() -> None:
    result = runner.invoke(app_mod.app, ["run", "--repo", "o/r", "-i", "colour=blue"])
    assert result.exit_code == int(ErrorCode.USER_ERROR)


def test_classify_command() -> None:
    result = runner.invoke(app_mod.app, ["classify", "fixes #12 crash"])
    assert result.exit_code == 0
    assert result.output.strip() == "issue #12"
