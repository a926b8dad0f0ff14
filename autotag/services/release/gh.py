"""``RepositoryClient`` backed by the GitHub CLI (``gh api``)."""

from __future__ import annotations

import json
import os
import shutil
from pathlib import Path
from time import sleep

from autotag.core.result import Err, Ok, Result
from autotag.core.structured import as_obj_list, as_str_dict, get_raw_str, get_str, get_table
from autotag.platform.process import ProcessError
from autotag.platform.process import run as run_process
from autotag.services.release.errors import ReleaseError, ReleaseErrorKind
from autotag.services.release.model import CommitRecord, GitRef, Tag
from autotag.services.release.timeouts import (
    GH_PAGE_SIZE,
    GH_READ_RETRY_ATTEMPTS,
    GH_READ_RETRY_DELAY_SECONDS,
    GH_TIMEOUT_SECONDS,
)


def _is_transient_gh_error(error: ProcessError) -> bool:
    text = f"{error.stderr}\n{error.stdout}".lower()
    markers = (
        "timed out",
        "timeout",
        "connection reset",
        "connection refused",
        "temporarily unavailable",
        "service unavailable",
        "bad gateway",
        "gateway timeout",
        "network is unreachable",
        "http 429",
        "http 500",
        "http 502",
        "http 503",
        "http 504",
    )
    if error.returncode == -1 and "timed out" in text:
        return True
    return any(marker in text for marker in markers)


def _is_not_found(error: ProcessError) -> bool:
    return "http 404" in f"{error.stderr}\n{error.stdout}".lower()


def _error_kind(error: ProcessError) -> ReleaseErrorKind:
    text = f"{error.stderr}\n{error.stdout}".lower()
    if "http 401" in text or "gh auth login" in text:
        return "gh_auth_required"
    return "gh_failed"


def ensure_gh_available() -> Result[None, ReleaseError]:
    if shutil.which("gh") is None:
        return Err(
            ReleaseError(
                kind="gh_missing",
                message="gh: missing",
                hint="Install GitHub CLI: https://cli.github.com/",
            )
        )
    return Ok(None)


class GhRepositoryClient:
    """Talks to one repository through ``gh api``.

    Reads are retried on transient transport errors. The token, when given,
    is passed to gh as ``GH_TOKEN`` and never written to the command line.
    """

    def __init__(
        self,
        *,
        repo: str,
        workspace_root: Path,
        token: str | None = None,
        timeout: float = GH_TIMEOUT_SECONDS,
        retry_attempts: int = GH_READ_RETRY_ATTEMPTS,
    ) -> None:
        self.repo = repo
        self._cwd = workspace_root
        self._env = {**os.environ, "GH_TOKEN": token} if token else None
        self._timeout = timeout
        self._retry_attempts = retry_attempts

    # -- plumbing ---------------------------------------------------------

    def _read(self, endpoint: str) -> Result[str, ProcessError]:
        cmd = ["gh", "api", endpoint]
        for attempt in range(max(1, self._retry_attempts) - 1):
            result = run_process(cmd, cwd=self._cwd, env=self._env, timeout=self._timeout)
            if isinstance(result, Ok) or not _is_transient_gh_error(result.error):
                return result
            sleep(GH_READ_RETRY_DELAY_SECONDS * (attempt + 1))
        return run_process(cmd, cwd=self._cwd, env=self._env, timeout=self._timeout)

    def _api_json(self, endpoint: str) -> Result[object, ReleaseError]:
        result = self._read(endpoint)
        if isinstance(result, Err):
            return Err(self._release_error(result.error, f"gh api failed: {endpoint}"))
        return self._decode(result.value, endpoint)

    def _decode(self, text: str, endpoint: str) -> Result[object, ReleaseError]:
        try:
            obj: object = json.loads(text)
        except json.JSONDecodeError as e:
            return Err(
                ReleaseError(
                    kind="gh_failed",
                    message=f"gh api returned invalid JSON: {e}",
                    hint=endpoint,
                )
            )
        return Ok(obj)

    def _api_list(self, endpoint: str) -> Result[list[object], ReleaseError]:
        obj = self._api_json(endpoint)
        if isinstance(obj, Err):
            return obj
        raw = as_obj_list(obj.value)
        if raw is None:
            return Err(
                ReleaseError(kind="gh_failed", message=f"unexpected list payload: {endpoint}")
            )
        return Ok(raw)

    def _release_error(self, error: ProcessError, message: str) -> ReleaseError:
        return ReleaseError(
            kind=_error_kind(error),
            message=message,
            hint=error.stderr.strip() or None,
        )

    # -- RepositoryClient -------------------------------------------------

    def list_tags(self) -> Result[list[Tag], ReleaseError]:
        out: list[Tag] = []
        page = 1
        while True:
            raw = self._api_list(f"repos/{self.repo}/tags?per_page={GH_PAGE_SIZE}&page={page}")
            if isinstance(raw, Err):
                return raw

            for item in raw.value:
                d = as_str_dict(item)
                if d is None:
                    continue
                name = get_str(d, "name")
                commit = get_table(d, "commit")
                sha = get_str(commit, "sha") if commit is not None else None
                if name is None or sha is None:
                    continue
                out.append(Tag(name=name, sha=sha))

            if len(raw.value) < GH_PAGE_SIZE:
                return Ok(out)
            page += 1

    def list_matching_refs(self, ref: str) -> Result[list[GitRef], ReleaseError]:
        raw = self._api_list(f"repos/{self.repo}/git/matching-refs/{ref}")
        if isinstance(raw, Err):
            return raw

        out: list[GitRef] = []
        for item in raw.value:
            d = as_str_dict(item)
            if d is None:
                continue
            name = get_str(d, "ref")
            obj = get_table(d, "object")
            sha = get_str(obj, "sha") if obj is not None else None
            if name is None or sha is None:
                continue
            out.append(GitRef(ref=name, sha=sha))
        return Ok(out)

    def list_commits(self, sha: str, *, page: int) -> Result[list[CommitRecord], ReleaseError]:
        raw = self._api_list(
            f"repos/{self.repo}/commits?sha={sha}&per_page={GH_PAGE_SIZE}&page={page}"
        )
        if isinstance(raw, Err):
            return raw

        out: list[CommitRecord] = []
        for item in raw.value:
            d = as_str_dict(item)
            if d is None:
                continue
            commit_sha = get_str(d, "sha")
            commit_tbl = get_table(d, "commit")
            if commit_sha is None or commit_tbl is None:
                continue
            message = get_raw_str(commit_tbl, "message") or ""
            out.append(CommitRecord(sha=commit_sha, message=message))
        return Ok(out)

    def get_issue_labels(self, number: int) -> Result[frozenset[str], ReleaseError]:
        endpoint = f"repos/{self.repo}/issues/{number}"
        result = self._read(endpoint)
        if isinstance(result, Err):
            # A "fixes #n" pointing at a missing issue carries no labels.
            if _is_not_found(result.error):
                return Ok(frozenset())
            return Err(self._release_error(result.error, f"failed to load issue #{number}"))

        obj = self._decode(result.value, endpoint)
        if isinstance(obj, Err):
            return obj

        data = as_str_dict(obj.value)
        labels = as_obj_list(data.get("labels")) if data is not None else None
        if labels is None:
            return Ok(frozenset())

        names: set[str] = set()
        for label in labels:
            # The API returns objects, but string labels are accepted on input.
            if isinstance(label, str):
                names.add(label)
                continue
            ld = as_str_dict(label)
            name = get_str(ld, "name") if ld is not None else None
            if name is not None:
                names.add(name)
        return Ok(frozenset(names))

    def create_tag_ref(self, tag: str, sha: str, *, force: bool) -> Result[None, ReleaseError]:
        if force:
            endpoint = f"repos/{self.repo}/git/refs/tags/{tag}"
            cmd = ["gh", "api", "-X", "PATCH", endpoint, "-f", f"sha={sha}", "-F", "force=true"]
        else:
            endpoint = f"repos/{self.repo}/git/refs"
            cmd = [
                "gh",
                "api",
                "-X",
                "POST",
                endpoint,
                "-f",
                f"ref=refs/tags/{tag}",
                "-f",
                f"sha={sha}",
            ]

        result = run_process(cmd, cwd=self._cwd, env=self._env, timeout=self._timeout)
        if isinstance(result, Err):
            err = self._release_error(result.error, f"failed to create tag {tag}")
            if err.kind == "gh_failed":
                err = ReleaseError(kind="tag_create_failed", message=err.message, hint=err.hint)
            return Err(err)
        return Ok(None)
