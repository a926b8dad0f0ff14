"""Commit history walking and per-commit bump classification."""

from __future__ import annotations

import re
from collections.abc import Iterator

from autotag.core.result import Err, Ok, Result
from autotag.services.release.client import RepositoryClient
from autotag.services.release.errors import ReleaseError
from autotag.services.release.model import BumpLevel, Classification, CommitRecord, IssueRef

_WIP_RE = re.compile(r"#wip\b")
_MAJOR_RE = re.compile(r"#major\b")
_MINOR_RE = re.compile(r"#minor\b")
_ISSUE_RE = re.compile(r"fix(?:es)? #(\d+)\b")


def classify_commit(message: str) -> Classification:
    """Classify one commit message; the first matching rule wins.

    ``#wip`` anywhere suppresses the whole release, so it outranks the
    explicit ``#major`` / ``#minor`` markers. ``fix #n`` / ``fixes #n`` defers
    to the labels of issue n. Anything else is a patch.
    """
    if _WIP_RE.search(message):
        return BumpLevel.NONE
    if _MAJOR_RE.search(message):
        return BumpLevel.MAJOR
    if _MINOR_RE.search(message):
        return BumpLevel.MINOR

    m = _ISSUE_RE.search(message)
    if m is not None and int(m.group(1)) > 0:
        return IssueRef(int(m.group(1)))

    return BumpLevel.PATCH


class IssueLabels:
    """On-demand issue label lookup, cached by issue number for one run."""

    def __init__(self, client: RepositoryClient) -> None:
        self._client = client
        self._cache: dict[int, frozenset[str]] = {}

    def labels(self, number: int) -> Result[frozenset[str], ReleaseError]:
        cached = self._cache.get(number)
        if cached is not None:
            return Ok(cached)

        result = self._client.get_issue_labels(number)
        if isinstance(result, Err):
            return result

        self._cache[number] = result.value
        return result


class CommitWalk:
    """Single-use iterator over history from ``start_sha`` back to ``stop_sha``.

    Pages are fetched lazily. ``stop_sha`` itself is never yielded; without it
    the walk runs until the host returns an empty page. A failed fetch ends the
    iteration and is left in ``error`` for the caller to check.
    """

    def __init__(self, client: RepositoryClient, start_sha: str, stop_sha: str | None) -> None:
        self._client = client
        self._start_sha = start_sha
        self._stop_sha = stop_sha
        self._started = False
        self.error: ReleaseError | None = None

    def __iter__(self) -> Iterator[CommitRecord]:
        if self._started:
            raise RuntimeError("commit walk already consumed")
        self._started = True
        return self._walk()

    def _walk(self) -> Iterator[CommitRecord]:
        page = 1
        while True:
            result = self._client.list_commits(self._start_sha, page=page)
            if isinstance(result, Err):
                self.error = result.error
                return
            if not result.value:
                return

            for commit in result.value:
                if commit.sha == self._stop_sha:
                    return
                yield commit
            page += 1
