"""In-memory ``RepositoryClient`` for tests and offline experiments."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from autotag.core.result import Err, Ok, Result
from autotag.services.release.errors import ReleaseError
from autotag.services.release.model import CommitRecord, GitRef, Tag


def _no_failures() -> dict[str, ReleaseError]:
    return {}


@dataclass
class InMemoryRepositoryClient:
    """A repository with linear history, newest commit first.

    ``failures`` maps a method name to the error it should return, which is
    how tests simulate upstream outages.
    """

    tags: list[Tag] = field(default_factory=list)
    branches: dict[str, str] = field(default_factory=dict)
    history: list[CommitRecord] = field(default_factory=list)
    issue_labels: dict[int, frozenset[str]] = field(default_factory=dict)
    page_size: int = 100
    failures: dict[str, ReleaseError] = field(default_factory=_no_failures)

    calls: list[str] = field(default_factory=list)
    created: list[tuple[str, str, bool]] = field(default_factory=list)

    @classmethod
    def build(
        cls,
        *,
        tags: Iterable[tuple[str, str]] = (),
        branches: Mapping[str, str] | None = None,
        history: Iterable[tuple[str, str]] = (),
        issue_labels: Mapping[int, Iterable[str]] | None = None,
        page_size: int = 100,
    ) -> InMemoryRepositoryClient:
        return cls(
            tags=[Tag(name=n, sha=s) for n, s in tags],
            branches=dict(branches or {}),
            history=[CommitRecord(sha=s, message=m) for s, m in history],
            issue_labels={k: frozenset(v) for k, v in (issue_labels or {}).items()},
            page_size=page_size,
        )

    def _fail(self, method: str) -> Err[ReleaseError] | None:
        self.calls.append(method)
        error = self.failures.get(method)
        return Err(error) if error is not None else None

    def list_tags(self) -> Result[list[Tag], ReleaseError]:
        if (failed := self._fail("list_tags")) is not None:
            return failed
        return Ok(list(self.tags))

    def list_matching_refs(self, ref: str) -> Result[list[GitRef], ReleaseError]:
        if (failed := self._fail("list_matching_refs")) is not None:
            return failed
        out = [
            GitRef(ref=f"refs/heads/{name}", sha=sha)
            for name, sha in self.branches.items()
            if f"heads/{name}".startswith(ref)
        ]
        return Ok(out)

    def list_commits(self, sha: str, *, page: int) -> Result[list[CommitRecord], ReleaseError]:
        if (failed := self._fail("list_commits")) is not None:
            return failed
        shas = [c.sha for c in self.history]
        if sha not in shas:
            return Ok([])
        reachable = self.history[shas.index(sha) :]
        start = (page - 1) * self.page_size
        return Ok(reachable[start : start + self.page_size])

    def get_issue_labels(self, number: int) -> Result[frozenset[str], ReleaseError]:
        if (failed := self._fail("get_issue_labels")) is not None:
            return failed
        return Ok(self.issue_labels.get(number, frozenset()))

    def create_tag_ref(self, tag: str, sha: str, *, force: bool) -> Result[None, ReleaseError]:
        if (failed := self._fail("create_tag_ref")) is not None:
            return failed
        exists = any(t.name == tag for t in self.tags)
        if exists and not force:
            return Err(
                ReleaseError(kind="tag_create_failed", message=f"Reference already exists: {tag}")
            )
        self.tags = [t for t in self.tags if t.name != tag] + [Tag(name=tag, sha=sha)]
        self.created.append((tag, sha, force))
        return Ok(None)
