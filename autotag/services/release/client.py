"""The whole boundary between the decision core and the hosting platform."""

from __future__ import annotations

from typing import Protocol

from autotag.core.result import Result
from autotag.services.release.errors import ReleaseError
from autotag.services.release.model import CommitRecord, GitRef, Tag


class RepositoryClient(Protocol):
    def list_tags(self) -> Result[list[Tag], ReleaseError]:
        """All tags of the repository, in host order."""
        ...

    def list_matching_refs(self, ref: str) -> Result[list[GitRef], ReleaseError]:
        """Refs starting with ``ref`` (e.g. ``heads/main``)."""
        ...

    def list_commits(self, sha: str, *, page: int) -> Result[list[CommitRecord], ReleaseError]:
        """One page (1-based) of history reachable from ``sha``, newest first.

        An empty page means the history is exhausted.
        """
        ...

    def get_issue_labels(self, number: int) -> Result[frozenset[str], ReleaseError]:
        ...

    def create_tag_ref(self, tag: str, sha: str, *, force: bool) -> Result[None, ReleaseError]:
        """Create ``refs/tags/<tag>`` at ``sha``; with ``force`` an existing ref is moved."""
        ...
