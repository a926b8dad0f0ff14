from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Literal

import semver


class BumpLevel(IntEnum):
    """Granularity of a change, ordered ``NONE < PATCH < MINOR < MAJOR``."""

    NONE = 0
    PATCH = 1
    MINOR = 2
    MAJOR = 3

    def __str__(self) -> str:
        return self.name.lower()

    # IntEnum formats as the int otherwise.
    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)


@dataclass(frozen=True, slots=True)
class IssueRef:
    """A commit closing an issue; its bump level depends on the issue labels."""

    number: int

    def __str__(self) -> str:
        return f"issue #{self.number}"


Classification = BumpLevel | IssueRef


@dataclass(frozen=True, slots=True)
class Tag:
    name: str
    sha: str


@dataclass(frozen=True, slots=True)
class VersionTag:
    """A tag whose name parsed as a semantic version."""

    tag: Tag
    version: semver.Version

    @property
    def name(self) -> str:
        return self.tag.name

    @property
    def sha(self) -> str:
        return self.tag.sha

    @property
    def is_prerelease(self) -> bool:
        return self.version.prerelease is not None


@dataclass(frozen=True, slots=True)
class CommitRecord:
    sha: str
    message: str

    @property
    def short_sha(self) -> str:
        return self.sha[:8]

    @property
    def subject(self) -> str:
        lines = self.message.splitlines()
        return lines[0].strip() if lines else ""


@dataclass(frozen=True, slots=True)
class BranchRef:
    name: str
    head_sha: str


@dataclass(frozen=True, slots=True)
class RunContext:
    """What the trigger tells us: the repository and the ref that fired."""

    repo: str  # owner/name
    ref: str


DecisionOutcome = Literal["candidate", "tag_exists", "no_change"]


@dataclass(frozen=True, slots=True)
class Decision:
    """Outcome of a check strategy.

    ``tag`` is empty unless the outcome is ``candidate``. ``base`` is the
    version tag the computation started from (empty for static checks or when
    the repository has no version tags).
    """

    outcome: DecisionOutcome
    tag: str = ""
    base: str = ""
    # The candidate already exists and force accepted the collision.
    existing: bool = False

    @property
    def has_candidate(self) -> bool:
        return self.outcome == "candidate" and bool(self.tag)


@dataclass(frozen=True, slots=True)
class GitRef:
    """A fully qualified ref as returned by the matching-refs API."""

    ref: str  # refs/heads/<name>
    sha: str
