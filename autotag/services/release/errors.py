from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "gh_missing",
    "gh_auth_required",
    "gh_failed",
    "invalid_input",
    "branch_not_found",
    "tag_create_failed",
    "output_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Fatal error payload for a tagging run.

    Tag collisions and "nothing to tag" are not errors; they are reported as
    ``Decision`` outcomes.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message
