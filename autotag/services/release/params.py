"""Typed run parameters built from the flat action-input mapping."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from autotag.core.result import Err, Ok, Result
from autotag.services.release.datestyle import TagStyle, date_tag, parse_style
from autotag.services.release.errors import ReleaseError
from autotag.services.release.model import BumpLevel

INPUT_KEYS: tuple[str, ...] = (
    "branch",
    "bump",
    "dry-run",
    "force",
    "github-token",
    "issue-labels",
    "release-branch",
    "style",
    "tag",
    "version-prefix",
    "with-v",
)

DEFAULT_ISSUE_LABELS: tuple[str, ...] = ("enhancement",)
DEFAULT_RELEASE_BRANCHES: tuple[str, ...] = ("^main$", "^master$")

_BUMP_INPUTS = {
    "patch": BumpLevel.PATCH,
    "minor": BumpLevel.MINOR,
    "major": BumpLevel.MAJOR,
}


@dataclass(frozen=True, slots=True)
class Parameters:
    branch: str | None
    bump: BumpLevel
    dry_run: bool
    force: bool
    token: str | None = field(repr=False)
    issue_labels: tuple[str, ...]
    release_branches: tuple[str, ...]
    style: TagStyle
    tag: str | None
    # Effective prefix: version-prefix as given, empty when with-v is "false".
    prefix: str

    @property
    def is_static(self) -> bool:
        return bool(self.tag) or self.style != "semver"


def split_list(raw: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def _input(data: Mapping[str, str], key: str) -> str:
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ""


def _parse_bump(raw: str) -> Result[BumpLevel, ReleaseError]:
    if not raw:
        return Ok(BumpLevel.PATCH)
    level = _BUMP_INPUTS.get(raw.lower())
    if level is None:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"invalid bump: {raw}",
                hint="Expected one of: patch, minor, major",
            )
        )
    return Ok(level)


def validate_patterns(patterns: Sequence[str]) -> Result[tuple[str, ...], ReleaseError]:
    """Check that every release-branch pattern compiles as a regex."""
    for pattern in patterns:
        try:
            re.compile(pattern)
        except re.error as e:
            return Err(
                ReleaseError(
                    kind="invalid_input",
                    message=f"invalid release-branch pattern: {pattern}",
                    hint=str(e),
                )
            )
    return Ok(tuple(patterns))


def _parse_patterns(raw: str) -> Result[tuple[str, ...], ReleaseError]:
    return validate_patterns(split_list(raw) or DEFAULT_RELEASE_BRANCHES)


def build_parameters(
    data: Mapping[str, str],
    *,
    now: datetime | None = None,
) -> Result[Parameters, ReleaseError]:
    """Validate the raw inputs once and freeze them.

    Flags follow the action's documented semantics: ``dry-run`` and ``with-v``
    are on unless literally "false"; ``force`` is off unless truthy. Date
    styles replace any literal ``tag``.
    """
    bump = _parse_bump(_input(data, "bump"))
    if isinstance(bump, Err):
        return bump

    patterns = _parse_patterns(_input(data, "release-branch"))
    if isinstance(patterns, Err):
        return patterns

    style = parse_style(_input(data, "style"))
    dated = date_tag(style, now)
    tag = dated or _input(data, "tag") or None

    with_v = _input(data, "with-v").lower() != "false"
    prefix = _input(data, "version-prefix") if with_v else ""

    return Ok(
        Parameters(
            branch=_input(data, "branch") or None,
            bump=bump.value,
            dry_run=_input(data, "dry-run").lower() != "false",
            force=_input(data, "force").lower() in {"true", "yes", "1"},
            token=_input(data, "github-token") or None,
            issue_labels=split_list(_input(data, "issue-labels")) or DEFAULT_ISSUE_LABELS,
            release_branches=patterns.value,
            style=style,
            tag=tag,
            prefix=prefix,
        )
    )
