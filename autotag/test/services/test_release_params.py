from __future__ import annotations

from datetime import datetime, timezone

import pytest

from autotag.core.result import Err, Ok
from autotag.services.release.datestyle import date_tag, parse_style
from autotag.services.release.model import BumpLevel
from autotag.services.release.params import (
    DEFAULT_RELEASE_BRANCHES,
    Parameters,
    build_parameters,
)

NOW = datetime(2026, 3, 9, 14, 5, 33, tzinfo=timezone.utc)


def _build(data: dict[str, str]) -> Parameters:
    result = build_parameters(data, now=NOW)
    assert isinstance(result, Ok)
    return result.value


def test_defaults() -> None:
    p = _build({})
    assert p.branch is None
    assert p.bump == BumpLevel.PATCH
    assert p.dry_run is True
    assert p.force is False
    assert p.issue_labels == ("enhancement",)
    assert p.release_branches == DEFAULT_RELEASE_BRANCHES
    assert p.style == "semver"
    assert p.tag is None
    assert p.prefix == ""
    assert not p.is_static


@pytest.mark.parametrize(("raw", "expected"), [("false", False), ("FALSE", False), ("no", True)])
def test_only_literal_false_disables_dry_run(raw: str, expected: bool) -> None:
    assert _build({"dry-run": raw}).dry_run is expected


def test_force_needs_truthy_value() -> None:
    assert _build({"force": "true"}).force is True
    assert _build({"force": "nope"}).force is False


def test_with_v_false_drops_prefix() -> None:
    assert _build({"with-v": "false", "version-prefix": "rel-"}).prefix == ""
    assert _build({"version-prefix": "rel-"}).prefix == "rel-"


def test_empty_version_prefix_prepends_nothing() -> None:
    assert _build({"version-prefix": "", "with-v": "true"}).prefix == ""
    assert _build({"version-prefix": "v"}).prefix == "v"


def test_issue_labels_are_split_and_trimmed() -> None:
    assert _build({"issue-labels": " feature , epic,, "}).issue_labels == ("feature", "epic")
    assert _build({"issue-labels": " , "}).issue_labels == ("enhancement",)


def test_unknown_style_falls_back_to_semver() -> None:
    assert _build({"style": "calver"}).style == "semver"


def test_literal_tag_makes_run_static() -> None:
    p = _build({"tag": " v2.0.0 "})
    assert p.tag == "v2.0.0"
    assert p.is_static


def test_date_style_replaces_literal_tag() -> None:
    p = _build({"style": "isodate", "tag": "v9"})
    assert p.tag == "2026-03-09"
    assert p.is_static


def test_invalid_bump_is_rejected() -> None:
    result = build_parameters({"bump": "huge"})
    assert isinstance(result, Err)
    assert result.error.kind == "invalid_input"


def test_bump_is_parsed() -> None:
    assert _build({"bump": "Minor"}).bump == BumpLevel.MINOR


def test_invalid_release_branch_pattern_is_rejected() -> None:
    result = build_parameters({"release-branch": "^main$,release/(("})
    assert isinstance(result, Err)
    assert "release/((" in result.error.message


@pytest.mark.parametrize(
    ("style", "expected"),
    [
        ("date", "20260309"),
        ("datetime", "202603091405"),
        ("dotdate", "2026.3.9"),
        ("dotdatetime", "2026.3.9.14.5"),
        ("isodate", "2026-03-09"),
        ("isodatetime", "2026-03-09T14-05"),
        ("semver", ""),
    ],
)
def test_date_tag(style: str, expected: str) -> None:
    assert date_tag(parse_style(style), NOW) == expected


def test_parse_style_is_case_insensitive() -> None:
    assert parse_style(" DotDate ") == "dotdate"
