"""Date-derived tag names for the non-semver tagging styles."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

TagStyle = Literal[
    "semver",
    "date",
    "datetime",
    "dotdate",
    "dotdatetime",
    "isodate",
    "isodatetime",
]

TAG_STYLES: tuple[TagStyle, ...] = (
    "semver",
    "date",
    "datetime",
    "dotdate",
    "dotdatetime",
    "isodate",
    "isodatetime",
)


def parse_style(raw: str) -> TagStyle:
    """Map a raw style input to a known style; anything unknown is semver."""
    value = raw.strip().lower()
    for style in TAG_STYLES:
        if style == value:
            return style
    return "semver"


def date_tag(style: TagStyle, now: datetime | None = None) -> str:
    """Build the tag for a date style, or "" for semver.

    - date / datetime: ``20261019`` / ``202610191405``
    - dotdate / dotdatetime: ``2026.10.19`` / ``2026.10.19.14.5`` (no padding)
    - isodate / isodatetime: ``2026-10-19`` / ``2026-10-19T14-05``
    """
    if "date" not in style:
        return ""

    when = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    with_time = style.endswith("datetime")

    if style.startswith("iso"):
        return when.strftime("%Y-%m-%dT%H-%M" if with_time else "%Y-%m-%d")

    if style.startswith("dot"):
        parts = [when.year, when.month, when.day]
        if with_time:
            parts += [when.hour, when.minute]
        return ".".join(str(p) for p in parts)

    return when.strftime("%Y%m%d%H%M" if with_time else "%Y%m%d")
