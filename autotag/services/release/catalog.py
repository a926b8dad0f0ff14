from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from autotag.core.result import Err, Ok, Result
from autotag.services.release.client import RepositoryClient
from autotag.services.release.errors import ReleaseError
from autotag.services.release.model import Tag, VersionTag
from autotag.services.release.semver import parse_tag_version


@dataclass(frozen=True, slots=True)
class TagCatalog:
    """Immutable per-run snapshot of the repository tags.

    ``raw`` keeps every tag for existence checks; ``versions`` holds only the
    tags that parse as semver, ascending by precedence.
    """

    raw: tuple[Tag, ...]
    versions: tuple[VersionTag, ...]

    def exists(self, name: str) -> bool:
        return exists(self.raw, name)

    def latest_any(self) -> VersionTag | None:
        return self.versions[-1] if self.versions else None

    def latest_release(self) -> VersionTag | None:
        for vt in reversed(self.versions):
            if not vt.is_prerelease:
                return vt
        return None


def exists(raw: Iterable[Tag], name: str) -> bool:
    return any(tag.name == name for tag in raw)


def build_catalog(tags: Iterable[Tag], *, prefix: str = "") -> TagCatalog:
    raw = tuple(tags)
    versions: list[VersionTag] = []
    for tag in raw:
        v = parse_tag_version(tag.name, prefix=prefix)
        if v is not None:
            versions.append(VersionTag(tag=tag, version=v))

    # sorted() is stable, so equal precedence keeps host order.
    versions.sort(key=lambda vt: vt.version)
    return TagCatalog(raw=raw, versions=tuple(versions))


def fetch_catalog(
    client: RepositoryClient, *, prefix: str = ""
) -> Result[TagCatalog, ReleaseError]:
    tags = client.list_tags()
    if isinstance(tags, Err):
        return tags
    return Ok(build_catalog(tags.value, prefix=prefix))
