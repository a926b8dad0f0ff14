from __future__ import annotations

from autotag.core.result import Err, Ok
from autotag.services.release.catalog import build_catalog, exists, fetch_catalog
from autotag.services.release.errors import ReleaseError
from autotag.services.release.memory import InMemoryRepositoryClient
from autotag.services.release.model import Tag


def _tags(*names: str) -> list[Tag]:
    return [Tag(name=n, sha=f"sha-{n}") for n in names]


def test_versions_are_ascending_and_skip_unparsable() -> None:
    catalog = build_catalog(_tags("v1.10.0", "nightly", "v1.2.0", "v1.2.0-rc.1", "v0.9.9"))
    assert [vt.name for vt in catalog.versions] == ["v0.9.9", "v1.2.0-rc.1", "v1.2.0", "v1.10.0"]
    assert len(catalog.raw) == 5


def test_raw_view_keeps_unparsable_names_for_existence() -> None:
    catalog = build_catalog(_tags("20261019", "v1.0.0"))
    assert catalog.exists("20261019")
    assert exists(catalog.raw, "v1.0.0")
    assert not catalog.exists("v1.0.1")


def test_latest_release_skips_prereleases() -> None:
    catalog = build_catalog(_tags("1.0.0", "1.1.0-rc.1"))
    latest_any = catalog.latest_any()
    latest_release = catalog.latest_release()
    assert latest_any is not None and latest_any.name == "1.1.0-rc.1"
    assert latest_release is not None and latest_release.name == "1.0.0"


def test_empty_catalog_has_no_latest() -> None:
    catalog = build_catalog([])
    assert catalog.latest_any() is None
    assert catalog.latest_release() is None


def test_only_prereleases_has_no_latest_release() -> None:
    catalog = build_catalog(_tags("0.1.0-dev.0"))
    assert catalog.latest_release() is None
    assert catalog.latest_any() is not None


def test_fetch_catalog_propagates_failure() -> None:
    client = InMemoryRepositoryClient()
    client.failures["list_tags"] = ReleaseError(kind="gh_failed", message="HTTP 500")

    result = fetch_catalog(client)
    assert isinstance(result, Err)
    assert result.error.message == "HTTP 500"


def test_fetch_catalog_uses_prefix() -> None:
    client = InMemoryRepositoryClient.build(tags=[("rel-1.0.0", "a"), ("rel-2.0.0", "b")])
    result = fetch_catalog(client, prefix="rel-")
    assert isinstance(result, Ok)
    latest = result.value.latest_any()
    assert latest is not None and latest.sha == "b"
