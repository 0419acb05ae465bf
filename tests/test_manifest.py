"""Tests for shareddeps.manifest."""

from __future__ import annotations

from pathlib import Path

import pytest

from shareddeps.manifest import ManifestLocator, ManifestParseError
from tests._fixtures.monorepo_builder import MonorepoBuilder


def test_locate_finds_nearest_manifest_from_nested_file(monorepo: MonorepoBuilder) -> None:
    package_dir = monorepo.package("packages/app", "app", {"@theia/core": "^1.0.0"})
    monorepo.write({"packages/app/src/browser/widget.ts": "export {};\n"})

    locator = ManifestLocator()
    manifest = locator.locate(package_dir / "src" / "browser" / "widget.ts")

    assert manifest is not None
    assert manifest.path == (package_dir / "package.json").resolve()
    assert manifest.name == "app"
    assert manifest.dependencies == {"@theia/core": "^1.0.0"}


def test_locate_prefers_closest_manifest(monorepo: MonorepoBuilder) -> None:
    monorepo.package("", "root")
    inner = monorepo.package("packages/inner", "inner")
    monorepo.write({"packages/inner/lib/index.js": ""})

    manifest = ManifestLocator().locate(inner / "lib" / "index.js")

    assert manifest is not None
    assert manifest.name == "inner"


def test_every_directory_in_the_chain_shares_the_cached_manifest(
    monorepo: MonorepoBuilder,
) -> None:
    top = monorepo.package("d", "d-package")
    deep = top / "c" / "b" / "a"
    deep.mkdir(parents=True)
    monorepo.write({"d/c/b/a/file.ts": ""})

    locator = ManifestLocator()
    first = locator.locate(deep / "file.ts")
    assert first is not None

    for directory in (deep, top / "c" / "b", top / "c", top):
        assert locator.cached(directory)

    # The manifest is gone from disk; every lookup must be a cache hit.
    (top / "package.json").unlink()
    for start in (deep, top / "c" / "b", top / "c", top, deep / "file.ts"):
        assert locator.locate(start) is first


def test_cache_hit_backfills_newly_visited_directories(monorepo: MonorepoBuilder) -> None:
    top = monorepo.package("pkg", "pkg")
    (top / "a").mkdir()
    (top / "x" / "y").mkdir(parents=True)

    locator = ManifestLocator()
    first = locator.locate(top / "a")
    assert not locator.cached(top / "x" / "y")

    second = locator.locate(top / "x" / "y")

    assert second is first
    assert locator.cached(top / "x" / "y")
    assert locator.cached(top / "x")


def test_locate_returns_none_when_no_manifest_exists(tmp_path: Path) -> None:
    source = tmp_path / "loose" / "script.js"
    source.parent.mkdir()
    source.write_text("", encoding="utf-8")

    locator = ManifestLocator(manifest_name="shareddeps-test-manifest.json")

    assert locator.locate(source) is None


def test_locate_from_filesystem_root_terminates() -> None:
    root = Path(Path.cwd().anchor)
    locator = ManifestLocator(manifest_name="shareddeps-test-manifest.json")

    assert locator.locate(root) is None
    assert locator.locate(root) is None


def test_missing_results_are_cached_by_default(tmp_path: Path) -> None:
    work = tmp_path / "work"
    work.mkdir()
    locator = ManifestLocator(manifest_name="shareddeps-test-manifest.json")

    assert locator.locate(work) is None
    (work / "shareddeps-test-manifest.json").write_text("{}", encoding="utf-8")

    assert locator.locate(work) is None


def test_missing_results_can_be_rechecked(tmp_path: Path) -> None:
    work = tmp_path / "work"
    work.mkdir()
    locator = ManifestLocator(manifest_name="shareddeps-test-manifest.json", cache_missing=False)

    assert locator.locate(work) is None
    (work / "shareddeps-test-manifest.json").write_text('{"name": "late"}', encoding="utf-8")

    manifest = locator.locate(work)
    assert manifest is not None
    assert manifest.name == "late"


def test_malformed_manifest_raises_and_leaves_cache_untouched(
    monorepo: MonorepoBuilder,
) -> None:
    monorepo.write(
        {
            "broken/package.json": "{ not json",
            "broken/src/index.ts": "",
        }
    )
    locator = ManifestLocator()

    with pytest.raises(ManifestParseError) as excinfo:
        locator.locate(monorepo.path("broken/src/index.ts"))

    assert excinfo.value.path == monorepo.path("broken/package.json").resolve()
    assert len(locator) == 0
    assert not locator.cached(monorepo.path("broken/src"))


def test_manifest_must_be_an_object(monorepo: MonorepoBuilder) -> None:
    monorepo.write({"odd/package.json": "[1, 2, 3]"})

    with pytest.raises(ManifestParseError):
        ManifestLocator().locate(monorepo.path("odd"))


def test_manifest_without_dependency_map(monorepo: MonorepoBuilder) -> None:
    monorepo.write({"plain/package.json": '{"name": "plain", "dependencies": "nope"}'})

    manifest = ManifestLocator().locate(monorepo.path("plain"))

    assert manifest is not None
    assert manifest.has_dependency_map is False
    assert manifest.dependencies == {}


def test_non_utf8_manifest_is_a_parse_error(monorepo: MonorepoBuilder) -> None:
    target = monorepo.path("latin/package.json")
    target.parent.mkdir(parents=True)
    target.write_bytes(b'{"name": "caf\xe9"}')

    locator = ManifestLocator()
    with pytest.raises(ManifestParseError) as excinfo:
        locator.locate(target.parent / "index.ts")

    assert excinfo.value.path == target.resolve()
    assert len(locator) == 0


def test_directory_start_includes_its_own_manifest(monorepo: MonorepoBuilder) -> None:
    monorepo.package("", "root")
    package_dir = monorepo.package("packages/app", "app")
    monorepo.write({"packages/app/index.ts": ""})
    locator = ManifestLocator()

    from_directory = locator.locate(package_dir)
    from_file = locator.locate(package_dir / "index.ts")
    from_missing_file = locator.locate(package_dir / "not-yet-written.ts")

    assert from_directory is not None
    assert from_directory.name == "app"
    assert from_file is from_directory
    assert from_missing_file is from_directory
