#!/usr/bin/env python3
"""Tests for registry descriptor synchronization and manifest generation."""

import orjson
import pytest

from qiuye_ui.errors import MalformedDocumentError
from qiuye_ui.sync import (
    read_registry_meta,
    resolve_source,
    sync_descriptor,
    sync_registry,
    to_manifest_item,
    write_registry_manifest,
)


def write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(orjson.dumps(data))


@pytest.fixture
def project(tmp_path):
    """A small project: registry/ descriptors plus component sources."""
    source = tmp_path / "components" / "qiuye-ui" / "typing-text.tsx"
    source.parent.mkdir(parents=True)
    source.write_text("export const TypingText = 1;\n", encoding="utf-8")

    registry = tmp_path / "registry"
    write_json(
        registry / "typing-text.json",
        {
            "name": "typing-text",
            "type": "registry:ui",
            "title": "Typing Text",
            "description": "Typewriter effect",
            "files": [
                {"type": "registry:component", "path": "src/components/qiuye-ui/typing-text.tsx", "content": "old"},
                {"type": "registry:style", "path": "styles/typing.css"},
                {"type": "registry:lib", "path": "lib/missing.ts"},
                {"type": "registry:hook"},
            ],
        },
    )
    write_json(registry / "index.json", [{"name": "typing-text"}])
    write_json(registry / "nested" / "not-an-item.json", {"hello": "world"})
    return tmp_path


class TestResolveSource:
    def test_strips_src_prefix(self, project):
        found = resolve_source(project, "src/components/qiuye-ui/typing-text.tsx")
        assert found == project / "components" / "qiuye-ui" / "typing-text.tsx"

    def test_strips_dot_slash(self, project):
        assert resolve_source(project, "./components/qiuye-ui/typing-text.tsx") is not None

    def test_missing(self, project):
        assert resolve_source(project, "nope.tsx") is None


class TestSyncDescriptor:
    def test_updates_content(self, project):
        path = project / "registry" / "typing-text.json"

        result = sync_descriptor(path, project)

        assert result.updated
        data = orjson.loads(path.read_bytes())
        assert data["files"][0]["content"] == "export const TypingText = 1;\n"
        assert "content" not in data["files"][1]
        assert path.read_bytes().endswith(b"\n")
        assert any("source not found" in detail for detail in result.details)
        assert any("missing path" in detail for detail in result.details)

    def test_second_run_is_unchanged(self, project):
        path = project / "registry" / "typing-text.json"
        sync_descriptor(path, project)

        result = sync_descriptor(path, project)

        assert not result.updated

    def test_dry_run_does_not_write(self, project):
        path = project / "registry" / "typing-text.json"
        before = path.read_bytes()

        result = sync_descriptor(path, project, dry_run=True)

        assert result.updated
        assert path.read_bytes() == before

    def test_skips_non_items(self, project):
        result = sync_descriptor(project / "registry" / "nested" / "not-an-item.json", project)
        assert result.skipped
        assert not result.updated

    def test_malformed_json_recorded(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")

        result = sync_descriptor(path, tmp_path)

        assert result.error.startswith(f"{path} is not valid JSON")
        assert "Response from" not in result.error

    def test_undecodable_source_recorded(self, project):
        source = project / "components" / "qiuye-ui" / "typing-text.tsx"
        source.write_bytes(b"\xff\xfe\xfa")
        path = project / "registry" / "typing-text.json"
        before = path.read_bytes()

        result = sync_descriptor(path, project)

        assert "source unreadable" in result.error
        assert not result.updated
        assert path.read_bytes() == before


class TestManifest:
    def test_to_manifest_item(self):
        item = to_manifest_item(
            {
                "name": "x",
                "description": "  ",
                "devDependencies": ["vitest"],
                "files": [{"path": "a", "content": "b"}],
            }
        )
        assert item == {
            "name": "x",
            "type": "",
            "title": "",
            "author": "",
            "dependencies": [],
            "registryDependencies": [],
            "files": [{"path": "a"}],
            "devDependencies": ["vitest"],
        }

    def test_meta_from_package_json(self, tmp_path):
        package_json = tmp_path / "package.json"
        write_json(package_json, {"registryName": " my-ui ", "homepage": "https://my.ui"})
        assert read_registry_meta(package_json) == ("my-ui", "https://my.ui")

    def test_meta_defaults(self, tmp_path):
        assert read_registry_meta(tmp_path / "package.json") == ("qiuye-ui", "https://ui.qiuyedx.com")

    def test_write_manifest(self, project):
        manifest_path, count = write_registry_manifest(project / "registry", project / "package.json")

        manifest = orjson.loads(manifest_path.read_bytes())
        assert count == 1
        assert manifest["$schema"] == "https://ui.shadcn.com/schema/registry.json"
        assert manifest["name"] == "qiuye-ui"
        assert manifest["items"][0]["name"] == "typing-text"
        assert manifest["items"][0]["description"] == "Typewriter effect"
        assert all("content" not in file for file in manifest["items"][0]["files"])

    def test_malformed_descriptor_fails_manifest(self, project):
        (project / "registry" / "broken.json").write_text("{", encoding="utf-8")
        with pytest.raises(MalformedDocumentError, match="broken.json is not valid JSON"):
            write_registry_manifest(project / "registry", project / "package.json")


class TestSyncRegistry:
    def test_full_run(self, project):
        report = sync_registry(project / "registry", project, package_json=project / "package.json")

        assert report.total == 2
        assert report.updated == 1
        assert report.failed == 0
        assert report.manifest_items == 1
        assert (project / "registry" / "registry.json").exists()

    def test_manifest_not_rescanned_as_descriptor(self, project):
        sync_registry(project / "registry", project, package_json=project / "package.json")
        report = sync_registry(project / "registry", project, package_json=project / "package.json")
        assert report.total == 2

    def test_dry_run_writes_nothing(self, project):
        report = sync_registry(project / "registry", project, dry_run=True, package_json=project / "package.json")

        assert report.updated == 1
        assert not (project / "registry" / "registry.json").exists()

    def test_malformed_descriptor_recorded_and_run_continues(self, project):
        (project / "registry" / "broken.json").write_text("{", encoding="utf-8")

        report = sync_registry(project / "registry", project, package_json=project / "package.json")

        assert report.total == 3
        assert report.updated == 1
        assert report.failed == 1
        assert "broken.json is not valid JSON" in report.manifest_error
        assert report.manifest_path is None
        assert not (project / "registry" / "registry.json").exists()

    def test_missing_directory(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            sync_registry(tmp_path / "nope", tmp_path)
