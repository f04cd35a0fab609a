#!/usr/bin/env python3
"""Tests for the five registry query operations."""

import pytest
from conftest import make_descriptor, make_transport

from qiuye_ui.errors import InvalidNameError, UnsupportedPackageManagerError
from qiuye_ui.queries import (
    FileContent,
    FileNotFoundResult,
    RegistryQueries,
    format_install_command,
    search_index,
    strip_file_content,
    strip_files,
)


def three_file_descriptor():
    return make_descriptor(
        "scrollable-dialog",
        files=[
            {"type": "registry:component", "path": "components/qiuye-ui/scrollable-dialog.tsx", "content": "a"},
            {"type": "registry:hook", "path": "hooks/use-prevent-scroll.ts", "target": "hooks/x.ts", "content": "b"},
            {"type": "registry:lib", "path": "lib/utils.ts"},
        ],
    )


@pytest.fixture
def index_routes():
    return {
        "index.json": [
            make_descriptor("typing-text", dependencies=["ahooks"]),
            make_descriptor("animated-button", title="Animated Button", dependencies=["motion"]),
            make_descriptor("gradient-card", author="Someone Else", registryDependencies=["card"]),
        ]
    }


class TestPureHelpers:
    def test_strip_file_content_keeps_other_fields(self):
        descriptor = make_descriptor("typing-text", extra="kept")
        stripped = strip_file_content(descriptor)

        assert stripped["extra"] == "kept"
        assert stripped["files"] == [
            {
                "type": "registry:component",
                "path": "components/qiuye-ui/typing-text.tsx",
                "target": "components/qiuye-ui/typing-text.tsx",
            }
        ]
        assert "content" in descriptor["files"][0]

    def test_strip_files(self):
        assert strip_files([{"name": "a", "files": [], "fileCount": 0}]) == [{"name": "a", "fileCount": 0}]

    def test_search_empty_query_returns_same_list(self):
        entries = [{"name": "b"}, {"name": "a"}]
        assert search_index(entries, "  ") == entries

    def test_search_matches_dependencies(self):
        entries = [{"name": "a", "dependencies": ["motion"]}, {"name": "b", "registryDependencies": ["card"]}]
        assert search_index(entries, "CARD") == [{"name": "b", "registryDependencies": ["card"]}]


class TestInstallCommand:
    def test_pnpm(self):
        assert (
            format_install_command("typing-text", "pnpm", "@qiuye-ui")
            == "pnpm dlx shadcn@latest add @qiuye-ui/typing-text"
        )

    def test_npx_default(self):
        assert format_install_command("@qiuye-ui/typing-text.json") == "npx shadcn@latest add @qiuye-ui/typing-text"

    def test_custom_alias(self):
        assert format_install_command("typing-text", "npx", " @mine ") == "npx shadcn@latest add @mine/typing-text"

    def test_blank_alias_uses_default(self):
        assert format_install_command("typing-text", "npx", "  ") == "npx shadcn@latest add @qiuye-ui/typing-text"

    def test_invalid_name(self):
        with pytest.raises(InvalidNameError):
            format_install_command("Typing Text")

    def test_unsupported_package_manager(self):
        with pytest.raises(UnsupportedPackageManagerError):
            format_install_command("typing-text", "yarn")

    def test_method_makes_no_request(self, config):
        calls: list[str] = []
        queries = RegistryQueries(config, transport=make_transport({}, calls))
        assert queries.get_install_command("typing-text", "pnpm") == "pnpm dlx shadcn@latest add @qiuye-ui/typing-text"
        assert calls == []


class TestListAndSearch:
    @pytest.mark.asyncio
    async def test_list_without_files(self, config, index_routes):
        queries = RegistryQueries(config, transport=make_transport(index_routes))

        items = await queries.list_items()

        assert [item["name"] for item in items] == ["animated-button", "gradient-card", "typing-text"]
        assert all("files" not in item for item in items)
        assert all(item["fileCount"] == 1 for item in items)

    @pytest.mark.asyncio
    async def test_list_with_files(self, config, index_routes):
        queries = RegistryQueries(config, transport=make_transport(index_routes))

        items = await queries.list_items(include_files=True)

        assert all("content" not in file for item in items for file in item["files"])
        assert items[0]["files"][0]["path"] == "components/qiuye-ui/animated-button.tsx"

    @pytest.mark.asyncio
    async def test_empty_search_equals_list(self, config, index_routes):
        queries = RegistryQueries(config, transport=make_transport(index_routes))

        assert await queries.search_items("") == await queries.list_items()

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive(self, config, index_routes):
        queries = RegistryQueries(config, transport=make_transport(index_routes))

        upper = await queries.search_items("Button")
        lower = await queries.search_items("button")

        assert upper == lower
        assert [item["name"] for item in upper] == ["animated-button"]

    @pytest.mark.asyncio
    async def test_search_by_author_and_dependency(self, config, index_routes):
        queries = RegistryQueries(config, transport=make_transport(index_routes))

        assert [item["name"] for item in await queries.search_items("someone")] == ["gradient-card"]
        assert [item["name"] for item in await queries.search_items("ahooks")] == ["typing-text"]


class TestGetItem:
    @pytest.mark.asyncio
    async def test_content_stripped(self, config):
        descriptor = {
            "name": "animated-button",
            "files": [
                {
                    "type": "registry:component",
                    "path": "components/qiuye-ui/animated-button.tsx",
                    "content": "...",
                }
            ],
        }
        queries = RegistryQueries(config, transport=make_transport({"animated-button.json": descriptor}))

        item = await queries.get_item("@qiuye-ui/animated-button", include_content=False)

        assert item == {
            "name": "animated-button",
            "files": [{"type": "registry:component", "path": "components/qiuye-ui/animated-button.tsx"}],
        }

    @pytest.mark.asyncio
    async def test_content_included_only_where_present(self, config):
        queries = RegistryQueries(config, transport=make_transport({"scrollable-dialog.json": three_file_descriptor()}))

        item = await queries.get_item("scrollable-dialog", include_content=True)

        assert ["content" in file for file in item["files"]] == [True, True, False]

    @pytest.mark.asyncio
    async def test_invalid_name(self, config):
        queries = RegistryQueries(config, transport=make_transport({}))
        with pytest.raises(InvalidNameError):
            await queries.get_item("../index")


class TestGetFileContent:
    @pytest.mark.asyncio
    async def test_default_index(self, config):
        queries = RegistryQueries(config, transport=make_transport({"scrollable-dialog.json": three_file_descriptor()}))

        result = await queries.get_file_content("scrollable-dialog")

        assert isinstance(result, FileContent)
        assert result.index == 0
        assert result.path == "components/qiuye-ui/scrollable-dialog.tsx"
        assert result.content == "a"

    @pytest.mark.asyncio
    async def test_missing_content_is_empty_string(self, config):
        queries = RegistryQueries(config, transport=make_transport({"scrollable-dialog.json": three_file_descriptor()}))

        result = await queries.get_file_content("scrollable-dialog", index=2)

        assert isinstance(result, FileContent)
        assert result.content == ""
        assert result.type == "registry:lib"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("index", [3, 99, -1])
    async def test_out_of_range_lists_available(self, config, index):
        queries = RegistryQueries(config, transport=make_transport({"scrollable-dialog.json": three_file_descriptor()}))

        result = await queries.get_file_content("scrollable-dialog", index=index)

        assert isinstance(result, FileNotFoundResult)
        assert f"files[{index}]" in result.error
        assert [file.index for file in result.available] == [0, 1, 2]
        assert result.available[1].target == "hooks/x.ts"
        assert result.available[2].type == "registry:lib"
