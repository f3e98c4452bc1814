"""Tests for the MCP server tools."""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from msbuild_mcp.errors import ExecutableNotFoundError
from msbuild_mcp.server import create_server


@pytest.fixture
def server():
    """Fresh MCP server."""
    return create_server()


def get_tool(server, name):
    """Get the registered function behind an MCP tool."""
    return server._tool_manager.get_tool(name).fn


class TestBuildArgumentsTool:
    """Tests for the build_arguments tool."""

    def test_defaults(self, server):
        result = get_tool(server, "build_arguments")()

        assert result == {
            "success": True,
            "data": [
                "/target:Rebuild",
                "/verbosity:normal",
                "/toolsversion:4.0",
                "/nologo",
                "/maxcpucount",
                "/property:Configuration=Release",
            ],
        }

    def test_overrides(self, server):
        result = get_tool(server, "build_arguments")(
            {"maxcpucount": 8, "solutionPlatform": "x64"}
        )

        assert "/maxcpucount:8" in result["data"]
        assert result["data"][-2:] == [
            "/property:Platform=x64",
            "/property:Configuration=Release",
        ]

    def test_boolean_maxcpucount(self, server):
        """Test that a JSON true maxcpucount gives the bare flag."""
        result = get_tool(server, "build_arguments")({"maxcpucount": True})

        assert "/maxcpucount" in result["data"]
        assert "/maxcpucount:True" not in result["data"]

    def test_invalid_option_type(self, server):
        """Test that bad option values are reported, not raised."""
        result = get_tool(server, "build_arguments")({"maxcpucount": "many"})

        assert result["success"] is False
        assert "error" in result


class TestFindMsbuildTool:
    """Tests for the find_msbuild tool."""

    def test_found(self, server, monkeypatch):
        monkeypatch.delenv("MSBUILD_PATH", raising=False)
        with patch("msbuild_mcp.build.finder.shutil.which", return_value="/usr/bin/msbuild"):
            result = get_tool(server, "find_msbuild")({"platform": "linux"})

        assert result == {"success": True, "data": "/usr/bin/msbuild"}

    def test_not_found(self, server, monkeypatch):
        monkeypatch.delenv("MSBUILD_PATH", raising=False)
        with patch("msbuild_mcp.build.finder.shutil.which", return_value=None):
            result = get_tool(server, "find_msbuild")({"platform": "linux"})

        assert result["success"] is False
        assert result["type"] == "ExecutableNotFoundError"
        assert result["candidates"] == ["msbuild", "xbuild"]


class TestConstructCommandTool:
    """Tests for the construct_command tool."""

    def test_construct(self, server):
        result = get_tool(server, "construct_command")(
            "App.sln",
            {"msbuildPath": "msbuild", "properties": {"Out": "<%= file.path %>.log"}},
        )

        assert result["success"] is True
        assert result["data"]["executable"] == "msbuild"
        assert result["data"]["args"][0] == "App.sln"
        assert "/property:Out=App.sln.log" in result["data"]["args"]

    def test_not_found(self, server):
        with patch(
            "msbuild_mcp.build.finder.find",
            side_effect=ExecutableNotFoundError("MSBuild not found", candidates=["msbuild"]),
        ):
            result = get_tool(server, "construct_command")("App.sln")

        assert result == {
            "success": False,
            "error": "MSBuild not found",
            "type": "ExecutableNotFoundError",
            "candidates": ["msbuild"],
        }

    def test_bad_template(self, server):
        result = get_tool(server, "construct_command")(
            "App.sln", {"msbuildPath": "msbuild", "properties": {"X": "<%= nope.path %>"}}
        )

        assert result["success"] is False
        assert result["type"] == "TemplateError"


class TestServerRegistration:
    """Tests for server wiring."""

    @pytest.mark.asyncio
    async def test_tools_registered(self, server):
        tools = await server.list_tools()

        assert {tool.name for tool in tools} == {
            "build_arguments",
            "find_msbuild",
            "construct_command",
        }

    @pytest.mark.asyncio
    async def test_defaults_resource(self, server):
        resources = await server.list_resources()
        assert [str(r.uri).rstrip("/") for r in resources] == ["msbuild://defaults"]

        contents = list(await server.read_resource("msbuild://defaults"))
        data = json.loads(contents[0].content)

        assert data["target"] == "Rebuild"
        assert data["toolsVersion"] == "4.0"
