"""MCP Server for MSBuild command construction."""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .build import command, finder
from .build.options import DEFAULTS, MSBuildOptions
from .errors import MSBuildError

logger = logging.getLogger(__name__)


def _options(options: dict[str, Any] | None) -> MSBuildOptions:
    return MSBuildOptions.with_defaults(options)


def create_server() -> FastMCP:
    """Create and configure the MCP server."""
    mcp = FastMCP("msbuild-mcp")

    # ============== Command Tools ==============

    @mcp.tool()
    def build_arguments(options: dict[str, Any] | None = None) -> dict:
        """
        Build MSBuild command-line arguments from options.

        Options use camelCase names (target, verbosity, toolsVersion, nologo,
        maxcpucount, fileLoggerParameters, consoleLoggerParameters,
        loggerParameters, nodeReuse, configuration, solutionPlatform,
        properties, customArgs, msbuildPath) and are layered over the defaults
        (Rebuild, normal verbosity, tools version 4.0, nologo, Release).

        Args:
            options: MSBuild options

        Returns:
            Ordered argument list (without the project file)
        """
        try:
            return {"success": True, "data": command.build_arguments(_options(options))}
        except (MSBuildError, ValueError, TypeError) as e:
            return {"success": False, "error": str(e)}

    @mcp.tool()
    def find_msbuild(options: dict[str, Any] | None = None) -> dict:
        """
        Locate the MSBuild executable.

        Checks MSBUILD_PATH, then msbuild/xbuild on PATH (Linux/macOS) or the
        Visual Studio and .NET Framework install locations (Windows).

        Args:
            options: MSBuild options (toolsVersion, platform, architecture)

        Returns:
            Path to MSBuild
        """
        try:
            return {"success": True, "data": finder.find(_options(options))}
        except MSBuildError as e:
            return {"success": False, **e.to_dict()}
        except (ValueError, TypeError) as e:
            return {"success": False, "error": str(e)}

    @mcp.tool()
    def construct_command(project: str, options: dict[str, Any] | None = None) -> dict:
        """
        Construct the full MSBuild command for a project or solution file.

        The command is only built, never run. Property values may reference the
        project with <%= file.path %>.

        Args:
            project: Path to .sln or project file
            options: MSBuild options (see build_arguments)

        Returns:
            executable and args
        """
        try:
            descriptor = command.construct({"path": project}, _options(options))
            return {"success": True, "data": descriptor.to_dict()}
        except MSBuildError as e:
            return {"success": False, **e.to_dict()}
        except (ValueError, TypeError) as e:
            return {"success": False, "error": str(e)}

    # ============== Resources ==============

    @mcp.resource("msbuild://defaults", mime_type="application/json")
    def get_defaults() -> str:
        """
        Default MSBuild options applied to every tool call.
        """
        return json.dumps(dict(DEFAULTS), indent=2)

    logger.debug("MSBuild MCP tools registered")
    return mcp
