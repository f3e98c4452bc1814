"""MSBuild option model.

Options arrive as plain mappings using the camelCase names familiar from
task-runner configuration (``toolsVersion``, ``maxcpucount``, ...). They are
parsed into an immutable-by-convention dataclass; the command builder and
the executable finder only read them.
"""

from __future__ import annotations

import logging
import os
import platform as _platform
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, Final

logger = logging.getLogger(__name__)

AUTO_TOOLS_VERSION: Final[str] = "auto"
DEFAULT_TOOLS_VERSION: Final[str] = "4.0"
DEFAULT_CONFIGURATION: Final[str] = "Release"

# Plugin defaults layered under caller options by with_defaults()
DEFAULTS: Final[Mapping[str, Any]] = {
    "target": "Rebuild",
    "verbosity": "normal",
    "toolsVersion": DEFAULT_TOOLS_VERSION,
    "nologo": True,
    "maxcpucount": 0,
    "configuration": DEFAULT_CONFIGURATION,
}

# camelCase option name -> dataclass field
_ALIASES: Final[dict[str, str]] = {
    "targets": "target",
    "toolsVersion": "tools_version",
    "fileLoggerParameters": "file_logger_parameters",
    "consoleLoggerParameters": "console_logger_parameters",
    "loggerParameters": "logger_parameters",
    "nodeReuse": "node_reuse",
    "solutionPlatform": "solution_platform",
    "customArgs": "custom_args",
    "msbuildPath": "msbuild_path",
    "emitPublishedFiles": "emit_published_files",
    "publishDirectory": "publish_directory",
    "logCommand": "log_command",
}


@dataclass
class MSBuildOptions:
    """Options for one MSBuild invocation.

    None means "not set": the matching flag is omitted, except for
    ``maxcpucount`` (bare ``/maxcpucount``) and ``configuration``
    (``Release``).
    """

    target: str | list[str] = "Rebuild"
    verbosity: str = "normal"
    tools_version: str | float | None = None
    nologo: bool | None = None
    maxcpucount: int | None = None
    file_logger_parameters: str | None = None
    console_logger_parameters: str | None = None
    logger_parameters: str | None = None
    node_reuse: bool | None = None
    configuration: str | None = None
    solution_platform: str | None = None
    properties: dict[str, Any] = field(default_factory=dict)
    custom_args: list[str] = field(default_factory=list)
    msbuild_path: str | None = None
    platform: str = field(default_factory=lambda: sys.platform)
    architecture: str = field(default_factory=lambda: _platform.machine())
    windir: str | None = field(default_factory=lambda: os.environ.get("WINDIR"))
    emit_published_files: bool = False
    publish_directory: str | None = None
    log_command: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MSBuildOptions:
        """Parse a camelCase (or snake_case) option mapping.

        Unknown keys are ignored. The input mapping is never modified.

        Args:
            data: Option mapping

        Returns:
            Parsed options
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _ALIASES.get(key, key)
            if name not in known:
                logger.debug(f"Ignoring unknown MSBuild option: {key}")
                continue
            if name == "properties":
                value = dict(value) if value else {}
            elif name == "custom_args":
                value = list(value) if value else []
            elif name in ("target", "verbosity", "platform", "architecture") and value is None:
                continue
            kwargs[name] = value
        return cls(**kwargs)

    @classmethod
    def with_defaults(cls, overrides: Mapping[str, Any] | None = None) -> MSBuildOptions:
        """Parse overrides layered on top of DEFAULTS."""
        merged = {_ALIASES.get(key, key): value for key, value in DEFAULTS.items()}
        for key, value in (overrides or {}).items():
            merged[_ALIASES.get(key, key)] = value
        return cls.from_dict(merged)

    @property
    def targets(self) -> list[str]:
        """Targets as a list."""
        if isinstance(self.target, str):
            return [self.target]
        return list(self.target)

    def resolved_tools_version(self) -> str | None:
        """Tools version as emitted on the command line."""
        version = self.tools_version
        if version is None:
            return None
        if isinstance(version, str):
            if version.lower() == AUTO_TOOLS_VERSION:
                return DEFAULT_TOOLS_VERSION
            return version
        return f"{float(version):.1f}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to camelCase dictionary for JSON serialization."""
        camel = {name: alias for alias, name in _ALIASES.items() if alias != "targets"}
        return {camel.get(f.name, f.name): getattr(self, f.name) for f in fields(self)}
