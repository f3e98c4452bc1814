"""MSBuild command construction.

Turns MSBuildOptions into the MSBuild/xbuild command line. Flags are
emitted in a fixed order defined by FLAG_RULES, followed by the property
block and finally customArgs.
"""

from __future__ import annotations

import logging
import ntpath
import os
import tempfile
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Final

from ..errors import ConfigurationMissingError
from ..utils.template import make_renderer
from . import finder
from .options import DEFAULT_CONFIGURATION, MSBuildOptions

logger = logging.getLogger(__name__)

XBUILD: Final[str] = "xbuild"


@dataclass
class CommandDescriptor:
    """Resolved executable plus ordered argument list."""

    executable: str
    args: list[str] = field(default_factory=list)

    def to_command_line(self) -> list[str]:
        """Full command line including the executable."""
        return [self.executable, *self.args]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"executable": self.executable, "args": list(self.args)}


def is_xbuild(executable: str | None) -> bool:
    """Check whether executable is Mono's xbuild (by file name)."""
    if not executable:
        return False
    name = ntpath.basename(executable)
    return ntpath.splitext(name)[0].lower() == XBUILD


def _maxcpucount(options: MSBuildOptions, executable: str | None) -> str | None:
    # xbuild rejects /maxcpucount; 0, True and unset all mean "all cores"
    if is_xbuild(executable):
        return None
    count = options.maxcpucount
    if count is None or isinstance(count, bool) or count == 0:
        return "/maxcpucount"
    if count > 0:
        return f"/maxcpucount:{count}"
    return None


def _tools_version(options: MSBuildOptions, executable: str | None) -> str | None:
    version = options.resolved_tools_version()
    return f"/toolsversion:{version}" if version is not None else None


FlagRule = Callable[[MSBuildOptions, str | None], str | None]

# Order here is the order on the command line
FLAG_RULES: Final[tuple[FlagRule, ...]] = (
    lambda o, _: f"/target:{';'.join(o.targets)}",
    lambda o, _: f"/verbosity:{o.verbosity}",
    _tools_version,
    lambda o, _: "/nologo" if o.nologo else None,
    lambda o, _: f"/flp:{o.file_logger_parameters}" if o.file_logger_parameters else None,
    lambda o, _: f"/clp:{o.console_logger_parameters}" if o.console_logger_parameters else None,
    lambda o, _: f"/logger:{o.logger_parameters}" if o.logger_parameters else None,
    _maxcpucount,
    lambda o, _: "/nodeReuse:False" if o.node_reuse is False else None,
)


def publish_properties(options: MSBuildOptions) -> dict[str, str]:
    """File-system publish properties used when emitPublishedFiles is set."""
    publish_url = options.publish_directory or os.path.join(
        tempfile.gettempdir(), "msbuild-publish"
    )
    return {
        "DeployOnBuild": "true",
        "DeployDefaultTarget": "WebPublish",
        "WebPublishMethod": "FileSystem",
        "DeleteExistingFiles": "true",
        "_FindDependencies": "false",
        "PublishUrl": publish_url,
    }


def effective_properties(options: MSBuildOptions) -> dict[str, Any]:
    """Merge synthesized and caller properties.

    Platform and Configuration come first; caller entries with the same
    name replace the synthesized value in place, others are appended in
    caller order.
    """
    merged: dict[str, Any] = {}
    if options.solution_platform:
        merged["Platform"] = options.solution_platform
    merged["Configuration"] = options.configuration or DEFAULT_CONFIGURATION
    if options.emit_published_files:
        merged.update(publish_properties(options))
    merged.update(options.properties)
    return merged


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_arguments(
    options: MSBuildOptions | Mapping[str, Any],
    executable: str | None = None,
) -> list[str]:
    """Build the MSBuild argument list (without the project file).

    Args:
        options: MSBuild options or option mapping
        executable: Resolved executable, used to detect xbuild
            (defaults to options.msbuild_path)

    Returns:
        Ordered argument list
    """
    if not isinstance(options, MSBuildOptions):
        options = MSBuildOptions.from_dict(options)
    if executable is None:
        executable = options.msbuild_path

    args: list[str] = []
    for rule in FLAG_RULES:
        flag = rule(options, executable)
        if flag is not None:
            args.append(flag)

    for name, value in effective_properties(options).items():
        if value is None:
            continue
        args.append(f"/property:{name}={_format_value(value)}")

    args.extend(options.custom_args)
    return args


def _context_path(context: Any) -> str | None:
    """Extract the artifact path from an invocation context."""
    if context is None:
        return None
    if isinstance(context, (str, os.PathLike)):
        return os.fspath(context)
    if isinstance(context, Mapping):
        path = context.get("path")
    else:
        path = getattr(context, "path", None)
    return os.fspath(path) if path else None


def render_properties(options: MSBuildOptions, context: Any) -> MSBuildOptions:
    """Return options with templated property values rendered for context."""
    if not options.properties:
        return options
    if isinstance(context, (str, os.PathLike)):
        context = {"path": os.fspath(context)}
    render = make_renderer(context)
    rendered = {
        name: render(value) if isinstance(value, str) else value
        for name, value in options.properties.items()
    }
    return replace(options, properties=rendered)


def construct(
    context: Any, options: MSBuildOptions | Mapping[str, Any] | None
) -> CommandDescriptor:
    """Construct the full MSBuild command for one file.

    Args:
        context: The file being built (object with ``path``, mapping with
            ``"path"``, or a path)
        options: MSBuild options or option mapping

    Returns:
        Command descriptor with executable and arguments

    Raises:
        ConfigurationMissingError: If options are missing or empty
        ExecutableNotFoundError: If msbuildPath is unset and no MSBuild is found
    """
    if not options:
        raise ConfigurationMissingError()
    if not isinstance(options, MSBuildOptions):
        options = MSBuildOptions.from_dict(options)

    if options.msbuild_path:
        executable = options.msbuild_path
    else:
        executable = finder.find(options)

    options = render_properties(options, context)
    args = build_arguments(options, executable)

    path = _context_path(context)
    if path:
        args.insert(0, path)

    command = CommandDescriptor(executable=executable, args=args)
    if options.log_command:
        logger.info(f"Using MSBuild command: {' '.join(command.to_command_line())}")
    return command
