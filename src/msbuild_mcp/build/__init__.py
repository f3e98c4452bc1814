"""MSBuild command construction for .NET projects.

Provides:
- Option model with task-runner style camelCase keys and plugin defaults
- Deterministic MSBuild/xbuild argument construction
- MSBuild executable discovery (MSBUILD_PATH, PATH, Visual Studio installs)
"""

from ..errors import (
    ConfigurationMissingError,
    ExecutableNotFoundError,
    MSBuildError,
    TemplateError,
)
from .command import CommandDescriptor, build_arguments, construct
from .finder import find
from .options import DEFAULTS, MSBuildOptions

__all__ = [
    "MSBuildOptions",
    "DEFAULTS",
    "CommandDescriptor",
    "build_arguments",
    "construct",
    "find",
    "MSBuildError",
    "ConfigurationMissingError",
    "ExecutableNotFoundError",
    "TemplateError",
]
