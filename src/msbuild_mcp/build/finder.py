"""MSBuild executable discovery.

Search order:
1. MSBUILD_PATH environment variable
2. Non-Windows: msbuild, then xbuild (Mono) on PATH
3. Windows: Visual Studio / MSBuild / .NET Framework install locations,
   newest tools version first (or only the requested tools version)
"""

from __future__ import annotations

import logging
import ntpath
import os
import shutil
from collections.abc import Callable, Iterator, Mapping
from typing import Final

from ..errors import ExecutableNotFoundError
from .options import AUTO_TOOLS_VERSION, MSBuildOptions

logger = logging.getLogger(__name__)

MSBUILD_PATH_ENV: Final[str] = "MSBUILD_PATH"

UNIX_EXECUTABLES: Final[tuple[str, ...]] = ("msbuild", "xbuild")

VS_EDITIONS: Final[tuple[str, ...]] = ("Enterprise", "Professional", "Community", "BuildTools")

# tools version -> (Visual Studio year, MSBuild folder, 64-bit Program Files)
VISUAL_STUDIO_VERSIONS: Final[dict[str, tuple[str, str, bool]]] = {
    "17.0": ("2022", "Current", True),
    "16.0": ("2019", "Current", False),
    "15.0": ("2017", "15.0", False),
}

# Standalone MSBuild installs under Program Files (x86)\MSBuild
STANDALONE_VERSIONS: Final[tuple[str, ...]] = ("14.0", "12.0")

# tools version -> .NET Framework directory
FRAMEWORK_VERSIONS: Final[dict[str, str]] = {
    "4.0": "v4.0.30319",
    "3.5": "v3.5",
    "2.0": "v2.0.50727",
}

KNOWN_VERSIONS: Final[tuple[str, ...]] = (
    *VISUAL_STUDIO_VERSIONS,
    *STANDALONE_VERSIONS,
    *FRAMEWORK_VERSIONS,
)

_64BIT_ARCHITECTURES: Final[frozenset[str]] = frozenset({"x64", "amd64", "x86_64", "arm64", "aarch64"})


def is_windows(options: MSBuildOptions) -> bool:
    """Check whether options target a Windows host."""
    return options.platform.lower().startswith("win")


def is_64bit(options: MSBuildOptions) -> bool:
    """Check whether options target a 64-bit architecture."""
    return options.architecture.lower() in _64BIT_ARCHITECTURES


def _normalize_version(tools_version: str | float | None) -> str | None:
    """Map a tools version to a KNOWN_VERSIONS key, or None for auto."""
    if tools_version is None:
        return None
    if isinstance(tools_version, str):
        if tools_version.lower() == AUTO_TOOLS_VERSION:
            return None
        try:
            return f"{float(tools_version):.1f}"
        except ValueError:
            return tools_version
    return f"{float(tools_version):.1f}"


def _windows_candidates(
    version: str, options: MSBuildOptions, environ: Mapping[str, str]
) -> Iterator[str]:
    """Yield install locations for one tools version."""
    x64 = is_64bit(options)
    program_files = environ.get("ProgramFiles", r"C:\Program Files")
    program_files_x86 = environ.get("ProgramFiles(x86)", r"C:\Program Files (x86)")

    if version in VISUAL_STUDIO_VERSIONS:
        year, folder, uses_64bit_root = VISUAL_STUDIO_VERSIONS[version]
        root = program_files if uses_64bit_root else program_files_x86
        for edition in VS_EDITIONS:
            bin_dir = ntpath.join(
                root, "Microsoft Visual Studio", year, edition, "MSBuild", folder, "Bin"
            )
            if x64:
                bin_dir = ntpath.join(bin_dir, "amd64")
            yield ntpath.join(bin_dir, "MSBuild.exe")

    elif version in STANDALONE_VERSIONS:
        bin_dir = ntpath.join(program_files_x86, "MSBuild", version, "Bin")
        if x64:
            bin_dir = ntpath.join(bin_dir, "amd64")
        yield ntpath.join(bin_dir, "MSBuild.exe")

    elif version in FRAMEWORK_VERSIONS:
        windir = options.windir or environ.get("WINDIR", r"C:\Windows")
        framework = "Framework64" if x64 else "Framework"
        yield ntpath.join(
            windir, "Microsoft.NET", framework, FRAMEWORK_VERSIONS[version], "MSBuild.exe"
        )


def candidates(
    options: MSBuildOptions, environ: Mapping[str, str] | None = None
) -> list[str]:
    """List MSBuild candidate paths, most preferred first.

    Bare tool names (no directory part) are resolved through PATH by find().
    An unknown explicit tools version contributes no install locations.

    Args:
        options: MSBuild options (platform, architecture, toolsVersion, windir)
        environ: Environment to read install roots from (defaults to os.environ)

    Returns:
        Ordered candidate list
    """
    env = os.environ if environ is None else environ
    result: list[str] = []

    env_path = env.get(MSBUILD_PATH_ENV)
    if env_path:
        result.append(env_path)

    if not is_windows(options):
        result.extend(UNIX_EXECUTABLES)
        return result

    version = _normalize_version(options.tools_version)
    if version is None:
        versions: tuple[str, ...] = KNOWN_VERSIONS
    elif version in KNOWN_VERSIONS:
        versions = (version,)
    else:
        logger.debug(
            f"Unknown MSBuild tools version {options.tools_version}, "
            "skipping install locations"
        )
        versions = ()

    for known in versions:
        result.extend(_windows_candidates(known, options, env))
    return result


def find(
    options: MSBuildOptions | Mapping[str, object],
    exists: Callable[[str], bool] = os.path.isfile,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Find the MSBuild executable for the given options.

    Args:
        options: MSBuild options or option mapping
        exists: Existence check used for absolute candidates
        environ: Environment override (defaults to os.environ)

    Returns:
        Path to the first existing candidate

    Raises:
        ExecutableNotFoundError: If no candidate exists
    """
    if not isinstance(options, MSBuildOptions):
        options = MSBuildOptions.from_dict(options)

    tried = candidates(options, environ)
    for candidate in tried:
        # Bare tool names are looked up on PATH
        if not ntpath.dirname(candidate):
            resolved = shutil.which(candidate)
            if resolved:
                logger.debug(f"Found {candidate} on PATH: {resolved}")
                return resolved
            logger.debug(f"{candidate} not found on PATH, trying next candidate")
            continue

        if exists(candidate):
            logger.debug(f"Found MSBuild at {candidate}")
            return candidate
        logger.debug(f"MSBuild not found at {candidate}, trying next candidate")

    raise ExecutableNotFoundError(
        "MSBuild not found. Set msbuildPath or the "
        f"{MSBUILD_PATH_ENV} environment variable.",
        candidates=tried,
    )
