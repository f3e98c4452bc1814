"""Pytest fixtures for msbuild-mcp tests."""

import pytest
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from msbuild_mcp.build.options import DEFAULTS  # noqa: E402


@pytest.fixture
def defaults():
    """Fresh copy of the default option mapping."""
    return dict(DEFAULTS)


@pytest.fixture
def windows_environ():
    """Typical Windows install roots."""
    return {
        "ProgramFiles": r"C:\Program Files",
        "ProgramFiles(x86)": r"C:\Program Files (x86)",
        "WINDIR": r"C:\Windows",
    }


@pytest.fixture
def windows_options():
    """Options for a 64-bit Windows host with auto tools version."""
    from msbuild_mcp.build.options import MSBuildOptions

    return MSBuildOptions(
        tools_version="auto",
        platform="win32",
        architecture="AMD64",
        windir=r"C:\Windows",
    )
