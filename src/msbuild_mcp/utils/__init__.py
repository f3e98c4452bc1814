"""Utility modules for msbuild-mcp."""

from .template import make_renderer, render

__all__ = [
    "render",
    "make_renderer",
]
