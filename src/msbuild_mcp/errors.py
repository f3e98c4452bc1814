"""MSBuild command construction errors."""

from __future__ import annotations

from typing import Any

NO_OPTIONS_MESSAGE = "No options specified!"


class MSBuildError(Exception):
    """Base exception for command construction errors."""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"error": str(self), "type": type(self).__name__}


class ConfigurationMissingError(MSBuildError, ValueError):
    """Raised when construct() is called without usable options."""

    def __init__(self, message: str = NO_OPTIONS_MESSAGE):
        super().__init__(message)


class ExecutableNotFoundError(MSBuildError, FileNotFoundError):
    """Raised when no MSBuild candidate exists."""

    def __init__(self, message: str, candidates: list[str] | None = None):
        super().__init__(message)
        self.candidates = candidates or []

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.candidates:
            result["candidates"] = list(self.candidates)
        return result


class TemplateError(MSBuildError, ValueError):
    """Raised when a property placeholder cannot be resolved."""

    pass
