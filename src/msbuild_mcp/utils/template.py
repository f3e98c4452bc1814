"""Placeholder substitution for MSBuild property values.

Property values may reference the file being built with lodash-style
interpolation, e.g. ``<%= file.path %>``. Only dotted name lookups are
supported; there is no expression evaluation.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any, Final

from ..errors import TemplateError

PLACEHOLDER_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"<%=\s*(?P<name>[A-Za-z_][\w]*(?:\.[A-Za-z_][\w]*)*)\s*%>"
)


def _lookup(namespace: Mapping[str, Any], dotted: str) -> Any:
    """Resolve ``a.b.c`` against mappings and object attributes."""
    head, *rest = dotted.split(".")
    if head not in namespace:
        raise TemplateError(f"Unknown template variable: {head}")
    value = namespace[head]
    for part in rest:
        if isinstance(value, Mapping):
            if part not in value:
                raise TemplateError(f"Cannot resolve '{dotted}' in template")
            value = value[part]
        elif hasattr(value, part):
            value = getattr(value, part)
        else:
            raise TemplateError(f"Cannot resolve '{dotted}' in template")
    return value


def render(template: str, namespace: Mapping[str, Any]) -> str:
    """Replace every placeholder in template with its value from namespace.

    Args:
        template: String possibly containing ``<%= name.field %>`` placeholders
        namespace: Top-level template variables (e.g. ``{"file": context}``)

    Returns:
        Rendered string; templates without placeholders are returned as-is

    Raises:
        TemplateError: If a placeholder cannot be resolved
    """
    if "<%" not in template:
        return template
    return PLACEHOLDER_PATTERN.sub(
        lambda match: str(_lookup(namespace, match.group("name"))), template
    )


def make_renderer(context: Any) -> Callable[[str], str]:
    """Bind an invocation context, exposed as ``file``, to render()."""
    namespace = {"file": context}
    return lambda template: render(template, namespace)
