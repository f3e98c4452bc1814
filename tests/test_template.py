"""Tests for property value templates."""

from types import SimpleNamespace

import pytest

from msbuild_mcp.errors import TemplateError
from msbuild_mcp.utils.template import make_renderer, render


class TestRender:
    """Tests for render."""

    def test_no_placeholder(self):
        """Test that plain strings pass through unchanged."""
        assert render("noTemplate", {}) == "noTemplate"

    def test_mapping_lookup(self):
        assert render("<%= file.path %>", {"file": {"path": "test.sln"}}) == "test.sln"

    def test_attribute_lookup(self):
        file = SimpleNamespace(path="src/App.csproj")

        assert render("<%=file.path%>", {"file": file}) == "src/App.csproj"

    def test_nested_lookup(self):
        file = SimpleNamespace(stat=SimpleNamespace(size=42))

        assert render("size=<%= file.stat.size %>", {"file": file}) == "size=42"

    def test_multiple_placeholders(self):
        namespace = {"file": {"path": "a.sln", "base": "/repo"}}

        assert render("<%= file.base %>|<%= file.path %>", namespace) == "/repo|a.sln"

    def test_unknown_variable(self):
        with pytest.raises(TemplateError, match="Unknown template variable: other"):
            render("<%= other.path %>", {"file": {}})

    def test_unknown_field(self):
        with pytest.raises(TemplateError, match="file.missing"):
            render("<%= file.missing %>", {"file": SimpleNamespace(path="a")})

    def test_non_interpolating_tags_untouched(self):
        """Test that only <%= %> tags are substituted."""
        assert render("<% file.path %>", {"file": {"path": "a"}}) == "<% file.path %>"


class TestMakeRenderer:
    """Tests for make_renderer."""

    def test_binds_context_as_file(self):
        render_for = make_renderer({"path": "test.sln"})

        assert render_for("<%= file.path %>") == "test.sln"
        assert render_for("plain") == "plain"
