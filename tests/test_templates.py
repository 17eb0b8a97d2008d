"""
Tests for the Jinja2 template catalog and renderer.
"""

import pytest
from jinja2.exceptions import UndefinedError

from aviators.exceptions import ArgumentError
from aviators.templates import TemplateRenderer


@pytest.fixture
def renderer():
    return TemplateRenderer()


class TestRender:
    """Test rendering of artifact files."""

    def test_component_files(self, renderer):
        files = renderer.render("component", "Button")

        assert list(files) == ["Button/Button.tsx", "Button/index.ts"]
        assert "export function Button()" in files["Button/Button.tsx"]
        assert files["Button/index.ts"] == 'export * from "./Button";\n'

    def test_single_file_kinds(self, renderer):
        assert list(renderer.render("hook", "useToast")) == ["useToast.ts"]
        assert list(renderer.render("context", "AuthContext")) == ["AuthContext.tsx"]
        assert "export const cartStore" in renderer.render("store", "cartStore")["cartStore.ts"]

    def test_marker_role_registry(self, renderer):
        files = renderer.render(
            "role", "inst", dialect="marker", registry_symbol="instRoutes",
            path="inst", sentinel="{/* MODULE_ROUTES */}",
        )

        assert list(files) == ["routes/route.tsx"]
        registry = files["routes/route.tsx"]
        assert "export default function instRoutes()" in registry
        assert '<Route path="/inst">\n        {/* MODULE_ROUTES */}\n    </Route>' in registry

    def test_flat_role_registry(self, renderer):
        files = renderer.render(
            "role", "admin", dialect="flat", registry_symbol="adminRoutes",
            path="admin", sentinel="{/* MODULE_ROUTES */}",
        )

        assert files["routes/route.tsx"] == (
            'import type { RouteObject } from "react-router-dom";\n'
            "\n"
            "export const adminRoutes: RouteObject[] = [\n"
            "];\n"
        )

    def test_module_route_file_only_for_flat(self, renderer):
        context = {"segment": "attendance", "route_symbol": "attendanceRoute"}

        marker = renderer.render("module", "Attendance", dialect="marker", **context)
        flat = renderer.render("module", "Attendance", dialect="flat", **context)

        assert list(marker) == ["modules/attendance/Attendance.tsx"]
        assert "modules/attendance/attendance.route.tsx" in flat
        assert "children: [" in flat["modules/attendance/attendance.route.tsx"]

    def test_unknown_kind(self, renderer):
        with pytest.raises(ArgumentError):
            renderer.render("widget", "Thing")

    def test_missing_variable_is_an_error(self, renderer):
        """StrictUndefined: a template never renders with a blank hole."""
        with pytest.raises(UndefinedError):
            renderer.render("page", "Class")


class TestSnippets:
    """Test registry fragments."""

    def test_module_sentinel(self, renderer):
        assert renderer.snippet("module_sentinel", segment="user-list") == "{/* PAGE_ROUTES_USER_LIST */}"

    def test_module_block(self, renderer):
        block = renderer.snippet(
            "module_block", segment="attendance", name="Attendance",
            sentinel="{/* PAGE_ROUTES_ATTENDANCE */}",
        )
        assert block == (
            '<Route path="attendance" element={<Attendance />}>\n'
            "  {/* PAGE_ROUTES_ATTENDANCE */}\n"
            "</Route>"
        )

    def test_page_leaf(self, renderer):
        leaf = renderer.snippet("page_leaf", segment="class", name="Class")
        assert leaf == '<Route path="class" element={<Class />} />'

    def test_unknown_snippet(self, renderer):
        with pytest.raises(ArgumentError, match="Unknown snippet"):
            renderer.snippet("nope")

    def test_snippet_accepts_name_variable(self, renderer):
        line = renderer.snippet("named_import", name="Button", source="./Button")
        assert line == 'import { Button } from "./Button";'
