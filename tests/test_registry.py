"""
Registry scenarios for both dialects, driven through the facade.

Every creation is checked against the exact expected registry text, and
every deletion must restore the registry byte for byte.
"""

import pytest

from aviators.exceptions import AnchorNotFound, ExistenceConflict, TargetNotFound
from aviators.mutation import FlatRegistry, MarkerRegistry, load_descriptor, registry_for

MARKER_EMPTY = """\
import { Route } from "react-router-dom";

export default function instRoutes() {
  return (
    <Route path="/inst">
        {/* MODULE_ROUTES */}
    </Route>
  );
}
"""

MARKER_WITH_MODULE = """\
import { Route } from "react-router-dom";

import { Attendance } from "../modules/attendance/Attendance";
export default function instRoutes() {
  return (
    <Route path="/inst">
        <Route path="attendance" element={<Attendance />}>
          {/* PAGE_ROUTES_ATTENDANCE */}
        </Route>
        {/* MODULE_ROUTES */}
    </Route>
  );
}
"""

MARKER_WITH_PAGE = """\
import { Route } from "react-router-dom";

import { Attendance } from "../modules/attendance/Attendance";
import { Class } from "../modules/attendance/pages/Class";
export default function instRoutes() {
  return (
    <Route path="/inst">
        <Route path="attendance" element={<Attendance />}>
          <Route path="class" element={<Class />} />
          {/* PAGE_ROUTES_ATTENDANCE */}
        </Route>
        {/* MODULE_ROUTES */}
    </Route>
  );
}
"""

FLAT_EMPTY = """\
import type { RouteObject } from "react-router-dom";

export const adminRoutes: RouteObject[] = [
];
"""

FLAT_WITH_MODULE = """\
import { usersRoute } from "../modules/users/users.route";
import type { RouteObject } from "react-router-dom";

export const adminRoutes: RouteObject[] = [
  usersRoute,
];
"""

USERS_ROUTE = """\
import type { RouteObject } from "react-router-dom";
import { Users } from "./Users";

export const usersRoute: RouteObject = {
  path: "users",
  element: <Users />,
  children: [
  ],
};
"""

USERS_ROUTE_WITH_PAGE = """\
import { Details } from "./pages/Details";
import type { RouteObject } from "react-router-dom";
import { Users } from "./Users";

export const usersRoute: RouteObject = {
  path: "users",
  element: <Users />,
  children: [
    { path: "details", element: <Details /> },
  ],
};
"""


class TestDescriptor:
    """Dialect selection per role."""

    def test_descriptor_selects_dialect(self, facade, marker_role, flat_role):
        assert isinstance(registry_for(facade.paths, "inst"), MarkerRegistry)
        assert isinstance(registry_for(facade.paths, "admin"), FlatRegistry)

    def test_missing_descriptor_falls_back_to_content(self, facade, flat_role):
        facade.paths.role_descriptor("admin").unlink()
        assert load_descriptor(facade.paths, "admin").dialect == "flat"

    def test_unknown_role(self, facade):
        with pytest.raises(TargetNotFound, match="Role not found"):
            registry_for(facade.paths, "ghost")


class TestMarkerDialect:
    """Nested <Route> blocks anchored on sentinel comments."""

    def test_new_role_registry(self, marker_role):
        assert marker_role.read_text() == MARKER_EMPTY

    def test_module_then_page(self, facade, marker_role):
        facade.create_module("inst", "attendance")
        assert marker_role.read_text() == MARKER_WITH_MODULE
        assert (facade.paths.module_dir("inst", "attendance") / "Attendance.tsx").exists()
        assert facade.paths.pages_dir("inst", "attendance").is_dir()

        facade.create_page("inst", "attendance", "class")
        assert marker_role.read_text() == MARKER_WITH_PAGE
        assert (facade.paths.pages_dir("inst", "attendance") / "Class.tsx").exists()

    def test_delete_page_restores_registry(self, facade, marker_role):
        facade.create_module("inst", "attendance")
        facade.create_page("inst", "attendance", "class")

        facade.delete_page("inst", "attendance", "class")

        assert marker_role.read_text() == MARKER_WITH_MODULE
        assert not (facade.paths.pages_dir("inst", "attendance") / "Class.tsx").exists()

    def test_delete_module_restores_registry(self, facade, marker_role):
        facade.create_module("inst", "attendance")

        facade.delete_module("inst", "attendance")

        assert marker_role.read_text() == MARKER_EMPTY
        assert not facade.paths.module_dir("inst", "attendance").exists()

    def test_delete_module_drops_its_page_imports(self, facade, marker_role):
        facade.create_module("inst", "attendance")
        facade.create_page("inst", "attendance", "class")

        facade.delete_module("inst", "attendance")

        assert marker_role.read_text() == MARKER_EMPTY

    def test_duplicate_module_is_rejected(self, facade, marker_role):
        facade.create_module("inst", "attendance")
        with pytest.raises(ExistenceConflict, match="Module exists"):
            facade.create_module("inst", "attendance")
        assert marker_role.read_text() == MARKER_WITH_MODULE

    def test_page_name_clash_is_rejected_before_writing(self, facade, marker_role):
        facade.create_module("inst", "attendance")
        facade.create_module("inst", "grades")
        facade.create_page("inst", "attendance", "class")
        before = marker_role.read_text()

        with pytest.raises(ExistenceConflict):
            facade.create_page("inst", "grades", "class")

        assert marker_role.read_text() == before
        assert not (facade.paths.pages_dir("inst", "grades") / "Class.tsx").exists()

    def test_many_modules_keep_their_anchors(self, facade, marker_role):
        names = ["alpha", "bravo", "charlie", "delta", "echo"]
        for name in names:
            facade.create_module("inst", name)

        facade.delete_module("inst", "charlie")
        content = marker_role.read_text()

        assert content.count("{/* MODULE_ROUTES */}") == 1
        assert "Charlie" not in content
        assert 'path="charlie"' not in content
        for name in ["alpha", "bravo", "delta", "echo"]:
            assert f"{{/* PAGE_ROUTES_{name.upper()} */}}" in content
            facade.create_page("inst", name, f"{name}-page")

        for name in reversed(["alpha", "bravo", "delta", "echo"]):
            facade.delete_module("inst", name)
        assert marker_role.read_text() == MARKER_EMPTY

    def test_module_whose_name_prefixes_another(self, facade, marker_role):
        facade.create_module("inst", "class-room")
        with_class_room = marker_role.read_text()

        facade.create_module("inst", "class")
        content = marker_role.read_text()

        assert '<Route path="class" element={<Class />}>' in content
        assert "{/* PAGE_ROUTES_CLASS */}" in content
        assert '<Route path="class-room" element={<ClassRoom />}>' in content
        assert "{/* PAGE_ROUTES_CLASS_ROOM */}" in content

        facade.delete_module("inst", "class")
        assert marker_role.read_text() == with_class_room
        assert facade.paths.module_dir("inst", "class-room").is_dir()

    def test_page_whose_name_prefixes_another(self, facade, marker_role):
        facade.create_module("inst", "attendance")
        facade.create_page("inst", "attendance", "class-room")
        with_class_room = marker_role.read_text()

        facade.create_page("inst", "attendance", "class")
        content = marker_role.read_text()

        assert '<Route path="class" element={<Class />} />' in content
        assert '<Route path="class-room" element={<ClassRoom />} />' in content

        facade.delete_page("inst", "attendance", "class")
        assert marker_role.read_text() == with_class_room
        assert (facade.paths.pages_dir("inst", "attendance") / "ClassRoom.tsx").exists()

    def test_missing_root_marker_fails_before_any_write(self, facade, marker_role):
        hand_edited = MARKER_EMPTY.replace("        {/* MODULE_ROUTES */}\n", "")
        marker_role.write_text(hand_edited)

        with pytest.raises(AnchorNotFound, match="MODULE_ROUTES"):
            facade.create_module("inst", "attendance")

        assert marker_role.read_text() == hand_edited
        assert not facade.paths.module_dir("inst", "attendance").exists()
        assert facade.pending_intents() == []

    def test_page_under_unknown_module(self, facade, marker_role):
        with pytest.raises(TargetNotFound, match="Module not found"):
            facade.create_page("inst", "ghost", "class")


class TestFlatDialect:
    """Route array registries with per-module route files."""

    def test_new_role_registry(self, flat_role):
        assert flat_role.read_text() == FLAT_EMPTY

    def test_module_registration(self, facade, flat_role):
        facade.create_module("admin", "users")

        assert flat_role.read_text() == FLAT_WITH_MODULE
        route_file = facade.paths.module_dir("admin", "users") / "users.route.tsx"
        assert route_file.read_text() == USERS_ROUTE

    def test_second_module_goes_first_in_array(self, facade, flat_role):
        facade.create_module("admin", "users")
        facade.create_module("admin", "audit-log")

        content = flat_role.read_text()
        assert "[\n  auditLogRoute,\n  usersRoute,\n];" in content
        assert content.startswith('import { auditLogRoute } from "../modules/audit-log/audit-log.route";\n')

    def test_delete_module_restores_registry(self, facade, flat_role):
        facade.create_module("admin", "users")

        facade.delete_module("admin", "users")

        assert flat_role.read_text() == FLAT_EMPTY

    def test_pages_go_into_module_route_file(self, facade, flat_role):
        facade.create_module("admin", "users")
        route_file = facade.paths.module_dir("admin", "users") / "users.route.tsx"

        facade.create_page("admin", "users", "details")
        assert route_file.read_text() == USERS_ROUTE_WITH_PAGE
        assert flat_role.read_text() == FLAT_WITH_MODULE

        facade.delete_page("admin", "users", "details")
        assert route_file.read_text() == USERS_ROUTE

    def test_route_variable_clash_is_rejected(self, facade, flat_role):
        facade.create_module("admin", "users")
        with pytest.raises(ExistenceConflict):
            facade.create_module("admin", "Users")

    def test_missing_array_fails_before_any_write(self, facade, flat_role):
        flat_role.write_text("export const somethingElse = [];\n")

        with pytest.raises(AnchorNotFound):
            facade.create_module("admin", "users")
        assert not facade.paths.module_dir("admin", "users").exists()

    def test_module_whose_route_symbol_suffixes_another(self, facade, flat_role):
        facade.create_module("admin", "subdashboard")
        with_subdashboard = flat_role.read_text()

        facade.create_module("admin", "dashboard")
        content = flat_role.read_text()

        assert "[\n  dashboardRoute,\n  subdashboardRoute,\n];" in content
        assert 'import { dashboardRoute } from "../modules/dashboard/dashboard.route";\n' in content

        facade.delete_module("admin", "dashboard")
        assert flat_role.read_text() == with_subdashboard

        facade.delete_module("admin", "subdashboard")
        assert flat_role.read_text() == FLAT_EMPTY
