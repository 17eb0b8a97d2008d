"""
Tests for MarkerInjector and FileEditor: anchor-based insertion, exactly
once, with the surrounding text preserved.
"""

import pytest

from aviators.exceptions import AnchorNotFound, TargetNotFound
from aviators.mutation import FileEditor, MarkerInjector
from aviators.mutation.injector import (
    already_present,
    append_line,
    array_head,
    insert_after,
    insert_at_head,
    insert_before,
    reindent,
)


class TestPureInsertions:
    """Text-level insertion functions."""

    def test_reindent(self):
        assert reindent("a\nb\n\nc", "  ") == "a\n  b\n\n  c"

    def test_insert_before_takes_anchor_indentation(self):
        content = "a\n    X\nb"
        result = insert_before(content, "X", "line1\nline2")
        assert result == "a\n    line1\n    line2\n    X\nb"

    def test_insert_before_is_idempotent(self):
        content = "a\n    X\nb"
        once = insert_before(content, "X", "line1\nline2")
        assert insert_before(once, "X", "line1\nline2") == once

    def test_insert_before_first_occurrence_only(self):
        content = "X\nX\n"
        assert insert_before(content, "X", "new") == "new\nX\nX\n"

    def test_insert_before_missing_anchor(self):
        with pytest.raises(AnchorNotFound) as exc:
            insert_before("no anchor here", "{/* MODULE_ROUTES */}", "x", "route.tsx")
        assert "route.tsx" in str(exc.value)
        assert "{/* MODULE_ROUTES */}" in str(exc.value)

    def test_insert_after_array_head(self):
        content = "export const r: RouteObject[] = [\n];\n"
        result = insert_after(content, array_head("r"), "a,")
        assert result == "export const r: RouteObject[] = [\n  a,\n];\n"

    def test_insert_after_prepends_to_existing_elements(self):
        content = "export const r: RouteObject[] = [\n  a,\n];\n"
        result = insert_after(content, array_head("r"), "b,")
        assert result == "export const r: RouteObject[] = [\n  b,\n  a,\n];\n"

    def test_array_head_matches_whole_symbol(self):
        content = "export const adminRoutesExtra = [\n];\n"
        assert array_head("adminRoutes").search(content) is None

    def test_insert_at_head(self):
        assert insert_at_head("b\n", "a") == "a\nb\n"
        assert insert_at_head("a\nb\n", "a") == "a\nb\n"

    def test_append_line(self):
        assert append_line("", "x") == "x\n"
        assert append_line("x", "y") == "x\ny\n"
        assert append_line("x\ny\n", "y") == "x\ny\n"

    def test_already_present_ignores_surrounding_whitespace(self):
        assert already_present("    foo();\n", "\nfoo();\n")

    def test_already_present_matches_whole_lines(self):
        assert not already_present("  subdashboardRoute,\n", "dashboardRoute,")
        assert already_present("  subdashboardRoute,\n", "subdashboardRoute,")

    def test_insert_after_entry_that_suffixes_an_existing_one(self):
        content = "export const r: RouteObject[] = [\n  subdashboardRoute,\n];\n"
        result = insert_after(content, array_head("r"), "dashboardRoute,")
        assert result == "export const r: RouteObject[] = [\n  dashboardRoute,\n  subdashboardRoute,\n];\n"

    def test_present_text_needs_no_anchor(self):
        assert insert_before("hello\nnothing\n", "MARK", "hello") == "hello\nnothing\n"
        assert insert_after("hello\n", array_head("r"), "hello") == "hello\n"


class TestMarkerInjector:
    """File-level injection through FileEditor."""

    def test_inject_before_writes_once(self, temp_dir):
        target = temp_dir / "route.tsx"
        target.write_text("start\n  MARK\nend\n")
        injector = MarkerInjector()

        first = injector.inject_before(target, "MARK", "hello")
        second = injector.inject_before(target, "MARK", "hello")

        assert first.changed
        assert not second.changed
        assert target.read_text() == "start\n  hello\n  MARK\nend\n"

    def test_inject_above_export(self, temp_dir):
        target = temp_dir / "route.tsx"
        target.write_text('import { Route } from "x";\n\nexport default function r() {}\n')

        MarkerInjector().inject_above_export(target, 'import { A } from "./A";')

        assert target.read_text() == (
            'import { Route } from "x";\n\nimport { A } from "./A";\nexport default function r() {}\n'
        )

    def test_missing_marker_leaves_file_untouched(self, temp_dir):
        target = temp_dir / "route.tsx"
        target.write_text("nothing to see\n")

        with pytest.raises(AnchorNotFound):
            MarkerInjector().inject_before(target, "MARK", "hello")
        assert target.read_text() == "nothing to see\n"

    def test_present_text_without_marker_is_a_no_op(self, temp_dir):
        target = temp_dir / "route.tsx"
        target.write_text("start\n  hello\nend\n")

        result = MarkerInjector().inject_before(target, "MARK", "hello")

        assert not result.changed
        assert target.read_text() == "start\n  hello\nend\n"

    def test_missing_file(self, temp_dir):
        with pytest.raises(TargetNotFound):
            MarkerInjector().inject_before(temp_dir / "absent.tsx", "MARK", "x")

    def test_append_line_creates_barrel(self, temp_dir):
        barrel = temp_dir / "components" / "index.ts"

        result = MarkerInjector().append_line(barrel, 'export * from "./Button";')

        assert result.changed
        assert barrel.read_text() == 'export * from "./Button";\n'


class TestFileEditor:
    """Line endings and atomic writes."""

    def test_crlf_preserved(self, temp_dir):
        target = temp_dir / "route.tsx"
        target.write_bytes(b"start\r\n  MARK\r\nend\r\n")

        MarkerInjector().inject_before(target, "MARK", "hello")

        data = target.read_bytes()
        assert data == b"start\r\n  hello\r\n  MARK\r\nend\r\n"

    def test_read_normalizes_to_lf(self, temp_dir):
        target = temp_dir / "a.txt"
        target.write_bytes(b"a\r\nb\r\n")
        assert FileEditor().read(target) == "a\nb\n"

    def test_unchanged_transform_does_not_write(self, temp_dir):
        target = temp_dir / "a.txt"
        target.write_text("same\n")

        result = FileEditor().apply(target, lambda content: content, "inject")

        assert not result.changed
        assert list(temp_dir.iterdir()) == [target]

    def test_atomic_write_leaves_no_temp_file(self, temp_dir):
        target = temp_dir / "a.txt"
        target.write_text("old")

        FileEditor().atomic_write(target, "new")

        assert target.read_text() == "new"
        assert [p.name for p in temp_dir.iterdir()] == ["a.txt"]
