"""
Registry mutator: module and page routes in a role's registry file.

Two mutually exclusive registry shapes exist:

- marker dialect: a tree of nested ``<Route>`` blocks, each level ending in
  a sentinel comment that marks where its children are inserted;
- flat dialect: an exported array of route-descriptor variables, imports
  prepended at the top of the file.

The dialect of a role is read from its descriptor
(``Roles/<Role>/.aviators-role.json``), not re-derived from file content.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError

from aviators.exceptions import AnchorNotFound, ConfigError, TargetNotFound
from aviators.logging_config import logger
from aviators.naming import camel
from aviators.paths import ProjectPaths
from aviators.schemas import RoleDescriptor
from aviators.templates import TemplateRenderer, get_renderer
from .config import (
    EXPORT_ANCHOR,
    FLAT_PAGE_IMPORT_TEMPLATE,
    MODULE_IMPORT_TEMPLATE,
    MODULE_ROUTE_IMPORT_TEMPLATE,
    PAGE_IMPORT_TEMPLATE,
    ROOT_SENTINEL,
)
from .editor import FileEditor
from .guard import NameGuard
from .injector import Anchor, MarkerInjector, array_head
from .remover import PatternRemover

CHILDREN_HEAD = re.compile(r"\bchildren\s*:\s*\[")


@dataclass(frozen=True)
class ModuleRef:
    role: str
    segment: str  # route path segment and directory name
    name: str  # canonical component name

    @property
    def route_symbol(self) -> str:
        """Route-descriptor variable of the flat dialect."""
        return f"{camel(self.segment)}Route"


@dataclass(frozen=True)
class PageRef:
    module: ModuleRef
    segment: str
    name: str


def registry_symbol(role: str) -> str:
    """Function (marker) or array (flat) name exported by a role registry."""
    return f"{role}Routes"


class RegistryDialect:
    """
    Base class for the two registry shapes.

    Subclasses implement guard/add/remove for modules and pages. ``add_*``
    returns whether any file changed (False on an idempotent re-run);
    ``remove_*`` returns whether anything was found and removed.
    """

    dialect = ""

    def __init__(
        self,
        paths: ProjectPaths,
        renderer: Optional[TemplateRenderer] = None,
        editor: Optional[FileEditor] = None,
    ):
        self.paths = paths
        self.renderer = renderer or get_renderer()
        editor = editor or FileEditor()
        self.injector = MarkerInjector(editor)
        self.remover = PatternRemover(editor)
        self.guard = NameGuard(editor)

    def registry_file(self, role: str) -> Path:
        return self.paths.registry_file(role)

    def module_files(self, ref: ModuleRef) -> List[Path]:
        """Files mutated when a module is added or removed."""
        return [self.registry_file(ref.role)]

    def page_files(self, ref: PageRef) -> List[Path]:
        """Files mutated when a page is added or removed."""
        return [self.registry_file(ref.module.role)]

    def module_context(self, ref: ModuleRef) -> Dict[str, str]:
        """Template variables for the module's own files."""
        return {"segment": ref.segment, "dialect": self.dialect, "route_symbol": ref.route_symbol}

    def require_anchors(self, file_path: Path, anchors: List[Anchor]) -> None:
        """
        Fail before any write when the file lacks an anchor this dialect needs.

        Raises:
            AnchorNotFound: On the first missing anchor.
            TargetNotFound: If the file does not exist.
        """
        content = self.injector.editor.read(file_path)
        for anchor in anchors:
            found = anchor in content if isinstance(anchor, str) else anchor.search(content)
            if not found:
                label = anchor if isinstance(anchor, str) else anchor.pattern
                logger.error(f"Marker not found in {file_path}: {label}")
                raise AnchorNotFound(str(file_path), label)

    def _import_line(self, name: str, source: str) -> str:
        return self.renderer.snippet("named_import", name=name, source=source)

    def guard_module(self, ref: ModuleRef) -> None:
        raise NotImplementedError

    def add_module(self, ref: ModuleRef) -> bool:
        raise NotImplementedError

    def remove_module(self, ref: ModuleRef) -> bool:
        raise NotImplementedError

    def guard_page(self, ref: PageRef) -> None:
        raise NotImplementedError

    def add_page(self, ref: PageRef) -> bool:
        raise NotImplementedError

    def remove_page(self, ref: PageRef) -> bool:
        raise NotImplementedError


class MarkerRegistry(RegistryDialect):
    """Nested ``<Route>`` blocks anchored on sentinel comments."""

    dialect = "marker"

    def module_sentinel(self, segment: str) -> str:
        return self.renderer.snippet("module_sentinel", segment=segment)

    def guard_module(self, ref: ModuleRef) -> None:
        registry = self.registry_file(ref.role)
        self.require_anchors(registry, [EXPORT_ANCHOR, ROOT_SENTINEL])
        self.guard.ensure_unique(registry, [ref.name, self.module_sentinel(ref.segment)])

    def add_module(self, ref: ModuleRef) -> bool:
        registry = self.registry_file(ref.role)
        source = MODULE_IMPORT_TEMPLATE.format(segment=ref.segment, name=ref.name)
        block = self.renderer.snippet(
            "module_block",
            segment=ref.segment,
            name=ref.name,
            sentinel=self.module_sentinel(ref.segment),
        )

        imported = self.injector.inject_above_export(registry, self._import_line(ref.name, source))
        routed = self.injector.inject_before(registry, ROOT_SENTINEL, block)
        logger.info(f"Registered module '{ref.segment}' in {registry}")
        return imported.changed or routed.changed

    def remove_module(self, ref: ModuleRef) -> bool:
        registry = self.registry_file(ref.role)
        removed_import = self.remover.remove_import(registry, ref.name)
        # Page imports would be orphaned once the module block is gone
        pages_prefix = PAGE_IMPORT_TEMPLATE.format(segment=ref.segment, name="")
        removed_pages = self.remover.remove_imports_from(registry, pages_prefix)
        removed_block = self.remover.remove_route_block(registry, ref.segment)
        return removed_import or removed_pages or removed_block

    def guard_page(self, ref: PageRef) -> None:
        registry = self.registry_file(ref.module.role)
        self.require_anchors(registry, [EXPORT_ANCHOR, self.module_sentinel(ref.module.segment)])
        self.guard.ensure_unique(registry, [ref.name])

    def add_page(self, ref: PageRef) -> bool:
        registry = self.registry_file(ref.module.role)
        source = PAGE_IMPORT_TEMPLATE.format(segment=ref.module.segment, name=ref.name)
        leaf = self.renderer.snippet("page_leaf", segment=ref.segment, name=ref.name)

        imported = self.injector.inject_above_export(registry, self._import_line(ref.name, source))
        routed = self.injector.inject_before(registry, self.module_sentinel(ref.module.segment), leaf)
        logger.info(f"Registered page '{ref.segment}' under '{ref.module.segment}' in {registry}")
        return imported.changed or routed.changed

    def remove_page(self, ref: PageRef) -> bool:
        registry = self.registry_file(ref.module.role)
        removed_import = self.remover.remove_import(registry, ref.name)
        removed_leaf = self.remover.remove_route_block(registry, ref.segment, ref.module.segment)
        return removed_import or removed_leaf


class FlatRegistry(RegistryDialect):
    """A single exported array of route-descriptor variables."""

    dialect = "flat"

    def module_route_file(self, ref: ModuleRef) -> Path:
        return self.paths.module_dir(ref.role, ref.segment) / f"{ref.segment}.route.tsx"

    def page_files(self, ref: PageRef) -> List[Path]:
        return [self.module_route_file(ref.module)]

    def guard_module(self, ref: ModuleRef) -> None:
        registry = self.registry_file(ref.role)
        self.require_anchors(registry, [array_head(registry_symbol(ref.role))])
        self.guard.ensure_unique(registry, [ref.route_symbol])

    def add_module(self, ref: ModuleRef) -> bool:
        registry = self.registry_file(ref.role)
        source = MODULE_ROUTE_IMPORT_TEMPLATE.format(segment=ref.segment)
        entry = self.renderer.snippet("flat_entry", route_symbol=ref.route_symbol)

        imported = self.injector.inject_at_head(registry, self._import_line(ref.route_symbol, source))
        listed = self.injector.inject_after(registry, array_head(registry_symbol(ref.role)), entry)
        logger.info(f"Registered module '{ref.segment}' as {ref.route_symbol} in {registry}")
        return imported.changed or listed.changed

    def remove_module(self, ref: ModuleRef) -> bool:
        # Matches both the import and the array element; safe because the
        # guard keeps the route variable unique within the registry.
        return self.remover.remove_lines_containing(self.registry_file(ref.role), ref.route_symbol)

    def guard_page(self, ref: PageRef) -> None:
        route_file = self.module_route_file(ref.module)
        if not route_file.exists():
            raise TargetNotFound(str(route_file))
        self.require_anchors(route_file, [CHILDREN_HEAD])
        self.guard.ensure_unique(route_file, [ref.name])

    def add_page(self, ref: PageRef) -> bool:
        route_file = self.module_route_file(ref.module)
        source = FLAT_PAGE_IMPORT_TEMPLATE.format(name=ref.name)
        entry = self.renderer.snippet("flat_page_entry", segment=ref.segment, name=ref.name)

        imported = self.injector.inject_at_head(route_file, self._import_line(ref.name, source))
        listed = self.injector.inject_after(route_file, CHILDREN_HEAD, entry)
        logger.info(f"Registered page '{ref.segment}' in {route_file}")
        return imported.changed or listed.changed

    def remove_page(self, ref: PageRef) -> bool:
        route_file = self.module_route_file(ref.module)
        if not route_file.exists():
            return False
        return self.remover.remove_lines_containing(route_file, ref.name)


DIALECT_CLASSES = {
    MarkerRegistry.dialect: MarkerRegistry,
    FlatRegistry.dialect: FlatRegistry,
}


def save_descriptor(paths: ProjectPaths, descriptor: RoleDescriptor) -> Path:
    """Persist a role descriptor next to the role's directories."""
    path = paths.role_descriptor(descriptor.name)
    path.write_text(descriptor.model_dump_json(indent=2) + "\n", encoding="utf-8")
    return path


def load_descriptor(paths: ProjectPaths, role: str, editor: Optional[FileEditor] = None) -> RoleDescriptor:
    """
    Read a role's descriptor.

    Roles created without one fall back to inspecting the registry text.

    Raises:
        TargetNotFound: If the role or its registry does not exist.
        ConfigError: If the descriptor is unreadable.
        AnchorNotFound: If neither dialect's shape is recognised.
    """
    if not paths.role_dir(role).is_dir():
        raise TargetNotFound(role, f"Role not found → {role}")

    path = paths.role_descriptor(role)
    if path.exists():
        try:
            return RoleDescriptor.model_validate_json(path.read_text(encoding="utf-8"))
        except ValidationError as e:
            raise ConfigError(f"Invalid role descriptor {path}: {e}") from e

    editor = editor or FileEditor()
    registry = paths.registry_file(role)
    content = editor.read(registry)
    logger.warning(f"Role '{role}' has no descriptor; inferring dialect from {registry}")
    if ROOT_SENTINEL in content:
        return RoleDescriptor(name=role, dialect="marker")
    if array_head(registry_symbol(role)).search(content):
        return RoleDescriptor(name=role, dialect="flat")
    raise AnchorNotFound(str(registry), f"{ROOT_SENTINEL} or {registry_symbol(role)} array")


def registry_for(
    paths: ProjectPaths,
    role: str,
    renderer: Optional[TemplateRenderer] = None,
) -> RegistryDialect:
    """Registry mutator matching the role's recorded dialect."""
    descriptor = load_descriptor(paths, role)
    return DIALECT_CLASSES[descriptor.dialect](paths, renderer)
