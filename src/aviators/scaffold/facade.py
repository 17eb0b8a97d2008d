"""
ScaffoldFacade: orchestrate generation and deletion commands.

Data flows one direction per command:

    raw name -> canonical name -> rendered templates -> filesystem write
             -> registry mutation

and deletion reverses it (registry entry removed, then files). Composite
commands run under an intent so a failure between the filesystem step and
the registry step can be rolled back (creation) or resumed (deletion) by
``recover``.
"""

from pathlib import Path
from typing import List, Optional

from aviators.exceptions import ArgumentError, ExistenceConflict, RecoveryError, TargetNotFound
from aviators.logging_config import logger
from aviators.mutation import (
    FileEditor,
    IntentJournal,
    MarkerInjector,
    ModuleRef,
    PageRef,
    PatternRemover,
    ROOT_SENTINEL,
    registry_for,
    registry_symbol,
    save_descriptor,
)
from aviators.mutation.registry import DIALECT_CLASSES
from aviators.naming import canonicalize, route_segment
from aviators.paths import ProjectPaths
from aviators.schemas import Artifact, Intent, RoleDescriptor
from aviators.templates import KIND_DIRS, TemplateRenderer, get_renderer
from aviators.user_config import UserConfig
from .filesystem import ensure_file, ensure_folder, remove_path

PACKAGE_KINDS = tuple(KIND_DIRS)


class ScaffoldFacade:
    """
    Main facade for generation commands.

    Every public method either returns an ``Artifact`` describing what was
    written or removed, or raises a typed ``AviatorsError``. Nothing here
    exits the process; the CLI decides the exit status.
    """

    def __init__(
        self,
        paths: ProjectPaths,
        config: Optional[UserConfig] = None,
        renderer: Optional[TemplateRenderer] = None,
    ):
        """
        Initialize the facade.

        Args:
            paths: Project paths
            config: User configuration (loaded from the project root if omitted)
            renderer: Template renderer
        """
        self.paths = paths
        self.config = config or UserConfig(paths.project_root)
        self.renderer = renderer or get_renderer()

        self.editor = FileEditor()
        self.injector = MarkerInjector(self.editor)
        self.remover = PatternRemover(self.editor)
        self.journal = IntentJournal(
            paths.intents_dir,
            enabled=bool(self.config.get("journal.enabled", True)),
            editor=self.editor,
        )

    # -- Project -----------------------------------------------------------

    def init_project(self) -> List[Path]:
        """
        Create the package barrels and the roles directory.

        Returns:
            Paths that did not exist before
        """
        created = []
        for kind_dir in KIND_DIRS.values():
            index = self.paths.package_index(kind_dir)
            if not index.exists():
                ensure_file(index, "")
                created.append(index)

        if not self.paths.roles_root.is_dir():
            ensure_folder(self.paths.roles_root)
            created.append(self.paths.roles_root)

        logger.info(f"Initialized project at {self.paths.src_root} ({len(created)} new path(s))")
        return created

    # -- Packages ----------------------------------------------------------

    def create_package(self, kind: str, raw: str) -> Artifact:
        """
        Render a package artifact and add it to its kind's barrel.

        Raises:
            ArgumentError: Unknown kind or invalid name.
            TargetNotFound: The kind's package directory is missing.
            ExistenceConflict: A file of the artifact already exists.
        """
        name, base = self._package_target(kind, raw)
        targets = {base / rel: content for rel, content in self.renderer.render(kind, name).items()}
        for path in targets:
            if path.exists():
                raise ExistenceConflict(str(path))

        index = self.paths.package_index(KIND_DIRS[kind])
        with self.journal.track(kind, [raw], "create") as intent:
            self.journal.record_created(intent, self._package_root(kind, name, base))
            for path, content in targets.items():
                ensure_file(path, content)

            self.journal.snapshot(intent, index)
            entry = self.injector.append_line(index, self.renderer.snippet("index_export", name=name))

        logger.info(f"Created {kind} {name}")
        return Artifact(
            kind=kind,
            name=raw,
            rendered_name=name,
            file_paths=[str(p) for p in targets],
            registered=entry.changed,
        )

    def delete_package(self, kind: str, raw: str, missing_ok: bool = False) -> Artifact:
        """
        Remove a package artifact and its barrel line.

        Raises:
            ArgumentError: Unknown kind or invalid name.
            TargetNotFound: The artifact does not exist.
        """
        name, base = self._package_target(kind, raw)
        target = self._package_root(kind, name, base)
        if not target.exists() and not missing_ok:
            raise TargetNotFound(str(target))

        index = self.paths.package_index(KIND_DIRS[kind])
        removed_entry = False
        with self.journal.track(f"delete-{kind}", [raw], "delete") as intent:
            if index.exists():
                self.journal.snapshot(intent, index)
                removed_entry = self.remover.remove_index_export(index, name)
            remove_path(target, missing_ok=missing_ok)

        logger.info(f"Deleted {kind} {name}")
        return Artifact(
            kind=kind, name=raw, rendered_name=name, file_paths=[str(target)], registered=removed_entry
        )

    def _package_target(self, kind: str, raw: str):
        if kind not in KIND_DIRS:
            raise ArgumentError(f"Unknown package kind: {kind}")
        name = canonicalize(kind, raw)
        base = self.paths.package_dir(KIND_DIRS[kind])
        if not base.is_dir():
            rel = base.relative_to(self.paths.src_root)
            raise TargetNotFound(str(base), f"Missing {rel} (run 'aviators init')")
        return name, base

    def _package_root(self, kind: str, name: str, base: Path) -> Path:
        """Directory (components) or single file owned by a package artifact."""
        if kind == "component":
            return base / name
        rel_path = next(iter(self.renderer.render(kind, name)))
        return base / rel_path

    # -- Roles -------------------------------------------------------------

    def create_role(self, raw: str, dialect: Optional[str] = None) -> Artifact:
        """
        Scaffold a role directory tree, an empty registry and its descriptor.

        Args:
            raw: Role name
            dialect: Registry dialect (defaults to registry.default_dialect)

        Raises:
            ArgumentError: Invalid role name or dialect.
            ExistenceConflict: The role already exists.
        """
        role = canonicalize("role", raw)
        dialect = dialect or self.config.get("registry.default_dialect")
        if dialect not in DIALECT_CLASSES:
            raise ArgumentError(
                f"Unknown dialect '{dialect}' (expected one of: {', '.join(DIALECT_CLASSES)})"
            )

        role_dir = self.paths.role_dir(role)
        if role_dir.exists():
            raise ExistenceConflict(role, f"Role exists → {role}")

        files = self.renderer.render(
            "role",
            role,
            dialect=dialect,
            registry_symbol=registry_symbol(role),
            path=role.lower(),
            sentinel=ROOT_SENTINEL,
        )

        with self.journal.track("role", [raw], "create") as intent:
            self.journal.record_created(intent, role_dir)
            for subdir in ProjectPaths.ROLE_SUBDIRS:
                ensure_folder(role_dir / subdir)
            for rel, content in files.items():
                ensure_file(role_dir / rel, content)
            descriptor = save_descriptor(self.paths, RoleDescriptor(name=role, dialect=dialect))

        logger.info(f"Created role {role} ({dialect} dialect)")
        return Artifact(
            kind="role",
            name=raw,
            rendered_name=role,
            file_paths=[str(role_dir / rel) for rel in files] + [str(descriptor)],
        )

    def delete_role(self, raw: str) -> Artifact:
        """
        Remove an entire role directory tree.

        Raises:
            TargetNotFound: The role does not exist.
        """
        role = canonicalize("role", raw)
        role_dir = self.paths.role_dir(role)
        if not role_dir.is_dir():
            raise TargetNotFound(role, f"Role not found → {role}")
        remove_path(role_dir)
        logger.info(f"Deleted role {role}")
        return Artifact(kind="role", name=raw, rendered_name=role, file_paths=[str(role_dir)])

    # -- Modules -----------------------------------------------------------

    def create_module(self, role: str, raw: str) -> Artifact:
        """
        Scaffold a module and register it in the role registry.

        Raises:
            TargetNotFound: The role does not exist.
            ExistenceConflict: The module directory or one of its
                identifiers already exists.
            AnchorNotFound: The registry does not match its dialect.
        """
        registry, ref = self._module(role, raw)
        module_dir = self.paths.module_dir(ref.role, ref.segment)
        if module_dir.exists():
            raise ExistenceConflict(f"{ref.role}/{ref.segment}", f"Module exists → {ref.role}/{ref.segment}")

        registry.guard_module(ref)
        role_dir = self.paths.role_dir(ref.role)
        targets = {
            role_dir / rel: content
            for rel, content in self.renderer.render("module", ref.name, **registry.module_context(ref)).items()
        }

        with self.journal.track("module", [role, raw], "create") as intent:
            self.journal.record_created(intent, module_dir)
            ensure_folder(self.paths.pages_dir(ref.role, ref.segment))
            for path, content in targets.items():
                ensure_file(path, content)

            for path in registry.module_files(ref):
                self.journal.snapshot(intent, path)
            registered = registry.add_module(ref)

        return Artifact(
            kind="module",
            name=raw,
            rendered_name=ref.name,
            file_paths=[str(p) for p in targets],
            registered=registered,
        )

    def delete_module(self, role: str, raw: str, missing_ok: bool = False) -> Artifact:
        """
        Remove a module's registry entries, then its directory tree.

        Raises:
            TargetNotFound: The role or module does not exist.
        """
        registry, ref = self._module(role, raw)
        module_dir = self.paths.module_dir(ref.role, ref.segment)
        if not module_dir.exists() and not missing_ok:
            raise TargetNotFound(f"{ref.role}/{ref.segment}", f"Module not found → {ref.role}/{ref.segment}")

        with self.journal.track("delete-module", [role, raw], "delete") as intent:
            for path in registry.module_files(ref):
                self.journal.snapshot(intent, path)
            removed = registry.remove_module(ref)
            if not removed:
                logger.warning(f"No registry entry for module '{ref.segment}' in role '{ref.role}'")
            remove_path(module_dir, missing_ok=True)

        return Artifact(
            kind="module", name=raw, rendered_name=ref.name, file_paths=[str(module_dir)], registered=removed
        )

    def _module(self, role: str, raw: str):
        role = canonicalize("role", role)
        name = canonicalize("module", raw)
        segment = route_segment(raw)
        registry = registry_for(self.paths, role, self.renderer)
        return registry, ModuleRef(role=role, segment=segment, name=name)

    # -- Pages -------------------------------------------------------------

    def create_page(self, role: str, module: str, raw: str) -> Artifact:
        """
        Scaffold a page and register it in its module's route slot.

        Raises:
            TargetNotFound: The role or module does not exist.
            ExistenceConflict: The page file or its identifier already exists.
            AnchorNotFound: The module's slot is missing from the registry.
        """
        registry, ref = self._page(role, module, raw)
        role_dir = self.paths.role_dir(ref.module.role)
        targets = {
            role_dir / rel: content
            for rel, content in self.renderer.render("page", ref.name, segment=ref.module.segment).items()
        }
        for path in targets:
            if path.exists():
                raise ExistenceConflict(str(path))

        registry.guard_page(ref)

        with self.journal.track("page", [role, module, raw], "create") as intent:
            for path, content in targets.items():
                self.journal.record_created(intent, path)
                ensure_file(path, content)

            for path in registry.page_files(ref):
                self.journal.snapshot(intent, path)
            registered = registry.add_page(ref)

        return Artifact(
            kind="page",
            name=raw,
            rendered_name=ref.name,
            file_paths=[str(p) for p in targets],
            registered=registered,
        )

    def delete_page(self, role: str, module: str, raw: str, missing_ok: bool = False) -> Artifact:
        """
        Remove a page's registry entries, then its file.

        Raises:
            TargetNotFound: The role, module or page does not exist.
        """
        registry, ref = self._page(role, module, raw)
        page_file = self.paths.pages_dir(ref.module.role, ref.module.segment) / f"{ref.name}.tsx"
        if not page_file.exists() and not missing_ok:
            raise TargetNotFound(str(page_file))

        with self.journal.track("delete-page", [role, module, raw], "delete") as intent:
            for path in registry.page_files(ref):
                if path.exists():
                    self.journal.snapshot(intent, path)
            removed = registry.remove_page(ref)
            if not removed:
                logger.warning(f"No registry entry for page '{ref.segment}' under '{ref.module.segment}'")
            remove_path(page_file, missing_ok=True)

        return Artifact(
            kind="page", name=raw, rendered_name=ref.name, file_paths=[str(page_file)], registered=removed
        )

    def _page(self, role: str, module: str, raw: str):
        registry, module_ref = self._module(role, module)
        if not self.paths.module_dir(module_ref.role, module_ref.segment).is_dir():
            raise TargetNotFound(
                f"{module_ref.role}/{module_ref.segment}",
                f"Module not found → {module_ref.role}/{module_ref.segment}",
            )
        ref = PageRef(module=module_ref, segment=route_segment(raw), name=canonicalize("page", raw))
        return registry, ref

    # -- Recovery ----------------------------------------------------------

    def pending_intents(self) -> List[Intent]:
        return self.journal.pending()

    def recover(self, intent: Intent) -> List[str]:
        """
        Recover one pending intent.

        Creations are rolled back (registry snapshots restored, created
        paths removed). Deletions are resumed: the deletion re-runs and
        tolerates targets that are already gone.

        Returns:
            Human-readable list of what was done
        """
        if intent.mode == "create":
            return [f"restored/removed {p}" for p in self.journal.rollback(intent)]

        kind = intent.verb[len("delete-"):]
        if kind not in PACKAGE_KINDS + ("module", "page"):
            raise RecoveryError(f"Cannot resume '{intent.verb}'")

        self.journal.discard(intent)
        if kind in KIND_DIRS:
            self.delete_package(kind, *intent.args, missing_ok=True)
        elif kind == "module":
            self.delete_module(*intent.args, missing_ok=True)
        else:
            self.delete_page(*intent.args, missing_ok=True)
        return [f"resumed {intent.verb} {' '.join(intent.args)}"]
