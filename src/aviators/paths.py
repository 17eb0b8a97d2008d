"""
Aviators Path Configuration

Centralized path management for the generated project tree and the tool's
own bookkeeping. All paths are relative to the project root (current working
directory unless --root is given).

Directory Structure:
<root>/
├── .aviators/
│   ├── config.json      # Local config overrides
│   ├── intents/         # Pending two-step plans (one JSON file each)
│   └── logs/            # Log files (opt-in)
└── src/
    ├── packages/
    │   ├── components/  # <Name>/<Name>.tsx + index.ts barrel
    │   ├── hooks/ utils/ stores/ context/ partials/
    └── Roles/
        └── <Role>/
            ├── .aviators-role.json   # Role descriptor (dialect tag)
            ├── assets/ api/ modules/
            └── routes/route.tsx      # Route registry
"""

from pathlib import Path
from typing import Optional


class ProjectPaths:
    """
    Centralized path configuration for a generated project.

    All paths are lazily resolved relative to project_root.
    Default project_root is current working directory.
    """

    AVIATORS_DIR = ".aviators"
    CONFIG_NAME = "config.json"
    ROLE_DESCRIPTOR_NAME = ".aviators-role.json"
    REGISTRY_NAME = "route.tsx"
    INDEX_NAME = "index.ts"

    INTENTS_DIR = "intents"
    LOGS_DIR = "logs"

    ROLE_SUBDIRS = ("assets", "api", "modules", "routes")

    def __init__(
        self,
        project_root: Optional[Path] = None,
        src_dir: str = "src",
        packages_dir: str = "packages",
        roles_dir: str = "Roles",
    ):
        self._project_root = project_root
        self._src_dir = src_dir
        self._packages_dir = packages_dir
        self._roles_dir = roles_dir

    @classmethod
    def global_config(cls) -> Path:
        """Cross-project config file (~/.aviators/config.json)."""
        return Path.home() / cls.AVIATORS_DIR / cls.CONFIG_NAME

    @classmethod
    def from_config(cls, config, project_root: Optional[Path] = None) -> "ProjectPaths":
        """Build paths from a UserConfig's ``project.*`` keys."""
        return cls(
            project_root=project_root,
            src_dir=config.get("project.src_dir", "src"),
            packages_dir=config.get("project.packages_dir", "packages"),
            roles_dir=config.get("project.roles_dir", "Roles"),
        )

    @property
    def project_root(self) -> Path:
        """Get the project root directory."""
        if self._project_root is None:
            return Path.cwd()
        return self._project_root

    @property
    def aviators_dir(self) -> Path:
        return self.project_root / self.AVIATORS_DIR

    @property
    def intents_dir(self) -> Path:
        return self.aviators_dir / self.INTENTS_DIR

    @property
    def logs_dir(self) -> Path:
        return self.aviators_dir / self.LOGS_DIR

    @property
    def local_config(self) -> Path:
        return self.aviators_dir / self.CONFIG_NAME

    @property
    def src_root(self) -> Path:
        return self.project_root / self._src_dir

    @property
    def packages_root(self) -> Path:
        return self.src_root / self._packages_dir

    @property
    def roles_root(self) -> Path:
        return self.src_root / self._roles_dir

    def package_dir(self, kind_dir: str) -> Path:
        """Directory holding one package kind, e.g. ``packages/components``."""
        return self.packages_root / kind_dir

    def package_index(self, kind_dir: str) -> Path:
        """Barrel file of one package kind."""
        return self.package_dir(kind_dir) / self.INDEX_NAME

    def role_dir(self, role: str) -> Path:
        return self.roles_root / role

    def role_descriptor(self, role: str) -> Path:
        return self.role_dir(role) / self.ROLE_DESCRIPTOR_NAME

    def registry_file(self, role: str) -> Path:
        """Route registry of a role (``routes/route.tsx``)."""
        return self.role_dir(role) / "routes" / self.REGISTRY_NAME

    def module_dir(self, role: str, segment: str) -> Path:
        return self.role_dir(role) / "modules" / segment

    def pages_dir(self, role: str, segment: str) -> Path:
        return self.module_dir(role, segment) / "pages"

    def ensure_dirs(self) -> None:
        """Create the tool's bookkeeping directories if they don't exist."""
        self.aviators_dir.mkdir(parents=True, exist_ok=True)
        self.intents_dir.mkdir(exist_ok=True)
        self.logs_dir.mkdir(exist_ok=True)


# Global instance for convenience
_default_paths: Optional[ProjectPaths] = None


def get_paths(project_root: Optional[Path] = None) -> ProjectPaths:
    """
    Get the paths configuration.

    Args:
        project_root: Optional project root override

    Returns:
        ProjectPaths instance
    """
    global _default_paths
    if project_root is not None:
        return ProjectPaths(project_root)
    if _default_paths is None:
        _default_paths = ProjectPaths()
    return _default_paths


def set_paths(paths: ProjectPaths) -> None:
    """Install the paths instance used by get_paths() (set once by the CLI)."""
    global _default_paths
    _default_paths = paths


def reset_paths() -> None:
    """Reset the global paths instance (useful for testing)."""
    global _default_paths
    _default_paths = None
