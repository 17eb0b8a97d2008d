"""
CLI Configuration

Process-wide settings chosen by the global options, and construction of
the facade every command runs against.
"""

from pathlib import Path
from typing import Optional

from aviators.paths import ProjectPaths, set_paths
from aviators.scaffold import ScaffoldFacade
from aviators.user_config import UserConfig


class CLIConfig:
    """Configuration for CLI commands"""

    _project_root: Optional[Path] = None

    @classmethod
    def set_project_root(cls, root: Optional[Path]) -> None:
        cls._project_root = root.resolve() if root is not None else None

    @classmethod
    def project_root(cls) -> Path:
        return cls._project_root or Path.cwd()

    @classmethod
    def facade(cls) -> ScaffoldFacade:
        """
        Build the facade for the selected project root.

        Raises:
            ConfigError: If a config file is unreadable or invalid.
        """
        root = cls.project_root()
        config = UserConfig(root)
        paths = ProjectPaths.from_config(config, root)
        set_paths(paths)
        return ScaffoldFacade(paths, config)
