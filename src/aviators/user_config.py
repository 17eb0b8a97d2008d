"""
Aviators User Configuration

Hierarchical config system with global defaults + local overrides:
- Global: ~/.aviators/config.json (cross-project settings)
- Local: <root>/.aviators/config.json (project-specific overrides)

Config structure:
{
  "project": {
    "src_dir": "src",
    "packages_dir": "packages",
    "roles_dir": "Roles"
  },
  "registry": {
    "default_dialect": "marker"     // marker | flat
  },
  "journal": {
    "enabled": true                 // record intents for recover
  }
}
"""

import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional

from aviators.exceptions import ConfigError
from aviators.logging_config import logger
from aviators.paths import ProjectPaths


DIALECTS = ("marker", "flat")

DEFAULT_CONFIG = {
    "project": {
        "src_dir": "src",
        "packages_dir": "packages",
        "roles_dir": "Roles",
    },
    "registry": {
        "default_dialect": "marker",
    },
    "journal": {
        "enabled": True,
    },
}


class UserConfig:
    """
    Manages hierarchical user configuration.

    Load order (with override):
    1. Default config (hardcoded)
    2. Global config (~/.aviators/config.json)
    3. Local config (<root>/.aviators/config.json)
    """

    def __init__(self, project_root: Optional[Path] = None, global_config_path: Optional[Path] = None):
        """
        Initialize config manager.

        Args:
            project_root: Project root directory (defaults to CWD)
            global_config_path: Override for the global config file (tests)
        """
        self.project_root = project_root or Path.cwd()
        self.global_config_path = global_config_path or ProjectPaths.global_config()
        self.local_config_path = ProjectPaths(self.project_root).local_config

        self._config = self._load_config()
        self._validate()

    def _load_config(self) -> Dict[str, Any]:
        """
        Load configuration with hierarchical override.

        Returns:
            Merged configuration dictionary
        """
        config = copy.deepcopy(DEFAULT_CONFIG)

        for path in (self.global_config_path, self.local_config_path):
            if not path.exists():
                continue
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    overrides = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                raise ConfigError(f"Failed to load config {path}: {e}") from e
            if not isinstance(overrides, dict):
                raise ConfigError(f"Config {path} must contain a JSON object")
            config = self._deep_merge(config, overrides)
            logger.debug(f"Loaded config from {path}")

        return config

    def _validate(self) -> None:
        dialect = self.get("registry.default_dialect")
        if dialect not in DIALECTS:
            raise ConfigError(
                f"Invalid registry.default_dialect '{dialect}' (expected one of: {', '.join(DIALECTS)})"
            )

    def _deep_merge(self, base: Dict, override: Dict) -> Dict:
        """
        Deep merge two dictionaries, with override taking precedence.

        Args:
            base: Base dictionary
            override: Override dictionary

        Returns:
            Merged dictionary
        """
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a config value by dot-separated key.

        Examples:
            config.get("registry.default_dialect")  # "marker"
            config.get("journal.enabled")           # True
        """
        value = self._config

        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value
