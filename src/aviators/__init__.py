"""
Aviators: a scaffold generator and source mutator for role-based React
projects.
"""

__version__ = "0.1.0"

# Core exports
from aviators.scaffold import ScaffoldFacade
from aviators.paths import ProjectPaths
from aviators.user_config import UserConfig
from aviators.exceptions import AviatorsError
