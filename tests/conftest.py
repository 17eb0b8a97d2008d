"""
Pytest configuration for the aviators test suite.

This conftest.py provides:
- Quiet logging (console sink suppressed)
- Isolation from the user's global config
- Project fixtures: an initialized tree, a marker role and a flat role
"""

import os
import shutil
import tempfile
from pathlib import Path

import pytest

from aviators.logging_config import setup_logging
from aviators.paths import ProjectPaths, reset_paths
from aviators.scaffold import ScaffoldFacade
from aviators.user_config import UserConfig


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Keep file logging off regardless of the developer's environment."""
    os.environ["AVIATORS_FILE_LOGGING"] = "0"


# ============================================================================
# LOGGING FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Suppress console logs for clean test output.
    """
    setup_logging(level="DEBUG", suppress_console=True, force=True)
    yield
    reset_paths()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path_factory, monkeypatch):
    """Point ~ at an empty directory so ~/.aviators/config.json is never read."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    return home


# ============================================================================
# TEMPORARY DIRECTORY FIXTURES
# ============================================================================

@pytest.fixture
def temp_dir():
    """Create a temporary directory that's cleaned up after the test."""
    tmp = Path(tempfile.mkdtemp(prefix="aviators_test_"))
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def paths(temp_dir):
    return ProjectPaths(temp_dir)


@pytest.fixture
def facade(paths):
    """Facade over an initialized project (barrels and Roles/ exist)."""
    scaffold = ScaffoldFacade(paths, UserConfig(paths.project_root))
    scaffold.init_project()
    return scaffold


@pytest.fixture
def marker_role(facade):
    """A role named ``inst`` using the nested marker registry."""
    facade.create_role("inst", "marker")
    return facade.paths.registry_file("inst")


@pytest.fixture
def flat_role(facade):
    """A role named ``admin`` using the flat route array registry."""
    facade.create_role("admin", "flat")
    return facade.paths.registry_file("admin")
