"""
Filesystem primitives: create-if-absent, recursive remove.
"""

import shutil
from pathlib import Path

from aviators.exceptions import ExistenceConflict, TargetNotFound
from aviators.logging_config import logger


def ensure_folder(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def ensure_file(path: Path, content: str = "") -> None:
    """
    Create a file that must not exist yet.

    Raises:
        ExistenceConflict: If the file already exists.
    """
    if path.exists():
        raise ExistenceConflict(str(path))
    ensure_folder(path.parent)
    path.write_text(content, encoding="utf-8")
    logger.debug(f"Created {path}")


def remove_path(path: Path, missing_ok: bool = False) -> bool:
    """
    Remove a file or a directory tree.

    Returns:
        True if something was removed

    Raises:
        TargetNotFound: If the path is absent and ``missing_ok`` is False.
    """
    if not path.exists():
        if missing_ok:
            return False
        raise TargetNotFound(str(path))
    if path.is_dir():
        shutil.rmtree(path)
    else:
        path.unlink()
    logger.debug(f"Removed {path}")
    return True
