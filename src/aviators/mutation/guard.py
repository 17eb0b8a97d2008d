"""
NameGuard: identifier uniqueness before registry mutation.

Pattern-based deletion is only safe while every generated identifier is
unique within the file it lives in. The guard enforces that at creation
time, before any file is written.
"""

import re
from typing import Iterable, Optional

from aviators.exceptions import ExistenceConflict
from aviators.logging_config import logger
from .editor import FileEditor, PathLike


class NameGuard:
    """Reject identifiers that already occur anywhere in a target file."""

    def __init__(self, editor: Optional[FileEditor] = None):
        self.editor = editor or FileEditor()

    def ensure_unique(self, file_path: PathLike, identifiers: Iterable[str]) -> None:
        """
        Check that none of ``identifiers`` appears in ``file_path``.

        Identifiers made only of word characters are matched as whole words;
        anything else (sentinels) is matched literally.

        Raises:
            ExistenceConflict: On the first identifier already present.
            TargetNotFound: If the file does not exist.
        """
        content = self.editor.read(file_path)

        for identifier in identifiers:
            if re.fullmatch(r"\w+", identifier):
                found = re.search(r"\b" + re.escape(identifier) + r"\b", content) is not None
            else:
                found = identifier in content

            if found:
                logger.warning(f"Name guard: '{identifier}' already used in {file_path}")
                raise ExistenceConflict(
                    identifier,
                    f"Already exists → '{identifier}' is already used in {file_path}",
                )

        logger.debug(f"Name guard passed for {file_path}")
