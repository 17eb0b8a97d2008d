"""
FileEditor: single read-modify-write cycles with atomic writes.

Every injector/remover call goes through ``FileEditor.apply`` so each call
is atomic on its own: one read, one in-memory transform, at most one write.
"""

import os
import tempfile
from pathlib import Path
from typing import Callable, Union

from aviators.exceptions import TargetNotFound
from aviators.logging_config import logger
from aviators.schemas import MutationResult

PathLike = Union[str, Path]


class FileEditor:
    """
    Read and write source files safely.

    Features:
    - UTF-8 encoding handling
    - Line ending preservation (LF/CRLF): transforms always see LF text
    - Atomic writes (temp file + rename)
    - Writes only when the content actually changed
    """

    def read(self, file_path: PathLike) -> str:
        """
        Read a file as LF-normalized text.

        Raises:
            TargetNotFound: If the file does not exist.
        """
        return self.read_raw(file_path).replace('\r\n', '\n')

    def apply(
        self,
        file_path: PathLike,
        transform: Callable[[str], str],
        operation: str,
    ) -> MutationResult:
        """
        Apply a text transform to a file.

        Args:
            file_path: Target file
            transform: Function from LF-normalized content to new content.
                May raise to abort the call before anything is written.
            operation: Operation name recorded in the result

        Returns:
            MutationResult with ``changed`` set when the file was rewritten
        """
        raw = self.read_raw(file_path)
        line_ending = self._detect_line_ending(raw)
        original = raw.replace('\r\n', '\n')

        modified = transform(original)

        if modified == original:
            logger.debug(f"{operation}: no change in {file_path}")
            return MutationResult(file_path=str(file_path), operation=operation, changed=False)

        self.atomic_write(file_path, self._normalize_line_endings(modified, line_ending))
        logger.debug(f"{operation}: rewrote {file_path}")
        return MutationResult(file_path=str(file_path), operation=operation, changed=True)

    def atomic_write(self, file_path: PathLike, content: str) -> None:
        """
        Write file atomically using temp file + rename.

        The temp file is created in the target's directory so the rename
        stays on one filesystem.
        """
        path = Path(file_path)
        fd, temp_path = tempfile.mkstemp(
            dir=str(path.parent),
            prefix=f".{path.name}.",
            suffix=".tmp"
        )
        try:
            with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
                f.write(content)
            os.replace(temp_path, str(path))
        except OSError:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            logger.error(f"Atomic write failed for {file_path}")
            raise

    def read_raw(self, file_path: PathLike) -> str:
        """Read a file exactly as stored, line endings included."""
        path = Path(file_path)
        if not path.is_file():
            raise TargetNotFound(str(path))
        with open(path, 'r', encoding='utf-8', newline='') as f:
            return f.read()

    def _detect_line_ending(self, content: str) -> str:
        """
        Detect line ending style (LF vs CRLF).

        Returns:
            '\r\n' for CRLF, '\n' for LF
        """
        if '\r\n' in content:
            return '\r\n'
        return '\n'

    def _normalize_line_endings(self, content: str, line_ending: str) -> str:
        """
        Normalize line endings to match detected style.
        """
        content = content.replace('\r\n', '\n')
        if line_ending == '\r\n':
            content = content.replace('\n', '\r\n')
        return content
