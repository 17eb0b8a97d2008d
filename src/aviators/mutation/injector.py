"""
MarkerInjector: insert generated text at stable anchors, exactly once.

Insertions are anchor-based rather than line-number-based because every
prior insertion shifts line numbers. The pure ``insert_*`` functions work
on text; the class applies them to files through FileEditor.
"""

import re
from pathlib import Path
from typing import List, Optional, Pattern, Tuple, Union

from aviators.exceptions import AnchorNotFound
from aviators.logging_config import logger
from aviators.schemas import MutationResult
from .config import ARRAY_ELEMENT_INDENT, EXPORT_ANCHOR
from .editor import FileEditor, PathLike

Anchor = Union[str, Pattern[str]]


def _locate(content: str, anchor: Anchor) -> Optional[Tuple[int, int]]:
    """Span of the first occurrence of a literal or regex anchor."""
    if isinstance(anchor, str):
        idx = content.find(anchor)
        return (idx, idx + len(anchor)) if idx >= 0 else None
    match = anchor.search(content)
    return match.span() if match else None


def _anchor_label(anchor: Anchor) -> str:
    return anchor if isinstance(anchor, str) else anchor.pattern


def _line_indent(content: str, idx: int) -> str:
    line_start = content.rfind("\n", 0, idx) + 1
    line = content[line_start:idx]
    return line[:len(line) - len(line.lstrip(" \t"))]


def reindent(text: str, indent: str) -> str:
    """Prefix every line but the first with ``indent`` (blank lines stay blank)."""
    lines = text.strip("\n").split("\n")
    return "\n".join([lines[0]] + [indent + line if line.strip() else "" for line in lines[1:]])


def _stripped_lines(text: str) -> List[str]:
    return [line.strip() for line in text.split("\n") if line.strip()]


def already_present(content: str, text: str) -> bool:
    """
    True when the lines of ``text`` already occur, whole and consecutive, in
    content. Indentation and blank lines are ignored; a line that merely
    contains the text (``subdashboardRoute,`` for ``dashboardRoute,``) does
    not count.
    """
    wanted = _stripped_lines(text)
    if not wanted:
        return True
    lines = _stripped_lines(content)
    n = len(wanted)
    return any(lines[i:i + n] == wanted for i in range(len(lines) - n + 1))


def insert_before(content: str, anchor: Anchor, text: str, file_path: str = "<content>") -> str:
    """
    Splice ``text`` immediately before the first occurrence of ``anchor``.

    The anchor keeps its line and indentation: the text takes the anchor's
    place and the anchor moves to a new line with the same indentation.

    Raises:
        AnchorNotFound: If the anchor is absent.
    """
    if already_present(content, text):
        return content

    span = _locate(content, anchor)
    if span is None:
        raise AnchorNotFound(file_path, _anchor_label(anchor))

    start = span[0]
    indent = _line_indent(content, start)
    return content[:start] + reindent(text, indent) + "\n" + indent + content[start:]


def insert_after(content: str, anchor: Anchor, text: str, file_path: str = "<content>") -> str:
    """
    Insert ``text`` on a new line right after ``anchor`` (array-head injection).

    The new line is indented one level deeper than the anchor's line, so a
    new element lands first inside the collection the anchor opens.

    Raises:
        AnchorNotFound: If the anchor is absent.
    """
    if already_present(content, text):
        return content

    span = _locate(content, anchor)
    if span is None:
        raise AnchorNotFound(file_path, _anchor_label(anchor))

    indent = _line_indent(content, span[0]) + ARRAY_ELEMENT_INDENT
    end = span[1]
    return content[:end] + "\n" + indent + reindent(text, indent) + content[end:]


def insert_at_head(content: str, text: str) -> str:
    """Prepend ``text`` as the first line(s) of the file."""
    if already_present(content, text):
        return content
    return reindent(text, "") + "\n" + content


def append_line(content: str, line: str) -> str:
    """Append ``line`` at the end of the file, on its own line."""
    if already_present(content, line):
        return content
    if content and not content.endswith("\n"):
        content += "\n"
    return content + line.strip() + "\n"


def array_head(symbol: str) -> Pattern[str]:
    """Anchor matching the opening bracket of ``export const <symbol>... = [``."""
    return re.compile(r"export\s+const\s+" + re.escape(symbol) + r"\b[^=\n]*=\s*\[")


class MarkerInjector:
    """
    Insert lines at marker anchors inside existing files.

    Every method is idempotent: when the text is already present the file is
    left untouched and the result reports ``changed=False``.
    """

    def __init__(self, editor: Optional[FileEditor] = None):
        self.editor = editor or FileEditor()

    def inject_before(self, file_path: PathLike, marker: Anchor, text: str) -> MutationResult:
        """
        Insert ``text`` before the first occurrence of ``marker``.

        Raises:
            AnchorNotFound: If the marker is absent (wrong dialect or
                incompatible hand edit).
        """
        logger.debug(f"Injecting before {_anchor_label(marker)!r} in {file_path}")
        try:
            return self.editor.apply(
                file_path,
                lambda content: insert_before(content, marker, text, str(file_path)),
                "inject",
            )
        except AnchorNotFound as e:
            logger.error(str(e))
            raise

    def inject_above_export(self, file_path: PathLike, line: str) -> MutationResult:
        """Insert an import line so it precedes the default export."""
        return self.inject_before(file_path, EXPORT_ANCHOR, line)

    def inject_after(self, file_path: PathLike, anchor: Anchor, text: str) -> MutationResult:
        """
        Insert ``text`` as the first element after an opening bracket.

        Raises:
            AnchorNotFound: If the anchor is absent.
        """
        logger.debug(f"Injecting after {_anchor_label(anchor)!r} in {file_path}")
        try:
            return self.editor.apply(
                file_path,
                lambda content: insert_after(content, anchor, text, str(file_path)),
                "inject",
            )
        except AnchorNotFound as e:
            logger.error(str(e))
            raise

    def inject_at_head(self, file_path: PathLike, text: str) -> MutationResult:
        """Prepend ``text`` at the top of the file."""
        return self.editor.apply(file_path, lambda content: insert_at_head(content, text), "inject")

    def append_line(self, file_path: PathLike, line: str) -> MutationResult:
        """
        Append a line to a barrel file, creating the file if it is missing.
        """
        path = Path(file_path)
        if not path.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("", encoding="utf-8")
        return self.editor.apply(path, lambda content: append_line(content, line), "append")
