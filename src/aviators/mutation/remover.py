"""
PatternRemover: delete previously injected text.

Each pattern reconstructs what the injector must have written. Removal
replaces all non-overlapping matches, which is safe because the name guard
keeps every generated identifier unique within its file.
"""

import re
from typing import Optional, Pattern, Union

from aviators.logging_config import logger
from .blocks import cut_block, find_module_block, scan_routes
from .editor import FileEditor, PathLike


def import_pattern(symbol: str) -> Pattern[str]:
    """An import statement that binds ``symbol``, with its line break."""
    return re.compile(
        r"^import\s[^;]*?\b" + re.escape(symbol) + r"\b[^;]*?;[ \t]*\n?",
        re.MULTILINE,
    )


def import_source_pattern(source_prefix: str) -> Pattern[str]:
    """Import statements whose module path starts with ``source_prefix``."""
    return re.compile(
        r"^import\s[^;]*?\bfrom\s+[\"']" + re.escape(source_prefix) + r"[^\"']*[\"'];[ \t]*\n?",
        re.MULTILINE,
    )


def line_pattern(word: str) -> Pattern[str]:
    """Any whole line containing ``word`` as a whole word."""
    return re.compile(r"^[^\n]*\b" + re.escape(word) + r"\b[^\n]*(?:\n|$)", re.MULTILINE)


def index_export_pattern(name: str) -> Pattern[str]:
    """A barrel line ``export * from "./<name>";``."""
    return re.compile(r'^export \* from "\./' + re.escape(name) + r'";[ \t]*\n?', re.MULTILINE)


def remove_route(content: str, segment: str, module_segment: Optional[str] = None,
                 file_path: str = "<content>") -> str:
    """
    Remove a module block, or a page leaf inside one module block.

    Args:
        content: Registry text
        segment: Path segment of the block to remove
        module_segment: When given, only the leaf under this module's block
            is removed; other modules are untouched.
        file_path: Used in error messages

    Returns:
        New content (unchanged when no such block exists)
    """
    roots = scan_routes(content, file_path)

    if module_segment is None:
        block = find_module_block(roots, segment)
    else:
        module = find_module_block(roots, module_segment)
        block = module.child(segment) if module else None

    if block is None:
        return content
    return cut_block(content, block)


class PatternRemover:
    """
    Remove generated imports, barrel lines and route blocks from files.

    Every method returns whether anything was removed, so callers can report
    "not found" distinctly from "removed". Files are written back only when
    the text actually changed.
    """

    def __init__(self, editor: Optional[FileEditor] = None):
        self.editor = editor or FileEditor()

    def remove_matching(self, file_path: PathLike, pattern: Union[str, Pattern[str]]) -> bool:
        """
        Remove every non-overlapping match of ``pattern``.

        Args:
            file_path: Target file
            pattern: Literal text or compiled regex

        Returns:
            True if the file changed
        """
        if isinstance(pattern, str):
            pattern = re.compile(re.escape(pattern))

        result = self.editor.apply(file_path, lambda content: pattern.sub("", content), "remove")
        if result.changed:
            logger.info(f"Removed /{pattern.pattern}/ from {file_path}")
        else:
            logger.debug(f"No match for /{pattern.pattern}/ in {file_path}")
        return result.changed

    def remove_import(self, file_path: PathLike, symbol: str) -> bool:
        return self.remove_matching(file_path, import_pattern(symbol))

    def remove_imports_from(self, file_path: PathLike, source_prefix: str) -> bool:
        return self.remove_matching(file_path, import_source_pattern(source_prefix))

    def remove_lines_containing(self, file_path: PathLike, word: str) -> bool:
        """
        Remove every line mentioning ``word``: in a flat registry this takes
        out the import and the array element in one pass.
        """
        return self.remove_matching(file_path, line_pattern(word))

    def remove_index_export(self, file_path: PathLike, name: str) -> bool:
        return self.remove_matching(file_path, index_export_pattern(name))

    def remove_route_block(self, file_path: PathLike, segment: str,
                           module_segment: Optional[str] = None) -> bool:
        """
        Remove a route block located by depth counting.

        Raises:
            AnchorNotFound: If the registry's route tags are unbalanced.
        """
        result = self.editor.apply(
            file_path,
            lambda content: remove_route(content, segment, module_segment, str(file_path)),
            "remove",
        )
        where = f" under '{module_segment}'" if module_segment else ""
        if result.changed:
            logger.info(f"Removed route '{segment}'{where} from {file_path}")
        else:
            logger.debug(f"Route '{segment}'{where} not present in {file_path}")
        return result.changed
