"""
Depth-counting scanner for ``<Route>`` blocks in registry files.

A route block is the region from an opening ``<Route ...>`` tag to its
matching ``</Route>``, found by counting nesting depth rather than by a
single non-greedy match, so nested same-named tags are handled. Opening
tags may carry JSX expressions (``element={<Page />}``) whose ``>`` must not
end the tag.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

from aviators.exceptions import AnchorNotFound
from .config import ROUTE_TAG

_TOKEN = re.compile(r"<(/?)" + ROUTE_TAG + r"\b")
_PATH_ATTR = re.compile(r'\bpath\s*=\s*"([^"]*)"')


@dataclass
class RouteBlock:
    """A ``<Route>`` element located in registry text."""
    start: int
    end: int = -1
    path: Optional[str] = None
    self_closing: bool = False
    children: List["RouteBlock"] = field(default_factory=list)

    def child(self, path: str) -> Optional["RouteBlock"]:
        """Direct child route whose ``path`` attribute equals ``path``."""
        for block in self.children:
            if block.path == path:
                return block
        return None


def _opening_tag_end(content: str, pos: int, file_path: str) -> int:
    """Index just past the ``>`` closing the opening tag that starts at ``pos``."""
    depth = 0
    quote = None
    i = pos
    while i < len(content):
        ch = content[i]
        if quote:
            if ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
        elif ch == ">" and depth == 0:
            return i + 1
        i += 1
    raise AnchorNotFound(file_path, f"end of <{ROUTE_TAG}> tag at offset {pos}")


def scan_routes(content: str, file_path: str = "<content>") -> List[RouteBlock]:
    """
    Build the tree of ``<Route>`` blocks in ``content``.

    Returns:
        Top-level route blocks, each with nested children

    Raises:
        AnchorNotFound: If the tags are unbalanced.
    """
    roots: List[RouteBlock] = []
    stack: List[RouteBlock] = []
    pos = 0

    while True:
        match = _TOKEN.search(content, pos)
        if not match:
            break

        if match.group(1):
            close = content.find(">", match.end())
            if not stack or close < 0:
                raise AnchorNotFound(file_path, f"balanced <{ROUTE_TAG}> tags")
            block = stack.pop()
            block.end = close + 1
            pos = close + 1
            continue

        tag_end = _opening_tag_end(content, match.end(), file_path)
        tag = content[match.start():tag_end]
        path = _PATH_ATTR.search(tag)
        block = RouteBlock(
            start=match.start(),
            path=path.group(1) if path else None,
            self_closing=tag.rstrip(">").rstrip().endswith("/"),
        )
        (stack[-1].children if stack else roots).append(block)
        if block.self_closing:
            block.end = tag_end
        else:
            stack.append(block)
        pos = tag_end

    if stack:
        raise AnchorNotFound(file_path, f"closing </{ROUTE_TAG}> for block at offset {stack[-1].start}")
    return roots


def find_module_block(roots: List[RouteBlock], segment: str) -> Optional[RouteBlock]:
    """Module block: a child of a top-level (role) route with the given path."""
    for root in roots:
        block = root.child(segment)
        if block is not None:
            return block
    return None


def cut_block(content: str, block: RouteBlock) -> str:
    """
    Remove a block together with the line break and indentation that
    followed it when it was injected.
    """
    end = block.end
    trailing = re.match(r"\n[ \t]*", content[end:])
    if trailing:
        end += trailing.end()
    return content[:block.start] + content[end:]
