"""
Naming conventions per artifact kind.

``canonicalize`` is called identically by generation and deletion commands,
so the same canonical identifier is derivable from either direction.
"""

import re

from aviators.exceptions import ArgumentError

_WORD_SPLIT = re.compile(r"[-_\s]+")
_HOOK_PATTERN = re.compile(r"^use[A-Z][A-Za-z0-9]*$")
_UTIL_PATTERN = re.compile(r"^[a-z][A-Za-z0-9]*$")
_ROLE_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")
_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

HOOK_RULES = """Hooks must:
  • start with "use"
  • be camelCase
  • have a capital letter after "use"

Examples:
  useToast
  useUserStore
  useFetchData"""

UTIL_RULES = """Utils must:
  • be camelCase
  • start with a lowercase letter
  • contain at least one uppercase letter after the first character

Examples:
  calculateTax
  formatDate
  parseJsonValue"""


def pascal(value: str) -> str:
    """Convert ``some-thing``, ``some_thing`` or ``some thing`` to ``SomeThing``."""
    return "".join(w[:1].upper() + w[1:].lower() for w in _WORD_SPLIT.split(value.strip()) if w)


def camel(value: str) -> str:
    """Convert ``some-thing`` to ``someThing``; an already camelCase word is kept."""
    words = [w for w in _WORD_SPLIT.split(value.strip()) if w]
    if not words:
        return ""
    head = words[0][:1].lower() + words[0][1:]
    return head + "".join(w[:1].upper() + w[1:].lower() for w in words[1:])


def route_segment(value: str) -> str:
    """Route path segment and directory name for modules and pages."""
    return "-".join(w.lower() for w in _WORD_SPLIT.split(value.strip()) if w)


def ensure_valid_hook_name(name: str) -> str:
    if not _HOOK_PATTERN.match(name):
        raise ArgumentError(f'Invalid hook name "{name}"\n\n{HOOK_RULES}')
    return name


def ensure_valid_util_name(name: str) -> str:
    if not _UTIL_PATTERN.match(name) or not re.search(r"[A-Z]", name[1:]):
        raise ArgumentError(f'Invalid util name "{name}"\n\n{UTIL_RULES}')
    return name


def ensure_valid_role_name(name: str) -> str:
    if not _ROLE_PATTERN.match(name):
        raise ArgumentError(
            f'Invalid role name "{name}": use letters, digits and "_" and start with a letter'
        )
    return name


def canonicalize(kind: str, raw: str) -> str:
    """
    Derive the canonical identifier of an artifact from its raw name.

    Args:
        kind: Artifact kind (component, hook, util, store, context, partial,
            role, module, page)
        raw: Name as typed by the user

    Returns:
        Canonical identifier

    Raises:
        ArgumentError: If the name is empty, breaks the kind's convention or
            does not normalize to a valid identifier.
    """
    if not raw or not raw.strip():
        raise ArgumentError(f"Missing {kind} name")

    if kind == "hook":
        return ensure_valid_hook_name(raw)
    if kind == "util":
        return ensure_valid_util_name(raw)
    if kind == "role":
        return ensure_valid_role_name(raw)

    if kind in ("component", "partial", "module", "page"):
        name = pascal(raw)
    elif kind == "context":
        name = f"{pascal(raw)}Context"
    elif kind == "store":
        name = f"{camel(raw)}Store"
    else:
        raise ArgumentError(f"Unknown artifact kind: {kind}")

    if not _IDENTIFIER.match(name):
        raise ArgumentError(f'Invalid {kind} name "{raw}" (normalizes to "{name}")')
    return name
