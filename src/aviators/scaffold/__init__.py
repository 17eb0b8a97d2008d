"""
Scaffold package: generation and deletion commands over a project tree.
"""

from .facade import ScaffoldFacade, PACKAGE_KINDS

__all__ = [
    "ScaffoldFacade",
    "PACKAGE_KINDS",
]
