"""
Mutation package: the text-based source mutation engine.

Marker-driven, idempotent operations that insert, locate and remove
generated declarations (imports, barrel exports, route entries) inside
hand-edited files without parsing them.
"""

from .editor import FileEditor
from .injector import MarkerInjector
from .remover import PatternRemover
from .guard import NameGuard
from .blocks import RouteBlock, scan_routes
from .registry import (
    ModuleRef,
    PageRef,
    RegistryDialect,
    MarkerRegistry,
    FlatRegistry,
    load_descriptor,
    save_descriptor,
    registry_for,
    registry_symbol,
)
from .journal import IntentJournal
from .config import EXPORT_ANCHOR, ROOT_SENTINEL

__all__ = [
    # Components
    "FileEditor",
    "MarkerInjector",
    "PatternRemover",
    "NameGuard",
    "IntentJournal",

    # Route blocks
    "RouteBlock",
    "scan_routes",

    # Registry
    "ModuleRef",
    "PageRef",
    "RegistryDialect",
    "MarkerRegistry",
    "FlatRegistry",
    "load_descriptor",
    "save_descriptor",
    "registry_for",
    "registry_symbol",

    # Anchors
    "EXPORT_ANCHOR",
    "ROOT_SENTINEL",
]
