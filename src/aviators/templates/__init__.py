"""
Template Renderer: literal source text for new artifacts, keyed by kind.
"""

from .catalog import KIND_DIRS, ARTIFACT_FILES
from .renderer import TemplateRenderer, get_renderer

__all__ = [
    "TemplateRenderer",
    "get_renderer",
    "KIND_DIRS",
    "ARTIFACT_FILES",
]
