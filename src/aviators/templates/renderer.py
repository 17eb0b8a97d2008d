"""
Jinja2 rendering for artifact scaffolding.

Provides the TemplateRenderer class which renders the in-code template
catalog. Rendering is pure: it never touches the filesystem or a registry,
it only returns text.
"""

from typing import Any, Dict, Optional

from jinja2 import DictLoader, Environment, StrictUndefined, TemplateNotFound

from aviators.exceptions import ArgumentError
from .catalog import ARTIFACT_FILES, FILE_TEMPLATES, SNIPPET_TEMPLATES


class TemplateRenderer:
    """
    Renders file templates and registry snippets.

    File templates are looked up per artifact kind in ``ARTIFACT_FILES``;
    snippets are looked up by name and are used by the registry mutator to
    build (and later reconstruct) the exact text it injects.
    """

    SNIPPET_PREFIX = "snippet/"

    def __init__(self) -> None:
        templates = dict(FILE_TEMPLATES)
        templates.update({self.SNIPPET_PREFIX + k: v for k, v in SNIPPET_TEMPLATES.items()})
        self.env = Environment(
            loader=DictLoader(templates),
            autoescape=False,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )

    def render(self, kind: str, canonical_name: str, **context: Any) -> Dict[str, str]:
        """
        Render every file of an artifact.

        Args:
            kind: Artifact kind
            canonical_name: Canonical identifier (already normalized)
            **context: Extra template variables (``segment``, ``dialect``,
                ``registry_symbol``, ...)

        Returns:
            Ordered mapping of relative file path -> file content

        Raises:
            ArgumentError: If the kind is unrecognized.
        """
        if kind not in ARTIFACT_FILES:
            raise ArgumentError(f"Unknown artifact kind: {kind}")

        values = {"name": canonical_name, **context}
        dialect: Optional[str] = context.get("dialect")

        files: Dict[str, str] = {}
        for path_template, template_name, only_dialect in ARTIFACT_FILES[kind]:
            if only_dialect is not None and only_dialect != dialect:
                continue
            rel_path = self.env.from_string(path_template).render(**values)
            files[rel_path] = self.env.get_template(template_name).render(**values)

        return files

    def snippet(self, snippet_name: str, /, **context: Any) -> str:
        """
        Render a registry fragment (import line, route block, entry...).

        Raises:
            ArgumentError: If no snippet has that name.
        """
        try:
            template = self.env.get_template(self.SNIPPET_PREFIX + snippet_name)
        except TemplateNotFound as e:
            raise ArgumentError(f"Unknown snippet: {snippet_name}") from e
        return template.render(**context)


_default_renderer: Optional[TemplateRenderer] = None


def get_renderer() -> TemplateRenderer:
    """Shared renderer instance (the environment is immutable after setup)."""
    global _default_renderer
    if _default_renderer is None:
        _default_renderer = TemplateRenderer()
    return _default_renderer
