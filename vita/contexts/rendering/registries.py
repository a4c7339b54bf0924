"""
Rendering Registries

Loads and caches the Jinja2 templates used by the LaTeX backend, one per
layout node role.
"""

import os
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

load_dotenv()
TYPES_PATH = Path(os.getenv("VITA_RENDER_TYPES_PATH", str(Path(__file__).parent / "types")))


class TemplateRegistry:
    """
    Registry for loading and caching Jinja2 templates for LaTeX generation.

    Templates are stored in vita/contexts/rendering/types/{type_name}/template.tex.jinja
    and use custom delimiters to avoid conflicts with LaTeX syntax:
    - Variable: <<< var >>>
    - Block: <%% block %%>
    - Comment: <# comment #>
    """

    def __init__(self, types_base_path: Path = None):
        """
        Initialize the template registry.

        Args:
            types_base_path: Base path for type directories. Defaults to
                           VITA_RENDER_TYPES_PATH from environment
        """
        if types_base_path is None:
            types_base_path = TYPES_PATH

        self.types_base_path = Path(types_base_path)
        self._cache: Dict[str, Template] = {}

        self.env = Environment(
            loader=FileSystemLoader(str(self.types_base_path)),
            undefined=StrictUndefined,
            variable_start_string="<<<",
            variable_end_string=">>>",
            block_start_string="<%%",
            block_end_string="%%>",
            comment_start_string="<#",
            comment_end_string="#>",
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def get_template(self, type_name: str) -> Template:
        """
        Get a template by type name, loading and caching it if necessary.

        Args:
            type_name: Name of the type (e.g., 'entry')

        Returns:
            Jinja2 Template object

        Raises:
            TemplateNotFound: If template file doesn't exist
            TemplateSyntaxError: If template has Jinja2 syntax errors
        """
        if type_name in self._cache:
            return self._cache[type_name]

        template_path = f"{type_name}/template.tex.jinja"

        try:
            template = self.env.get_template(template_path)
        except TemplateNotFound as e:
            raise TemplateNotFound(
                f"Template not found for type '{type_name}' at {self.types_base_path / template_path}"
            ) from e

        self._cache[type_name] = template
        return template

    def get_template_path(self, type_name: str) -> Path:
        return self.types_base_path / type_name / "template.tex.jinja"

    def clear_cache(self):
        """Clear the template cache."""
        self._cache.clear()

    def is_cached(self, type_name: str) -> bool:
        return type_name in self._cache
