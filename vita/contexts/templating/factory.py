"""
Document Factory

Wires one catalog template to resume records:

    >>> template = get_template("classic")
    >>> tree = template.build_tree(resume)          # LayoutNode
    >>> data = template.export(resume)              # bytes from the default backend

Every call recomputes the effective settings from the pre-composed template
theme and the resume's own overrides; nothing is cached per resume.
"""

import time
from typing import Any, Dict, List, Optional

from vita.contexts.templating.colors import ColorResolver
from vita.contexts.templating.composer import compose_page
from vita.contexts.templating.config_resolver import compose_theme, resolve_settings
from vita.contexts.templating.defaults import DEFAULT_THEME_COLOR
from vita.contexts.templating.fonts import FontConfig
from vita.contexts.templating.layout_nodes import LayoutNode
from vita.contexts.templating.logger import log_export_result, log_export_start
from vita.contexts.templating.resume_data_structure import ResumeRecord
from vita.contexts.templating.settings import LayoutSettings
from vita.contexts.templating.template_registry import (
    TemplateConfig,
    get_template_config,
    list_template_ids,
)


class ResumeTemplate:
    """
    A catalog template ready to render resumes.

    Attributes:
        config: Template preset
        theme: Settings composed from the template's preset selection
    """

    def __init__(self, config: TemplateConfig):
        self.config = config
        self.theme: Dict[str, Any] = compose_theme(config.theme)

    def __repr__(self) -> str:
        return f"ResumeTemplate({self.config.id!r}, layout={self.config.layout_type.value!r})"

    def effective_settings(self, resume: ResumeRecord) -> LayoutSettings:
        """Template theme, then template overrides, then the resume's own settings."""
        return resolve_settings(self.theme, self.config.theme_overrides, resume.meta.layout_settings)

    def color_resolver(self, resume: ResumeRecord, settings: LayoutSettings) -> ColorResolver:
        accent = resume.meta.theme_color or self.config.default_theme_color or DEFAULT_THEME_COLOR
        return ColorResolver.create(accent, settings.theme_color_target)

    def build_tree(self, resume: ResumeRecord) -> LayoutNode:
        """Compose the page tree for a resume."""
        settings = self.effective_settings(resume)
        return compose_page(
            self.config,
            resume,
            settings,
            self.color_resolver(resume, settings),
            FontConfig.for_family(settings.font_family),
        )

    def export(self, resume: ResumeRecord, backend=None) -> bytes:
        """
        Render a resume to bytes.

        Args:
            resume: Resume content
            backend: RenderBackend instance; defaults to get_backend()

        Returns:
            Backend output (LaTeX source or PDF)

        Raises:
            RenderBackendError: If the backend fails
        """
        if backend is None:
            # Rendering depends on templating, never the reverse at import time
            from vita.contexts.rendering.backends import get_backend

            backend = get_backend()

        resume_name = resume.meta.title or resume.basics.name or "resume"
        log_export_start(resume_name, self.config.id, backend.name)

        start_time = time.time()
        data = backend.render(self.build_tree(resume))
        log_export_result(resume_name, len(data), time.time() - start_time)
        return data


def get_template(template_id: Optional[str] = None) -> ResumeTemplate:
    """Template by id; unknown ids fall back to the default template with a warning."""
    return ResumeTemplate(get_template_config(template_id))


def list_templates() -> List[str]:
    return list_template_ids()


def export_document(resume: ResumeRecord, template_id: Optional[str] = None, backend=None) -> bytes:
    """Export with the given template, else the one named in resume.meta."""
    return get_template(template_id or resume.meta.template_id).export(resume, backend)
