"""
Templating Context

Responsibilities:
- Resolves layout settings from base theme, presets, template and document layers
- Loads the template catalog
- Parses inline rich-text markup in free-text fields
- Renders resume sections and the header into layout nodes
- Places sections into columns for each layout type

Owns: Settings cascade, template catalog, layout tree composition
Never: Produces document bytes (that is the rendering context)
"""

from vita.contexts.templating.colors import ColorResolver
from vita.contexts.templating.config_resolver import compose_theme, deep_merge, resolve_settings
from vita.contexts.templating.factory import (
    ResumeTemplate,
    export_document,
    get_template,
    list_templates,
)
from vita.contexts.templating.layout_nodes import LayoutNode, NodeRole
from vita.contexts.templating.resume_data_structure import ResumeRecord, load_resume
from vita.contexts.templating.rich_text import parse_rich_text, plain_text
from vita.contexts.templating.settings import LayoutSettings, LayoutType

__all__ = [
    # Settings cascade
    "deep_merge",
    "compose_theme",
    "resolve_settings",
    "LayoutSettings",
    "LayoutType",
    "ColorResolver",
    # Rich text
    "parse_rich_text",
    "plain_text",
    # Data and layout tree
    "ResumeRecord",
    "load_resume",
    "LayoutNode",
    "NodeRole",
    # Document factory
    "ResumeTemplate",
    "get_template",
    "list_templates",
    "export_document",
]
