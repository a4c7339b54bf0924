"""
Template Catalog

Loads the named template presets from presets/templates.yaml into TemplateConfig
objects. The catalog path can be overridden with VITA_TEMPLATES_PATH.
"""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from dotenv import load_dotenv

from vita.contexts.templating.config_resolver import PRESETS_DIR, load_yaml_mapping
from vita.contexts.templating.defaults import DEFAULT_TEMPLATE_ID
from vita.contexts.templating.exceptions import (
    InvalidTemplateConfigError,
    UnknownLayoutTypeError,
)
from vita.contexts.templating.logger import _log_debug, _log_warning
from vita.contexts.templating.settings import LayoutType

load_dotenv()
TEMPLATES_PATH = Path(os.getenv("VITA_TEMPLATES_PATH", str(PRESETS_DIR / "templates.yaml")))


@dataclass(frozen=True)
class TemplateConfig:
    """
    Static template preset.

    Column lists left as None fall back to the default left/right assignment.
    Visual extras only affect backgrounds and column text colors; they never
    change which sections are placed where.
    """

    id: str
    name: str
    layout_type: LayoutType
    default_theme_color: Optional[str] = None
    theme: Dict[str, Any] = field(default_factory=dict)
    theme_overrides: Dict[str, Any] = field(default_factory=dict)
    left_column_sections: Optional[Tuple[str, ...]] = None
    middle_column_sections: Optional[Tuple[str, ...]] = None
    right_column_sections: Optional[Tuple[str, ...]] = None

    # Visual extras
    sidebar_background: bool = False
    sidebar_background_color: Optional[str] = None
    full_width_header: bool = False
    header_background_color: Optional[str] = None
    header_text_color: Optional[str] = None
    sidebar_text_color: Optional[str] = None
    right_column_background_color: Optional[str] = None
    right_column_text_color: Optional[str] = None
    page_background_color: Optional[str] = None
    card_background_color: Optional[str] = None
    card_border_color: Optional[str] = None
    sidebar_padding_left: Optional[float] = None
    sidebar_padding_right: Optional[float] = None
    right_column_padding_left: Optional[float] = None
    right_column_padding_right: Optional[float] = None

    @classmethod
    def from_dict(
        cls, template_id: str, data: Dict[str, Any], catalog_path: Optional[Path] = None
    ) -> "TemplateConfig":
        """
        Build a TemplateConfig from one catalog entry.

        Raises:
            UnknownLayoutTypeError: If layout_type is not a LayoutType value
            InvalidTemplateConfigError: If the entry has unknown keys
        """
        raw_layout = data.get("layout_type", LayoutType.SINGLE_COLUMN.value)
        try:
            layout_type = LayoutType(raw_layout)
        except ValueError:
            raise UnknownLayoutTypeError(template_id, raw_layout, catalog_path) from None

        known = set(cls.__dataclass_fields__) - {"id", "layout_type"}
        unknown = sorted(set(data) - known - {"layout_type"})
        if unknown:
            raise InvalidTemplateConfigError(
                f"Template '{template_id}' has unknown keys: {unknown}"
            )

        kwargs = {key: value for key, value in data.items() if key in known}
        for key in ("left_column_sections", "middle_column_sections", "right_column_sections"):
            if kwargs.get(key) is not None:
                kwargs[key] = tuple(kwargs[key])
        kwargs.setdefault("name", template_id)
        kwargs["theme"] = dict(kwargs.get("theme") or {})
        kwargs["theme_overrides"] = dict(kwargs.get("theme_overrides") or {})

        return cls(id=template_id, layout_type=layout_type, **kwargs)


@lru_cache(maxsize=None)
def load_template_catalog(catalog_path: Path = TEMPLATES_PATH) -> Dict[str, TemplateConfig]:
    """
    Load every template in the catalog, keyed by id (file order preserved).

    Raises:
        InvalidTemplateConfigError: If the catalog is missing or malformed
    """
    entries = load_yaml_mapping(catalog_path)

    catalog = {}
    for template_id, data in entries.items():
        if not isinstance(data, dict):
            raise InvalidTemplateConfigError(
                f"Template '{template_id}' in {catalog_path} must be a mapping"
            )
        catalog[template_id] = TemplateConfig.from_dict(template_id, data, catalog_path)

    if DEFAULT_TEMPLATE_ID not in catalog:
        raise InvalidTemplateConfigError(
            f"Catalog {catalog_path} must define the fallback template '{DEFAULT_TEMPLATE_ID}'"
        )

    _log_debug(f"Loaded {len(catalog)} templates from {catalog_path}")
    return catalog


def get_template_config(
    template_id: Optional[str], catalog_path: Path = TEMPLATES_PATH
) -> TemplateConfig:
    """
    Look up a template by id, falling back to the default template.

    Args:
        template_id: Catalog id (e.g. "classic"). None selects the default.
        catalog_path: Path to templates.yaml

    Returns:
        TemplateConfig for the id, or for the default template when unknown
    """
    catalog = load_template_catalog(catalog_path)

    if template_id in catalog:
        return catalog[template_id]

    if template_id is not None:
        _log_warning(f"Unknown template '{template_id}', falling back to '{DEFAULT_TEMPLATE_ID}'")
    return catalog[DEFAULT_TEMPLATE_ID]


def list_template_ids(catalog_path: Path = TEMPLATES_PATH) -> List[str]:
    return list(load_template_catalog(catalog_path))
