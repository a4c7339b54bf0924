"""
Theme Resolution for Resume Rendering

Cascades layout settings through composable layers. Later layers override
earlier ones key by key; nested mappings merge, lists are replaced wholesale.

Layers, in order:
    BASE_THEME → DEFAULT_SECTION_STYLES → typography → headings → layout
    → entries → contact presets → theme overrides → template overrides
    → per-document overrides

Examples:
    # Merge arbitrary layers
    >>> deep_merge({"font_size": 9}, {"font_size": 10, "line_height": 1.2})
    {'font_size': 10, 'line_height': 1.2}

    # Compose a template theme from named presets
    >>> compose_theme({"typography": "classic", "headings": "underline"})
"""

import copy
import os
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from vita.contexts.templating.defaults import BASE_THEME, DEFAULT_SECTION_STYLES
from vita.contexts.templating.exceptions import InvalidTemplateConfigError
from vita.contexts.templating.settings import LayoutSettings

load_dotenv()
PRESETS_DIR = Path(__file__).parent / "presets"
THEME_PRESETS_PATH = Path(
    os.getenv("VITA_THEME_PRESETS_PATH", str(PRESETS_DIR / "theme_presets.yaml"))
)

# Preset categories applied by compose_theme, in cascade order
PRESET_CATEGORIES = ("typography", "headings", "layout", "entries", "contact")


def deep_merge(*layers: Optional[Mapping]) -> Dict[str, Any]:
    """
    Deep merge settings layers, with later layers taking precedence.

    - Nested mappings merge key-wise
    - Lists/tuples replace the prior value wholesale
    - Keys that are missing or None in a layer never erase a prior value
    - None layers are skipped

    Inputs are never mutated and the result shares no containers with them.

    Args:
        *layers: Settings dicts, lowest precedence first

    Returns:
        New merged dict
    """
    result: Dict[str, Any] = {}

    for layer in layers:
        if not layer:
            continue

        for key, value in layer.items():
            if value is None:
                continue
            prior = result.get(key)
            if isinstance(value, Mapping):
                result[key] = deep_merge(prior if isinstance(prior, Mapping) else None, value)
            elif isinstance(value, (list, tuple)):
                result[key] = copy.deepcopy(list(value))
            else:
                result[key] = value

    return result


def load_yaml_mapping(config_path: Path) -> Dict[str, Any]:
    """
    Load a YAML file into a plain dict with OmegaConf interpolations resolved.

    Raises:
        InvalidTemplateConfigError: If the file is missing or not a mapping
    """
    if not config_path.exists():
        raise InvalidTemplateConfigError(f"Config file not found: {config_path}")

    data = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
    if not isinstance(data, dict):
        raise InvalidTemplateConfigError(f"Expected a mapping at top level of {config_path}")
    return data


@lru_cache(maxsize=None)
def load_theme_presets(config_path: Path = THEME_PRESETS_PATH) -> Dict[str, Dict[str, Any]]:
    """
    Load theme_presets.yaml: {category: {preset_name: partial settings}}.

    Cached per path; callers must treat the result as read-only.
    """
    presets = load_yaml_mapping(config_path)

    missing = [category for category in PRESET_CATEGORIES if category not in presets]
    if missing:
        raise InvalidTemplateConfigError(
            f"Theme presets file {config_path} is missing categories: {missing}"
        )
    return presets


def compose_theme(
    theme: Optional[Mapping] = None,
    config_path: Path = THEME_PRESETS_PATH,
) -> Dict[str, Any]:
    """
    Compose a complete settings dict from preset selections and overrides.

    Args:
        theme: Mapping like {"typography": "classic", "headings": "underline",
               "overrides": {...}}. Unknown preset names are ignored.
        config_path: Path to theme_presets.yaml

    Returns:
        Merged settings dict
    """
    theme = theme or {}
    presets = load_theme_presets(config_path)

    layers = [BASE_THEME, DEFAULT_SECTION_STYLES]
    for category in PRESET_CATEGORIES:
        preset_name = theme.get(category)
        if preset_name:
            layers.append(presets[category].get(preset_name))

    layers.append(theme.get("overrides"))
    return deep_merge(*layers)


def resolve_settings(
    theme_settings: Mapping,
    template_overrides: Optional[Mapping] = None,
    document_overrides: Optional[Mapping] = None,
) -> LayoutSettings:
    """
    Resolve the effective settings for one render pass.

    This is the only place defaults are applied: consumers read LayoutSettings
    fields directly and never re-default.

    Args:
        theme_settings: Composed template theme (from compose_theme)
        template_overrides: Template-specific overrides
        document_overrides: Per-document settings chosen by the user

    Returns:
        Frozen LayoutSettings
    """
    merged = deep_merge(theme_settings, template_overrides, document_overrides)
    return LayoutSettings.from_dict(merged)
