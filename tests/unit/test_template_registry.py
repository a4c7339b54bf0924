"""Unit tests for the template catalog."""

import pytest

from vita.contexts.templating.config_resolver import compose_theme
from vita.contexts.templating.exceptions import InvalidTemplateConfigError, UnknownLayoutTypeError
from vita.contexts.templating.settings import LayoutType
from vita.contexts.templating.template_registry import (
    TemplateConfig,
    get_template_config,
    list_template_ids,
    load_template_catalog,
)

CATALOG_IDS = [
    "ats",
    "classic",
    "modern",
    "creative",
    "professional",
    "elegant",
    "classic-slate",
    "glow",
    "multicolumn",
    "stylish",
    "timeline",
    "polished",
    "developer",
    "developer2",
    "minimal",
    "executive",
    "academic",
]


@pytest.mark.unit
def test_catalog_has_all_templates():
    """Catalog lists every built-in template."""
    assert sorted(list_template_ids()) == sorted(CATALOG_IDS)


@pytest.mark.unit
def test_every_layout_type_is_used():
    """Every layout type except equal columns has a template."""
    used = {config.layout_type for config in load_template_catalog().values()}
    assert used >= set(LayoutType) - {LayoutType.TWO_COLUMN_EQUAL}


@pytest.mark.unit
@pytest.mark.parametrize("template_id", CATALOG_IDS)
def test_template_theme_composes(template_id):
    """Template theme composes from presets."""
    config = get_template_config(template_id)
    theme = compose_theme(config.theme)

    assert config.id == template_id
    assert theme["section_order"]


@pytest.mark.unit
def test_lookup_known_template():
    """Known ids return their template."""
    config = get_template_config("multicolumn")

    assert config.layout_type is LayoutType.THREE_COLUMN
    assert config.middle_column_sections == ("summary", "work", "projects", "custom")


@pytest.mark.unit
@pytest.mark.parametrize("template_id", ["no-such-template", None])
def test_unknown_template_falls_back_to_ats(template_id):
    """Unknown ids fall back to ats."""
    assert get_template_config(template_id).id == "ats"


@pytest.mark.unit
def test_unknown_layout_type_rejected():
    """Unknown layout types are rejected."""
    with pytest.raises(UnknownLayoutTypeError) as excinfo:
        TemplateConfig.from_dict("broken", {"layout_type": "zigzag"})

    assert excinfo.value.layout_type == "zigzag"
    assert isinstance(excinfo.value, ValueError)


@pytest.mark.unit
def test_unknown_keys_rejected():
    """Unknown config keys are rejected."""
    with pytest.raises(InvalidTemplateConfigError):
        TemplateConfig.from_dict("broken", {"layout_type": "single-column", "colour": "red"})


@pytest.mark.unit
def test_catalog_must_define_fallback(tmp_path):
    """Catalog without the fallback template is rejected."""
    catalog_file = tmp_path / "templates.yaml"
    catalog_file.write_text("solo:\n  name: Solo\n  layout_type: single-column\n")

    with pytest.raises(InvalidTemplateConfigError):
        load_template_catalog(catalog_file)
