"""Unit tests for the Jinja2 template registry used by the LaTeX backend."""

import pytest
from jinja2 import TemplateNotFound
from jinja2.exceptions import UndefinedError

from vita.contexts.rendering.registries import TYPES_PATH, TemplateRegistry

NODE_TYPES = [
    "document",
    "background",
    "header",
    "column_set",
    "column",
    "section",
    "heading",
    "entry",
    "rich_text",
    "list",
    "text",
]


@pytest.mark.unit
@pytest.mark.parametrize("type_name", NODE_TYPES)
def test_every_node_type_has_a_template(type_name):
    """Every node type has a template file."""
    registry = TemplateRegistry()

    assert registry.get_template_path(type_name).exists()
    assert registry.get_template(type_name) is not None


@pytest.mark.unit
def test_templates_are_cached():
    """Repeated lookups return the cached template."""
    registry = TemplateRegistry()

    first = registry.get_template("heading")
    assert registry.is_cached("heading")
    assert registry.get_template("heading") is first

    registry.clear_cache()
    assert not registry.is_cached("heading")


@pytest.mark.unit
def test_missing_template():
    """Unknown node types raise."""
    with pytest.raises(TemplateNotFound, match="no_such_type"):
        TemplateRegistry().get_template("no_such_type")


@pytest.mark.unit
def test_custom_delimiters_and_strict_undefined(tmp_path):
    """Custom delimiters render and undefined variables raise."""
    type_dir = tmp_path / "greeting"
    type_dir.mkdir()
    (type_dir / "template.tex.jinja").write_text(
        "<%% if loud %%>\n\\textbf{<<< name >>>}<# name only #>\n<%% endif %%>\n"
    )

    registry = TemplateRegistry(tmp_path)
    template = registry.get_template("greeting")

    assert template.render(name="Ada", loud=True) == "\\textbf{Ada}"
    with pytest.raises(UndefinedError):
        template.render(loud=True)


@pytest.mark.unit
def test_default_types_path():
    """Default registry points at the packaged types directory."""
    assert TemplateRegistry().types_base_path == TYPES_PATH
