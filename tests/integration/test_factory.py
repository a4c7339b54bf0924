"""
Integration tests for the document factory: catalog template + resume → page tree.
"""

import json

import pytest

from vita.contexts.templating import export_document, get_template, list_templates
from vita.contexts.templating.composer import effective_order
from vita.contexts.templating.defaults import DEFAULT_THEME_COLOR, SECTION_IDS
from vita.contexts.templating.layout_nodes import NodeRole
from vita.contexts.templating.resume_data_structure import ResumeRecord


class TestBuildTree:
    """Tests for ResumeTemplate.build_tree across the catalog."""

    @pytest.mark.integration
    def test_summary_only_ats(self, summary_only_resume):
        """Summary-only resume builds an ats page."""
        tree = get_template("ats").build_tree(summary_only_resume)

        assert tree.role is NodeRole.PAGE
        assert len(tree.find_all(NodeRole.HEADER)) == 1
        assert tree.section_ids() == ["summary"]

    @pytest.mark.integration
    @pytest.mark.parametrize("template_id", list_templates())
    def test_every_template_renders_its_order_once(self, template_id, full_resume):
        """Every template renders each ordered section once."""
        template = get_template(template_id)
        order = effective_order(template.config, template.effective_settings(full_resume))
        rendered = template.build_tree(full_resume).section_ids()

        assert len(rendered) == len(set(rendered))
        assert set(rendered) == set(order) & set(SECTION_IDS)

    @pytest.mark.integration
    @pytest.mark.parametrize("template_id", list_templates())
    def test_tree_is_json_serializable(self, template_id, full_resume):
        """Trees serialize to JSON."""
        data = get_template(template_id).build_tree(full_resume).to_dict()

        encoded = json.dumps(data)
        assert json.loads(encoded)["role"] == "page"

    @pytest.mark.integration
    def test_unknown_template_falls_back(self, summary_only_resume):
        """Unknown template ids fall back."""
        template = get_template("no-such-template")

        assert template.config.id == "ats"
        assert template.build_tree(summary_only_resume).props["template_id"] == "ats"


class TestEffectiveSettings:
    """Tests for the per-document settings cascade."""

    @pytest.mark.integration
    def test_document_settings_override_template(self, full_resume_data):
        """Document settings override template settings."""
        data = dict(full_resume_data, meta={"layoutSettings": {"fontSize": 11, "sectionOrder": ["work"]}})
        resume = ResumeRecord.from_dict(data)
        template = get_template("classic")

        settings = template.effective_settings(resume)
        tree = template.build_tree(resume)

        assert settings.font_size == 11
        assert tree.section_ids() == ["work"]
        assert tree.props["font_size"] == 11

    @pytest.mark.integration
    def test_template_theme_is_not_mutated(self, full_resume_data):
        """Building a tree leaves the template theme untouched."""
        template = get_template("classic")
        before = template.effective_settings(ResumeRecord()).font_size

        resume = ResumeRecord.from_dict(dict(full_resume_data, meta={"layoutSettings": {"fontSize": 20}}))
        template.build_tree(resume)

        assert template.effective_settings(ResumeRecord()).font_size == before


class TestAccentColor:
    """Tests for accent color precedence."""

    @pytest.mark.integration
    def test_document_theme_color_wins(self):
        """Document theme color wins over the template's."""
        resume = ResumeRecord.from_dict({"basics": {"name": "Ada"}, "meta": {"themeColor": "#ff0000"}})
        template = get_template("classic")

        colors = template.color_resolver(resume, template.effective_settings(resume))
        assert colors.accent_color == "#ff0000"

    @pytest.mark.integration
    def test_template_default_then_global_default(self, summary_only_resume):
        """Template default applies before the global default."""
        for template_id in list_templates():
            template = get_template(template_id)
            colors = template.color_resolver(summary_only_resume, template.effective_settings(summary_only_resume))

            expected = template.config.default_theme_color or DEFAULT_THEME_COLOR
            assert colors.accent_color == expected


class TestExport:
    """Tests for export through a backend."""

    @pytest.mark.integration
    def test_export_with_explicit_backend(self, summary_only_resume):
        """Export uses the requested backend."""
        class RecordingBackend:
            name = "recording"

            def __init__(self):
                self.trees = []

            def render(self, tree):
                self.trees.append(tree)
                return b"ok"

        backend = RecordingBackend()
        data = export_document(summary_only_resume, "modern", backend=backend)

        assert data == b"ok"
        assert backend.trees[0].props["template_id"] == "modern"

    @pytest.mark.integration
    def test_export_uses_meta_template(self):
        """Export picks the template from resume meta."""
        resume = ResumeRecord.from_dict({"basics": {"name": "Ada", "summary": "Hi"}, "meta": {"templateId": "elegant"}})

        source = export_document(resume).decode("utf-8")
        assert "% Generated by vita (template: elegant)" in source
