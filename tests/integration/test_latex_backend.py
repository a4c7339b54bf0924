"""
Integration tests for the LaTeX backend: page tree → LaTeX source.
"""

import pytest

from vita.contexts.rendering import LatexBackend, PdfLatexBackend, RenderBackendError, get_backend
from vita.contexts.templating import get_template, list_templates
from vita.contexts.templating.layout_nodes import NodeRole, node
from vita.contexts.templating.resume_data_structure import ResumeRecord


@pytest.fixture
def backend():
    return LatexBackend()


def render(template_id, resume, backend):
    return backend.render_source(get_template(template_id).build_tree(resume))


class TestLatexSource:
    """Tests for the generated document."""

    @pytest.mark.integration
    def test_document_shell(self, summary_only_resume, backend):
        """Output is a complete LaTeX document."""
        source = render("ats", summary_only_resume, backend)

        assert "% Generated by vita (template: ats)\n" in source
        assert r"\documentclass[10pt]{article}" in source
        assert r"\begin{document}" in source
        assert source.rstrip().endswith(r"\end{document}")
        assert r"\hypersetup{pdftitle={Ada Lovelace}}" in source

    @pytest.mark.integration
    def test_sections_in_render_order(self, full_resume, backend):
        """Sections appear in render order."""
        tree = get_template("ats").build_tree(full_resume)
        source = backend.render_source(tree)

        positions = [source.index(f"% section: {section_id}\n") for section_id in tree.section_ids()]
        assert positions == sorted(positions)

    @pytest.mark.integration
    def test_special_characters_escaped(self, backend):
        """Special characters are escaped."""
        resume = ResumeRecord.from_dict(
            {"basics": {"name": "Ada", "summary": "R&D at 100% for $5 #1"}, "work": [{"name": "A_B Corp"}]}
        )
        source = render("ats", resume, backend)

        assert r"R\&D at 100\% for \$5 \#1" in source
        assert r"A\_B Corp" in source

    @pytest.mark.integration
    def test_rich_text_markup(self, full_resume, backend):
        """Rich text becomes LaTeX styling commands."""
        source = render("ats", full_resume, backend)

        assert r"\textbf{engines}" in source
        assert r"\textit{numbers}" in source
        assert r"\href{https://example.com/notes}" in source

    @pytest.mark.integration
    def test_entry_link_icon(self, full_resume, backend):
        """Entry links carry a link icon."""
        source = render("ats", full_resume, backend)
        assert r"~\href{https://example.com/g}" in source

    @pytest.mark.integration
    def test_blank_lines_collapsed(self, full_resume, backend):
        """Consecutive blank lines are collapsed."""
        assert "\n\n\n" not in render("creative", full_resume, backend)

    @pytest.mark.integration
    def test_column_layout_markers(self, full_resume, backend):
        """Column layouts emit minipages."""
        source = render("multicolumn", full_resume, backend)

        assert "% columns: columns" in source
        assert source.count(r"\begin{minipage}") >= 3

    @pytest.mark.integration
    @pytest.mark.parametrize("template_id", list_templates())
    def test_every_template_renders(self, template_id, full_resume, backend):
        """Every template renders to LaTeX."""
        data = backend.render(get_template(template_id).build_tree(full_resume))
        source = data.decode("utf-8")

        assert source.count(r"\begin{document}") == 1
        assert "% section: summary" in source
        assert source.count("{") - source.count(r"\{") == source.count("}") - source.count(r"\}")

    @pytest.mark.integration
    def test_non_page_tree_rejected(self, backend):
        """Trees without a page root are rejected."""
        with pytest.raises(RenderBackendError):
            backend.render(node(NodeRole.SECTION, key="summary"))


class TestBackendLookup:
    """Tests for get_backend."""

    @pytest.mark.integration
    def test_known_backends(self):
        """Known backend names resolve."""
        assert isinstance(get_backend("latex"), LatexBackend)
        assert isinstance(get_backend("pdf"), PdfLatexBackend)
        assert isinstance(get_backend(), LatexBackend)

    @pytest.mark.integration
    def test_unknown_backend(self):
        """Unknown backend names raise."""
        with pytest.raises(ValueError, match="docx"):
            get_backend("docx")
