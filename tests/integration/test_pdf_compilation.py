"""
Integration tests for PDF compilation.

Requires pdflatex on PATH; skipped otherwise.
"""

import pytest

from vita.contexts.rendering import PdfLatexBackend, RenderBackendError
from vita.contexts.rendering.compiler import _parse_latex_log, compile_latex_source, compiler_available
from vita.contexts.templating import get_template

requires_pdflatex = pytest.mark.skipif(not compiler_available("pdflatex"), reason="pdflatex not installed")

MINIMAL_DOCUMENT = r"""
\documentclass{article}
\begin{document}
Hello
\end{document}
"""


@pytest.mark.unit
def test_parse_latex_log():
    """Log parsing separates errors and warnings."""
    log = "\n".join(
        [
            "! Undefined control sequence.",
            "./resume.tex:12: Missing $ inserted.",
            "LaTeX Warning: Reference `x' undefined.",
        ]
    )

    errors, warnings = _parse_latex_log(log)

    assert "Undefined control sequence." in errors
    assert "Missing $ inserted." in errors
    assert any("Reference" in warning for warning in warnings)


@pytest.mark.unit
def test_missing_compiler_reports_failure():
    """Missing compiler gives a failed result."""
    result = compile_latex_source(MINIMAL_DOCUMENT, compiler="no-such-latex-binary")

    assert not result.success
    assert result.pdf_bytes is None
    assert result.errors


@pytest.mark.integration
@pytest.mark.latex
@requires_pdflatex
def test_compile_minimal_document():
    """Minimal document compiles to PDF."""
    result = compile_latex_source(MINIMAL_DOCUMENT, num_passes=1)

    assert result.success
    assert result.pdf_bytes.startswith(b"%PDF")


@pytest.mark.integration
@pytest.mark.latex
@requires_pdflatex
def test_compile_error_reported():
    """Compile errors are reported."""
    result = compile_latex_source(MINIMAL_DOCUMENT.replace("Hello", r"\undefinedmacro"), num_passes=1)

    assert not result.success
    assert any("Undefined control sequence" in error for error in result.errors)


@pytest.mark.integration
@pytest.mark.latex
@requires_pdflatex
@pytest.mark.parametrize("template_id", ["ats", "modern", "multicolumn", "creative"])
def test_pdf_backend_produces_pdf(template_id, full_resume):
    """PDF backend renders every template."""
    data = PdfLatexBackend().render(get_template(template_id).build_tree(full_resume))
    assert data.startswith(b"%PDF")


@pytest.mark.integration
def test_pdf_backend_raises_on_failure(full_resume):
    """PDF backend raises when compilation fails."""
    backend = PdfLatexBackend(compiler="no-such-latex-binary")

    with pytest.raises(RenderBackendError) as excinfo:
        backend.render(get_template("ats").build_tree(full_resume))

    assert excinfo.value.errors
