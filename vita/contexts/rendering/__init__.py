"""
Rendering Context

Responsibilities:
- Turns a composed page tree into document bytes
- Renders LaTeX source through per-role Jinja2 templates
- Compiles LaTeX to PDF and reports compiler errors

Owns: Render backends, LaTeX templates, compilation
Never: Decides layout, colors or section placement (that is the templating context)
"""

from vita.contexts.rendering.backends import (
    LatexBackend,
    PdfLatexBackend,
    RenderBackend,
    get_backend,
)
from vita.contexts.rendering.exceptions import RenderBackendError

__all__ = [
    "RenderBackend",
    "LatexBackend",
    "PdfLatexBackend",
    "get_backend",
    "RenderBackendError",
]
