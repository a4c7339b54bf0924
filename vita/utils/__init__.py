"""
Shared utilities for VITA.

Common functionality used across contexts:
- Logger setup
- LaTeX text helpers
"""

from vita.utils.latex import escape_latex, latex_color

__all__ = ["escape_latex", "latex_color"]
