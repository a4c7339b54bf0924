"""
LaTeX text helpers used by the LaTeX rendering backend.
"""

import re
from typing import Optional

HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})$")


def escape_latex(plaintext_str: str) -> str:
    """
    Escape LaTeX special characters in plaintext.

    Conversions:
    - \\ → \\textbackslash{} (backslash, must be first to avoid double-escaping)
    - % $ & _ # { } → backslash-prefixed
    - ~ → \\textasciitilde{}
    - ^ → \\textasciicircum{}

    Args:
        plaintext_str: Plain text string

    Returns:
        LaTeX string with special characters escaped

    Example:
        >>> escape_latex("R&D at 87%")
        'R\\\\&D at 87\\\\%'
    """
    if not plaintext_str:
        return ""

    result = plaintext_str

    # Order matters: backslash first
    result = result.replace("\\", "\x00")
    result = result.replace("%", r"\%")
    result = result.replace("$", r"\$")
    result = result.replace("&", r"\&")
    result = result.replace("_", r"\_")
    result = result.replace("#", r"\#")
    result = result.replace("{", r"\{")
    result = result.replace("}", r"\}")
    result = result.replace("~", r"\textasciitilde{}")
    result = result.replace("^", r"\textasciicircum{}")
    result = result.replace("\x00", r"\textbackslash{}")

    return result


def latex_color(color: Optional[str]) -> Optional[str]:
    """
    Convert a CSS hex color ("#2563eb", "#fff") to an xcolor HTML code ("2563EB").

    Returns None for anything that is not a hex color (e.g. "transparent"),
    so templates can skip the color command entirely.
    """
    if not color:
        return None
    match = HEX_COLOR.match(color.strip())
    if not match:
        return None
    code = match.group(1)
    if len(code) == 3:
        code = "".join(ch * 2 for ch in code)
    return code.upper()


def set_max_consecutive_blank_lines(content: str, max_consecutive: int = 1) -> str:
    """
    Normalize consecutive blank lines to a maximum number.

    Example:
        >>> set_max_consecutive_blank_lines("text\\n\\n\\n\\nmore", max_consecutive=1)
        'text\\n\\nmore'
    """
    if max_consecutive == 0:
        return re.sub(r"\n\s*\n", "\n", content)

    replacement = "\n" * (max_consecutive + 1)
    return re.sub(r"\n(?:[ \t]*\n){%d,}" % (max_consecutive + 1), replacement, content)


# Glyphs outside the T1 encoding mapped to LaTeX commands
LATEX_SYMBOLS = {
    "🔗": r"$\nearrow$",
    "•": r"\textbullet{}",
    "–": "--",
    "—": "---",
}


def latex_text(plaintext_str: str) -> str:
    """Escape plaintext and replace glyphs pdflatex cannot typeset directly."""
    result = escape_latex(plaintext_str)
    for glyph, command in LATEX_SYMBOLS.items():
        result = result.replace(glyph, command)
    return result


def latex_url(url: str) -> str:
    """Escape a URL for use as the first argument of \\href."""
    if not url:
        return ""
    return url.replace("\\", "/").replace("%", r"\%").replace("#", r"\#")
