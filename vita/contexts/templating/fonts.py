"""
Font faces per family.

Renderers never pick a face by name; they ask FontConfig.resolve(bold, italic)
so that the boldItalic > bold > italic > base precedence lives in one place.
"""

from dataclasses import dataclass
from typing import Dict, Tuple

# Built-in PDF families: (base, bold, italic, bold_italic, generic)
BUILTIN_FAMILIES: Dict[str, Tuple[str, str, str, str, str]] = {
    "Times-Roman": ("Times-Roman", "Times-Bold", "Times-Italic", "Times-BoldItalic", "serif"),
    "Helvetica": (
        "Helvetica",
        "Helvetica-Bold",
        "Helvetica-Oblique",
        "Helvetica-BoldOblique",
        "sans",
    ),
    "Courier": ("Courier", "Courier-Bold", "Courier-Oblique", "Courier-BoldOblique", "mono"),
}

FAMILY_ALIASES = {"Times": "Times-Roman", "Times New Roman": "Times-Roman"}

# Families registered with their own font files; faces share the family name
REGISTERED_FAMILIES = {
    "Roboto": "sans",
    "Open Sans": "sans",
    "Lato": "sans",
    "Montserrat": "sans",
}


@dataclass(frozen=True)
class FontConfig:
    """
    The four faces of one font family.

    Attributes:
        base: Regular face
        bold: Bold face
        italic: Italic face
        bold_italic: Bold italic face (equals bold when the family has none)
        generic: serif, sans or mono
    """

    base: str
    bold: str
    italic: str
    bold_italic: str
    generic: str = "sans"

    @classmethod
    def for_family(cls, family: str) -> "FontConfig":
        """
        Faces for a family name.

        Unknown families are treated like registered ones: weight and style
        are selected at render time on the family itself.

        Example:
            >>> FontConfig.for_family("Times").bold
            'Times-Bold'
        """
        family = FAMILY_ALIASES.get(family, family)

        if family in BUILTIN_FAMILIES:
            base, bold, italic, bold_italic, generic = BUILTIN_FAMILIES[family]
            return cls(base, bold, italic, bold_italic or bold, generic)

        generic = REGISTERED_FAMILIES.get(family, "sans")
        return cls(family, family, family, family, generic)

    def resolve(self, bold: bool = False, italic: bool = False) -> str:
        """Face for a style combination: bold_italic > bold > italic > base."""
        if bold and italic:
            return self.bold_italic or self.bold
        if bold:
            return self.bold
        if italic:
            return self.italic
        return self.base
