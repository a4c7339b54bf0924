"""
Default values for VITA layout settings.

Provides the bottom two layers of the theme cascade:
- BASE_THEME: core settings shared by all templates
- DEFAULT_SECTION_STYLES: per-section list styles and field bold/italic toggles

Every other layer (presets, template overrides, per-document overrides) is a
partial dict merged on top of these by config_resolver.deep_merge.
"""

from typing import Any, Dict, List

# Fixed section kinds, in their canonical order (id, label)
SECTIONS = [
    ("summary", "Summary"),
    ("education", "Education"),
    ("skills", "Skills"),
    ("work", "Work Experience"),
    ("projects", "Projects"),
    ("certificates", "Certificates"),
    ("publications", "Publications"),
    ("awards", "Awards"),
    ("languages", "Languages"),
    ("interests", "Interests"),
    ("references", "References"),
    ("custom", "Custom Section"),
]

SECTION_IDS: List[str] = [section_id for section_id, _ in SECTIONS]
SECTION_LABELS: Dict[str, str] = dict(SECTIONS)

# Column assignment used when a template config omits its own lists
DEFAULT_LEFT_SECTIONS = [
    "skills",
    "education",
    "languages",
    "certificates",
    "interests",
    "awards",
    "references",
]
DEFAULT_RIGHT_SECTIONS = ["summary", "work", "projects", "publications", "custom"]

DEFAULT_THEME_COLOR = "#2563eb"
NEUTRAL_COLOR = "#000000"
DEFAULT_TEMPLATE_ID = "ats"

# Millimetres to points
MM_TO_PT = 2.835

BASE_THEME: Dict[str, Any] = {
    # Core typography
    "font_size": 9,
    "line_height": 1.3,
    "font_family": "Roboto",
    # Page margins (mm)
    "margin_horizontal": 12,
    "margin_vertical": 12,
    # Section spacing (pt)
    "section_margin": 4,
    "bullet_margin": 1,
    "use_bullets": True,
    "header_bottom_margin": 12,
    # Visual roles that opt into the accent color
    "theme_color_target": ["headings", "links", "icons", "decorations"],
    "section_order": list(SECTION_IDS),
    "section_titles": {},
    # Profile image
    "show_profile_image": False,
    "profile_image_size": "M",
    "profile_image_shape": "circle",
    "profile_image_border": False,
    "section_display_style": "plain",
    "sections": {section_id: {"heading_visible": True} for section_id in SECTION_IDS},
}


def _fields(**toggles: tuple) -> Dict[str, Dict[str, bool]]:
    """Build a fields mapping from name=(bold, italic) pairs."""
    return {name: {"bold": bold, "italic": italic} for name, (bold, italic) in toggles.items()}


DEFAULT_SECTION_STYLES: Dict[str, Any] = {
    "skills_display_style": "grid",
    "skills_level_style": 0,
    "certificates_display_style": "compact",
    "certificates_level_style": 1,
    "sections": {
        "skills": {
            "list_style": "bullet",
            "fields": _fields(name=(True, False), keywords=(False, False)),
        },
        "languages": {
            "list_style": "bullet",
            "fields": _fields(name=(True, False), fluency=(False, False)),
        },
        "interests": {
            "list_style": "bullet",
            "fields": _fields(name=(True, False), keywords=(False, False)),
        },
        "work": {
            "list_style": "none",
            "item_list_style": "bullet",
            "fields": _fields(
                company=(True, False),
                position=(True, False),
                website=(False, False),
                date=(False, False),
                achievements=(False, False),
            ),
        },
        "education": {
            "list_style": "none",
            "fields": _fields(
                institution=(True, False),
                degree=(True, False),
                area=(False, False),
                date=(False, False),
                gpa=(False, False),
                courses=(False, False),
            ),
        },
        "projects": {
            "list_style": "bullet",
            "item_list_style": "bullet",
            "fields": _fields(
                name=(True, False),
                date=(False, False),
                technologies=(False, False),
                features=(False, False),
                url=(False, False),
            ),
        },
        "certificates": {
            "list_style": "bullet",
            "fields": _fields(
                name=(True, False),
                issuer=(False, False),
                date=(False, False),
                url=(False, False),
            ),
        },
        "publications": {
            "list_style": "bullet",
            "fields": _fields(
                name=(True, False),
                publisher=(False, False),
                url=(False, False),
                date=(False, False),
            ),
        },
        "awards": {
            "list_style": "bullet",
            "fields": _fields(title=(True, False), awarder=(False, False), date=(False, False)),
        },
        "references": {
            "list_style": "bullet",
            "fields": _fields(name=(True, False), position=(False, False)),
        },
        "custom": {
            "list_style": "bullet",
            "fields": _fields(
                name=(True, False),
                description=(False, False),
                date=(False, False),
                url=(False, False),
            ),
        },
    },
}
