"""
Configuration Model

Typed, immutable view over a fully merged settings dict. The cascade itself
(base theme → presets → template → per-document) lives in config_resolver;
this module only turns the merged result into LayoutSettings.
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class LayoutType(str, Enum):
    """Page column/region structure."""

    SINGLE_COLUMN = "single-column"
    SINGLE_COLUMN_CENTERED = "single-column-centered"
    TWO_COLUMN_SIDEBAR_LEFT = "two-column-sidebar-left"
    TWO_COLUMN_SIDEBAR_RIGHT = "two-column-sidebar-right"
    TWO_COLUMN_EQUAL = "two-column-equal"
    THREE_COLUMN = "three-column"
    CREATIVE_SIDEBAR = "creative-sidebar"


class ListStyle(str, Enum):
    BULLET = "bullet"
    NUMBER = "number"
    DASH = "dash"
    NONE = "none"
    # Items flow on one line, comma separated
    INLINE = "inline"


class Capitalization(str, Enum):
    UPPERCASE = "uppercase"
    LOWERCASE = "lowercase"
    TITLECASE = "titlecase"
    CAPITALIZE = "capitalize"


class LinkStyle(str, Enum):
    INLINE = "inline"
    ICON = "icon"
    UNDERLINE = "underline"
    NEWLINE = "newline"


LIST_STYLES = {style.value for style in ListStyle}
LINK_STYLES = {style.value for style in LinkStyle}
LIST_STYLE_ALIASES = {"hyphen": ListStyle.DASH.value, "bullets": ListStyle.BULLET.value}


def normalize_list_style(value: Optional[str], default: str = ListStyle.BULLET.value) -> str:
    """Map a raw list-style value onto the ListStyle vocabulary."""
    if value is None:
        return default
    value = LIST_STYLE_ALIASES.get(str(value).lower(), str(value).lower())
    if value not in LIST_STYLES:
        return default
    return value


@dataclass(frozen=True)
class FieldStyle:
    bold: bool = False
    italic: bool = False


@dataclass(frozen=True)
class SectionSettings:
    """
    Per-section settings.

    Attributes:
        heading_visible: Whether the section heading is drawn
        list_style: Marker style for the section's entries
        item_list_style: Marker style for nested items (achievements, features)
        fields: Per-field bold/italic toggles (e.g. "company", "date")
    """

    heading_visible: bool = True
    list_style: str = ListStyle.BULLET.value
    item_list_style: str = ListStyle.BULLET.value
    fields: Dict[str, FieldStyle] = field(default_factory=dict)

    def field_style(self, name: str) -> FieldStyle:
        return self.fields.get(name, FieldStyle())

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SectionSettings":
        data = data or {}
        field_styles = {
            name: FieldStyle(bool(toggles.get("bold", False)), bool(toggles.get("italic", False)))
            for name, toggles in (data.get("fields") or {}).items()
            if isinstance(toggles, dict)
        }
        return cls(
            heading_visible=bool(data.get("heading_visible", True)),
            list_style=normalize_list_style(data.get("list_style")),
            item_list_style=normalize_list_style(data.get("item_list_style")),
            fields=field_styles,
        )


@dataclass(frozen=True)
class LayoutSettings:
    """
    Effective layout settings for one render pass.

    Built fresh from the merged settings dict on every render and never mutated.
    Physical sizes are millimetres (margins) or points (font sizes, spacing).
    """

    # Typography
    font_size: float = 9
    line_height: float = 1.3
    font_family: str = "Roboto"

    # Page margins (mm)
    margin_horizontal: float = 12
    margin_vertical: float = 12

    # Spacing (pt)
    section_margin: float = 4
    bullet_margin: float = 1
    use_bullets: bool = True
    header_bottom_margin: float = 12

    # Accent color targets
    theme_color_target: Tuple[str, ...] = ()

    # Structure
    section_order: Tuple[str, ...] = ()
    section_titles: Dict[str, str] = field(default_factory=dict)
    column_count: int = 1
    left_column_width: float = 30
    middle_column_width: float = 50
    left_column_sections: Optional[Tuple[str, ...]] = None
    middle_column_sections: Optional[Tuple[str, ...]] = None
    right_column_sections: Optional[Tuple[str, ...]] = None
    header_position: str = "top"

    # Section headings
    section_heading_style: int = 1
    section_heading_align: str = "left"
    section_heading_bold: bool = True
    section_heading_capitalization: str = Capitalization.UPPERCASE.value
    section_heading_size: str = "M"
    section_heading_icons: str = "none"
    section_heading_letter_spacing: float = 0
    section_display_style: str = "plain"

    # Entries
    entry_layout_style: int = 1
    entry_column_width: str = "auto"
    entry_title_size: str = "M"
    entry_subtitle_style: str = "normal"
    entry_subtitle_placement: str = "sameLine"
    entry_indent_body: bool = False
    entry_list_style: str = ListStyle.BULLET.value

    # Personal details / header
    personal_details_align: str = "left"
    personal_details_arrangement: int = 1
    personal_details_contact_style: str = "bar"
    personal_details_icon_style: int = 1
    contact_separator: str = "pipe"
    name_font_size: float = 28
    name_line_height: float = 1.2
    name_bold: bool = True
    name_italic: bool = False
    name_font: str = "body"
    name_letter_spacing: float = 0
    title_font_size: float = 14
    title_line_height: float = 1.2
    title_bold: bool = False
    title_italic: bool = False
    contact_font_size: Optional[float] = None
    contact_bold: bool = False
    contact_italic: bool = False
    contact_link_underline: bool = True

    # Links
    link_show_icon: bool = False
    link_show_full_url: bool = False
    section_link_style: Optional[str] = None

    # Profile image
    show_profile_image: bool = False
    profile_image_size: str = "M"
    profile_image_shape: str = "circle"
    profile_image_border: bool = False

    # Section display variants
    skills_display_style: str = "grid"
    skills_level_style: int = 0
    certificates_display_style: str = "compact"
    certificates_level_style: int = 1

    sections: Dict[str, SectionSettings] = field(default_factory=dict)

    # Keys not modelled above, kept so templates can read bespoke values
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutSettings":
        """
        Build settings from a merged settings dict.

        Lists become tuples, list-style values are normalized, section blocks
        become SectionSettings, and unknown keys land in `extra`.
        """
        known = {f.name for f in fields(cls)} - {"sections", "extra"}
        kwargs: Dict[str, Any] = {}
        extra: Dict[str, Any] = {}

        for key, value in data.items():
            if key == "sections":
                continue
            if key not in known:
                extra[key] = value
                continue
            if value is None and key not in _NULLABLE:
                continue
            if isinstance(value, list):
                value = tuple(value)
            kwargs[key] = value

        if "entry_list_style" in kwargs:
            kwargs["entry_list_style"] = normalize_list_style(kwargs["entry_list_style"])

        kwargs["sections"] = {
            section_id: SectionSettings.from_dict(section_data)
            for section_id, section_data in (data.get("sections") or {}).items()
        }
        kwargs["extra"] = extra
        return cls(**kwargs)

    def section(self, section_id: str) -> SectionSettings:
        return self.sections.get(section_id, SectionSettings())

    @property
    def effective_link_style(self) -> str:
        """Link display policy for entry URLs."""
        if self.section_link_style in LINK_STYLES:
            return self.section_link_style
        if self.link_show_full_url:
            return LinkStyle.INLINE.value
        return LinkStyle.ICON.value

    @property
    def has_explicit_columns(self) -> bool:
        return any(
            sections is not None
            for sections in (
                self.left_column_sections,
                self.middle_column_sections,
                self.right_column_sections,
            )
        )


_NULLABLE = {
    "left_column_sections",
    "middle_column_sections",
    "right_column_sections",
    "contact_font_size",
    "section_link_style",
}


def section_order_list(settings: LayoutSettings) -> List[str]:
    """Section order with duplicates removed, first occurrence kept."""
    return list(dict.fromkeys(settings.section_order))
