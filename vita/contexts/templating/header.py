"""
Header rendering: name, professional title, contact line and profile image.
"""

from dataclasses import dataclass
from typing import List, Optional

from vita.contexts.templating.colors import ColorResolver
from vita.contexts.templating.fonts import FontConfig
from vita.contexts.templating.formatting import display_url
from vita.contexts.templating.layout_nodes import LayoutNode, NodeRole, node
from vita.contexts.templating.resume_data_structure import Basics
from vita.contexts.templating.settings import LayoutSettings

# Profile image edge length in points
PROFILE_IMAGE_SIZES = {"S": 50, "M": 80, "L": 120}

CONTACT_SEPARATORS = {"pipe": "|", "dash": "–", "bullet": "•", "comma": ","}


@dataclass(frozen=True)
class ContactItem:
    """
    One entry of the contact line.

    Attributes:
        kind: email, phone, location, url or profile
        value: Display text
        url: Link target (mailto:, tel:, http...)
        label: Longer label for profiles ("GitHub: ada")
    """

    kind: str
    value: str
    url: Optional[str] = None
    label: Optional[str] = None


def contact_items(basics: Basics) -> List[ContactItem]:
    """Contact items in display order: email, phone, location, url, profiles."""
    items = []

    if basics.email:
        items.append(ContactItem("email", basics.email, f"mailto:{basics.email}"))
    if basics.phone:
        items.append(ContactItem("phone", basics.phone, f"tel:{basics.phone}"))
    if basics.location.city:
        location = ", ".join(part for part in (basics.location.city, basics.location.country) if part)
        items.append(ContactItem("location", location))
    if basics.url:
        items.append(ContactItem("url", display_url(basics.url), basics.url))

    for profile in basics.profiles:
        if not profile.url:
            continue
        label = f"{profile.network}: {profile.username}" if profile.username else profile.network
        items.append(
            ContactItem(
                "profile",
                profile.username or profile.network or profile.url,
                profile.url,
                label or None,
            )
        )

    return items


def contact_style(settings: LayoutSettings) -> str:
    """Arrangement 2 stacks contacts one per line; otherwise the configured style."""
    if settings.personal_details_arrangement == 2:
        return "stacked"
    return settings.personal_details_contact_style or "bar"


def render_header(
    basics: Basics,
    settings: LayoutSettings,
    colors: ColorResolver,
    fonts: FontConfig,
    align: str,
    text_color: Optional[str] = None,
    background_color: Optional[str] = None,
    full_width: bool = False,
    show_image: bool = True,
) -> LayoutNode:
    """
    Build the header node.

    Args:
        basics: Personal details
        settings: Effective settings
        colors: Color resolver for this region
        fonts: Font faces for the document family
        align: left, center or right
        text_color: Region text color (e.g. white on a dark header band)
        background_color: Header band fill (full-width headers)
        full_width: Header spans the page, ignoring page margins
        show_image: Allow the profile image

    Returns:
        LayoutNode with role HEADER
    """
    children = []

    if show_image and basics.image and settings.show_profile_image:
        children.append(
            node(
                NodeRole.TEXT,
                key="image",
                kind="image",
                src=basics.image,
                size=PROFILE_IMAGE_SIZES.get(settings.profile_image_size, PROFILE_IMAGE_SIZES["M"]),
                shape=settings.profile_image_shape,
                border=settings.profile_image_border,
                border_color=text_color or colors.get_color("decorations"),
            )
        )

    if basics.name:
        children.append(
            node(
                NodeRole.TEXT,
                key="name",
                kind="name",
                text=basics.name,
                font_size=settings.name_font_size,
                line_height=settings.name_line_height,
                letter_spacing=settings.name_letter_spacing,
                bold=settings.name_bold,
                italic=settings.name_italic,
                font=fonts.resolve(bold=settings.name_bold, italic=settings.name_italic),
                uppercase=True,
                color=colors.get_color("name", text_color),
                align=align,
            )
        )

    if basics.label:
        children.append(
            node(
                NodeRole.TEXT,
                key="label",
                kind="title",
                text=basics.label,
                font_size=settings.title_font_size,
                line_height=settings.title_line_height,
                bold=settings.title_bold,
                italic=settings.title_italic,
                font=fonts.resolve(bold=settings.title_bold, italic=settings.title_italic),
                color=colors.get_color("title", text_color),
                align=align,
            )
        )

    items = contact_items(basics)
    if items:
        children.append(
            node(
                NodeRole.LIST,
                key="contact",
                kind="contact",
                items=tuple(items),
                style=contact_style(settings),
                separator=CONTACT_SEPARATORS.get(settings.contact_separator, "|"),
                font_size=settings.contact_font_size or settings.font_size,
                bold=settings.contact_bold,
                italic=settings.contact_italic,
                font=fonts.resolve(bold=settings.contact_bold, italic=settings.contact_italic),
                link_underline=settings.contact_link_underline,
                color=text_color or colors.get_color("text", "#444444"),
                link_color=colors.get_color("links", text_color),
                icon_color=colors.get_color("icons", text_color),
                align=align,
            )
        )

    return node(
        NodeRole.HEADER,
        key="header",
        children=children,
        align=align,
        full_width=full_width,
        background_color=background_color,
        bottom_margin=settings.header_bottom_margin,
        rule=settings.section_heading_style == 1,
        rule_color=colors.get_color("decorations"),
    )
