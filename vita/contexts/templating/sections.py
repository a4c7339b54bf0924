"""
Section Renderer Registry

One renderer per section kind. Every renderer takes the same inputs and returns
a SECTION LayoutNode, or None when the resume has nothing for that section.
Returning None is the normal empty state, never an error.

Usage:
    >>> node = render_section("work", resume, settings, colors, fonts)
    >>> node is None or node.key == "work"
    True
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

from vita.contexts.templating.colors import ColorResolver
from vita.contexts.templating.defaults import SECTION_LABELS
from vita.contexts.templating.fonts import FontConfig
from vita.contexts.templating.formatting import (
    format_date,
    format_date_range,
    format_score,
    format_section_title,
    level_score,
    list_marker,
)
from vita.contexts.templating.layout_nodes import LayoutNode, NodeRole, node
from vita.contexts.templating.resume_data_structure import ResumeRecord
from vita.contexts.templating.rich_text import parse_inline, parse_rich_text
from vita.contexts.templating.settings import (
    FieldStyle,
    LayoutSettings,
    LinkStyle,
    ListStyle,
)

# Heading decoration per section_heading_style
HEADING_DECORATIONS = {
    1: "plain",
    2: "rule",
    3: "underline",
    4: "filled",
    5: "bar",
    6: "framed",
    7: "bar",
    8: "overline",
    9: "code",
}

# Default colors per role when the role does not take the accent
TITLE_COLOR = "#1a1a1a"
SUBTEXT_COLOR = "#444444"
META_COLOR = "#666666"
BODY_COLOR = "#444444"


@dataclass(frozen=True)
class TextStyle:
    """Resolved style for one piece of entry text."""

    bold: bool
    italic: bool
    font: str
    color: str


@dataclass(frozen=True)
class CardStyle:
    """Container colors used when section_display_style is "card"."""

    background_color: str = "#ffffff"
    border_color: Optional[str] = None


@dataclass(frozen=True)
class SectionContext:
    """Inputs shared by every renderer for one section."""

    section_id: str
    resume: ResumeRecord
    settings: LayoutSettings
    colors: ColorResolver
    fonts: FontConfig
    card: Optional[CardStyle] = None

    @property
    def section(self):
        return self.settings.section(self.section_id)

    def text_style(self, field_name: str, color: str) -> TextStyle:
        style: FieldStyle = self.section.field_style(field_name)
        return TextStyle(style.bold, style.italic, self.fonts.resolve(style.bold, style.italic), color)

    def rich_text(self, text: str, key: str = "summary") -> Optional[LayoutNode]:
        """Rich-text node for a free-text field, None when empty."""
        if not text or not text.strip():
            return None
        link_style = self.settings.effective_link_style
        content = parse_rich_text(
            text,
            font_size=self.settings.font_size,
            show_full_url=link_style == LinkStyle.INLINE.value,
            show_link_icon=link_style == LinkStyle.ICON.value,
        )
        return node(
            NodeRole.RICH_TEXT,
            key=key,
            content=content,
            font_size=self.settings.font_size,
            line_height=self.settings.line_height,
            color=self.colors.get_color("text", BODY_COLOR),
            link_color=self.colors.get_color("links", BODY_COLOR),
            fonts=self.fonts,
        )


SectionRenderer = Callable[[SectionContext], Optional[LayoutNode]]


def section_title(section_id: str, settings: LayoutSettings, default: Optional[str] = None) -> str:
    """Heading text: settings override, then the given default, then the built-in label."""
    title = settings.section_titles.get(section_id) or default or SECTION_LABELS.get(section_id, section_id)
    return format_section_title(title, settings.section_heading_capitalization)


def render_heading(ctx: SectionContext, title: Optional[str] = None, level: int = 1) -> Optional[LayoutNode]:
    """Section heading node, None when the section hides its heading."""
    if not ctx.section.heading_visible:
        return None

    settings = ctx.settings
    if title is None:
        text = section_title(ctx.section_id, settings)
    else:
        text = format_section_title(title, settings.section_heading_capitalization)

    return node(
        NodeRole.HEADING,
        key=f"{ctx.section_id}-heading" if level == 1 else f"{ctx.section_id}-{text}",
        text=text,
        level=level,
        style=settings.section_heading_style,
        decoration=HEADING_DECORATIONS.get(settings.section_heading_style, "plain") if level == 1 else "plain",
        align=settings.section_heading_align,
        bold=settings.section_heading_bold,
        size=settings.section_heading_size,
        letter_spacing=settings.section_heading_letter_spacing,
        icons=settings.section_heading_icons,
        font=ctx.fonts.resolve(bold=settings.section_heading_bold),
        font_size=settings.font_size,
        color=ctx.colors.get_color("headings"),
        decoration_color=ctx.colors.get_color("decorations"),
    )


def render_list(
    ctx: SectionContext,
    key: str,
    items: Sequence[str],
    list_style: str,
    field_name: str,
    label: Optional[str] = None,
) -> Optional[LayoutNode]:
    """List node for string items (highlights, courses, keywords)."""
    items = [item for item in items if item and item.strip()]
    if not items:
        return None

    style = ctx.text_style(field_name, ctx.colors.get_color("text", BODY_COLOR))
    return node(
        NodeRole.LIST,
        key=key,
        kind="items",
        label=label,
        style=list_style,
        markers=tuple(list_marker(list_style, index) for index in range(len(items))),
        items=tuple(tuple(parse_inline(item)) for item in items),
        text_style=style,
        font_size=ctx.settings.font_size,
        bullet_margin=ctx.settings.bullet_margin,
        marker_color=ctx.colors.get_color("decorations", style.color),
    )


def render_entry(
    ctx: SectionContext,
    key: str,
    index: int,
    title: str,
    title_field: str,
    subtitle: str = "",
    subtitle_field: str = "",
    date_range: str = "",
    location: str = "",
    url: str = "",
    url_field: str = "",
    layout_style: Optional[int] = None,
    children: Sequence[Optional[LayoutNode]] = (),
) -> LayoutNode:
    """
    Entry node: title line (with list marker, link and date) plus body children.

    Layout styles follow the entry header variants:
        1. title + date on one line, subtitle below
        2. title | subtitle | location, date right
        3. title, then subtitle + date
        4. stacked, one element per line
        5. compact single line
    """
    settings = ctx.settings
    colors = ctx.colors
    list_style = ctx.section.list_style

    return node(
        NodeRole.ENTRY,
        key=key,
        children=children,
        layout_style=layout_style if layout_style is not None else settings.entry_layout_style,
        marker=list_marker(list_style, index),
        title=title,
        title_style=ctx.text_style(title_field, colors.get_color("title", TITLE_COLOR)),
        subtitle=subtitle or None,
        subtitle_style=ctx.text_style(subtitle_field, colors.get_color("subtext", SUBTEXT_COLOR))
        if subtitle
        else None,
        location=location or None,
        date_range=date_range or None,
        date_style=ctx.text_style("date", colors.get_color("meta", META_COLOR)) if date_range else None,
        url=url or None,
        url_style=ctx.text_style(url_field, colors.get_color("links", TITLE_COLOR)) if url else None,
        link_style=settings.effective_link_style,
        font_size=settings.font_size,
        title_size=settings.entry_title_size,
        subtitle_placement=settings.entry_subtitle_placement,
        indent_body=settings.entry_indent_body,
    )


def render_section_node(ctx: SectionContext, children: List[Optional[LayoutNode]]) -> Optional[LayoutNode]:
    """Wrap heading + body; None when the body is empty."""
    body = [child for child in children if child is not None]
    if not body:
        return None

    card = ctx.card if ctx.settings.section_display_style == "card" else None
    return node(
        NodeRole.SECTION,
        key=ctx.section_id,
        children=[render_heading(ctx), *body],
        margin_bottom=ctx.settings.section_margin,
        card=card is not None,
        background_color=card.background_color if card else None,
        border_color=card.border_color if card else None,
    )


# Renderers


def render_summary(ctx: SectionContext) -> Optional[LayoutNode]:
    return render_section_node(ctx, [ctx.rich_text(ctx.resume.basics.summary)])


def render_work(ctx: SectionContext) -> Optional[LayoutNode]:
    entries = []
    for index, item in enumerate(ctx.resume.work):
        entries.append(
            render_entry(
                ctx,
                item.id,
                index,
                title=item.company,
                title_field="company",
                subtitle=item.position,
                subtitle_field="position",
                date_range=format_date_range(item.start_date, item.end_date),
                location=item.location,
                url=item.url,
                url_field="website",
                children=[
                    ctx.rich_text(item.summary),
                    render_list(
                        ctx,
                        f"{item.id}-highlights",
                        item.highlights,
                        ctx.section.item_list_style,
                        "achievements",
                    ),
                ],
            )
        )
    return render_section_node(ctx, entries)


def render_education(ctx: SectionContext) -> Optional[LayoutNode]:
    entries = []
    for index, item in enumerate(ctx.resume.education):
        degree = item.study_type
        if item.area:
            degree = f"{degree} in {item.area}" if degree else item.area

        score = format_score(item.score)
        score_node = None
        if score:
            style = ctx.text_style("gpa", ctx.colors.get_color("text", "#555555"))
            score_node = node(NodeRole.TEXT, key=f"{item.id}-score", kind="score", text=score, text_style=style)

        entries.append(
            render_entry(
                ctx,
                item.id,
                index,
                title=item.institution,
                title_field="institution",
                subtitle=degree,
                subtitle_field="degree",
                date_range=format_date_range(item.start_date, item.end_date),
                url=item.url,
                url_field="institution",
                children=[
                    score_node,
                    ctx.rich_text(item.summary),
                    render_list(
                        ctx,
                        f"{item.id}-courses",
                        item.courses,
                        ListStyle.INLINE.value,
                        "courses",
                        label="Relevant Coursework:",
                    ),
                ],
            )
        )
    return render_section_node(ctx, entries)


def render_skills(ctx: SectionContext) -> Optional[LayoutNode]:
    skills = [skill for skill in ctx.resume.skills if skill.name or skill.keywords]
    if not skills:
        return None

    settings = ctx.settings
    list_style = ctx.section.list_style
    colors = ctx.colors
    show_level = settings.skills_display_style == "level" or settings.skills_level_style > 0

    items = tuple(
        {
            "id": skill.id,
            "name": skill.name,
            "level": skill.level,
            "score": level_score(skill.level) if show_level and skill.level else None,
            "keywords": ", ".join(skill.keywords),
        }
        for skill in skills
    )

    skills_node = node(
        NodeRole.LIST,
        key="skills-list",
        kind="skills",
        items=items,
        display_style=settings.skills_display_style,
        style=list_style,
        markers=tuple(list_marker(list_style, index) for index in range(len(items))),
        name_style=ctx.text_style("name", colors.get_color("title", TITLE_COLOR)),
        keywords_style=ctx.text_style("keywords", colors.get_color("text", BODY_COLOR)),
        level_color=colors.get_color("decorations"),
        font_size=settings.font_size,
        bullet_margin=settings.bullet_margin,
    )
    return render_section_node(ctx, [skills_node])


def render_projects(ctx: SectionContext) -> Optional[LayoutNode]:
    entries = []
    for index, item in enumerate(ctx.resume.projects):
        entries.append(
            render_entry(
                ctx,
                item.id,
                index,
                title=item.name,
                title_field="name",
                subtitle=", ".join(item.keywords),
                subtitle_field="technologies",
                date_range=format_date_range(item.start_date, item.end_date),
                url=item.url,
                url_field="url",
                children=[
                    ctx.rich_text(item.description, key="description"),
                    render_list(
                        ctx,
                        f"{item.id}-highlights",
                        item.highlights,
                        ctx.section.item_list_style,
                        "features",
                    ),
                ],
            )
        )
    return render_section_node(ctx, entries)


def render_certificates(ctx: SectionContext) -> Optional[LayoutNode]:
    entries = [
        render_entry(
            ctx,
            item.id,
            index,
            title=item.name,
            title_field="name",
            subtitle=item.issuer,
            subtitle_field="issuer",
            date_range=format_date(item.date) if item.date else "",
            url=item.url,
            url_field="url",
            layout_style=1,
            children=[ctx.rich_text(item.summary)],
        )
        for index, item in enumerate(ctx.resume.certificates)
    ]
    return render_section_node(ctx, entries)


def _name_value_list(ctx: SectionContext, key: str, rows, value_field: str) -> Optional[LayoutNode]:
    """List of (id, name, value) rows rendered as "name: value"."""
    rows = [row for row in rows if row[1] or row[2]]
    if not rows:
        return None

    list_style = ctx.section.list_style
    return node(
        NodeRole.LIST,
        key=key,
        kind="pairs",
        items=tuple({"id": row[0], "name": row[1], "value": row[2]} for row in rows),
        style=list_style,
        markers=tuple(list_marker(list_style, index) for index in range(len(rows))),
        name_style=ctx.text_style("name", ctx.colors.get_color("title", TITLE_COLOR)),
        value_style=ctx.text_style(value_field, ctx.colors.get_color("subtext", SUBTEXT_COLOR)),
        font_size=ctx.settings.font_size,
        bullet_margin=ctx.settings.bullet_margin,
        marker_color=ctx.colors.get_color("decorations", TITLE_COLOR),
    )


def render_languages(ctx: SectionContext) -> Optional[LayoutNode]:
    rows = [(item.id, item.language, item.fluency) for item in ctx.resume.languages]
    return render_section_node(ctx, [_name_value_list(ctx, "languages-list", rows, "fluency")])


def render_interests(ctx: SectionContext) -> Optional[LayoutNode]:
    rows = [(item.id, item.name, ", ".join(item.keywords)) for item in ctx.resume.interests]
    return render_section_node(ctx, [_name_value_list(ctx, "interests-list", rows, "keywords")])


def render_publications(ctx: SectionContext) -> Optional[LayoutNode]:
    entries = [
        render_entry(
            ctx,
            item.id,
            index,
            title=item.name,
            title_field="name",
            subtitle=item.publisher,
            subtitle_field="publisher",
            date_range=format_date(item.release_date) if item.release_date else "",
            url=item.url,
            url_field="url",
            layout_style=1,
            children=[ctx.rich_text(item.summary)],
        )
        for index, item in enumerate(ctx.resume.publications)
    ]
    return render_section_node(ctx, entries)


def render_awards(ctx: SectionContext) -> Optional[LayoutNode]:
    entries = [
        render_entry(
            ctx,
            item.id,
            index,
            title=item.title,
            title_field="title",
            subtitle=item.awarder,
            subtitle_field="awarder",
            date_range=format_date(item.date) if item.date else "",
            layout_style=1,
            children=[ctx.rich_text(item.summary)],
        )
        for index, item in enumerate(ctx.resume.awards)
    ]
    return render_section_node(ctx, entries)


def render_references(ctx: SectionContext) -> Optional[LayoutNode]:
    entries = [
        render_entry(
            ctx,
            item.id,
            index,
            title=item.name,
            title_field="name",
            subtitle=item.position,
            subtitle_field="position",
            layout_style=1,
            children=[ctx.rich_text(item.reference, key="reference")],
        )
        for index, item in enumerate(ctx.resume.references)
    ]
    return render_section_node(ctx, entries)


def render_custom(ctx: SectionContext) -> Optional[LayoutNode]:
    """One block per non-empty group, each introduced by the group name."""
    groups = []
    for group in ctx.resume.custom:
        if not group.items:
            continue
        entries = [
            render_entry(
                ctx,
                item.id,
                index,
                title=item.name,
                title_field="name",
                subtitle=item.description,
                subtitle_field="description",
                date_range=format_date(item.date) if item.date else "",
                url=item.url,
                url_field="url",
                children=[ctx.rich_text(item.summary)],
            )
            for index, item in enumerate(group.items)
        ]
        heading = render_heading(ctx, title=group.name, level=2) if group.name else None
        groups.append(node(NodeRole.LIST, key=group.id, kind="group", children=[heading, *entries]))

    return render_section_node(ctx, groups)


SECTION_RENDERERS: Dict[str, SectionRenderer] = {
    "summary": render_summary,
    "work": render_work,
    "education": render_education,
    "skills": render_skills,
    "projects": render_projects,
    "certificates": render_certificates,
    "languages": render_languages,
    "interests": render_interests,
    "publications": render_publications,
    "awards": render_awards,
    "references": render_references,
    "custom": render_custom,
}


def render_section(
    section_id: str,
    resume: ResumeRecord,
    settings: LayoutSettings,
    colors: ColorResolver,
    fonts: FontConfig,
    card: Optional[CardStyle] = None,
) -> Optional[LayoutNode]:
    """
    Render one section.

    Args:
        section_id: One of the SECTION_RENDERERS keys
        resume: Resume content
        settings: Effective settings
        colors: Color resolver for the column hosting the section
        fonts: Font faces for the document family
        card: Card colors, used when section_display_style is "card"

    Returns:
        SECTION node, or None for unknown ids and sections without data
    """
    renderer = SECTION_RENDERERS.get(section_id)
    if renderer is None:
        return None
    return renderer(SectionContext(section_id, resume, settings, colors, fonts, card))
