"""
Column/Layout Composer

Turns (template config, resume, effective settings) into the final page tree.
Each LayoutType has one handler in LAYOUT_HANDLERS; every handler returns a
PAGE node with the same outer shape:

    page
    ├── background*        (page / sidebar fills)
    ├── header             (unless hosted inside a column)
    └── column-set
        └── column+        (width in percent, sections in render order)

Column assignment is decided once by resolve_columns and is independent of the
layout handler, so every layout renders the same set of sections.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from vita.contexts.templating.colors import ColorResolver
from vita.contexts.templating.defaults import DEFAULT_LEFT_SECTIONS, DEFAULT_RIGHT_SECTIONS
from vita.contexts.templating.fonts import FontConfig
from vita.contexts.templating.formatting import mm_to_pt
from vita.contexts.templating.header import render_header
from vita.contexts.templating.layout_nodes import LayoutNode, NodeRole, node
from vita.contexts.templating.logger import _log_debug
from vita.contexts.templating.resume_data_structure import ResumeRecord
from vita.contexts.templating.sections import CardStyle, render_section
from vita.contexts.templating.settings import LayoutSettings, LayoutType, section_order_list
from vita.contexts.templating.template_registry import TemplateConfig

# Column receiving order ids that no column list mentions
ORPHAN_COLUMN: Dict[LayoutType, str] = {
    LayoutType.SINGLE_COLUMN: "right",
    LayoutType.SINGLE_COLUMN_CENTERED: "right",
    LayoutType.TWO_COLUMN_SIDEBAR_LEFT: "right",
    LayoutType.TWO_COLUMN_SIDEBAR_RIGHT: "right",
    LayoutType.TWO_COLUMN_EQUAL: "right",
    LayoutType.CREATIVE_SIDEBAR: "right",
    LayoutType.THREE_COLUMN: "middle",
}

# Column width bounds in percent
MIN_COLUMN_WIDTH = 10
MAX_SIDEBAR_WIDTH = 90
RIGHT_COLUMN_FLOOR = 10

COLUMN_GAP_PT = 12


@dataclass(frozen=True)
class ColumnAssignment:
    """Section ids per logical column, in render order."""

    left: Tuple[str, ...] = ()
    middle: Tuple[str, ...] = ()
    right: Tuple[str, ...] = ()

    def all_ids(self) -> List[str]:
        return [*self.left, *self.middle, *self.right]

    def merged(self) -> Tuple[str, ...]:
        """Middle + right, for layouts that have a single main region."""
        return (*self.middle, *self.right)


def effective_order(config: TemplateConfig, settings: LayoutSettings) -> List[str]:
    """Global section order; template default lists when the order is empty."""
    order = section_order_list(settings)
    if order:
        return order

    right = config.right_column_sections
    left = config.left_column_sections
    middle = config.middle_column_sections or ()
    return list(
        dict.fromkeys(
            [
                *(right if right is not None else DEFAULT_RIGHT_SECTIONS),
                *middle,
                *(left if left is not None else DEFAULT_LEFT_SECTIONS),
            ]
        )
    )


def resolve_columns(config: TemplateConfig, settings: LayoutSettings) -> ColumnAssignment:
    """
    Assign every id of the effective order to exactly one column.

    Explicit settings lists keep their own order. Otherwise the template's
    default lists are filtered and ordered by the global section order. Ids in
    the order but in no list are appended to the ORPHAN_COLUMN for the layout.
    Ids outside the order are dropped, and an id listed twice keeps its first
    position (left, then middle, then right).
    """
    order = effective_order(config, settings)
    in_order = set(order)

    if settings.has_explicit_columns:
        lists = {
            "left": list(settings.left_column_sections or ()),
            "middle": list(settings.middle_column_sections or ()),
            "right": list(settings.right_column_sections or ()),
        }
    else:
        left = config.left_column_sections
        right = config.right_column_sections
        defaults = {
            "left": set(left if left is not None else DEFAULT_LEFT_SECTIONS),
            "middle": set(config.middle_column_sections or ()),
            "right": set(right if right is not None else DEFAULT_RIGHT_SECTIONS),
        }
        lists = {
            column: [section_id for section_id in order if section_id in members]
            for column, members in defaults.items()
        }

    seen = set()
    columns: Dict[str, List[str]] = {"left": [], "middle": [], "right": []}
    for column in ("left", "middle", "right"):
        for section_id in lists[column]:
            if section_id in seen or section_id not in in_order:
                continue
            seen.add(section_id)
            columns[column].append(section_id)

    orphans = [section_id for section_id in order if section_id not in seen]
    if orphans:
        target = ORPHAN_COLUMN[config.layout_type]
        _log_debug(f"Orphan sections {orphans} routed to {target} column ({config.layout_type.value})")
        columns[target].extend(orphans)

    return ColumnAssignment(tuple(columns["left"]), tuple(columns["middle"]), tuple(columns["right"]))


def two_column_widths(left_width: float, layout_type: LayoutType) -> Tuple[float, float]:
    """
    (sidebar, main) widths in percent.

    two-column-equal always splits 50/50; otherwise the sidebar width is the
    configured left width clamped to [10, 90].
    """
    if layout_type == LayoutType.TWO_COLUMN_EQUAL:
        return 50.0, 50.0
    sidebar = float(min(max(left_width, MIN_COLUMN_WIDTH), MAX_SIDEBAR_WIDTH))
    return sidebar, 100.0 - sidebar


def three_column_widths(left_width: float, middle_width: float) -> Tuple[float, float, float]:
    """
    (left, middle, right) widths in percent.

    The right column takes any positive remainder. When left + middle leaves
    nothing, the right column gets the 10% floor and the middle column shrinks
    to make room. Widths always sum to 100 and are never negative.

    Example:
        >>> three_column_widths(60, 60)
        (60.0, 30.0, 10.0)
    """
    left = float(max(left_width, 0))
    middle = float(max(middle_width, 0))
    remaining = 100.0 - left - middle
    if remaining > 0:
        return left, middle, remaining

    left = min(left, 100.0 - RIGHT_COLUMN_FLOOR)
    return left, 100.0 - left - RIGHT_COLUMN_FLOOR, float(RIGHT_COLUMN_FLOOR)


def resolve_header_align(settings: LayoutSettings, layout_type: LayoutType) -> str:
    """left/right header positions win; top/center and centered layouts center."""
    position = settings.header_position
    if position in ("left", "right"):
        return position
    if position in ("top", "center"):
        return "center"
    if layout_type == LayoutType.SINGLE_COLUMN_CENTERED:
        return "center"
    return settings.personal_details_align


@dataclass(frozen=True)
class PageContext:
    """Inputs shared by every layout handler."""

    config: TemplateConfig
    resume: ResumeRecord
    settings: LayoutSettings
    colors: ColorResolver
    fonts: FontConfig
    columns: ColumnAssignment

    @property
    def card(self) -> CardStyle:
        return CardStyle(
            background_color=self.config.card_background_color or "#ffffff",
            border_color=self.config.card_border_color,
        )

    def sections(self, section_ids: Sequence[str], colors: Optional[ColorResolver] = None) -> List[LayoutNode]:
        """Rendered sections, empty ones skipped."""
        colors = colors or self.colors
        rendered = (
            render_section(section_id, self.resume, self.settings, colors, self.fonts, self.card)
            for section_id in section_ids
        )
        return [section for section in rendered if section is not None]

    def header(
        self,
        align: Optional[str] = None,
        text_color: Optional[str] = None,
        full_width: bool = False,
    ) -> LayoutNode:
        config = self.config
        colors = self.colors.with_text_color(text_color)
        return render_header(
            self.resume.basics,
            self.settings,
            colors,
            self.fonts,
            align or resolve_header_align(self.settings, config.layout_type),
            text_color=text_color,
            background_color=config.header_background_color if full_width else None,
            full_width=full_width,
        )

    def column(
        self,
        name: str,
        width: float,
        section_ids: Sequence[str],
        text_color: Optional[str] = None,
        background_color: Optional[str] = None,
        padding_left: Optional[float] = None,
        padding_right: Optional[float] = None,
        leading: Sequence[Optional[LayoutNode]] = (),
    ) -> LayoutNode:
        colors = self.colors.with_text_color(text_color)
        return node(
            NodeRole.COLUMN,
            key=name,
            children=[*leading, *self.sections(section_ids, colors)],
            width=width,
            text_color=text_color,
            background_color=background_color,
            padding_left=padding_left,
            padding_right=padding_right,
        )


def column_set(columns: Sequence[LayoutNode], key: str = "columns") -> LayoutNode:
    return node(NodeRole.COLUMN_SET, key=key, children=columns, gap=COLUMN_GAP_PT)


def background(key: str, color: Optional[str], **props) -> Optional[LayoutNode]:
    if not color:
        return None
    return node(NodeRole.BACKGROUND, key=key, color=color, **props)


def page_node(ctx: PageContext, children: Sequence[Optional[LayoutNode]]) -> LayoutNode:
    settings = ctx.settings
    config = ctx.config
    return node(
        NodeRole.PAGE,
        key=config.id,
        children=[background("page", config.page_background_color, x=0, width=100), *children],
        layout_type=config.layout_type,
        template_id=config.id,
        margin_horizontal=mm_to_pt(settings.margin_horizontal),
        margin_vertical=mm_to_pt(settings.margin_vertical),
        background_color=config.page_background_color,
        font_size=settings.font_size,
        line_height=settings.line_height,
        font_family=settings.font_family,
        fonts=ctx.fonts,
        accent_color=ctx.colors.accent_color,
        text_color=ctx.colors.get_color("text", "#444444"),
    )


def _full_width_header(ctx: PageContext) -> LayoutNode:
    config = ctx.config
    return ctx.header(text_color=config.header_text_color, full_width=config.full_width_header)


# Layout handlers


def compose_single_column(ctx: PageContext) -> LayoutNode:
    """One stack in section order; two columns when column_count >= 2."""
    settings = ctx.settings
    header = _full_width_header(ctx)

    if settings.column_count >= 2:
        sidebar, main = two_column_widths(settings.left_column_width, ctx.config.layout_type)
        columns = column_set(
            [
                ctx.column("left", sidebar, ctx.columns.left),
                ctx.column("right", main, ctx.columns.merged()),
            ]
        )
    else:
        columns = column_set([ctx.column("main", 100.0, effective_order(ctx.config, settings))])

    return page_node(ctx, [header, columns])


def compose_two_column(ctx: PageContext) -> LayoutNode:
    """Sidebar + main; the suffix picks the physical side of the configured left list."""
    config = ctx.config
    settings = ctx.settings

    if settings.column_count == 1:
        return compose_single_column(ctx)

    sidebar_width, main_width = two_column_widths(settings.left_column_width, config.layout_type)
    sidebar_color = config.sidebar_background_color if config.sidebar_background else None

    sidebar = ctx.column(
        "left",
        sidebar_width,
        ctx.columns.left,
        text_color=config.sidebar_text_color,
        background_color=sidebar_color,
        padding_left=config.sidebar_padding_left,
        padding_right=config.sidebar_padding_right,
    )
    main = ctx.column(
        "right",
        main_width,
        ctx.columns.merged(),
        text_color=config.right_column_text_color,
        background_color=config.right_column_background_color,
        padding_left=config.right_column_padding_left,
        padding_right=config.right_column_padding_right,
    )

    ordered = [main, sidebar] if config.layout_type == LayoutType.TWO_COLUMN_SIDEBAR_RIGHT else [sidebar, main]
    return page_node(ctx, [_full_width_header(ctx), column_set(ordered)])


def compose_three_column(ctx: PageContext) -> LayoutNode:
    """Three columns; header_position "sidebar" moves the header into the left column."""
    config = ctx.config
    settings = ctx.settings
    left_width, middle_width, right_width = three_column_widths(
        settings.left_column_width, settings.middle_column_width
    )

    header_in_sidebar = settings.header_position == "sidebar"
    sidebar_header = None
    top_header = None
    if header_in_sidebar:
        sidebar_header = ctx.header(align="left", text_color=config.sidebar_text_color)
    else:
        top_header = _full_width_header(ctx)

    sidebar_color = config.sidebar_background_color if config.sidebar_background else None
    columns = column_set(
        [
            ctx.column(
                "left",
                left_width,
                ctx.columns.left,
                text_color=config.sidebar_text_color,
                background_color=sidebar_color,
                padding_left=config.sidebar_padding_left,
                padding_right=config.sidebar_padding_right,
                leading=[sidebar_header],
            ),
            ctx.column("middle", middle_width, ctx.columns.middle),
            ctx.column(
                "right",
                right_width,
                ctx.columns.right,
                text_color=config.right_column_text_color,
                background_color=config.right_column_background_color,
                padding_left=config.right_column_padding_left,
                padding_right=config.right_column_padding_right,
            ),
        ]
    )
    return page_node(ctx, [top_header, columns])


def compose_creative_sidebar(ctx: PageContext) -> LayoutNode:
    """
    Full-height sidebar hosting the header and the left list.

    The main region splits into two 50% sub-columns (middle, right) when the
    assignment has middle sections.
    """
    config = ctx.config
    settings = ctx.settings
    sidebar_width, main_width = two_column_widths(settings.left_column_width, config.layout_type)

    sidebar_color = None
    if config.sidebar_background:
        sidebar_color = config.sidebar_background_color or ctx.colors.accent_color

    header = ctx.header(text_color=config.header_text_color or config.sidebar_text_color)
    sidebar = ctx.column(
        "left",
        sidebar_width,
        ctx.columns.left,
        text_color=config.sidebar_text_color,
        padding_left=config.sidebar_padding_left,
        padding_right=config.sidebar_padding_right,
        leading=[header],
    )

    main_text = config.right_column_text_color
    if ctx.columns.middle:
        main_children = [
            column_set(
                [
                    ctx.column("middle", 50.0, ctx.columns.middle, text_color=main_text),
                    ctx.column("right", 50.0, ctx.columns.right, text_color=main_text),
                ],
                key="main-columns",
            )
        ]
        main = node(
            NodeRole.COLUMN,
            key="main",
            children=main_children,
            width=main_width,
            text_color=main_text,
            padding_left=config.right_column_padding_left,
            padding_right=config.right_column_padding_right,
        )
    else:
        main = ctx.column(
            "right",
            main_width,
            ctx.columns.right,
            text_color=main_text,
            padding_left=config.right_column_padding_left,
            padding_right=config.right_column_padding_right,
        )

    backgrounds = [
        background("sidebar", sidebar_color, x=0, width=sidebar_width, full_height=True),
        background(
            "main",
            config.right_column_background_color,
            x=sidebar_width,
            width=main_width,
            full_height=True,
        ),
    ]
    return page_node(ctx, [*backgrounds, column_set([sidebar, main])])


LayoutHandler = Callable[[PageContext], LayoutNode]

LAYOUT_HANDLERS: Dict[LayoutType, LayoutHandler] = {
    LayoutType.SINGLE_COLUMN: compose_single_column,
    LayoutType.SINGLE_COLUMN_CENTERED: compose_single_column,
    LayoutType.TWO_COLUMN_SIDEBAR_LEFT: compose_two_column,
    LayoutType.TWO_COLUMN_SIDEBAR_RIGHT: compose_two_column,
    LayoutType.TWO_COLUMN_EQUAL: compose_two_column,
    LayoutType.THREE_COLUMN: compose_three_column,
    LayoutType.CREATIVE_SIDEBAR: compose_creative_sidebar,
}


def compose_page(
    config: TemplateConfig,
    resume: ResumeRecord,
    settings: LayoutSettings,
    colors: ColorResolver,
    fonts: Optional[FontConfig] = None,
) -> LayoutNode:
    """
    Compose the page tree for a template.

    Args:
        config: Template preset (layout type, default columns, visual extras)
        resume: Resume content
        settings: Effective settings
        colors: Accent color resolver
        fonts: Font faces; derived from settings.font_family when omitted

    Returns:
        PAGE LayoutNode
    """
    ctx = PageContext(
        config=config,
        resume=resume,
        settings=settings,
        colors=colors,
        fonts=fonts or FontConfig.for_family(settings.font_family),
        columns=resolve_columns(config, settings),
    )
    return LAYOUT_HANDLERS[config.layout_type](ctx)
