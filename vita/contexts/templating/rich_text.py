"""
Rich-Text Parser

Parses the small inline markup allowed in free-text resume fields into a tree
of styled runs.

Grammar:
    **bold**, *italic*, <u>underline</u>, [label](url)
    "- " at the start of a line makes a bullet line
    align="left|center|right|justify" picks the line alignment
    <div ...> and </div> wrapper tags are stripped

Inline layers apply in fixed precedence: bold → italic → underline → link → text.
Each layer splits its input on its pattern. Matched groups recurse into the next
layer with the layer's flag added to the active set; unmatched text recurses into
the next layer with the active set unchanged. Markers without a closing partner
never match, so they stay in the output as literal text.

Example:
    >>> block = parse_rich_text("**bold** and *italic* and [t](http://x)")
    >>> plain_text(block.lines[0].runs)
    'bold and italic and t'
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Iterator, List, Optional, Pattern, Tuple, Union

from vita.contexts.templating.formatting import BULLET


class StyleFlag(str, Enum):
    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    LINK = "link"


LINK_ICON = "🔗 "
SPACER_RATIO = 0.5
DEFAULT_ALIGN = "justify"

# Bold content is plain text or whole *italic* spans; stray stars fall back to the shortest match
BOLD_PATTERN = re.compile(r"\*\*((?:[^*]|\*[^*]+\*)+?|.+?)\*\*")
# Single "*" not adjacent to another "*" on either side
ITALIC_PATTERN = re.compile(r"(?<!\*)\*(?!\*)(.+?)(?<!\*)\*(?!\*)")
UNDERLINE_PATTERN = re.compile(r"<u>(.+?)</u>")
LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)")

ALIGN_PATTERN = re.compile(r'align="(left|center|right|justify)"')
DIV_PATTERN = re.compile(r"<div[^>]*>|</div>")

LAYERS: Tuple[Tuple[StyleFlag, Pattern], ...] = (
    (StyleFlag.BOLD, BOLD_PATTERN),
    (StyleFlag.ITALIC, ITALIC_PATTERN),
    (StyleFlag.UNDERLINE, UNDERLINE_PATTERN),
    (StyleFlag.LINK, LINK_PATTERN),
)


@dataclass(frozen=True)
class TextRun:
    """Leaf run of plain text."""

    text: str


@dataclass(frozen=True)
class StyledSpan:
    """
    Composite run.

    Attributes:
        flag: The style this span adds
        flags: Every style active inside this span (ancestors' flags plus flag)
        children: Nested runs
        href: Link target, set only for link spans
    """

    flag: StyleFlag
    flags: FrozenSet[StyleFlag]
    children: Tuple["StyledRun", ...] = ()
    href: Optional[str] = None


StyledRun = Union[TextRun, StyledSpan]


@dataclass(frozen=True)
class RichLine:
    """
    One rendered line.

    kind is "paragraph", "bullet" or "spacer". Spacers carry a height in points
    and no runs.
    """

    kind: str
    runs: Tuple[StyledRun, ...] = ()
    align: str = DEFAULT_ALIGN
    marker: str = ""
    height: float = 0.0


@dataclass(frozen=True)
class RichText:
    lines: Tuple[RichLine, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.lines


def parse_inline(
    text: str,
    layer: int = 0,
    active: FrozenSet[StyleFlag] = frozenset(),
    show_full_url: bool = False,
    show_link_icon: bool = False,
) -> List[StyledRun]:
    """
    Parse inline markup starting at the given precedence layer.

    Args:
        text: Inline text (no newlines)
        layer: Index into LAYERS; len(LAYERS) means plain text
        active: Style flags already active from enclosing spans
        show_full_url: Link spans display the URL instead of the label
        show_link_icon: Link spans are prefixed with a link glyph

    Returns:
        List of runs; empty text yields an empty list
    """
    if not text:
        return []
    if layer >= len(LAYERS):
        return [TextRun(text)]

    flag, pattern = LAYERS[layer]
    options = {"show_full_url": show_full_url, "show_link_icon": show_link_icon}

    runs: List[StyledRun] = []
    position = 0
    for match in pattern.finditer(text):
        runs.extend(parse_inline(text[position : match.start()], layer + 1, active, **options))

        inner_flags = active | {flag}
        if flag is StyleFlag.LINK:
            label, url = match.group(1), match.group(2)
            display = url if show_full_url else label
            if show_link_icon:
                display = LINK_ICON + display
            runs.append(StyledSpan(flag, inner_flags, (TextRun(display),), href=url))
        else:
            children = parse_inline(match.group(1), layer + 1, inner_flags, **options)
            runs.append(StyledSpan(flag, inner_flags, tuple(children)))

        position = match.end()

    runs.extend(parse_inline(text[position:], layer + 1, active, **options))
    return runs


def parse_rich_text(
    text: Optional[str],
    font_size: float = 10,
    show_full_url: bool = False,
    show_link_icon: bool = False,
) -> RichText:
    """
    Parse a possibly multi-line string into lines of styled runs.

    Args:
        text: Source text
        font_size: Body font size, used for spacer height
        show_full_url: Links display their URL instead of their label
        show_link_icon: Links are prefixed with a link glyph

    Returns:
        RichText (empty for empty input)
    """
    if not text:
        return RichText()

    options = {"show_full_url": show_full_url, "show_link_icon": show_link_icon}
    lines: List[RichLine] = []

    for line in text.split("\n"):
        stripped = line.strip()

        if stripped.startswith("- "):
            runs = parse_inline(stripped[2:], **options)
            lines.append(RichLine("bullet", tuple(runs), align="left", marker=BULLET))
            continue

        if not stripped:
            lines.append(RichLine("spacer", height=font_size * SPACER_RATIO))
            continue

        align_match = ALIGN_PATTERN.search(line)
        align = align_match.group(1) if align_match else DEFAULT_ALIGN
        content = DIV_PATTERN.sub("", line)

        lines.append(RichLine("paragraph", tuple(parse_inline(content, **options)), align=align))

    return RichText(tuple(lines))


def iter_runs(
    runs: Tuple[StyledRun, ...], active: FrozenSet[StyleFlag] = frozenset()
) -> Iterator[Tuple[str, FrozenSet[StyleFlag], Optional[str]]]:
    """
    Flatten runs depth-first into (text, effective flags, href) triples.

    The href of the nearest enclosing link span is reported for its text.
    """
    yield from _iter_runs(runs, active, None)


def _iter_runs(runs, active, href):
    for run in runs:
        if isinstance(run, TextRun):
            yield run.text, active, href
        else:
            yield from _iter_runs(run.children, active | run.flags, run.href or href)


def plain_text(runs: Union[RichText, Tuple[StyledRun, ...], List[StyledRun]]) -> str:
    """Concatenated text of runs (or of every line of a RichText, newline separated)."""
    if isinstance(runs, RichText):
        return "\n".join(plain_text(line.runs) for line in runs.lines)
    return "".join(text for text, _, _ in iter_runs(tuple(runs)))
