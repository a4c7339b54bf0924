"""
Rendering Backends

A backend turns a composed page tree into document bytes. LatexBackend walks
the tree and renders every node through the Jinja2 template registered for its
role (types/<role>/template.tex.jinja); PdfLatexBackend compiles that source.

Usage:
    backend = get_backend("pdf")
    pdf_bytes = backend.render(tree)
"""

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from vita.contexts.rendering.compiler import LATEX_COMPILER, compile_latex_source
from vita.contexts.rendering.exceptions import RenderBackendError
from vita.contexts.rendering.logger import _log_debug, _log_error
from vita.contexts.rendering.registries import TemplateRegistry
from vita.contexts.templating.formatting import display_url
from vita.contexts.templating.layout_nodes import LayoutNode, NodeRole
from vita.contexts.templating.rich_text import StyleFlag, iter_runs
from vita.contexts.templating.settings import LinkStyle
from vita.utils.latex import latex_color, latex_text, latex_url, set_max_consecutive_blank_lines

load_dotenv()
DEFAULT_BACKEND = os.getenv("VITA_RENDER_BACKEND", "latex")

ALIGN_COMMANDS = {
    "left": r"\raggedright",
    "center": r"\centering",
    "right": r"\raggedleft",
    "justify": "",
}

# Size scale relative to the body font size
HEADING_SCALE = {"S": 1.1, "M": 1.25, "L": 1.45, "XL": 1.7}
ENTRY_TITLE_SCALE = {"S": 1.0, "M": 1.1, "L": 1.25}
SKILL_LEVEL_DOTS = 5
BLACK = "000000"


def size_command(font_size: float, line_height: float = 1.2) -> str:
    return rf"\fontsize{{{font_size:g}pt}}{{{font_size * line_height:.2f}pt}}\selectfont"


def hex_color(color: Optional[str], default: str = BLACK) -> str:
    return latex_color(color) or default


def colored(tex: str, color: Optional[str]) -> str:
    code = latex_color(color)
    if not code or not tex:
        return tex
    return rf"\textcolor[HTML]{{{code}}}{{{tex}}}"


def styled(text: str, style: Any = None, tex: Optional[str] = None) -> str:
    """Apply a TextStyle (bold, italic, color) to escaped text."""
    body = tex if tex is not None else latex_text(text)
    if not body or style is None:
        return body
    if style.bold:
        body = rf"\textbf{{{body}}}"
    if style.italic:
        body = rf"\textit{{{body}}}"
    return colored(body, style.color)


def href(url: str, tex: str) -> str:
    return rf"\href{{{latex_url(url)}}}{{{tex}}}"


def runs_to_latex(runs, link_color: Optional[str] = None) -> str:
    """LaTeX for a sequence of styled runs."""
    parts = []
    for text, flags, link in iter_runs(tuple(runs)):
        piece = latex_text(text)
        if StyleFlag.BOLD in flags:
            piece = rf"\textbf{{{piece}}}"
        if StyleFlag.ITALIC in flags:
            piece = rf"\textit{{{piece}}}"
        if StyleFlag.UNDERLINE in flags:
            piece = rf"\underline{{{piece}}}"
        if StyleFlag.LINK in flags and link:
            piece = href(link, colored(piece, link_color))
        parts.append(piece)
    return "".join(parts)


class RenderBackend(ABC):
    """Turns a page tree into document bytes."""

    name = "base"

    @abstractmethod
    def render(self, tree: LayoutNode) -> bytes:
        """
        Render a PAGE tree.

        Raises:
            RenderBackendError: If the document cannot be produced
        """


class LatexBackend(RenderBackend):
    """Renders the page tree to UTF-8 LaTeX source."""

    name = "latex"

    def __init__(self, registry: TemplateRegistry = None):
        self.registry = registry or TemplateRegistry()

    def render(self, tree: LayoutNode) -> bytes:
        return self.render_source(tree).encode("utf-8")

    def render_source(self, tree: LayoutNode, title: str = "") -> str:
        if tree.role != NodeRole.PAGE:
            raise RenderBackendError(f"Expected a page node, got '{tree.role.value}'")
        source = self._render_page(tree, title)
        return set_max_consecutive_blank_lines(source, max_consecutive=1)

    def render_node(self, node: LayoutNode) -> str:
        handler = getattr(self, f"_render_{node.role.name.lower()}")
        return handler(node)

    def _template(self, type_name: str, **context: Any) -> str:
        return self.registry.get_template(type_name).render(**context)

    def _children(self, node: LayoutNode) -> str:
        return "\n".join(self.render_node(child) for child in node.children)

    # Roles

    def _render_page(self, node: LayoutNode, title: str = "") -> str:
        props = node.props
        fonts = props.get("fonts")
        header = node.find(NodeRole.HEADER)
        name = header.find(NodeRole.TEXT, "name") if header else None
        document_title = title or (name.props.get("text", "") if name else "") or node.key

        return self._template(
            "document",
            generic=fonts.generic if fonts else "sans",
            margin_horizontal=f"{props.get('margin_horizontal', 34):.2f}",
            margin_vertical=f"{props.get('margin_vertical', 34):.2f}",
            size_cmd=size_command(props.get("font_size", 9), props.get("line_height", 1.3)),
            text_color=latex_color(props.get("text_color")),
            title=latex_text(document_title),
            template_id=node.key,
            body=self._children(node),
        )

    def _render_background(self, node: LayoutNode) -> str:
        props = node.props
        x = props.get("x", 0) / 100
        return self._template(
            "background",
            key=node.key,
            color=hex_color(props.get("color"), "FFFFFF"),
            x=f"{x:.3f}",
            x_end=f"{x + props.get('width', 100) / 100:.3f}",
        )

    def _render_header(self, node: LayoutNode) -> str:
        props = node.props
        return self._template(
            "header",
            align_cmd=ALIGN_COMMANDS.get(props.get("align"), ""),
            background=latex_color(props.get("background_color")),
            rule_color=latex_color(props.get("rule_color")) if props.get("rule") else None,
            bottom_margin=props.get("bottom_margin", 0),
            body=self._children(node),
        )

    def _render_column_set(self, node: LayoutNode) -> str:
        count = len(node.children)
        gap_share = node.props.get("gap", 0) * (count - 1) / count if count else 0
        columns = [self._render_column(child, gap_share).strip() for child in node.children]
        return self._template("column_set", key=node.key, columns=columns)

    def _render_column(self, node: LayoutNode, gap_share: float = 0) -> str:
        props = node.props
        return self._template(
            "column",
            key=node.key,
            fraction=f"{props.get('width', 100) / 100:.4f}",
            gap=f"{gap_share:.2f}",
            background_color=latex_color(props.get("background_color")),
            text_color=latex_color(props.get("text_color")),
            padding_left=props.get("padding_left") or 0,
            padding_right=props.get("padding_right") or 0,
            body=self._children(node),
        )

    def _render_section(self, node: LayoutNode) -> str:
        props = node.props
        background = hex_color(props.get("background_color"), "FFFFFF")
        return self._template(
            "section",
            key=node.key,
            card=props.get("card", False),
            background_color=background,
            border_color=hex_color(props.get("border_color"), background),
            margin_bottom=props.get("margin_bottom", 0),
            body=self._children(node),
        )

    def _render_heading(self, node: LayoutNode) -> str:
        props = node.props
        font_size = props.get("font_size", 9)
        scale = HEADING_SCALE.get(props.get("size"), HEADING_SCALE["M"])
        if props.get("level", 1) > 1:
            scale = 1.0

        text = latex_text(props.get("text", ""))
        if props.get("bold", True):
            text = rf"\textbf{{{text}}}"

        return self._template(
            "heading",
            text=text,
            decoration=props.get("decoration", "plain"),
            align_cmd=ALIGN_COMMANDS.get(props.get("align"), ""),
            size_cmd=size_command(font_size * scale),
            color=hex_color(props.get("color")),
            decoration_color=hex_color(props.get("decoration_color")),
        )

    def _entry_title(self, props: Dict[str, Any]) -> str:
        title = styled(props.get("title", ""), props.get("title_style"))
        scale = ENTRY_TITLE_SCALE.get(props.get("title_size"), 1.0)
        if scale != 1.0 and title:
            title = rf"{{{size_command(props.get('font_size', 9) * scale)}{title}}}"

        url = props.get("url")
        if not url:
            return title

        link_style = props.get("link_style")
        link_color = props["url_style"].color if props.get("url_style") else None
        if link_style == LinkStyle.UNDERLINE.value:
            return href(url, rf"\underline{{{title}}}")
        if link_style == LinkStyle.INLINE.value:
            return title + " | " + href(url, styled(display_url(url), props.get("url_style")))
        if link_style == LinkStyle.ICON.value:
            return title + "~" + href(url, colored(r"$\nearrow$", link_color))
        return title

    def _render_entry(self, node: LayoutNode) -> str:
        props = node.props
        url = props.get("url")
        url_line = ""
        if url and props.get("link_style") == LinkStyle.NEWLINE.value:
            url_line = href(url, styled(display_url(url), props.get("url_style")))

        return self._template(
            "entry",
            layout_style=props.get("layout_style", 1),
            marker=latex_text(props.get("marker", "")),
            title=self._entry_title(props),
            subtitle=styled(props.get("subtitle") or "", props.get("subtitle_style")),
            date=styled(props.get("date_range") or "", props.get("date_style")),
            location=latex_text(props.get("location") or ""),
            url_line=url_line,
            indent_body=props.get("indent_body", False),
            body=self._children(node),
        )

    def _render_rich_text(self, node: LayoutNode) -> str:
        props = node.props
        content = props.get("content")
        lines = []
        for line in content.lines if content else ():
            lines.append(
                {
                    "kind": line.kind,
                    "align_cmd": ALIGN_COMMANDS.get(line.align, ""),
                    "marker": latex_text(line.marker),
                    "height": f"{line.height:g}",
                    "body": runs_to_latex(line.runs, props.get("link_color")),
                }
            )
        return self._template(
            "rich_text",
            size_cmd=size_command(props.get("font_size", 9), props.get("line_height", 1.3)),
            color=hex_color(props.get("color")),
            lines=lines,
        )

    def _render_text(self, node: LayoutNode) -> str:
        props = node.props
        kind = props.get("kind", "text")

        if kind == "image":
            src = Path(props.get("src", ""))
            if not src.is_file():
                _log_debug(f"Skipping profile image {src}: not a local file")
                return ""
            return self._template("text", kind=kind, src=src.as_posix(), size=props.get("size", 80))

        if kind == "score":
            return self._template(
                "text",
                kind=kind,
                size_cmd="",
                commands="",
                text=styled(props.get("text", ""), props.get("text_style")),
            )

        commands = [rf"\color[HTML]{{{hex_color(props.get('color'))}}}"]
        if props.get("bold"):
            commands.append(r"\bfseries")
        if props.get("italic"):
            commands.append(r"\itshape")
        text = props.get("text", "")
        if props.get("uppercase"):
            text = text.upper()

        return self._template(
            "text",
            kind=kind,
            size_cmd=size_command(props.get("font_size", 9), props.get("line_height", 1.2)),
            commands="".join(commands),
            text=latex_text(text),
        )

    def _render_list(self, node: LayoutNode) -> str:
        props = node.props
        kind = props.get("kind", "items")

        if kind == "group":
            return self._children(node)

        items: List[Dict[str, str]] = []
        inline = props.get("style") == "inline"
        separator = ", "
        label = ""

        if kind == "contact":
            inline = props.get("style") != "stacked"
            separator = f" {latex_text(props.get('separator', '|'))} "
            link_color = props.get("link_color")
            for item in props.get("items", ()):
                body = latex_text(item.value)
                if item.url:
                    body = href(item.url, colored(body, link_color))
                items.append({"marker": "", "body": body})
        elif kind == "skills":
            items = [
                {"marker": latex_text(marker), "body": self._skill_body(item, props)}
                for marker, item in zip(props.get("markers", ()), props.get("items", ()))
            ]
        elif kind == "pairs":
            for marker, item in zip(props.get("markers", ()), props.get("items", ())):
                parts = [styled(item["name"], props.get("name_style"))]
                if item["value"]:
                    parts.append(styled(item["value"], props.get("value_style")))
                items.append({"marker": latex_text(marker), "body": ": ".join(part for part in parts if part)})
        else:
            label = styled(props["label"], props.get("text_style")) if props.get("label") else ""
            for marker, runs in zip(props.get("markers", ()), props.get("items", ())):
                body = styled("", props.get("text_style"), tex=runs_to_latex(runs))
                items.append({"marker": latex_text(marker), "body": body})

        return self._template(
            "list",
            key=node.key,
            inline=inline,
            label=label,
            separator=separator,
            items=items,
            item_sep=props.get("bullet_margin", 0),
            color=latex_color(props.get("color")),
        )

    def _skill_body(self, item: Dict[str, Any], props: Dict[str, Any]) -> str:
        parts = []
        if item.get("name"):
            parts.append(styled(item["name"], props.get("name_style")))
        if item.get("keywords"):
            parts.append(styled(item["keywords"], props.get("keywords_style")))
        body = ": ".join(parts)

        score = item.get("score")
        if score:
            dots = r"$\bullet$" * score + r"$\circ$" * (SKILL_LEVEL_DOTS - score)
            body += r"\hfill " + colored(dots, props.get("level_color"))
        return body


class PdfLatexBackend(RenderBackend):
    """Compiles LatexBackend output to PDF bytes."""

    name = "pdf"

    def __init__(self, compiler: str = LATEX_COMPILER, num_passes: int = 2, latex: LatexBackend = None):
        self.compiler = compiler
        self.num_passes = num_passes
        self.latex = latex or LatexBackend()

    def render(self, tree: LayoutNode) -> bytes:
        source = self.latex.render_source(tree)
        result = compile_latex_source(
            source,
            document_name=tree.key or "resume",
            num_passes=self.num_passes,
            compiler=self.compiler,
        )
        if not result.success:
            _log_error(f"Could not compile '{tree.key}' with {self.compiler}")
            raise RenderBackendError(
                f"LaTeX compilation failed ({self.compiler})",
                errors=result.errors,
                log_excerpt=result.log_excerpt,
            )
        return result.pdf_bytes


BACKENDS = {
    LatexBackend.name: LatexBackend,
    PdfLatexBackend.name: PdfLatexBackend,
}


def get_backend(name: Optional[str] = None) -> RenderBackend:
    """
    Backend by name ("latex" or "pdf"); defaults to VITA_RENDER_BACKEND.

    Raises:
        ValueError: If the name is unknown
    """
    name = name or DEFAULT_BACKEND
    if name not in BACKENDS:
        raise ValueError(f"Unknown render backend '{name}'. Valid backends: {sorted(BACKENDS)}")
    return BACKENDS[name]()
