"""Unit tests for the inline rich-text parser."""

import pytest

from vita.contexts.templating.rich_text import (
    LINK_ICON,
    StyleFlag,
    StyledSpan,
    TextRun,
    iter_runs,
    parse_inline,
    parse_rich_text,
    plain_text,
)


def flattened(text, **options):
    return [(piece, set(flags), href) for piece, flags, href in iter_runs(tuple(parse_inline(text, **options)))]


class TestParseInline:
    """Tests for parse_inline."""

    @pytest.mark.unit
    def test_flattening_and_flag_isolation(self):
        """Each run carries only its own flags."""
        text = "**bold** and *italic* and [t](http://x)"

        assert plain_text(parse_inline(text)) == "bold and italic and t"
        assert flattened(text) == [
            ("bold", {StyleFlag.BOLD}, None),
            (" and ", set(), None),
            ("italic", {StyleFlag.ITALIC}, None),
            (" and ", set(), None),
            ("t", {StyleFlag.LINK}, "http://x"),
        ]

    @pytest.mark.unit
    @pytest.mark.parametrize("text", ["**oops", "*half", "<u>open", "[label](no closing"])
    def test_unterminated_markup_is_literal(self, text):
        """Unclosed markers stay as literal text."""
        runs = parse_inline(text)

        assert runs == [TextRun(text)]
        assert flattened(text) == [(text, set(), None)]

    @pytest.mark.unit
    def test_nested_italic_inside_bold(self):
        """Italic nested in bold gets both flags."""
        assert flattened("**bold *both***") == [
            ("bold ", {StyleFlag.BOLD}, None),
            ("both", {StyleFlag.BOLD, StyleFlag.ITALIC}, None),
        ]

    @pytest.mark.unit
    def test_bold_directly_followed_by_italic(self):
        """Bold closer followed by an italic span splits into two runs."""
        assert flattened("**b***i*") == [
            ("b", {StyleFlag.BOLD}, None),
            ("i", {StyleFlag.ITALIC}, None),
        ]

    @pytest.mark.unit
    def test_bold_wrapping_italic(self):
        """Triple stars on both sides give bold italic text."""
        assert flattened("***x***") == [("x", {StyleFlag.BOLD, StyleFlag.ITALIC}, None)]

    @pytest.mark.unit
    def test_bold_with_stray_star(self):
        """An unpaired star inside bold stays literal."""
        assert flattened("**2*3**") == [("2*3", {StyleFlag.BOLD}, None)]

    @pytest.mark.unit
    def test_link_inside_underline_keeps_both_flags(self):
        """A link inside underline keeps both flags and its href."""
        assert flattened("<u>[site](https://a.b)</u>") == [
            ("site", {StyleFlag.UNDERLINE, StyleFlag.LINK}, "https://a.b"),
        ]

    @pytest.mark.unit
    def test_span_flags_include_ancestors(self):
        """Span flags include the flags of enclosing spans."""
        (span,) = parse_inline("**a <u>b</u>**")
        underline = span.children[1]

        assert isinstance(underline, StyledSpan)
        assert underline.flag is StyleFlag.UNDERLINE
        assert underline.flags == frozenset({StyleFlag.BOLD, StyleFlag.UNDERLINE})

    @pytest.mark.unit
    def test_link_display_options(self):
        """Links can show their URL or a link icon."""
        assert plain_text(parse_inline("[t](http://x)", show_full_url=True)) == "http://x"
        assert plain_text(parse_inline("[t](http://x)", show_link_icon=True)) == LINK_ICON + "t"

    @pytest.mark.unit
    def test_empty_text(self):
        """Empty text gives no runs."""
        assert parse_inline("") == []


class TestParseRichText:
    """Tests for parse_rich_text line handling."""

    @pytest.mark.unit
    def test_blank_line_becomes_spacer(self):
        """Blank lines become half-height spacers."""
        block = parse_rich_text("first\n   \nsecond", font_size=10)

        assert [line.kind for line in block.lines] == ["paragraph", "spacer", "paragraph"]
        assert block.lines[1].height == 5.0
        assert block.lines[1].runs == ()

    @pytest.mark.unit
    def test_bullet_lines(self):
        """Dash lines become left-aligned bullets."""
        block = parse_rich_text("- **Led** team\n- Shipped")

        assert [line.kind for line in block.lines] == ["bullet", "bullet"]
        assert block.lines[0].marker == "•"
        assert block.lines[0].align == "left"
        assert plain_text(block.lines[0].runs) == "Led team"

    @pytest.mark.unit
    def test_align_attribute_and_div_stripped(self):
        """Align attributes set alignment and div tags are removed."""
        block = parse_rich_text('<div align="center">Centered **text**</div>')
        line = block.lines[0]

        assert line.align == "center"
        assert plain_text(line.runs) == "Centered text"

    @pytest.mark.unit
    def test_default_alignment_is_justify(self):
        """Paragraphs default to justified."""
        assert parse_rich_text("plain").lines[0].align == "justify"

    @pytest.mark.unit
    def test_empty_input(self):
        """Empty and None input give an empty block."""
        assert parse_rich_text("").is_empty
        assert parse_rich_text(None).is_empty

    @pytest.mark.unit
    def test_plain_text_of_block_joins_lines(self):
        """Block plain text joins lines with newlines."""
        assert plain_text(parse_rich_text("a\n- b")) == "a\nb"
