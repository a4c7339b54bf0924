"""Unit tests for the section renderer registry."""

import pytest

from vita.contexts.templating.colors import ColorResolver
from vita.contexts.templating.config_resolver import compose_theme, resolve_settings
from vita.contexts.templating.defaults import SECTION_IDS
from vita.contexts.templating.fonts import FontConfig
from vita.contexts.templating.layout_nodes import NodeRole
from vita.contexts.templating.resume_data_structure import ResumeRecord
from vita.contexts.templating.rich_text import plain_text
from vita.contexts.templating.sections import SECTION_RENDERERS, CardStyle, render_section

ACCENT = "#2563eb"


@pytest.fixture
def colors():
    return ColorResolver.create(ACCENT, ["headings", "links"])


@pytest.fixture
def fonts():
    return FontConfig.for_family("Helvetica")


def settings_with(**overrides):
    return resolve_settings(compose_theme({}), None, overrides)


@pytest.mark.unit
def test_registry_covers_every_section():
    """Every section id has a renderer."""
    assert set(SECTION_RENDERERS) == set(SECTION_IDS)


@pytest.mark.unit
@pytest.mark.parametrize("section_id", SECTION_IDS)
def test_empty_resume_renders_nothing(section_id, colors, fonts):
    """Empty resume renders no sections."""
    assert render_section(section_id, ResumeRecord(), settings_with(), colors, fonts) is None


@pytest.mark.unit
@pytest.mark.parametrize("section_id", SECTION_IDS)
def test_full_resume_renders_every_section(section_id, full_resume, colors, fonts):
    """Full resume renders every section."""
    section = render_section(section_id, full_resume, settings_with(), colors, fonts)

    assert section.role is NodeRole.SECTION
    assert section.key == section_id


@pytest.mark.unit
def test_unknown_section_id(full_resume, colors, fonts):
    """Unknown section ids render nothing."""
    assert render_section("hobbies", full_resume, settings_with(), colors, fonts) is None


@pytest.mark.unit
def test_heading_title_override_and_capitalization(full_resume, colors, fonts):
    """Heading titles can be overridden and capitalized."""
    settings = settings_with(
        section_titles={"work": "career history"},
        section_heading_capitalization="titlecase",
    )
    heading = render_section("work", full_resume, settings, colors, fonts).find(NodeRole.HEADING)

    assert heading.props["text"] == "Career History"
    assert heading.props["color"] == ACCENT


@pytest.mark.unit
def test_default_heading_is_uppercase_label(full_resume, colors, fonts):
    """Default heading is the uppercase section label."""
    heading = render_section("work", full_resume, settings_with(), colors, fonts).find(NodeRole.HEADING)
    assert heading.props["text"] == "WORK EXPERIENCE"


@pytest.mark.unit
def test_hidden_heading(full_resume, colors, fonts):
    """Hidden headings are omitted."""
    settings = settings_with(sections={"skills": {"heading_visible": False}})
    section = render_section("skills", full_resume, settings, colors, fonts)

    assert section.find(NodeRole.HEADING) is None
    assert section.find(NodeRole.LIST) is not None


@pytest.mark.unit
def test_work_entry(full_resume, colors, fonts):
    """Work entries carry title, subtitle, dates and highlights."""
    entry = render_section("work", full_resume, settings_with(), colors, fonts).find(NodeRole.ENTRY)
    props = entry.props

    assert entry.key == "work-0"
    assert props["title"] == "Analytical Society"
    assert props["subtitle"] == "Engineer"
    assert props["date_range"] == "Jan 1842 – Present"
    assert props["title_style"].bold is True
    assert props["title_style"].color == "#1a1a1a"
    assert props["marker"] == ""

    highlights = entry.find(NodeRole.LIST, "work-0-highlights")
    assert highlights.props["markers"] == ("•", "•")
    assert plain_text(highlights.props["items"][0]) == "Designed loops"


@pytest.mark.unit
def test_field_toggles_from_settings(full_resume, colors, fonts):
    """Field styles from settings apply to entry fields."""
    settings = settings_with(sections={"work": {"fields": {"position": {"italic": True}}}})
    entry = render_section("work", full_resume, settings, colors, fonts).find(NodeRole.ENTRY)

    assert entry.props["subtitle_style"].italic is True
    assert entry.props["subtitle_style"].font == "Helvetica-BoldOblique"


@pytest.mark.unit
def test_numbered_list_style(full_resume, colors, fonts):
    """Numbered list style numbers the highlights."""
    settings = settings_with(sections={"work": {"list_style": "number"}})
    entry = render_section("work", full_resume, settings, colors, fonts).find(NodeRole.ENTRY)

    assert entry.props["marker"] == "1."


@pytest.mark.unit
def test_education_degree_score_and_courses(full_resume, colors, fonts):
    """Education shows degree, score and courses."""
    section = render_section("education", full_resume, settings_with(), colors, fonts)
    entry = section.find(NodeRole.ENTRY)

    assert entry.props["subtitle"] == "BSc in Mathematics"
    assert entry.props["date_range"] == "Jan 1830 – Jun 1835"
    assert section.find(NodeRole.TEXT).props["text"] == "GPA: 3.9"

    courses = section.find(NodeRole.LIST)
    assert courses.props["label"] == "Relevant Coursework:"
    assert courses.props["style"] == "inline"


@pytest.mark.unit
def test_summary_rich_text_link_icon(full_resume, colors, fonts):
    """Summary links can carry a link icon."""
    section = render_section("summary", full_resume, settings_with(), colors, fonts)
    content = section.find(NodeRole.RICH_TEXT).props["content"]

    assert [line.kind for line in content.lines] == ["paragraph", "bullet"]
    assert plain_text(content.lines[1].runs) == "Notes on the 🔗 Engine"


@pytest.mark.unit
def test_summary_rich_text_full_url(full_resume, colors, fonts):
    """Summary links can show their full URL."""
    settings = settings_with(link_show_full_url=True)
    content = render_section("summary", full_resume, settings, colors, fonts).find(NodeRole.RICH_TEXT).props["content"]

    assert plain_text(content.lines[1].runs) == "Notes on the https://example.com/notes"


@pytest.mark.unit
def test_skills_level_scores(full_resume, colors, fonts):
    """Skill levels become scores."""
    settings = settings_with(skills_display_style="level")
    skills = render_section("skills", full_resume, settings, colors, fonts).find(NodeRole.LIST)

    assert skills.props["items"][0]["score"] == 5
    assert skills.props["items"][0]["keywords"] == "Calculus, Algebra"


@pytest.mark.unit
def test_custom_groups_skip_empty(full_resume, colors, fonts):
    """Custom groups without items are skipped."""
    section = render_section("custom", full_resume, settings_with(), colors, fonts)
    groups = [child for child in section.children if child.role is NodeRole.LIST]

    assert [group.key for group in groups] == ["volunteering"]
    assert groups[0].find(NodeRole.HEADING).props["text"] == "VOLUNTEERING"


@pytest.mark.unit
def test_custom_with_only_empty_groups(colors, fonts):
    """Custom section with only empty groups renders nothing."""
    resume = ResumeRecord.from_dict({"custom": [{"name": "Empty", "items": []}]})
    assert render_section("custom", resume, settings_with(), colors, fonts) is None


@pytest.mark.unit
def test_card_display_style(full_resume, colors, fonts):
    """Card display style wraps entries in cards."""
    card = CardStyle(background_color="#1e293b", border_color="#334155")

    plain = render_section("awards", full_resume, settings_with(), colors, fonts, card)
    carded = render_section("awards", full_resume, settings_with(section_display_style="card"), colors, fonts, card)

    assert plain.props["card"] is False
    assert carded.props["card"] is True
    assert carded.props["background_color"] == "#1e293b"
    assert carded.props["border_color"] == "#334155"
