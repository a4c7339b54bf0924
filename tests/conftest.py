"""Shared fixtures: resume records in JSON Resume key style."""

import pytest

from vita.contexts.templating.resume_data_structure import ResumeRecord


FULL_RESUME = {
    "basics": {
        "name": "Ada Lovelace",
        "label": "Analytical Engineer",
        "email": "ada@example.com",
        "phone": "+44 20 7946 0000",
        "url": "https://ada.example.com/",
        "summary": "Builds **engines** for *numbers*.\n- Notes on the [Engine](https://example.com/notes)",
        "location": {"city": "London", "country": "UK"},
        "profiles": [{"network": "GitHub", "username": "ada", "url": "https://github.com/ada"}],
    },
    "work": [
        {
            "name": "Analytical Society",
            "position": "Engineer",
            "startDate": "1842-01",
            "endDate": "",
            "summary": "Wrote the first program.",
            "highlights": ["Designed **loops**", "Published notes"],
        }
    ],
    "education": [
        {
            "institution": "Home Tutoring",
            "area": "Mathematics",
            "studyType": "BSc",
            "startDate": "1830-01",
            "endDate": "1835-06",
            "score": "3.9",
            "courses": ["Calculus", "Logic"],
        }
    ],
    "skills": [{"name": "Mathematics", "level": "Expert", "keywords": ["Calculus", "Algebra"]}],
    "projects": [
        {
            "name": "Note G",
            "description": "Bernoulli numbers.",
            "keywords": ["Engine", "Punch cards"],
            "url": "https://example.com/g",
        }
    ],
    "certificates": [{"name": "Royal Society", "issuer": "RS", "date": "1843-05"}],
    "languages": [{"language": "English", "fluency": "Native"}],
    "interests": [{"name": "Poetry", "keywords": ["Byron"]}],
    "publications": [{"name": "Sketch of the Engine", "publisher": "Taylor", "releaseDate": "1843-09"}],
    "awards": [{"title": "Honorary Member", "awarder": "Society", "date": "1844"}],
    "references": [{"name": "Charles Babbage", "reference": "Enchantress of numbers."}],
    "custom": [
        {"id": "volunteering", "name": "Volunteering", "items": [{"name": "Tutor", "description": "Maths"}]},
        {"id": "empty", "name": "Empty", "items": []},
    ],
}


@pytest.fixture
def full_resume_data():
    """Raw resume mapping behind full_resume."""
    return FULL_RESUME


@pytest.fixture
def full_resume():
    """Resume with content in all twelve sections."""
    return ResumeRecord.from_dict(FULL_RESUME)


@pytest.fixture
def summary_only_resume():
    """Resume with only a name and a summary."""
    return ResumeRecord.from_dict({"basics": {"name": "Ada Lovelace", "summary": "Mathematician."}})
