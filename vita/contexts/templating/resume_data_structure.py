"""
Resume Record Structure

Render-time snapshot of resume content. Records are built from plain dicts that
follow the JSON Resume key convention (startDate, studyType, ...) or its
snake_case equivalent, and are never mutated after construction.

Example:
    record = ResumeRecord.from_dict({"basics": {"name": "Ada", "summary": "..."}})
    record = load_resume(Path("data/resumes/ada.yaml"))
"""

import re
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, ClassVar, Dict, Optional, Tuple

from omegaconf import OmegaConf

CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def to_snake_case(key: str) -> str:
    """startDate → start_date; keys already in snake_case are unchanged."""
    return CAMEL_BOUNDARY.sub(r"_\1", key).lower()


def snake_case_keys(data: Any) -> Any:
    """Recursively convert mapping keys to snake_case (values untouched)."""
    if isinstance(data, dict):
        return {to_snake_case(str(key)): snake_case_keys(value) for key, value in data.items()}
    if isinstance(data, list):
        return [snake_case_keys(item) for item in data]
    return data


def _build(cls, data: Optional[Dict[str, Any]], default_id: str = ""):
    """
    Build a record dataclass from a dict.

    Keys are snake_cased and renamed through cls.ALIASES, unknown keys are
    dropped, lists become tuples, and None values fall back to field defaults.
    """
    data = {to_snake_case(str(key)): value for key, value in (data or {}).items()}
    for alias, name in getattr(cls, "ALIASES", {}).items():
        if alias in data and name not in data:
            data[name] = data.pop(alias)

    kwargs = {}
    for f in fields(cls):
        value = data.get(f.name)
        if value is None:
            continue
        if isinstance(value, list):
            value = tuple(str(item) for item in value if item is not None)
        elif f.type in ("str", str):
            value = str(value)
        kwargs[f.name] = value

    if "id" in {f.name for f in fields(cls)} and not kwargs.get("id"):
        kwargs["id"] = default_id
    return cls(**kwargs)


@dataclass(frozen=True)
class Location:
    address: str = ""
    city: str = ""
    region: str = ""
    postal_code: str = ""
    country: str = ""


@dataclass(frozen=True)
class Profile:
    network: str = ""
    username: str = ""
    url: str = ""


@dataclass(frozen=True)
class Basics:
    """
    Personal details shown in the header.

    Attributes:
        name: Full name
        label: Professional title
        image: Profile image path or URL
        summary: Rich-text summary (rendered by the summary section)
    """

    name: str = ""
    label: str = ""
    email: str = ""
    phone: str = ""
    url: str = ""
    summary: str = ""
    image: str = ""
    location: Location = field(default_factory=Location)
    profiles: Tuple[Profile, ...] = ()

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Basics":
        data = dict(data or {})
        location = _build(Location, data.pop("location", None))
        profiles = tuple(_build(Profile, profile) for profile in data.pop("profiles", None) or [])
        if not isinstance(data.get("image"), (str, type(None))):
            data.pop("image")
        return replace(_build(cls, data), location=location, profiles=profiles)


@dataclass(frozen=True)
class WorkItem:
    ALIASES: ClassVar[Dict[str, str]] = {"name": "company"}

    id: str = ""
    company: str = ""
    position: str = ""
    url: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    summary: str = ""
    highlights: Tuple[str, ...] = ()


@dataclass(frozen=True)
class EducationItem:
    id: str = ""
    institution: str = ""
    url: str = ""
    area: str = ""
    study_type: str = ""
    start_date: str = ""
    end_date: str = ""
    score: str = ""
    summary: str = ""
    courses: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SkillItem:
    id: str = ""
    name: str = ""
    level: str = ""
    keywords: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ProjectItem:
    id: str = ""
    name: str = ""
    description: str = ""
    url: str = ""
    start_date: str = ""
    end_date: str = ""
    highlights: Tuple[str, ...] = ()
    keywords: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CertificateItem:
    id: str = ""
    name: str = ""
    issuer: str = ""
    date: str = ""
    url: str = ""
    summary: str = ""


@dataclass(frozen=True)
class LanguageItem:
    ALIASES: ClassVar[Dict[str, str]] = {"name": "language"}

    id: str = ""
    language: str = ""
    fluency: str = ""


@dataclass(frozen=True)
class InterestItem:
    id: str = ""
    name: str = ""
    keywords: Tuple[str, ...] = ()


@dataclass(frozen=True)
class PublicationItem:
    id: str = ""
    name: str = ""
    publisher: str = ""
    release_date: str = ""
    url: str = ""
    summary: str = ""


@dataclass(frozen=True)
class AwardItem:
    id: str = ""
    title: str = ""
    awarder: str = ""
    date: str = ""
    summary: str = ""


@dataclass(frozen=True)
class ReferenceItem:
    id: str = ""
    name: str = ""
    position: str = ""
    reference: str = ""


@dataclass(frozen=True)
class CustomItem:
    id: str = ""
    name: str = ""
    description: str = ""
    date: str = ""
    url: str = ""
    summary: str = ""


@dataclass(frozen=True)
class CustomGroup:
    """Named user-defined section, e.g. "Volunteering"."""

    id: str = ""
    name: str = ""
    items: Tuple[CustomItem, ...] = ()

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]], default_id: str = "") -> "CustomGroup":
        data = data or {}
        group_id = str(data.get("id") or default_id)
        items = tuple(
            _build(CustomItem, item, f"{group_id}-{index}")
            for index, item in enumerate(data.get("items") or [])
        )
        return cls(id=group_id, name=str(data.get("name") or ""), items=items)


@dataclass(frozen=True)
class ResumeMeta:
    """
    Document-level choices.

    Attributes:
        title: Document title
        template_id: Selected catalog template
        theme_color: User accent color (overrides the template default)
        layout_settings: Per-document settings overrides (snake_case keys)
    """

    title: str = ""
    template_id: Optional[str] = None
    theme_color: Optional[str] = None
    layout_settings: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "ResumeMeta":
        data = {to_snake_case(str(key)): value for key, value in (data or {}).items()}
        return cls(
            title=str(data.get("title") or ""),
            template_id=data.get("template_id") or None,
            theme_color=data.get("theme_color") or None,
            layout_settings=snake_case_keys(data.get("layout_settings") or {}),
        )


# Item classes for list-valued sections (custom groups are handled separately)
ITEM_TYPES = {
    "work": WorkItem,
    "education": EducationItem,
    "skills": SkillItem,
    "projects": ProjectItem,
    "certificates": CertificateItem,
    "languages": LanguageItem,
    "interests": InterestItem,
    "publications": PublicationItem,
    "awards": AwardItem,
    "references": ReferenceItem,
}


@dataclass(frozen=True)
class ResumeRecord:
    """
    Complete resume content for one render.

    Item lists keep their input order; every item has a stable id used only
    as a render key.
    """

    basics: Basics = field(default_factory=Basics)
    work: Tuple[WorkItem, ...] = ()
    education: Tuple[EducationItem, ...] = ()
    skills: Tuple[SkillItem, ...] = ()
    projects: Tuple[ProjectItem, ...] = ()
    certificates: Tuple[CertificateItem, ...] = ()
    languages: Tuple[LanguageItem, ...] = ()
    interests: Tuple[InterestItem, ...] = ()
    publications: Tuple[PublicationItem, ...] = ()
    awards: Tuple[AwardItem, ...] = ()
    references: Tuple[ReferenceItem, ...] = ()
    custom: Tuple[CustomGroup, ...] = ()
    meta: ResumeMeta = field(default_factory=ResumeMeta)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResumeRecord":
        """
        Build a record from a JSON Resume style dict.

        Missing sections become empty tuples; items without an id get
        "<section>-<index>".
        """
        kwargs: Dict[str, Any] = {
            "basics": Basics.from_dict(data.get("basics")),
            "meta": ResumeMeta.from_dict(data.get("meta")),
            "custom": tuple(
                CustomGroup.from_dict(group, f"custom-{index}")
                for index, group in enumerate(data.get("custom") or [])
            ),
        }
        for section_id, item_type in ITEM_TYPES.items():
            kwargs[section_id] = tuple(
                _build(item_type, item, f"{section_id}-{index}")
                for index, item in enumerate(data.get(section_id) or [])
            )
        return cls(**kwargs)

    def has_content(self, section_id: str) -> bool:
        """Whether a section has anything to render."""
        if section_id == "summary":
            return bool(self.basics.summary.strip())
        if section_id == "custom":
            return any(group.items for group in self.custom)
        return bool(getattr(self, section_id, ()))


def load_resume(resume_path: Path) -> ResumeRecord:
    """
    Load a resume from a YAML or JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file does not contain a mapping
    """
    resume_path = Path(resume_path)
    if not resume_path.exists():
        raise FileNotFoundError(f"Resume file not found: {resume_path}")

    data = OmegaConf.to_container(OmegaConf.load(resume_path), resolve=True)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at top level of {resume_path}")
    return ResumeRecord.from_dict(data)
