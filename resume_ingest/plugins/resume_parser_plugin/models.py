"""
Data models for resume extraction.

This module defines the positioned text fragments consumed by the layout
reconstructor, the resume draft produced by the structuring parser, and the
record buffers the parser fills while it walks a section.
"""

import math
from typing import Annotated, Any, ClassVar, List, Literal, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from resume_ingest.core.exceptions import GeometryError


def _coerce_number(value: Any) -> float:
    """Return ``value`` as a finite float, or 0.0 when it is not one."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


class TextFragment(BaseModel):
    """A positioned run of text from one PDF page.

    ``y`` is the baseline in page units with larger values higher on the page.
    Invalid coordinates are normalized to zero, and so are negative extents.
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Ligature-free text of the run")
    x: float = Field(0.0, description="Left edge")
    y: float = Field(0.0, description="Baseline, larger is higher")
    width: float = Field(0.0, description="Horizontal extent")
    height: float = Field(0.0, description="Vertical extent")

    @field_validator("x", "y", mode="before")
    @classmethod
    def _normalize_position(cls, value: Any) -> float:
        return _coerce_number(value)

    @field_validator("width", "height", mode="before")
    @classmethod
    def _normalize_extent(cls, value: Any) -> float:
        return max(_coerce_number(value), 0.0)

    @property
    def x_end(self) -> float:
        return self.x + self.width

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()

    @classmethod
    def from_raw(cls, item: Mapping[str, Any], strict: bool = False) -> "TextFragment":
        """Build a fragment from a loosely shaped mapping.

        Accepts ``text``/``str`` for the content and ``width``/``w``,
        ``height``/``h`` for the extents, so both our own dumps and raw
        text-item shapes load.

        Args:
            item: Mapping with text and geometry keys
            strict: Raise instead of normalizing bad coordinates

        Raises:
            GeometryError: In strict mode, when a coordinate is missing,
                non-numeric, non-finite, or a negative extent
        """
        text = item.get("text", item.get("str", ""))
        geometry = {
            "x": item.get("x"),
            "y": item.get("y"),
            "width": item.get("width", item.get("w")),
            "height": item.get("height", item.get("h")),
        }
        if strict:
            for field, value in geometry.items():
                try:
                    number = float(value)
                except (TypeError, ValueError):
                    raise GeometryError(field, value, "not a number")
                if math.isnan(number) or math.isinf(number):
                    raise GeometryError(field, value, "not a finite number")
                if field in ("width", "height") and number < 0:
                    raise GeometryError(field, value, "negative extent")
        return cls(text="" if text is None else str(text), **geometry)


class _CamelModel(BaseModel):
    """Base for records exchanged with the editor (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Skills: the editor stores either categories or a legacy flat string

DEFAULT_SKILL_CATEGORY = "Technical Skills"


class SkillCategory(_CamelModel):
    name: str = ""
    items: str = ""


class CategorizedSkills(_CamelModel):
    kind: Literal["categorized"] = "categorized"
    categories: List[SkillCategory] = Field(default_factory=list)

    def as_text(self) -> str:
        return ", ".join(c.items.strip() for c in self.categories if c.items.strip())

    def as_categories(self) -> List[SkillCategory]:
        return [c.model_copy() for c in self.categories]


class LegacySkills(_CamelModel):
    kind: Literal["legacy"] = "legacy"
    text: str = ""

    def as_text(self) -> str:
        return self.text

    def as_categories(self) -> List[SkillCategory]:
        if not self.text.strip():
            return []
        return [SkillCategory(name=DEFAULT_SKILL_CATEGORY, items=self.text)]


SkillsValue = Annotated[Union[CategorizedSkills, LegacySkills], Field(discriminator="kind")]


def normalize_skills(value: Any) -> SkillsValue:
    """Normalize stored skills data into the tagged skills variant.

    Args:
        value: A legacy comma-joined string, a list of ``{name, items}``
            mappings or ``SkillCategory`` objects, an existing variant, or None

    Returns:
        CategorizedSkills or LegacySkills
    """
    if isinstance(value, (CategorizedSkills, LegacySkills)):
        return value
    if value is None:
        return LegacySkills()
    if isinstance(value, str):
        return LegacySkills(text=value)
    if isinstance(value, (list, tuple)):
        categories = []
        for entry in value:
            if isinstance(entry, SkillCategory):
                categories.append(entry)
            elif isinstance(entry, Mapping):
                categories.append(SkillCategory(
                    name=str(entry.get("name") or ""),
                    items=str(entry.get("items") or ""),
                ))
            elif isinstance(entry, str):
                categories.append(SkillCategory(name=DEFAULT_SKILL_CATEGORY, items=entry))
        return CategorizedSkills(categories=categories)
    return LegacySkills(text=str(value))


# Resume record

class PersonalInfo(_CamelModel):
    """Contact details and summary."""

    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    open_to_relocate: bool = False
    linkedin: str = ""
    github: str = ""
    portfolio: str = ""
    summary: str = ""


class Experience(_CamelModel):
    id: str
    company: str = ""
    role: str = ""
    duration: str = ""
    description: str = ""


class Education(_CamelModel):
    id: str
    school: str = ""
    degree: str = ""
    year: str = ""
    gpa: Optional[str] = None
    coursework: Optional[str] = None


class Project(_CamelModel):
    id: str
    name: str = ""
    technologies: str = ""
    link: str = ""
    description: str = ""


class CustomSectionItem(_CamelModel):
    id: str
    title: str = ""
    subtitle: str = ""
    date: str = ""
    description: str = ""


class CustomSection(_CamelModel):
    id: str
    title: str = ""
    items: List[CustomSectionItem] = Field(default_factory=list)


class ResumeDesign(_CamelModel):
    template: Literal["modern", "professional", "minimal"] = "modern"
    font: Literal["serif", "sans"] = "serif"
    accent_color: str = "#1e40af"
    spacing: Literal["compact", "normal"] = "normal"


class CoverLetter(_CamelModel):
    recipient_name: str = ""
    recipient_title: str = ""
    company_name: str = ""
    company_address: str = ""
    date: str = ""
    content: str = ""


DEFAULT_SECTION_ORDER = ("summary", "skills", "experience", "projects", "education")


class _ResumeBase(_CamelModel):
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    experience: List[Experience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    custom_sections: List[CustomSection] = Field(default_factory=list)
    section_order: List[str] = Field(default_factory=lambda: list(DEFAULT_SECTION_ORDER))
    design: ResumeDesign = Field(default_factory=ResumeDesign)
    cover_letter: CoverLetter = Field(default_factory=CoverLetter)


class ResumeData(_ResumeBase):
    """Resume record in the editor's current shape (categorized skills)."""

    skills: List[SkillCategory] = Field(default_factory=list)


class ResumeDraft(_ResumeBase):
    """Resume record accumulated by the structuring parser.

    Skills are kept as one comma-joined string while parsing; use
    :meth:`to_resume_data` for the categorized editor shape.
    """

    skills: str = ""

    def to_resume_data(self) -> ResumeData:
        payload = self.model_dump(exclude={"skills"})
        return ResumeData(**payload, skills=normalize_skills(self.skills).as_categories())


# Parser-internal record buffers. Frozen: every parser step returns a new one.

class _RecordBuffer(BaseModel):
    model_config = ConfigDict(frozen=True)

    target: ClassVar[str]

    def has_signal(self) -> bool:
        return any(getattr(self, name) for name in type(self).model_fields)


class ExperienceBuffer(_RecordBuffer):
    target: ClassVar[str] = "experience"

    company: Optional[str] = None
    role: Optional[str] = None
    duration: Optional[str] = None
    description: Tuple[str, ...] = ()

    def is_empty(self) -> bool:
        """No company, role or description yet (a duration alone does not count)."""
        return not (self.company or self.role or self.description)

    def finish(self, entry_id: str) -> Experience:
        company = self.company or ""
        role = self.role or ""
        if not company and not role:
            company, role = "Company", "Role"
        return Experience(
            id=entry_id,
            company=company,
            role=role,
            duration=self.duration or "",
            description="\n".join(self.description),
        )


class ProjectBuffer(_RecordBuffer):
    target: ClassVar[str] = "projects"

    name: Optional[str] = None
    technologies: Optional[str] = None
    link: Optional[str] = None
    description: Tuple[str, ...] = ()

    def has_signal(self) -> bool:
        """Links or technologies seen before any title do not make a project."""
        return bool(self.name)

    def finish(self, entry_id: str) -> Project:
        return Project(
            id=entry_id,
            name=self.name or "",
            technologies=self.technologies or "",
            link=self.link or "",
            description="\n".join(self.description),
        )


class EducationBuffer(_RecordBuffer):
    target: ClassVar[str] = "education"

    school: Optional[str] = None
    degree: Optional[str] = None
    year: Optional[str] = None
    gpa: Optional[str] = None
    coursework: Optional[str] = None

    def finish(self, entry_id: str) -> Education:
        return Education(
            id=entry_id,
            school=self.school or "",
            degree=self.degree or "",
            year=self.year or "",
            gpa=self.gpa,
            coursework=self.coursework,
        )


RecordBuffer = Union[ExperienceBuffer, ProjectBuffer, EducationBuffer]
