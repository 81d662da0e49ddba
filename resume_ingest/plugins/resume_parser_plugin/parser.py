"""
Resume text structuring.

Turns plain resume text into a :class:`ResumeDraft` with a line-driven state
machine. Contact details are pulled from the whole text first; the remaining
lines are then classified one at a time according to the current section.

Experience, project and education entries are assembled in immutable record
buffers. Each section has an ordered table of ``LineRule`` entries; the first
rule whose predicate matches decides how a line updates the open buffer, and
any finished records it returns are appended to the draft.

Parsing never fails: a line nothing recognizes is folded into the nearest
free-text field.
"""

import uuid
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple

from resume_ingest.config.settings import settings
from resume_ingest.utils.logging import get_structured_logger

from .models import (
    EducationBuffer,
    ExperienceBuffer,
    PersonalInfo,
    ProjectBuffer,
    RecordBuffer,
    ResumeDraft,
)
from .patterns import (
    CONTACT_LABEL_RE,
    COURSEWORK_RE,
    DATE_RANGE_RE,
    DEGREE_RE,
    EMAIL_RE,
    GITHUB_RE,
    GPA_RE,
    LINKEDIN_RE,
    LOCATION_RE,
    PAGE_NUMBER_RE,
    PHONE_RE,
    SCHOOL_KEYWORDS,
    TECH_LABEL_RE,
    TECH_PREFIX_RE,
    YEAR_RE,
    Section,
    clean_bullet,
    detect_section,
    has_job_title,
    is_bullet,
    is_date_range,
    is_url,
    strip_date_range,
)

logger = get_structured_logger(__name__)

NAME_MAX_LENGTH = 40
LOCATION_LINE_MAX_LENGTH = 50
TITLE_MAX_LENGTH = 80
COMPANY_MAX_LENGTH = 60
PROJECT_TITLE_MAX_LENGTH = 50

IdFactory = Callable[[str], str]

_ID_NAMESPACE = uuid.uuid5(uuid.NAMESPACE_URL, "resume-ingest")


class DeterministicIdFactory:
    """Entry ids derived from the source text, the entry kind and its ordinal.

    Parsing the same text twice yields the same ids.
    """

    def __init__(self, seed: str = "") -> None:
        self._namespace = uuid.uuid5(_ID_NAMESPACE, seed)
        self._counts: Dict[str, int] = {}

    def __call__(self, kind: str) -> str:
        ordinal = self._counts.get(kind, 0) + 1
        self._counts[kind] = ordinal
        return str(uuid.uuid5(self._namespace, f"{kind}:{ordinal}"))


class Step(NamedTuple):
    """Result of feeding one line to a record buffer."""

    buffer: RecordBuffer
    finished: Tuple[RecordBuffer, ...] = ()


class LineRule(NamedTuple):
    name: str
    matches: Callable[[RecordBuffer, str], bool]
    apply: Callable[[RecordBuffer, str, Optional[str]], Step]


def apply_rules(
    rules: Sequence[LineRule],
    fallback: Callable[[RecordBuffer, str, Optional[str]], Step],
    buffer: RecordBuffer,
    line: str,
    previous: Optional[str],
) -> Step:
    """Apply the first matching rule, or ``fallback`` when none matches."""
    for rule in rules:
        if rule.matches(buffer, line):
            return rule.apply(buffer, line, previous)
    return fallback(buffer, line, previous)


def _append(buffer: RecordBuffer, line: str) -> RecordBuffer:
    return buffer.model_copy(update={"description": buffer.description + (line,)})


# Experience

def _is_plain_context(line: Optional[str]) -> bool:
    """A previous line that may name the company or role of the next record.

    The state loop passes no previous line right after a section header.
    """
    return line is not None and not is_bullet(line) and not is_date_range(line)


def _close_experience(
    buffer: ExperienceBuffer, previous: Optional[str], reclaim: bool
) -> Tuple[ExperienceBuffer, Tuple[RecordBuffer, ...]]:
    """Finish a buffer that has a description and open an empty one.

    With ``reclaim``, a trailing unbulleted description line equal to
    ``previous`` is taken back off the finished record.
    """
    description = buffer.description
    if reclaim and description and description[-1] == previous:
        description = description[:-1]
    return ExperienceBuffer(), (buffer.model_copy(update={"description": description}),)


def _experience_date(buffer: ExperienceBuffer, line: str, previous: Optional[str]) -> Step:
    duration = DATE_RANGE_RE.search(line).group(0)
    remainder = strip_date_range(line)
    filled: Dict[str, str] = {}
    if len(remainder) > 2:
        filled["role" if has_job_title(remainder) else "company"] = remainder

    closing = bool(buffer.description)
    base = ExperienceBuffer() if closing else buffer
    company = filled.get("company") or base.company
    role = filled.get("role") or base.role
    reuse_previous = (
        (not company or not role)
        and _is_plain_context(previous)
        and previous not in (company, role)
    )

    finished: Tuple[RecordBuffer, ...] = ()
    if closing:
        buffer, finished = _close_experience(buffer, previous, reclaim=reuse_previous)

    buffer = buffer.model_copy(update={"duration": duration, **filled})
    if reuse_previous:
        field = "company" if not buffer.company else "role"
        buffer = buffer.model_copy(update={field: previous})
    return Step(buffer, finished)


def _experience_title(buffer: ExperienceBuffer, line: str, previous: Optional[str]) -> Step:
    finished: Tuple[RecordBuffer, ...] = ()
    carried = None
    if buffer.description:
        reclaim = _is_plain_context(previous)
        if reclaim and buffer.description[-1] == previous:
            carried = previous
        buffer, finished = _close_experience(buffer, previous, reclaim=reclaim)
    update = {"role": line}
    if carried and not buffer.company:
        update["company"] = carried
    return Step(buffer.model_copy(update=update), finished)


def _experience_bullet(buffer: ExperienceBuffer, line: str, previous: Optional[str]) -> Step:
    cleaned = clean_bullet(line)
    return Step(_append(buffer, cleaned) if cleaned else buffer)


def _experience_other(buffer: ExperienceBuffer, line: str, previous: Optional[str]) -> Step:
    if buffer.is_empty():
        if len(line) < COMPANY_MAX_LENGTH:
            return Step(buffer.model_copy(update={"company": line}))
    return Step(_append(buffer, line))


EXPERIENCE_RULES = (
    LineRule("date_range", lambda b, line: is_date_range(line), _experience_date),
    LineRule(
        "job_title",
        lambda b, line: not is_bullet(line) and len(line) < TITLE_MAX_LENGTH and has_job_title(line),
        _experience_title,
    ),
    LineRule("bullet", lambda b, line: is_bullet(line), _experience_bullet),
)


# Projects

def _project_link(buffer: ProjectBuffer, line: str, previous: Optional[str]) -> Step:
    return Step(buffer.model_copy(update={"link": line}))


def _project_bullet(buffer: ProjectBuffer, line: str, previous: Optional[str]) -> Step:
    cleaned = clean_bullet(line)
    return Step(_append(buffer, cleaned) if cleaned else buffer)


def _wants_technologies(buffer: ProjectBuffer, line: str) -> bool:
    if buffer.technologies:
        return False
    return TECH_LABEL_RE.match(line) is not None or "stack:" in line.lower()


def _project_technologies(buffer: ProjectBuffer, line: str, previous: Optional[str]) -> Step:
    return Step(buffer.model_copy(update={"technologies": TECH_PREFIX_RE.sub("", line).strip()}))


def _is_project_title(buffer: ProjectBuffer, line: str) -> bool:
    return len(line) < PROJECT_TITLE_MAX_LENGTH and not line.endswith(".")


def _project_title(buffer: ProjectBuffer, line: str, previous: Optional[str]) -> Step:
    finished: Tuple[RecordBuffer, ...] = ()
    if buffer.name and (buffer.description or buffer.technologies):
        finished = (buffer,)
        buffer = ProjectBuffer()
    if buffer.name:
        # A second short line before any detail reads as a subtitle
        return Step(_append(buffer, line), finished)
    if "|" in line:
        name, _, rest = line.partition("|")
        technologies = ", ".join(part.strip() for part in rest.split("|") if part.strip())
        update = {"name": name.strip()}
        if technologies:
            update["technologies"] = technologies
        return Step(buffer.model_copy(update=update), finished)
    return Step(buffer.model_copy(update={"name": line}), finished)


def _project_other(buffer: ProjectBuffer, line: str, previous: Optional[str]) -> Step:
    if buffer.name:
        return Step(_append(buffer, line))
    return Step(buffer)


PROJECT_RULES = (
    LineRule("link", lambda b, line: is_url(line), _project_link),
    LineRule("bullet", lambda b, line: is_bullet(line), _project_bullet),
    LineRule("technologies", _wants_technologies, _project_technologies),
    LineRule("title", _is_project_title, _project_title),
)


# Education

def _education_school(buffer: EducationBuffer, line: str, previous: Optional[str]) -> Step:
    if buffer.school:
        return Step(EducationBuffer(school=line), (buffer,))
    return Step(buffer.model_copy(update={"school": line}))


def _education_year(buffer: EducationBuffer, line: str, previous: Optional[str]) -> Step:
    match = DATE_RANGE_RE.search(line) or YEAR_RE.search(line)
    return Step(buffer.model_copy(update={"year": match.group(0)}))


def _education_gpa(buffer: EducationBuffer, line: str, previous: Optional[str]) -> Step:
    return Step(buffer.model_copy(update={"gpa": GPA_RE.search(line).group(1)}))


def _education_coursework(buffer: EducationBuffer, line: str, previous: Optional[str]) -> Step:
    return Step(buffer.model_copy(update={"coursework": COURSEWORK_RE.search(line).group(1).strip()}))


def _education_degree(buffer: EducationBuffer, line: str, previous: Optional[str]) -> Step:
    return Step(buffer.model_copy(update={"degree": line}))


def _education_other(buffer: EducationBuffer, line: str, previous: Optional[str]) -> Step:
    if buffer.school and not buffer.degree:
        return _education_degree(buffer, line, previous)
    return Step(buffer)


EDUCATION_RULES = (
    LineRule(
        "school",
        lambda b, line: any(keyword in line.lower() for keyword in SCHOOL_KEYWORDS),
        _education_school,
    ),
    LineRule(
        "year",
        lambda b, line: is_date_range(line) or YEAR_RE.search(line) is not None,
        _education_year,
    ),
    LineRule("gpa", lambda b, line: GPA_RE.search(line) is not None, _education_gpa),
    LineRule("coursework", lambda b, line: COURSEWORK_RE.search(line) is not None, _education_coursework),
    LineRule("degree", lambda b, line: DEGREE_RE.search(line) is not None, _education_degree),
)


SECTION_RULES = {
    Section.EXPERIENCE: (EXPERIENCE_RULES, _experience_other, ExperienceBuffer),
    Section.PROJECTS: (PROJECT_RULES, _project_other, ProjectBuffer),
    Section.EDUCATION: (EDUCATION_RULES, _education_other, EducationBuffer),
}


# Contact pre-pass

def extract_contact_info(
    text: str,
    lines: Sequence[str],
    name_scan_lines: int = 10,
    location_scan_lines: int = 15,
    header_max_length: int = 50,
) -> PersonalInfo:
    """Pull email, phone, profile links, name and location from the text.

    Args:
        text: The full resume text
        lines: Its trimmed, non-empty lines
        name_scan_lines: How many leading lines may hold the name
        location_scan_lines: How many leading lines may hold the location
        header_max_length: Longest line treated as a section header

    Returns:
        PersonalInfo: Contact fields found (summary left empty)
    """
    info = PersonalInfo()

    email = EMAIL_RE.search(text)
    if email:
        info.email = email.group(0)
    phone = PHONE_RE.search(text)
    if phone:
        info.phone = phone.group(0)
    linkedin = LINKEDIN_RE.search(text)
    if linkedin:
        info.linkedin = f"linkedin.com/in/{linkedin.group(1)}"
    github = GITHUB_RE.search(text)
    if github:
        info.github = f"github.com/{github.group(1)}"

    for line in lines[:name_scan_lines]:
        if detect_section(line, header_max_length):
            break
        if "@" in line or PHONE_RE.search(line):
            continue
        lowered = line.lower()
        if "resume" in lowered or "cv" in lowered:
            continue
        if len(line) < NAME_MAX_LENGTH:
            info.full_name = line
            break

    for line in lines[:location_scan_lines]:
        if detect_section(line, header_max_length):
            break
        match = LOCATION_RE.search(line)
        if match and len(line) < LOCATION_LINE_MAX_LENGTH and "University" not in line and "College" not in line:
            info.location = match.group(0)
            break

    return info


def filter_noise(lines: Sequence[str], info: PersonalInfo) -> List[str]:
    """Drop page counters, contact lines and labelled contact fields."""
    kept = []
    for line in lines:
        if PAGE_NUMBER_RE.search(line):
            continue
        if any(value and value in line for value in (info.email, info.phone, info.linkedin)):
            continue
        if CONTACT_LABEL_RE.match(line):
            continue
        kept.append(line)
    return kept


def _tidy_skills(skills: str) -> str:
    items = [item.strip() for item in skills.split(",")]
    return " ".join(", ".join(item for item in items if item).split())


def _commit(draft: ResumeDraft, buffer: Optional[RecordBuffer], next_id: IdFactory) -> None:
    """Append a finished record to the draft unless it carries no signal."""
    if buffer is None or not buffer.has_signal():
        return
    getattr(draft, buffer.target).append(buffer.finish(next_id(buffer.target)))


def parse_resume_text(
    text: str,
    id_factory: Optional[IdFactory] = None,
    header_max_length: Optional[int] = None,
) -> ResumeDraft:
    """Parse resume text into a structured draft.

    Args:
        text: Plain resume text, one visual line per line
        id_factory: Callable returning a fresh id for an entry kind
            ("experience", "projects", "education"). Defaults to ids derived
            from the text so repeated parses agree.
        header_max_length: Longest line treated as a section header

    Returns:
        ResumeDraft: The structured resume. Never raises on odd input.
    """
    text = text or ""
    header_max_length = header_max_length or settings.header_max_length
    next_id = id_factory or DeterministicIdFactory(text)

    draft = ResumeDraft()
    raw_lines = [line.strip() for line in text.split("\n") if line.strip()]
    draft.personal_info = extract_contact_info(
        text,
        raw_lines,
        name_scan_lines=settings.name_scan_lines,
        location_scan_lines=settings.location_scan_lines,
        header_max_length=header_max_length,
    )
    lines = filter_noise(raw_lines, draft.personal_info)

    section = Section.SUMMARY
    buffer: Optional[RecordBuffer] = None
    previous: Optional[str] = None
    summary_parts: List[str] = []
    skill_parts: List[str] = []

    for line in lines:
        header = detect_section(line, header_max_length)
        if header is not None:
            _commit(draft, buffer, next_id)
            section = header
            buffer = SECTION_RULES[section][2]() if section in SECTION_RULES else None
            logger.debug("Section switched", section=section.value)
        elif section is Section.SUMMARY:
            if line != draft.personal_info.full_name and len(line) > 2:
                summary_parts.append(line)
        elif section is Section.SKILLS:
            cleaned = clean_bullet(line)
            if len(cleaned) > 1:
                skill_parts.append(cleaned)
        else:
            rules, fallback, _ = SECTION_RULES[section]
            buffer, finished = apply_rules(rules, fallback, buffer, line, previous)
            for done in finished:
                _commit(draft, done, next_id)
        previous = None if header is not None else line

    _commit(draft, buffer, next_id)

    draft.personal_info.summary = " ".join(summary_parts)
    draft.skills = _tidy_skills(", ".join(skill_parts))

    logger.debug(
        "Parsed resume text",
        lines=len(lines),
        experience=len(draft.experience),
        projects=len(draft.projects),
        education=len(draft.education),
    )
    return draft
