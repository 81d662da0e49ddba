"""
Regular expressions and keyword tables used to classify resume lines.
"""

import re
from enum import Enum
from typing import Optional


class Section(str, Enum):
    """Resume sections the parser tracks."""

    SUMMARY = "summary"
    SKILLS = "skills"
    EXPERIENCE = "experience"
    PROJECTS = "projects"
    EDUCATION = "education"


# Whole-line headers; checked in this order
SECTION_HEADERS = (
    (Section.EXPERIENCE, re.compile(
        r"^(?:experience|work experience|professional experience|employment|work history|career history)\s*:?$"
    )),
    (Section.EDUCATION, re.compile(
        r"^(?:education|academic background|qualifications|education & credentials)\s*:?$"
    )),
    (Section.SKILLS, re.compile(
        r"^(?:skills|technical skills|technologies|core competencies|technical expertise|skills & expertise)\s*:?$"
    )),
    (Section.PROJECTS, re.compile(
        r"^(?:projects|relevant projects|technical projects|personal projects|key projects)\s*:?$"
    )),
    (Section.SUMMARY, re.compile(
        r"^(?:summary|professional summary|profile|about me|executive summary|objective)\s*:?$"
    )),
)

HEADER_MAX_LENGTH = 50

JOB_TITLES = (
    "engineer", "developer", "manager", "director", "consultant", "analyst",
    "architect", "admin", "administrator", "specialist", "designer", "lead",
    "head", "vp", "president", "officer", "counsel", "intern", "assistant",
    "representative", "coordinator", "scientist", "researcher",
)

_MONTH_DATE = r"\b(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?\s*'?\d{2,4}"
_NUMERIC_DATE = r"\d{1,2}[/.]\d{2,4}"
_DATE = rf"(?:{_MONTH_DATE}|{_NUMERIC_DATE})"

# Bare YYYY-YYYY also matches numeric pairs that are not dates (e.g. "2019-2021 cohort")
DATE_RANGE_RE = re.compile(
    rf"{_DATE}\s*(?:[-–]|to)+\s*(?:{_DATE}|present|current|now)"
    r"|\b(?:19|20)\d{2}\s*[-–]\s*(?:19|20)\d{2}\b",
    re.IGNORECASE,
)
YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")

EMAIL_RE = re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b")
PHONE_RE = re.compile(r"\b(?:\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}\b")
LINKEDIN_RE = re.compile(
    r"(?:https?://)?(?:www\.)?linkedin\.com/(?:in/|[a-z]{2}/)?([a-zA-Z0-9_-]+)/?",
    re.IGNORECASE,
)
GITHUB_RE = re.compile(r"(?:https?://)?(?:www\.)?github\.com/([a-zA-Z0-9_-]+)/?", re.IGNORECASE)
LOCATION_RE = re.compile(r"([A-Z][a-zA-Z\s]+),\s*([A-Z]{2})")

PAGE_NUMBER_RE = re.compile(r"page \d+ of \d+", re.IGNORECASE)
CONTACT_LABEL_RE = re.compile(r"^(?:email|phone|mobile|address|location):", re.IGNORECASE)

GPA_RE = re.compile(r"GPA\s*:?\s*(\d\.\d{1,2})", re.IGNORECASE)
COURSEWORK_RE = re.compile(r"(?:relevant )?coursework\s*:?\s*(.*)", re.IGNORECASE)
DEGREE_RE = re.compile(r"bachelor|master|phd|associate|bs|ba|ms|ma|degree", re.IGNORECASE)
SCHOOL_KEYWORDS = ("university", "college", "school")

TECH_PREFIX_RE = re.compile(r"^(?:technologies|tech stack|tech)\s*:?", re.IGNORECASE)
# A technologies line needs an explicit label; "TechMatch" is a title
TECH_LABEL_RE = re.compile(r"^(?:technologies|tech stack|tech)\s*:", re.IGNORECASE)

BULLET_CHARS = "•‣◦▪⁃∙∗◆*-"
_BULLET_RE = re.compile(rf"^\s*[{re.escape(BULLET_CHARS)}]")
_BULLET_PREFIX_RE = re.compile(rf"^[\s{re.escape(BULLET_CHARS)}]+")

# Characters trimmed from the text left around a date range
_REMAINDER_EDGE_RE = re.compile(r"^[-–|,\s]+|[-–|,\s]+$")


def detect_section(line: str, max_length: int = HEADER_MAX_LENGTH) -> Optional[Section]:
    """Return the section a short header line names, or None."""
    clean = line.lower().strip()
    if len(clean) > max_length:
        return None
    for section, pattern in SECTION_HEADERS:
        if pattern.match(clean):
            return section
    return None


def is_bullet(line: str) -> bool:
    return bool(_BULLET_RE.match(line))


def clean_bullet(line: str) -> str:
    return _BULLET_PREFIX_RE.sub("", line).strip()


def has_job_title(line: str) -> bool:
    lowered = line.lower()
    return any(title in lowered for title in JOB_TITLES)


def is_date_range(line: str) -> bool:
    return DATE_RANGE_RE.search(line) is not None


def strip_date_range(line: str) -> str:
    """Remove the first date range and trim separators left at the edges."""
    remainder = DATE_RANGE_RE.sub("", line, count=1).strip()
    return _REMAINDER_EDGE_RE.sub("", remainder)


def is_url(line: str) -> bool:
    return "http" in line or "github.com" in line.lower()
