"""
Resume parser plugin.

Two stages, usable together or apart:
1. Layout reconstruction turns positioned PDF text fragments into plain
   text in reading order
2. Structuring turns plain resume text (from a PDF, a Word document or
   anywhere else) into a ResumeDraft
"""

from .plugin import ResumeImportPlugin
from .layout import LayoutOptions, reconstruct_page_text, reconstruct_document_text
from .parser import parse_resume_text
from .extractor import extract_text, extract_text_from_docx, extract_text_from_pdf, parse_resume_file
from .models import (
    TextFragment,
    ResumeDraft,
    ResumeData,
    PersonalInfo,
    Experience,
    Education,
    Project,
    SkillCategory,
    CategorizedSkills,
    LegacySkills,
    normalize_skills,
)

__all__ = [
    "ResumeImportPlugin",
    "LayoutOptions",
    "reconstruct_page_text",
    "reconstruct_document_text",
    "parse_resume_text",
    "extract_text",
    "extract_text_from_docx",
    "extract_text_from_pdf",
    "parse_resume_file",
    "TextFragment",
    "ResumeDraft",
    "ResumeData",
    "PersonalInfo",
    "Experience",
    "Education",
    "Project",
    "SkillCategory",
    "CategorizedSkills",
    "LegacySkills",
    "normalize_skills",
]
