"""
resume_ingest: structured resume extraction.

Rebuilds reading order from positioned PDF text and parses resume text
into a structured draft for the resume editor.
"""

from resume_ingest.plugins.resume_parser_plugin import (
    LayoutOptions,
    ResumeDraft,
    TextFragment,
    parse_resume_file,
    parse_resume_text,
    reconstruct_document_text,
    reconstruct_page_text,
)

__version__ = "1.0.0"

__all__ = [
    "LayoutOptions",
    "ResumeDraft",
    "TextFragment",
    "parse_resume_file",
    "parse_resume_text",
    "reconstruct_document_text",
    "reconstruct_page_text",
]
