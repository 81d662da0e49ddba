"""
Plugin package initialization.
"""

from .resume_parser_plugin.plugin import ResumeImportPlugin

__all__ = ["ResumeImportPlugin"]
