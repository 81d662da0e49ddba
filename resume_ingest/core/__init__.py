"""Core components of resume_ingest."""

from resume_ingest.core.plugin_system.plugin_interface import Plugin, PluginMetadata, PluginRequest, PluginResponse

from resume_ingest.core.exceptions import (
    ResumeIngestException,
    GeometryError,
    ExtractionError,
    PDFExtractionError,
    DocumentExtractionError,
    UnsupportedDocumentError,
    PluginException,
    PluginExecutionError,
    PluginValidationError,
    ConfigurationError,
)

__all__ = [
    # Plugin system
    "Plugin",
    "PluginMetadata",
    "PluginRequest",
    "PluginResponse",
    # Exceptions
    "ResumeIngestException",
    "GeometryError",
    "ExtractionError",
    "PDFExtractionError",
    "DocumentExtractionError",
    "UnsupportedDocumentError",
    "PluginException",
    "PluginExecutionError",
    "PluginValidationError",
    "ConfigurationError",
]
