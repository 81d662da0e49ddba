"""
Custom exceptions for resume_ingest.

This module defines a hierarchical exception structure that provides:
- Clear error categorization for different failure modes
- Detailed error context with the 'details' field
- Cause tracking for debugging nested failures

The layout reconstructor and the structuring parser raise none of these in
normal operation. Extraction failures come from the document adapters
around them, and plugin failures from the plugin layer.
"""

from typing import Optional, Dict, Any


class ResumeIngestException(Exception):
    """Base exception for all resume_ingest errors.

    Attributes:
        message: Human-readable error message
        details: Additional context about the error
        cause: Original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message} (caused by: {self.cause})"
        return self.message


# Geometry exceptions
class GeometryError(ResumeIngestException):
    """Raised when a text fragment carries unusable coordinate data.

    Only strict fragment normalization raises this; the default path
    coerces bad numbers to zero instead.
    """

    def __init__(self, field: str, value: Any, reason: str):
        super().__init__(
            f"Invalid fragment geometry for '{field}': {reason}",
            details={"field": field, "value": value, "reason": reason}
        )


# Extraction exceptions
class ExtractionError(ResumeIngestException):
    """Base exception for document text extraction failures."""
    pass


class PDFExtractionError(ExtractionError):
    """Raised when a PDF cannot be opened or its text layer read."""

    def __init__(self, reason: str, cause: Optional[Exception] = None):
        super().__init__(
            f"Failed to extract text from PDF: {reason}",
            details={"format": "pdf", "reason": reason},
            cause=cause
        )


class DocumentExtractionError(ExtractionError):
    """Raised when a Word document cannot be read."""

    def __init__(self, reason: str, cause: Optional[Exception] = None):
        super().__init__(
            f"Could not extract text from Word document: {reason}",
            details={"format": "docx", "reason": reason},
            cause=cause
        )


class UnsupportedDocumentError(ExtractionError):
    """Raised when a file type has no extractor."""

    def __init__(self, path: str, suffix: str):
        super().__init__(
            f"Unsupported document type '{suffix or '<none>'}' for {path}",
            details={"path": path, "suffix": suffix}
        )


# Plugin exceptions
class PluginException(ResumeIngestException):
    """Base exception for plugin-related errors."""
    pass


class PluginExecutionError(PluginException):
    """Raised when plugin execution fails."""

    def __init__(self, plugin_name: str, action: str, reason: str, cause: Optional[Exception] = None):
        super().__init__(
            f"Plugin '{plugin_name}' failed to execute action '{action}': {reason}",
            details={"plugin_name": plugin_name, "action": action, "reason": reason},
            cause=cause
        )


class PluginValidationError(PluginException):
    """Raised when plugin request validation fails."""

    def __init__(self, plugin_name: str, validation_errors: Dict[str, Any]):
        super().__init__(
            f"Validation failed for plugin '{plugin_name}'",
            details={"plugin_name": plugin_name, "validation_errors": validation_errors}
        )


# Configuration exceptions
class ConfigurationError(ResumeIngestException):
    """Raised when configuration is invalid or missing."""

    def __init__(self, config_key: str, reason: str):
        super().__init__(
            f"Configuration error for '{config_key}': {reason}",
            details={"config_key": config_key, "reason": reason}
        )
