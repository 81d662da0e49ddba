"""Configuration for resume_ingest."""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
