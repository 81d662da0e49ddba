"""
Application settings and configuration.

Loads configuration from environment variables (prefix ``RESUME_INGEST_``)
with sensible defaults.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from resume_ingest.core.exceptions import ConfigurationError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RESUME_INGEST_",
        env_file=".env",
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="WARNING")

    # Layout reconstruction (page units)
    layout_y_tolerance: float = Field(
        default=5.0,
        description="Max distance between a fragment's y and a line's mean y"
    )
    layout_wide_gap: float = Field(
        default=10.0,
        description="Horizontal gap above which fragments are treated as separate columns"
    )
    layout_space_gap: float = Field(
        default=1.0,
        description="Horizontal gap above which a single space is inserted"
    )
    layout_wide_separator: str = Field(default="   ")
    page_separator: str = Field(default="\n\n")

    # pdfminer LAParams used by the PDF geometry source
    pdf_char_margin: float = Field(default=2.0)
    pdf_word_margin: float = Field(default=0.1)
    pdf_line_margin: float = Field(default=0.5)

    # Structuring parser
    header_max_length: int = Field(
        default=50,
        description="Lines longer than this are never treated as section headers"
    )
    name_scan_lines: int = Field(default=10)
    location_scan_lines: int = Field(default=15)

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        if value.upper() not in _LOG_LEVELS:
            raise ConfigurationError("log_level", f"Invalid log level: {value}")
        return value.upper()

    @field_validator(
        "layout_y_tolerance",
        "layout_wide_gap",
        "layout_space_gap",
        "pdf_char_margin",
        "pdf_word_margin",
        "pdf_line_margin",
    )
    @classmethod
    def _check_non_negative(cls, value: float, info) -> float:
        if value < 0:
            raise ConfigurationError(info.field_name, f"must be non-negative, got {value}")
        return value

    @field_validator("header_max_length", "name_scan_lines", "location_scan_lines")
    @classmethod
    def _check_positive(cls, value: int, info) -> int:
        if value <= 0:
            raise ConfigurationError(info.field_name, f"must be positive, got {value}")
        return value


# Global settings instance
settings = Settings()
