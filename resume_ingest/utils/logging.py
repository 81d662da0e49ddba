"""
Logging configuration for resume_ingest.

Provides a standard logging setup and a small adapter that keeps the
"structured" call style (e.g., logger.info("msg", key=value)) while emitting
a single formatted string to the standard Python logging backend.
"""

import logging
import sys
from typing import Dict, Any, Optional

from resume_ingest.core.exceptions import ConfigurationError


def configure_logging(level: str = "INFO") -> None:
    """Configure logging for resume_ingest.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Raises:
        ConfigurationError: If the level name is unknown
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ConfigurationError("log_level", f"Invalid log level: {level}")

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("resume_ingest").setLevel(numeric_level)

    # pdfminer is very chatty about font and layout internals
    if level.upper() != "DEBUG":
        for name in (
            "pdfminer",
            "pdfminer.psparser",
            "pdfminer.pdfinterp",
            "pdfminer.pdfpage",
            "pdfminer.pdfdocument",
            "pdfminer.converter",
            "pdfminer.cmapdb",
            "pdfminer.layout",
        ):
            logging.getLogger(name).setLevel(logging.ERROR)
    else:
        logging.getLogger("pdfminer").setLevel(logging.WARNING)

    logging.getLogger("resume_ingest").debug(f"Logging configured with level: {level}")


class StructuredLoggerAdapter:
    """Lightweight adapter to allow logger.info("msg", key=value) usage.

    Converts keyword arguments into a simple " key=value" suffix appended to the
    log message and forwards to the standard library logger.
    """

    def __init__(self, base_logger: logging.Logger) -> None:
        self._logger = base_logger

    @staticmethod
    def _merge_message(msg: str, kwargs: Dict[str, Any]) -> str:
        if not kwargs:
            return msg
        suffix_parts = []
        for k, v in kwargs.items():
            try:
                text = str(v)
            except Exception:
                text = repr(v)
            suffix_parts.append(f"{k}={text}")
        return f"{msg} | " + " ".join(suffix_parts)

    def debug(self, msg: str, *args: Any, exc_info: Optional[bool] = None, extra: Optional[Dict[str, Any]] = None, **kwargs: Any) -> None:
        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(self._merge_message(msg, kwargs), *args, exc_info=exc_info, extra=extra)

    def info(self, msg: str, *args: Any, exc_info: Optional[bool] = None, extra: Optional[Dict[str, Any]] = None, **kwargs: Any) -> None:
        self._logger.info(self._merge_message(msg, kwargs), *args, exc_info=exc_info, extra=extra)

    def warning(self, msg: str, *args: Any, exc_info: Optional[bool] = None, extra: Optional[Dict[str, Any]] = None, **kwargs: Any) -> None:
        self._logger.warning(self._merge_message(msg, kwargs), *args, exc_info=exc_info, extra=extra)

    warn = warning

    def error(self, msg: str, *args: Any, exc_info: Optional[bool] = None, extra: Optional[Dict[str, Any]] = None, **kwargs: Any) -> None:
        self._logger.error(self._merge_message(msg, kwargs), *args, exc_info=exc_info, extra=extra)

    def exception(self, msg: str, *args: Any, extra: Optional[Dict[str, Any]] = None, **kwargs: Any) -> None:
        self._logger.error(self._merge_message(msg, kwargs), *args, exc_info=True, extra=extra)


def get_structured_logger(name: str) -> StructuredLoggerAdapter:
    """Get a structured logger adapter that supports key=value kwargs.

    Args:
        name: Logger name

    Returns:
        StructuredLoggerAdapter
    """
    return StructuredLoggerAdapter(logging.getLogger(name))
