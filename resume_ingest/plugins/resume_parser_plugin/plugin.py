"""
Resume import plugin implementation.

Exposes layout reconstruction and resume structuring to a plugin host.
Files are read from the local filesystem only.
"""

import asyncio
from typing import Any, Dict, Optional

from resume_ingest.core.exceptions import (
    PluginExecutionError,
    PluginValidationError,
    ResumeIngestException,
)
from resume_ingest.core.plugin_system.plugin_interface import (
    Plugin,
    PluginMetadata,
    PluginRequest,
    PluginResponse,
)
from resume_ingest.utils.logging import get_structured_logger

from .extractor import extract_text
from .layout import LayoutOptions, reconstruct_page_text
from .models import ResumeDraft, TextFragment
from .parser import parse_resume_text

logger = get_structured_logger(__name__)


class ResumeImportPlugin(Plugin):
    """Plugin that turns resume documents into structured drafts."""

    def __init__(self) -> None:
        """Initialize the resume import plugin."""
        super().__init__()
        self._metadata = PluginMetadata(
            name="resume_import",
            version="1.0.0",
            description="Extracts reading-order text from resumes and structures it into a draft",
            author="Resume Ingest Team",
            capabilities=["pdf_parsing", "docx_parsing", "resume_parsing", "layout_reconstruction"],
            actions={
                "parse_text": {"text": "Plain resume text"},
                "parse_file": {"path": "Local path to a .pdf, .docx or .txt resume"},
                "reconstruct_page": {
                    "fragments": "List of {text, x, y, width, height} mappings for one page"
                },
            },
            optional_params={
                "strict": "Reject malformed fragment geometry instead of zeroing it (boolean, default: False)",
            },
        )
        self._layout_options: Optional[LayoutOptions] = None
        self._strict_geometry = False

    async def initialize(self, config: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the plugin.

        Args:
            config: Optional configuration; ``layout`` overrides layout
                thresholds and ``strict_geometry`` sets the default for
                fragment validation
        """
        logger.info("Initializing resume import plugin", config=config)
        config = config or {}
        self._layout_options = LayoutOptions.from_settings().model_copy(
            update=config.get("layout", {})
        )
        self._strict_geometry = bool(config.get("strict_geometry", False))
        self._initialized = True

    async def execute(self, request: PluginRequest) -> PluginResponse:
        """Run one of the plugin's actions.

        Args:
            request: The plugin request

        Returns:
            PluginResponse: The action result, or an error response
        """
        name = self._metadata.name
        if request.action not in self._metadata.actions:
            return self._error(request, f"Unknown action: {request.action}")

        missing = self.missing_parameters(request)
        if missing:
            error = PluginValidationError(name, {"missing": missing})
            logger.error("Invalid plugin request", action=request.action, missing=missing)
            return self._error(request, f"{error}: missing {', '.join(missing)}")

        try:
            if request.action == "reconstruct_page":
                strict = bool(request.parameters.get("strict", self._strict_geometry))
                fragments = [
                    TextFragment.from_raw(item, strict=strict)
                    for item in request.parameters["fragments"]
                ]
                text = reconstruct_page_text(fragments, self._layout_options)
                data: Dict[str, Any] = {"text": text, "fragment_count": len(fragments)}
            else:
                if request.action == "parse_file":
                    text = await asyncio.to_thread(extract_text, request.parameters["path"])
                else:
                    text = str(request.parameters["text"])
                draft = parse_resume_text(text)
                data = {"resume": self._dump(draft), "text_length": len(text)}
        except ResumeIngestException as e:
            error = PluginExecutionError(name, request.action, e.message, cause=e)
            logger.error("Resume import failed", action=request.action, error=str(e))
            return self._error(request, str(error))
        except Exception as e:
            logger.error("Resume import failed unexpectedly", action=request.action, error=str(e), exc_info=True)
            return self._error(request, str(PluginExecutionError(name, request.action, str(e), cause=e)))

        logger.info("Resume import action complete", action=request.action)
        return PluginResponse(
            request_id=request.request_id,
            status="success",
            data=data,
            metadata={"plugin": name, "version": self._metadata.version, "action": request.action},
        )

    async def shutdown(self) -> None:
        """Shutdown the plugin."""
        logger.info("Shutting down resume import plugin")
        self._initialized = False

    def get_metadata(self) -> PluginMetadata:
        return self._metadata

    @staticmethod
    def _dump(draft: ResumeDraft) -> Dict[str, Any]:
        return draft.model_dump(by_alias=True)

    @staticmethod
    def _error(request: PluginRequest, message: str) -> PluginResponse:
        return PluginResponse(request_id=request.request_id, status="error", error=message)
