"""Plugin Interface Abstract Base Class.

This module defines the contract a host application uses to drive resume
ingestion plugins: metadata describing the supported actions, a request
envelope and a response envelope.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional
import uuid

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PluginMetadata(BaseModel):
    """Metadata for a plugin that describes its actions."""

    name: str = Field(..., description="Unique name of the plugin")
    version: str = Field(..., description="Plugin version (semantic versioning)")
    description: str = Field(..., description="Brief description of plugin functionality")
    author: str = Field(..., description="Plugin author or team")
    capabilities: List[str] = Field(
        default_factory=list,
        description="List of capabilities/keywords"
    )
    actions: Dict[str, Dict[str, str]] = Field(
        default_factory=dict,
        description="Supported actions mapped to their required parameters and descriptions"
    )
    optional_params: Dict[str, str] = Field(
        default_factory=dict,
        description="Optional parameters and their descriptions"
    )


class PluginRequest(BaseModel):
    """Standard request format for plugin execution."""

    request_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = Field(default_factory=_utcnow)
    action: str = Field(..., description="The action to perform")
    parameters: Dict[str, Any] = Field(
        default_factory=dict,
        description="Parameters for the action"
    )


class PluginResponse(BaseModel):
    """Standard response format from plugin execution."""

    request_id: str
    timestamp: datetime = Field(default_factory=_utcnow)
    status: Literal["success", "error"] = Field(..., description="success or error")
    data: Optional[Any] = Field(None, description="Response data")
    error: Optional[str] = Field(None, description="Error message if status is error")
    metadata: Dict[str, Any] = Field(
        default_factory=dict,
        description="Additional metadata about the response"
    )


class Plugin(ABC):
    """Abstract base class for resume ingestion plugins."""

    def __init__(self) -> None:
        """Initialize the plugin."""
        self._metadata: Optional[PluginMetadata] = None
        self._initialized: bool = False

    @abstractmethod
    async def initialize(self, config: Optional[Dict[str, Any]] = None) -> None:
        """Initialize the plugin with optional configuration.

        Args:
            config: Optional configuration dictionary for the plugin
        """

    @abstractmethod
    async def execute(self, request: PluginRequest) -> PluginResponse:
        """Execute one action.

        Args:
            request: The plugin request containing action and parameters

        Returns:
            PluginResponse: The result of the plugin execution
        """

    @abstractmethod
    async def shutdown(self) -> None:
        """Gracefully shutdown the plugin and clean up resources."""

    @abstractmethod
    def get_metadata(self) -> PluginMetadata:
        """Get the plugin's metadata."""

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def missing_parameters(self, request: PluginRequest) -> List[str]:
        """List required parameters of the request's action that are absent.

        Unknown actions report no missing parameters; callers check the
        action name separately.
        """
        required = self.get_metadata().actions.get(request.action, {})
        return [param for param in required if param not in request.parameters]

    async def validate_request(self, request: PluginRequest) -> bool:
        """Validate a request against the plugin's requirements.

        Args:
            request: The request to validate

        Returns:
            bool: True if the action is known and its parameters are present
        """
        if request.action not in self.get_metadata().actions:
            return False
        return not self.missing_parameters(request)

    def __str__(self) -> str:
        metadata = self.get_metadata()
        return f"{metadata.name} v{metadata.version}"

    def __repr__(self) -> str:
        metadata = self.get_metadata()
        return (
            f"<Plugin {metadata.name} v{metadata.version} "
            f"initialized={self._initialized}>"
        )
