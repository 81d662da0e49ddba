"""Tests for plugin interface."""

import pytest

from resume_ingest.core.plugin_system.plugin_interface import (
    Plugin,
    PluginMetadata,
    PluginRequest,
    PluginResponse,
)


class EchoPlugin(Plugin):
    """Minimal implementation of the Plugin interface."""

    def __init__(self):
        super().__init__()
        self._metadata = PluginMetadata(
            name="echo_plugin",
            version="1.0.0",
            description="Echo plugin",
            author="Test",
            capabilities=["test"],
            actions={"echo": {"message": "Message to echo"}},
        )

    async def initialize(self, config=None):
        self._initialized = True

    async def execute(self, request: PluginRequest) -> PluginResponse:
        return PluginResponse(
            request_id=request.request_id,
            status="success",
            data={"echo": request.parameters.get("message", "")}
        )

    async def shutdown(self):
        self._initialized = False

    def get_metadata(self) -> PluginMetadata:
        return self._metadata


@pytest.mark.asyncio
async def test_plugin_lifecycle():
    """Test plugin lifecycle methods."""
    plugin = EchoPlugin()

    metadata = plugin.get_metadata()
    assert metadata.name == "echo_plugin"
    assert metadata.version == "1.0.0"

    assert not plugin.is_initialized
    await plugin.initialize()
    assert plugin.is_initialized

    request = PluginRequest(action="echo", parameters={"message": "Hello"})
    response = await plugin.execute(request)
    assert response.status == "success"
    assert response.data["echo"] == "Hello"
    assert response.request_id == request.request_id

    await plugin.shutdown()
    assert not plugin.is_initialized


@pytest.mark.asyncio
async def test_plugin_validation():
    """Test plugin request validation."""
    plugin = EchoPlugin()

    assert await plugin.validate_request(PluginRequest(action="echo", parameters={"message": "Test"}))

    missing = PluginRequest(action="echo", parameters={})
    assert not await plugin.validate_request(missing)
    assert plugin.missing_parameters(missing) == ["message"]

    assert not await plugin.validate_request(PluginRequest(action="shout", parameters={"message": "x"}))


def test_plugin_string_forms():
    plugin = EchoPlugin()
    assert str(plugin) == "echo_plugin v1.0.0"
    assert repr(plugin) == "<Plugin echo_plugin v1.0.0 initialized=False>"


def test_request_defaults():
    first, second = PluginRequest(action="echo"), PluginRequest(action="echo")
    assert first.request_id != second.request_id
    assert first.timestamp.tzinfo is not None
    assert first.parameters == {}
