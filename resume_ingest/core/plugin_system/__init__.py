"""Plugin system components."""

from .plugin_interface import Plugin, PluginMetadata, PluginRequest, PluginResponse

__all__ = [
    "Plugin",
    "PluginMetadata",
    "PluginRequest",
    "PluginResponse",
]
