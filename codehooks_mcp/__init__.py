"""codehooks_mcp - MCP server exposing the Codehooks.io CLI as tools."""

__version__ = "1.0.0"

from codehooks_mcp.config import McpConfig, load_config
from codehooks_mcp.context import CredentialStore, Credentials
from codehooks_mcp.dispatcher import Dispatcher
from codehooks_mcp.tools import ToolRegistry, build_registry

__all__ = [
    "CredentialStore",
    "Credentials",
    "Dispatcher",
    "McpConfig",
    "ToolRegistry",
    "build_registry",
    "load_config",
]
