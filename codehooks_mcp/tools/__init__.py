"""Codehooks MCP tools - catalog, input models and CLI strategies."""

from codehooks_mcp.tools.registry import (  # noqa: F401
    ToolContext,
    ToolDescriptor,
    ToolRegistry,
    build_registry,
)
