#!/usr/bin/env python3
"""
Codehooks MCP Server - Model Context Protocol interface for the Codehooks.io CLI.

Supports stdio transport for Claude Desktop integration.
Run with: python -m codehooks_mcp.server

Every tool maps to one ``coho`` invocation (deploy_code also runs the package
install step first). Configuration comes from CODEHOOKS_* environment
variables or from the set_project / set_admin_token tools.
"""  # noqa: I001

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

from codehooks_mcp.config import McpConfig, load_config
from codehooks_mcp.context import CredentialStore
from codehooks_mcp.dispatcher import Dispatcher
from codehooks_mcp.errors import CommandFailedError
from codehooks_mcp.executor import CommandExecutor
from codehooks_mcp.observability import generate_correlation_id, setup_logging
from codehooks_mcp.prompts import BOOTSTRAP_PROMPT
from codehooks_mcp.staging import StagingManager
from codehooks_mcp.tools import build_registry
from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

logger = logging.getLogger("codehooks-mcp")


class CodehooksMcpServer:
    """Codehooks MCP Server implementation."""

    def __init__(self, config: McpConfig, store: CredentialStore | None = None):
        self.config = config
        self.store = store or CredentialStore.from_env()
        self.registry = build_registry()
        self.executor = CommandExecutor(self.store, config.coho.binary, config.coho.timeout)
        self.staging = StagingManager(config.coho.scratch_dir)
        self.dispatcher = Dispatcher(
            self.registry,
            self.store,
            self.executor,
            self.staging,
            install_command=config.coho.install_command,
            install_timeout=config.coho.install_timeout,
        )
        self.server = Server(config.server.name, instructions=BOOTSTRAP_PROMPT)

        self._register_handlers()
        logger.info(
            f"Codehooks MCP Server initialized ({config.config_version}, {len(self.registry)} tools)"
        )

    def _register_handlers(self):
        """Register MCP protocol handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[types.Tool]:
            """Return available tools."""
            logger.debug("list_tools called")
            return [descriptor.to_tool() for descriptor in self.registry.list_tools()]

        # Registered on the raw request so McpError reaches the client as a
        # JSON-RPC error and argument validation stays with the dispatcher.
        async def call_tool(req: types.CallToolRequest) -> types.ServerResult:
            result = await self.call_tool(req.params.name, req.params.arguments)
            return types.ServerResult(result)

        self.server.request_handlers[types.CallToolRequest] = call_tool

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> types.CallToolResult:
        """Handle tool invocation with request logging."""
        cid = generate_correlation_id()
        start_time = time.time()
        status = "ok"
        error_msg = None

        logger.info(f"call_tool: {name}", extra={"correlation_id": cid, "tool": name})

        try:
            result = await self.dispatcher.handle(name, arguments)
        except McpError as e:
            status = "rejected"
            error_msg = e.error.message
            raise
        else:
            if result.isError:
                status = "error"
                error_msg = result.content[0].text if result.content else None
        finally:
            latency_ms = (time.time() - start_time) * 1000
            logger.info(
                f"call_tool done: {name}",
                extra={
                    "correlation_id": cid,
                    "tool": name,
                    "latency_ms": latency_ms,
                    "status": status,
                    "error": error_msg,
                },
            )

        return result

    async def probe_cli(self) -> bool:
        """Check that the coho binary runs; logs the outcome either way."""
        try:
            version = await self.executor.version()
        except CommandFailedError as e:
            logger.error(f"Codehooks CLI not available: {e.details()}")
            logger.error("Install it with: npm install -g codehooks")
            return False
        logger.info(f"Codehooks CLI version: {version}")
        return True

    async def run(self):
        """Run the server with stdio transport."""
        if self.config.coho.probe_on_start:
            await self.probe_cli()
        logger.info("Starting Codehooks MCP server (stdio transport)")
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )


def main():
    """Entry point for the Codehooks MCP server."""
    import argparse

    parser = argparse.ArgumentParser(description="Codehooks MCP Server")
    parser.add_argument(
        "--config",
        "-c",
        help="Path to codehooks-mcp.toml config file",
        default=None,
    )
    parser.add_argument(
        "--log-level",
        "-l",
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Override log level",
    )
    args = parser.parse_args()

    config = load_config(args.config)

    if args.log_level:
        config.server.log_level = args.log_level
        config.observability.log_level = args.log_level

    store = CredentialStore.from_env()
    global logger  # noqa: PLW0603
    logger = setup_logging(config.observability, store, "codehooks-mcp")

    # Log effective config (minus secrets)
    creds = store.current()
    logger.info(f"Config loaded: version={config.config_version}, cli={config.coho.binary}")
    logger.info(
        f"Project: {creds.project or '(not set)'}, space={creds.space}, "
        f"admin_token={'set' if creds.admin_token else 'not set'}"
    )
    if not creds.is_complete():
        logger.warning(
            f"{', '.join(creds.missing())} not set; tools will fail until set_project / "
            "set_admin_token are called"
        )

    server = CodehooksMcpServer(config, store)
    asyncio.run(server.run())


if __name__ == "__main__":
    main()
