"""
Tool call dispatch: configuration check, lookup, validation, execution.

Missing configuration and unknown tools are raised as ``McpError`` (protocol
faults). Validation and command failures come back as tool results flagged
``isError`` so the client session stays healthy.
"""

from __future__ import annotations

import logging
from typing import Any

from mcp.types import CallToolResult, TextContent
from pydantic import ValidationError

from codehooks_mcp.context import CredentialStore
from codehooks_mcp.errors import (
    CommandFailedError,
    InvalidArgumentsError,
    MissingConfigurationError,
    StagingError,
    UnknownToolError,
)
from codehooks_mcp.executor import CommandExecutor, redact
from codehooks_mcp.staging import StagingManager
from codehooks_mcp.tools.registry import ToolContext, ToolRegistry

logger = logging.getLogger("codehooks-mcp.dispatch")


def text_result(text: str, *, is_error: bool = False) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=is_error)


def format_validation_error(error: ValidationError) -> str:
    """One line per failing field, e.g. ``collection: Field required``."""
    lines = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ())) or "arguments"
        lines.append(f"{location}: {item.get('msg', 'invalid value')}")
    return "; ".join(lines)


class Dispatcher:
    """Routes a tool call to its strategy and shapes the response."""

    def __init__(
        self,
        registry: ToolRegistry,
        store: CredentialStore,
        executor: CommandExecutor,
        staging: StagingManager,
        *,
        install_command: list[str] | None = None,
        install_timeout: int = 300,
    ):
        self.registry = registry
        self.store = store
        self.executor = executor
        self.staging = staging
        self.install_command = tuple(install_command or ("npm", "install"))
        self.install_timeout = install_timeout

    def check_configuration(self, name: str) -> None:
        descriptor = self.registry.get(name)
        if descriptor is not None and not descriptor.requires_credentials:
            return
        creds = self.store.current()
        if not creds.is_complete():
            missing = ", ".join(creds.missing())
            logger.error(
                f"{missing} not set; supply them via environment or the set_project / set_admin_token tools"
            )
            raise MissingConfigurationError(
                f"Missing required configuration: {missing} must be set and not empty."
            )

    async def handle(self, name: str, arguments: dict[str, Any] | None) -> CallToolResult:
        """Run one tool call.

        Raises:
            McpError: configuration missing or tool unknown
        """
        try:
            self.check_configuration(name)
            descriptor = self.registry.lookup(name)
        except (MissingConfigurationError, UnknownToolError) as e:
            if isinstance(e, UnknownToolError):
                logger.error(f"Unknown tool requested: {name}")
            raise e.to_mcp_error() from None

        secret = self.store.secret
        try:
            args = descriptor.model.model_validate(arguments or {})
            ctx = ToolContext(
                credentials=self.store.current(),
                store=self.store,
                executor=self.executor,
                staging=self.staging,
                install_command=self.install_command,
                install_timeout=self.install_timeout,
            )
            text = await descriptor.handler(ctx, args)
        except ValidationError as e:
            message = redact(format_validation_error(e), secret)
            logger.warning(f"Invalid arguments for {name}: {message}")
            return text_result(f"Invalid arguments: {message}", is_error=True)
        except InvalidArgumentsError as e:
            message = redact(str(e), secret)
            logger.warning(f"Invalid arguments for {name}: {message}")
            return text_result(f"Invalid arguments: {message}", is_error=True)
        except StagingError as e:
            message = redact(e.details(), secret)
            logger.error(f"Staging failed for {name}: {message}")
            return text_result(f"Error: {message}", is_error=True)
        except CommandFailedError as e:
            message = redact(e.details(), secret)
            logger.error(f"Command failed for {name}: {message}")
            return text_result(f"Error: {message}", is_error=True)
        except Exception as e:
            logger.exception(f"Tool {name} failed")
            return text_result(f"Error: {redact(str(e), secret)}", is_error=True)

        return text_result(redact(text, self.store.secret))
