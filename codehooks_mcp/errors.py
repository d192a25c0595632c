"""
Codehooks MCP error types.

Custom exceptions with MCP-friendly error codes. Only missing configuration
and unknown tools become protocol-level faults; everything else is turned
into an error-flagged tool result by the dispatcher.
"""

from __future__ import annotations

from mcp.shared.exceptions import McpError
from mcp.types import INVALID_REQUEST, METHOD_NOT_FOUND, ErrorData


class CodehooksMcpError(Exception):
    """Base error for codehooks-mcp operations."""

    code: str = "CODEHOOKS_MCP_ERROR"

    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        if code is not None:
            self.code = code

    def to_mcp_error(self) -> McpError:
        return McpError(ErrorData(code=INVALID_REQUEST, message=str(self)))


class MissingConfigurationError(CodehooksMcpError):
    """Project name or admin token is not configured."""

    code = "MISSING_CONFIGURATION"


class UnknownToolError(CodehooksMcpError):
    """Requested tool is not in the catalog."""

    code = "UNKNOWN_TOOL"

    def to_mcp_error(self) -> McpError:
        return McpError(ErrorData(code=METHOD_NOT_FOUND, message=str(self)))


class InvalidArgumentsError(CodehooksMcpError):
    """Tool arguments failed validation."""

    code = "INVALID_ARGUMENTS"


class CommandFailedError(CodehooksMcpError):
    """The coho CLI (or an auxiliary program) failed, timed out or did not start.

    All string fields are already redacted when this is raised.
    """

    code = "COMMAND_FAILED"

    def __init__(
        self,
        message: str,
        *,
        command: str = "",
        stdout: str = "",
        stderr: str = "",
        exit_code: int = -1,
        code: str | None = None,
    ):
        super().__init__(message, code=code)
        self.command = command
        self.stdout = stdout
        self.stderr = stderr
        self.exit_code = exit_code

    def details(self) -> str:
        """Message plus stderr, the text relayed to the caller."""
        return " - ".join(part for part in (str(self), self.stderr.strip()) if part)


class StagingError(CommandFailedError):
    """Writing or removing staged files failed."""

    code = "STAGING_FAILED"
