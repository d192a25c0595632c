"""Configuration tools: change token or target project at runtime."""

from __future__ import annotations

import logging

from codehooks_mcp.tools.registry import ToolContext, ToolDescriptor
from codehooks_mcp.tools.schemas import SetAdminTokenArgs, SetProjectArgs

logger = logging.getLogger("codehooks-mcp.tools")


async def set_admin_token(ctx: ToolContext, args: SetAdminTokenArgs) -> str:
    creds = ctx.store.configure(token=args.token)
    logger.info("Admin token updated")
    return f"Admin token set. Project: {creds.project or '(not set)'}, space: {creds.space}"


async def set_project(ctx: ToolContext, args: SetProjectArgs) -> str:
    creds = ctx.store.configure(project=args.project, space=args.space)
    logger.info(f"Project set to {creds.project} (space {creds.space})")
    token_state = "present" if creds.admin_token else "missing"
    return f"Project set to {creds.project}, space: {creds.space}. Admin token {token_state}."


DESCRIPTORS = [
    ToolDescriptor(
        name="set_admin_token",
        description="Set the Codehooks admin token used for all subsequent commands. "
        "Use when CODEHOOKS_ADMIN_TOKEN was not provided to the server.",
        model=SetAdminTokenArgs,
        handler=set_admin_token,
        requires_credentials=False,
    ),
    ToolDescriptor(
        name="set_project",
        description="Set the Codehooks project name and optionally the space (defaults to 'dev') "
        "used for all subsequent commands.",
        model=SetProjectArgs,
        handler=set_project,
        requires_credentials=False,
    ),
]
