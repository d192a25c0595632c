"""Embedded Codehooks.io documentation."""

from __future__ import annotations

from codehooks_mcp.prompts import DOCS
from codehooks_mcp.tools.registry import ToolContext, ToolDescriptor
from codehooks_mcp.tools.schemas import DocsArgs


async def docs(ctx: ToolContext, args: DocsArgs) -> str:
    return DOCS[args.topic]


DESCRIPTORS = [
    ToolDescriptor(
        name="docs",
        description="Get Codehooks.io documentation and examples. Includes a code generation prompt, "
        "Workflow API docs, and code examples.",
        model=DocsArgs,
        handler=docs,
    ),
]
