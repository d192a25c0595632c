"""Key-value store and log tools."""

from __future__ import annotations

from codehooks_mcp.tools.argv import option, project_args, switch
from codehooks_mcp.tools.registry import ToolContext, ToolDescriptor
from codehooks_mcp.tools.schemas import KvDelArgs, KvGetArgs, KvSetArgs, LogsArgs


async def kv_get(ctx: ToolContext, args: KvGetArgs) -> str:
    result = await ctx.executor.run(
        [
            "get",
            *project_args(ctx.credentials),
            "--key",
            args.key,
            *option("--keyspace", args.keyspace),
            *switch("--text", args.text),
        ]
    )
    return result.output


async def kv_set(ctx: ToolContext, args: KvSetArgs) -> str:
    result = await ctx.executor.run(
        [
            "set",
            *project_args(ctx.credentials),
            "--key",
            args.key,
            "--val",
            args.val,
            *option("--keyspace", args.keyspace),
            *option("--ttl", args.ttl),
            *switch("--json", args.json_),
        ]
    )
    return result.output


async def kv_del(ctx: ToolContext, args: KvDelArgs) -> str:
    result = await ctx.executor.run(
        [
            "del",
            *project_args(ctx.credentials),
            "--key",
            args.key,
            *option("--keyspace", args.keyspace),
            *switch("--json", args.json_),
        ]
    )
    return result.output


async def logs(ctx: ToolContext, args: LogsArgs) -> str:
    result = await ctx.executor.run(
        [
            "log",
            *project_args(ctx.credentials),
            "--tail",
            str(args.tail),
            *switch("--follow", args.follow),
            *option("--context", args.context),
        ]
    )
    return result.output


DESCRIPTORS = [
    ToolDescriptor(
        name="kv_get",
        description="Retrieve key-value pair(s) from a space. Supports pattern matching with wildcards.",
        model=KvGetArgs,
        handler=kv_get,
    ),
    ToolDescriptor(
        name="kv_set",
        description="Set key-value pair in a space with optional TTL and keyspace.",
        model=KvSetArgs,
        handler=kv_set,
    ),
    ToolDescriptor(
        name="kv_del",
        description="Delete key-value pair in a space.",
        model=KvDelArgs,
        handler=kv_del,
    ),
    ToolDescriptor(
        name="logs",
        description="Show system logs for a space with filtering and follow options.",
        model=LogsArgs,
        handler=logs,
    ),
]
