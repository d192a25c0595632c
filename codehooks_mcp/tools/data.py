"""Database tools: queries, collections, indexes, schemas, import/export."""

from __future__ import annotations

import logging

from codehooks_mcp.tools.argv import option, pretty_json, project_args, switch
from codehooks_mcp.tools.registry import ToolContext, ToolDescriptor
from codehooks_mcp.tools.schemas import (
    AddSchemaArgs,
    CapCollectionArgs,
    CollectionArgs,
    ExportArgs,
    ImportArgs,
    IndexArgs,
    QueryCollectionArgs,
)

logger = logging.getLogger("codehooks-mcp.tools")


def query_argv(ctx: ToolContext, args: QueryCollectionArgs) -> list[str]:
    return [
        "query",
        "--collection",
        args.collection,
        *project_args(ctx.credentials),
        *option("--query", args.query),
        *switch("--count", args.count),
        *switch("--delete", args.delete),
        *option("--update", args.update),
        *option("--replace", args.replace),
        *option("--useindex", args.useindex),
        *option("--start", args.start),
        *option("--end", args.end),
        *option("--limit", args.effective_limit),
        *option("--fields", args.fields),
        *option("--sort", args.sort),
        *option("--offset", args.offset),
        *option("--enqueue", args.enqueue),
        *switch("--pretty", args.pretty),
        *switch("--reverse", args.reverse),
        *switch("--csv", args.csv),
    ]


async def query_collection(ctx: ToolContext, args: QueryCollectionArgs) -> str:
    logger.info(f"Querying collection: {args.collection}")
    result = await ctx.executor.run(query_argv(ctx, args))
    # CSV and pretty output are already formatted for humans
    if args.csv or args.pretty:
        return result.output
    return pretty_json(result.output)


async def create_index(ctx: ToolContext, args: IndexArgs) -> str:
    result = await ctx.executor.run(
        ["createindex", *project_args(ctx.credentials), args.collection, args.index]
    )
    return result.output


async def drop_index(ctx: ToolContext, args: IndexArgs) -> str:
    result = await ctx.executor.run(
        ["removeindex", *project_args(ctx.credentials), args.collection, args.index]
    )
    return result.output


async def create_collection(ctx: ToolContext, args: CollectionArgs) -> str:
    result = await ctx.executor.run(
        ["createcollection", *project_args(ctx.credentials), args.collection]
    )
    return result.output


async def drop_collection(ctx: ToolContext, args: CollectionArgs) -> str:
    result = await ctx.executor.run(
        ["dropcollection", *project_args(ctx.credentials), args.collection]
    )
    return result.output


async def add_schema(ctx: ToolContext, args: AddSchemaArgs) -> str:
    async with ctx.staging.stage_one(args.schema_, prefix="schema_", suffix=".json") as path:
        result = await ctx.executor.run(
            [
                "add-schema",
                *project_args(ctx.credentials),
                "--collection",
                args.collection,
                "--schema",
                str(path),
            ]
        )
    return result.output


async def remove_schema(ctx: ToolContext, args: CollectionArgs) -> str:
    result = await ctx.executor.run(
        ["remove-schema", *project_args(ctx.credentials), "--collection", args.collection]
    )
    return result.output


async def cap_collection(ctx: ToolContext, args: CapCollectionArgs) -> str:
    result = await ctx.executor.run(
        [
            "cap-collection",
            *project_args(ctx.credentials),
            "--collection",
            args.collection,
            "--cap",
            str(args.cap),
        ]
    )
    return result.output


async def uncap_collection(ctx: ToolContext, args: CollectionArgs) -> str:
    result = await ctx.executor.run(
        ["uncap-collection", *project_args(ctx.credentials), args.collection]
    )
    return result.output


def import_argv(ctx: ToolContext, args: ImportArgs, source: str) -> list[str]:
    return [
        "import",
        *project_args(ctx.credentials),
        "-f",
        source,
        "-c",
        args.collection,
        *option("--separator", args.separator),
        *option("--encoding", args.encoding),
    ]


async def import_data(ctx: ToolContext, args: ImportArgs) -> str:
    if args.filepath:
        result = await ctx.executor.run(import_argv(ctx, args, args.filepath))
        return result.output

    suffix = ".csv" if args.separator else ".json"
    async with ctx.staging.stage_one(args.content or "", prefix="import_", suffix=suffix) as path:
        result = await ctx.executor.run(import_argv(ctx, args, str(path)))
    return result.output


async def export_data(ctx: ToolContext, args: ExportArgs) -> str:
    result = await ctx.executor.run(
        [
            "export",
            *project_args(ctx.credentials),
            args.collection,
            *option("-f", args.filepath),
            *switch("--csv", args.csv),
        ]
    )
    return result.output


QUERY_DESCRIPTORS = [
    ToolDescriptor(
        name="query_collection",
        description="Query data from a collection. Supports URL-style, regex, and MongoDB-style JSON "
        "queries with comparison operators. Can also query system collections like '_hooks' which "
        "contains deployment metadata including available API endpoints. Returns at most "
        "100 items unless 'limit' is given. Using delete, update or replace is very powerful but "
        "also dangerous, so use with caution.",
        model=QueryCollectionArgs,
        handler=query_collection,
    ),
]

DESCRIPTORS = [
    ToolDescriptor(
        name="create_index",
        description="Add field(s) to a query index",
        model=IndexArgs,
        handler=create_index,
    ),
    ToolDescriptor(
        name="drop_index",
        description="Remove field(s) from a query index",
        model=IndexArgs,
        handler=drop_index,
    ),
    ToolDescriptor(
        name="create_collection",
        description="Create a new collection",
        model=CollectionArgs,
        handler=create_collection,
    ),
    ToolDescriptor(
        name="drop_collection",
        description="Delete a collection",
        model=CollectionArgs,
        handler=drop_collection,
    ),
    ToolDescriptor(
        name="add_schema",
        description="Add a JSON schema to a collection. Provide the schema content as a JSON string.",
        model=AddSchemaArgs,
        handler=add_schema,
    ),
    ToolDescriptor(
        name="remove_schema",
        description="Remove JSON schema from a collection",
        model=CollectionArgs,
        handler=remove_schema,
    ),
    ToolDescriptor(
        name="cap_collection",
        description="Cap a collection to a maximum number of documents",
        model=CapCollectionArgs,
        handler=cap_collection,
    ),
    ToolDescriptor(
        name="uncap_collection",
        description="Remove cap from a collection",
        model=CollectionArgs,
        handler=uncap_collection,
    ),
    ToolDescriptor(
        name="import",
        description="Import data from file or content. Provide either 'filepath' (a file on the "
        "server host) or 'content' (JSON/CSV data as string).",
        model=ImportArgs,
        handler=import_data,
    ),
    ToolDescriptor(
        name="export",
        description="Export data from collection. If no filepath specified, returns the exported "
        "content directly. If filepath specified, saves to that file on the server host.",
        model=ExportArgs,
        handler=export_data,
    ),
]
