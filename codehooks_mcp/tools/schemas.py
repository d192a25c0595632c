"""Input models for every tool in the catalog.

Each model doubles as the tool's JSON schema (``model_json_schema``) and as
its validator. Field names are shared across tools: a collection is always
``collection``, a keyspace is always ``keyspace``.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_QUERY_LIMIT = 100
DEFAULT_LOG_TAIL = 100

DocsTopic = Literal["overview", "chatgpt-prompt", "workflow-api", "examples", "all"]


class ToolArgs(BaseModel):
    """Base for tool inputs: unknown keys are dropped."""

    model_config = ConfigDict(extra="ignore")


# --- Configuration ---


class SetAdminTokenArgs(ToolArgs):
    token: str = Field(min_length=1, description="Codehooks admin token used for every CLI call")


class SetProjectArgs(ToolArgs):
    project: str = Field(min_length=1, description="Codehooks project name")
    space: str | None = Field(
        default=None, description="Space (environment) within the project, defaults to 'dev'"
    )


# --- Data ---


class QueryCollectionArgs(ToolArgs):
    collection: str = Field(
        description="Collection name. Use '_hooks' to query deployment metadata and discover available API endpoints."
    )
    query: str | None = Field(
        default=None,
        description=(
            "Query expression. URL-style ('name=Polly&type=Parrot'), regex ('name=/^po/'), "
            "or MongoDB-style JSON ('{\"age\": {\"$gt\": 5}}') with operators like "
            "$gt, $lt, $gte, $lte, $ne, $in, $nin, $exists, $regex"
        ),
    )
    count: bool = Field(default=False, description="Count query results")
    delete: bool = Field(default=False, description="Delete all items from query result")
    update: str | None = Field(
        default=None, description="Patch all items from query result with JSON string '{...}'"
    )
    replace: str | None = Field(
        default=None, description="Replace all items from query result with JSON string '{...}'"
    )
    useindex: str | None = Field(default=None, description="Use an indexed field to scan data in query")
    start: str | None = Field(default=None, description="Start value for index scan")
    end: str | None = Field(default=None, description="End value for index scan")
    limit: int | None = Field(
        default=None,
        ge=1,
        description=f"Limit query result (defaults to {DEFAULT_QUERY_LIMIT} unless count is set). "
        "Use limit=1 and reverse to get latest deployment from _hooks collection",
    )
    fields: str | None = Field(default=None, description="Comma separated list of fields to include")
    sort: str | None = Field(
        default=None,
        description="Comma separated list of fields to sort by. Use '_id' to sort by creation time",
    )
    offset: int | None = Field(default=None, description="Skip items before returning data in query result")
    enqueue: str | None = Field(default=None, description="Add query result to queue topic")
    pretty: bool = Field(default=False, description="Output data with formatting and colors")
    reverse: bool = Field(
        default=False,
        description="Scan index in reverse order. Use with sort='_id' to get newest records first",
    )
    csv: bool = Field(default=False, description="Output data in CSV format")

    @property
    def effective_limit(self) -> int | None:
        if self.limit is not None:
            return self.limit
        return None if self.count else DEFAULT_QUERY_LIMIT


class CollectionArgs(ToolArgs):
    collection: str = Field(min_length=1, description="Collection name")


class IndexArgs(CollectionArgs):
    index: str = Field(min_length=1, description="Field(s) of the query index")


class AddSchemaArgs(CollectionArgs):
    schema_: str = Field(
        alias="schema",
        description="JSON schema content as a string (written to a temporary file for the CLI)",
    )


class CapCollectionArgs(CollectionArgs):
    cap: int = Field(ge=1, description="Maximum number of documents")


class ImportArgs(CollectionArgs):
    filepath: str | None = Field(
        default=None, description="File path to import from (optional if content is provided)"
    )
    content: str | None = Field(
        default=None,
        description="File content to import as JSON or CSV data (optional if filepath is provided)",
    )
    separator: str | None = Field(default=None, description="CSV separator character")
    encoding: str | None = Field(default=None, description="File encoding")

    @model_validator(mode="after")
    def _require_source(self) -> ImportArgs:
        if not self.filepath and not self.content:
            raise ValueError("Either 'filepath' or 'content' must be provided for import.")
        return self


class ExportArgs(CollectionArgs):
    filepath: str | None = Field(
        default=None,
        description="File to save export data (optional, will return content if not specified)",
    )
    csv: bool = Field(default=False, description="Export to CSV format")


# --- Code and files ---


class DeployFile(BaseModel):
    path: str = Field(
        min_length=1,
        description="File path relative to project root (e.g. 'index.js', 'src/utils.js')",
    )
    content: str = Field(description="File content")

    @field_validator("path")
    @classmethod
    def _relative_path(cls, value: str) -> str:
        pure = PurePosixPath(value)
        if pure.is_absolute() or ".." in pure.parts:
            raise ValueError(f"path must be relative to the project root: {value!r}")
        return value


class DeployCodeArgs(ToolArgs):
    files: list[DeployFile] = Field(min_length=1, description="Array of files to deploy")
    main: str = Field(default="index", description="Application main file (defaults to 'index')")
    json_: bool = Field(default=False, alias="json", description="Output JSON format")
    projectId: str | None = Field(default=None, description="Project name, overrides the configured one")
    spaceId: str | None = Field(default=None, description="Space name, overrides the configured one")


class FileUploadArgs(ToolArgs):
    content: str = Field(description="File content as text or base64")
    encoding: Literal["text", "base64"] = Field(default="text", description="Content encoding type")
    target: str = Field(min_length=1, description="Target path/filename on server")


class FileDeleteArgs(ToolArgs):
    filename: str | None = Field(
        default=None,
        description="Delete file with match on absolute path/filename. Use this or 'match'.",
    )
    match: str | None = Field(
        default=None,
        description="Delete multiple files that match regular expression to a file path. Use this or 'filename'.",
    )
    dryrun: bool = Field(default=False, description="Output files to delete without performing the action")

    @model_validator(mode="after")
    def _require_target(self) -> FileDeleteArgs:
        if not self.filename and not self.match:
            raise ValueError("Either 'filename' or 'match' must be provided.")
        return self


class FileListArgs(ToolArgs):
    path: str | None = Field(default=None, description="Path to list files from")


# --- Key-value store ---


class KvGetArgs(ToolArgs):
    key: str = Field(default="*", description="Key to match, or key* to fetch list")
    keyspace: str | None = Field(default=None, description="Keyspace to scan")
    text: bool = Field(default=False, description="Output info as text line")


class KvSetArgs(ToolArgs):
    key: str = Field(min_length=1, description="Key to set")
    val: str = Field(description="Value to set")
    keyspace: str | None = Field(default=None, description="Keyspace to use")
    ttl: int | None = Field(default=None, ge=1, description="Time to live in millis for value")
    json_: bool = Field(default=False, alias="json", description="Output info as JSON (not table)")


class KvDelArgs(ToolArgs):
    key: str = Field(min_length=1, description="Key to delete")
    keyspace: str | None = Field(default=None, description="Keyspace to use")
    json_: bool = Field(default=False, alias="json", description="Output info as JSON (not table)")


# --- Logs and docs ---


class LogsArgs(ToolArgs):
    tail: int = Field(default=DEFAULT_LOG_TAIL, ge=1, description="Chop log to n lines")
    follow: bool = Field(
        default=False,
        description="Keep log stream open (the call ends when the CLI timeout is reached)",
    )
    context: str | None = Field(
        default=None,
        description="Filter log on: jobhooks, queuehooks, routehooks, datahooks, auth",
    )


class DocsArgs(ToolArgs):
    topic: DocsTopic = Field(default="overview", description="Documentation topic to retrieve")
