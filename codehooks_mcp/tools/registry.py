"""Tool catalog: name -> input model, description and strategy."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any

from mcp.types import Tool
from pydantic import BaseModel

from codehooks_mcp.context import CredentialStore, Credentials
from codehooks_mcp.errors import UnknownToolError
from codehooks_mcp.executor import CommandExecutor
from codehooks_mcp.staging import StagingManager


@dataclass(frozen=True)
class ToolContext:
    """Everything a tool strategy may touch during one call."""

    credentials: Credentials
    store: CredentialStore
    executor: CommandExecutor
    staging: StagingManager
    install_command: tuple[str, ...] = ("npm", "install")
    install_timeout: int = 300


ToolHandler = Callable[[ToolContext, Any], Awaitable[str]]


@dataclass(frozen=True)
class ToolDescriptor:
    """One tool: schema, description and the strategy that fulfils it."""

    name: str
    description: str
    model: type[BaseModel]
    handler: ToolHandler
    requires_credentials: bool = True

    def input_schema(self) -> dict[str, Any]:
        schema = self.model.model_json_schema()
        schema.pop("title", None)
        schema.pop("description", None)
        return schema

    def to_tool(self) -> Tool:
        return Tool(name=self.name, description=self.description, inputSchema=self.input_schema())


class ToolRegistry:
    """Static, ordered catalog of tools."""

    def __init__(self, descriptors: Iterable[ToolDescriptor]):
        self._tools: dict[str, ToolDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in self._tools:
                raise ValueError(f"Duplicate tool name: {descriptor.name}")
            self._tools[descriptor.name] = descriptor

    def list_tools(self) -> list[ToolDescriptor]:
        return list(self._tools.values())

    def names(self) -> list[str]:
        return list(self._tools)

    def get(self, name: str) -> ToolDescriptor | None:
        return self._tools.get(name)

    def lookup(self, name: str) -> ToolDescriptor:
        descriptor = self._tools.get(name)
        if descriptor is None:
            raise UnknownToolError(f"Tool not found: {name}")
        return descriptor

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)


def build_registry() -> ToolRegistry:
    """Assemble the full catalog from the tool modules."""
    from codehooks_mcp.tools import admin, data, docs, files, kv

    return ToolRegistry(
        [
            *admin.DESCRIPTORS,
            *data.QUERY_DESCRIPTORS,
            *files.DESCRIPTORS,
            *data.DESCRIPTORS,
            *kv.DESCRIPTORS,
            *docs.DESCRIPTORS,
        ]
    )
