"""Tool registry and the MCP server around it.

The registry is built once at startup (:meth:`ToolRegistry.from_config`) and
never changes afterwards; the server handlers only read from it.
"""
from __future__ import annotations

import functools
import json
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import mcp.types as types
from anyio import to_thread
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from .config import Config
from .errors import CallError, UnknownTool
from .executor import execute_graphql
from .operations import TOOL_FORMATS, Operation, build_tool_spec, load_operations

__all__ = ["ToolResult", "ToolRegistry", "build_server", "run_stdio"]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one tool call; converted to MCP content only at the edge."""

    ok: bool
    text: str

    @classmethod
    def success(cls, data: Any) -> "ToolResult":
        return cls(True, json.dumps(data, indent=2))

    @classmethod
    def failure(cls, message: str) -> "ToolResult":
        return cls(False, message)

    def to_call_tool_result(self) -> types.CallToolResult:
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=self.text)],
            isError=not self.ok,
        )


class ToolRegistry:
    def __init__(
        self,
        operations: Sequence[Operation],
        endpoint: str,
        headers: Optional[Mapping[str, str]] = None,
        *,
        timeout: Optional[float] = None,
        strict_variables: bool = False,
    ):
        self.endpoint = endpoint
        self.headers: Mapping[str, str] = MappingProxyType(dict(headers or {}))
        self.timeout = timeout
        self._operations: Mapping[str, Operation] = MappingProxyType({op.name: op for op in operations})
        self._specs: Tuple[Dict[str, Any], ...] = tuple(
            build_tool_spec(op, strict=strict_variables) for op in operations
        )
        self._tools: Tuple[types.Tool, ...] = tuple(types.Tool(**spec) for spec in self._specs)

    @classmethod
    def from_config(cls, config: Config) -> "ToolRegistry":
        operations = load_operations(config.operations_dir)
        log.info("Loaded %d GraphQL operations from %s", len(operations), config.operations_dir)
        log.info("GraphQL endpoint: %s", config.endpoint)
        return cls(
            operations,
            config.endpoint,
            config.headers,
            timeout=config.timeout,
            strict_variables=config.strict_variables,
        )

    @property
    def operations(self) -> Mapping[str, Operation]:
        return self._operations

    def list_tools(self) -> List[types.Tool]:
        return list(self._tools)

    def tool_specs(self, fmt: str = "mcp") -> List[Dict[str, Any]]:
        if fmt not in TOOL_FORMATS:
            raise ValueError("fmt must be 'mcp', 'claude' or 'openai'")
        key = TOOL_FORMATS[fmt]
        return [
            {"name": s["name"], "description": s["description"], key: s["inputSchema"]}
            for s in self._specs
        ]

    def get_operation(self, name: str) -> Operation:
        try:
            return self._operations[name]
        except KeyError:
            raise UnknownTool(name) from None

    async def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResult:
        try:
            operation = self.get_operation(name)
        except UnknownTool as exc:
            log.warning("%s", exc)
            return ToolResult.failure(str(exc))

        run = functools.partial(
            execute_graphql,
            self.endpoint,
            operation.document,
            dict(arguments or {}),
            self.headers,
            timeout=self.timeout,
        )
        try:
            data = await to_thread.run_sync(run)
        except CallError as exc:
            log.warning("Error executing %s: %s", name, exc)
            return ToolResult.failure(f"Error executing {name}: {exc}")
        return ToolResult.success(data)


def build_server(registry: ToolRegistry, config: Config) -> Server:
    server: Server = Server(config.name, version=config.version)

    @server.list_tools()
    async def _list_tools() -> List[types.Tool]:
        return registry.list_tools()

    @server.call_tool()
    async def _call_tool(name: str, arguments: Dict[str, Any]) -> types.CallToolResult:
        result = await registry.call_tool(name, arguments)
        return result.to_call_tool_result()

    return server


async def run_stdio(server: Server) -> None:
    async with stdio_server() as (read_stream, write_stream):
        log.info("GraphQL MCP server running")
        await server.run(read_stream, write_stream, server.create_initialization_options())
