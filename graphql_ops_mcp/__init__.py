"""graphql_ops_mcp
================
Serve a directory of GraphQL operation files as MCP tools.

Each ``*.graphql`` / ``*.gql`` file becomes one tool; its ``$name: Type``
variables become the tool's input schema, and calling the tool POSTs the
document to the configured endpoint.

Python use::

    from graphql_ops_mcp import load_config, ToolRegistry
    registry = ToolRegistry.from_config(load_config("config.json"))
    result = await registry.call_tool("GetLaunches", {"limit": 5})

Dependencies:  `mcp`  `requests`  `graphql-core`.
"""
from .config import Config, load_config
from .errors import (
    CallError,
    ConfigInvalid,
    ConfigMissing,
    DuplicateOperation,
    GraphQLOpsError,
    GraphQLResponseError,
    MalformedResponse,
    OperationsDirMissing,
    OperationsEmpty,
    OperationSyntaxError,
    OperationUnreadable,
    StartupError,
    TransportError,
    UnknownTool,
)
from .executor import execute_graphql
from .operations import (
    Operation,
    ParameterDescriptor,
    build_input_schema,
    build_tool_spec,
    extract_variables,
    graphql_type_to_json,
    load_operations,
)
from .server import ToolRegistry, ToolResult, build_server, run_stdio

__all__ = [
    "Config",
    "load_config",
    "Operation",
    "ParameterDescriptor",
    "load_operations",
    "extract_variables",
    "graphql_type_to_json",
    "build_input_schema",
    "build_tool_spec",
    "execute_graphql",
    "ToolRegistry",
    "ToolResult",
    "build_server",
    "run_stdio",
    "GraphQLOpsError",
    "StartupError",
    "ConfigMissing",
    "ConfigInvalid",
    "OperationsDirMissing",
    "OperationsEmpty",
    "DuplicateOperation",
    "OperationSyntaxError",
    "OperationUnreadable",
    "CallError",
    "UnknownTool",
    "TransportError",
    "GraphQLResponseError",
    "MalformedResponse",
]
