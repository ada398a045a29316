"""Exception hierarchy for graphql_ops_mcp.

Two families:

* :class:`StartupError` – anything that prevents the tool set from being
  built.  The CLI turns these into a message on stderr and exit status 1.
* :class:`CallError` – failures while executing one tool call.  The
  dispatcher turns these into an error-flagged tool result.
"""
from __future__ import annotations

import json
from typing import Any, List, Optional

__all__ = [
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


class GraphQLOpsError(Exception):
    """Base class for every error raised by this package."""


# ---------------------------------------------------------------------------
# Startup (fatal)
# ---------------------------------------------------------------------------

class StartupError(GraphQLOpsError):
    pass


class ConfigMissing(StartupError):
    def __init__(self, path: str, example: str):
        self.path = path
        super().__init__(
            f"Configuration file not found at {path}\n"
            "Create a config.json file or set GRAPHQL_MCP_CONFIG environment variable.\n"
            f"Example config.json:\n{example}"
        )


class ConfigInvalid(StartupError):
    pass


class OperationsDirMissing(StartupError):
    def __init__(self, directory: str):
        self.directory = directory
        super().__init__(f"Operations directory not found: {directory}")


class OperationsEmpty(StartupError):
    def __init__(self, directory: str):
        self.directory = directory
        super().__init__(f"No .graphql or .gql files found in {directory}")


class DuplicateOperation(StartupError):
    def __init__(self, name: str, first: str, second: str):
        self.name = name
        self.files = (first, second)
        super().__init__(f"Operation name {name!r} is defined by both {first} and {second}")


class OperationUnreadable(StartupError):
    def __init__(self, source_file: str, message: str):
        self.source_file = source_file
        super().__init__(f"Cannot read {source_file}: {message}")


class OperationSyntaxError(StartupError):
    def __init__(self, source_file: str, message: str):
        self.source_file = source_file
        super().__init__(f"Cannot parse {source_file}: {message}")


# ---------------------------------------------------------------------------
# Per call (isolated to one result)
# ---------------------------------------------------------------------------

class CallError(GraphQLOpsError):
    pass


class UnknownTool(CallError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class TransportError(CallError):
    """Non-2xx response, or the request never got a response at all."""

    def __init__(self, status_code: Optional[int], reason: str):
        self.status_code = status_code
        self.reason = reason
        if status_code is None:
            super().__init__(reason)
        else:
            super().__init__(f"HTTP {status_code}: {reason}")


class GraphQLResponseError(CallError):
    def __init__(self, errors: List[Any]):
        self.errors = errors
        super().__init__(json.dumps(errors, indent=2))


class MalformedResponse(CallError):
    pass
