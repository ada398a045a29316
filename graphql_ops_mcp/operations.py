"""Operation documents on disk -> tool specs.

An *operation* is one ``.graphql`` / ``.gql`` file holding a single query or
mutation.  Its ``$name: Type`` variable declarations become the tool's input
schema::

    # @description Fetch a launch by id
    query GetLaunch($id: ID!, $fields: [String]) { ... }

becomes::

    {"name": "GetLaunch",
     "description": "Fetch a launch by id",
     "inputSchema": {"type": "object",
                     "properties": {"id": {"type": "string", ...},
                                    "fields": {"type": "array",
                                               "items": {"type": "string"}, ...}},
                     "required": ["id"]}}
"""
from __future__ import annotations

import logging
import pathlib
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from graphql import GraphQLSyntaxError, parse
from graphql.language import ListTypeNode, NamedTypeNode, NonNullTypeNode, OperationDefinitionNode, TypeNode

from .errors import (
    DuplicateOperation,
    OperationsDirMissing,
    OperationsEmpty,
    OperationSyntaxError,
    OperationUnreadable,
)

__all__ = [
    "Operation",
    "ParameterDescriptor",
    "load_operations",
    "extract_variables",
    "graphql_type_to_json",
    "build_input_schema",
    "build_tool_spec",
    "OPERATION_EXTENSIONS",
    "TOOL_FORMATS",
]

log = logging.getLogger(__name__)

OPERATION_EXTENSIONS = (".graphql", ".gql")

_DESCRIPTION_RE = re.compile(r"#\s*@description\s+(.+)")
_VARIABLE_RE = re.compile(r"\$(\w+):\s*([^\s,)]+)")


@dataclass(frozen=True)
class Operation:
    name: str
    document: str
    source_file: str
    description: Optional[str] = None


@dataclass(frozen=True)
class ParameterDescriptor:
    name: str
    declared_type: str
    required: bool = False
    is_array: bool = False


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

def _strip_extension(file_name: str) -> Optional[str]:
    for ext in OPERATION_EXTENSIONS:
        if file_name.endswith(ext):
            return file_name[: -len(ext)]
    return None


def _read_operation(path: pathlib.Path, name: str) -> Operation:
    try:
        document = path.read_text(encoding="utf-8")
    except (UnicodeDecodeError, OSError) as exc:
        raise OperationUnreadable(path.name, str(exc)) from exc
    m = _DESCRIPTION_RE.search(document)
    return Operation(
        name=name,
        document=document,
        source_file=path.name,
        description=m.group(1).strip() if m else None,
    )


def load_operations(directory: Union[str, pathlib.Path]) -> List[Operation]:
    """Load every operation document directly inside *directory*.

    Subdirectories are not searched.  Files are visited in name order.  Two
    files resolving to the same operation name (``a.graphql`` and ``a.gql``)
    are rejected with :class:`DuplicateOperation`.
    """
    root = pathlib.Path(directory)
    if not root.is_dir():
        raise OperationsDirMissing(str(directory))

    seen: Dict[str, Operation] = {}
    for path in sorted(root.iterdir(), key=lambda p: p.name):
        name = _strip_extension(path.name)
        if name is None or not path.is_file():
            continue
        if name in seen:
            raise DuplicateOperation(name, seen[name].source_file, path.name)
        seen[name] = _read_operation(path, name)

    if not seen:
        raise OperationsEmpty(str(directory))
    return list(seen.values())


# ---------------------------------------------------------------------------
# Variable extraction
# ---------------------------------------------------------------------------

def _scan_variables(document: str) -> List[Tuple[str, str, bool, bool]]:
    # Lexical scan: also picks up `$x: T` outside the variable definitions.
    out = []
    for m in _VARIABLE_RE.finditer(document):
        name, token = m.group(1), m.group(2)
        out.append((name, re.sub(r"[!\[\]]", "", token), token.endswith("!"), "[" in token))
    return out


def _unwrap_type(node: TypeNode) -> Tuple[str, bool, bool]:
    required = isinstance(node, NonNullTypeNode)
    is_array = False
    while not isinstance(node, NamedTypeNode):
        if isinstance(node, ListTypeNode):
            is_array = True
        node = node.type
    return node.name.value, required, is_array


def _parse_variables(document: str, source: str) -> List[Tuple[str, str, bool, bool]]:
    try:
        ast = parse(document, no_location=True)
    except GraphQLSyntaxError as exc:
        raise OperationSyntaxError(source, exc.message) from exc
    out = []
    for definition in ast.definitions:
        if not isinstance(definition, OperationDefinitionNode):
            continue
        for var in definition.variable_definitions or ():
            out.append((var.variable.name.value, *_unwrap_type(var.type)))
    return out


def extract_variables(document: str, strict: bool = False, source: str = "<document>") -> List[ParameterDescriptor]:
    """Return the declared variables of *document* in first-occurrence order.

    By default this is a regex scan for ``$name: Type`` (see module docs).
    With ``strict=True`` the document is parsed with graphql-core and only
    real variable definitions are reported; a syntax error raises
    :class:`OperationSyntaxError` mentioning *source*.

    A name declared twice keeps its first declaration.
    """
    found = _parse_variables(document, source) if strict else _scan_variables(document)

    params: Dict[str, ParameterDescriptor] = {}
    for name, declared_type, required, is_array in found:
        if name in params:
            log.debug("%s: ignoring repeated declaration of $%s", source, name)
            continue
        params[name] = ParameterDescriptor(name, declared_type, required, is_array)
    return list(params.values())


# ---------------------------------------------------------------------------
# Schema mapping
# ---------------------------------------------------------------------------

_SCALAR_MAP = {
    "String": "string",
    "Int": "number",
    "Float": "number",
    "Boolean": "boolean",
    "ID": "string",
}

TOOL_FORMATS = {"mcp": "inputSchema", "claude": "input_schema", "openai": "parameters"}


def graphql_type_to_json(declared_type: str) -> str:
    # Enums and input objects have no richer mapping; they travel as strings.
    return _SCALAR_MAP.get(declared_type, "string")


def build_input_schema(params: Sequence[ParameterDescriptor]) -> Dict[str, Any]:
    props: Dict[str, Any] = {}
    req: List[str] = []
    for p in params:
        json_type = graphql_type_to_json(p.declared_type)
        if p.is_array:
            props[p.name] = {
                "type": "array",
                "items": {"type": json_type},
                "description": f"{p.declared_type} array",
            }
        else:
            props[p.name] = {"type": json_type, "description": p.declared_type}
        if p.required:
            req.append(p.name)
    return {"type": "object", "properties": props, "required": req}


def build_tool_spec(
    operation: Operation,
    *,
    fmt: str = "mcp",
    params: Optional[Sequence[ParameterDescriptor]] = None,
    strict: bool = False,
) -> Dict[str, Any]:
    """Return the tool spec for one operation.

    `fmt` picks the schema key: ``mcp`` (``inputSchema``), ``claude``
    (``input_schema``) or ``openai`` (``parameters``).
    """
    if fmt not in TOOL_FORMATS:
        raise ValueError("fmt must be 'mcp', 'claude' or 'openai'")
    if params is None:
        params = extract_variables(operation.document, strict=strict, source=operation.source_file)
    return {
        "name": operation.name,
        "description": operation.description or f"Execute {operation.name} GraphQL operation",
        TOOL_FORMATS[fmt]: build_input_schema(params),
    }
