"""Command-line entry point.

Serve the operations in a config over stdio::

    $ GRAPHQL_MCP_CONFIG=./config.json graphql-ops-mcp

Or just print the tool specs the config produces::

    $ graphql-ops-mcp --config ./config.json --list-tools --format claude > tools.json
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

import anyio

from .config import load_config
from .errors import StartupError
from .operations import TOOL_FORMATS
from .server import ToolRegistry, build_server, run_stdio


def _setup_logging(level: str) -> None:
    # stdout carries the protocol; diagnostics go to stderr only.
    logging.basicConfig(
        stream=sys.stderr,
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="graphql-ops-mcp",
        description="Expose GraphQL operation files as MCP tools.",
    )
    ap.add_argument("--config", help="Path to config.json (default: $GRAPHQL_MCP_CONFIG or ./config.json)")
    ap.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    ap.add_argument("--list-tools", action="store_true", help="Print the tool specs as JSON and exit")
    ap.add_argument("--format", choices=sorted(TOOL_FORMATS), default="mcp", help="Tool spec format for --list-tools")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns.log_level)

    try:
        config = load_config(ns.config)
        registry = ToolRegistry.from_config(config)
    except StartupError as exc:
        sys.stderr.write(f"Fatal error: {exc}\n")
        return 1

    if ns.list_tools:
        json.dump(registry.tool_specs(ns.format), sys.stdout, indent=2)
        sys.stdout.write("\n")
        return 0

    anyio.run(run_stdio, build_server(registry, config))
    return 0


if __name__ == "__main__":
    sys.exit(main())
