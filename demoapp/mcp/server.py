from __future__ import annotations
# demoapp MCP - Project-scoped tool server
# Copyright (C) 2026 demoapp Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of demoapp, licensed under Apache-2.0.


"""Stdio MCP server exposing the project tools.

Launched as ``demoapp-mcp`` or ``python -m demoapp.mcp.server``.  The root
boundary is the process working directory unless ``--root`` or
``DEMOAPP_ROOT`` overrides it.

The server name is ``demoapp`` so tools appear as ``mcp__demoapp__read_file``
etc. in client tool namespaces.
"""

import logging
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, TextContent, Tool

from demoapp import __version__
from demoapp.config import ServerSettings
from demoapp.tooling.envelope import Envelope, is_success, render_envelope
from demoapp.tooling.guard import PathGuard
from demoapp.tooling.handler import ToolHandler
from demoapp.tooling.schemas import TOOL_SPECS

# ── Logging goes to stderr only (stdout is MCP JSON-RPC) ─────
logger = logging.getLogger("demoapp.mcp")

SERVER_NAME = "demoapp"


def build_mcp_tools() -> list[Tool]:
    """Convert the canonical tool declarations to MCP Tool objects."""
    return [
        Tool(
            name=spec.name,
            description=spec.description,
            inputSchema=spec.input_schema(),
        )
        for spec in TOOL_SPECS
    ]


# Build once at import time (schemas are static, no I/O needed).
MCP_TOOLS: list[Tool] = build_mcp_tools()


def to_call_tool_result(envelope: Envelope) -> CallToolResult:
    """Wrap *envelope* as the single text item of a tool result."""
    return CallToolResult(
        content=[TextContent(type="text", text=render_envelope(envelope))],
        isError=not is_success(envelope),
    )


async def handle_call_tool(
    handler: ToolHandler, name: str, arguments: dict[str, Any] | None,
) -> CallToolResult:
    """Run one tool call through *handler* and convert the envelope."""
    envelope = await handler.handle(name, arguments or {})
    return to_call_tool_result(envelope)


def create_server(handler: ToolHandler) -> Server:
    """Build the MCP server bound to *handler*.

    Input validation by the SDK is disabled: argument shape errors must come
    back as failure envelopes from the handler, not as SDK errors.
    """
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return MCP_TOOLS

    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> CallToolResult:
        return await handle_call_tool(handler, name, arguments)

    return server


# ── Entry point ──────────────────────────────────────────


async def serve(settings: ServerSettings) -> None:
    """Run the MCP stdio server until the client disconnects."""
    guard = PathGuard(settings.root)
    handler = ToolHandler(guard, max_output_bytes=settings.max_output_bytes)
    server = create_server(handler)

    logger.info("MCP server '%s' starting on stdio", SERVER_NAME)
    logger.info("Allowed root: %s", guard.root)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


if __name__ == "__main__":
    from demoapp.cli import cli_main

    cli_main()
