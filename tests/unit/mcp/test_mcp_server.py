"""Unit tests for the demoapp MCP server wiring."""
# demoapp MCP - Project-scoped tool server
# Copyright (C) 2026 demoapp Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from mcp import types
from mcp.types import CallToolResult, TextContent, Tool

from demoapp.mcp.server import (
    MCP_TOOLS,
    SERVER_NAME,
    build_mcp_tools,
    create_server,
    handle_call_tool,
    to_call_tool_result,
)
from demoapp.tooling.handler import ToolHandler


EXPECTED_TOOL_NAMES: frozenset[str] = frozenset({
    "read_file",
    "write_file",
    "list_files",
    "execute_command",
    "get_app_config",
    "schedule_notification",
})


def payload_of(result: CallToolResult) -> dict[str, Any]:
    """Decode the single JSON text item of a tool result."""
    assert len(result.content) == 1
    item = result.content[0]
    assert isinstance(item, TextContent)
    assert item.type == "text"
    return json.loads(item.text)


# ── TestMcpToolSchemas ───────────────────────────────────────


class TestMcpToolSchemas:
    """Tests for the static MCP_TOOLS list built at import time."""

    def test_all_expected_tool_names_present(self) -> None:
        assert {t.name for t in MCP_TOOLS} == EXPECTED_TOOL_NAMES

    def test_returns_tool_objects(self) -> None:
        tools = build_mcp_tools()
        assert len(tools) == len(EXPECTED_TOOL_NAMES)
        for tool in tools:
            assert isinstance(tool, Tool)

    def test_each_tool_has_nonempty_description(self) -> None:
        for tool in MCP_TOOLS:
            assert isinstance(tool.description, str)
            assert tool.description, f"Tool '{tool.name}' has an empty description"

    def test_each_tool_has_object_input_schema(self) -> None:
        for tool in MCP_TOOLS:
            schema = tool.inputSchema
            assert isinstance(schema, dict)
            assert schema.get("type") == "object", (
                f"Tool '{tool.name}' inputSchema type is '{schema.get('type')}'"
            )

    def test_wire_names_are_camel_case(self) -> None:
        by_name = {t.name: t for t in MCP_TOOLS}
        assert "filePath" in by_name["read_file"].inputSchema["properties"]
        assert "createDirectories" in by_name["write_file"].inputSchema["properties"]
        assert "triggerTime" in by_name["schedule_notification"].inputSchema["properties"]


# ── TestToCallToolResult ─────────────────────────────────────


class TestToCallToolResult:
    def test_success_is_not_error(self) -> None:
        result = to_call_tool_result({"success": True, "content": "hi"})
        assert result.isError is False
        assert payload_of(result) == {"success": True, "content": "hi"}

    def test_failure_sets_is_error(self) -> None:
        result = to_call_tool_result(
            {"success": False, "error": "nope", "errorType": "ShapeError"},
        )
        assert result.isError is True
        assert payload_of(result)["error"] == "nope"

    def test_text_is_pretty_printed(self) -> None:
        result = to_call_tool_result({"success": True})
        assert result.content[0].text == '{\n  "success": true\n}'


# ── TestHandleCallTool ───────────────────────────────────────


class TestHandleCallTool:
    async def test_round_trip_through_handler(
        self, handler: ToolHandler, project_root: Path,
    ) -> None:
        written = await handle_call_tool(
            handler, "write_file", {"filePath": "notes/a.md", "content": "# A"},
        )
        assert written.isError is False
        assert (project_root / "notes" / "a.md").read_text(encoding="utf-8") == "# A"

        read = await handle_call_tool(handler, "read_file", {"filePath": "notes/a.md"})
        assert payload_of(read)["content"] == "# A"

    async def test_none_arguments_become_empty_object(self) -> None:
        mock_handler = MagicMock()
        mock_handler.handle = AsyncMock(return_value={"success": True, "config": {}})

        result = await handle_call_tool(mock_handler, "get_app_config", None)

        mock_handler.handle.assert_awaited_once_with("get_app_config", {})
        assert result.isError is False

    async def test_unknown_tool_is_error_result(self, handler: ToolHandler) -> None:
        result = await handle_call_tool(handler, "nonexistent_tool", {"arg": "val"})
        assert result.isError is True
        payload = payload_of(result)
        assert payload["success"] is False
        assert payload["errorType"] == "ToolNotFoundError"
        assert "nonexistent_tool" in payload["error"]

    async def test_shape_error_is_error_result(self, handler: ToolHandler) -> None:
        result = await handle_call_tool(handler, "read_file", {"filePath": 42})
        assert result.isError is True
        assert payload_of(result)["errorType"] == "ShapeError"

    async def test_containment_denial_is_error_result(self, handler: ToolHandler) -> None:
        result = await handle_call_tool(handler, "read_file", {"filePath": "../../etc/passwd"})
        assert result.isError is True
        assert payload_of(result)["errorType"] == "ContainmentError"


# ── TestCreateServer ─────────────────────────────────────────


class TestCreateServer:
    def test_server_name(self, handler: ToolHandler) -> None:
        server = create_server(handler)
        assert server.name == SERVER_NAME == "demoapp"

    def test_registers_tool_handlers(self, handler: ToolHandler) -> None:
        server = create_server(handler)
        assert types.ListToolsRequest in server.request_handlers
        assert types.CallToolRequest in server.request_handlers

    async def test_list_tools_request(self, handler: ToolHandler) -> None:
        server = create_server(handler)
        list_handler = server.request_handlers[types.ListToolsRequest]

        response = await list_handler(types.ListToolsRequest(method="tools/list"))

        assert isinstance(response.root, types.ListToolsResult)
        assert {t.name for t in response.root.tools} == EXPECTED_TOOL_NAMES

    def test_advertises_tools_capability(self, handler: ToolHandler) -> None:
        server = create_server(handler)
        options = server.create_initialization_options()
        assert options.server_name == SERVER_NAME
        assert options.capabilities.tools is not None


@pytest.mark.parametrize("name", sorted(EXPECTED_TOOL_NAMES))
def test_every_tool_is_dispatchable(handler: ToolHandler, name: str) -> None:
    assert name in handler.tool_names
