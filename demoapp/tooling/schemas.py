from __future__ import annotations
# demoapp MCP - Project-scoped tool server
# Copyright (C) 2026 demoapp Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of demoapp, licensed under Apache-2.0.


"""Canonical tool declarations.

Each tool is declared once as a name, a description and a Pydantic model
describing its arguments.  The model is both the validator used by
``ToolHandler`` and the source of the JSON Schema advertised to clients.
Wire argument names are camelCase (``filePath``); the models expose them as
snake_case attributes through aliases.
"""

import logging
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from demoapp.exceptions import ShapeError, ToolNotFoundError

logger = logging.getLogger("demoapp.tool_schemas")

RepeatInterval = Literal["none", "daily", "weekly", "monthly"]


# ── Argument models ──────────────────────────────────────────


class ToolArguments(BaseModel):
    """Base for tool argument models.

    Strict mode rejects wrong primitive types instead of coercing them
    (``"true"`` is not a boolean).  Unknown keys are ignored.
    """

    model_config = ConfigDict(strict=True, populate_by_name=True, extra="ignore")


class ReadFileArgs(ToolArguments):
    file_path: str = Field(
        alias="filePath",
        description="Path of the file to read, relative to the project root",
    )


class WriteFileArgs(ToolArguments):
    file_path: str = Field(
        alias="filePath",
        description="Path of the file to write, relative to the project root",
    )
    content: str = Field(description="Content to write to the file")
    create_directories: bool = Field(
        default=True,
        alias="createDirectories",
        description="Create missing parent directories",
    )


class ListFilesArgs(ToolArguments):
    dir_path: str = Field(
        default=".",
        alias="dirPath",
        description="Directory to list, relative to the project root",
    )
    recursive: bool = Field(default=False, description="List subdirectories recursively")


class ExecuteCommandArgs(ToolArguments):
    command: str = Field(
        description="Command to run in the shell (e.g. npm install, npx expo install)",
    )
    cwd: str | None = Field(
        default=None,
        description="Working directory, relative to the project root (default: the root)",
    )


class GetAppConfigArgs(ToolArguments):
    pass


class ScheduleNotificationArgs(ToolArguments):
    title: str = Field(description="Notification title")
    body: str = Field(description="Notification body text")
    trigger_time: str = Field(
        alias="triggerTime",
        description="When the notification fires (ISO 8601, e.g. '2024-01-20T10:00:00Z')",
    )
    repeat_interval: RepeatInterval = Field(
        default="none",
        alias="repeatInterval",
        description="Repeat interval of the notification",
    )
    data: dict[str, Any] = Field(
        default_factory=dict,
        description="Extra data delivered with the notification",
    )


# ── Declarations ─────────────────────────────────────────────


@dataclass(frozen=True)
class ToolSpec:
    """A named, schema-validated remote operation."""

    name: str
    description: str
    arguments: type[ToolArguments]

    def input_schema(self) -> dict[str, Any]:
        """JSON Schema for the tool's arguments, using wire names."""
        return self.arguments.model_json_schema(by_alias=True)

    def parse(self, args: Any) -> ToolArguments:
        """Validate raw *args*, raising :class:`ShapeError` on failure."""
        try:
            return self.arguments.model_validate(args)
        except ValidationError as exc:
            raise ShapeError(format_validation_error(exc)) from exc


TOOL_SPECS: list[ToolSpec] = [
    ToolSpec(
        name="schedule_notification",
        description=(
            "Schedule a local notification for the app. "
            "Useful for reminders, alerts and timed messages."
        ),
        arguments=ScheduleNotificationArgs,
    ),
    ToolSpec(
        name="read_file",
        description="Read the content of a file in the project.",
        arguments=ReadFileArgs,
    ),
    ToolSpec(
        name="write_file",
        description="Write or modify a file in the project. Creates the file if it does not exist.",
        arguments=WriteFileArgs,
    ),
    ToolSpec(
        name="list_files",
        description="List files in a project directory.",
        arguments=ListFilesArgs,
    ),
    ToolSpec(
        name="execute_command",
        description=(
            "Run a shell command inside the project. "
            "Useful for installing packages or updating code."
        ),
        arguments=ExecuteCommandArgs,
    ),
    ToolSpec(
        name="get_app_config",
        description="Return the project's current app configuration (app.json).",
        arguments=GetAppConfigArgs,
    ),
]

_SPECS_BY_NAME: dict[str, ToolSpec] = {spec.name: spec for spec in TOOL_SPECS}


def get_tool_spec(name: str) -> ToolSpec:
    spec = _SPECS_BY_NAME.get(name)
    if spec is None:
        raise ToolNotFoundError(f"Unknown tool: {name}")
    return spec


def format_validation_error(exc: ValidationError) -> str:
    """Flatten a Pydantic error into ``loc: msg`` pairs."""
    parts: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "arguments"
        parts.append(f"{loc}: {err.get('msg', 'invalid value')}")
    return "Invalid arguments: " + "; ".join(parts)


# ── Format converters ────────────────────────────────────────


def to_canonical_format(specs: list[ToolSpec] | None = None) -> list[dict[str, Any]]:
    """Convert declarations to ``{"name", "description", "parameters"}`` dicts."""
    return [
        {
            "name": spec.name,
            "description": spec.description,
            "parameters": spec.input_schema(),
        }
        for spec in (TOOL_SPECS if specs is None else specs)
    ]
