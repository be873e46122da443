from __future__ import annotations
# demoapp MCP - Project-scoped tool server
# Copyright (C) 2026 demoapp Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of demoapp, licensed under Apache-2.0.


"""Tool call dispatcher.

``ToolHandler`` is the single entry-point for tool execution.  For each
call it validates the arguments against the tool's declared model, runs
the Path Guard for path-sensitive tools, performs the operation and wraps
the outcome in an envelope.  Tool-level errors never propagate: every
failure comes back as a failure envelope.
"""

import asyncio
import json
import logging
import os
import stat
import time
import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from demoapp.config import DEFAULT_MAX_OUTPUT_BYTES
from demoapp.exceptions import FileOperationError, ParseError, ToolError
from demoapp.logging_config import bind_tool_context, clear_tool_context, get_request_id
from demoapp.time_utils import now_iso, parse_iso_datetime, to_iso_z
from demoapp.tooling.envelope import Envelope, failure_envelope, success_envelope
from demoapp.tooling.guard import PathGuard
from demoapp.tooling.process import run_shell_command
from demoapp.tooling.schemas import (
    ExecuteCommandArgs,
    GetAppConfigArgs,
    ListFilesArgs,
    ReadFileArgs,
    ScheduleNotificationArgs,
    WriteFileArgs,
    get_tool_spec,
)

logger = logging.getLogger("demoapp.tool_handler")

# Project configuration file read by get_app_config, relative to the root.
APP_CONFIG_FILENAME = "app.json"

# Entries whose name starts with this are skipped by list_files.
_HIDDEN_PREFIX = "."

ToolFn = Callable[[Any], Awaitable[Envelope]]


# ── Blocking helpers (run via asyncio.to_thread) ─────────────


def _read_text(path: Path) -> str:
    with open(path, encoding="utf-8", newline="") as f:
        return f.read()


def _write_text(path: Path, content: str, *, create_directories: bool) -> int:
    if create_directories:
        path.parent.mkdir(parents=True, exist_ok=True)
    data = content.encode("utf-8")
    with open(path, "wb") as f:
        f.write(data)
    return len(data)


@dataclass(frozen=True)
class _ScannedEntry:
    name: str
    is_dir: bool
    is_symlink: bool
    size: int


def _scan_directory(directory: Path) -> list[_ScannedEntry]:
    """Return visible entries of *directory* in enumeration order."""
    entries: list[_ScannedEntry] = []
    with os.scandir(directory) as it:
        for entry in it:
            if entry.name.startswith(_HIDDEN_PREFIX):
                continue
            try:
                st = entry.stat()
            except FileNotFoundError:
                # Dangling symlink: describe the link itself
                st = entry.stat(follow_symlinks=False)
            entries.append(
                _ScannedEntry(
                    name=entry.name,
                    is_dir=stat.S_ISDIR(st.st_mode),
                    is_symlink=entry.is_symlink(),
                    size=st.st_size,
                )
            )
    return entries


def _io_error(exc: OSError, shown_path: str) -> FileOperationError:
    """Describe *exc* using the caller's own path, not the absolute one."""
    reason = exc.strerror or str(exc)
    return FileOperationError(f"{reason}: {shown_path}")


class ToolHandler:
    """Dispatches tool calls to the appropriate handler.

    Args:
        guard: Path Guard holding the root boundary.
        max_output_bytes: Cap on combined command output.
    """

    def __init__(
        self,
        guard: PathGuard,
        *,
        max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES,
    ) -> None:
        self._guard = guard
        self._max_output_bytes = max_output_bytes

        # ── Dispatch table: tool name → handler method ──
        self._dispatch: dict[str, ToolFn] = {
            "schedule_notification": self._handle_schedule_notification,
            "read_file": self._handle_read_file,
            "write_file": self._handle_write_file,
            "list_files": self._handle_list_files,
            "execute_command": self._handle_execute_command,
            "get_app_config": self._handle_get_app_config,
        }

    @property
    def root(self) -> Path:
        return self._guard.root

    @property
    def tool_names(self) -> list[str]:
        return list(self._dispatch)

    # ── Main dispatch ────────────────────────────────────────

    async def handle(self, name: str, args: dict[str, Any] | None) -> Envelope:
        """Run one tool call and return its envelope.

        Never raises for tool-level problems (unknown tool, bad arguments,
        containment denial, I/O, parse or process failures).
        """
        request_id = uuid.uuid4().hex[:12]
        bind_tool_context(name, request_id)
        try:
            logger.debug(
                "tool_call name=%s args_keys=%s",
                name,
                list(args) if isinstance(args, dict) else type(args).__name__,
            )
            spec = get_tool_spec(name)
            params = spec.parse(args if args is not None else {})
            envelope = await self._dispatch[name](params)
        except ToolError as e:
            logger.warning(
                "tool_failed name=%s request_id=%s error_type=%s error=%s",
                name, get_request_id(), e.error_type, e,
            )
            envelope = failure_envelope(str(e), error_type=e.error_type, **e.details())
        except Exception as e:
            logger.exception("Unhandled tool error in %s", name)
            envelope = failure_envelope(
                f"Tool execution failed: {name}: {e}", error_type="UnhandledError",
            )
        finally:
            clear_tool_context()

        logger.info("tool_call name=%s success=%s", name, envelope["success"])
        return envelope

    # ── File operation handlers ──────────────────────────────

    async def _handle_read_file(self, params: ReadFileArgs) -> Envelope:
        path = self._guard.resolve(params.file_path)
        try:
            content = await asyncio.to_thread(_read_text, path)
        except OSError as e:
            raise _io_error(e, params.file_path) from e
        except UnicodeDecodeError as e:
            raise FileOperationError(f"File is not valid UTF-8 text: {params.file_path}") from e
        logger.info("read_file path=%s len=%d", params.file_path, len(content))
        return success_envelope(filePath=params.file_path, content=content)

    async def _handle_write_file(self, params: WriteFileArgs) -> Envelope:
        path = self._guard.resolve(params.file_path)
        try:
            size = await asyncio.to_thread(
                _write_text,
                path,
                params.content,
                create_directories=params.create_directories,
            )
        except OSError as e:
            raise _io_error(e, params.file_path) from e
        logger.info("write_file path=%s bytes=%d", params.file_path, size)
        return success_envelope(
            filePath=params.file_path,
            message="File created/updated successfully",
            size=size,
        )

    async def _handle_list_files(self, params: ListFilesArgs) -> Envelope:
        directory = self._guard.resolve(params.dir_path)
        try:
            files = [
                entry
                async for entry in self._iter_entries(directory, recursive=params.recursive)
            ]
        except OSError as e:
            raise _io_error(e, params.dir_path) from e
        logger.info("list_files path=%s entries=%d", params.dir_path, len(files))
        return success_envelope(dirPath=params.dir_path, files=files, count=len(files))

    async def _iter_entries(
        self, directory: Path, *, recursive: bool,
    ) -> AsyncIterator[dict[str, Any]]:
        """Yield entries depth-first; a directory precedes its children."""
        for entry in await asyncio.to_thread(_scan_directory, directory):
            path = directory / entry.name
            rel = self._guard.relative(path)
            if entry.is_dir:
                yield {"type": "directory", "path": rel, "name": entry.name}
                # Symlinked directories are listed but not descended into
                if recursive and not entry.is_symlink:
                    async for nested in self._iter_entries(path, recursive=True):
                        yield nested
            else:
                yield {"type": "file", "path": rel, "name": entry.name, "size": entry.size}

    # ── Command execution ────────────────────────────────────

    async def _handle_execute_command(self, params: ExecuteCommandArgs) -> Envelope:
        if params.cwd:
            working_dir = self._guard.resolve(params.cwd)
        else:
            working_dir = self._guard.root
        result = await run_shell_command(
            params.command,
            cwd=working_dir,
            max_output_bytes=self._max_output_bytes,
        )
        return success_envelope(
            command=params.command,
            cwd=str(working_dir),
            stdout=result.stdout,
            stderr=result.stderr or None,
        )

    # ── App configuration ────────────────────────────────────

    async def _handle_get_app_config(self, params: GetAppConfigArgs) -> Envelope:
        path = self._guard.root / APP_CONFIG_FILENAME
        try:
            raw = await asyncio.to_thread(_read_text, path)
        except OSError as e:
            raise _io_error(e, APP_CONFIG_FILENAME) from e
        except UnicodeDecodeError as e:
            raise ParseError(f"{APP_CONFIG_FILENAME} is not valid UTF-8 text") from e
        try:
            config = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ParseError(f"Invalid JSON in {APP_CONFIG_FILENAME}: {e}") from e
        return success_envelope(config=config)

    # ── Notifications ────────────────────────────────────────

    async def _handle_schedule_notification(self, params: ScheduleNotificationArgs) -> Envelope:
        try:
            trigger = parse_iso_datetime(params.trigger_time)
            trigger_utc = to_iso_z(trigger)
            local = trigger.astimezone().strftime("%Y-%m-%d %H:%M:%S %Z")
        except (ValueError, OverflowError, OSError) as e:
            raise ParseError(f"Invalid date format: {params.trigger_time!r}") from e

        # Echo only: nothing is persisted and no timer is armed.
        notification = {
            "id": f"notif_{int(time.time() * 1000)}_{uuid.uuid4().hex[:8]}",
            "title": params.title,
            "body": params.body,
            "triggerTime": trigger_utc,
            "repeatInterval": params.repeat_interval,
            "data": params.data,
            "createdAt": now_iso(),
            "status": "scheduled",
        }
        logger.info("schedule_notification id=%s trigger=%s", notification["id"], notification["triggerTime"])
        return success_envelope(
            notification=notification,
            message=f'Notification "{params.title}" scheduled for {local}',
        )
