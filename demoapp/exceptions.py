from __future__ import annotations
# demoapp MCP - Project-scoped tool server
# Copyright (C) 2026 demoapp Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of demoapp, licensed under Apache-2.0.

"""Unified exception hierarchy for demoapp.

All domain-specific exceptions derive from :class:`DemoAppError`.  Tool
errors are never allowed to escape ``ToolHandler.handle``; they are turned
into failure envelopes there::

    try:
        ...
    except ToolError as e:
        return failure_envelope(str(e), error_type=e.error_type, **e.details())
"""

from typing import Any


class DemoAppError(Exception):
    """Base exception for all demoapp errors."""


# ── Tool ─────────────────────────────────────────────────────


class ToolError(DemoAppError):
    """Tool invocation errors, reported back to the caller as envelopes."""

    @property
    def error_type(self) -> str:
        return type(self).__name__

    def details(self) -> dict[str, Any]:
        """Extra envelope fields carried by this error."""
        return {}


class ShapeError(ToolError):
    """Tool arguments failed type, requiredness or enum validation."""


class ContainmentError(ToolError):
    """Resolved path escapes the root boundary."""


class FileOperationError(ToolError):
    """Underlying read/write/stat/readdir failure."""


class ParseError(ToolError):
    """Malformed date or malformed JSON configuration."""


class ProcessError(ToolError):
    """Spawned command failed, exited non-zero or overflowed its buffer.

    Keeps whatever the command printed before failing so the caller does
    not lose it.
    """

    def __init__(
        self,
        message: str,
        *,
        exit_code: int | None = None,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr

    def details(self) -> dict[str, Any]:
        return {
            "exitCode": self.exit_code,
            "stdout": self.stdout,
            "stderr": self.stderr or None,
        }


class ToolNotFoundError(ToolError):
    """Requested tool is not registered."""


# ── Configuration ────────────────────────────────────────────


class ConfigError(DemoAppError):
    """Configuration errors."""


class ConfigValidationError(ConfigError):
    """Configuration validation failure."""
