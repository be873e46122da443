# demoapp MCP - Project-scoped tool server
# Copyright (C) 2026 demoapp Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from demoapp.tooling.envelope import (
    Envelope,
    failure_envelope,
    render_envelope,
    success_envelope,
)
from demoapp.tooling.guard import Allowed, Denied, PathGuard, PathValidation
from demoapp.tooling.handler import APP_CONFIG_FILENAME, ToolHandler
from demoapp.tooling.schemas import TOOL_SPECS, ToolSpec, to_canonical_format

__all__ = [
    "APP_CONFIG_FILENAME",
    "Allowed",
    "Denied",
    "Envelope",
    "PathGuard",
    "PathValidation",
    "TOOL_SPECS",
    "ToolHandler",
    "ToolSpec",
    "failure_envelope",
    "render_envelope",
    "success_envelope",
    "to_canonical_format",
]
