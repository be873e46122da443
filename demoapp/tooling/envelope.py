from __future__ import annotations
# demoapp MCP - Project-scoped tool server
# Copyright (C) 2026 demoapp Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of demoapp, licensed under Apache-2.0.

"""Uniform tool response envelopes.

Every tool answers with one of two shapes::

    {"success": true, ...payload}
    {"success": false, "error": "...", "errorType": "...", ...details}

and the envelope is serialized as pretty-printed JSON.
"""

import json
from typing import Any

Envelope = dict[str, Any]


def success_envelope(**payload: Any) -> Envelope:
    """Build a success envelope carrying tool-specific *payload*."""
    return {"success": True, **payload}


def failure_envelope(
    error: str,
    *,
    error_type: str = "ToolError",
    **details: Any,
) -> Envelope:
    """Build a failure envelope with a human-readable *error* message."""
    return {"success": False, "error": error, "errorType": error_type, **details}


def is_success(envelope: Envelope) -> bool:
    return bool(envelope.get("success"))


def render_envelope(envelope: Envelope) -> str:
    """Serialize *envelope* for the protocol response."""
    return json.dumps(envelope, ensure_ascii=False, indent=2, default=str)
