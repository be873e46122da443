from __future__ import annotations
# demoapp MCP - Project-scoped tool server
# Copyright (C) 2026 demoapp Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of demoapp, licensed under Apache-2.0.

"""Timezone-aware datetime helpers.

Timestamps leave the server as UTC ISO 8601 strings with millisecond
precision and a ``Z`` suffix (``2024-01-20T10:00:00.000Z``).
"""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Return current time as timezone-aware UTC datetime."""
    return datetime.now(tz=timezone.utc)


def now_iso() -> str:
    """Return current time in the wire timestamp format."""
    return to_iso_z(now_utc())


def ensure_aware(dt: datetime) -> datetime:
    """Ensure *dt* is timezone-aware.  Naive datetimes are host-local time."""
    if dt.tzinfo is None:
        return dt.astimezone()
    return dt


def to_iso_z(dt: datetime) -> str:
    """Render *dt* as UTC ISO 8601 with milliseconds and a ``Z`` suffix."""
    utc = ensure_aware(dt).astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_iso_datetime(text: str) -> datetime:
    """Parse an ISO 8601 date/time string into an aware datetime.

    Accepts a trailing ``Z`` and date-only values.  Raises ``ValueError``
    for anything else.
    """
    if not isinstance(text, str) or not text.strip():
        raise ValueError(f"Invalid isoformat string: {text!r}")
    return ensure_aware(datetime.fromisoformat(text.strip()))
