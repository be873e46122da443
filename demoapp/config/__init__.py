# demoapp MCP - Project-scoped tool server
# Copyright (C) 2026 demoapp Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from demoapp.config.models import (
    DEFAULT_MAX_OUTPUT_BYTES,
    ENV_VARS,
    ServerSettings,
    load_settings,
)

__all__ = [
    "DEFAULT_MAX_OUTPUT_BYTES",
    "ENV_VARS",
    "ServerSettings",
    "load_settings",
]
