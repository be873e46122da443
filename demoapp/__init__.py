# demoapp MCP - Project-scoped tool server
# Copyright (C) 2026 demoapp Authors
# SPDX-License-Identifier: Apache-2.0

"""Project-scoped file, command and notification tools served over MCP."""

__version__ = "1.0.0"
