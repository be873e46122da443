# demoapp MCP - Project-scoped tool server
# Copyright (C) 2026 demoapp Authors
# SPDX-License-Identifier: Apache-2.0
"""Global test fixtures for demoapp."""

from __future__ import annotations

from pathlib import Path

import pytest
import structlog

from demoapp.tooling.guard import PathGuard
from demoapp.tooling.handler import ToolHandler
from tests.helpers.filesystem import create_project_dir


# ── Fixtures ──────────────────────────────────────────────


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """An isolated project directory with an ``app.json``."""
    return create_project_dir(tmp_path)


@pytest.fixture
def guard(project_root: Path) -> PathGuard:
    return PathGuard(project_root)


@pytest.fixture
def handler(guard: PathGuard) -> ToolHandler:
    return ToolHandler(guard)


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Keep structlog contextvars from leaking between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()
