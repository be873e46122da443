# demoapp MCP - Project-scoped tool server
# Copyright (C) 2026 demoapp Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of demoapp, licensed under Apache-2.0.

"""Server settings.

Defines the Pydantic model for process-wide settings and the loader that
merges explicit overrides (CLI flags), ``DEMOAPP_*`` environment variables
and defaults, in that order of precedence.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from demoapp.exceptions import ConfigValidationError

logger = logging.getLogger("demoapp.config")

# Maximum combined stdout+stderr captured from a command (10 MiB).
DEFAULT_MAX_OUTPUT_BYTES = 10 * 1024 * 1024

_LOG_LEVELS = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})

# setting name → environment variable
ENV_VARS: dict[str, str] = {
    "root": "DEMOAPP_ROOT",
    "log_level": "DEMOAPP_LOG_LEVEL",
    "log_dir": "DEMOAPP_LOG_DIR",
    "log_json": "DEMOAPP_LOG_JSON",
    "max_output_bytes": "DEMOAPP_MAX_OUTPUT_BYTES",
}


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class ServerSettings(BaseModel):
    """Immutable settings captured once at startup."""

    model_config = ConfigDict(frozen=True)

    root: Path
    log_level: str = "INFO"
    log_dir: Path | None = None
    log_json: bool = True
    max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES

    @field_validator("root", mode="before")
    @classmethod
    def _absolute_root(cls, value: Any) -> Any:
        raw = os.fspath(value) if isinstance(value, (str, os.PathLike)) else value
        if isinstance(raw, str):
            if not raw.strip():
                raise ValueError("root must not be empty")
            return Path(os.path.normpath(os.path.abspath(raw)))
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(sorted(_LOG_LEVELS))}",
            )
        return level

    @field_validator("max_output_bytes")
    @classmethod
    def _positive_buffer(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("max_output_bytes must be positive")
        return value


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


def load_settings(
    *,
    environ: Mapping[str, str] | None = None,
    **overrides: Any,
) -> ServerSettings:
    """Build :class:`ServerSettings` from overrides, environment and defaults.

    Overrides whose value is ``None`` are ignored so that unset CLI flags
    fall through to the environment.  The root defaults to the process
    working directory.

    Raises:
        ConfigValidationError: when any value fails validation.
    """
    env = os.environ if environ is None else environ

    data: dict[str, Any] = {}
    for name, var in ENV_VARS.items():
        value = env.get(var)
        if value:
            data[name] = value
    data.update({k: v for k, v in overrides.items() if v is not None})
    data.setdefault("root", os.getcwd())

    try:
        settings = ServerSettings.model_validate(data)
    except ValidationError as exc:
        logger.error("Invalid settings: %s", exc)
        raise ConfigValidationError(str(exc)) from exc

    logger.debug("Settings loaded: %s", settings.model_dump(mode="json"))
    return settings
