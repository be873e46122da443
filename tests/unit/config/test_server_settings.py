"""Tests for demoapp.config — ServerSettings and load_settings()."""
# demoapp MCP - Project-scoped tool server
# Copyright (C) 2026 demoapp Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from demoapp.config import DEFAULT_MAX_OUTPUT_BYTES, ENV_VARS, ServerSettings, load_settings
from demoapp.exceptions import ConfigError, ConfigValidationError


class TestServerSettings:
    def test_defaults(self, tmp_path: Path):
        s = ServerSettings(root=tmp_path)
        assert s.root == tmp_path
        assert s.log_level == "INFO"
        assert s.log_dir is None
        assert s.log_json is True
        assert s.max_output_bytes == DEFAULT_MAX_OUTPUT_BYTES == 10 * 1024 * 1024

    def test_root_made_absolute(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(tmp_path)
        s = ServerSettings(root="sub/../proj")
        assert s.root == tmp_path / "proj"
        assert s.root.is_absolute()

    def test_empty_root_rejected(self):
        with pytest.raises(ValidationError):
            ServerSettings(root="  ")

    def test_log_level_normalized(self, tmp_path: Path):
        assert ServerSettings(root=tmp_path, log_level="debug").log_level == "DEBUG"

    def test_unknown_log_level_rejected(self, tmp_path: Path):
        with pytest.raises(ValidationError, match="log_level"):
            ServerSettings(root=tmp_path, log_level="LOUD")

    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive_buffer_rejected(self, tmp_path: Path, value: int):
        with pytest.raises(ValidationError):
            ServerSettings(root=tmp_path, max_output_bytes=value)

    def test_frozen(self, tmp_path: Path):
        s = ServerSettings(root=tmp_path)
        with pytest.raises(ValidationError):
            s.log_level = "DEBUG"  # type: ignore[misc]


class TestLoadSettings:
    def test_root_defaults_to_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.chdir(tmp_path)
        s = load_settings(environ={})
        assert s.root == Path(os.getcwd())

    def test_reads_environment(self, tmp_path: Path):
        env = {
            ENV_VARS["root"]: str(tmp_path),
            ENV_VARS["log_level"]: "warning",
            ENV_VARS["log_dir"]: str(tmp_path / "logs"),
            ENV_VARS["log_json"]: "false",
            ENV_VARS["max_output_bytes"]: "2048",
        }
        s = load_settings(environ=env)
        assert s.root == tmp_path
        assert s.log_level == "WARNING"
        assert s.log_dir == tmp_path / "logs"
        assert s.log_json is False
        assert s.max_output_bytes == 2048

    def test_overrides_beat_environment(self, tmp_path: Path):
        env = {ENV_VARS["root"]: str(tmp_path / "from-env")}
        s = load_settings(environ=env, root=str(tmp_path / "from-flag"))
        assert s.root == tmp_path / "from-flag"

    def test_none_overrides_fall_through(self, tmp_path: Path):
        env = {ENV_VARS["root"]: str(tmp_path), ENV_VARS["log_level"]: "ERROR"}
        s = load_settings(environ=env, root=None, log_level=None, log_dir=None)
        assert s.root == tmp_path
        assert s.log_level == "ERROR"

    def test_empty_env_values_ignored(self, tmp_path: Path):
        env = {ENV_VARS["root"]: str(tmp_path), ENV_VARS["log_level"]: ""}
        assert load_settings(environ=env).log_level == "INFO"

    def test_reads_process_environment_by_default(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
    ):
        monkeypatch.setenv(ENV_VARS["root"], str(tmp_path))
        assert load_settings().root == tmp_path

    def test_invalid_value_raises_config_error(self, tmp_path: Path):
        env = {ENV_VARS["root"]: str(tmp_path), ENV_VARS["max_output_bytes"]: "lots"}
        with pytest.raises(ConfigValidationError) as excinfo:
            load_settings(environ=env)
        assert isinstance(excinfo.value, ConfigError)
        assert "max_output_bytes" in str(excinfo.value)
