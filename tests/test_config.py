"""Tests for prdplan.lib.config module."""

import pytest
from pathlib import Path
from unittest.mock import patch

from prdplan.lib.config import (
    CONFIG_FILENAME,
    DecomposerConfig,
    config_from_env,
    load_config,
)


class TestDefaults:
    """Test DecomposerConfig defaults."""

    def test_default_values(self):
        config = DecomposerConfig()
        assert config.hours_per_day == 8
        assert config.default_task_hours == 16
        assert config.coordination_buffer == 1.2
        assert config.milestone_days_per_task == 2
        assert config.milestone_phase_slots == 6
        assert config.critical_task_ratio == 0.3
        assert config.max_direct_dependencies == 3
        assert config.pattern_log_path is None


class TestConfigFromEnv:
    """Test config_from_env conversion and validation."""

    def test_overrides_known_keys(self):
        config = config_from_env({
            "HOURS_PER_DAY": "6",
            "COORDINATION_BUFFER": "1.5",
            "MILESTONE_PHASE_SLOTS": "4",
        })
        assert config.hours_per_day == 6.0
        assert config.coordination_buffer == 1.5
        assert config.milestone_phase_slots == 4

    def test_ignores_unknown_keys(self):
        config = config_from_env({"SOMETHING_ELSE": "1"})
        assert config == DecomposerConfig()

    def test_unparsable_value_keeps_default_with_warning(self, caplog):
        config = config_from_env({"HOURS_PER_DAY": "eight"})
        assert config.hours_per_day == 8
        assert "Invalid HOURS_PER_DAY 'eight'" in caplog.text

    def test_int_field_rejects_float_text(self, caplog):
        config = config_from_env({"MAX_DIRECT_DEPENDENCIES": "2.5"})
        assert config.max_direct_dependencies == 3
        assert "Invalid MAX_DIRECT_DEPENDENCIES" in caplog.text

    def test_non_positive_value_keeps_default_with_warning(self, caplog):
        config = config_from_env({"COORDINATION_BUFFER": "0"})
        assert config.coordination_buffer == 1.2
        assert "COORDINATION_BUFFER must be positive" in caplog.text

    def test_relative_pattern_log_resolved_against_base_dir(self, tmp_path):
        config = config_from_env({"PATTERN_LOG_PATH": "logs/patterns.jsonl"}, base_dir=tmp_path)
        assert config.pattern_log_path == tmp_path / "logs" / "patterns.jsonl"

    def test_absolute_pattern_log_kept(self, tmp_path):
        target = tmp_path / "abs.jsonl"
        config = config_from_env({"PATTERN_LOG_PATH": str(target)}, base_dir=Path("/elsewhere"))
        assert config.pattern_log_path == target


class TestLoadConfig:
    """Test load_config file handling."""

    def test_none_returns_defaults(self):
        assert load_config(None) == DecomposerConfig()

    def test_missing_file_returns_defaults(self, tmp_path):
        assert load_config(tmp_path) == DecomposerConfig()

    def test_reads_env_file(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("HOURS_PER_DAY=4\nCRITICAL_TASK_RATIO=0.5\n")
        config = load_config(tmp_path)
        assert config.hours_per_day == 4.0
        assert config.critical_task_ratio == 0.5

    def test_invalid_syntax_raises(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("HOURS_PER_DAY=$(whoami)\n")
        with pytest.raises(ValueError, match="Forbidden pattern"):
            load_config(tmp_path)

    @patch("prdplan.lib.config.envparse.load_env")
    def test_uses_envparse(self, mock_load_env, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text("")
        mock_load_env.return_value = {"DEFAULT_TASK_HOURS": "10"}
        config = load_config(tmp_path)
        assert config.default_task_hours == 10.0
        mock_load_env.assert_called_once_with(str(tmp_path / CONFIG_FILENAME))
