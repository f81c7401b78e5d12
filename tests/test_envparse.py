"""Tests for prdplan.lib.envparse module."""

import pytest

from prdplan.lib.envparse import parse_env, load_env


class TestParseEnv:
    """Test parse_env function."""

    def test_parses_key_value_lines(self):
        result = parse_env("HOURS_PER_DAY=6\nCOORDINATION_BUFFER=1.5\n")
        assert result == {"HOURS_PER_DAY": "6", "COORDINATION_BUFFER": "1.5"}

    def test_skips_comments_and_blank_lines(self):
        text = "# scheduling\n\nHOURS_PER_DAY=7\n   \n# end\n"
        assert parse_env(text) == {"HOURS_PER_DAY": "7"}

    def test_strips_matching_quotes(self):
        result = parse_env('PATTERN_LOG_PATH="logs/patterns.jsonl"\nNAME=\'x\'')
        assert result["PATTERN_LOG_PATH"] == "logs/patterns.jsonl"
        assert result["NAME"] == "x"

    def test_rejects_line_without_equals(self):
        with pytest.raises(ValueError, match="Line 1"):
            parse_env("HOURS_PER_DAY")

    def test_rejects_lowercase_key(self):
        with pytest.raises(ValueError, match="Invalid key"):
            parse_env("hours=8")

    @pytest.mark.parametrize("value", ["$(rm -rf /)", "`id`", "${HOME}", "a;b", "a && b", "a | b"])
    def test_rejects_forbidden_patterns(self, value):
        with pytest.raises(ValueError, match="Forbidden pattern"):
            parse_env(f"PATTERN_LOG_PATH={value}")


class TestLoadEnv:
    """Test load_env function."""

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_env(str(tmp_path / "missing.env"))

    def test_reads_file(self, tmp_path):
        env_file = tmp_path / "prdplan.env"
        env_file.write_text("MAX_DIRECT_DEPENDENCIES=5\n")
        assert load_env(str(env_file)) == {"MAX_DIRECT_DEPENDENCIES": "5"}


class TestForbiddenPatternMessage:
    """Forbidden-pattern errors name the offending key."""

    def test_names_key_and_line(self):
        with pytest.raises(ValueError, match="Line 2: Forbidden pattern in value for 'PATTERN_LOG_PATH'"):
            parse_env("HOURS_PER_DAY=8\nPATTERN_LOG_PATH=$(whoami)\n")
