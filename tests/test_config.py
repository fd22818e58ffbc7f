"""Tests for configuration module."""

import dataclasses

import pytest

from setwise.config import DEFAULT_MAX_LINE_BYTES, CompareConfig
from setwise.errors import ConfigInvalidError


class TestCompareConfig:
    """Test CompareConfig class."""

    def test_default_config(self):
        """Test default configuration values."""
        config = CompareConfig()

        assert config.case_sensitive is False
        assert config.delimiter == ","
        assert config.ignore_fqdn is False
        assert config.extract_pattern is None
        assert config.extract_regex is None
        assert config.trim_prefix is None
        assert config.trim_suffix is None
        assert config.output_format == "text"
        assert config.output_path is None
        assert config.count_only is False
        assert config.stats is False
        assert config.pipe is False
        assert config.max_line_bytes == DEFAULT_MAX_LINE_BYTES == 65536
        assert config.structured is False

    def test_custom_config(self):
        """Test custom configuration values."""
        config = CompareConfig(
            case_sensitive=True,
            delimiter=";",
            ignore_fqdn=True,
            extract_pattern=r"id=(\d+)",
            trim_prefix="srv-",
            trim_suffix="-prod",
            output_format="csv",
            output_path="out.csv",
            count_only=True,
            stats=True,
            pipe=True,
            max_line_bytes=128,
        )

        assert config.delimiter == ";"
        assert config.extract_regex.pattern == r"id=(\d+)"
        assert config.trim_prefix == "srv-"
        assert config.trim_suffix == "-prod"
        assert config.output_format == "csv"
        assert config.structured is True
        assert config.max_line_bytes == 128

    def test_config_is_immutable(self):
        """Test that configuration cannot be changed after construction."""
        config = CompareConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.pipe = True

    def test_invalid_pattern_rejected(self):
        """Test that a bad regular expression fails at construction time."""
        with pytest.raises(ConfigInvalidError) as exc_info:
            CompareConfig(extract_pattern="host=(")

        assert exc_info.value.code == "CONFIG_INVALID"
        assert exc_info.value.details["field"] == "extract_pattern"

    def test_empty_delimiter_rejected(self):
        """Test validation of empty delimiter."""
        with pytest.raises(ConfigInvalidError, match="delimiter"):
            CompareConfig(delimiter="")

    def test_unknown_format_rejected(self):
        """Test validation of output format."""
        with pytest.raises(ConfigInvalidError, match="output_format"):
            CompareConfig(output_format="yaml")

    def test_non_positive_line_limit_rejected(self):
        """Test validation of max_line_bytes."""
        with pytest.raises(ConfigInvalidError, match="max_line_bytes"):
            CompareConfig(max_line_bytes=0)

    def test_log_dict(self):
        """Test flat dictionary used for debug logging."""
        config = CompareConfig(extract_pattern="x", output_path="out.json")
        data = config.to_log_dict()

        assert data["extract_pattern"] == "x"
        assert data["output_path"] == "out.json"
        assert "extract_regex" not in data

    def test_equal_configs_compare_equal(self):
        """Test that the compiled pattern does not affect equality."""
        assert CompareConfig(extract_pattern="a(b)") == CompareConfig(extract_pattern="a(b)")
