"""
Unit tests for config models and YAML I/O (tconv.config).

Tests Pydantic model validation, override layering, YAML loading and
option resolution.
"""

from datetime import timedelta, timezone

import pytest
from pydantic import ValidationError

from tconv.config import ConvertConfig, load_config, resolve_options
from tconv.exceptions import (
    ConfigValidationError,
    DurationParseError,
    LocationResolutionError,
    PatternCompileError,
)


# ---------------------------------------------------------------------------
# ConvertConfig
# ---------------------------------------------------------------------------

class TestConvertConfig:
    """Tests for ConvertConfig validation and overrides."""

    def test_defaults(self):
        cfg = ConvertConfig()
        assert cfg.input_format == ""
        assert cfg.output_format == "rfc3339"
        assert cfg.now is False
        assert cfg.pattern == ""

    def test_unknown_key_rejected(self):
        with pytest.raises(ValidationError):
            ConvertConfig.model_validate({"output": "kitchen"})

    def test_frozen(self):
        cfg = ConvertConfig()
        with pytest.raises(ValidationError):
            cfg.output_format = "kitchen"

    def test_overrides_ignore_none(self):
        cfg = ConvertConfig(output_format="kitchen", location="Asia/Tokyo")
        merged = cfg.with_overrides(output_format=None, location="UTC", add="1h")
        assert merged.output_format == "kitchen"
        assert merged.location == "UTC"
        assert merged.add == "1h"

    def test_overrides_validated(self):
        with pytest.raises(ValidationError):
            ConvertConfig().with_overrides(bogus="x")


# ---------------------------------------------------------------------------
# load_config
# ---------------------------------------------------------------------------

class TestLoadConfig:
    """Tests for load_config() YAML loading."""

    def test_load(self, tmp_path):
        path = tmp_path / "tconv.yaml"
        path.write_text("output_format: rfc1123\nlocation: Asia/Tokyo\nadd: 1h\n", encoding="utf-8")
        cfg = load_config(path)
        assert cfg.output_format == "rfc1123"
        assert cfg.location == "Asia/Tokyo"
        assert cfg.add == "1h"
        assert cfg.input_format == ""

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(ConfigValidationError, match="empty"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigValidationError, match="mapping"):
            load_config(path)

    def test_wrong_type(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("now: [1, 2]\n", encoding="utf-8")
        with pytest.raises(ValidationError):
            load_config(path)


# ---------------------------------------------------------------------------
# resolve_options
# ---------------------------------------------------------------------------

class TestResolveOptions:
    """Tests for resolve_options()."""

    def test_defaults(self):
        options = resolve_options(ConvertConfig())
        assert options.location is timezone.utc  # local zone pinned to UTC
        assert options.add == timedelta(0)
        assert options.sub == timedelta(0)
        assert options.pattern is None

    def test_resolved_values(self):
        options = resolve_options(
            ConvertConfig(add="1h30m", sub="-5s", location="UTC", pattern=r"\d{10}")
        )
        assert options.add == timedelta(hours=1, minutes=30)
        assert options.sub == timedelta(seconds=-5)
        assert options.pattern.pattern == r"\d{10}"

    def test_bad_duration(self):
        with pytest.raises(DurationParseError):
            resolve_options(ConvertConfig(add="soon"))

    def test_bad_location(self):
        with pytest.raises(LocationResolutionError):
            resolve_options(ConvertConfig(location="Nowhere/Town"))

    def test_bad_pattern(self):
        with pytest.raises(PatternCompileError, match="invalid pattern"):
            resolve_options(ConvertConfig(pattern="(unclosed"))

    def test_errors_are_config_errors(self):
        with pytest.raises(ConfigValidationError):
            resolve_options(ConvertConfig(sub="1y"))
