"""Tests for the hydration configuration."""

import json
from dataclasses import FrozenInstanceError

import pytest

from xml_hydrator.shared.config import (
    ConfigError,
    ConfigValidationError,
    HydrationConfig,
)


class TestHydrationConfig:
    """Test suite for HydrationConfig."""

    def test_default_configuration(self):
        """Test default configuration values."""
        config = HydrationConfig()

        assert config.value_attribute == "v"
        assert config.enable_diagnostics is True
        assert config.diagnostic_level == "DEBUG"
        assert config.strict_structure is False
        assert config.strip_text is False
        assert config.logging_level == "INFO"
        assert config.correlation_id is None

    def test_configuration_is_immutable(self):
        """Test that configuration instances cannot be mutated."""
        config = HydrationConfig()

        with pytest.raises(FrozenInstanceError):
            config.strip_text = True  # type: ignore

    def test_empty_value_attribute_rejected(self):
        """Test that an empty value attribute name is rejected."""
        with pytest.raises(ConfigValidationError, match="value_attribute cannot be empty"):
            HydrationConfig(value_attribute="")

    def test_invalid_diagnostic_level_rejected_with_suggestion(self):
        """Test invalid diagnostic level with close-match suggestions."""
        with pytest.raises(ConfigValidationError) as exc_info:
            HydrationConfig(diagnostic_level="WARN")

        assert exc_info.value.field_name == "diagnostic_level"
        assert "WARNING" in exc_info.value.suggestions

    def test_invalid_logging_level_rejected(self):
        """Test invalid logging level."""
        with pytest.raises(ConfigValidationError, match="logging_level must be one of"):
            HydrationConfig(logging_level="VERBOSE")

    def test_validation_error_is_config_error(self):
        """Test exception hierarchy."""
        assert issubclass(ConfigValidationError, ConfigError)


class TestHydrationConfigPresets:
    """Test preset factory methods."""

    def test_strict_preset(self):
        """Test strict preset enables structure checking."""
        config = HydrationConfig.strict()

        assert config.strict_structure is True
        assert config.diagnostic_level == "DEBUG"

    def test_lenient_preset(self):
        """Test lenient preset strips text and records warnings only."""
        config = HydrationConfig.lenient()

        assert config.strip_text is True
        assert config.diagnostic_level == "WARNING"
        assert config.strict_structure is False


class TestHydrationConfigOverrides:
    """Test override and serialization helpers."""

    def test_override_creates_new_instance(self):
        """Test override returns a modified copy."""
        config = HydrationConfig()
        new_config = config.override(strip_text=True, value_attribute="value")

        assert new_config is not config
        assert new_config.strip_text is True
        assert new_config.value_attribute == "value"
        assert config.strip_text is False

    def test_override_unknown_field_rejected(self):
        """Test override with a misspelled field name."""
        with pytest.raises(ConfigValidationError) as exc_info:
            HydrationConfig().override(strip_txt=True)

        assert exc_info.value.field_name == "strip_txt"
        assert "strip_text" in exc_info.value.suggestions

    def test_override_is_validated(self):
        """Test overridden values pass through validation."""
        with pytest.raises(ConfigValidationError):
            HydrationConfig().override(diagnostic_level="LOUD")

    def test_dict_round_trip(self):
        """Test to_dict/from_dict preserve every field."""
        config = HydrationConfig(strip_text=True, correlation_id="abc-123")

        assert HydrationConfig.from_dict(config.to_dict()) == config

    def test_json_round_trip(self):
        """Test to_json/from_json preserve every field."""
        config = HydrationConfig.strict()

        data = json.loads(config.to_json())
        assert data["strict_structure"] is True
        assert HydrationConfig.from_json(config.to_json()) == config

    def test_from_dict_rejects_unknown_keys(self):
        """Test unknown keys are not silently ignored."""
        with pytest.raises(ConfigValidationError, match="Unknown configuration field"):
            HydrationConfig.from_dict({"strict": True})

    def test_from_dict_rejects_non_mapping(self):
        """Test from_dict requires a mapping."""
        with pytest.raises(ConfigValidationError, match="must be a mapping"):
            HydrationConfig.from_dict(["strip_text"])  # type: ignore

    def test_from_json_rejects_invalid_json(self):
        """Test malformed JSON raises a validation error."""
        with pytest.raises(ConfigValidationError, match="Invalid configuration JSON"):
            HydrationConfig.from_json("{not json")
