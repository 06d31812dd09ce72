"""Configuration for XML object hydration.

The configuration is an immutable dataclass so a single instance can be shared
between concurrent hydration calls.
"""

import difflib
import json
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, List, Optional

_VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]
_VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class HydrationConfig:
    """Settings that control how documents are mapped onto objects.

    Attributes:
        value_attribute: Attribute name that carries a node's primary value and
            therefore maps onto the bare node name instead of a composite key.
        enable_diagnostics: Record non-fatal conditions on the result set.
        diagnostic_level: Minimum severity a diagnostic needs to be recorded.
        strict_structure: Raise instead of recording a diagnostic when a field
            rule matches a node that is not a scalar leaf.
        strip_text: Strip surrounding whitespace from leaf values before they
            are passed to setters.
        logging_level: Level applied to the package logger by the CLI.
        correlation_id: Default correlation ID for log records and diagnostics.
    """

    value_attribute: str = "v"
    enable_diagnostics: bool = True
    diagnostic_level: str = "DEBUG"
    strict_structure: bool = False
    strip_text: bool = False
    logging_level: str = "INFO"
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate hydration configuration."""
        if not self.value_attribute:
            raise ConfigValidationError(
                "value_attribute cannot be empty", field_name="value_attribute"
            )
        if self.diagnostic_level not in _VALID_LEVELS:
            raise ConfigValidationError(
                f"diagnostic_level must be one of {_VALID_LEVELS}",
                field_name="diagnostic_level",
                suggestions=difflib.get_close_matches(
                    str(self.diagnostic_level).upper(), _VALID_LEVELS
                ),
            )
        if self.logging_level not in _VALID_LOGGING_LEVELS:
            raise ConfigValidationError(
                f"logging_level must be one of {_VALID_LOGGING_LEVELS}",
                field_name="logging_level",
                suggestions=difflib.get_close_matches(
                    str(self.logging_level).upper(), _VALID_LOGGING_LEVELS
                ),
            )

    @classmethod
    def strict(cls) -> "HydrationConfig":
        """Create configuration that fails loudly on structural mismatches."""
        return cls(strict_structure=True, diagnostic_level="DEBUG")

    @classmethod
    def lenient(cls) -> "HydrationConfig":
        """Create configuration that strips values and only keeps warnings."""
        return cls(strip_text=True, diagnostic_level="WARNING")

    def override(self, **kwargs: Any) -> "HydrationConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = HydrationConfig().override(strip_text=True)
            >>> config.strip_text
            True
        """
        self._check_field_names(kwargs)
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HydrationConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so that typos do not silently fall back to
        defaults.
        """
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration data must be a mapping")
        cls._check_field_names(data)
        return cls(**data)

    @classmethod
    def from_json(cls, json_str: str) -> "HydrationConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def _check_field_names(cls, data: Dict[str, Any]) -> None:
        known = [f.name for f in fields(cls)]
        for key in data:
            if key not in known:
                raise ConfigValidationError(
                    f"Unknown configuration field: {key!r}",
                    field_name=key,
                    suggestions=difflib.get_close_matches(key, known),
                )
