"""
Configuration management for splinepath.

This module provides:
- SplineConfig: Typed configuration dataclass
- ConfigManager: Central configuration management with environment support
- create_default_config: Factory function for the default configuration
- load_config: Load configuration from YAML files
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from splinepath.exceptions import ConfigNotFoundError, ConfigValidationError


# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class EvaluationConfig:
    """Curve evaluation settings.

    Attributes:
        subdivisions: Samples per topological segment for the precise
            arc-length table.
        lookahead: Forward-difference step used by ``get_direction``.
    """

    subdivisions: int = 16
    lookahead: float = 0.001

    def validate(self) -> None:
        """Validate evaluation configuration."""
        if self.subdivisions < 1:
            raise ConfigValidationError(
                "evaluation.subdivisions", "must be >= 1", self.subdivisions
            )
        if self.lookahead <= 0 or self.lookahead >= 1:
            raise ConfigValidationError(
                "evaluation.lookahead", "must be in (0, 1)", self.lookahead
            )


@dataclass
class HostConfig:
    """Defaults for a freshly created MultiSpline host."""

    tension: float = 0.0
    looped: bool = False

    def validate(self) -> None:
        """Validate host configuration."""
        if self.tension < -2 or self.tension > 2:
            raise ConfigValidationError("host.tension", "must be in [-2, 2]", self.tension)


def _as_bool(key: str, value: Any) -> bool:
    """Read a flag that may arrive as text, such as a quoted YAML scalar."""
    if isinstance(value, str):
        value = ConfigManager._parse_value(value)
    if not isinstance(value, (bool, int)):
        raise ConfigValidationError(key, "must be a boolean", value)
    return bool(value)


@dataclass
class SplineConfig:
    """Complete splinepath configuration."""

    evaluation: EvaluationConfig = field(default_factory=EvaluationConfig)
    host: HostConfig = field(default_factory=HostConfig)

    def validate(self) -> None:
        """Validate all configuration settings."""
        self.evaluation.validate()
        self.host.validate()

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return {
            "evaluation": {
                "subdivisions": self.evaluation.subdivisions,
                "lookahead": self.evaluation.lookahead,
            },
            "host": {
                "tension": self.host.tension,
                "looped": self.host.looped,
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SplineConfig":
        """Create SplineConfig from dictionary."""
        evaluation_data = data.get("evaluation", {})
        host_data = data.get("host", {})

        return cls(
            evaluation=EvaluationConfig(
                subdivisions=int(evaluation_data.get("subdivisions", 16)),
                lookahead=float(evaluation_data.get("lookahead", 0.001)),
            ),
            host=HostConfig(
                tension=float(host_data.get("tension", 0.0)),
                looped=_as_bool("host.looped", host_data.get("looped", False)),
            ),
        )


# =============================================================================
# Configuration Manager
# =============================================================================


class ConfigManager:
    """Central configuration management with environment variable support.

    Environment variables take precedence over config files.
    Config files take precedence over defaults.

    Environment variable format: SPLINEPATH_<SECTION>_<KEY>
    Example: SPLINEPATH_EVALUATION_SUBDIVISIONS=32
    """

    ENV_PREFIX = "SPLINEPATH"
    # Logging variables share the prefix but are read by splinepath.logging
    ENV_IGNORED = ("LOG",)

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """Initialize configuration manager.

        Args:
            config_path: Optional path to YAML configuration file.
        """
        self._config: Optional[SplineConfig] = None
        self._config_path = Path(config_path) if config_path else None
        self._raw_config: Dict[str, Any] = {}

    def load(self, validate: bool = True) -> SplineConfig:
        """Load and return configuration.

        Args:
            validate: Whether to validate configuration after loading.
        """
        self._raw_config = create_default_config()

        if self._config_path:
            self._load_from_file(self._config_path)

        self._load_from_env()

        self._config = SplineConfig.from_dict(self._raw_config)

        if validate:
            self._config.validate()

        return self._config

    def _load_from_file(self, path: Path) -> None:
        """Load configuration from YAML file."""
        if not path.exists():
            raise ConfigNotFoundError(str(path))

        with open(path, "r") as f:
            file_config = yaml.safe_load(f)

        if file_config:
            self._deep_update(self._raw_config, file_config)

    def _load_from_env(self) -> None:
        """Load configuration from environment variables."""
        for key, value in os.environ.items():
            if not key.startswith(f"{self.ENV_PREFIX}_"):
                continue
            config_key = key[len(self.ENV_PREFIX) + 1 :]
            if config_key.split("_", 1)[0] in self.ENV_IGNORED:
                continue
            self._set_nested_value(config_key.lower(), value)

    def _set_nested_value(self, key: str, value: str) -> None:
        """Set a nested configuration value from environment variable."""
        parts = key.split("_")
        target = self._raw_config

        for part in parts[:-1]:
            if part not in target or not isinstance(target[part], dict):
                target[part] = {}
            target = target[part]

        target[parts[-1]] = self._parse_value(value)

    @staticmethod
    def _parse_value(value: str) -> Any:
        """Parse string value to appropriate Python type."""
        if value.lower() in ("true", "yes"):
            return True
        if value.lower() in ("false", "no"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    @staticmethod
    def _deep_update(base: dict, update: dict) -> dict:
        """Deep merge update into base dictionary."""
        for key, value in update.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                ConfigManager._deep_update(base[key], value)
            else:
                base[key] = value
        return base

    @property
    def config(self) -> SplineConfig:
        """Get current configuration (loads if not already loaded)."""
        if self._config is None:
            self.load()
        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by dotted key path.

        Args:
            key: Dotted key path (e.g., "evaluation.subdivisions").
            default: Default value if key not found.
        """
        parts = key.split(".")
        value = self._raw_config

        for part in parts:
            if isinstance(value, dict) and part in value:
                value = value[part]
            else:
                return default

        return value


# =============================================================================
# Factory Functions
# =============================================================================


def create_default_config() -> Dict[str, Any]:
    """Create default configuration dictionary."""
    return SplineConfig().to_dict()


def load_config(path: Union[str, Path], validate: bool = True) -> Dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        path: Path to YAML configuration file.
        validate: Whether to validate configuration.

    Returns:
        Configuration dictionary.
    """
    manager = ConfigManager(path)
    config = manager.load(validate=validate)
    return config.to_dict()


_global_config: Optional[ConfigManager] = None


def get_config() -> ConfigManager:
    """Get global configuration manager instance."""
    global _global_config
    if _global_config is None:
        _global_config = ConfigManager()
    return _global_config


def init_config(path: Optional[Union[str, Path]] = None) -> ConfigManager:
    """Initialize global configuration from file.

    Args:
        path: Optional path to configuration file.

    Returns:
        Initialized ConfigManager instance.
    """
    global _global_config
    _global_config = ConfigManager(path)
    _global_config.load()
    return _global_config


def reset_config() -> None:
    """Drop the global configuration so the next access reloads defaults."""
    global _global_config
    _global_config = None
