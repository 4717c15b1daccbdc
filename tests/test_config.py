"""
Tests for configuration management.
"""

from __future__ import annotations

import pytest

from splinepath.config import (
    SplineConfig,
    EvaluationConfig,
    HostConfig,
    ConfigManager,
    create_default_config,
    load_config,
    get_config,
    init_config,
)
from splinepath.exceptions import ConfigValidationError, ConfigNotFoundError


class TestCreateDefaultConfig:
    """Tests for create_default_config function."""

    def test_default_subdivisions(self):
        """Default subdivisions should be 16."""
        config = create_default_config()
        assert config["evaluation"]["subdivisions"] == 16

    def test_default_lookahead(self):
        """Default lookahead should be 0.001."""
        config = create_default_config()
        assert config["evaluation"]["lookahead"] == 0.001

    def test_default_host(self):
        """Default host should be an open Catmull-Rom."""
        config = create_default_config()
        assert config["host"]["tension"] == 0.0
        assert config["host"]["looped"] is False


class TestSplineConfig:
    """Tests for SplineConfig dataclass."""

    def test_default_values(self, default_config):
        """Default values should be set correctly."""
        assert default_config.evaluation.subdivisions == 16
        assert default_config.evaluation.lookahead == 0.001
        assert default_config.host.tension == 0.0

    def test_to_dict(self, default_config):
        """Config should convert to dictionary."""
        d = default_config.to_dict()
        assert "evaluation" in d
        assert "host" in d
        assert set(d["evaluation"]) == {"subdivisions", "lookahead"}

    def test_from_dict(self):
        """Config should be created from dictionary."""
        data = {
            "evaluation": {"subdivisions": 32, "lookahead": 0.005},
            "host": {"looped": True},
        }
        config = SplineConfig.from_dict(data)
        assert config.evaluation.subdivisions == 32
        assert config.evaluation.lookahead == 0.005
        assert config.host.looped is True

    @pytest.mark.parametrize("raw,expected", [("false", False), ("no", False), ("true", True), ("yes", True)])
    def test_from_dict_text_flag(self, raw, expected):
        """Text flags should be read as booleans, not by truthiness."""
        config = SplineConfig.from_dict({"host": {"looped": raw}})
        assert config.host.looped is expected

    def test_from_dict_bad_flag(self):
        """Text that is not a flag should fail validation."""
        with pytest.raises(ConfigValidationError) as exc_info:
            SplineConfig.from_dict({"host": {"looped": "sometimes"}})
        assert "host.looped" in str(exc_info.value)

    def test_validate_valid_config(self, default_config):
        """Valid config should pass validation."""
        default_config.validate()


class TestConfigValidation:
    """Tests for section validation."""

    def test_invalid_subdivisions(self):
        """Zero subdivisions should fail validation."""
        with pytest.raises(ConfigValidationError) as exc_info:
            EvaluationConfig(subdivisions=0).validate()
        assert "subdivisions" in str(exc_info.value)

    @pytest.mark.parametrize("lookahead", [0.0, -0.1, 1.0])
    def test_invalid_lookahead(self, lookahead):
        """Lookahead outside (0, 1) should fail validation."""
        with pytest.raises(ConfigValidationError):
            EvaluationConfig(lookahead=lookahead).validate()

    def test_invalid_tension(self):
        """Tension outside [-2, 2] should fail validation."""
        with pytest.raises(ConfigValidationError):
            HostConfig(tension=3.0).validate()


class TestConfigManager:
    """Tests for ConfigManager class."""

    def test_load_defaults(self):
        """Manager should load defaults without a file."""
        manager = ConfigManager()
        config = manager.load()
        assert config.evaluation.subdivisions == 16

    def test_load_from_file(self, temp_config_file):
        """Manager should load from YAML file."""
        manager = ConfigManager(temp_config_file)
        config = manager.load()
        assert config.evaluation.subdivisions == 4
        assert config.evaluation.lookahead == 0.01
        assert config.host.tension == 0.5

    def test_file_keeps_unlisted_defaults(self, temp_config_file):
        """Keys missing from the file should keep their defaults."""
        config = ConfigManager(temp_config_file).load()
        assert config.evaluation.lookahead == 0.01
        assert config.host.looped is False

    def test_missing_file_raises(self, tmp_path):
        """Missing config file should raise ConfigNotFoundError."""
        manager = ConfigManager(tmp_path / "nonexistent.yml")
        with pytest.raises(ConfigNotFoundError):
            manager.load()

    def test_invalid_file_raises(self, tmp_path):
        """Invalid values from a file should fail validation."""
        path = tmp_path / "bad.yml"
        path.write_text("evaluation:\n  subdivisions: 0\n")
        with pytest.raises(ConfigValidationError):
            ConfigManager(path).load()

    def test_quoted_flag_in_file(self, tmp_path):
        """A quoted "false" in YAML should leave the host open."""
        path = tmp_path / "quoted.yml"
        path.write_text('host:\n  looped: "false"\n')
        config = ConfigManager(path).load()
        assert config.host.looped is False

    def test_invalid_file_without_validation(self, tmp_path):
        """Validation can be skipped."""
        path = tmp_path / "bad.yml"
        path.write_text("evaluation:\n  subdivisions: 0\n")
        config = ConfigManager(path).load(validate=False)
        assert config.evaluation.subdivisions == 0

    def test_get_dotted_key(self, temp_config_file):
        """Should get values by dotted key path."""
        manager = ConfigManager(temp_config_file)
        manager.load()
        assert manager.get("evaluation.subdivisions") == 4
        assert manager.get("host.tension") == 0.5

    def test_get_default_value(self):
        """Should return default for missing keys."""
        manager = ConfigManager()
        manager.load()
        assert manager.get("nonexistent.key", "default") == "default"

    def test_config_property_loads_lazily(self):
        """Accessing config should load it."""
        manager = ConfigManager()
        assert manager.config.evaluation.lookahead == 0.001


class TestEnvironmentOverrides:
    """Tests for SPLINEPATH_<SECTION>_<KEY> variables."""

    def test_env_overrides_default(self, monkeypatch):
        """Environment variable should override the default."""
        monkeypatch.setenv("SPLINEPATH_EVALUATION_SUBDIVISIONS", "32")
        config = ConfigManager().load()
        assert config.evaluation.subdivisions == 32

    def test_env_overrides_file(self, monkeypatch, temp_config_file):
        """Environment variable should take precedence over the file."""
        monkeypatch.setenv("SPLINEPATH_HOST_TENSION", "-0.5")
        config = ConfigManager(temp_config_file).load()
        assert config.host.tension == -0.5

    def test_env_bool(self, monkeypatch):
        """Boolean words should parse to booleans."""
        monkeypatch.setenv("SPLINEPATH_HOST_LOOPED", "yes")
        config = ConfigManager().load()
        assert config.host.looped is True

    def test_logging_variables_ignored(self, monkeypatch):
        """Logging variables should not leak into the config tree."""
        monkeypatch.setenv("SPLINEPATH_LOG_LEVEL", "DEBUG")
        manager = ConfigManager()
        manager.load()
        assert manager.get("log") is None

    @pytest.mark.parametrize(
        "raw,expected",
        [("true", True), ("No", False), ("7", 7), ("0.25", 0.25), ("abc", "abc")],
    )
    def test_parse_value(self, raw, expected):
        """Values should parse into the narrowest type."""
        assert ConfigManager._parse_value(raw) == expected


class TestLoadConfig:
    """Tests for load_config function."""

    def test_load_config_returns_dict(self, temp_config_file):
        """load_config should return a dictionary."""
        config = load_config(temp_config_file)
        assert isinstance(config, dict)
        assert config["evaluation"]["subdivisions"] == 4


class TestGlobalConfig:
    """Tests for the process-wide configuration."""

    def test_get_config_is_shared(self):
        """get_config should return the same manager until reset."""
        assert get_config() is get_config()

    def test_init_config_applies_to_new_curves(self, temp_config_file):
        """Curves created after init_config should pick up its settings."""
        from splinepath import CSpline

        init_config(temp_config_file)
        spline = CSpline()
        assert spline.subdivisions == 4

    def test_explicit_argument_wins(self, temp_config_file):
        """Constructor arguments should win over configuration."""
        from splinepath import CSpline

        init_config(temp_config_file)
        assert CSpline(subdivisions=10).subdivisions == 10

    def test_host_defaults_from_config(self, temp_config_file):
        """New hosts should take their tension from configuration."""
        from splinepath import MultiSpline

        init_config(temp_config_file)
        assert MultiSpline().tension == 0.5
