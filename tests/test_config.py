"""
Tests for configuration loading
===============================
"""

from reconcile_fsm.config import FsmConfig, LoggingConfig, load_config


class TestFsmConfig:
    """Configuration parsing and validation."""

    def test_defaults(self):
        config = load_config().unwrap()

        assert config.history_size == 64
        assert config.logging == LoggingConfig(level="info", format="json")

    def test_from_dict(self):
        config = FsmConfig.from_dict({
            "history_size": 5,
            "logging": {"level": "debug", "format": "text"},
        }).unwrap()

        assert config.history_size == 5
        assert config.logging.level == "debug"
        assert config.logging.format == "text"

    def test_from_dict_bad_value(self):
        result = FsmConfig.from_dict({"history_size": "lots"})
        assert result.unwrap_err().field == "unknown"

    def test_validate_history_size(self):
        result = FsmConfig(history_size=0).validate()
        assert result.unwrap_err().field == "history_size"

    def test_validate_logging(self):
        config = FsmConfig(logging=LoggingConfig(level="loud"))
        assert config.validate().unwrap_err().field == "logging.level"

        config = FsmConfig(logging=LoggingConfig(format="xml"))
        assert config.validate().unwrap_err().field == "logging.format"

    def test_load_from_yaml(self, tmp_path):
        path = tmp_path / "fsm.yaml"
        path.write_text("history_size: 8\nlogging:\n  level: warn\n")

        config = load_config(path).unwrap()

        assert config.history_size == 8
        assert config.logging.level == "warn"
        assert config.logging.format == "json"

    def test_load_empty_yaml_uses_defaults(self, tmp_path):
        path = tmp_path / "fsm.yaml"
        path.write_text("")

        assert load_config(path).unwrap() == FsmConfig()

    def test_load_invalid_values(self, tmp_path):
        path = tmp_path / "fsm.yaml"
        path.write_text("history_size: -1\n")

        assert load_config(path).unwrap_err().field == "history_size"

    def test_load_missing_file(self, tmp_path):
        assert load_config(tmp_path / "nope.yaml").unwrap_err().field == "path"
