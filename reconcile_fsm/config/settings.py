"""Centralized configuration for reconcile-fsm.

Configuration can be loaded from a YAML file and is validated before use.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from reconcile_fsm.machine.machine import DEFAULT_HISTORY_SIZE
from reconcile_fsm.utils.result import ConfigError, Err, Ok, Result

LOG_LEVELS = ("debug", "info", "warn", "warning", "error")
LOG_FORMATS = ("json", "text")


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "info"
    format: str = "json"


@dataclass
class FsmConfig:
    """Complete configuration."""

    history_size: int = DEFAULT_HISTORY_SIZE
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> Result["FsmConfig", ConfigError]:
        """
        Load configuration from a YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Result with loaded config or error
        """
        path = Path(path)

        if not path.exists():
            return Err(ConfigError(
                field="path",
                message=f"Configuration file not found: {path}",
            ))

        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            return Err(ConfigError(
                field="yaml",
                message=f"Failed to parse YAML: {e}",
            ))
        except OSError as e:
            return Err(ConfigError(
                field="file",
                message=f"Failed to read config file: {e}",
            ))

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Result["FsmConfig", ConfigError]:
        """
        Create configuration from a dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            Result with loaded config or error
        """
        if not isinstance(data, dict):
            return Err(ConfigError(
                field="document",
                message="Configuration must be a mapping",
            ))

        try:
            logging_data = data.get("logging") or {}
            logging_config = LoggingConfig(
                level=str(logging_data.get("level", "info")),
                format=str(logging_data.get("format", "json")),
            )

            config = cls(
                history_size=int(data.get("history_size", DEFAULT_HISTORY_SIZE)),
                logging=logging_config,
            )
        except (AttributeError, TypeError, ValueError) as e:
            return Err(ConfigError(
                field="unknown",
                message=f"Failed to parse configuration: {e}",
            ))

        return Ok(config)

    def validate(self) -> Result[None, ConfigError]:
        """
        Validate configuration values.

        Returns:
            Result indicating success or validation error
        """
        if self.history_size < 1:
            return Err(ConfigError(
                field="history_size",
                message=f"Must be at least 1, got {self.history_size}",
            ))

        if self.logging.level.lower() not in LOG_LEVELS:
            return Err(ConfigError(
                field="logging.level",
                message=f"Must be one of {', '.join(LOG_LEVELS)}, got {self.logging.level}",
            ))

        if self.logging.format not in LOG_FORMATS:
            return Err(ConfigError(
                field="logging.format",
                message=f"Must be one of {', '.join(LOG_FORMATS)}, got {self.logging.format}",
            ))

        return Ok(None)


def load_config(path: Optional[Path] = None) -> Result[FsmConfig, ConfigError]:
    """
    Load and validate configuration.

    Defaults are used when no path is given.

    Args:
        path: Path to a YAML configuration file

    Returns:
        Result with loaded config or error
    """
    if path is None:
        config = FsmConfig()
    else:
        result = FsmConfig.from_yaml(path)
        if result.is_err():
            return result
        config = result.unwrap()

    validation_result = config.validate()
    if validation_result.is_err():
        return Err(validation_result.unwrap_err())

    return Ok(config)
