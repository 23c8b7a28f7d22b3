"""Configuration module for reconcile-fsm."""

from reconcile_fsm.config.settings import FsmConfig, LoggingConfig, load_config

__all__ = ["FsmConfig", "LoggingConfig", "load_config"]
