"""Utility modules for reconcile-fsm."""

from reconcile_fsm.utils.logging import (
    configure_logging,
    get_correlation_id,
    get_logger,
)
from reconcile_fsm.utils.result import (
    ConfigError,
    Err,
    ExitCode,
    Ok,
    Result,
    ResultError,
    first_err,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "get_correlation_id",
    # Result
    "Ok",
    "Err",
    "Result",
    "ResultError",
    "ConfigError",
    "ExitCode",
    "first_err",
]
