"""Observability module for structured logging."""

from .logging import (
    EventContextManager,
    get_logger,
    log_external_call_end,
    log_external_call_start,
    owner_var,
    secret_name_var,
    secret_namespace_var,
    setup_logging,
)

__all__ = [
    # Setup
    "setup_logging",
    "get_logger",
    # Context
    "EventContextManager",
    "secret_name_var",
    "secret_namespace_var",
    "owner_var",
    # Logging helpers
    "log_external_call_start",
    "log_external_call_end",
]
