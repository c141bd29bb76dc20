"""Utility modules for the googlelogin application."""

from googlelogin.utils.logging import LogContext, get_logger, setup_logging
from googlelogin.utils.retry import RetryConfig, retry_async

__all__ = [
    # Logging
    "get_logger",
    "LogContext",
    "setup_logging",
    # Retry
    "retry_async",
    "RetryConfig",
]
