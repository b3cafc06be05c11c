"""Core services and utilities for Searchable."""

from .exceptions import (
    JoinConfigurationError,
    SchemaIntrospectionError,
    SearchConfigurationError,
)
from .logging import LogContext, get_logger, setup_logging

__all__ = [
    # Exceptions
    "JoinConfigurationError",
    "SchemaIntrospectionError",
    "SearchConfigurationError",
    # Logging
    "LogContext",
    "get_logger",
    "setup_logging",
]
