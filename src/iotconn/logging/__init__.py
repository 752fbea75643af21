"""
iotconn Logging Module

Structured logging for the connection-string core and the CLI built on it.

Key Features:
- Single log file with daily rotation
- Cross-platform log directory detection
- Validation and resolution event logging
- Configurable log levels and formatting
"""

from .logger import (
    get_logger,
    setup_logging,
    log_validation_event,
    log_resolution_event,
)
from .config import LogConfig, LogLevel
from .utils import get_log_directory

__all__ = [
    "get_logger",
    "setup_logging",
    "log_validation_event",
    "log_resolution_event",
    "LogLevel",
    "LogConfig",
    "get_log_directory",
]
