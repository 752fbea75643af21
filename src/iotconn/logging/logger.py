"""
Main logging module for iotconn.

This module provides the logging interface used by the core and the CLI:
logger setup with daily rotation, a logger registry, and helpers for
validation and resolution events.
"""

import logging
import logging.handlers
import sys
from typing import Optional, Dict, Any

from . import config as log_config
from .config import LogConfig, LogLevel
from .formatters import IotConnFormatter
from .utils import cleanup_old_logs


ROOT_LOGGER_NAME = "iotconn"

# Global logger registry
_loggers: Dict[str, logging.Logger] = {}
_logging_configured = False
_log_config: Optional[LogConfig] = None


def _configured_level(config: LogConfig) -> LogConfig:
    """Apply the log level saved in the settings store, if any."""
    from iotconn.utils.config_store import ConfigStore

    try:
        user_level = ConfigStore().get_setting("log_level")
    except OSError:
        return config

    if user_level and user_level in [lev.value for lev in LogLevel]:
        config.default_level = LogLevel(user_level)
    return config


def setup_logging(config: Optional[LogConfig] = None, force_reconfigure: bool = False) -> None:
    """
    Set up the iotconn logging system.

    Library modules only ever call get_logger(); handlers are attached
    here, by the CLI entry point or by an embedding application.

    Args:
        config: LogConfig instance, uses default if None
        force_reconfigure: Force reconfiguration even if already set up
    """
    global _logging_configured, _log_config

    if _logging_configured and not force_reconfigure:
        return

    if config is None:
        config = _configured_level(LogConfig())

    _log_config = config

    log_file_path = log_config.get_log_file_path(config)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(getattr(logging, config.default_level.value))
    root_logger.handlers.clear()

    file_handler = logging.handlers.TimedRotatingFileHandler(
        filename=log_file_path,
        when="midnight",
        interval=1,
        backupCount=config.log_retention_days,
        encoding="utf-8",
        utc=False,
    )
    file_handler.setLevel(getattr(logging, config.default_level.value))
    file_handler.suffix = "%Y-%m-%d"
    file_handler.setFormatter(
        IotConnFormatter(
            include_timestamps=config.include_timestamps,
            include_thread_info=config.include_thread_info,
            include_process_info=config.include_process_info,
        )
    )
    root_logger.addHandler(file_handler)

    if config.console_level != LogLevel.ERROR or config.default_level == LogLevel.DEBUG:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, config.console_level.value))
        console_handler.setFormatter(IotConnFormatter(include_timestamps=False))
        root_logger.addHandler(console_handler)

    root_logger.propagate = False

    try:
        cleanup_old_logs(log_file_path.parent, config.log_retention_days)
    except OSError:
        # Setup must not fail because of stale files
        pass

    _logging_configured = True

    get_logger("iotconn.setup").info(
        f"Logging initialized - File: {log_file_path}, "
        f"Level: {config.default_level.value}"
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified name.

    Args:
        name: Logger name (e.g., 'iotconn.connection_string.grammar')

    Returns:
        logging.Logger: Logger instance
    """
    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)

    return _loggers[name]


def log_validation_event(
    kind: str,
    success: bool,
    details: Optional[Dict[str, Any]] = None,
    logger_name: str = "iotconn.validation",
) -> None:
    """
    Log the outcome of validating a descriptor or parameter set.

    Args:
        kind: What was validated (e.g. 'service descriptor', 'device parameters')
        success: Whether validation passed
        details: Field or rule names involved; never credential values
        logger_name: Logger name to use
    """
    logger = get_logger(logger_name)
    extra = {
        "validation_kind": kind,
        "validation_success": success,
    }

    if details:
        extra["validation_details"] = details

    if success:
        logger.debug(f"Validation passed: {kind}", extra=extra)
    else:
        logger.warning(f"Validation failed: {kind}", extra=extra)


def log_resolution_event(
    method: str,
    details: Optional[Dict[str, Any]] = None,
    logger_name: str = "iotconn.auth",
) -> None:
    """
    Log which authentication method was resolved.

    Args:
        method: Variant name (e.g. 'DeviceSymmetricKey')
        details: Additional non-secret details such as the device id
        logger_name: Logger name to use
    """
    logger = get_logger(logger_name)
    extra = {"resolved_method": method}

    if details:
        extra["resolution_details"] = details

    logger.debug(f"Resolved authentication method: {method}", extra=extra)
