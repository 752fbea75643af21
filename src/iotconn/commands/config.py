"""
Settings commands for iotconn.

Settings are stored in the user's settings.json (see ConfigStore) and
apply from the next iotconn command onwards.
"""

import typer

from iotconn.constants import REGEX_TIMEOUT_SECONDS
from iotconn.logging import LogLevel, get_logger
from iotconn.utils.config_store import ConfigStore
from iotconn.utils.console import error, info, success

app = typer.Typer(help="Manage iotconn settings")


@app.command("set-log-level")
def set_log_level(
    level: str = typer.Argument(..., help="Log level (DEBUG, INFO, WARNING, ERROR)")
) -> None:
    """Set the logging level for iotconn"""
    logger = get_logger("iotconn.config.log_level")

    level_upper = level.upper()
    valid_levels = [lev.value for lev in LogLevel]
    if level_upper not in valid_levels:
        error(f"Invalid log level '{level}'. Valid levels: {', '.join(valid_levels)}")
        raise typer.Exit(1)

    try:
        ConfigStore().set_setting("log_level", level_upper)
    except OSError as e:
        logger.error(f"Failed to set log level: {str(e)}")
        error(f"Failed to set log level: {str(e)}")
        raise typer.Exit(1)

    success(f"Log level set to {level_upper}")
    info("The new log level will take effect on the next iotconn command execution.")
    logger.info(f"Log level changed to {level_upper}")


@app.command("get-log-level")
def get_log_level() -> None:
    """Show the current logging level"""
    logger = get_logger("iotconn.config.log_level")

    current_level = ConfigStore().get_setting("log_level", LogLevel.INFO.value)
    info(f"Current log level: {current_level}")
    logger.debug(f"Retrieved current log level: {current_level}")


@app.command("set-regex-timeout")
def set_regex_timeout(
    milliseconds: int = typer.Argument(
        ..., help="Time allowed for a single pattern check, in milliseconds"
    )
) -> None:
    """Set the time limit for connection string pattern checks"""
    logger = get_logger("iotconn.config.regex_timeout")

    if milliseconds <= 0:
        error("The pattern timeout must be a positive number of milliseconds")
        raise typer.Exit(1)

    try:
        ConfigStore().set_setting("regex_timeout_ms", milliseconds)
    except OSError as e:
        logger.error(f"Failed to set pattern timeout: {str(e)}")
        error(f"Failed to set pattern timeout: {str(e)}")
        raise typer.Exit(1)

    success(f"Pattern timeout set to {milliseconds} ms")
    logger.info(f"Pattern timeout changed to {milliseconds} ms")


@app.command("show")
def show() -> None:
    """Show the current settings"""
    store = ConfigStore()
    level = store.get_setting("log_level", LogLevel.INFO.value)
    timeout_ms = store.get_setting(
        "regex_timeout_ms", int(REGEX_TIMEOUT_SECONDS * 1000)
    )
    info(f"Settings file: {store.settings_file}")
    info(f"Log level: {level}")
    info(f"Pattern timeout: {timeout_ms} ms")
