"""
Connection string inspection command.
"""

import typer

from iotconn.connection_string import ConnectionDescriptor, Dialect
from iotconn.exceptions import ConnectionStringError
from iotconn.logging import get_logger
from iotconn.utils.console import rejected, success
from .shared import display_descriptor, get_validator


def parse_connection_string(
    connection_string: str = typer.Argument(..., help="Connection string to validate"),
    dialect: Dialect = typer.Option(
        Dialect.SERVICE,
        "--dialect",
        help="Connection string dialect: service (default) or device",
        case_sensitive=False,
    ),
) -> None:
    """Validate a connection string and show its properties"""
    logger = get_logger("iotconn.commands.inspect")

    try:
        descriptor = ConnectionDescriptor.parse(
            connection_string, dialect, validator=get_validator()
        )
    except ConnectionStringError as e:
        logger.error(f"Connection string rejected: {type(e).__name__}")
        rejected(e)
        raise typer.Exit(1)

    display_descriptor(descriptor)
    success(f"Valid {dialect.value} connection string")
