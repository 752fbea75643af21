"""
Device parameter check command.

Options fall back to the IOTHUB_DEVICE_* environment variables, the same
ones the device samples read.
"""

from typing import Optional

import typer

from iotconn.constants import (
    ENV_DEVICE_SECURITY_TYPE,
    ENV_DEVICE_CONNECTION_STRING,
    ENV_DPS_ENDPOINT,
    ENV_DPS_ID_SCOPE,
    ENV_DPS_DEVICE_ID,
    ENV_DPS_DEVICE_KEY,
)
from iotconn.exceptions import ConnectionStringError
from iotconn.logging import get_logger
from iotconn.parameters import DeviceParameters
from iotconn.utils.console import info, rejected, success
from .shared import describe_method


def check_params(
    security_type: Optional[str] = typer.Option(
        None,
        "--security-type",
        "-s",
        envvar=ENV_DEVICE_SECURITY_TYPE,
        help="dps or connectionString (case-insensitive)",
    ),
    connection_string: Optional[str] = typer.Option(
        None,
        "--connection-string",
        "-p",
        envvar=ENV_DEVICE_CONNECTION_STRING,
        help="Device connection string (security type connectionString)",
    ),
    dps_endpoint: Optional[str] = typer.Option(
        None, "--dps-endpoint", "-e", envvar=ENV_DPS_ENDPOINT, help="DPS endpoint"
    ),
    dps_id_scope: Optional[str] = typer.Option(
        None, "--dps-id-scope", "-i", envvar=ENV_DPS_ID_SCOPE, help="DPS ID scope"
    ),
    device_id: Optional[str] = typer.Option(
        None, "--device-id", "-d", envvar=ENV_DPS_DEVICE_ID, help="Device registration id"
    ),
    device_key: Optional[str] = typer.Option(
        None,
        "--device-key",
        "-k",
        envvar=ENV_DPS_DEVICE_KEY,
        help="Device symmetric key used for provisioning",
    ),
) -> None:
    """Check device parameters and show the authentication method they select"""
    logger = get_logger("iotconn.commands.params")

    parameters = DeviceParameters(
        device_security_type=security_type,
        primary_connection_string=connection_string,
        dps_endpoint=dps_endpoint,
        dps_id_scope=dps_id_scope,
        device_id=device_id,
        device_symmetric_key=device_key,
    )

    try:
        selected, method = parameters.select()
    except ConnectionStringError as e:
        logger.error(f"Device parameters rejected: {type(e).__name__}")
        rejected(e)
        raise typer.Exit(1)

    success(f"Security type: {selected.value}")
    info(f"Authentication method: {describe_method(method)}")
