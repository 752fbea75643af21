"""
Helpers shared by the iotconn commands.
"""

from typing import Optional

from iotconn.auth.methods import AuthenticationMethod
from iotconn.connection_string import ConnectionDescriptor, FieldValidator
from iotconn.logging import get_logger
from iotconn.utils.config_store import ConfigStore
from iotconn.utils.console import console, create_property_table, mask_secret, show_value

logger = get_logger("iotconn.commands.shared")


def get_validator(config_store: Optional[ConfigStore] = None) -> FieldValidator:
    """Build a FieldValidator using the saved pattern timeout, if any"""
    store = config_store or ConfigStore()
    timeout_ms = store.get_setting("regex_timeout_ms")
    if timeout_ms:
        try:
            return FieldValidator(timeout=int(timeout_ms) / 1000)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring invalid regex_timeout_ms setting: {timeout_ms!r}")
    return FieldValidator()


def describe_method(method: Optional[AuthenticationMethod]) -> str:
    """Name the method and the identities it carries, without secrets"""
    if method is None:
        return "-"
    parts = [type(method).__name__]
    for attribute in ("device_id", "module_id", "policy_name"):
        value = getattr(method, attribute, None)
        if value:
            parts.append(f"{attribute}={value}")
    return " ".join(parts)


def display_descriptor(descriptor: ConnectionDescriptor) -> None:
    """Show a descriptor as a table; key and signature are only marked as set"""
    table = create_property_table(
        f"{descriptor.dialect.value.capitalize()} connection string"
    )

    table.add_row("HostName", show_value(descriptor.host_name))
    table.add_row("ServiceName", show_value(descriptor.service_name))
    table.add_row("SharedAccessKeyName", show_value(descriptor.shared_access_key_name))
    table.add_row("SharedAccessKey", mask_secret(descriptor.shared_access_key))
    table.add_row("SharedAccessSignature", mask_secret(descriptor.shared_access_signature))
    if descriptor.device_id or descriptor.module_id or descriptor.using_x509:
        table.add_row("DeviceId", show_value(descriptor.device_id))
        table.add_row("ModuleId", show_value(descriptor.module_id))
        table.add_row("GatewayHostName", show_value(descriptor.gateway_host_name))
        table.add_row("x509", "true" if descriptor.using_x509 else "false")
    table.add_row("Authentication", describe_method(descriptor.authentication_method))

    console.print(table)
