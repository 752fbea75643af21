"""
Device sample parameters.

The loader that gathers these strings (command line or environment) lives
outside the core; this module only checks that the selected security type
comes with the inputs it needs and turns them into an authentication method.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from iotconn.auth.methods import AuthenticationMethod, DeviceSymmetricKey
from iotconn.connection_string import ConnectionDescriptor, Dialect
from iotconn.connection_string.fields import is_blank
from iotconn.constants import SECURITY_TYPE_CONNECTION_STRING, SECURITY_TYPE_DPS
from iotconn.exceptions import MissingRequiredFieldError, UnrecognizedSecurityTypeError
from iotconn.logging import get_logger, log_validation_event

logger = get_logger("iotconn.parameters")


class SecurityType(Enum):
    """How the device obtains its hub credentials."""

    DPS = SECURITY_TYPE_DPS
    CONNECTION_STRING = SECURITY_TYPE_CONNECTION_STRING


@dataclass
class DeviceParameters:
    """Raw inputs for a device client, as gathered by the caller."""

    device_security_type: Optional[str] = None
    primary_connection_string: Optional[str] = None
    dps_endpoint: Optional[str] = None
    dps_id_scope: Optional[str] = None
    device_id: Optional[str] = None
    device_symmetric_key: Optional[str] = None

    def validate(self) -> SecurityType:
        """
        Check the security type and the inputs it requires.

        Returns:
            The selected SecurityType

        Raises:
            MissingRequiredFieldError: The selector or a required input is blank
            UnrecognizedSecurityTypeError: The selector is neither dps nor connectionString
        """
        try:
            security_type = self._validate()
        except (MissingRequiredFieldError, UnrecognizedSecurityTypeError) as e:
            log_validation_event("device parameters", False, {"error": type(e).__name__})
            raise

        log_validation_event(
            "device parameters", True, {"security_type": security_type.value}
        )
        return security_type

    def _validate(self) -> SecurityType:
        if is_blank(self.device_security_type):
            raise MissingRequiredFieldError(
                "DeviceSecurityType",
                "Device provisioning type needs to be specified, please set the "
                'environment variable "IOTHUB_DEVICE_SECURITY_TYPE" or pass in '
                '"-s | --security-type" through command line.',
            )

        selected = self.device_security_type.strip().lower()
        if selected == SecurityType.DPS.value:
            required = (
                ("DpsEndpoint", self.dps_endpoint),
                ("DpsIdScope", self.dps_id_scope),
                ("DeviceId", self.device_id),
                ("DeviceSymmetricKey", self.device_symmetric_key),
            )
            for name, value in required:
                if is_blank(value):
                    raise MissingRequiredFieldError(
                        name, f"{name} is required when the security type is dps"
                    )
            return SecurityType.DPS

        if selected == SecurityType.CONNECTION_STRING.value:
            if is_blank(self.primary_connection_string):
                raise MissingRequiredFieldError(
                    "PrimaryConnectionString",
                    "PrimaryConnectionString is required when the security type "
                    "is connectionString",
                )
            return SecurityType.CONNECTION_STRING

        raise UnrecognizedSecurityTypeError(self.device_security_type)

    def select(self) -> Tuple[SecurityType, AuthenticationMethod]:
        """
        Validate once, then produce the security type and the method the
        device client should use.

        For connectionString the device connection string is parsed and its
        method returned. For dps the device authenticates with its symmetric
        key; the provisioning exchange itself is not performed here.
        """
        security_type = self.validate()
        return security_type, self._method_for(security_type)

    def resolve_authentication_method(self) -> AuthenticationMethod:
        """Validate, then produce the method the device client should use."""
        _, method = self.select()
        return method

    def _method_for(self, security_type: SecurityType) -> AuthenticationMethod:
        if security_type is SecurityType.CONNECTION_STRING:
            descriptor = ConnectionDescriptor.parse(
                self.primary_connection_string, Dialect.DEVICE
            )
            return descriptor.authentication_method

        logger.debug(f"Using provisioning symmetric key for device {self.device_id}")
        return DeviceSymmetricKey(self.device_id, self.device_symmetric_key)
