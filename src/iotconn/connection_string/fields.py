"""
Field identifiers, dialects and the shared credential field set.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from iotconn.constants import HOST_NAME_SEPARATOR


class Field(str, Enum):
    """Property names as they appear in a connection string."""

    HOST_NAME = "HostName"
    SHARED_ACCESS_KEY_NAME = "SharedAccessKeyName"
    SHARED_ACCESS_KEY = "SharedAccessKey"
    SHARED_ACCESS_SIGNATURE = "SharedAccessSignature"
    DEVICE_ID = "DeviceId"
    MODULE_ID = "ModuleId"
    GATEWAY_HOST_NAME = "GatewayHostName"
    X509 = "x509"

    def __str__(self) -> str:
        return self.value


class Dialect(str, Enum):
    """Which client a connection string is written for."""

    SERVICE = "service"
    DEVICE = "device"

    def __str__(self) -> str:
        return self.value


class ConsistencyRule(str, Enum):
    """Cross-field rules; the value is reported in InconsistentCredentialError.rule"""

    SHARED_ACCESS_KEY_NAME_REQUIRED = "sharedAccessKeyNameRequired"
    KEY_OR_SIGNATURE_REQUIRED = "sharedAccessKeyOrSignatureRequired"
    X509_EXCLUDES_SHARED_ACCESS = "x509ExcludesSharedAccessCredentials"
    SERVICE_NAME_REQUIRED = "serviceNameRequired"
    DEVICE_ID_REQUIRED = "deviceIdRequired"
    DEVICE_FIELDS_NOT_ALLOWED = "deviceFieldsNotAllowed"

    def __str__(self) -> str:
        return self.value


# Canonical serialization order per dialect; also the recognized keys
SERVICE_FIELDS: Tuple[Field, ...] = (
    Field.HOST_NAME,
    Field.SHARED_ACCESS_KEY_NAME,
    Field.SHARED_ACCESS_KEY,
    Field.SHARED_ACCESS_SIGNATURE,
)
DEVICE_FIELDS: Tuple[Field, ...] = (
    Field.HOST_NAME,
    Field.DEVICE_ID,
    Field.MODULE_ID,
    Field.SHARED_ACCESS_KEY_NAME,
    Field.SHARED_ACCESS_KEY,
    Field.SHARED_ACCESS_SIGNATURE,
    Field.GATEWAY_HOST_NAME,
    Field.X509,
)

_ATTRIBUTES = {
    Field.HOST_NAME: "host_name",
    Field.SHARED_ACCESS_KEY_NAME: "shared_access_key_name",
    Field.SHARED_ACCESS_KEY: "shared_access_key",
    Field.SHARED_ACCESS_SIGNATURE: "shared_access_signature",
    Field.DEVICE_ID: "device_id",
    Field.MODULE_ID: "module_id",
    Field.GATEWAY_HOST_NAME: "gateway_host_name",
    Field.X509: "using_x509",
}


def dialect_fields(dialect: Dialect) -> Tuple[Field, ...]:
    return SERVICE_FIELDS if dialect is Dialect.SERVICE else DEVICE_FIELDS


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def derive_service_name(host_name: Optional[str]) -> Optional[str]:
    """Return the part of the host name before the first dot.

    ``foo.azure-devices.net`` gives ``foo``; a host name without a dot
    is its own service name.
    """
    if host_name is None:
        return None
    service_name, _, _ = host_name.partition(HOST_NAME_SEPARATOR)
    return service_name


@dataclass(frozen=True)
class CredentialFields:
    """Every credential field a descriptor or a device argument set can carry.

    Absent values are None. ``certificate`` is a reference to an X.509
    certificate supplied by a caller; it never appears in a connection
    string, where only the ``x509=true`` flag does.
    """

    host_name: Optional[str] = None
    device_id: Optional[str] = None
    module_id: Optional[str] = None
    shared_access_key_name: Optional[str] = None
    shared_access_key: Optional[str] = None
    shared_access_signature: Optional[str] = None
    gateway_host_name: Optional[str] = None
    using_x509: bool = False
    certificate: Optional[str] = None

    @property
    def service_name(self) -> Optional[str]:
        return derive_service_name(self.host_name)

    def value_of(self, field: Field):
        return getattr(self, _ATTRIBUTES[field])

    def has_device_fields(self) -> bool:
        return any(
            [
                not is_blank(self.device_id),
                not is_blank(self.module_id),
                not is_blank(self.gateway_host_name),
                self.using_x509,
                not is_blank(self.certificate),
            ]
        )
