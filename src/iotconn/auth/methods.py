"""
Authentication method variants.

The set is closed: every method a descriptor or a device argument set can
resolve to is one of the frozen dataclasses below. Each variant knows how
to write itself into a CredentialFields value (``populate``), writing the
fields it owns and clearing the others. That mapping and the resolver are
the single source of truth for "which fields mean which method".
"""

from dataclasses import dataclass, replace
from typing import Optional, Union

from iotconn.connection_string.fields import CredentialFields


def _clear_credentials(fields: CredentialFields) -> CredentialFields:
    return replace(
        fields,
        module_id=None,
        shared_access_key_name=None,
        shared_access_key=None,
        shared_access_signature=None,
        using_x509=False,
        certificate=None,
    )


@dataclass(frozen=True)
class SharedAccessPolicyKey:
    """A named shared access policy and its key, scoped to the whole hub."""

    device_id: Optional[str]
    policy_name: str
    key: Optional[str]

    def populate(self, fields: CredentialFields) -> CredentialFields:
        return replace(
            _clear_credentials(fields),
            device_id=self.device_id,
            shared_access_key_name=self.policy_name,
            shared_access_key=self.key,
        )


@dataclass(frozen=True)
class SharedAccessPolicyToken:
    """A named shared access policy presented through a pre-issued token."""

    device_id: Optional[str]
    policy_name: str
    signature: str

    def populate(self, fields: CredentialFields) -> CredentialFields:
        return replace(
            _clear_credentials(fields),
            device_id=self.device_id,
            shared_access_key_name=self.policy_name,
            shared_access_signature=self.signature,
        )


@dataclass(frozen=True)
class DeviceSymmetricKey:
    """A device's key from the device registry."""

    device_id: str
    key: str

    def populate(self, fields: CredentialFields) -> CredentialFields:
        return replace(
            _clear_credentials(fields),
            device_id=self.device_id,
            shared_access_key=self.key,
        )


@dataclass(frozen=True)
class ModuleSymmetricKey:
    device_id: str
    module_id: str
    key: str

    def populate(self, fields: CredentialFields) -> CredentialFields:
        return replace(
            _clear_credentials(fields),
            device_id=self.device_id,
            module_id=self.module_id,
            shared_access_key=self.key,
        )


@dataclass(frozen=True)
class DeviceToken:
    device_id: str
    signature: str

    def populate(self, fields: CredentialFields) -> CredentialFields:
        return replace(
            _clear_credentials(fields),
            device_id=self.device_id,
            shared_access_signature=self.signature,
        )


@dataclass(frozen=True)
class ModuleToken:
    device_id: str
    module_id: str
    signature: str

    def populate(self, fields: CredentialFields) -> CredentialFields:
        return replace(
            _clear_credentials(fields),
            device_id=self.device_id,
            module_id=self.module_id,
            shared_access_signature=self.signature,
        )


@dataclass(frozen=True)
class X509Identity:
    """A device authenticating with an X.509 certificate.

    ``certificate_ref`` points at the certificate (a path or store
    reference); connection strings only carry ``x509=true``, so a method
    resolved from one has no reference.
    """

    device_id: str
    certificate_ref: Optional[str] = None

    def populate(self, fields: CredentialFields) -> CredentialFields:
        return replace(
            _clear_credentials(fields),
            device_id=self.device_id,
            using_x509=True,
            certificate=self.certificate_ref,
        )


AuthenticationMethod = Union[
    SharedAccessPolicyKey,
    SharedAccessPolicyToken,
    DeviceSymmetricKey,
    ModuleSymmetricKey,
    DeviceToken,
    ModuleToken,
    X509Identity,
]

AUTHENTICATION_METHOD_TYPES = (
    SharedAccessPolicyKey,
    SharedAccessPolicyToken,
    DeviceSymmetricKey,
    ModuleSymmetricKey,
    DeviceToken,
    ModuleToken,
    X509Identity,
)
