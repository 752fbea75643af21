"""
Authentication method resolution.

resolve_authentication_method() looks at which credential fields are set
and returns exactly one variant. Cases are tried in a fixed order and the
first match wins:

1. shared access key name  -> SharedAccessPolicyKey
   (SharedAccessPolicyToken when the policy comes with a signature and no key)
2. shared access key       -> ModuleSymmetricKey / DeviceSymmetricKey
3. shared access signature -> ModuleToken / DeviceToken
4. X.509 certificate       -> X509Identity
5. nothing                 -> UnsupportedAuthenticationMethodError

The create_* helpers build a method from discrete arguments without a
connection string. They only check that identifiers are non-empty; key and
token shapes are checked once the method is attached to a descriptor.
"""

from typing import Optional

from iotconn.connection_string.fields import CredentialFields, Field, is_blank
from iotconn.exceptions import (
    MissingRequiredFieldError,
    UnsupportedAuthenticationMethodError,
)
from iotconn.logging import get_logger, log_resolution_event
from .methods import (
    AuthenticationMethod,
    DeviceSymmetricKey,
    DeviceToken,
    ModuleSymmetricKey,
    ModuleToken,
    SharedAccessPolicyKey,
    SharedAccessPolicyToken,
    X509Identity,
)

logger = get_logger("iotconn.auth.resolver")


def _present(value: Optional[str]) -> bool:
    return not is_blank(value)


def _select(fields: CredentialFields) -> AuthenticationMethod:
    if _present(fields.shared_access_key_name):
        if not _present(fields.shared_access_key) and _present(fields.shared_access_signature):
            return SharedAccessPolicyToken(
                fields.device_id,
                fields.shared_access_key_name,
                fields.shared_access_signature,
            )
        return SharedAccessPolicyKey(
            fields.device_id, fields.shared_access_key_name, fields.shared_access_key
        )

    if _present(fields.shared_access_key):
        if _present(fields.module_id):
            return ModuleSymmetricKey(
                fields.device_id, fields.module_id, fields.shared_access_key
            )
        return DeviceSymmetricKey(fields.device_id, fields.shared_access_key)

    if _present(fields.shared_access_signature):
        if _present(fields.module_id):
            return ModuleToken(
                fields.device_id, fields.module_id, fields.shared_access_signature
            )
        return DeviceToken(fields.device_id, fields.shared_access_signature)

    if _present(fields.certificate) or fields.using_x509:
        return X509Identity(fields.device_id, fields.certificate)

    raise UnsupportedAuthenticationMethodError(
        "Unsupported authentication method: none of "
        f"{Field.SHARED_ACCESS_KEY_NAME}, {Field.SHARED_ACCESS_KEY}, "
        f"{Field.SHARED_ACCESS_SIGNATURE} or an X.509 certificate is set"
    )


def resolve_authentication_method(fields: CredentialFields) -> AuthenticationMethod:
    """
    Pick the authentication method described by a field set.

    Args:
        fields: Credential fields from a descriptor or from device arguments

    Returns:
        The single matching AuthenticationMethod variant

    Raises:
        UnsupportedAuthenticationMethodError: No credential field is set
    """
    method = _select(fields)
    details = {"device_id": fields.device_id} if fields.device_id else None
    log_resolution_event(type(method).__name__, details)
    return method


def _require(value: Optional[str], field: Field) -> None:
    if is_blank(value):
        raise MissingRequiredFieldError(
            field.value, f"{field.value} must be a non-empty string"
        )


def create_with_shared_access_policy_key(
    device_id: str, policy_name: str, key: str
) -> SharedAccessPolicyKey:
    _require(device_id, Field.DEVICE_ID)
    return SharedAccessPolicyKey(device_id, policy_name, key)


def create_with_registry_symmetric_key(
    device_id: str, key: str, module_id: Optional[str] = None
) -> AuthenticationMethod:
    """Device key, or module key when module_id is given."""
    _require(device_id, Field.DEVICE_ID)
    if module_id is not None:
        _require(module_id, Field.MODULE_ID)
        return ModuleSymmetricKey(device_id, module_id, key)
    return DeviceSymmetricKey(device_id, key)


def create_with_token(
    device_id: str, token: str, module_id: Optional[str] = None
) -> AuthenticationMethod:
    """Device token, or module token when module_id is given."""
    _require(device_id, Field.DEVICE_ID)
    if module_id is not None:
        _require(module_id, Field.MODULE_ID)
        return ModuleToken(device_id, module_id, token)
    return DeviceToken(device_id, token)


def create_with_x509_certificate(device_id: str, certificate_ref: str) -> X509Identity:
    _require(device_id, Field.DEVICE_ID)
    return X509Identity(device_id, certificate_ref)


def resolve_device_arguments(
    device_id: str,
    module_id: Optional[str] = None,
    policy_name: Optional[str] = None,
    key: Optional[str] = None,
    token: Optional[str] = None,
    certificate: Optional[str] = None,
) -> AuthenticationMethod:
    """
    Resolve a method from discrete device arguments.

    Uses the same priority order as connection strings, so a caller that
    passes both a policy name and a key gets SharedAccessPolicyKey.
    """
    _require(device_id, Field.DEVICE_ID)
    if module_id is not None:
        _require(module_id, Field.MODULE_ID)

    fields = CredentialFields(
        device_id=device_id,
        module_id=module_id,
        shared_access_key_name=policy_name,
        shared_access_key=key,
        shared_access_signature=token,
        certificate=certificate,
    )
    return resolve_authentication_method(fields)
