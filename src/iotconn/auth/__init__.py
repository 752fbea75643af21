"""
Authentication methods and their resolution from credential fields.
"""

from .methods import (
    AUTHENTICATION_METHOD_TYPES,
    AuthenticationMethod,
    DeviceSymmetricKey,
    DeviceToken,
    ModuleSymmetricKey,
    ModuleToken,
    SharedAccessPolicyKey,
    SharedAccessPolicyToken,
    X509Identity,
)
from .resolver import (
    create_with_registry_symmetric_key,
    create_with_shared_access_policy_key,
    create_with_token,
    create_with_x509_certificate,
    resolve_authentication_method,
    resolve_device_arguments,
)

__all__ = [
    "AUTHENTICATION_METHOD_TYPES",
    "AuthenticationMethod",
    "DeviceSymmetricKey",
    "DeviceToken",
    "ModuleSymmetricKey",
    "ModuleToken",
    "SharedAccessPolicyKey",
    "SharedAccessPolicyToken",
    "X509Identity",
    "create_with_registry_symmetric_key",
    "create_with_shared_access_policy_key",
    "create_with_token",
    "create_with_x509_certificate",
    "resolve_authentication_method",
    "resolve_device_arguments",
]
