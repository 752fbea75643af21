"""
Connection-string grammar, validation and descriptors.

    from iotconn.connection_string import ConnectionDescriptor, Dialect

    descriptor = ConnectionDescriptor.parse(raw, Dialect.SERVICE)
"""

from .fields import ConsistencyRule, CredentialFields, Dialect, Field
from .grammar import parse_key_value_pairs
from .signature import SharedAccessSignature, is_shared_access_signature
from .validator import FieldValidator, default_validator
from .descriptor import ConnectionDescriptor, ConnectionDescriptorBuilder

__all__ = [
    "ConnectionDescriptor",
    "ConnectionDescriptorBuilder",
    "ConsistencyRule",
    "CredentialFields",
    "Dialect",
    "Field",
    "FieldValidator",
    "SharedAccessSignature",
    "default_validator",
    "is_shared_access_signature",
    "parse_key_value_pairs",
]
