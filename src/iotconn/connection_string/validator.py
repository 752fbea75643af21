"""
Field shape checks and cross-field rules for connection strings.

Patterns are evaluated with the ``regex`` package so that every match
runs under a wall-clock timeout; a pathological value fails with
ValidationTimeoutError instead of stalling the caller.
"""

import base64
import binascii
from typing import Optional, Union

import regex

from iotconn.constants import REGEX_TIMEOUT_SECONDS
from iotconn.exceptions import (
    InconsistentCredentialError,
    InvalidFieldFormatError,
    ValidationTimeoutError,
)
from iotconn.logging import get_logger
from .fields import ConsistencyRule, CredentialFields, Dialect, Field, is_blank
from .signature import SharedAccessSignature, is_shared_access_signature

logger = get_logger("iotconn.connection_string.validator")

HOST_NAME_PATTERN = regex.compile(r"[a-zA-Z0-9_\-.]+")
SHARED_ACCESS_KEY_NAME_PATTERN = regex.compile(r"[a-zA-Z0-9_\-@.]+")
SHARED_ACCESS_KEY_PATTERN = regex.compile(r".+")
SHARED_ACCESS_SIGNATURE_PATTERN = regex.compile(r".+")
ID_NAME_PATTERN = regex.compile(r"[A-Za-z0-9\-:.+%_#*?!(),=@;$']{1,128}")

FieldName = Union[Field, str]


class FieldValidator:
    """Validates connection-string fields.

    Args:
        timeout: Seconds allowed for a single pattern evaluation
    """

    def __init__(self, timeout: float = REGEX_TIMEOUT_SECONDS):
        self.timeout = timeout

    def validate_shape(self, value: str, pattern, field: FieldName) -> None:
        """Fail with InvalidFieldFormatError unless value fully matches pattern."""
        if value is None:
            raise InvalidFieldFormatError(str(field))
        try:
            matched = pattern.fullmatch(value, timeout=self.timeout)
        except TimeoutError:
            logger.warning(f"Pattern evaluation timed out for property {field}")
            raise ValidationTimeoutError(str(field), self.timeout)
        if matched is None:
            raise InvalidFieldFormatError(str(field))

    def validate_shape_if_present(
        self, value: Optional[str], pattern, field: FieldName
    ) -> None:
        if value:
            self.validate_shape(value, pattern, field)

    def validate_base64(self, value: str, field: FieldName = Field.SHARED_ACCESS_KEY) -> None:
        try:
            base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError):
            raise InvalidFieldFormatError(str(field))

    def validate_signature_token(
        self, service_name: str, value: Optional[str]
    ) -> Optional[SharedAccessSignature]:
        """Parse value when it looks like a signature token, else do nothing."""
        if not is_shared_access_signature(value):
            return None
        return SharedAccessSignature.parse(service_name, value)

    def validate_consistency(self, fields: CredentialFields, dialect: Dialect) -> None:
        """Apply the cross-field rules for the dialect."""
        has_key = not is_blank(fields.shared_access_key)
        has_signature = not is_blank(fields.shared_access_signature)

        if dialect is Dialect.SERVICE:
            if fields.has_device_fields():
                raise InconsistentCredentialError(
                    ConsistencyRule.DEVICE_FIELDS_NOT_ALLOWED.value,
                    "Service connection strings do not carry device properties",
                )
            if is_blank(fields.shared_access_key_name):
                raise InconsistentCredentialError(
                    ConsistencyRule.SHARED_ACCESS_KEY_NAME_REQUIRED.value,
                    "Should specify SharedAccessKeyName",
                )
            if has_key == has_signature:
                raise InconsistentCredentialError(
                    ConsistencyRule.KEY_OR_SIGNATURE_REQUIRED.value,
                    "Should specify either SharedAccessKey or SharedAccessSignature",
                )
        else:
            if is_blank(fields.device_id):
                raise InconsistentCredentialError(
                    ConsistencyRule.DEVICE_ID_REQUIRED.value,
                    "DeviceId must be specified in connection string",
                )
            using_x509 = fields.using_x509 or not is_blank(fields.certificate)
            if using_x509 and (has_key or has_signature):
                raise InconsistentCredentialError(
                    ConsistencyRule.X509_EXCLUDES_SHARED_ACCESS.value,
                    "Should not specify either SharedAccessKey or "
                    "SharedAccessSignature if X.509 certificate is used",
                )
            if not using_x509 and has_key == has_signature:
                raise InconsistentCredentialError(
                    ConsistencyRule.KEY_OR_SIGNATURE_REQUIRED.value,
                    "Should specify either SharedAccessKey or SharedAccessSignature "
                    "if X.509 certificate is not used",
                )

        if is_blank(fields.service_name):
            raise InconsistentCredentialError(
                ConsistencyRule.SERVICE_NAME_REQUIRED.value, "Missing service name"
            )

    def validate(self, fields: CredentialFields, dialect: Dialect) -> None:
        """Run every check on a complete field set."""
        self.validate_consistency(fields, dialect)

        if not is_blank(fields.shared_access_key):
            self.validate_base64(fields.shared_access_key, Field.SHARED_ACCESS_KEY)

        self.validate_signature_token(fields.service_name, fields.shared_access_signature)

        self.validate_shape(fields.host_name, HOST_NAME_PATTERN, Field.HOST_NAME)
        if dialect is Dialect.DEVICE:
            self.validate_shape(fields.device_id, ID_NAME_PATTERN, Field.DEVICE_ID)
            self.validate_shape_if_present(fields.module_id, ID_NAME_PATTERN, Field.MODULE_ID)
            self.validate_shape_if_present(
                fields.gateway_host_name, HOST_NAME_PATTERN, Field.GATEWAY_HOST_NAME
            )
        self.validate_shape_if_present(
            fields.shared_access_key_name,
            SHARED_ACCESS_KEY_NAME_PATTERN,
            Field.SHARED_ACCESS_KEY_NAME,
        )
        self.validate_shape_if_present(
            fields.shared_access_key, SHARED_ACCESS_KEY_PATTERN, Field.SHARED_ACCESS_KEY
        )
        self.validate_shape_if_present(
            fields.shared_access_signature,
            SHARED_ACCESS_SIGNATURE_PATTERN,
            Field.SHARED_ACCESS_SIGNATURE,
        )


default_validator = FieldValidator()
