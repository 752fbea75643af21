"""
Validated, immutable connection descriptors.

ConnectionDescriptor is the value handed to transports. It is only ever
produced by ConnectionDescriptorBuilder.build() (directly or through
ConnectionDescriptor.parse), which runs every field and cross-field check
first, so an invalid descriptor cannot be observed.
"""

from dataclasses import InitVar, dataclass, field, replace
from typing import Optional, TYPE_CHECKING

from iotconn.exceptions import (
    ConnectionStringError,
    EmptyHostNameError,
    InconsistentCredentialError,
    InvalidFieldFormatError,
    MissingRequiredFieldError,
    UnsupportedAuthenticationMethodError,
)
from iotconn.logging import get_logger, log_validation_event
from .fields import (
    ConsistencyRule,
    CredentialFields,
    Dialect,
    Field,
    derive_service_name,
    dialect_fields,
    is_blank,
)
from .grammar import parse_key_value_pairs
from .validator import (
    FieldValidator,
    HOST_NAME_PATTERN,
    ID_NAME_PATTERN,
    SHARED_ACCESS_KEY_NAME_PATTERN,
    SHARED_ACCESS_KEY_PATTERN,
    SHARED_ACCESS_SIGNATURE_PATTERN,
    default_validator,
)

if TYPE_CHECKING:
    from iotconn.auth.methods import AuthenticationMethod

logger = get_logger("iotconn.connection_string.descriptor")


def _optional(value: Optional[str]) -> Optional[str]:
    return None if is_blank(value) else value


def _parse_bool(value: str, field_name: Field) -> bool:
    lowered = value.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise InvalidFieldFormatError(str(field_name))


def _scope_to_dialect(fields: CredentialFields, dialect: Dialect) -> CredentialFields:
    """Drop what a method populated that the dialect has no place for.

    Service connection strings only carry the host name and the three
    shared access fields, so a device-scoped method contributes just those.
    """
    fields = replace(fields, certificate=None)
    if dialect is Dialect.SERVICE:
        fields = replace(
            fields,
            device_id=None,
            module_id=None,
            gateway_host_name=None,
            using_x509=False,
        )
    return fields


@dataclass(frozen=True)
class ConnectionDescriptor:
    """A validated connection string.

    Use parse() or ConnectionDescriptorBuilder to create one. Direct
    construction still validates the fields (with ``validator`` or the
    module default) and raises the same errors; the authentication method
    is taken as given.

    Equality compares the dialect and the field values. The attached
    authentication method is carried along but does not take part in it.
    """

    dialect: Dialect
    fields: CredentialFields
    authentication_method: Optional["AuthenticationMethod"] = field(
        default=None, compare=False
    )
    validator: InitVar[Optional[FieldValidator]] = None

    def __post_init__(self, validator: Optional[FieldValidator]) -> None:
        (validator or default_validator).validate(self.fields, self.dialect)

    @classmethod
    def parse(
        cls,
        raw: str,
        dialect: Dialect = Dialect.SERVICE,
        validator: Optional[FieldValidator] = None,
    ) -> "ConnectionDescriptor":
        """
        Parse and validate a connection string.

        Unrecognized properties are ignored. Missing optional properties
        read as None.

        Args:
            raw: Connection string, e.g. ``HostName=...;SharedAccessKeyName=...``
            dialect: Service or device connection string
            validator: FieldValidator to use; defaults to the module validator

        Raises:
            ConnectionStringError: Any grammar, shape or consistency failure
        """
        kind = f"{dialect.value} connection string"
        try:
            pairs = parse_key_value_pairs(raw)
            recognized = {f.value for f in dialect_fields(dialect)}
            for key in pairs:
                if key not in recognized:
                    logger.debug(f"Ignoring unrecognized property {key}")

            if Field.HOST_NAME.value not in pairs:
                raise MissingRequiredFieldError(Field.HOST_NAME.value)

            builder = ConnectionDescriptorBuilder(dialect, validator)
            builder.set_host_name(pairs[Field.HOST_NAME.value])
            builder.set_shared_access_key_name(pairs.get(Field.SHARED_ACCESS_KEY_NAME.value))
            builder.set_shared_access_key(pairs.get(Field.SHARED_ACCESS_KEY.value))
            builder.set_shared_access_signature(pairs.get(Field.SHARED_ACCESS_SIGNATURE.value))

            if dialect is Dialect.DEVICE:
                builder.set_device_id(pairs.get(Field.DEVICE_ID.value))
                builder.set_module_id(pairs.get(Field.MODULE_ID.value))
                builder.set_gateway_host_name(pairs.get(Field.GATEWAY_HOST_NAME.value))
                x509 = pairs.get(Field.X509.value)
                if x509 is not None:
                    builder.set_using_x509(_parse_bool(x509, Field.X509))

            descriptor = builder.build()
        except ConnectionStringError as e:
            log_validation_event(kind, False, {"error": type(e).__name__})
            raise

        log_validation_event(kind, True)
        return descriptor

    @property
    def host_name(self) -> str:
        return self.fields.host_name

    @property
    def service_name(self) -> str:
        return self.fields.service_name

    @property
    def shared_access_key_name(self) -> Optional[str]:
        return self.fields.shared_access_key_name

    @property
    def shared_access_key(self) -> Optional[str]:
        return self.fields.shared_access_key

    @property
    def shared_access_signature(self) -> Optional[str]:
        return self.fields.shared_access_signature

    @property
    def device_id(self) -> Optional[str]:
        return self.fields.device_id

    @property
    def module_id(self) -> Optional[str]:
        return self.fields.module_id

    @property
    def gateway_host_name(self) -> Optional[str]:
        return self.fields.gateway_host_name

    @property
    def using_x509(self) -> bool:
        return self.fields.using_x509

    def serialize(self, validator: Optional[FieldValidator] = None) -> str:
        """Return the canonical connection string after re-validating."""
        (validator or default_validator).validate(self.fields, self.dialect)

        parts = []
        for name in dialect_fields(self.dialect):
            value = self.fields.value_of(name)
            if name is Field.X509:
                value = "true" if value else None
            if value:
                parts.append(f"{name.value}={value}")
        return ";".join(parts)

    def __str__(self) -> str:
        return self.serialize()

    def to_builder(self, validator: Optional[FieldValidator] = None) -> "ConnectionDescriptorBuilder":
        return ConnectionDescriptorBuilder(
            self.dialect,
            validator,
            fields=self.fields,
            authentication_method=self.authentication_method,
        )

    def with_host_name(self, host_name: str) -> "ConnectionDescriptor":
        return self.to_builder().set_host_name(host_name).build()

    def with_authentication_method(self, method: "AuthenticationMethod") -> "ConnectionDescriptor":
        return self.to_builder().set_authentication_method(method).build()


class ConnectionDescriptorBuilder:
    """Mutable staging area for a ConnectionDescriptor.

    Each setter checks what it can on its own before touching state, so a
    failed call leaves the builder as it was. Cross-field rules need the
    whole field set and run in set_authentication_method() and build().
    """

    def __init__(
        self,
        dialect: Dialect = Dialect.SERVICE,
        validator: Optional[FieldValidator] = None,
        fields: Optional[CredentialFields] = None,
        authentication_method: Optional["AuthenticationMethod"] = None,
    ):
        self.dialect = dialect
        self.validator = validator or default_validator
        self._fields = replace(fields or CredentialFields(), certificate=None)
        self._authentication_method = authentication_method

    @property
    def fields(self) -> CredentialFields:
        return self._fields

    @property
    def authentication_method(self) -> Optional["AuthenticationMethod"]:
        return self._authentication_method

    def _commit(self, keep_method: bool = False, **changes) -> "ConnectionDescriptorBuilder":
        self._fields = replace(self._fields, **changes)
        if not keep_method:
            # An explicit method no longer describes the changed credentials
            self._authentication_method = None
        return self

    def _require_device_dialect(self, name: Field) -> None:
        if self.dialect is not Dialect.DEVICE:
            raise InconsistentCredentialError(
                ConsistencyRule.DEVICE_FIELDS_NOT_ALLOWED.value,
                f"{name.value} is not a property of service connection strings",
            )

    def set_host_name(self, value: str) -> "ConnectionDescriptorBuilder":
        if is_blank(value):
            raise EmptyHostNameError()
        self.validator.validate_shape(value, HOST_NAME_PATTERN, Field.HOST_NAME)
        if is_blank(derive_service_name(value)):
            raise InconsistentCredentialError(
                ConsistencyRule.SERVICE_NAME_REQUIRED.value, "Missing service name"
            )
        return self._commit(keep_method=True, host_name=value)

    def set_shared_access_key_name(self, value: Optional[str]) -> "ConnectionDescriptorBuilder":
        value = _optional(value)
        self.validator.validate_shape_if_present(
            value, SHARED_ACCESS_KEY_NAME_PATTERN, Field.SHARED_ACCESS_KEY_NAME
        )
        return self._commit(shared_access_key_name=value)

    def set_shared_access_key(self, value: Optional[str]) -> "ConnectionDescriptorBuilder":
        value = _optional(value)
        self.validator.validate_shape_if_present(
            value, SHARED_ACCESS_KEY_PATTERN, Field.SHARED_ACCESS_KEY
        )
        return self._commit(shared_access_key=value)

    def set_shared_access_signature(self, value: Optional[str]) -> "ConnectionDescriptorBuilder":
        value = _optional(value)
        self.validator.validate_shape_if_present(
            value, SHARED_ACCESS_SIGNATURE_PATTERN, Field.SHARED_ACCESS_SIGNATURE
        )
        return self._commit(shared_access_signature=value)

    def set_device_id(self, value: Optional[str]) -> "ConnectionDescriptorBuilder":
        self._require_device_dialect(Field.DEVICE_ID)
        value = _optional(value)
        self.validator.validate_shape_if_present(value, ID_NAME_PATTERN, Field.DEVICE_ID)
        return self._commit(device_id=value)

    def set_module_id(self, value: Optional[str]) -> "ConnectionDescriptorBuilder":
        self._require_device_dialect(Field.MODULE_ID)
        value = _optional(value)
        self.validator.validate_shape_if_present(value, ID_NAME_PATTERN, Field.MODULE_ID)
        return self._commit(module_id=value)

    def set_gateway_host_name(self, value: Optional[str]) -> "ConnectionDescriptorBuilder":
        self._require_device_dialect(Field.GATEWAY_HOST_NAME)
        value = _optional(value)
        self.validator.validate_shape_if_present(
            value, HOST_NAME_PATTERN, Field.GATEWAY_HOST_NAME
        )
        return self._commit(keep_method=True, gateway_host_name=value)

    def set_using_x509(self, value: bool) -> "ConnectionDescriptorBuilder":
        self._require_device_dialect(Field.X509)
        return self._commit(using_x509=bool(value))

    def set_authentication_method(self, method: "AuthenticationMethod") -> "ConnectionDescriptorBuilder":
        """
        Let the method populate the credential fields, then validate them.

        In the service dialect only the shared access fields are kept, so a
        device-scoped policy method can back a service connection string.

        Raises:
            UnsupportedAuthenticationMethodError: method is None
            ConnectionStringError: The populated fields break a rule; the
                builder is left unchanged
        """
        if method is None:
            raise UnsupportedAuthenticationMethodError(
                "An authentication method is required"
            )

        candidate = _scope_to_dialect(method.populate(self._fields), self.dialect)
        self.validator.validate(candidate, self.dialect)

        self._fields = candidate
        self._authentication_method = method
        return self

    def build(self) -> ConnectionDescriptor:
        """Validate the staged fields and return an immutable descriptor."""
        from iotconn.auth.resolver import resolve_authentication_method

        self.validator.validate(self._fields, self.dialect)
        method = self._authentication_method or resolve_authentication_method(self._fields)
        return ConnectionDescriptor(
            self.dialect, self._fields, method, validator=self.validator
        )
