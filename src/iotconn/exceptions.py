"""
Error taxonomy for connection-string handling.

Every error derives from ConnectionStringError, itself a ValueError, so
callers that only care about "bad credential input" can catch one type.
Messages always name the offending field or rule and never echo values.
"""

from typing import Optional


class ConnectionStringError(ValueError):
    """Base class for connection-string and credential errors."""


class EmptyDescriptorError(ConnectionStringError):
    """The connection string was empty or whitespace only."""

    def __init__(self) -> None:
        super().__init__("The connection string is empty")


class MalformedDescriptorError(ConnectionStringError):
    """A segment of the connection string is not a key=value pair."""

    def __init__(self, position: int, reason: str) -> None:
        self.position = position
        self.reason = reason
        super().__init__(
            f"Malformed connection string at segment {position}: {reason}"
        )


class InvalidFieldFormatError(ConnectionStringError):
    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(
            f"The connection string has an invalid value for property: {field}"
        )


class InvalidSignatureError(ConnectionStringError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Invalid shared access signature: {reason}")


class ValidationTimeoutError(ConnectionStringError):
    """Pattern evaluation for a field exceeded the configured time budget."""

    def __init__(self, field: str, timeout: float) -> None:
        self.field = field
        self.timeout = timeout
        super().__init__(
            f"Validation of property {field} timed out after {timeout:.3f}s"
        )


class InconsistentCredentialError(ConnectionStringError):
    """A cross-field rule was violated."""

    def __init__(self, rule: str, message: Optional[str] = None) -> None:
        self.rule = rule
        super().__init__(message or f"Inconsistent credential: {rule}")


class UnsupportedAuthenticationMethodError(ConnectionStringError):
    def __init__(self, message: str = "Unsupported authentication method") -> None:
        super().__init__(message)


class MissingRequiredFieldError(ConnectionStringError):
    def __init__(self, field: str, message: Optional[str] = None) -> None:
        self.field = field
        super().__init__(
            message or f"The connection string is missing the property: {field}"
        )


class EmptyHostNameError(MissingRequiredFieldError):
    def __init__(self) -> None:
        super().__init__("HostName", "HostName must not be empty")


class UnrecognizedSecurityTypeError(ConnectionStringError):
    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(
            f"Unrecognized value for device provisioning received: {value}. "
            'It should be either "dps" or "connectionString" (case-insensitive).'
        )
