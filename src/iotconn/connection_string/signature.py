"""
Shared access signature tokens.

A token has the form::

    SharedAccessSignature sr=<audience>&sig=<signature>&se=<expiry>[&skn=<key name>]

Field values are URL-encoded. ``se`` is the expiry in seconds since the
Unix epoch. This module only parses tokens; it never computes signatures.
"""

import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Optional
from urllib.parse import unquote_plus

from iotconn.constants import (
    SHARED_ACCESS_SIGNATURE_PREFIX,
    SAS_AUDIENCE_FIELD,
    SAS_SIGNATURE_FIELD,
    SAS_EXPIRY_FIELD,
    SAS_KEY_NAME_FIELD,
)
from iotconn.exceptions import InvalidSignatureError

REQUIRED_FIELDS = (SAS_AUDIENCE_FIELD, SAS_SIGNATURE_FIELD, SAS_EXPIRY_FIELD)


def is_shared_access_signature(value: Optional[str]) -> bool:
    """Whether value looks like a signature token (it starts with the prefix word)."""
    if value is None or not value.strip():
        return False
    return value.split(None, 1)[0] == SHARED_ACCESS_SIGNATURE_PREFIX


def _extract_fields(raw: str) -> Dict[str, str]:
    parts = raw.split()
    if len(parts) != 2 or parts[0] != SHARED_ACCESS_SIGNATURE_PREFIX:
        raise InvalidSignatureError(
            f"expected '{SHARED_ACCESS_SIGNATURE_PREFIX} <fields>'"
        )

    fields: Dict[str, str] = {}
    for item in parts[1].split("&"):
        if not item:
            continue
        name, separator, value = item.partition("=")
        if not separator or not name:
            raise InvalidSignatureError(f"malformed field '{name or item}'")
        if name in fields:
            raise InvalidSignatureError(f"duplicate field '{name}'")
        fields[name] = unquote_plus(value)
    return fields


@dataclass(frozen=True)
class SharedAccessSignature:
    """A parsed shared access signature token."""

    service_name: str
    audience: str
    signature: str
    expiry: int
    key_name: Optional[str] = None

    @property
    def expires_on(self) -> datetime:
        return datetime.fromtimestamp(self.expiry, tz=timezone.utc)

    def is_expired(self, now: Optional[float] = None) -> bool:
        if now is None:
            now = time.time()
        return now > self.expiry

    @classmethod
    def parse(
        cls, service_name: str, raw: str, now: Optional[float] = None
    ) -> "SharedAccessSignature":
        """
        Parse a raw token issued for the given service.

        Args:
            service_name: Service the token belongs to (the host name prefix)
            raw: The token text
            now: Current time in epoch seconds; defaults to time.time()

        Raises:
            InvalidSignatureError: The token is malformed, incomplete or expired
        """
        if service_name is None or not service_name.strip():
            raise InvalidSignatureError("a service name is required")
        if raw is None or not raw.strip():
            raise InvalidSignatureError("the token is empty")

        fields = _extract_fields(raw)
        for name in REQUIRED_FIELDS:
            if not fields.get(name):
                raise InvalidSignatureError(f"missing field '{name}'")

        try:
            expiry = int(fields[SAS_EXPIRY_FIELD])
        except ValueError:
            raise InvalidSignatureError(
                f"field '{SAS_EXPIRY_FIELD}' must be whole seconds since the epoch"
            )

        token = cls(
            service_name=service_name,
            audience=fields[SAS_AUDIENCE_FIELD],
            signature=fields[SAS_SIGNATURE_FIELD],
            expiry=expiry,
            key_name=fields.get(SAS_KEY_NAME_FIELD) or None,
        )
        if token.is_expired(now):
            raise InvalidSignatureError("the token is expired")
        return token
