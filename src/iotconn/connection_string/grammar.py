"""
Key/value grammar for connection strings.

A connection string is a list of ``key=value`` pairs separated by ``;``.
Only the first ``=`` of a pair separates key from value, so values may
contain ``=`` (base64 padding, signature tokens).

Policies:
- blank segments, such as the one after a trailing ``;``, are skipped
- keys are trimmed and compared case-sensitively; values are kept verbatim
- when a key repeats, the last occurrence wins
"""

from typing import Dict

from iotconn.constants import VALUE_PAIR_DELIMITER, VALUE_PAIR_SEPARATOR
from iotconn.exceptions import EmptyDescriptorError, MalformedDescriptorError
from iotconn.logging import get_logger

logger = get_logger("iotconn.connection_string.grammar")


def parse_key_value_pairs(
    value: str,
    pair_delimiter: str = VALUE_PAIR_DELIMITER,
    value_separator: str = VALUE_PAIR_SEPARATOR,
) -> Dict[str, str]:
    """
    Split a delimited string into an ordered mapping of key to value.

    Args:
        value: The raw connection string
        pair_delimiter: Separator between pairs
        value_separator: Separator between a key and its value

    Returns:
        Dict of key to value, in order of first appearance

    Raises:
        EmptyDescriptorError: value is None, empty or whitespace only
        MalformedDescriptorError: a segment has no separator or an empty key
        TypeError: value is not a string
    """
    if value is None:
        raise EmptyDescriptorError()
    if not isinstance(value, str):
        raise TypeError("Connection string must be of type str")
    if not value.strip():
        raise EmptyDescriptorError()

    pairs: Dict[str, str] = {}
    for position, segment in enumerate(value.split(pair_delimiter), start=1):
        if not segment.strip():
            continue

        key, separator, item = segment.partition(value_separator)
        key = key.strip()
        if not separator:
            raise MalformedDescriptorError(
                position, f"expected '{value_separator}' between key and value"
            )
        if not key:
            raise MalformedDescriptorError(position, "empty key")

        if key in pairs:
            logger.warning(
                f"Property {key} appears more than once; using the last value"
            )
        pairs[key] = item

    return pairs
