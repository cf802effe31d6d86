"""
Conversions between wire strings and bytes.
"""

import binascii

from .errors import MalformedInput


def decode_hex(value: str, field_name: str) -> bytes:
    """
    Decode a hex string field.

    Raises:
        MalformedInput: If value is not a string of hex digit pairs
    """
    if not isinstance(value, str):
        raise MalformedInput(f"{field_name} must be a hex string")
    try:
        return binascii.unhexlify(value)
    except (binascii.Error, ValueError):
        raise MalformedInput(f"{field_name} is not valid hex") from None


def encode_text(value: str, field_name: str) -> bytes:
    """
    Encode a text field as UTF-8.

    Raises:
        MalformedInput: If value holds characters UTF-8 cannot encode
            (e.g. lone surrogates)
    """
    try:
        return value.encode("utf-8")
    except UnicodeEncodeError:
        raise MalformedInput(f"{field_name} is not valid UTF-8 text") from None
