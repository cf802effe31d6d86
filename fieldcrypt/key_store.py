"""
Key store for per-data-type AES-256 keys.

The store is built once from a mapping of data type label to raw key bytes,
validated eagerly, and never mutated afterwards.
"""

import binascii
import logging
from types import MappingProxyType
from typing import Mapping

from .errors import InvalidKeySize, MalformedInput

logger = logging.getLogger(__name__)

KEY_SIZE = 32  # AES-256


class KeyStore:
    """Immutable mapping from data type label to a 32-byte secret key."""

    def __init__(self, keys: Mapping[str, bytes]):
        """
        Validate and store the key map.

        Args:
            keys: Mapping of data type label to raw key bytes

        Raises:
            InvalidKeySize: If any key is not exactly 32 bytes. No store
                is produced in that case.
        """
        validated: dict[str, bytes] = {}
        for data_type, key in keys.items():
            if not isinstance(key, (bytes, bytearray, memoryview)):
                raise InvalidKeySize(data_type, None)
            key = bytes(key)
            if len(key) != KEY_SIZE:
                raise InvalidKeySize(data_type, len(key))
            validated[data_type] = key

        self._keys = MappingProxyType(validated)
        logger.info(f"Key store initialised with {len(self._keys)} key(s)")

    @classmethod
    def from_hex(cls, hex_keys: Mapping[str, str]) -> "KeyStore":
        """
        Build a store from hex-encoded keys.

        Args:
            hex_keys: Mapping of data type label to a 64-character hex key

        Raises:
            MalformedInput: If a key is not valid hex
            InvalidKeySize: If a decoded key is not 32 bytes
        """
        keys = {}
        for data_type, hex_key in hex_keys.items():
            try:
                keys[data_type] = binascii.unhexlify(hex_key.strip())
            except (binascii.Error, ValueError):
                raise MalformedInput(f"Key for data type {data_type} is not valid hex") from None
        return cls(keys)

    def get(self, data_type: str) -> bytes | None:
        """Return the key for a data type, or None if it is not registered."""
        return self._keys.get(data_type)

    def __contains__(self, data_type: object) -> bool:
        return data_type in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    @property
    def data_types(self) -> frozenset[str]:
        """All registered data type labels."""
        return frozenset(self._keys)

    def __repr__(self) -> str:
        # Never include key material
        return f"KeyStore(data_types={sorted(self._keys)!r})"
