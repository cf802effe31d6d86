"""
Keyed one-way hashing of sensitive fields.

Each data type is bound to one of four layered compositions of SHA-256,
SHA-512 and HMAC-SHA256. Intermediate values are lowercase hex strings and
concatenation always happens on those strings, not on raw digests. The key
is rendered as hex before it is used as the HMAC key. Both details must
match the frontend that produces the same hashes.
"""

import hashlib
import hmac
from enum import Enum
from types import MappingProxyType
from typing import Callable

from .encoding import encode_text
from .errors import MissingKey, UnknownDataType
from .key_store import KeyStore


def sha256_hex(text: str) -> str:
    """SHA-256 of a UTF-8 string as lowercase hex."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def sha512_hex(text: str) -> str:
    """SHA-512 of a UTF-8 string as lowercase hex."""
    return hashlib.sha512(text.encode("utf-8")).hexdigest()


def hmac_sha256_hex(text: str, key: str) -> str:
    """HMAC-SHA256 of a UTF-8 string under a UTF-8 string key, as lowercase hex."""
    return hmac.new(key.encode("utf-8"), text.encode("utf-8"), hashlib.sha256).hexdigest()


def layered_sha256(text: str, key: bytes) -> str:
    """SHA256(SHA512(HMAC(text)) + HMAC(text))"""
    hmac_val = hmac_sha256_hex(text, key.hex())
    return sha256_hex(sha512_hex(hmac_val) + hmac_val)


def layered_sha512(text: str, key: bytes) -> str:
    """SHA512(SHA256(HMAC(text)) + HMAC(text))"""
    hmac_val = hmac_sha256_hex(text, key.hex())
    return sha512_hex(sha256_hex(hmac_val) + hmac_val)


def hmac_of_digests(text: str, key: bytes) -> str:
    """HMAC(SHA512(text) + SHA256(text))"""
    return hmac_sha256_hex(sha512_hex(text) + sha256_hex(text), key.hex())


def hmac_of_nested_digests(text: str, key: bytes) -> str:
    """HMAC(SHA512(SHA256(text) + SHA512(text) + SHA256(text)))"""
    inner = sha512_hex(sha256_hex(text) + sha512_hex(text) + sha256_hex(text))
    return hmac_sha256_hex(inner, key.hex())


class HashComposition(Enum):
    """The four hash compositions. Values name the final stage."""

    LAYERED_SHA256 = "layered-sha256"
    LAYERED_SHA512 = "layered-sha512"
    HMAC_OF_DIGESTS = "hmac-of-digests"
    HMAC_OF_NESTED_DIGESTS = "hmac-of-nested-digests"

    def apply(self, text: str, key: bytes) -> str:
        """Run this composition over text with a raw 32-byte key."""
        return _COMPOSITION_FUNCS[self](text, key)


_COMPOSITION_FUNCS: dict[HashComposition, Callable[[str, bytes], str]] = {
    HashComposition.LAYERED_SHA256: layered_sha256,
    HashComposition.LAYERED_SHA512: layered_sha512,
    HashComposition.HMAC_OF_DIGESTS: hmac_of_digests,
    HashComposition.HMAC_OF_NESTED_DIGESTS: hmac_of_nested_digests,
}


# Fixed at import time; not configurable at runtime.
HASH_CONFIG: MappingProxyType = MappingProxyType({
    "USER_NAME": HashComposition.LAYERED_SHA256,
    "USER_TG": HashComposition.LAYERED_SHA512,
    "USER_PHONE": HashComposition.HMAC_OF_DIGESTS,
    "USER_EMAIL": HashComposition.LAYERED_SHA512,
    "INCIDENT_NAME": HashComposition.LAYERED_SHA256,
    "VERIFY_TOKEN_STRING": HashComposition.HMAC_OF_DIGESTS,
    "INCIDENT_PHONE": HashComposition.LAYERED_SHA512,
    "INCIDENT_TG": HashComposition.HMAC_OF_DIGESTS,
    "API_KEY": HashComposition.HMAC_OF_NESTED_DIGESTS,
    "IDENTITY_KEY": HashComposition.LAYERED_SHA512,
    "PASS_RESET_TOKEN": HashComposition.LAYERED_SHA512,
    "BACKUP_EMAIL": HashComposition.LAYERED_SHA512,
})


class HashEngine:
    """Deterministic keyed hashing selected by data type."""

    def __init__(self, key_store: KeyStore):
        self._key_store = key_store

    @staticmethod
    def composition_for(data_type: str) -> HashComposition:
        """
        Look up the composition bound to a data type.

        Raises:
            UnknownDataType: If the data type is not in the hash table
        """
        composition = HASH_CONFIG.get(data_type)
        if composition is None:
            raise UnknownDataType(data_type)
        return composition

    def hash(self, text: str, data_type: str) -> str:
        """
        Hash text with the composition and key bound to data_type.

        Same text, data type and key always give the same output.

        Args:
            text: Value to hash (e.g. an email address)
            data_type: Label selecting both composition and key

        Returns:
            Lowercase hex digest (64 or 128 characters)

        Raises:
            UnknownDataType: If data_type is not in the hash table
            MissingKey: If data_type is hashable but has no key
            MalformedInput: If text cannot be encoded as UTF-8
        """
        composition = self.composition_for(data_type)
        key = self._key_store.get(data_type)
        if key is None:
            raise MissingKey(data_type)
        encode_text(text, "text")
        return composition.apply(text, key)

    @property
    def data_types(self) -> frozenset[str]:
        """Hashable data types that also have a registered key."""
        return frozenset(label for label in HASH_CONFIG if label in self._key_store)
